"""
Tests for Solana address validation and detection.

Tests cover:
- Valid addresses (real tokens, length boundaries)
- Invalid format (too short, too long)
- Invalid characters (Ethereum, special chars)
- Edge cases (empty, whitespace)
- Address extraction from free text
"""

import pytest

from memeiq.utils.validators import (
    extract_address,
    is_valid_solana_address,
    validate_solana_address,
)


class TestValidateSolanaAddress:
    """Tests for validate_solana_address function."""

    def test_valid_usdc_address(self, valid_solana_address: str) -> None:
        """USDC token address should be valid."""
        is_valid, error = validate_solana_address(valid_solana_address)
        assert is_valid is True
        assert error is None

    def test_valid_wrapped_sol_address(self, another_valid_address: str) -> None:
        """Wrapped SOL address should be valid."""
        is_valid, error = validate_solana_address(another_valid_address)
        assert is_valid is True
        assert error is None

    def test_empty_address(self) -> None:
        is_valid, error = validate_solana_address("")
        assert is_valid is False
        assert "empty" in error.lower()

    def test_none_address(self) -> None:
        is_valid, _ = validate_solana_address(None)
        assert is_valid is False

    def test_address_with_spaces(self, valid_solana_address: str) -> None:
        """Address with leading/trailing spaces should be invalid."""
        is_valid, error = validate_solana_address(f" {valid_solana_address} ")
        assert is_valid is False
        assert "whitespace" in error.lower()

    def test_rejects_length_10(self) -> None:
        is_valid, error = validate_solana_address("a" * 10)
        assert is_valid is False
        assert "length" in error.lower()

    def test_rejects_length_50(self) -> None:
        is_valid, error = validate_solana_address("a" * 50)
        assert is_valid is False
        assert "length" in error.lower()

    @pytest.mark.parametrize("length", [32, 44])
    def test_accepts_length_boundaries(self, length: int) -> None:
        """32 and 44 characters are both accepted."""
        is_valid, error = validate_solana_address("A" * length)
        assert is_valid is True, error

    @pytest.mark.parametrize("length", [31, 45])
    def test_rejects_just_outside_boundaries(self, length: int) -> None:
        assert is_valid_solana_address("A" * length) is False

    def test_ethereum_address(self) -> None:
        """Ethereum address should be invalid (wrong format)."""
        is_valid, _ = validate_solana_address("0x742d35Cc6634C0532925a3b844Bc9e7595f5bEb2")
        assert is_valid is False

    def test_invalid_base58_characters(self) -> None:
        """Address with invalid base58 chars (0, O, I, l) should be invalid."""
        invalid_address = "0OIl" + "1" * 40
        is_valid, error = validate_solana_address(invalid_address)
        assert is_valid is False
        assert "base58" in error.lower()

    @pytest.mark.parametrize(
        "address",
        [
            "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",  # USDC
            "So11111111111111111111111111111111111111112",  # Wrapped SOL
            "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",  # Jupiter
            "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",  # Bonk
        ],
    )
    def test_real_token_addresses(self, address: str) -> None:
        """Real Solana token addresses should be valid."""
        is_valid, error = validate_solana_address(address)
        assert is_valid is True, f"Address {address} should be valid: {error}"


class TestExtractAddress:
    """Tests for free text address detection."""

    def test_finds_address_between_words(self, bonk_address: str) -> None:
        text = f"hey what do you think about {bonk_address} is it safe?"
        assert extract_address(text) == bonk_address

    def test_returns_first_match(self, bonk_address: str, valid_solana_address: str) -> None:
        text = f"{valid_solana_address} or {bonk_address}"
        assert extract_address(text) == valid_solana_address

    def test_ignores_casual_text(self) -> None:
        assert extract_address("gm fren, wen moon? lfg") is None

    def test_ignores_too_long_runs(self) -> None:
        assert extract_address("A" * 60) is None

    def test_ignores_ethereum_address(self) -> None:
        assert extract_address("0x742d35Cc6634C0532925a3b844Bc9e7595f5bEb2") is None

    def test_empty_text(self) -> None:
        assert extract_address("") is None
        assert extract_address(None) is None

    def test_address_in_url(self, bonk_address: str) -> None:
        text = f"https://dexscreener.com/solana/{bonk_address}"
        assert extract_address(text) == bonk_address
