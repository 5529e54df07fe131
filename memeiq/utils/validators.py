"""
Solana address validation and detection.

The bot only does a format check: an address must be 32-44 characters
of the base58 alphabet (no 0, O, I, l). Whether the address is an actual
token mint is decided by the analysis API.
"""

import re

import base58

MIN_ADDRESS_LENGTH = 32
MAX_ADDRESS_LENGTH = 44

# Base58 runs of address length, delimited by non-word characters
ADDRESS_PATTERN = re.compile(
    r"\b[1-9A-HJ-NP-Za-km-z]{%d,%d}\b" % (MIN_ADDRESS_LENGTH, MAX_ADDRESS_LENGTH)
)


def validate_solana_address(address: str | None) -> tuple[bool, str | None]:
    """
    Validate a Solana token address format.

    Args:
        address: String to validate as Solana address

    Returns:
        Tuple of (is_valid, error_message)
        - (True, None) if address looks valid
        - (False, "error description") if invalid

    Examples:
        >>> validate_solana_address("DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263")
        (True, None)

        >>> validate_solana_address("")
        (False, 'Address is empty')

        >>> validate_solana_address("0x742d35Cc6634C0532925a3b844Bc9e7595f5bEb2")
        (False, 'Invalid base58 characters')
    """
    if not address:
        return False, "Address is empty"

    if address != address.strip():
        return False, "Address contains whitespace"

    if not MIN_ADDRESS_LENGTH <= len(address) <= MAX_ADDRESS_LENGTH:
        return (
            False,
            f"Invalid address length: {len(address)} "
            f"(expected {MIN_ADDRESS_LENGTH}-{MAX_ADDRESS_LENGTH})",
        )

    try:
        base58.b58decode(address)
    except ValueError:
        # base58 raises ValueError for characters outside the alphabet
        return False, "Invalid base58 characters"

    return True, None


def is_valid_solana_address(address: str | None) -> bool:
    """
    Simple boolean check for Solana address validity.

    Convenience wrapper around validate_solana_address for
    cases where you only need a boolean result.
    """
    valid, _ = validate_solana_address(address)
    return valid


def extract_address(text: str | None) -> str | None:
    """
    Find the first address-like token in free chat text.

    Args:
        text: Arbitrary message text

    Returns:
        The first matching substring, or None
    """
    if not text:
        return None
    match = ADDRESS_PATTERN.search(text)
    return match.group(0) if match else None
