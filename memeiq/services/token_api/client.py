"""
MemeIQ analysis API client.

Calls GET {api_base}/analyze?address=... and decodes the response into
a TokenAnalysis. This is the real implementation used in production.

Error mapping:
- non-2xx status -> RemoteServiceError
- body that is not JSON, lacks a truthy "ok", lacks "token", or whose
  token fails decoding -> RemoteDataError
- network failure or timeout -> RemoteUnavailable

No retries: a failed call is reported to the user straight away.
"""

import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from memeiq.core.exceptions import RemoteDataError, RemoteServiceError, RemoteUnavailable
from memeiq.core.models import ApiResponse, TokenAnalysis

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://meme-iq.vercel.app/api"

DEFAULT_TIMEOUT = 30.0

DEFAULT_CLIENT_IDENTIFIER = "MemeIQ-TelegramBot/1.0"


class MemeIQApiClient:
    """
    Real implementation of TokenAnalysisClient over HTTP.

    Timeout: 30 seconds for the whole request
    Retry: none
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client_identifier: str = DEFAULT_CLIENT_IDENTIFIER,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL, without the /analyze suffix
            timeout: Request timeout in seconds
            client_identifier: Value of the User-Agent header
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {
            "User-Agent": client_identifier,
            "Accept": "application/json",
        }

    @property
    def analyze_url(self) -> str:
        return f"{self._base_url}/analyze"

    async def analyze(self, address: str) -> TokenAnalysis:
        """
        Fetch the analysis for a token.

        Args:
            address: Validated Solana token address

        Returns:
            Decoded TokenAnalysis

        Raises:
            RemoteServiceError: Non-2xx status
            RemoteDataError: Malformed or empty payload
            RemoteUnavailable: Network failure or timeout
        """
        logger.info(f"Calling analysis API for: {address[:8]}...")

        timeout = aiohttp.ClientTimeout(total=self._timeout)

        try:
            async with aiohttp.ClientSession(headers=self._headers) as session:
                async with session.get(
                    self.analyze_url,
                    params={"address": address},
                    timeout=timeout,
                ) as resp:
                    if not 200 <= resp.status < 300:
                        logger.warning(f"Analysis API returned {resp.status} for {address[:8]}")
                        raise RemoteServiceError(status=resp.status)

                    body = await resp.read()

        except RemoteServiceError:
            raise
        except asyncio.TimeoutError:
            logger.error(f"Analysis API timeout after {self._timeout}s for {address[:8]}")
            raise RemoteUnavailable(
                technical_message=f"Analysis API timeout after {self._timeout}s",
            ) from None
        except aiohttp.ClientError as e:
            logger.error(f"Analysis API unreachable: {type(e).__name__}: {e}")
            raise RemoteUnavailable(
                message=(
                    "❌ Analysis service unreachable.\n\n"
                    "Please try again in a minute."
                ),
                technical_message=f"Analysis API error: {type(e).__name__}: {e}",
            ) from e

        return self._decode(address, body)

    def _decode(self, address: str, body: bytes) -> TokenAnalysis:
        """
        Decode the response envelope.

        Raises:
            RemoteDataError: If the payload is unusable
        """
        try:
            response = ApiResponse.model_validate_json(body)
        except ValidationError as e:
            logger.warning(f"Malformed analysis payload for {address[:8]}: {e.error_count()} errors")
            raise RemoteDataError(
                technical_message=f"Malformed analysis payload: {e}",
            ) from e

        if not response.ok or response.token is None:
            logger.info(f"Analysis API found no token for {address[:8]}: {response.error}")
            raise RemoteDataError(
                technical_message=f"API returned ok={response.ok}, error={response.error!r}",
            )

        logger.debug(f"Analysis received: {response.token.symbol}")
        return response.token
