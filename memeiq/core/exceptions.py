"""
Custom exceptions for the MemeIQ bot.

Exception hierarchy:
    MemeIQError (base)
    ├── InvalidAddressFormat - Input does not look like a token address
    ├── QuotaExceeded - Free tier daily limit reached
    ├── RemoteServiceError - Analysis API answered with a non-2xx status
    ├── RemoteDataError - Analysis API answered with an unusable payload
    ├── RemoteUnavailable - Network failure or timeout talking to the API
    └── WatchlistError - Watchlist/alert bookkeeping refused the change

Each exception carries a user-friendly message that can be shown to users,
and optionally a technical message for logging.
"""


class MemeIQError(Exception):
    """
    Base exception for all MemeIQ errors.

    Attributes:
        message: User-friendly error message (can be shown to users)
        technical_message: Detailed message for logs (optional)
    """

    def __init__(
        self,
        message: str = "❌ Something went wrong. Please try again later.",
        technical_message: str | None = None,
    ):
        self.message = message
        self.technical_message = technical_message or message
        super().__init__(self.technical_message)

    def __str__(self) -> str:
        return self.technical_message


class InvalidAddressFormat(MemeIQError):
    """
    Raised when the input is not a plausible Solana address.

    Always user-correctable, never retried.
    """

    def __init__(
        self,
        message: str = (
            "❌ Invalid token address.\n\n"
            "Send a Solana token address (32-44 characters), e.g.\n"
            "<code>DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263</code>"
        ),
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class QuotaExceeded(MemeIQError):
    """
    Raised when a free tier user has used up today's analyses.

    Resolved only by a tier upgrade or the next calendar day.
    """

    def __init__(
        self,
        message: str = (
            "⛔ Daily limit reached.\n\n"
            "Free accounts get 5 analyses per day.\n"
            "Use /upgrade for unlimited analyses."
        ),
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class RemoteServiceError(MemeIQError):
    """
    Raised when the analysis API returns a non-2xx status.

    Attributes:
        status: HTTP status code returned by the API
    """

    def __init__(
        self,
        status: int,
        message: str = (
            "❌ Analysis failed.\n\n"
            "The analysis service returned an error. Please try again in a few minutes."
        ),
        technical_message: str | None = None,
    ):
        self.status = status
        super().__init__(message, technical_message or f"Analysis API returned HTTP {status}")


class RemoteDataError(MemeIQError):
    """
    Raised when the API payload is malformed or carries no token.

    Examples:
        - Body is not JSON
        - "ok" is missing or false
        - "token" is missing or lacks required fields
    """

    def __init__(
        self,
        message: str = (
            "🔍 Token not found.\n\n"
            "Make sure this is a valid Solana token address with trading activity."
        ),
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class RemoteUnavailable(MemeIQError):
    """
    Raised on network failures and timeouts.

    Examples:
        - Connection refused / DNS failure
        - Request exceeded the configured timeout
    """

    def __init__(
        self,
        message: str = (
            "⏱ Analysis timed out.\n\n"
            "The analysis service is slow or unreachable right now. "
            "Please try again in a minute."
        ),
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)


class WatchlistError(MemeIQError):
    """
    Raised when a watchlist or alert change is refused.

    Examples:
        - Token already in watchlist
        - Free tier watchlist is full
    """

    def __init__(
        self,
        message: str = "❌ Could not update your watchlist.",
        technical_message: str | None = None,
    ):
        super().__init__(message, technical_message)
