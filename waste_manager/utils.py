"""Error types and helpers shared by the aggregator and dashboard."""
from datetime import datetime
from typing import Any, Iterable, NoReturn, Optional
from botocore.exceptions import ClientError, BotoCoreError
import logging

logger = logging.getLogger(__name__)

ACCESS_DENIED_CODES = ['AccessDeniedException', 'UnauthorizedOperation', 'AccessDenied']
RATE_LIMIT_CODES = ['RequestLimitExceeded', 'Throttling', 'ThrottlingException', 'TooManyRequestsException']


class WasteManagerError(Exception):
    """Base class for errors raised by this package."""
    pass


class ClientInputError(WasteManagerError):
    """Raised when a caller supplies invalid input, e.g. an empty resource id."""
    pass


class UpstreamProviderError(WasteManagerError):
    """Raised when a provider inventory or delete call fails."""
    pass


class AWSAccessDeniedError(UpstreamProviderError):
    """Raised when AWS access is denied."""
    pass


class AWSRateLimitError(UpstreamProviderError):
    """Raised when AWS rate limit is hit."""
    pass


def handle_aws_error(error: Exception, context: str) -> NoReturn:
    """
    Log a provider failure and re-raise it as an UpstreamProviderError.

    Args:
        error: The exception that occurred
        context: Context string describing what was being done

    Raises:
        AWSAccessDeniedError: If access was denied
        AWSRateLimitError: If rate limited
        UpstreamProviderError: For any other provider failure
    """
    if isinstance(error, ClientError):
        error_code = error.response.get('Error', {}).get('Code', 'Unknown')
        error_message = error.response.get('Error', {}).get('Message', str(error))

        if error_code in ACCESS_DENIED_CODES:
            logger.warning(f"Access denied for {context}: {error_message}")
            raise AWSAccessDeniedError(f"Access denied for {context}: {error_message}") from error
        elif error_code in RATE_LIMIT_CODES:
            logger.warning(f"Rate limit hit for {context}: {error_message}")
            raise AWSRateLimitError(f"Rate limit hit for {context}: {error_message}") from error
        else:
            logger.error(f"AWS error in {context}: {error_code} - {error_message}")
            raise UpstreamProviderError(f"{context} failed: {error_code} - {error_message}") from error
    elif isinstance(error, BotoCoreError):
        logger.error(f"AWS client error in {context}: {error}")
        raise UpstreamProviderError(f"{context} failed: {error}") from error
    else:
        logger.exception(f"Unexpected error in {context}")
        raise UpstreamProviderError(f"{context} failed: {error}") from error


def get_name_tag(tags: Optional[Iterable[Any]], fallback: str) -> str:
    """
    Return the value of the ``Name`` tag, or ``fallback`` when absent.

    A missing tag collection is treated as having no tags.
    """
    for tag in tags or []:
        if tag.get('Key') == 'Name' and tag.get('Value'):
            return tag['Value']
    return fallback


def format_timestamp(value: Any) -> str:
    """Render a provider timestamp as an ISO-8601 string."""
    if value is None:
        return ''
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)
