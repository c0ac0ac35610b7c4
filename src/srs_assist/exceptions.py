"""Error taxonomy for the SRS assistant.

Every failure raised below the top-level operations is one of these classes.
Each carries an ``ErrorKind`` so calling layers branch on the kind instead of
matching message text; messages stay stable and user-presentable.
"""

from enum import Enum
import math


class ErrorKind(str, Enum):
    """Stable classification of terminal failures."""

    MISCONFIGURED_CREDENTIAL = "misconfigured_credential"
    RATE_LIMITED = "rate_limited"
    TRANSIENT_PROVIDER = "transient_provider"
    PERMANENT_PROVIDER = "permanent_provider"
    MALFORMED_RESPONSE = "malformed_response"
    SCHEMA_VIOLATION = "schema_violation"
    DOMAIN_INVARIANT = "domain_invariant"
    INVALID_REQUEST = "invalid_request"


class SRSAssistError(Exception):
    """Base exception for SRS assistant errors"""

    kind: ErrorKind = ErrorKind.PERMANENT_PROVIDER

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MisconfiguredCredentialError(SRSAssistError):
    """Raised when the API key is missing or rejected by the provider"""

    kind = ErrorKind.MISCONFIGURED_CREDENTIAL


class RateLimitedError(SRSAssistError):
    """Raised when the shared rate window is full.

    ``wait_seconds`` is the whole number of seconds until the oldest recorded
    request leaves the window.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(self, wait_seconds: int) -> None:
        self.wait_seconds = max(1, math.ceil(wait_seconds))
        super().__init__(
            f"Rate limit exceeded. Please try again in {self.wait_seconds} seconds."
        )

    @property
    def busy_message(self) -> str:
        """Caller-facing text for a 'server busy' response."""
        return (
            f"Server is busy, please try again in {self.wait_seconds} seconds"
        )


class TransientProviderError(SRSAssistError):
    """Raised when retries are exhausted on timeouts, network or 429/5xx errors"""

    kind = ErrorKind.TRANSIENT_PROVIDER


class PermanentProviderError(SRSAssistError):
    """Raised when the provider keeps failing with a non-transient error"""

    kind = ErrorKind.PERMANENT_PROVIDER

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponseError(SRSAssistError):
    """Raised when model output cannot be parsed as JSON"""

    kind = ErrorKind.MALFORMED_RESPONSE


class SchemaViolationError(SRSAssistError):
    """Raised when model output still violates its schema after the retry"""

    kind = ErrorKind.SCHEMA_VIOLATION

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


class DomainInvariantViolation(SRSAssistError):
    """Raised when a schema-valid result breaks an operation-specific rule"""

    kind = ErrorKind.DOMAIN_INVARIANT


class InvalidRequestError(SRSAssistError):
    """Raised when caller input is rejected before any LLM call"""

    kind = ErrorKind.INVALID_REQUEST
