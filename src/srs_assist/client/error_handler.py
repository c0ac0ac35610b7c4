"""Error classification for Gemini API generation attempts"""

from dataclasses import dataclass

from google.genai import errors as genai_errors
import httpx

from ..constants import (
    AUTH_FAILURE_STATUS_CODES,
    MSG_INVALID_KEY,
    MSG_SERVICE_ERROR,
    MSG_TEMPORARILY_UNAVAILABLE,
    TRANSIENT_STATUS_CODES,
)
from ..exceptions import (
    ErrorKind,
    MisconfiguredCredentialError,
    PermanentProviderError,
    SRSAssistError,
    TransientProviderError,
)

_TIMEOUT_ERRORS = (httpx.TimeoutException, TimeoutError)
_NETWORK_ERRORS = (httpx.ConnectError, httpx.NetworkError, ConnectionError)


@dataclass(frozen=True)
class AttemptFailure:
    """What went wrong in one attempt, reduced to the facts retry logic needs"""

    kind: ErrorKind
    status: int | None = None
    provider_message: str | None = None
    transient: bool = False

    @property
    def fatal(self) -> bool:
        """Credential failures end the call without further attempts."""
        return self.kind is ErrorKind.MISCONFIGURED_CREDENTIAL


class GenerationErrorHandler:
    """Classifies provider and transport errors raised during generation"""

    def classify(self, error: Exception) -> AttemptFailure:
        if isinstance(error, genai_errors.APIError):
            status = error.code
            if status in AUTH_FAILURE_STATUS_CODES:
                return AttemptFailure(
                    ErrorKind.MISCONFIGURED_CREDENTIAL,
                    status=status,
                    provider_message=error.message,
                )
            transient = status in TRANSIENT_STATUS_CODES
            return AttemptFailure(
                ErrorKind.TRANSIENT_PROVIDER if transient else ErrorKind.PERMANENT_PROVIDER,
                status=status,
                provider_message=error.message or None,
                transient=transient,
            )

        if isinstance(error, _TIMEOUT_ERRORS + _NETWORK_ERRORS):
            return AttemptFailure(ErrorKind.TRANSIENT_PROVIDER, transient=True)

        # Anything else (SDK value errors, empty completions) carries no
        # provider-reported detail.
        return AttemptFailure(ErrorKind.PERMANENT_PROVIDER)

    def to_terminal_error(self, failure: AttemptFailure) -> SRSAssistError:
        """Build the caller-facing error once no attempts remain."""
        if failure.fatal:
            return MisconfiguredCredentialError(MSG_INVALID_KEY)
        if failure.transient:
            return TransientProviderError(MSG_TEMPORARILY_UNAVAILABLE)
        return PermanentProviderError(
            failure.provider_message or MSG_SERVICE_ERROR,
            status=failure.status,
        )
