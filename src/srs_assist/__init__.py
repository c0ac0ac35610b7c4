"""Reliable LLM generation for drafting Software Requirements Specifications."""

import importlib.metadata
import logging

from srs_assist.assistant import InteractionLog, RequirementsAssistant
from srs_assist.client import RateLimitConfig, RateLimiter, RetryConfig
from srs_assist.config import ResolvedConfig, resolve_config
from srs_assist.core.types import Failure, Result, Success, ValidatedResult
from srs_assist.exceptions import (
    DomainInvariantViolation,
    ErrorKind,
    InvalidRequestError,
    MalformedResponseError,
    MisconfiguredCredentialError,
    PermanentProviderError,
    RateLimitedError,
    SchemaViolationError,
    SRSAssistError,
    TransientProviderError,
)
from srs_assist.gemini_client import GeminiClient
from srs_assist.response import (
    RetryPolicy,
    StructuredGenerator,
    extract_json,
    parse_repaired,
)
from srs_assist.srs import AssembledSRS, assemble_srs_document
from srs_assist.telemetry import SimpleReporter, TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("srs-assist")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AssembledSRS",
    "DomainInvariantViolation",
    "ErrorKind",
    "Failure",
    "GeminiClient",
    "InteractionLog",
    "InvalidRequestError",
    "MalformedResponseError",
    "MisconfiguredCredentialError",
    "PermanentProviderError",
    "RateLimitConfig",
    "RateLimitedError",
    "RateLimiter",
    "RequirementsAssistant",
    "ResolvedConfig",
    "Result",
    "RetryConfig",
    "RetryPolicy",
    "SRSAssistError",
    "SchemaViolationError",
    "SimpleReporter",
    "StructuredGenerator",
    "Success",
    "TelemetryContext",
    "TelemetryReporter",
    "TransientProviderError",
    "ValidatedResult",
    "assemble_srs_document",
    "extract_json",
    "parse_repaired",
    "resolve_config",
]
