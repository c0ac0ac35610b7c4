"""Configuration for the SRS assistant.

Resolve once, then pass the frozen ``ResolvedConfig`` to the client.
"""

from .env_loader import load_env_file
from .resolver import resolve_config
from .schema import SRSAssistSettings
from .types import ConfigOrigin, ResolvedConfig, SourceMap

__all__ = [
    "ConfigOrigin",
    "ResolvedConfig",
    "SRSAssistSettings",
    "SourceMap",
    "load_env_file",
    "resolve_config",
]
