"""Configuration resolution with precedence handling.

Precedence: programmatic overrides > environment (optionally seeded from an
explicit .env file) > schema defaults.
"""

import logging
from pathlib import Path
from typing import Any

from .env_loader import load_env_file
from .schema import SRSAssistSettings
from .types import ConfigOrigin, ResolvedConfig

log = logging.getLogger(__name__)


def resolve_config(
    *,
    env_file: str | Path | None = None,
    **overrides: Any,
) -> ResolvedConfig:
    """Resolve settings into a frozen ``ResolvedConfig``.

    Args:
        env_file: Optional .env file to load before reading the environment.
        **overrides: Field values that take precedence over everything else.

    Raises:
        pydantic.ValidationError: If any value fails validation.
        FileNotFoundError: If ``env_file`` is given but missing.
    """
    if env_file is not None:
        load_env_file(env_file)

    known = set(SRSAssistSettings.model_fields)
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")

    settings = SRSAssistSettings(**overrides)

    origin: dict[str, ConfigOrigin] = {}
    for name in SRSAssistSettings.model_fields:
        if name in overrides:
            origin[name] = "programmatic"
        elif name in settings.model_fields_set:
            origin[name] = "env"
        else:
            origin[name] = "default"

    resolved = ResolvedConfig(**settings.model_dump(), origin=origin)
    log.debug("Resolved configuration: %s", resolved)
    return resolved
