"""Configuration introspection for debugging deployments."""

import argparse
import json
import sys
from typing import Any

from .resolver import resolve_config
from .types import ResolvedConfig

# ruff: noqa: T201


def get_config_info(env_file: str | None = None) -> dict[str, Any]:
    """Structured, redacted configuration details."""
    try:
        resolved = resolve_config(env_file=env_file)
    except Exception as e:
        return {"status": "invalid", "error": str(e), "config": None, "sources": {}}

    return {
        "status": "valid",
        "config": resolved.redacted_summary(),
        "sources": dict(resolved.origin),
        "warnings": config_warnings(resolved),
    }


def config_warnings(resolved: ResolvedConfig) -> list[str]:
    """Non-fatal issues worth surfacing."""
    warnings = []
    if not resolved.api_key:
        warnings.append("No API key configured - every LLM call will fail")
    if resolved.rate_limit_max_requests / resolved.rate_limit_window_seconds > 10:
        warnings.append("Rate limit allows more than 10 requests per second")
    return warnings


def _print_human(info: dict[str, Any]) -> None:
    if info["status"] != "valid":
        print(f"Configuration Error: {info['error']}", file=sys.stderr)
        return

    print("=== Effective Configuration ===")
    for key, value in info["config"].items():
        print(f"  {key}: {value}")
    print("\n=== Configuration Sources ===")
    for key, source in info["sources"].items():
        print(f"  {key}: {source}")
    if info["warnings"]:
        print("\nWarnings:")
        for warning in info["warnings"]:
            print(f"  - {warning}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for configuration introspection."""
    parser = argparse.ArgumentParser(
        description="Inspect srs-assist configuration",
        prog="python -m srs_assist.config",
    )
    parser.add_argument("--env-file", help="Load this .env file first")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Just check if configuration is valid (exit code 0=valid, 1=invalid)",
    )
    args = parser.parse_args(argv)

    info = get_config_info(env_file=args.env_file)
    if args.check:
        return 0 if info["status"] == "valid" else 1

    if args.json:
        print(json.dumps(info, indent=2))
    else:
        _print_human(info)
    return 0 if info["status"] == "valid" else 1
