"""Library-wide constants and configuration."""

from __future__ import annotations

from .env_loader import load_library_env

# Load once (single source of truth)
_ENV = load_library_env()

# File used by FileLoader.load() when called without paths
DEFAULT_ENV_FILE: str = _ENV.get("TYPEDENV_DEFAULT_FILE") or ".env"
ENV_FILE_ENCODING: str = _ENV.get("TYPEDENV_FILE_ENCODING") or "utf-8"

COMMENT_PREFIX: str = "#"
ASSIGNMENT_SEPARATOR: str = "="
QUOTE_CHARS: tuple[str, ...] = ('"', "'")

# Range of a signed 64-bit integer, shared by int and duration parsing
INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1
