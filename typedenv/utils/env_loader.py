"""Library settings loading utilities."""

from __future__ import annotations

import os

LIBRARY_ENV_PREFIX = "TYPEDENV_"


def load_library_env(prefix: str = LIBRARY_ENV_PREFIX) -> dict[str, str]:
    """Snapshot the variables that configure this library itself.

    Args:
        prefix: Name prefix of the library's own settings.

    Returns:
        A dictionary of the matching environment variables.
    """
    return {key: value for key, value in os.environ.items() if key.startswith(prefix)}
