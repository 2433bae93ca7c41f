"""Configuration context wiring.

An ``EnvContext`` bundles one variable cache with the reader and loader
that share it. Applications create one at startup and pass it to the code
that needs configuration:

    ctx = init_default_context()
    ctx.load(".env", ".env.local")
    port = ctx.reader.get_int("PORT", 8080)

Code that cannot receive the context as an argument may call
``get_default_context()``, which only works after ``init_default_context``.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from pathlib import Path

from typedenv.services.env_reader import EnvReader
from typedenv.services.file_loader import FileLoader
from typedenv.services.variable_cache import InMemoryVariableCache
from typedenv.utils.constant import DEFAULT_ENV_FILE


class EnvContext:
    """Cache, reader and loader operating on one environment mapping."""

    def __init__(
        self,
        environ: MutableMapping[str, str] | None = None,
        *,
        default_filename: str | Path = DEFAULT_ENV_FILE,
    ) -> None:
        """Create the services of one configuration context.

        Args:
            environ: Environment mapping (defaults to os.environ).
            default_filename: File loaded when ``load`` gets no paths.
        """
        self._cache = InMemoryVariableCache()
        self._reader = EnvReader(self._cache, environ)
        self._loader = FileLoader(
            self._cache,
            self._reader.environ,
            default_filename=default_filename,
        )

    @property
    def cache(self) -> InMemoryVariableCache:
        """Get the shared variable cache."""
        return self._cache

    @property
    def reader(self) -> EnvReader:
        """Get the typed accessor service."""
        return self._reader

    @property
    def loader(self) -> FileLoader:
        """Get the env file loader."""
        return self._loader

    @property
    def environ(self) -> MutableMapping[str, str]:
        """Get the environment mapping of this context."""
        return self._reader.environ

    def load(self, *paths: str | Path) -> None:
        """Load env files into the environment. See ``FileLoader.load``."""
        self._loader.load(*paths)

    def clear_cache(self) -> None:
        """Forget every resolved variable."""
        self._cache.clear()


_default_context: EnvContext | None = None


def init_default_context(
    environ: MutableMapping[str, str] | None = None,
    *,
    default_filename: str | Path = DEFAULT_ENV_FILE,
) -> EnvContext:
    """Create the process default context, replacing any previous one.

    Args:
        environ: Environment mapping (defaults to os.environ).
        default_filename: File loaded when ``load`` gets no paths.

    Returns:
        The new default context.
    """
    global _default_context
    _default_context = EnvContext(environ, default_filename=default_filename)
    return _default_context


def get_default_context() -> EnvContext:
    """Return the process default context.

    Raises:
        RuntimeError: If ``init_default_context`` has not been called.
    """
    if _default_context is None:
        raise RuntimeError(
            "Default env context is not initialized; call init_default_context() first"
        )
    return _default_context


def reset_default_context() -> None:
    """Drop the process default context."""
    global _default_context
    _default_context = None
