"""Typed environment variable accessors.

Two families of accessors are provided:

- ``get_*`` never raise. They return the caller's fallback when a variable
  is unset or cannot be parsed, logging a warning in the latter case.
- ``must_get_*`` read the environment directly and raise a
  RequiredVariableError when the variable is unset or unparsable.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, MutableMapping
from datetime import timedelta
from typing import TypeVar

from typedenv.services.variable_cache import VariableCacheProtocol
from typedenv.utils.errors import (
    InvalidVariableError,
    MissingVariableError,
    ValueParseError,
)
from typedenv.utils.parsers import parse_bool, parse_duration, parse_float, parse_int

T = TypeVar("T")


class EnvReader:
    """Resolve environment variables to typed values through a cache.

    The first read of a key records what it resolved to; later reads of
    the same key use the cache until ``clear_cache`` is called, even if
    the environment changes in between.
    """

    def __init__(
        self,
        cache: VariableCacheProtocol,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            cache: Cache holding resolved variable strings.
            environ: Environment mapping to read (defaults to os.environ).
        """
        self._cache = cache
        self._environ = os.environ if environ is None else environ

    @property
    def cache(self) -> VariableCacheProtocol:
        """Get the variable cache.

        Returns:
            The cache instance.
        """
        return self._cache

    @property
    def environ(self) -> MutableMapping[str, str]:
        """Get the environment mapping this reader reads from.

        Returns:
            The environment mapping.
        """
        return self._environ

    def clear_cache(self) -> None:
        """Forget every resolved variable."""
        self._cache.clear()

    def get_string(self, key: str, fallback: str) -> str:
        """Return a variable's value, or the fallback if it is unset or empty.

        The resolved string is cached, including when it is the fallback.

        Args:
            key: The variable name.
            fallback: Value used when the variable is unset or empty.

        Returns:
            The resolved string.
        """
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        value = None if self._cache.is_unset(key) else self._environ.get(key)
        if not value:
            value = fallback
        self._cache.set(key, value)
        return value

    def get_bool(self, key: str, fallback: bool) -> bool:
        """Return a variable parsed as a boolean, or the fallback.

        Args:
            key: The variable name.
            fallback: Value used when the variable is unset or unparsable.

        Returns:
            The parsed boolean.
        """
        return self._get_typed(key, fallback, "bool", parse_bool)

    def get_int(self, key: str, fallback: int) -> int:
        """Return a variable parsed as an integer, or the fallback.

        Args:
            key: The variable name.
            fallback: Value used when the variable is unset or unparsable.

        Returns:
            The parsed integer.
        """
        return self._get_typed(key, fallback, "int", parse_int)

    def get_float(self, key: str, fallback: float) -> float:
        """Return a variable parsed as a float, or the fallback.

        Args:
            key: The variable name.
            fallback: Value used when the variable is unset or unparsable.

        Returns:
            The parsed float.
        """
        return self._get_typed(key, fallback, "float", parse_float)

    def get_duration(self, key: str, fallback: timedelta) -> timedelta:
        """Return a variable parsed as a duration, or the fallback.

        Args:
            key: The variable name.
            fallback: Value used when the variable is unset or unparsable.

        Returns:
            The parsed duration.
        """
        return self._get_typed(key, fallback, "duration", parse_duration)

    def must_get_string(self, key: str) -> str:
        """Return a variable's value, bypassing the cache.

        An empty value is returned as is.

        Args:
            key: The variable name.

        Returns:
            The variable's value.

        Raises:
            MissingVariableError: If the variable is not set.
        """
        value = self._environ.get(key)
        if value is None:
            raise MissingVariableError(key)
        return value

    def must_get_bool(self, key: str) -> bool:
        """Return a variable parsed as a boolean, bypassing the cache.

        Raises:
            MissingVariableError: If the variable is not set.
            InvalidVariableError: If the value is not a boolean.
        """
        return self._must_get(key, "bool", parse_bool)

    def must_get_int(self, key: str) -> int:
        """Return a variable parsed as an integer, bypassing the cache.

        Raises:
            MissingVariableError: If the variable is not set.
            InvalidVariableError: If the value is not an integer.
        """
        return self._must_get(key, "int", parse_int)

    def must_get_float(self, key: str) -> float:
        """Return a variable parsed as a float, bypassing the cache.

        Raises:
            MissingVariableError: If the variable is not set.
            InvalidVariableError: If the value is not a float.
        """
        return self._must_get(key, "float", parse_float)

    def must_get_duration(self, key: str) -> timedelta:
        """Return a variable parsed as a duration, bypassing the cache.

        Raises:
            MissingVariableError: If the variable is not set.
            InvalidVariableError: If the value is not a duration.
        """
        return self._must_get(key, "duration", parse_duration)

    def _get_typed(
        self,
        key: str,
        fallback: T,
        kind: str,
        parser: Callable[[str], T],
    ) -> T:
        """Resolve a key through the cache and parse it.

        Args:
            key: The variable name.
            fallback: Value used when the variable is unset or unparsable.
            kind: Type name used in the warning message.
            parser: Function turning the raw string into the typed value.

        Returns:
            The parsed value or the fallback.
        """
        raw = self._cache.get(key)
        if raw is None:
            if self._cache.is_unset(key):
                return fallback
            raw = self._environ.get(key)
            if raw is None:
                self._cache.mark_unset(key)
                return fallback
            self._cache.set(key, raw)

        # Only the raw string is cached; parsing runs on every call
        try:
            return parser(raw)
        except ValueParseError as e:
            logging.warning("Failed to parse %s as %s: %s", key, kind, e)
            return fallback

    def _must_get(self, key: str, kind: str, parser: Callable[[str], T]) -> T:
        """Read a key directly from the environment and parse it.

        Args:
            key: The variable name.
            kind: Type name used in the error message.
            parser: Function turning the raw string into the typed value.

        Returns:
            The parsed value.
        """
        raw = self._environ.get(key)
        if raw is None:
            raise MissingVariableError(key)
        try:
            return parser(raw)
        except ValueParseError as e:
            raise InvalidVariableError(key, kind, e) from e
