""".env file loading service.

Reads ``KEY=VALUE`` files into the environment, later assignments
overriding earlier ones, then invalidates the variable cache.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path

from typedenv.services.variable_cache import VariableCacheProtocol
from typedenv.utils.constant import (
    ASSIGNMENT_SEPARATOR,
    COMMENT_PREFIX,
    DEFAULT_ENV_FILE,
    ENV_FILE_ENCODING,
    QUOTE_CHARS,
)


@dataclass(frozen=True)
class ParsedAssignment:
    """A single ``KEY=VALUE`` line of an env file.

    Attributes:
        key: Variable name, whitespace trimmed.
        value: Variable value, whitespace trimmed and one quote layer removed.
        line_number: 1-based line the assignment was read from.
    """

    key: str
    value: str
    line_number: int = 0


def unquote(value: str) -> str:
    """Strip one layer of matching single or double quotes.

    Args:
        value: A trimmed value.

    Returns:
        The value without its outer quote pair, or unchanged if it has none.
    """
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARS:
        return value[1:-1]
    return value


def parse_line(line: str, line_number: int = 0) -> ParsedAssignment | None:
    """Parse one line of an env file.

    Args:
        line: Raw line text.
        line_number: 1-based position of the line in its file.

    Returns:
        The assignment, or None for blank, comment and separator-less lines.
    """
    line = line.strip()
    if not line or line.startswith(COMMENT_PREFIX):
        return None

    key, separator, value = line.partition(ASSIGNMENT_SEPARATOR)
    if not separator:
        return None

    return ParsedAssignment(
        key=key.strip(),
        value=unquote(value.strip()),
        line_number=line_number,
    )


def parse_env_text(text: str) -> list[ParsedAssignment]:
    """Parse the full contents of an env file.

    Args:
        text: File contents.

    Returns:
        Assignments in file order, duplicates included.
    """
    assignments: list[ParsedAssignment] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        assignment = parse_line(line, line_number)
        if assignment is not None:
            assignments.append(assignment)
    return assignments


class FileLoader:
    """Populate the environment from env files.

    Files are applied in order, so a key assigned in several files (or
    several times in one file) keeps the last value read.
    """

    def __init__(
        self,
        cache: VariableCacheProtocol,
        environ: MutableMapping[str, str] | None = None,
        *,
        default_filename: str | Path = DEFAULT_ENV_FILE,
        encoding: str = ENV_FILE_ENCODING,
    ) -> None:
        """Initialize file loader.

        Args:
            cache: Variable cache to invalidate after loading.
            environ: Environment mapping to write (defaults to os.environ).
            default_filename: File loaded when no paths are given.
            encoding: Text encoding of the env files.
        """
        self._cache = cache
        self._environ = os.environ if environ is None else environ
        self._default_filename = Path(default_filename)
        self._encoding = encoding

    @property
    def default_filename(self) -> Path:
        """Get the default env file path.

        Returns:
            The path loaded when no paths are given.
        """
        return self._default_filename

    def load(self, *paths: str | Path) -> None:
        """Load env files into the environment and clear the cache.

        Missing files are skipped. The first file that exists but cannot be
        read, or that assigns an empty variable name, aborts the load: its
        error propagates, variables already set stay set, and the cache is
        left untouched.

        Args:
            *paths: Files to load in order (defaults to the default file).

        Raises:
            OSError: If an existing file cannot be read, or (EINVAL) if a line
                has an empty variable name.
        """
        targets = [Path(p) for p in paths] or [self._default_filename]

        for path in targets:
            if not path.exists():
                logging.debug("Env file %s not found, skipping", path)
                continue

            # Split on "\n" only; a lone "\r" stays inside its line
            text = path.read_bytes().decode(self._encoding, errors="replace")
            applied = self._apply(path, parse_env_text(text))
            logging.info("Loaded %d variables from %s", applied, path)

        self._cache.clear()

    def _apply(self, path: Path, assignments: list[ParsedAssignment]) -> int:
        """Write assignments into the environment.

        Args:
            path: File the assignments came from.
            assignments: Parsed assignments in file order.

        Returns:
            Number of assignments written.

        Raises:
            OSError: If an assignment has an empty variable name. Assignments
                before it stay written.
        """
        applied = 0
        for assignment in assignments:
            if not assignment.key:
                raise OSError(
                    errno.EINVAL,
                    f"{path}:{assignment.line_number}: empty environment variable name",
                )
            self._environ[assignment.key] = assignment.value
            applied += 1
        return applied
