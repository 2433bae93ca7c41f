"""Exception types raised by typedenv."""

from __future__ import annotations


class ValueParseError(ValueError):
    """Raised when a raw string cannot be parsed as the requested type.

    Attributes:
        kind: Name of the target type (e.g. "int", "duration").
        value: The raw string that failed to parse.
        reason: Short description of what was wrong with it.
    """

    def __init__(self, kind: str, value: str, reason: str = "invalid syntax") -> None:
        """Initialize the error.

        Args:
            kind: Name of the target type.
            value: The raw string that failed to parse.
            reason: Short description of the failure.
        """
        self.kind = kind
        self.value = value
        self.reason = reason
        super().__init__(f'parsing {kind} "{value}": {reason}')


class RequiredVariableError(RuntimeError):
    """Base class for failures of the must-style accessors.

    Attributes:
        key: Name of the environment variable.
        cause: Human-readable description of the failure.
    """

    def __init__(self, key: str, cause: str) -> None:
        """Initialize the error.

        Args:
            key: Name of the environment variable.
            cause: Human-readable description of the failure.
        """
        self.key = key
        self.cause = cause
        super().__init__(cause)


class MissingVariableError(RequiredVariableError):
    """A required environment variable is not set."""

    def __init__(self, key: str) -> None:
        """Initialize the error.

        Args:
            key: Name of the missing environment variable.
        """
        super().__init__(key, f"Environment variable {key} is not set")


class InvalidVariableError(RequiredVariableError):
    """A required environment variable is set but cannot be parsed."""

    def __init__(self, key: str, kind: str, error: ValueParseError) -> None:
        """Initialize the error.

        Args:
            key: Name of the environment variable.
            kind: Name of the target type.
            error: The underlying parse error.
        """
        self.kind = kind
        super().__init__(key, f"Failed to parse {key} as {kind}: {error}")
