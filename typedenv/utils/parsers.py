"""Parsers turning raw environment strings into typed values.

Each parser accepts exactly the text it is given: no surrounding
whitespace is tolerated, and failures raise ValueParseError.
"""

from __future__ import annotations

import math
import re
from datetime import timedelta
from fractions import Fraction

from typedenv.utils.constant import INT64_MAX, INT64_MIN
from typedenv.utils.errors import ValueParseError

TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_HEX_FLOAT_PATTERN = re.compile(r"[+-]?0[xX]")
_INFINITY_STRINGS = frozenset({"inf", "infinity"})

# Decimal digits of INT64_MAX; longer digit strings cannot fit
MAX_INT64_DIGITS = 19
# Fraction digits beyond this cannot change a nanosecond count
MAX_FRACTION_DIGITS = 18

# Nanoseconds per duration unit
DURATION_UNITS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_DURATION_COMPONENT = re.compile(r"(?P<whole>[0-9]*)(?P<frac>\.[0-9]*)?(?P<unit>[^0-9.]*)")


def parse_bool(value: str) -> bool:
    """Parse a boolean in one of its canonical textual forms.

    Args:
        value: Raw string, e.g. "true", "F" or "1".

    Returns:
        The parsed boolean.
    """
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    raise ValueParseError("bool", value)


def parse_int(value: str) -> int:
    """Parse a base-10 signed integer that fits in 64 bits.

    Args:
        value: Raw string such as "42" or "-7".

    Returns:
        The parsed integer.
    """
    if not _INT_PATTERN.fullmatch(value):
        raise ValueParseError("int", value)
    if len(value.lstrip("+-").lstrip("0")) > MAX_INT64_DIGITS:
        raise ValueParseError("int", value, "value out of range")
    result = int(value)
    if not INT64_MIN <= result <= INT64_MAX:
        raise ValueParseError("int", value, "value out of range")
    return result


def parse_float(value: str) -> float:
    """Parse a double precision float.

    Accepts decimal and scientific notation, hexadecimal floats
    ("0x1.8p1") and the special values inf, infinity and nan.

    Args:
        value: Raw string such as "3.14" or "1e-9".

    Returns:
        The parsed float.
    """
    if not value or not value.isascii() or value != value.strip() or "_" in value:
        raise ValueParseError("float", value)

    is_hex = _HEX_FLOAT_PATTERN.match(value) is not None
    if is_hex and "p" not in value.lower():
        raise ValueParseError("float", value, "hexadecimal mantissa requires a 'p' exponent")

    try:
        if is_hex:
            result = float.fromhex(value)
        else:
            result = float(value)
    except OverflowError:
        raise ValueParseError("float", value, "value out of range") from None
    except ValueError:
        raise ValueParseError("float", value) from None

    if math.isinf(result) and value.lstrip("+-").lower() not in _INFINITY_STRINGS:
        raise ValueParseError("float", value, "value out of range")
    return result


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as "300ms", "-1.5h" or "2h45m".

    A duration is an optionally signed sequence of decimal numbers, each
    with an optional fraction and a mandatory unit suffix. Valid units are
    "ns", "us" (or "µs"), "ms", "s", "m" and "h". The bare string "0" is
    also accepted.

    Args:
        value: Raw duration string.

    Returns:
        The parsed duration. Sub-microsecond remainders are truncated.
    """
    text = value
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueParseError("duration", value)

    limit = -INT64_MIN if negative else INT64_MAX
    nanoseconds = 0
    pos = 0
    while pos < len(text):
        match = _DURATION_COMPONENT.match(text, pos)
        whole, frac, unit = match.group("whole"), match.group("frac"), match.group("unit")
        frac_digits = frac[1:] if frac else ""

        if not whole and not frac_digits:
            raise ValueParseError("duration", value)
        if not unit:
            raise ValueParseError("duration", value, "missing unit")
        if unit not in DURATION_UNITS:
            raise ValueParseError("duration", value, f'unknown unit "{unit}"')

        whole = whole.lstrip("0")
        if len(whole) > MAX_INT64_DIGITS:
            raise ValueParseError("duration", value, "value out of range")

        scale = DURATION_UNITS[unit]
        component = int(whole or "0") * scale
        if frac_digits:
            frac_digits = frac_digits[:MAX_FRACTION_DIGITS]
            component += int(Fraction(int(frac_digits), 10 ** len(frac_digits)) * scale)
        nanoseconds += component
        if nanoseconds > limit:
            raise ValueParseError("duration", value, "value out of range")
        pos = match.end()

    microseconds = nanoseconds // 1_000
    return timedelta(microseconds=-microseconds if negative else microseconds)
