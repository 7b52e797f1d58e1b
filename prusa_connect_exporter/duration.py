"""Parser for the human readable durations reported by Prusa Connect.

The printer reports elapsed print time as a sequence of ``<integer><unit>``
tokens such as ``"1h 30m 5s"``. Tokens may be separated by spaces and the same
unit may appear more than once, in which case the values accumulate.
"""

from __future__ import annotations

from typing import Dict

UNIT_SECONDS: Dict[str, int] = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
}

# Largest accepted total, in seconds.
MAX_DURATION = 1 << 63

_DIGITS = "0123456789"


class DurationParseError(ValueError):
    """Raised when a duration string cannot be converted to seconds."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


class MissingValueError(DurationParseError):
    """A token does not start with a number."""


class MissingUnitError(DurationParseError):
    """A number is not followed by a unit."""


class UnknownUnitError(DurationParseError):
    """A unit is not one of ``s``, ``m``, ``h`` or ``d``."""

    def __init__(self, message: str, value: str, unit: str) -> None:
        super().__init__(message, value)
        self.unit = unit


class DurationOverflowError(DurationParseError):
    """The duration does not fit in the supported range."""


def parse_duration(value: str) -> int:
    """Return the number of seconds described by ``value``.

    An empty string is a zero duration. Only the space character separates
    tokens; unit letters are matched exactly.

    Raises:
        DurationParseError: one of its subclasses, describing why ``value``
            was rejected.
    """

    total = 0
    remaining = value
    while remaining:
        remaining = remaining.lstrip(" ")

        amount = 0
        index = 0
        for char in remaining:
            if char not in _DIGITS:
                break
            if amount > MAX_DURATION // 10:
                raise _overflow(value)
            amount = amount * 10 + _DIGITS.index(char)
            if amount > MAX_DURATION:
                raise _overflow(value)
            index += 1
        if index == 0:
            raise MissingValueError(
                f'missing value in duration "{value}"', value
            )
        remaining = remaining[index:]

        index = 0
        for char in remaining:
            if char == " " or char in _DIGITS:
                break
            index += 1
        if index == 0:
            raise MissingUnitError(f'missing unit in duration "{value}"', value)
        unit = remaining[:index]
        remaining = remaining[index:]

        scale = UNIT_SECONDS.get(unit)
        if scale is None:
            raise UnknownUnitError(
                f'unknown unit "{unit}" in duration "{value}"', value, unit
            )

        if amount > MAX_DURATION // scale:
            raise _overflow(value)
        total += amount * scale
        if total > MAX_DURATION:
            raise _overflow(value)

    return total


def _overflow(value: str) -> DurationOverflowError:
    return DurationOverflowError(f'invalid duration "{value}"', value)
