"""
Validation of interactive input.

Each parser takes one line typed by the user and either returns the
parsed value or raises, so the shell can re-prompt until it gets
something usable.
"""

import math

from ..calibration.errors import InsufficientPointsError, InvalidNumericInputError
from ..calibration.literals import is_decimal_literal, is_integer_literal

MENU_OPTIONS = (1, 2, 3, 4, 5)


def parse_number(text: str) -> float:
    """Parse a finite float such as ``-1.5`` or ``2.5e3``."""
    stripped = text.strip()
    if not is_decimal_literal(stripped):
        raise InvalidNumericInputError(text)

    value = float(stripped)
    if not math.isfinite(value):
        raise InvalidNumericInputError(text, f"Not a finite number: {text!r}")
    return value


def parse_integer(text: str) -> int:
    """Parse a whole number, rejecting fractions."""
    stripped = text.strip()
    if not is_integer_literal(stripped):
        raise InvalidNumericInputError(text, f"Not an integer: {text!r}")
    try:
        return int(stripped)
    except ValueError:
        # More digits than the interpreter will convert
        raise InvalidNumericInputError(text, f"Not an integer: {text!r}") from None


def parse_point_count(text: str, minimum: int = 2) -> int:
    """Parse the number of calibration points, at least ``minimum``."""
    count = parse_integer(text)
    if count < minimum:
        raise InsufficientPointsError(count, minimum)
    return count


def parse_menu_choice(text: str) -> int:
    """
    Parse a main menu selection.

    Returns the integer even when it is not a valid option; the caller
    reports out-of-range choices separately from non-numeric ones.
    """
    return parse_integer(text)


def wants_another(text: str) -> bool:
    """True when the answer starts with ``y`` or ``Y``."""
    return text.strip()[:1] in ('y', 'Y')
