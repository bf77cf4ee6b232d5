"""
Numeric literal grammar shared by keyboard input and calibration files.

Only plain ASCII decimal notation is accepted. ``float()`` and ``int()``
on their own also take digit group underscores, non-ASCII digits and
words such as ``inf``, none of which are readings.
"""

import re

DECIMAL_RE = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?', re.ASCII)
INTEGER_RE = re.compile(r'[+-]?\d+', re.ASCII)


def is_decimal_literal(token: str) -> bool:
    """True for tokens like ``12``, ``-0.5``, ``.5`` or ``2.5e3``."""
    return DECIMAL_RE.fullmatch(token) is not None


def is_integer_literal(token: str) -> bool:
    """True for optionally signed runs of ASCII digits."""
    return INTEGER_RE.fullmatch(token) is not None
