"""
Calibration File Storage

Calibration files are plain text holding two numbers: the slope on the
first line and the offset on the second. Anything after the second
number is ignored when loading.
"""

import logging
import math

from .engine import CalibrationRecord
from .errors import FileOpenError, NoCalibrationError, ParseError
from .literals import is_decimal_literal

SAVE_PRECISION = 10

logger = logging.getLogger(__name__)


def _parse_coefficient(token: str, name: str) -> float:
    if not is_decimal_literal(token):
        raise ParseError(f"Cannot read {name} from file: {token!r} is not a number")

    value = float(token)
    if not math.isfinite(value):
        raise ParseError(f"Cannot read {name} from file: {token!r} is not finite")
    return value


def parse(text: str) -> CalibrationRecord:
    """
    Parse calibration file content.

    Args:
        text: File content, slope and offset separated by whitespace

    Returns:
        CalibrationRecord: Valid calibration

    Raises:
        ParseError: Fewer than two numbers, or a malformed number
    """
    tokens = text.split(None, 2)

    if not tokens:
        raise ParseError("Cannot read slope from file.")
    slope = _parse_coefficient(tokens[0], "slope")

    if len(tokens) < 2:
        raise ParseError("Cannot read offset from file.")
    offset = _parse_coefficient(tokens[1], "offset")

    return CalibrationRecord.from_coefficients(slope, offset)


def serialize(record: CalibrationRecord) -> str:
    """Render a calibration as file content, one coefficient per line."""
    if not record.valid:
        raise NoCalibrationError("No calibration to save.")
    return (f"{record.slope:.{SAVE_PRECISION}f}\n"
            f"{record.offset:.{SAVE_PRECISION}f}\n")


def load_calibration(path: str) -> CalibrationRecord:
    """
    Load a calibration from a text file.

    Raises:
        FileOpenError: File missing or unreadable
        ParseError: Content is not two numbers
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        logger.warning(f"Calibration file '{path}' is not valid UTF-8 text")
        raise ParseError(f"Calibration file '{path}' is not a text file") from e
    except (OSError, ValueError) as e:
        # ValueError covers paths with embedded null bytes
        logger.error(f"Failed to open calibration file '{path}': {e}")
        raise FileOpenError(path, "read") from e

    try:
        record = parse(text)
    except ParseError as e:
        logger.warning(f"Malformed calibration file '{path}': {e}")
        raise

    logger.info(f"Calibration loaded from {path}: slope={record.slope}, offset={record.offset}")
    return record


def save_calibration(record: CalibrationRecord, path: str):
    """
    Save a calibration to a text file, replacing any existing content.

    Raises:
        NoCalibrationError: Record is not valid
        FileOpenError: File cannot be created or written
    """
    content = serialize(record)

    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to save calibration to '{path}': {e}")
        raise FileOpenError(path, "write") from e

    logger.info(f"Calibration saved to {path}: slope={record.slope}, offset={record.offset}")
