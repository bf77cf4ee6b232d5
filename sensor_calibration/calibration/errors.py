"""
Calibration Tool Exceptions

Every error the tool reports derives from CalibrationToolError so the
shell can catch them in one place and return the user to the menu.
"""

from typing import Optional


class CalibrationToolError(Exception):
    """Base class for all recoverable calibration tool errors."""


class InvalidNumericInputError(CalibrationToolError):
    """A number was expected but the text could not be parsed as one."""

    def __init__(self, text: str, message: Optional[str] = None):
        self.text = text
        super().__init__(message or f"Not a valid number: {text!r}")


class InsufficientPointsError(CalibrationToolError):
    """Fewer data points than a linear fit needs."""

    def __init__(self, count: int, minimum: int = 2):
        self.count = count
        self.minimum = minimum
        super().__init__(f"At least {minimum} data points required, got {count}")


class DegenerateInputError(CalibrationToolError):
    """All raw readings are identical, so no slope can be determined."""

    def __init__(self, denominator: float, tolerance: float):
        self.denominator = denominator
        self.tolerance = tolerance
        super().__init__(
            "All raw readings are identical. Cannot compute calibration."
        )


class FileOpenError(CalibrationToolError):
    """Calibration file could not be opened for reading or writing."""

    def __init__(self, path: str, mode: str = "read"):
        self.path = path
        self.mode = mode
        action = "open" if mode == "read" else "create"
        super().__init__(f"Cannot {action} file '{path}'")


class ParseError(CalibrationToolError):
    """Calibration file content is not two numbers."""


class NoCalibrationError(CalibrationToolError):
    """Conversion or save attempted before any calibration was set."""

    def __init__(self, message: str = "No calibration loaded."):
        super().__init__(message)


class NonFiniteFitError(CalibrationToolError):
    """Least-squares sums overflowed, so the coefficients are not finite."""

    def __init__(self, slope: float, offset: float):
        self.slope = slope
        self.offset = offset
        super().__init__(
            "Calibration data is out of numeric range. Cannot compute calibration."
        )
