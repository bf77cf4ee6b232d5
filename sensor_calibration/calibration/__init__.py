"""
Calibration package: least-squares fitting, conversion and file storage.
"""

from .engine import (
    CalibrationRecord, DataPoint, FitStatistics,
    fit, convert, fit_statistics, DEGENERACY_TOLERANCE
)
from .storage import parse, serialize, load_calibration, save_calibration
from .errors import (
    CalibrationToolError, InvalidNumericInputError, InsufficientPointsError,
    DegenerateInputError, FileOpenError, ParseError, NoCalibrationError,
    NonFiniteFitError
)

__all__ = [
    'CalibrationRecord',
    'DataPoint',
    'FitStatistics',
    'fit',
    'convert',
    'fit_statistics',
    'DEGENERACY_TOLERANCE',
    'parse',
    'serialize',
    'load_calibration',
    'save_calibration',
    'CalibrationToolError',
    'InvalidNumericInputError',
    'InsufficientPointsError',
    'DegenerateInputError',
    'FileOpenError',
    'ParseError',
    'NoCalibrationError',
    'NonFiniteFitError'
]
