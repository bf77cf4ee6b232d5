"""
Sensor Calibration Tool

Interactive command-line tool that fits a linear calibration
(real value = slope × raw reading + offset) to reference measurements,
converts raw sensor readings, and stores the coefficients in a text file.
"""

__version__ = "0.1.0"
__author__ = "Sensor Calibration Project"

# Core calibration API
from .calibration import (
    CalibrationRecord, DataPoint, FitStatistics,
    fit, convert, fit_statistics,
    parse, serialize, load_calibration, save_calibration
)

# Configuration and interactive shell
from .config.settings import Settings
from .shell.menu import CalibrationShell

__all__ = [
    'CalibrationRecord',
    'DataPoint',
    'FitStatistics',
    'fit',
    'convert',
    'fit_statistics',
    'parse',
    'serialize',
    'load_calibration',
    'save_calibration',
    'Settings',
    'CalibrationShell'
]
