"""
Linear Calibration Engine

Fits the linear model ``real value = slope * raw + offset`` to reference
measurements using least squares, and applies a fitted calibration to
raw sensor readings.

The engine keeps no state between calls: the caller owns the current
CalibrationRecord and decides whether a new fit replaces it.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence, Tuple, Union

import numpy as np

from .errors import (
    DegenerateInputError, InsufficientPointsError, NoCalibrationError, NonFiniteFitError
)

# Absolute threshold on the normal-equation denominator
DEGENERACY_TOLERANCE = 1e-10
MIN_POINTS = 2

logger = logging.getLogger(__name__)


class DataPoint(NamedTuple):
    """One calibration measurement: raw sensor reading and known real value."""
    raw: float
    reference: float


PointLike = Union[DataPoint, Tuple[float, float]]


@dataclass(frozen=True)
class CalibrationRecord:
    """Slope and offset of a linear calibration."""
    slope: float = 0.0
    offset: float = 0.0
    valid: bool = False

    @classmethod
    def unset(cls) -> 'CalibrationRecord':
        """Create the initial, not yet calibrated record."""
        return cls()

    @classmethod
    def from_coefficients(cls, slope: float, offset: float) -> 'CalibrationRecord':
        """Create a valid record from a slope and offset."""
        return cls(slope=float(slope), offset=float(offset), valid=True)

    def formula(self, precision: int = 4) -> str:
        """Human readable form of the calibration."""
        return (f"Real Value = {self.slope:.{precision}f} × Raw Reading + "
                f"{self.offset:.{precision}f}")

    def __str__(self) -> str:
        if not self.valid:
            return "CalibrationRecord(unset)"
        return f"CalibrationRecord(slope={self.slope:.6f}, offset={self.offset:.6f})"


@dataclass(frozen=True)
class FitStatistics:
    """Goodness of fit of a calibration against the points it was fitted to."""
    point_count: int
    r_squared: float
    rmse: float
    max_abs_residual: float

    @property
    def quality_grade(self) -> str:
        """Coarse grade based on the coefficient of determination."""
        if math.isnan(self.r_squared):
            return "Undefined"
        if self.r_squared >= 0.99:
            return "Excellent"
        elif self.r_squared >= 0.95:
            return "Good"
        elif self.r_squared >= 0.90:
            return "Fair"
        else:
            return "Poor"


def fit(points: Iterable[PointLike],
        tolerance: float = DEGENERACY_TOLERANCE) -> CalibrationRecord:
    """
    Fit slope and offset to data points by ordinary least squares.

    Args:
        points: Sequence of (raw reading, reference value) pairs
        tolerance: Absolute limit below which the denominator is treated
            as zero

    Returns:
        CalibrationRecord: New valid calibration

    Raises:
        InsufficientPointsError: Fewer than two points were given
        DegenerateInputError: Raw readings have no spread
        NonFiniteFitError: Sums overflowed or inputs were not finite
    """
    n = 0
    sum_x = 0.0
    sum_y = 0.0
    sum_xy = 0.0
    sum_x2 = 0.0

    for raw, reference in points:
        x = float(raw)
        y = float(reference)
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x
        n += 1

    if n < MIN_POINTS:
        raise InsufficientPointsError(n, MIN_POINTS)

    numerator = n * sum_xy - sum_x * sum_y
    denominator = n * sum_x2 - sum_x * sum_x

    if abs(denominator) < tolerance:
        logger.warning(f"Degenerate calibration data: denominator {denominator:g} "
                       f"below tolerance {tolerance:g} ({n} points)")
        raise DegenerateInputError(denominator, tolerance)

    slope = numerator / denominator
    offset = (sum_y - slope * sum_x) / n

    # Overflowed sums may still leave a finite slope
    if not all(math.isfinite(v) for v in (numerator, denominator, slope, offset)):
        logger.warning(f"Calibration sums overflowed over {n} points: "
                       f"slope={slope}, offset={offset}")
        raise NonFiniteFitError(slope, offset)

    logger.debug(f"Least squares fit over {n} points: slope={slope}, offset={offset}")
    return CalibrationRecord.from_coefficients(slope, offset)


def convert(record: CalibrationRecord, raw: float) -> float:
    """
    Convert a raw reading to a real value.

    Raises:
        NoCalibrationError: The record has not been set by a fit or load
    """
    if not record.valid:
        raise NoCalibrationError()
    return record.slope * raw + record.offset


def fit_statistics(record: CalibrationRecord,
                   points: Sequence[PointLike]) -> FitStatistics:
    """
    Evaluate how well a calibration reproduces the reference values.

    R² is NaN when all reference values are equal, since the total
    variance is then zero.
    """
    if not record.valid:
        raise NoCalibrationError()
    if len(points) == 0:
        raise InsufficientPointsError(0, 1)

    data = np.asarray(points, dtype=float)
    raw = data[:, 0]
    reference = data[:, 1]

    predicted = record.slope * raw + record.offset
    residuals = reference - predicted

    ss_res = float((residuals ** 2).sum())
    ss_tot = float(((reference - reference.mean()) ** 2).sum())
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else float("nan")

    return FitStatistics(
        point_count=len(points),
        r_squared=r_squared,
        rmse=math.sqrt(float((residuals ** 2).mean())),
        max_abs_residual=float(np.abs(residuals).max())
    )
