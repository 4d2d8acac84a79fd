"""Map a day's working hours onto the calendar's color intensity levels."""

from __future__ import annotations

import enum
import math
from typing import List, Tuple

# Lower bound (inclusive) of each non-empty bucket, in hours.
BUCKET_THRESHOLDS: List[Tuple[float, int]] = [
    (10.0, 6),
    (8.0, 5),
    (6.0, 4),
    (4.0, 3),
    (2.0, 2),
]


class IntensityBucket(enum.IntEnum):
    NONE = 0
    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3
    LEVEL_4 = 4
    LEVEL_5 = 5
    LEVEL_6 = 6

    @property
    def high_contrast(self) -> bool:
        """Whether cell text must switch to the high-contrast color."""

        return self >= IntensityBucket.LEVEL_3


def classify_hours(working_hours: float) -> IntensityBucket:
    """Return the intensity bucket for ``working_hours``.

    Zero, negative and NaN values all land in :attr:`IntensityBucket.NONE`.
    """

    if math.isnan(working_hours) or working_hours <= 0:
        return IntensityBucket.NONE
    for lower, level in BUCKET_THRESHOLDS:
        if working_hours >= lower:
            return IntensityBucket(level)
    return IntensityBucket.LEVEL_1


__all__ = ["IntensityBucket", "classify_hours", "BUCKET_THRESHOLDS"]
