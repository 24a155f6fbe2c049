"""Arc length and point-at-length queries for vector paths.

The queries flatten the path into a polyline, accumulate a cumulative length
table over it and interpolate inside that table. All functions are pure:
they only read the given path and keep no state between calls.

Conventions for degenerate input:
    * An empty path has length 0.0 and every position query returns the
      sentinel point EMPTY_PATH_SENTINEL, i.e. the origin (0.0, 0.0).
    * A non-empty path of zero length maps every position to its first point.
    * Percent values are clamped to [0, 1] and distances to [0, length];
      NaN is treated as 0.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

import numpy as np
from numpy.typing import NDArray

from pathmetrics.common import PmPoint
from pathmetrics.consts import EMPTY_PATH_SENTINEL
from pathmetrics.path_flattener import FlattenedPath, PathFlattener
from pathmetrics.path_support import FlattenSettings

if TYPE_CHECKING:
    from pathmetrics.path import PmPath  # pylint: disable=unused-import

logger = logging.getLogger(__name__)


###############################################################################
# LengthTable
###############################################################################


@dataclass(frozen=True)
class FlattenedPoint:
    """A sample point of a flattened path and its distance from the path start."""

    x: float
    y: float
    length: float

    @property
    def point(self) -> PmPoint:
        """The sample point as (x, y)."""
        return self.x, self.y


@dataclass(frozen=True, eq=False)
class LengthTable:
    """Cumulative length table of a flattened path.

    Attributes:
        points: Array of sample points (shape: n_points, 2)
        lengths: Array of cumulative lengths (shape: n_points,), starting at 0.0
            and monotonically non-decreasing
    """

    points: NDArray[np.float64]
    lengths: NDArray[np.float64]

    @property
    def total_length(self) -> float:
        """float: Total length of the path, 0.0 for an empty table."""
        if self.lengths.shape[0] == 0:
            return 0.0
        return float(self.lengths[-1])

    @property
    def is_empty(self) -> bool:
        """Return True if the table holds no points."""
        return self.points.shape[0] == 0

    def __len__(self) -> int:
        return self.points.shape[0]

    def __getitem__(self, index: int) -> FlattenedPoint:
        x, y = self.points[index]
        return FlattenedPoint(float(x), float(y), float(self.lengths[index]))

    def __iter__(self) -> Iterator[FlattenedPoint]:
        for index in range(len(self)):
            yield self[index]


###############################################################################
# LengthAccumulator
###############################################################################


class LengthAccumulator:
    """Reduces flattened points into a cumulative length table."""

    @staticmethod
    def accumulate(flattened: FlattenedPath) -> LengthTable:
        """
        Build the cumulative length table of a flattened path.

        Consecutive points add their Euclidean distance. A point reached by a
        MoveTo adds nothing, so gaps between subpaths do not count.

        Args:
            flattened: Flattened points and their pen-down mask

        Returns:
            LengthTable: points (n, 2) and cumulative lengths (n,)
        """
        points = np.ascontiguousarray(flattened.points[:, :2], dtype=np.float64)
        if points.shape[0] == 0:
            return LengthTable(points, np.empty(0, dtype=np.float64))

        deltas = np.diff(points, axis=0)
        steps = np.hypot(deltas[:, 0], deltas[:, 1])
        steps[~flattened.pen_down[1:]] = 0.0

        lengths = np.empty(points.shape[0], dtype=np.float64)
        lengths[0] = 0.0
        np.cumsum(steps, out=lengths[1:])
        return LengthTable(points, lengths)


###############################################################################
# PercentLocator
###############################################################################


class PercentLocator:
    """Locates points inside a length table by fraction or distance."""

    @staticmethod
    def _as_point(row: NDArray[np.float64]) -> PmPoint:
        return float(row[0]), float(row[1])

    @classmethod
    def locate_length(cls, table: LengthTable, distance: float) -> PmPoint:
        """
        Return the point at the given distance from the start of the path.

        Args:
            table: Cumulative length table of the path
            distance: Distance along the path, clamped to [0, total length]

        Returns:
            Tuple[float, float]: The interpolated point, or EMPTY_PATH_SENTINEL
                for an empty table
        """
        if table.is_empty:
            logger.debug("Position query on empty path, returning %s", EMPTY_PATH_SENTINEL)
            return EMPTY_PATH_SENTINEL

        points = table.points
        lengths = table.lengths
        total = table.total_length

        if math.isnan(distance) or distance <= 0.0 or total <= 0.0:
            return cls._as_point(points[0])
        if distance >= total:
            return cls._as_point(points[-1])

        # lengths[idx - 1] < distance <= lengths[idx]
        idx = int(np.searchsorted(lengths, distance, side="left"))
        start_length = lengths[idx - 1]
        span = lengths[idx] - start_length
        if span <= 0.0:
            return cls._as_point(points[idx - 1])

        fraction = (distance - start_length) / span
        point = points[idx - 1] + (points[idx] - points[idx - 1]) * fraction
        return cls._as_point(point)

    @classmethod
    def locate_percent(cls, table: LengthTable, percent: float) -> PmPoint:
        """
        Return the point at the given fraction of the total path length.

        Args:
            table: Cumulative length table of the path
            percent: Fraction of the total length, clamped to [0, 1]

        Returns:
            Tuple[float, float]: The interpolated point; exactly the first point
                for percent <= 0 and exactly the last point for percent >= 1
        """
        if table.is_empty:
            return cls.locate_length(table, 0.0)

        if math.isnan(percent) or percent <= 0.0:
            return cls._as_point(table.points[0])
        if percent >= 1.0:
            return cls._as_point(table.points[-1])

        return cls.locate_length(table, percent * table.total_length)


###############################################################################
# PathMetrics
###############################################################################


class PathMetrics:
    """Length related queries on a PmPath.

    All methods are static and stateless; callers may cache the result of
    length_table() themselves and use PercentLocator on it directly.
    """

    @staticmethod
    def length_table(path: PmPath, settings: Optional[FlattenSettings] = None) -> LengthTable:
        """Return the cumulative length table of the flattened path."""
        flattened = PathFlattener.flatten_path(path, settings)
        return LengthAccumulator.accumulate(flattened)

    @staticmethod
    def length(path: PmPath, settings: Optional[FlattenSettings] = None) -> float:
        """
        Return the arc length of the path.

        Curves are approximated within the flatness tolerance of settings.
        Gaps between subpaths do not count, closing segments do.

        Args:
            path: The path to measure
            settings: Flatness tolerance and subdivision depth, defaults if None

        Returns:
            float: Non-negative length, 0.0 for an empty path
        """
        return PathMetrics.length_table(path, settings).total_length

    @staticmethod
    def point_at_percent(path: PmPath, percent: float, settings: Optional[FlattenSettings] = None) -> PmPoint:
        """
        Return the point at the given fraction of the path's length.

        Args:
            path: The path to query
            percent: Fraction in [0, 1]; values outside are clamped
            settings: Flatness tolerance and subdivision depth, defaults if None

        Returns:
            Tuple[float, float]: The point, (0.0, 0.0) for an empty path
        """
        return PercentLocator.locate_percent(PathMetrics.length_table(path, settings), percent)

    @staticmethod
    def point_at_length(path: PmPath, distance: float, settings: Optional[FlattenSettings] = None) -> PmPoint:
        """Return the point at the given distance from the path start, see point_at_percent."""
        return PercentLocator.locate_length(PathMetrics.length_table(path, settings), distance)
