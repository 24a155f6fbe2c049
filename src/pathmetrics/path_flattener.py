"""Path flattening utilities for converting curves to tolerance-bounded polylines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

import numpy as np
from numpy.typing import NDArray

from pathmetrics.bezier import BezierCurve
from pathmetrics.common import POINT_TYPE_ON_CURVE
from pathmetrics.path_support import DEFAULT_FLATTEN_SETTINGS, FlattenSettings, PathSegment

if TYPE_CHECKING:
    from pathmetrics.path import PmPath  # pylint: disable=unused-import


@dataclass(frozen=True, eq=False)
class FlattenedPath:
    """Polyline approximation of a whole path.

    Attributes:
        points: Array of flattened points (shape: n_points, 3) holding (x, y, type)
        pen_down: Boolean array (shape: n_points,); False where a point was
            reached by a MoveTo, i.e. no line leads to it from the previous point
    """

    points: NDArray[np.float64]
    pen_down: NDArray[np.bool_]

    def __len__(self) -> int:
        return self.points.shape[0]


class PathFlattener:
    """Utility class for flattening path segments into line segments."""

    @staticmethod
    def flatten_segment(segment: PathSegment, settings: Optional[FlattenSettings] = None) -> NDArray[np.float64]:
        """Approximate a single segment by points following its current point.

        Move, Line and Close segments yield their end point only; curves are
        flattened adaptively. The current point itself is never part of the
        result and the last row is always the segment's exact end point.

        Args:
            segment: The segment to flatten, carrying its current point
            settings: Flatness tolerance and subdivision depth, defaults if None

        Returns:
            NDArray[np.float64] of shape (n, 3) with (x, y, type) rows

        Raises:
            ValueError: If a drawing segment has no current point or the command is unknown
        """
        settings = settings if settings is not None else DEFAULT_FLATTEN_SETTINGS
        cmd = segment.command

        if cmd == "M":
            return np.array([[segment.end[0], segment.end[1], POINT_TYPE_ON_CURVE]], dtype=np.float64)

        if segment.start is None:
            raise ValueError(f"Command '{cmd}' has no starting point")

        # Raises for unknown commands
        if not segment.is_curve:
            return np.array([[segment.end[0], segment.end[1], POINT_TYPE_ON_CURVE]], dtype=np.float64)

        if cmd == "Q":
            return BezierCurve.flatten_quadratic_curve(
                segment.control_points, settings.tolerance, settings.max_depth, skip_first=True
            )

        return BezierCurve.flatten_cubic_curve(
            segment.control_points, settings.tolerance, settings.max_depth, skip_first=True
        )

    @staticmethod
    def flatten_path(path: PmPath, settings: Optional[FlattenSettings] = None) -> FlattenedPath:
        """Flatten all segments of a path in drawing order.

        Args:
            path: The path to flatten; it is only read
            settings: Flatness tolerance and subdivision depth, defaults if None

        Returns:
            FlattenedPath: concatenated points of all subpaths plus pen-down mask
        """
        chunks: List[NDArray[np.float64]] = []
        pen_chunks: List[NDArray[np.bool_]] = []

        for segment in path.iter_segments():
            chunk = PathFlattener.flatten_segment(segment, settings)
            chunks.append(chunk)
            pen_chunks.append(np.full(chunk.shape[0], segment.is_drawing, dtype=np.bool_))

        if not chunks:
            return FlattenedPath(np.empty((0, 3), dtype=np.float64), np.empty(0, dtype=np.bool_))

        return FlattenedPath(np.concatenate(chunks), np.concatenate(pen_chunks))
