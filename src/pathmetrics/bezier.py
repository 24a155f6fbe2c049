"""Bezier curve handling utilities for adaptive flattening and evaluation."""

from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from pathmetrics.common import (
    POINT_TYPE_CUBIC_CONTROL,
    POINT_TYPE_ON_CURVE,
    POINT_TYPE_QUADRATIC_CONTROL,
)

logger = logging.getLogger(__name__)

ControlPoints = Union[Sequence[Tuple[float, float]], NDArray[np.float64]]
_Piece = Tuple[Tuple[float, float], ...]


class BezierCurve:
    """Class to handle quadratic and cubic Bezier curve operations.

    Provides evaluation, de Casteljau splitting and adaptive flattening of
    curves into polylines bounded by a flatness tolerance and a maximum
    subdivision depth.
    """

    ###########################################################################
    # Evaluation
    ###########################################################################

    @staticmethod
    def evaluate_quadratic(points: ControlPoints, t: Union[float, NDArray[np.float64]]) -> NDArray[np.float64]:
        """
        Evaluate a quadratic Bezier curve at parameter(s) t.

        Args:
            points: Control points (start, control, end)
            t: A single parameter or an array of parameters in [0, 1]

        Returns:
            NDArray[np.float64]: shape (2,) for a scalar t, else (len(t), 2)
        """
        pts = np.asarray(points, dtype=np.float64)[:, :2]
        t_arr = np.asarray(t, dtype=np.float64)
        omt = 1.0 - t_arr
        # B(t) = (1-t)^2*P0 + 2*(1-t)*t*P1 + t^2*P2
        result = (
            np.multiply.outer(omt * omt, pts[0])
            + np.multiply.outer(2.0 * omt * t_arr, pts[1])
            + np.multiply.outer(t_arr * t_arr, pts[2])
        )
        return result

    @staticmethod
    def evaluate_cubic(points: ControlPoints, t: Union[float, NDArray[np.float64]]) -> NDArray[np.float64]:
        """
        Evaluate a cubic Bezier curve at parameter(s) t.

        Args:
            points: Control points (start, control1, control2, end)
            t: A single parameter or an array of parameters in [0, 1]

        Returns:
            NDArray[np.float64]: shape (2,) for a scalar t, else (len(t), 2)
        """
        pts = np.asarray(points, dtype=np.float64)[:, :2]
        t_arr = np.asarray(t, dtype=np.float64)
        omt = 1.0 - t_arr
        # B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3
        result = (
            np.multiply.outer(omt**3, pts[0])
            + np.multiply.outer(3.0 * omt**2 * t_arr, pts[1])
            + np.multiply.outer(3.0 * omt * t_arr**2, pts[2])
            + np.multiply.outer(t_arr**3, pts[3])
        )
        return result

    ###########################################################################
    # de Casteljau splitting
    ###########################################################################

    @staticmethod
    def _split_piece(piece: _Piece, t: float) -> Tuple[_Piece, _Piece]:
        """Split a piece of any degree at t into its left and right parts."""
        left = [piece[0]]
        right = [piece[-1]]
        level = piece
        while len(level) > 1:
            level = tuple(
                (ax + (bx - ax) * t, ay + (by - ay) * t) for (ax, ay), (bx, by) in zip(level[:-1], level[1:])
            )
            left.append(level[0])
            right.append(level[-1])
        return tuple(left), tuple(reversed(right))

    @classmethod
    def _split_curve(
        cls, points: ControlPoints, num_points: int, t: float
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        if len(points) != num_points:
            raise ValueError(f"Bezier curve needs {num_points} control points, got {len(points)}")
        piece = tuple((float(pt[0]), float(pt[1])) for pt in points)
        left, right = cls._split_piece(piece, t)
        return np.array(left, dtype=np.float64), np.array(right, dtype=np.float64)

    @classmethod
    def split_quadratic(
        cls, points: ControlPoints, t: float = 0.5
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Split a quadratic curve at t into two quadratic curves (left, right)."""
        return cls._split_curve(points, 3, t)

    @classmethod
    def split_cubic(
        cls, points: ControlPoints, t: float = 0.5
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Split a cubic curve at t into two cubic curves (left, right)."""
        return cls._split_curve(points, 4, t)

    ###########################################################################
    # Flatness
    ###########################################################################

    @staticmethod
    def _flatness(piece: _Piece) -> float:
        """Max distance of the inner control points to the chord segment of the piece."""
        ax, ay = piece[0]
        bx, by = piece[-1]
        dx = bx - ax
        dy = by - ay
        chord_sq = dx * dx + dy * dy
        deviation = 0.0
        for px, py in piece[1:-1]:
            if chord_sq == 0.0:
                # Degenerate chord: distance to the start point
                dist = math.hypot(px - ax, py - ay)
            else:
                # Projection onto the chord, clamped to its end points
                u = min(max(((px - ax) * dx + (py - ay) * dy) / chord_sq, 0.0), 1.0)
                dist = math.hypot(px - (ax + u * dx), py - (ay + u * dy))
            deviation = max(deviation, dist)
        return deviation

    @classmethod
    def flatness(cls, points: ControlPoints) -> float:
        """
        Deviation of the control polygon from the straight chord.

        Args:
            points: Control points of a quadratic (3) or cubic (4) curve

        Returns:
            float: The largest distance of an inner control point to the line
                segment between start and end point. A control point lying on
                the chord's line but beyond an end point counts with its
                distance to that end point.
        """
        piece = tuple((float(pt[0]), float(pt[1])) for pt in points)
        return cls._flatness(piece)

    ###########################################################################
    # Adaptive flattening
    ###########################################################################

    @classmethod
    def _flatten_pieces(cls, piece: _Piece, tolerance: float, max_depth: int) -> List[Tuple[float, float]]:
        """Bisect a curve until every piece is flat or max_depth is reached.

        Returns the end points of the accepted pieces in curve order.
        """
        result: List[Tuple[float, float]] = []
        depth_limited = 0
        # Explicit stack; the left half is pushed last so that it is processed first
        stack: List[Tuple[_Piece, int]] = [(piece, 0)]
        while stack:
            current, depth = stack.pop()
            if cls._flatness(current) <= tolerance:
                result.append(current[-1])
                continue
            if depth >= max_depth:
                depth_limited += 1
                result.append(current[-1])
                continue
            left, right = cls._split_piece(current, 0.5)
            stack.append((right, depth + 1))
            stack.append((left, depth + 1))

        if depth_limited:
            logger.debug(
                "Curve flattening reached max depth %d on %d piece(s) (tolerance %g)",
                max_depth,
                depth_limited,
                tolerance,
            )
        return result

    @classmethod
    def _flatten_curve(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        points: ControlPoints,
        num_points: int,
        tolerance: float,
        max_depth: int,
        skip_first: bool,
        control_type: float,
    ) -> NDArray[np.float64]:
        if len(points) != num_points:
            raise ValueError(f"Bezier curve needs {num_points} control points, got {len(points)}")

        piece = tuple((float(pt[0]), float(pt[1])) for pt in points)
        samples = cls._flatten_pieces(piece, tolerance, max_depth)

        if not skip_first:
            samples.insert(0, piece[0])

        result = np.empty((len(samples), 3), dtype=np.float64)
        result[:, :2] = samples
        result[:, 2] = control_type
        if not skip_first:
            result[0, 2] = POINT_TYPE_ON_CURVE
        # End point is always the exact stored end point
        result[-1, :2] = piece[-1]
        result[-1, 2] = POINT_TYPE_ON_CURVE
        return result

    @classmethod
    def flatten_quadratic_curve(
        cls,
        points: ControlPoints,
        tolerance: float,
        max_depth: int,
        skip_first: bool = False,
    ) -> NDArray[np.float64]:
        """
        Flatten a quadratic Bezier curve by adaptive de Casteljau bisection.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 3 points: start, control, end
            tolerance: Maximum allowed control polygon deviation from the chord
            max_depth: Maximum subdivision depth
            skip_first: If True, the start point is not part of the result

        Returns:
            NDArray[np.float64] of shape (n, 3) containing the points (x, y, type=2.0),
            the end point carrying type 0.0 and exactly matching the given end point.
        """
        return cls._flatten_curve(
            points,
            3,
            tolerance,
            max_depth,
            skip_first,
            POINT_TYPE_QUADRATIC_CONTROL,
        )

    @classmethod
    def flatten_cubic_curve(
        cls,
        points: ControlPoints,
        tolerance: float,
        max_depth: int,
        skip_first: bool = False,
    ) -> NDArray[np.float64]:
        """
        Flatten a cubic Bezier curve by adaptive de Casteljau bisection.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 4 points: start, control1, control2, end
            tolerance: Maximum allowed control polygon deviation from the chord
            max_depth: Maximum subdivision depth
            skip_first: If True, the start point is not part of the result

        Returns:
            NDArray[np.float64] of shape (n, 3) containing the points (x, y, type=3.0),
            the end point carrying type 0.0 and exactly matching the given end point.
        """
        return cls._flatten_curve(
            points,
            4,
            tolerance,
            max_depth,
            skip_first,
            POINT_TYPE_CUBIC_CONTROL,
        )
