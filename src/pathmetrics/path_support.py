"""Supporting utilities and settings for PmPath and the length queries.

This module contains command metadata, the segment value type handed to the
flattener, and the flattening settings used by all metric operations.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from numpy.typing import NDArray

from pathmetrics.common import PmPathCmds, PmPoint
from pathmetrics.consts import FLATNESS_TOLERANCE_DEFAULT, MAX_SUBDIVISION_DEPTH_DEFAULT

###############################################################################
# PathCommandInfo
###############################################################################


@dataclass(frozen=True)
class PathCommandInfo:
    """Metadata for path commands.

    Attributes:
        consumes_points: Number of points this command consumes
        is_curve: Whether this command represents a curve
        is_drawing: Whether this command draws (vs. move)
    """

    consumes_points: int
    is_curve: bool
    is_drawing: bool = True


# Command registry with metadata
COMMAND_INFO = {
    "M": PathCommandInfo(1, False, False),  # MoveTo - not drawing
    "L": PathCommandInfo(1, False, True),  # LineTo - drawing
    "Q": PathCommandInfo(2, True, True),  # Quadratic - curve, drawing
    "C": PathCommandInfo(3, True, True),  # Cubic - curve, drawing
    "Z": PathCommandInfo(0, False, True),  # ClosePath - drawing, no points
}


###############################################################################
# PathCommandProcessor
###############################################################################


class PathCommandProcessor:
    """Handles command/point processing operations."""

    @staticmethod
    def _info(cmd: str) -> PathCommandInfo:
        try:
            return COMMAND_INFO[cmd]
        except KeyError as exc:
            raise ValueError(f"Unknown command '{cmd}'") from exc

    @staticmethod
    def get_point_consumption(cmd: str) -> int:
        """Return number of points consumed by command."""
        return PathCommandProcessor._info(cmd).consumes_points

    @staticmethod
    def is_curve_command(cmd: str) -> bool:
        """Return True if command represents a curve."""
        return PathCommandProcessor._info(cmd).is_curve

    @staticmethod
    def is_drawing_command(cmd: str) -> bool:
        """Return True if command draws (vs. move)."""
        return PathCommandProcessor._info(cmd).is_drawing

    @staticmethod
    def validate_command_sequence(commands: List[PmPathCmds], points: NDArray) -> None:
        """Validate that commands match available points."""
        point_idx = 0
        for cmd in commands:
            consumed = PathCommandProcessor.get_point_consumption(cmd)
            if point_idx + consumed > len(points):
                raise ValueError(f"Not enough points for {cmd} command at index {point_idx}")
            point_idx += consumed


###############################################################################
# PathSegment
###############################################################################


@dataclass(frozen=True)
class PathSegment:
    """A single drawing segment of a path, read from the owning PmPath.

    Attributes:
        command: The segment's command (M, L, Q, C or Z)
        start: The current point when the segment begins; None for the first MoveTo
        points: Control and end points consumed by the command. For Z this holds
            the start point of the subpath, which is where the segment ends.
    """

    command: PmPathCmds
    start: Optional[PmPoint]
    points: Tuple[PmPoint, ...]

    @property
    def end(self) -> PmPoint:
        """The end point of the segment."""
        return self.points[-1]

    @property
    def is_curve(self) -> bool:
        """Return True if the segment is a quadratic or cubic curve."""
        return PathCommandProcessor.is_curve_command(self.command)

    @property
    def is_drawing(self) -> bool:
        """Return True if the segment draws (vs. move)."""
        return PathCommandProcessor.is_drawing_command(self.command)

    @property
    def control_points(self) -> Tuple[PmPoint, ...]:
        """Full control polygon including the start point (start, ..., end)."""
        if self.start is None:
            return self.points
        return (self.start,) + self.points


###############################################################################
# FlattenSettings
###############################################################################


@dataclass(frozen=True)
class FlattenSettings:
    """Settings controlling how curves are flattened for length queries.

    Attributes:
        tolerance: Maximum distance of a curve's control polygon from its chord
            before the curve is subdivided further.
        max_depth: Maximum number of bisection levels per curve segment.
    """

    tolerance: float = FLATNESS_TOLERANCE_DEFAULT
    max_depth: int = MAX_SUBDIVISION_DEPTH_DEFAULT

    def __post_init__(self) -> None:
        if not math.isfinite(self.tolerance) or self.tolerance <= 0.0:
            raise ValueError(f"tolerance must be a positive finite number, got {self.tolerance}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

    def to_dict(self) -> dict:
        """Convert settings to a dictionary for serialization."""
        return {
            "tolerance": self.tolerance,
            "max_depth": self.max_depth,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FlattenSettings:
        """Create FlattenSettings from a dictionary."""
        return cls(
            tolerance=float(data.get("tolerance", FLATNESS_TOLERANCE_DEFAULT)),
            max_depth=int(data.get("max_depth", MAX_SUBDIVISION_DEPTH_DEFAULT)),
        )


DEFAULT_FLATTEN_SETTINGS = FlattenSettings()
