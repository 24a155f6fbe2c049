"""Read-only vector path made of line and Bezier curve segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from pathmetrics.common import (
    POINT_TYPE_CUBIC_CONTROL,
    POINT_TYPE_ON_CURVE,
    POINT_TYPE_QUADRATIC_CONTROL,
    PmPathCmds,
    PmPoint,
)
from pathmetrics.path_metrics import PathMetrics
from pathmetrics.path_support import FlattenSettings, PathCommandProcessor, PathSegment

###############################################################################
# PmPathUtils
###############################################################################


class PmPathUtils:
    """Collection of static utility functions for path operations."""

    @staticmethod
    def split_into_subpaths(commands: List[PmPathCmds]) -> List[Tuple[List[PmPathCmds], int]]:
        """Split commands into subpaths, returning list of (commands, point_count) tuples.

        A new subpath begins at every "M". Commands before the first "M" form
        a leading subpath of their own.
        """
        if not commands:
            return []

        subpaths: List[Tuple[List[PmPathCmds], int]] = []
        current_cmds: List[PmPathCmds] = []
        current_point_count = 0

        for cmd in commands:
            if cmd == "M" and current_cmds:
                subpaths.append((current_cmds, current_point_count))
                current_cmds = []
                current_point_count = 0
            current_cmds.append(cmd)
            current_point_count += PathCommandProcessor.get_point_consumption(cmd)

        if current_cmds:
            subpaths.append((current_cmds, current_point_count))

        return subpaths


###############################################################################
# PmPath
###############################################################################


@dataclass(eq=False)
class PmPath:
    """Vector path represented by points and corresponding commands.

    A path contains 0..n subpaths; each subpath starts with M, is followed by
    an arbitrary mix of L/Q/C, and may optionally end with Z.
    A path may also be empty (no points and no commands), representing 0 subpaths.

    The path is a read-only value: its points are exposed as a non-writeable
    view and no method modifies it.

    Attributes:
        _points: Array of 3D points (shape: n_points, 3) holding (x, y, type)
        _commands: List of path commands
    """

    _points: NDArray[np.float64]  # shape (n_points, 3)
    _commands: List[PmPathCmds]

    def __init__(
        self,
        points: Optional[
            Union[
                Sequence[Tuple[float, float]],
                Sequence[Tuple[float, float, float]],
                NDArray[np.float64],
            ]
        ] = None,
        commands: Optional[Sequence[PmPathCmds]] = None,
    ):
        """
        Initialize a PmPath from 2D or 3D points.

        Args:
            points: a sequence of (x, y) or (x, y, type).
            commands: List of drawing commands corresponding to the points.

        Raises:
            ValueError: If points and commands do not form a valid path.
        """
        if points is None:
            arr = np.empty((0, 3), dtype=np.float64)
        elif isinstance(points, np.ndarray):
            arr = points.astype(np.float64, copy=True)
        else:
            arr = np.asarray(points, dtype=np.float64)
            if arr.size == 0:
                arr = arr.reshape(0, 3)

        if arr.ndim != 2:
            raise ValueError(f"points must have 2 dimensions, got {arr.ndim}")

        commands_list: List[PmPathCmds] = [] if commands is None else list(commands)

        if arr.shape[1] == 2:
            arr = np.column_stack([arr, self._type_column(arr, commands_list)])
        elif arr.shape[1] != 3:
            raise ValueError(f"points must have shape (n, 2) or (n, 3), got {arr.shape}")

        arr.flags.writeable = False
        self._points = arr
        self._commands = commands_list
        self._validate()

    @staticmethod
    def _type_column(arr: NDArray[np.float64], commands: List[PmPathCmds]) -> NDArray[np.float64]:
        """Generate the type column for 2D points based on commands."""
        PathCommandProcessor.validate_command_sequence(commands, arr)

        type_column = np.full(arr.shape[0], POINT_TYPE_ON_CURVE, dtype=np.float64)
        point_idx = 0
        for cmd in commands:
            if cmd == "Q":  # control + end
                type_column[point_idx] = POINT_TYPE_QUADRATIC_CONTROL
            elif cmd == "C":  # control1 + control2 + end
                type_column[point_idx : point_idx + 2] = POINT_TYPE_CUBIC_CONTROL
            point_idx += PathCommandProcessor.get_point_consumption(cmd)
        return type_column

    def _validate(self) -> None:
        """Validate path structure and point/command consistency."""
        cmds = self._commands
        points = self._points

        if not cmds:
            if points.shape[0] != 0:
                raise ValueError("Empty command list must have zero points")
            return

        subpaths = PmPathUtils.split_into_subpaths(cmds)

        idx = 0
        for sub_idx, (sub_cmds, _) in enumerate(subpaths):
            if sub_cmds[0] != "M":
                raise ValueError(
                    f"Each subpath must start with 'M' command (subpath {sub_idx} starts with '{sub_cmds[0]}')"
                )

            for cmd_idx, cmd in enumerate(sub_cmds):
                if cmd == "Z" and cmd_idx < len(sub_cmds) - 1:
                    raise ValueError(
                        f"'Z' must terminate a subpath "
                        f"(found 'Z' at position {idx + cmd_idx} followed by '{sub_cmds[cmd_idx + 1]}')"
                    )

            idx += len(sub_cmds)

        total_expected = sum(point_count for _, point_count in subpaths)
        if points.shape[0] != total_expected:
            raise ValueError(
                f"Number of points ({points.shape[0]}) does not match commands (requires {total_expected} points)"
            )

    @property
    def points(self) -> NDArray[np.float64]:
        """
        The points of this path as a read-only numpy array of shape (n_points, 3).
        """
        return self._points

    @property
    def commands(self) -> List[PmPathCmds]:
        """
        A copy of the commands of this path.
        """
        return list(self._commands)

    @property
    def is_empty(self) -> bool:
        """Return True if the path has no commands."""
        return not self._commands

    def iter_segments(self) -> Iterator[PathSegment]:
        """Iterate the segments of this path in drawing order.

        Each segment carries its current point (end of the previous segment)
        so it can be processed on its own.
        """
        current: Optional[PmPoint] = None
        subpath_start: Optional[PmPoint] = None
        point_idx = 0

        for cmd in self._commands:
            consumed = PathCommandProcessor.get_point_consumption(cmd)
            if cmd == "Z":
                cmd_points: Tuple[PmPoint, ...] = (subpath_start,)
            else:
                cmd_points = tuple(
                    (float(pt[0]), float(pt[1])) for pt in self._points[point_idx : point_idx + consumed]
                )
            point_idx += consumed

            yield PathSegment(cmd, current, cmd_points)

            if cmd == "M":
                subpath_start = cmd_points[-1]
            current = cmd_points[-1]

    def length(self, settings: Optional[FlattenSettings] = None) -> float:
        """Arc length of this path, see PathMetrics.length."""
        return PathMetrics.length(self, settings)

    def point_at_percent(self, percent: float, settings: Optional[FlattenSettings] = None) -> PmPoint:
        """Point at the given fraction of the arc length, see PathMetrics.point_at_percent."""
        return PathMetrics.point_at_percent(self, percent, settings)

    def __str__(self):
        """Returns a string representation of the PmPath instance."""
        return f"PmPath(commands={''.join(self._commands)!r}, points={self._points.shape[0]})"
