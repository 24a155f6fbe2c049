"""Central module containing types and definitions shared by path metrics."""

from __future__ import annotations

from typing import Literal, Tuple

###############################################################################
# Types
###############################################################################


PmPathCmds = Literal[  # Type-Definition for path commands used in PmPath
    # MoveTo (1) - start a new subpath and move the current point to (x,y)
    "M",
    # LineTo (1) - draw a straight line from the current point to (x,y)
    "L",
    # Cubic Bezier To (3) - draw a cubic Bezier curve with two control points and an endpoint (x,y)
    "C",
    # Quadratic Bezier To (2) - draw a quadratic Bezier curve with one control point and an endpoint (x,y)
    "Q",
    # ClosePath (0) - close subpath by drawing a line from the current point to start point
    "Z",
]

PmPoint = Tuple[float, float]


###############################################################################
# Point type markers (third column of path point arrays)
###############################################################################

POINT_TYPE_ON_CURVE: float = 0.0
POINT_TYPE_QUADRATIC_CONTROL: float = 2.0
POINT_TYPE_CUBIC_CONTROL: float = 3.0
