"""Central module containing constants for curve flattening and length queries"""

from __future__ import annotations

# Maximum allowed distance (in path units) between a curve and its chord
FLATNESS_TOLERANCE_DEFAULT: float = 0.01

# Hard bound on de Casteljau bisection depth, i.e. at most 2**16 chords per curve
MAX_SUBDIVISION_DEPTH_DEFAULT: int = 16

# Point returned by position queries on a path without any points
EMPTY_PATH_SENTINEL = (0.0, 0.0)
