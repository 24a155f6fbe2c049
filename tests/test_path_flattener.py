"""Tests for PathFlattener segment and whole-path flattening."""

from __future__ import annotations

import numpy as np
import pytest

from pathmetrics.path import PmPath
from pathmetrics.path_flattener import PathFlattener
from pathmetrics.path_support import FlattenSettings, PathSegment


class TestFlattenSegment:
    """Test flattening of single segments."""

    def test_move_and_line_yield_end_point(self):
        """Move and Line segments pass through as their end point."""
        move = PathFlattener.flatten_segment(PathSegment("M", None, ((1.0, 2.0),)))
        line = PathFlattener.flatten_segment(PathSegment("L", (1.0, 2.0), ((3.0, 4.0),)))
        np.testing.assert_array_equal(move, [[1.0, 2.0, 0.0]])
        np.testing.assert_array_equal(line, [[3.0, 4.0, 0.0]])

    def test_close_yields_subpath_start(self):
        """Close segments yield the point they return to."""
        close = PathFlattener.flatten_segment(PathSegment("Z", (5.0, 5.0), ((0.0, 0.0),)))
        np.testing.assert_array_equal(close, [[0.0, 0.0, 0.0]])

    def test_curve_excludes_current_point(self):
        """Curve output starts after the current point and ends exactly at the end point."""
        segment = PathSegment("C", (0.0, 0.0), ((0.0, 10.0), (10.0, 10.0), (10.0, 0.0)))
        result = PathFlattener.flatten_segment(segment, FlattenSettings(tolerance=0.1))
        assert result.shape[0] > 1
        assert not np.array_equal(result[0, :2], [0.0, 0.0])
        np.testing.assert_array_equal(result[-1], [10.0, 0.0, 0.0])

    def test_quadratic_segment(self):
        """Quadratic segments are flattened with quadratic type markers."""
        segment = PathSegment("Q", (0.0, 0.0), ((5.0, 10.0), (10.0, 0.0)))
        result = PathFlattener.flatten_segment(segment, FlattenSettings(tolerance=0.1))
        assert np.all(result[:-1, 2] == 2.0)
        np.testing.assert_array_equal(result[-1], [10.0, 0.0, 0.0])

    def test_drawing_segment_needs_current_point(self):
        """Drawing segments without a current point are rejected."""
        with pytest.raises(ValueError, match="Command 'L' has no starting point"):
            PathFlattener.flatten_segment(PathSegment("L", None, ((1.0, 1.0),)))
        with pytest.raises(ValueError, match="Command 'Q' has no starting point"):
            PathFlattener.flatten_segment(PathSegment("Q", None, ((1.0, 1.0), (2.0, 2.0))))

    def test_unknown_command(self):
        """Unknown commands are rejected."""
        with pytest.raises(ValueError, match="Unknown command 'A'"):
            PathFlattener.flatten_segment(PathSegment("A", (0.0, 0.0), ((1.0, 1.0),)))


class TestFlattenPath:
    """Test flattening whole paths."""

    def test_empty_path(self):
        """An empty path flattens to nothing."""
        flattened = PathFlattener.flatten_path(PmPath())
        assert len(flattened) == 0
        assert flattened.points.shape == (0, 3)
        assert flattened.pen_down.shape == (0,)

    def test_polyline_passes_through(self):
        """A path of lines keeps its points; only MoveTo rows are pen-up."""
        path = PmPath([(0, 0), (10, 0), (10, 10), (20, 20), (30, 20)], ["M", "L", "L", "M", "L"])
        flattened = PathFlattener.flatten_path(path)
        np.testing.assert_array_equal(flattened.points[:, :2], path.points[:, :2])
        np.testing.assert_array_equal(flattened.pen_down, [False, True, True, False, True])

    def test_close_appends_start_point(self):
        """Z adds the subpath start as a drawn point."""
        path = PmPath([(0, 0), (10, 0), (10, 10)], ["M", "L", "L", "Z"])
        flattened = PathFlattener.flatten_path(path)
        np.testing.assert_array_equal(flattened.points[-1, :2], [0.0, 0.0])
        assert flattened.pen_down[-1]

    def test_curve_path_keeps_exact_end_points(self):
        """Every on-curve end point of the path appears unchanged in the result."""
        path = PmPath(
            [(0.1, 0.1), (3.0, 9.0), (6.2, 0.3), (7.0, 1.0), (9.0, -4.0), (11.1, 2.2)],
            ["M", "Q", "C"],
        )
        flattened = PathFlattener.flatten_path(path, FlattenSettings(tolerance=0.01))
        rows = [tuple(row) for row in flattened.points[:, :2]]
        assert rows[0] == (0.1, 0.1)
        assert (6.2, 0.3) in rows
        assert rows[-1] == (11.1, 2.2)

    def test_does_not_modify_path(self):
        """Flattening only reads the path."""
        points = np.array([[0.0, 0.0, 0.0], [5.0, 5.0, 2.0], [10.0, 0.0, 0.0]])
        path = PmPath(points, ["M", "Q"])
        before = path.points.copy()
        PathFlattener.flatten_path(path)
        np.testing.assert_array_equal(path.points, before)
