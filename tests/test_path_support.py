"""Tests for command metadata and flattening settings."""

from __future__ import annotations

import math

import numpy as np
import pytest

from pathmetrics.consts import FLATNESS_TOLERANCE_DEFAULT, MAX_SUBDIVISION_DEPTH_DEFAULT
from pathmetrics.path_support import (
    DEFAULT_FLATTEN_SETTINGS,
    FlattenSettings,
    PathCommandProcessor,
    PathSegment,
)


class TestPathCommandProcessor:
    """Test command metadata lookups."""

    @pytest.mark.parametrize(
        "cmd, consumed, is_curve, is_drawing",
        [
            ("M", 1, False, False),
            ("L", 1, False, True),
            ("Q", 2, True, True),
            ("C", 3, True, True),
            ("Z", 0, False, True),
        ],
    )
    def test_command_info(self, cmd, consumed, is_curve, is_drawing):
        """Each command reports its point consumption and kind."""
        assert PathCommandProcessor.get_point_consumption(cmd) == consumed
        assert PathCommandProcessor.is_curve_command(cmd) is is_curve
        assert PathCommandProcessor.is_drawing_command(cmd) is is_drawing

    def test_unknown_command(self):
        """Unknown commands raise ValueError."""
        with pytest.raises(ValueError, match="Unknown command 'A'"):
            PathCommandProcessor.get_point_consumption("A")

    def test_validate_command_sequence(self):
        """Sequences needing more points than available are rejected."""
        points = np.zeros((3, 2))
        PathCommandProcessor.validate_command_sequence(["M", "Q", "Z"], points)
        with pytest.raises(ValueError, match="Not enough points for C command at index 1"):
            PathCommandProcessor.validate_command_sequence(["M", "C"], points)


class TestPathSegment:
    """Test the segment value type."""

    def test_move_without_start(self):
        """The first MoveTo has no current point."""
        segment = PathSegment("M", None, ((1.0, 2.0),))
        assert segment.control_points == ((1.0, 2.0),)
        assert segment.end == (1.0, 2.0)

    def test_segment_is_immutable(self):
        """Segments are frozen values."""
        segment = PathSegment("L", (0.0, 0.0), ((1.0, 2.0),))
        with pytest.raises(AttributeError):
            segment.command = "M"


class TestFlattenSettings:
    """Test flattening settings defaults, validation and serialization."""

    def test_defaults(self):
        """Defaults come from the constants module."""
        assert DEFAULT_FLATTEN_SETTINGS.tolerance == FLATNESS_TOLERANCE_DEFAULT
        assert DEFAULT_FLATTEN_SETTINGS.max_depth == MAX_SUBDIVISION_DEPTH_DEFAULT

    @pytest.mark.parametrize("tolerance", [0.0, -1.0, math.inf, math.nan])
    def test_invalid_tolerance(self, tolerance):
        """Tolerance must be positive and finite."""
        with pytest.raises(ValueError, match="tolerance must be a positive finite number"):
            FlattenSettings(tolerance=tolerance)

    def test_invalid_max_depth(self):
        """At least one subdivision level is required."""
        with pytest.raises(ValueError, match="max_depth must be at least 1, got 0"):
            FlattenSettings(max_depth=0)

    def test_dict_round_trip(self):
        """Settings survive to_dict/from_dict."""
        settings = FlattenSettings(tolerance=0.5, max_depth=4)
        assert settings.to_dict() == {"tolerance": 0.5, "max_depth": 4}
        assert FlattenSettings.from_dict(settings.to_dict()) == settings

    def test_from_dict_defaults(self):
        """Missing keys fall back to the defaults."""
        assert FlattenSettings.from_dict({}) == DEFAULT_FLATTEN_SETTINGS
