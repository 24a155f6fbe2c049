"""Test module to run examples from the examples.pathmetrics package

The tests are run using pytest.
"""

import os

import pytest  # pylint: disable=unused-import

from examples.pathmetrics import svg_point_at_percent


def test_examples_svg_point_at_percent(tmp_path):
    """Test function for svg_point_at_percent example"""
    output_file = os.path.join(str(tmp_path), "svg", "point_at_percent.svg")
    result = svg_point_at_percent.main(output_file)

    assert result == output_file
    assert os.path.isfile(output_file)
    with open(output_file, encoding="utf-8") as svg_file:
        content = svg_file.read()
    assert content.count("<circle") == svg_point_at_percent.NUM_MARKERS
