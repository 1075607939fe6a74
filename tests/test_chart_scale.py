#!/usr/bin/env python3
"""
Tests for canvas frames, value ranges and the index/value to pixel mapping.
"""

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from strategy_chart.chart.scale import ChartScale, value_range_with_margin
from strategy_chart.models import CanvasFrame, ValueRange


def test_frame_inner_rectangle():
    frame = CanvasFrame(width=340, height=250, padding=40)
    assert frame.inner_width == 260
    assert frame.inner_height == 170


@pytest.mark.parametrize('width,height,padding', [
    (80, 250, 40),
    (340, 60, 30),
    (340, 250, -1),
    (float('nan'), 250, 40),
])
def test_frame_without_drawable_area_is_rejected(width, height, padding):
    with pytest.raises(ValueError):
        CanvasFrame(width=width, height=height, padding=padding)


def test_value_range_margin():
    value_range = value_range_with_margin([10, 20, 30])
    assert math.isclose(value_range.min_value, 9.8)
    assert math.isclose(value_range.max_value, 30.6)
    assert math.isclose(value_range.span, 20.8)
    assert not value_range.is_degenerate


def test_value_range_ignores_non_finite_values():
    assert value_range_with_margin([float('nan'), 5, float('-inf')]) == value_range_with_margin([5])
    assert value_range_with_margin([]) == ValueRange(0.0, 0.0)
    assert value_range_with_margin([float('nan')]).is_degenerate


def test_scale_mappings():
    frame = CanvasFrame(340, 250, 40)
    scale = ChartScale.from_values([10, 20, 30], frame)

    assert scale.x(0) == 40
    assert math.isclose(scale.x(2), 300)
    assert math.isclose(scale.y(10), 208.365, abs_tol=0.01)
    assert math.isclose(scale.y(30), 44.904, abs_tol=0.01)
    assert scale.point(1, 20) == (scale.x(1), scale.y(20))


def test_degenerate_scale_is_centred():
    frame = CanvasFrame(340, 250, 40)
    empty = ChartScale.from_values([], frame)
    zeros = ChartScale.from_values([0.0, 0.0], frame)

    assert empty.is_degenerate
    assert zeros.is_degenerate
    assert empty.y(123.0) == 125
    assert zeros.y(0.0) == 125


def test_unclamped_scale_keeps_out_of_frame_coordinates():
    frame = CanvasFrame(340, 250, 40)
    scale = ChartScale.from_values([10, 20, 30], frame, clamp_to_canvas=False)

    assert scale.x(4) == 40 + 2 * 260
    assert scale.y(100) < 0
    assert math.isfinite(scale.x(float('nan')))


def test_infinite_index_goes_to_matching_edge():
    frame = CanvasFrame(340, 250, 40)
    scale = ChartScale.from_values([10, 20, 30], frame)

    assert scale.x(float('inf')) == 340
    assert scale.x(float('-inf')) == 0
    assert scale.x(float('nan')) == 40
