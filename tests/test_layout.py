"""Tests for the geometry engine and split detection."""

import math

import pytest

from goldenpane import (
    CanvasSize,
    ExcludedPane,
    GoldenRatioCalculator,
    GoldenRatioConfig,
    PaneData,
    TargetSize,
    compute_target,
    detect_axes,
)

CANVAS = CanvasSize(lines=50, columns=200)


def full_height(pane_id, col, width, **kwargs):
    return PaneData(id=pane_id, width=width, height=50, row=0, col=col, **kwargs)


class TestScaleFactor:
    """Width scale factor."""

    def test_auto_scale_is_one_at_reference_width(self):
        calc = GoldenRatioCalculator(GoldenRatioConfig(auto_scale=True))
        assert calc.scale_factor(100) == 1.0

    def test_auto_scale_shrinks_with_width(self):
        calc = GoldenRatioCalculator(GoldenRatioConfig(auto_scale=True))
        assert calc.scale_factor(200) == pytest.approx(0.82)

    def test_auto_scale_floor(self):
        calc = GoldenRatioCalculator(GoldenRatioConfig(auto_scale=True))
        assert calc.scale_factor(1000) == 0.4
        assert calc.scale_factor(5000) == 0.4

    def test_auto_scale_monotonic(self):
        calc = GoldenRatioCalculator(GoldenRatioConfig(auto_scale=True))
        factors = [calc.scale_factor(width) for width in range(100, 2000, 7)]
        assert all(a >= b for a, b in zip(factors, factors[1:]))
        assert min(factors) >= 0.4

    def test_adjust_factor_without_auto_scale(self):
        calc = GoldenRatioCalculator(GoldenRatioConfig(adjust_factor=0.7))
        assert calc.scale_factor(100) == 0.7
        assert calc.scale_factor(400) == 0.7


class TestCalculate:
    """Target dimensions."""

    def test_golden_ratio_of_canvas(self):
        active = full_height("1", 0, 100)
        target = compute_target(CANVAS, active, {}, GoldenRatioConfig())

        assert target == TargetSize(height=30, width=123)

    def test_max_width_caps_width(self):
        active = full_height("1", 0, 100)
        target = compute_target(CANVAS, active, {}, GoldenRatioConfig(max_width=100))

        assert target.width == 100
        assert target.height == 30

    def test_max_width_above_target_has_no_effect(self):
        active = full_height("1", 0, 100)
        target = compute_target(CANVAS, active, {}, GoldenRatioConfig(max_width=500))

        assert target.width == 123

    def test_adjust_factor_scales_width_only(self):
        active = full_height("1", 0, 100)
        target = compute_target(CANVAS, active, {}, GoldenRatioConfig(adjust_factor=0.8))

        assert target == TargetSize(height=30, width=98)

    @pytest.mark.parametrize("ratio", [1.0, 1.5, 1.618, 2.0, 3.7])
    def test_height_is_floor_of_lines_over_ratio(self, ratio):
        config = GoldenRatioConfig(ratio=ratio)
        active = PaneData(id="1", width=10, height=10)
        for lines in range(0, 120, 3):
            target = compute_target(CanvasSize(lines, 80), active, {}, config)
            assert target.height == math.floor(lines / ratio)
            assert target.height <= lines

    def test_side_excluded_pane_takes_columns(self):
        # sidebar | active
        sidebar = full_height("tree", 0, 30)
        active = full_height("1", 30, 170)
        excluded = {"tree": ExcludedPane.from_pane(sidebar)}

        target = compute_target(CANVAS, active, excluded, GoldenRatioConfig())

        assert target.width == math.floor(170 / 1.618)
        assert target.height == 30

    def test_stacked_excluded_pane_takes_lines(self):
        active = PaneData(id="1", width=200, height=40, row=0, col=0)
        quickfix = PaneData(id="qf", width=200, height=10, row=40, col=0)
        excluded = {"qf": ExcludedPane.from_pane(quickfix)}

        target = compute_target(CANVAS, active, excluded, GoldenRatioConfig())

        assert target.height == math.floor(40 / 1.618)
        assert target.width == 123

    def test_pane_overlapping_both_ranges_subtracts_both(self):
        """A pane sharing rows and columns is counted on both axes."""
        active = PaneData(id="1", width=50, height=20, row=5, col=10)
        excluded = {
            "x": ExcludedPane(width=30, height=10, row_start=0, row_end=10, col_start=0, col_end=30)
        }
        calc = GoldenRatioCalculator(GoldenRatioConfig())

        available = calc.available_space(CANVAS, active, excluded)

        assert available == CanvasSize(lines=40, columns=170)

    def test_unrelated_excluded_pane_ignored(self):
        active = PaneData(id="1", width=100, height=25, row=0, col=0)
        corner = ExcludedPane(width=100, height=25, row_start=25, row_end=50, col_start=100, col_end=200)
        calc = GoldenRatioCalculator(GoldenRatioConfig())

        assert calc.available_space(CANVAS, active, {"c": corner}) == CANVAS

    def test_never_negative(self):
        active = full_height("1", 0, 10)
        huge = ExcludedPane(width=500, height=500, row_start=0, row_end=50, col_start=0, col_end=200)

        target = compute_target(CANVAS, active, {"h": huge}, GoldenRatioConfig())

        assert target == TargetSize(height=0, width=0)


class TestDetectAxes:
    """Split detection."""

    def test_single_pane(self):
        active = full_height("1", 0, 200)
        assert detect_axes(active, [active]) == (False, False)

    def test_single_normal_pane_with_floating(self):
        active = full_height("1", 0, 200)
        popup = PaneData(id="f", width=40, height=10, row=5, col=50, floating=True)

        assert detect_axes(active, [active, popup]) == (False, False)

    def test_side_by_side(self, side_by_side):
        axes = detect_axes(side_by_side[0], side_by_side)

        assert axes.vertical is True
        assert axes.horizontal is False

    def test_stacked(self, stacked):
        axes = detect_axes(stacked[0], stacked)

        assert axes.horizontal is True
        assert axes.vertical is False

    def test_both_axes(self):
        # left | top-right
        #      | bottom-right
        left = full_height("1", 0, 100)
        top_right = PaneData(id="2", width=100, height=25, row=0, col=100)
        bottom_right = PaneData(id="3", width=100, height=25, row=25, col=100)
        panes = [left, top_right, bottom_right]

        assert detect_axes(top_right, panes) == (True, True)
        assert detect_axes(left, panes) == (False, True)

    def test_floating_panes_ignored(self, side_by_side):
        popup = PaneData(id="f", width=200, height=10, row=40, col=0, floating=True)

        axes = detect_axes(side_by_side[0], side_by_side + [popup])

        assert axes.horizontal is False
