#!/usr/bin/env python3
"""
Tests for the vertical run-merging pixel shape.
"""

import unittest
import sys
from pathlib import Path

import numpy as np
import pytest

# Add qrpixels to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent))

from qrpixels.geometry import GeometryParameters, RoundedRect
from qrpixels.grid import ModuleGrid
from qrpixels.shapes import VerticalPixelShape
from tests.test_grid import MockGridBuilder


def count_runs(column):
    """Number of maximal runs of True values"""
    runs = 0
    previous = False
    for value in column:
        if value and not previous:
            runs += 1
        previous = bool(value)
    return runs


def eye_boxes_in_canvas(grid, dm, xoff=0.0, yoff=0.0):
    return [
        (xoff + c0 * dm, yoff + r0 * dm, (c1 - c0) * dm, (r1 - r0) * dm)
        for r0, r1, c0, c1 in grid.eye_regions()
    ]


class TestVerticalPixelShape(unittest.TestCase):

    def setUp(self):
        self.shape = VerticalPixelShape()
        self.random_grid = MockGridBuilder.create_grid(25, 'random', seed=7)

    def test_single_run_scenario(self):
        grid = MockGridBuilder.single_run_grid()
        primitives = self.shape.on_path((100, 100), grid, is_template=True)

        self.assertEqual(len(primitives), 1)
        rect = primitives[0]
        self.assertAlmostEqual(rect.x, 40)
        self.assertAlmostEqual(rect.y, 20)
        self.assertAlmostEqual(rect.width, 20)
        self.assertAlmostEqual(rect.height, 60)
        self.assertEqual(rect.corner_radius, 0)

    def test_small_grid_is_entirely_eye_region(self):
        grid = MockGridBuilder.single_run_grid()
        self.assertEqual(self.shape.on_path((100, 100), grid), [])

    def test_primitive_count_matches_runs_per_column(self):
        n = self.random_grid.size
        dm = 10.0
        primitives = self.shape.on_path((n * dm, n * dm), self.random_grid)
        masked = self.random_grid.masked_view(invert=False).to_array()

        per_column = {}
        for rect in primitives:
            col = int(round(rect.x / dm))
            per_column[col] = per_column.get(col, 0) + 1

        for col in range(1, n - 1):
            expected = count_runs(masked[1:n - 1, col])
            self.assertEqual(per_column.get(col, 0), expected, f"column {col}")

        self.assertNotIn(0, per_column)
        self.assertNotIn(n - 1, per_column)

    def test_template_off_pass_counts_light_runs(self):
        n = self.random_grid.size
        primitives = self.shape.off_path((n, n), self.random_grid, is_template=True)
        data = self.random_grid.to_array()

        expected = sum(count_runs(~data[1:n - 1, col]) for col in range(1, n - 1))
        self.assertEqual(len(primitives), expected)

    def test_unmodified_runs_without_inset_or_rounding(self):
        dm = 10.0
        n = self.random_grid.size
        primitives = self.shape.on_path((n * dm, n * dm), self.random_grid, is_template=True)
        data = self.random_grid.to_array()

        self.assertTrue(primitives)
        for rect in primitives:
            self.assertEqual(rect.corner_radius, 0)
            self.assertAlmostEqual(rect.width, dm)
            col = int(round(rect.x / dm))
            row0 = int(round(rect.y / dm))
            length = int(round(rect.height / dm))
            self.assertAlmostEqual(rect.height, length * dm)

            # Every covered module is on, and the run is maximal
            self.assertTrue(np.all(data[row0:row0 + length, col]))
            self.assertTrue(row0 == 1 or not data[row0 - 1, col])
            end = row0 + length
            self.assertTrue(end == n - 1 or not data[end, col])

    def test_full_rounding_on_single_modules(self):
        grid = MockGridBuilder.create_grid(11, 'checkerboard')
        shape = VerticalPixelShape(GeometryParameters(corner_radius_fraction=1.0))
        primitives = shape.on_path((110, 110), grid, is_template=True)

        self.assertTrue(primitives)
        for rect in primitives:
            self.assertAlmostEqual(rect.height, 10)
            self.assertAlmostEqual(rect.corner_radius, rect.width / 2)

    def test_inset_and_rounding(self):
        grid = MockGridBuilder.single_run_grid()
        shape = VerticalPixelShape(GeometryParameters(inset=2, corner_radius_fraction=0.5))
        rect, = shape.on_path((100, 100), grid, is_template=True)

        self.assertEqual(rect.bounds, (42.0, 22.0, 16.0, 56.0))
        self.assertAlmostEqual(rect.corner_radius, 4.0)

    def test_inset_larger_than_module_gives_zero_radius(self):
        grid = MockGridBuilder.single_run_grid()
        shape = VerticalPixelShape(GeometryParameters(inset=15, corner_radius_fraction=1.0))
        rect, = shape.on_path((100, 100), grid, is_template=True)

        self.assertEqual(rect.width, 0)
        self.assertGreaterEqual(rect.height, 0)
        self.assertEqual(rect.corner_radius, 0)

    def test_out_of_range_fraction_from_settings_is_bounded(self):
        grid = MockGridBuilder.single_run_grid()
        shape = VerticalPixelShape()
        self.assertTrue(shape.set_setting_value(3.0, "cornerRadiusFraction"))
        rect, = shape.on_path((100, 100), grid, is_template=True)
        self.assertAlmostEqual(rect.corner_radius, 10.0)

        self.assertTrue(shape.set_setting_value(-1.0, "cornerRadiusFraction"))
        rect, = shape.on_path((100, 100), grid, is_template=True)
        self.assertEqual(rect.corner_radius, 0)

    def test_no_primitive_touches_eye_regions(self):
        for seed in range(5):
            grid = MockGridBuilder.create_grid(29, 'random', seed=seed)
            for primitives in (self.shape.on_path((290, 290), grid),
                               self.shape.off_path((290, 290), grid)):
                for box in eye_boxes_in_canvas(grid, 10.0):
                    for rect in primitives:
                        self.assertFalse(rect.intersects(box), f"{rect} overlaps eye {box}")

    def test_solid_grid_has_one_run_per_column(self):
        grid = MockGridBuilder.create_grid(25, 'solid')
        primitives = self.shape.on_path((250, 250), grid, is_template=True)

        self.assertEqual(len(primitives), 23)
        for rect in primitives:
            self.assertAlmostEqual(rect.y, 10)
            self.assertAlmostEqual(rect.height, 230)

    def test_off_pass_on_empty_grid_skips_eyes(self):
        grid = MockGridBuilder.create_grid(25, 'empty')
        primitives = self.shape.off_path((250, 250), grid)

        # One run per inner column, shortened where a column passes an eye
        self.assertEqual(len(primitives), 23)
        heights = {int(round(r.x / 10)): int(round(r.height / 10)) for r in primitives}
        self.assertEqual(heights[1], 7)
        self.assertEqual(heights[12], 23)
        self.assertEqual(heights[20], 15)

        self.assertEqual(self.shape.on_path((250, 250), grid), [])
        self.assertEqual(self.shape.off_path((250, 250), MockGridBuilder.create_grid(25, 'solid')), [])

    def test_checkerboard_worst_case(self):
        grid = MockGridBuilder.create_grid(11, 'checkerboard')
        primitives = self.shape.on_path((110, 110), grid, is_template=True)
        inner = grid.to_array()[1:10, 1:10]
        self.assertEqual(len(primitives), int(inner.sum()))

    def test_non_square_canvas_is_centred(self):
        grid = MockGridBuilder.create_grid(10, 'solid')
        primitives = self.shape.on_path((300, 200), grid, is_template=True)

        first = primitives[0]
        self.assertAlmostEqual(first.x, 50 + 20)
        self.assertAlmostEqual(first.y, 20)
        self.assertAlmostEqual(first.width, 20)
        self.assertAlmostEqual(first.height, 160)

    def test_order_is_column_major(self):
        primitives = self.shape.on_path((250, 250), self.random_grid, is_template=True)
        keys = [(r.x, r.y) for r in primitives]
        self.assertEqual(keys, sorted(keys))

    def test_deterministic(self):
        first = self.shape.on_path((250, 250), self.random_grid)
        second = self.shape.on_path((250, 250), self.random_grid)
        self.assertEqual(first, second)

    def test_degenerate_inputs(self):
        self.assertEqual(self.shape.on_path((0, 0), self.random_grid), [])
        self.assertEqual(self.shape.on_path((0, 100), self.random_grid), [])
        tiny = ModuleGrid(np.ones((2, 2), dtype=bool))
        self.assertEqual(self.shape.on_path((100, 100), tiny, is_template=True), [])
        empty = ModuleGrid(np.zeros((0, 0), dtype=bool))
        self.assertEqual(self.shape.off_path((100, 100), empty), [])

    def test_degenerate_canvas_logs_warning(self):
        with self.assertLogs("qrpixels.shapes", level="WARNING") as logs:
            self.assertEqual(self.shape.on_path((0, 50), self.random_grid), [])
        self.assertIn("Degenerate canvas", logs.output[0])

    def test_real_symbol(self):
        grid = ModuleGrid.from_text("https://example.com", error_correction="M")
        n = grid.size
        primitives = self.shape.on_path((n * 4, n * 4), grid)

        self.assertTrue(primitives)
        for rect in primitives:
            self.assertIsInstance(rect, RoundedRect)
            for box in eye_boxes_in_canvas(grid, 4.0):
                self.assertFalse(rect.intersects(box))


@pytest.mark.parametrize("fraction,expected", [(-0.5, 0.0), (0.25, 0.25), (4.0, 1.0)])
def test_constructor_clamps_fraction(fraction, expected):
    shape = VerticalPixelShape(GeometryParameters(corner_radius_fraction=fraction))
    assert shape.corner_radius_fraction == expected


def test_constructor_rejects_negative_inset():
    with pytest.raises(ValueError):
        GeometryParameters(inset=-1)

    with pytest.raises(ValueError):
        GeometryParameters(inset=float("nan"))


def test_copy_is_independent():
    original = VerticalPixelShape(GeometryParameters(inset=1, corner_radius_fraction=0.5))
    clone = original.copy()
    assert clone == original
    assert clone is not original

    clone.set_setting_value(3, "inset")
    clone.set_setting_value(0.1, "cornerRadiusFraction")

    assert original.inset == 1
    assert original.corner_radius_fraction == 0.5
    assert clone != original


def test_shapes_do_not_share_parameters():
    params = GeometryParameters(inset=1, corner_radius_fraction=0.5)
    first = VerticalPixelShape(params)
    second = VerticalPixelShape(params)

    first.set_setting_value(4, "inset")
    params.corner_radius_fraction = 0.9

    assert second.inset == 1
    assert first.corner_radius_fraction == 0.5
    assert second.corner_radius_fraction == 0.5


def test_copy_keeps_unclamped_setting_values():
    shape = VerticalPixelShape()
    shape.set_setting_value(2.5, "cornerRadiusFraction")
    assert shape.copy().corner_radius_fraction == 2.5


if __name__ == '__main__':
    unittest.main()
