"""Tests for hex geometry, grid extents, and fit scaling."""

import math

import pytest

from hexsmith.engine.geometry import (
    FIT_MARGIN,
    HEX_HEIGHT,
    HEX_SIZE,
    HEX_VERT_DISTANCE,
    HEX_WIDTH,
    RasterLayout,
    cell_center,
    cell_centers,
    cell_corners,
    fit_scale,
    grid_extent,
)


class TestConstants:
    def test_width_is_sqrt3_radius(self):
        assert HEX_WIDTH == pytest.approx(math.sqrt(3) * HEX_SIZE)

    def test_vertical_spacing(self):
        assert HEX_VERT_DISTANCE == pytest.approx(0.75 * HEX_HEIGHT)


class TestCellCenter:
    def test_origin_cell_is_padded(self):
        x, y = cell_center(0, 0, 1.0)
        assert x == pytest.approx(HEX_WIDTH / 2)
        assert y == pytest.approx(HEX_HEIGHT / 2)

    def test_odd_row_shifted_half_width(self):
        even_x, _ = cell_center(3, 0, 1.0)
        odd_x, _ = cell_center(3, 1, 1.0)
        assert odd_x - even_x == pytest.approx(HEX_WIDTH / 2)

    def test_column_step(self):
        x0, _ = cell_center(0, 2, 1.0)
        x1, _ = cell_center(1, 2, 1.0)
        assert x1 - x0 == pytest.approx(HEX_WIDTH)

    def test_row_step(self):
        _, y0 = cell_center(0, 0, 1.0)
        _, y1 = cell_center(0, 1, 1.0)
        assert y1 - y0 == pytest.approx(HEX_VERT_DISTANCE)

    def test_scales_linearly(self):
        x1, y1 = cell_center(4, 3, 1.0)
        x2, y2 = cell_center(4, 3, 2.5)
        assert x2 == pytest.approx(x1 * 2.5)
        assert y2 == pytest.approx(y1 * 2.5)

    def test_vectorised_matches_scalar(self):
        xs, ys = cell_centers(4, 3, 0.7)
        assert len(xs) == 12
        for row in range(3):
            for col in range(4):
                x, y = cell_center(col, row, 0.7)
                assert xs[row * 4 + col] == pytest.approx(x)
                assert ys[row * 4 + col] == pytest.approx(y)


class TestCellCorners:
    def test_six_corners_at_radius(self):
        corners = cell_corners(10.0, 20.0, 5.0)
        assert len(corners) == 6
        for x, y in corners:
            assert math.hypot(x - 10.0, y - 20.0) == pytest.approx(5.0)

    def test_pointy_top(self):
        """Corners at 90 and 270 degrees: the hex has a vertex straight up."""
        corners = cell_corners(0.0, 0.0, 1.0)
        assert (0.0, 1.0) == pytest.approx(corners[1])
        assert (0.0, -1.0) == pytest.approx(corners[4])

    def test_first_corner_at_30_degrees(self):
        x, y = cell_corners(0.0, 0.0, 2.0)[0]
        assert x == pytest.approx(math.sqrt(3))
        assert y == pytest.approx(1.0)


class TestGridExtent:
    def test_single_cell(self):
        assert grid_extent(1, 1) == pytest.approx((HEX_WIDTH, HEX_HEIGHT))

    def test_odd_rows_widen(self):
        w, _ = grid_extent(3, 2)
        assert w == pytest.approx(3.5 * HEX_WIDTH)

    def test_height(self):
        _, h = grid_extent(2, 5)
        assert h == pytest.approx(4 * HEX_VERT_DISTANCE + HEX_HEIGHT)

    def test_contains_every_hex(self):
        """Every corner of every cell lies inside the padded extent."""
        w, h = grid_extent(5, 4)
        for row in range(4):
            for col in range(5):
                cx, cy = cell_center(col, row, 1.0)
                for x, y in cell_corners(cx, cy, HEX_SIZE):
                    assert -1e-9 <= x <= w + 1e-9
                    assert -1e-9 <= y <= h + 1e-9

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            grid_extent(0, 3)


class TestFitScale:
    def test_positive(self):
        assert fit_scale(20, 20, 800, 600) > 0

    def test_fits_inside_viewport(self):
        for gw, gh in [(1, 1), (1, 50), (50, 1), (20, 20), (50, 50)]:
            s = fit_scale(gw, gh, 800, 600)
            w, h = grid_extent(gw, gh)
            assert w * s <= 800
            assert h * s <= 600

    def test_one_axis_is_tight(self):
        s = fit_scale(20, 20, 800, 600)
        w, h = grid_extent(20, 20)
        used = max(w * s / 800, h * s / 600)
        assert used == pytest.approx(1.0 - FIT_MARGIN)

    def test_monotonic_in_grid_size(self):
        scales = [fit_scale(n, n, 800, 600) for n in range(1, 51)]
        assert all(a >= b for a, b in zip(scales, scales[1:]))

    def test_monotonic_in_viewport(self):
        assert fit_scale(10, 10, 400, 300) < fit_scale(10, 10, 800, 600)

    def test_empty_viewport(self):
        assert fit_scale(10, 10, 0, 600) == 0.0


class TestRasterLayout:
    def test_fit_centers_grid(self):
        layout = RasterLayout.fit(10, 8, 800, 600)
        left, top, right, bottom = layout.bounds()
        assert left == pytest.approx(800 - right)
        assert top == pytest.approx(600 - bottom)

    def test_fit_stays_inside_viewport(self):
        layout = RasterLayout.fit(50, 3, 640, 480)
        left, top, right, bottom = layout.bounds()
        assert left >= 0 and top >= 0
        assert right <= 640 and bottom <= 480

    def test_center_adds_origin(self):
        layout = RasterLayout(4, 4, 1.5, 400, 400, origin_x=10, origin_y=20)
        x, y = cell_center(2, 1, 1.5)
        assert layout.center(2, 1) == pytest.approx((x + 10, y + 20))

    def test_radius(self):
        layout = RasterLayout(4, 4, 0.5, 100, 100)
        assert layout.radius == pytest.approx(HEX_SIZE / 2)

    def test_scaled(self):
        layout = RasterLayout.fit(6, 6, 300, 200)
        big = layout.scaled(4)
        assert (big.width, big.height) == (1200, 800)
        bx, by = big.center(3, 3)
        x, y = layout.center(3, 3)
        assert (bx, by) == pytest.approx((x * 4, y * 4))

    def test_empty(self):
        assert RasterLayout.fit(5, 5, 0, 0).is_empty
        assert not RasterLayout.fit(5, 5, 100, 100).is_empty
