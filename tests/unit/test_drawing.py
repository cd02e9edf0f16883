#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#

"""Unit tests for cherry.drawing module."""

from __future__ import annotations

import numpy as np
import pytest

from cherry.canvas import OutOfBounds
from cherry.drawing import (
    draw_line,
    draw_polygon,
    fill_rectangle,
    fill_triangle,
    line,
    triangle,
)
from cherry.pixel import BlendMode, pack, unpack


def _coords(xs, ys) -> list:
    return list(zip(xs.tolist(), ys.tolist()))


# ─────────────────────────────────────────────────────────────────────────────
# line() tests
# ─────────────────────────────────────────────────────────────────────────────


class TestLine:
    """Tests for Bresenham line coordinates."""

    def test_horizontal(self):
        """A horizontal line covers every column."""
        assert _coords(*line(0, 0, 4, 0)) == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]

    def test_vertical(self):
        """A vertical line covers every row."""
        assert _coords(*line(2, 1, 2, 4)) == [(2, 1), (2, 2), (2, 3), (2, 4)]

    def test_diagonal(self):
        """A 45 degree line steps both axes each pixel."""
        assert _coords(*line(0, 0, 3, 3)) == [(0, 0), (1, 1), (2, 2), (3, 3)]

    def test_shallow(self):
        """The error term decides when the minor axis steps."""
        assert _coords(*line(0, 0, 4, 1)) == [(0, 0), (1, 0), (2, 0), (3, 1), (4, 1)]

    def test_single_point(self):
        """A zero-length line is one pixel."""
        assert _coords(*line(3, 2, 3, 2)) == [(3, 2)]

    @pytest.mark.parametrize(
        "x0,y0,x1,y1",
        [(0, 0, 7, 3), (1, 6, 4, 0), (5, 5, -2, 1), (0, 9, 9, 0)],
    )
    def test_endpoints_included(self, x0, y0, x1, y1):
        """Both endpoints are always part of the line."""
        coords = _coords(*line(x0, y0, x1, y1))
        assert (x0, y0) in coords
        assert (x1, y1) in coords

    @pytest.mark.parametrize(
        "x0,y0,x1,y1",
        [(0, 0, 7, 3), (1, 6, 4, 0), (0, 0, 3, 3)],
    )
    def test_direction_independent(self, x0, y0, x1, y1):
        """Swapping the endpoints gives the same pixels."""
        assert set(_coords(*line(x0, y0, x1, y1))) == set(_coords(*line(x1, y1, x0, y0)))

    def test_one_pixel_per_major_step(self):
        """Pixel count is the major-axis extent plus one."""
        xs, ys = line(0, 0, 9, 4)
        assert xs.size == 10
        assert len(set(xs.tolist())) == 10


class TestDrawLine:
    """Tests for draw_line."""

    @pytest.mark.scenario
    def test_colors_exactly_the_line(self, make_canvas, painted):
        """Only the pixels on the line change."""
        canvas = make_canvas(6, 3)
        color = pack(1, 2, 3, 255)
        draw_line(canvas, 0, 0, 4, 0, color)
        assert painted(canvas) == {(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)}
        assert np.all(canvas.pixels[0, :5] == color)

    def test_accepts_color_names(self, canvas_4x4):
        """Colors may be given by name."""
        draw_line(canvas_4x4, 0, 0, 0, 3, "blue")
        assert canvas_4x4.pixel(0, 2) == pack(0, 0, 255, 255)

    def test_blend_override(self, canvas_4x4):
        """A per-call blend mode is used."""
        canvas_4x4.fill(pack(10, 0, 0, 255))
        draw_line(canvas_4x4, 0, 1, 3, 1, pack(5, 0, 0, 255), blend=BlendMode.ADD)
        assert unpack(canvas_4x4.pixel(2, 1))[0] == 15
        assert unpack(canvas_4x4.pixel(2, 2))[0] == 10

    def test_out_of_bounds(self, canvas_4x4):
        """Lines leaving a checked canvas raise and write nothing."""
        with pytest.raises(OutOfBounds):
            draw_line(canvas_4x4, 0, 0, 6, 0, 0xFFFFFFFF)
        assert not canvas_4x4.pixels.any()

    def test_returns_canvas(self, canvas_4x4):
        """The canvas is returned."""
        assert draw_line(canvas_4x4, 0, 0, 1, 1, 1) is canvas_4x4


# ─────────────────────────────────────────────────────────────────────────────
# draw_polygon tests
# ─────────────────────────────────────────────────────────────────────────────


class TestDrawPolygon:
    """Tests for polygon outlines."""

    def test_square_outline(self, canvas_4x4, painted):
        """A square draws its border only."""
        draw_polygon(canvas_4x4, [(0, 0), (3, 0), (3, 3), (0, 3)], 1)
        expected = {(x, y) for x in range(4) for y in range(4)} - {(1, 1), (2, 1), (1, 2), (2, 2)}
        assert painted(canvas_4x4) == expected

    def test_closes_shape(self, canvas_8x8):
        """The last vertex joins back to the first."""
        draw_polygon(canvas_8x8, [(0, 0), (7, 0), (0, 7)], 1)
        for y in range(8):
            assert canvas_8x8.pixel(0, y) == 1

    def test_shared_vertices_blend_twice(self, canvas_4x4):
        """Each edge touching a vertex blends it."""
        canvas_4x4.set_blend_mode(BlendMode.ADD)
        draw_polygon(canvas_4x4, [(0, 0), (3, 0), (3, 3), (0, 3)], pack(10, 0, 0, 0))
        assert unpack(canvas_4x4.pixel(0, 0))[0] == 20
        assert unpack(canvas_4x4.pixel(1, 0))[0] == 10

    def test_empty(self, canvas_4x4):
        """No vertices draws nothing."""
        assert draw_polygon(canvas_4x4, [], 1) is canvas_4x4
        assert not canvas_4x4.pixels.any()

    def test_single_vertex(self, canvas_4x4, painted):
        """One vertex draws one pixel."""
        draw_polygon(canvas_4x4, [(2, 1)], 1)
        assert painted(canvas_4x4) == {(2, 1)}


# ─────────────────────────────────────────────────────────────────────────────
# fill_rectangle tests
# ─────────────────────────────────────────────────────────────────────────────


class TestFillRectangle:
    """Tests for fill_rectangle."""

    def test_half_open(self, canvas_4x4, painted):
        """Right and bottom edges are exclusive."""
        fill_rectangle(canvas_4x4, 1, 1, 3, 3, 1)
        assert painted(canvas_4x4) == {(1, 1), (2, 1), (1, 2), (2, 2)}

    def test_swapped_corners(self, canvas_4x4, painted):
        """Corners may be given in any order."""
        fill_rectangle(canvas_4x4, 3, 3, 1, 1, 1)
        assert painted(canvas_4x4) == {(1, 1), (2, 1), (1, 2), (2, 2)}

    def test_blend_override_restored(self, canvas_4x4):
        """A per-call mode does not stick to the canvas."""
        canvas_4x4.fill(pack(1, 0, 0, 255))
        fill_rectangle(canvas_4x4, 0, 0, 2, 2, pack(1, 0, 0, 255), blend="add")
        assert unpack(canvas_4x4.pixel(0, 0))[0] == 2
        assert unpack(canvas_4x4.pixel(3, 3))[0] == 1
        assert canvas_4x4.blend_mode is BlendMode.OVERWRITE

    def test_out_of_bounds(self, canvas_4x4):
        """Rectangles reaching past a checked canvas raise."""
        with pytest.raises(OutOfBounds):
            fill_rectangle(canvas_4x4, 2, 2, 5, 5, 1)


# ─────────────────────────────────────────────────────────────────────────────
# triangle / fill_triangle tests
# ─────────────────────────────────────────────────────────────────────────────


class TestTriangle:
    """Tests for triangle scan conversion."""

    def test_flat_top(self):
        """A triangle with a horizontal top edge."""
        xs, ys = triangle(0, 0, 4, 0, 0, 4, (10, 10))
        coords = set(_coords(xs, ys))
        assert coords == {(x, y) for y in range(5) for x in range(5 - y)}

    def test_flat_bottom(self):
        """A triangle with a horizontal bottom edge."""
        xs, ys = triangle(0, 0, 0, 4, 4, 4, (10, 10))
        coords = set(_coords(xs, ys))
        assert coords == {(x, y) for y in range(5) for x in range(y + 1)}

    def test_general_split(self):
        """A triangle split at its middle vertex covers both halves."""
        xs, ys = triangle(0, 0, 6, 3, 0, 6, (10, 10))
        coords = _coords(xs, ys)
        assert len(coords) == 25
        assert (6, 3) in coords
        assert (0, 0) in coords and (0, 6) in coords

    @pytest.mark.parametrize(
        "verts",
        [
            (0, 0, 6, 3, 0, 6),
            (1, 1, 8, 2, 4, 9),
            (9, 0, 0, 5, 7, 9),
            (2, 8, 5, 0, 8, 8),
        ],
    )
    def test_no_pixel_twice(self, verts):
        """Every covered pixel appears once."""
        coords = _coords(*triangle(*verts, (10, 10)))
        assert len(coords) == len(set(coords))

    def test_vertex_order_irrelevant(self):
        """Any vertex order gives the same pixels."""
        a = set(_coords(*triangle(1, 1, 8, 2, 4, 9, (10, 10))))
        b = set(_coords(*triangle(4, 9, 1, 1, 8, 2, (10, 10))))
        assert a == b

    def test_degenerate_row(self):
        """Three vertices on one row cover nothing."""
        xs, ys = triangle(0, 1, 3, 1, 5, 1, (10, 10))
        assert xs.size == 0 and ys.size == 0

    def test_clipped(self):
        """Coordinates outside the shape are dropped."""
        xs, ys = triangle(-5, -5, 12, -2, 3, 14, (8, 6))
        assert xs.size > 0
        assert xs.min() >= 0 and xs.max() < 6
        assert ys.min() >= 0 and ys.max() < 8


class TestFillTriangle:
    """Tests for fill_triangle."""

    def test_fills(self, canvas_10x10, painted):
        """The covered pixels receive the color."""
        fill_triangle(canvas_10x10, 0, 0, 4, 0, 0, 4, "white")
        assert painted(canvas_10x10) == {(x, y) for y in range(5) for x in range(5 - y)}
        assert canvas_10x10.pixel(0, 0) == pack(255, 255, 255, 255)

    def test_partly_offscreen(self, canvas_4x4):
        """Triangles reaching past the canvas are clipped, not rejected."""
        fill_triangle(canvas_4x4, -4, -4, 10, -4, 1, 10, 1)
        assert canvas_4x4.pixel(1, 1) == 1

    def test_degenerate_no_op(self, canvas_4x4):
        """A flat triangle leaves the canvas untouched."""
        assert fill_triangle(canvas_4x4, 0, 2, 1, 2, 3, 2, 1) is canvas_4x4
        assert not canvas_4x4.pixels.any()

    def test_alpha_composite(self, canvas_10x10):
        """Pixels are blended, not overwritten, in alpha mode."""
        canvas_10x10.fill(pack(0, 0, 255, 255))
        canvas_10x10.set_blend_mode(BlendMode.ALPHA_COMPOSITE)
        fill_triangle(canvas_10x10, 0, 0, 4, 0, 0, 4, pack(255, 0, 0, 128))
        r, g, b, a = unpack(canvas_10x10.pixel(0, 0))
        assert (r, b, a) == (128, 127, 255)
        assert canvas_10x10.pixel(9, 9) == pack(0, 0, 255, 255)
