#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name, too-many-arguments
"""
Scan conversion of drawing primitives.

The coordinate functions (line, triangle) return (xs, ys) arrays of
the pixels a primitive covers. The draw_*/fill_* functions blend a
color into a canvas at those pixels and return the canvas.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from cherry.color import ColorType, pixelarg
from cherry.log import Log, LOG_TRACE
from cherry.util import trunc_div


def _empty() -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    return np.array([], dtype=np.intp), np.array([], dtype=np.intp)


def _line_low(x0: int, y0: int, x1: int, y1: int) -> tuple[list, list]:
    dx = x1 - x0
    dy, yi = (y1 - y0, 1) if y1 - y0 >= 0 else (y0 - y1, -1)

    D = 2 * dy - dx
    y = y0
    xs, ys = [], []

    for x in range(x0, x1 + 1):
        xs.append(x)
        ys.append(y)
        if D > 0:
            y += yi
            D += 2 * (dy - dx)
        else:
            D += 2 * dy

    return xs, ys


def _line_high(x0: int, y0: int, x1: int, y1: int) -> tuple[list, list]:
    dx, xi = (x1 - x0, 1) if x1 - x0 >= 0 else (x0 - x1, -1)
    dy = y1 - y0

    D = 2 * dx - dy
    x = x0
    xs, ys = [], []

    for y in range(y0, y1 + 1):
        xs.append(x)
        ys.append(y)
        if D > 0:
            x += xi
            D += 2 * (dx - dy)
        else:
            D += 2 * dx

    return xs, ys


def line(x0: int, y0: int, x1: int, y1: int) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """
    Generate coordinates for a line using Bresenham's algorithm.

    Both endpoints are included. Lines are always walked from the
    lower to the higher coordinate of their driving axis.

    :param x0: Start column
    :param y0: Start row
    :param x1: End column
    :param y1: End row
    :returns: Tuple of (x_coords, y_coords)
    """
    if abs(y1 - y0) < abs(x1 - x0):
        if x0 > x1:
            xs, ys = _line_low(x1, y1, x0, y0)
        else:
            xs, ys = _line_low(x0, y0, x1, y1)
    else:
        if y0 > y1:
            xs, ys = _line_high(x1, y1, x0, y0)
        else:
            xs, ys = _line_high(x0, y0, x1, y1)

    return np.array(xs, dtype=np.intp), np.array(ys, dtype=np.intp)


def _flat_triangle(apex_x: int, apex_y: int, flat_y: int, flat_x1: int, flat_x2: int,
                   shape: tuple[int, int],
                   include_flat: bool = True) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """
    Coordinates of a triangle with one horizontal edge.

    Rows run from the apex to the flat edge (inclusive unless
    include_flat is False), clipped to shape (height, width).
    """
    if flat_y == apex_y:
        return _empty()

    height, width = shape
    dy = flat_y - apex_y

    if flat_x2 < flat_x1:
        flat_x1, flat_x2 = flat_x2, flat_x1

    last = flat_y if include_flat else flat_y - (1 if dy > 0 else -1)
    first_row = max(min(apex_y, last), 0)
    last_row = min(max(apex_y, last), height - 1)
    if first_row > last_row:
        return _empty()

    rows = np.arange(first_row, last_row + 1, dtype=np.int64)
    x_left = apex_x + trunc_div((rows - apex_y) * (flat_x1 - apex_x), dy)
    x_right = apex_x + trunc_div((rows - apex_y) * (flat_x2 - apex_x), dy)

    starts = np.maximum(x_left, 0)
    ends = np.minimum(x_right + 1, width)

    xs, ys = [], []
    for row, start, end in zip(rows, starts, ends):
        if start < end:
            xs.append(np.arange(start, end, dtype=np.intp))
            ys.append(np.full(end - start, row, dtype=np.intp))

    if len(xs) == 0:
        return _empty()

    return np.concatenate(xs), np.concatenate(ys)


def triangle(x0: int, y0: int, x1: int, y1: int, x2: int, y2: int,
             shape: tuple[int, int]) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """
    Generate coordinates for a filled triangle.

    The triangle is split at its middle vertex into a flat-bottomed
    and a flat-topped half, each scanned row by row. Every covered
    pixel appears exactly once.

    :param shape: (rows, cols) to clip coordinates to
    :returns: Tuple of (x_coords, y_coords)
    """
    if y0 > y1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    if y0 > y2:
        x0, x2 = x2, x0
        y0, y2 = y2, y0

    if y1 > y2:
        x1, x2 = x2, x1
        y1, y2 = y2, y1

    if y1 == y2:
        return _flat_triangle(x0, y0, y1, x1, x2, shape)

    if y0 == y1:
        return _flat_triangle(x2, y2, y0, x0, x1, shape)

    x_mid = x0 + trunc_div((y1 - y0) * (x2 - x0), y2 - y0)

    top_xs, top_ys = _flat_triangle(x0, y0, y1, x1, x_mid, shape)
    bottom_xs, bottom_ys = _flat_triangle(x2, y2, y1, x1, x_mid, shape, include_flat=False)

    return np.concatenate((top_xs, bottom_xs)), np.concatenate((top_ys, bottom_ys))


@pixelarg
def draw_line(canvas, x0: int, y0: int, x1: int, y1: int, color: ColorType, blend=None):
    """
    Draw a line between two points, both inclusive

    :param canvas: Canvas to draw on
    :param color: Color to draw with
    :param blend: Blend strategy for this call (defaults to the
                  canvas's blend mode)

    :return: The canvas
    """
    xs, ys = line(x0, y0, x1, y1)
    return canvas.blend_pixels(xs, ys, color, blend=blend)


@pixelarg
def draw_polygon(canvas, vertices, color: ColorType, blend=None):
    """
    Draw the outline of a polygon

    Consecutive vertices are joined by lines and the last vertex is
    joined back to the first. Shared vertices are blended once per
    line that touches them.

    :param vertices: Sequence of (x, y) pairs

    :return: The canvas
    """
    vertices = list(vertices)
    if len(vertices) == 0:
        return canvas

    count = len(vertices)
    for i in range(count):
        x0, y0 = vertices[i]
        x1, y1 = vertices[(i + 1) % count]
        draw_line(canvas, x0, y0, x1, y1, color, blend=blend)

    return canvas


@pixelarg
def fill_rectangle(canvas, left: int, top: int, right: int, bottom: int,
                   color: ColorType, blend=None):
    """
    Fill the rectangle [left, right) x [top, bottom)

    The corners may be given in any order.

    :return: The canvas
    """
    region = canvas.sub_canvas(left, top, right, bottom)
    if blend is None:
        region.fill(color)
    else:
        with region.with_blend_mode(blend):
            region.fill(color)
    return canvas


@pixelarg
def fill_triangle(canvas, x0: int, y0: int, x1: int, y1: int, x2: int, y2: int,
                  color: ColorType, blend=None):
    """
    Fill a triangle given its three vertices in any order

    Rows and columns outside the canvas are skipped. A triangle
    with all three vertices on one row draws nothing.

    :return: The canvas
    """
    xs, ys = triangle(x0, y0, x1, y1, x2, y2, (canvas.height, canvas.width))
    if xs.size == 0:
        Log.get('drawing').log(LOG_TRACE, 'Degenerate triangle (%d, %d) (%d, %d) (%d, %d)',
                               x0, y0, x1, y1, x2, y2)
        return canvas
    return canvas.blend_pixels(xs, ys, color, blend=blend)
