#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name, too-many-arguments, too-many-locals
"""
Geometric copies between canvases.

All variants walk the destination and map each pixel back into the
source (inverse mapping), sampling the nearest source pixel.
"""
import math

import numpy as np
from traitlets import Float, HasTraits, Int

from cherry.log import Log, LOG_TRACE
from cherry.pixel import pack
from cherry.util import lround


# What a rotated copy samples outside the source
OUTSIDE_SAMPLE = pack(0xFF, 0xFF, 0xFF, 0x00)


class Transform(HasTraits):
    """
    Placement of a source canvas onto a destination

    The pivot (origin_x, origin_y) is given in source pixels; the
    source is scaled per axis and rotated (in radians) around it.
    """
    rotation = Float(default_value=0.0)
    origin_x = Int(default_value=0)
    origin_y = Int(default_value=0)
    scale_x = Float(default_value=1.0)
    scale_y = Float(default_value=1.0)


    def __repr__(self):
        return '<Transform rotation=%g origin=(%d, %d) scale=(%g, %g)>' % (
            self.rotation, self.origin_x, self.origin_y, self.scale_x, self.scale_y)


def apply_rotation(x, y, sin: float, cos: float) -> tuple:
    """
    Rotate a point (or arrays of points) and round to whole pixels

    :return: Tuple of (x, y)
    """
    return lround(cos * x + sin * y), lround(-sin * x + cos * y)


def _sample(src, xs, ys) -> np.ndarray:
    inside = (xs >= 0) & (xs < src.width) & (ys >= 0) & (ys < src.height)
    values = np.full(xs.shape, OUTSIDE_SAMPLE, dtype=np.uint32)
    if np.any(inside):
        values[inside] = src.pixels_at(xs[inside], ys[inside])
    return values


def copy(src, dst, left: int, top: int, right: int, bottom: int, blend=None):
    """
    Scale the whole of src onto a rectangle of dst

    Giving right < left (or bottom < top) mirrors the copy on that
    axis. The rectangle is clipped to dst.

    :return: The destination canvas
    """
    if src.empty:
        return dst

    target_width = abs(left - right)
    target_height = abs(top - bottom)
    if target_width == 0 or target_height == 0:
        return dst

    mirrored_x = left > right
    mirrored_y = top > bottom

    left, right = min(left, right), max(left, right)
    top, bottom = min(top, bottom), max(top, bottom)

    dst_ys = np.arange(max(top, 0), min(bottom, dst.height))
    dst_xs = np.arange(max(left, 0), min(right, dst.width))
    if dst_ys.size == 0 or dst_xs.size == 0:
        return dst

    src_ys = (dst_ys - top) * src.height // target_height
    if mirrored_y:
        src_ys = src.height - 1 - src_ys

    src_xs = (dst_xs - left) * src.width // target_width
    if mirrored_x:
        src_xs = src.width - 1 - src_xs

    yy, xx = np.meshgrid(dst_ys, dst_xs, indexing='ij')
    syy, sxx = np.meshgrid(src_ys, src_xs, indexing='ij')

    return dst.blend_pixels(xx, yy, src.pixels_at(sxx, syy), blend=blend)


def _bounding_box(dst, corners, dst_origin_x, dst_origin_y):
    xs = [c[0] for c in corners]
    ys = [c[1] for c in corners]

    start_x = max(min(xs) + dst_origin_x, 0)
    end_x = min(max(xs) + dst_origin_x, dst.width)
    start_y = max(min(ys) + dst_origin_y, 0)
    end_y = min(max(ys) + dst_origin_y, dst.height)

    return np.meshgrid(np.arange(start_y, end_y), np.arange(start_x, end_x), indexing='ij')


def rotate(src, dst, src_origin_x: int, src_origin_y: int,
           dst_origin_x: int, dst_origin_y: int, radians: float, blend=None):
    """
    Rotate src around a pivot and draw it onto dst

    The source pixel at (src_origin_x, src_origin_y) lands on
    (dst_origin_x, dst_origin_y). Destination pixels inside the rotated
    bounding box that map outside src receive a fully transparent
    sample, which is still passed through the blend function.

    :return: The destination canvas
    """
    sin = math.sin(radians)
    cos = math.cos(radians)

    src_left = -src_origin_x
    src_top = -src_origin_y
    src_right = src_left + src.width
    src_bottom = src_top + src.height

    corners = [apply_rotation(src_left, src_top, sin, cos),
               apply_rotation(src_right, src_top, sin, cos),
               apply_rotation(src_right, src_bottom, sin, cos),
               apply_rotation(src_left, src_bottom, sin, cos)]

    yy, xx = _bounding_box(dst, corners, dst_origin_x, dst_origin_y)
    if yy.size == 0:
        return dst

    sx, sy = apply_rotation(xx - dst_origin_x, yy - dst_origin_y, -sin, cos)
    sx = sx + src_origin_x
    sy = sy + src_origin_y

    return dst.blend_pixels(xx, yy, _sample(src, sx, sy), blend=blend)


def rotate_scaled(src, dst, src_origin_x: int, src_origin_y: int,
                  dst_origin_x: int, dst_origin_y: int, radians: float,
                  scale_x: float, scale_y: float, blend=None):
    """
    Scale src per axis, rotate it around a pivot and draw it onto dst

    Negative scales mirror. A zero scale on either axis leaves nothing
    to draw, so dst is returned untouched even when rotated: no
    transparent samples are blended across the rotated bounding box.

    :return: The destination canvas
    """
    if scale_x == 0 or scale_y == 0:
        Log.get('transform').debug('Zero scale (%g, %g), nothing to draw', scale_x, scale_y)
        return dst

    sin = math.sin(radians)
    cos = math.cos(radians)

    src_left = -src_origin_x * scale_x
    src_top = -src_origin_y * scale_y
    src_right = src_left + src.width * scale_x
    src_bottom = src_top + src.height * scale_y

    corners = [apply_rotation(src_left, src_top, sin, cos),
               apply_rotation(src_right, src_top, sin, cos),
               apply_rotation(src_right, src_bottom, sin, cos),
               apply_rotation(src_left, src_bottom, sin, cos)]

    yy, xx = _bounding_box(dst, corners, dst_origin_x, dst_origin_y)
    if yy.size == 0:
        return dst

    dx = xx - dst_origin_x
    dy = yy - dst_origin_y

    # inverse rotation first, then undo the scale
    u = cos * dx - sin * dy
    v = sin * dx + cos * dy

    sx = lround(u / scale_x) + src_origin_x
    sy = lround(v / scale_y) + src_origin_y

    return dst.blend_pixels(xx, yy, _sample(src, sx, sy), blend=blend)


def blit(src, dst, x: int, y: int, xform: Transform = None, blend=None):
    """
    Draw src onto dst with its pivot at (x, y), using the cheapest
    copy that can express the transform

    :return: The destination canvas
    """
    if xform is None:
        xform = Transform()

    logger = Log.get('transform')

    if xform.rotation == 0:
        left = x - lround(xform.origin_x * xform.scale_x)
        top = y - lround(xform.origin_y * xform.scale_y)
        right = left + lround(src.width * xform.scale_x)
        bottom = top + lround(src.height * xform.scale_y)
        logger.log(LOG_TRACE, 'blit %r: rectangular copy to (%d, %d)-(%d, %d)',
                   xform, left, top, right, bottom)
        return copy(src, dst, left, top, right, bottom, blend=blend)

    if xform.scale_x == 1 and xform.scale_y == 1:
        logger.log(LOG_TRACE, 'blit %r: rotation', xform)
        return rotate(src, dst, xform.origin_x, xform.origin_y, x, y,
                      xform.rotation, blend=blend)

    logger.log(LOG_TRACE, 'blit %r: affine', xform)
    return rotate_scaled(src, dst, xform.origin_x, xform.origin_y, x, y,
                         xform.rotation, xform.scale_x, xform.scale_y, blend=blend)
