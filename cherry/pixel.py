#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
"""
Packed pixel encoding and the per-pixel blend functions.

A pixel is a 32-bit value holding four 8-bit channels. Every function
here accepts plain Python ints as well as numpy arrays, so the same
code blends a single pixel or a whole scanline at once.
"""
from enum import Enum
from typing import NamedTuple

import numpy as np


INDEX_RED = 0
INDEX_GREEN = 1
INDEX_BLUE = 2
INDEX_ALPHA = 3

SHIFT_RED = 8 * INDEX_RED
SHIFT_GREEN = 8 * INDEX_GREEN
SHIFT_BLUE = 8 * INDEX_BLUE
SHIFT_ALPHA = 8 * INDEX_ALPHA

MASK_RED_BLUE = (0xFF << SHIFT_RED) | (0xFF << SHIFT_BLUE)
MASK_GREEN = 0xFF << SHIFT_GREEN
MASK_ALPHA = 0xFF << SHIFT_ALPHA

TRANSPARENT = 0


def _result(value):
    """
    Hand back a plain int for scalar input, a uint32 array otherwise
    """
    arr = np.asarray(value)
    if arr.ndim == 0:
        return int(arr) & 0xFFFFFFFF
    return arr.astype(np.uint32)


def _channels(pixel) -> tuple:
    p = np.asarray(pixel).astype(np.int64)
    return ((p >> SHIFT_RED) & 0xFF,
            (p >> SHIFT_GREEN) & 0xFF,
            (p >> SHIFT_BLUE) & 0xFF,
            (p >> SHIFT_ALPHA) & 0xFF)


def pack(red, green, blue, alpha=0xFF):
    """
    Combine four channels into a packed pixel

    Channels are masked to 8 bits, not clamped. Callers needing
    saturation must clamp beforehand.

    :return: The packed pixel (int, or uint32 array for array input)
    """
    value = ((np.asarray(red, dtype=np.int64) & 0xFF) << SHIFT_RED) \
            | ((np.asarray(green, dtype=np.int64) & 0xFF) << SHIFT_GREEN) \
            | ((np.asarray(blue, dtype=np.int64) & 0xFF) << SHIFT_BLUE) \
            | ((np.asarray(alpha, dtype=np.int64) & 0xFF) << SHIFT_ALPHA)
    return _result(value)


def unpack(pixel) -> tuple:
    """
    Split a packed pixel into its channels

    :return: Tuple of (red, green, blue, alpha)
    """
    channels = _channels(pixel)
    if channels[0].ndim == 0:
        return tuple(int(c) for c in channels)
    return tuple(c.astype(np.uint8) for c in channels)


class BlendOp(object):
    """
    Library of blend functions, each combining a foreground pixel
    into a background pixel and returning the result.
    """

    @staticmethod
    def overwrite(fg, bg):
        """
        Replace the background entirely
        """
        return _result(np.broadcast_arrays(np.asarray(fg), np.asarray(bg))[0])


    @staticmethod
    def alpha_composite(fg, bg):
        """
        Porter-Duff "over" on straight (non-premultiplied) alpha

        The result is undefined when both pixels are fully transparent;
        in that case the background is returned unchanged.
        """
        fg_r, fg_g, fg_b, fg_a = _channels(fg)
        bg_r, bg_g, bg_b, bg_a = _channels(bg)

        a = fg_a + bg_a * (255 - fg_a) // 255
        safe_a = np.where(a == 0, 1, a)

        r = (fg_r * fg_a + bg_r * bg_a * (255 - fg_a) // 255) // safe_a
        g = (fg_g * fg_a + bg_g * bg_a * (255 - fg_a) // 255) // safe_a
        b = (fg_b * fg_a + bg_b * bg_a * (255 - fg_a) // 255) // safe_a

        bg_arr = np.asarray(bg).astype(np.int64)
        return _result(np.where(a == 0, bg_arr, pack(r, g, b, a)))


    @staticmethod
    def fast_alpha_composite(fg, bg):
        """
        Integer approximation of alpha_composite

        Red and blue are weighted together in one multiply, green in
        another. The result is always opaque; a fully transparent
        foreground leaves the background untouched.
        """
        fg_arr = np.asarray(fg).astype(np.int64)
        bg_arr = np.asarray(bg).astype(np.int64)

        fg_a = (fg_arr & MASK_ALPHA) >> SHIFT_ALPHA
        alpha = fg_a + 1
        inv_alpha = 256 - fg_a

        rb = (alpha * (fg_arr & MASK_RED_BLUE) + inv_alpha * (bg_arr & MASK_RED_BLUE)) >> 8
        g = (alpha * (fg_arr & MASK_GREEN) + inv_alpha * (bg_arr & MASK_GREEN)) >> 8

        blended = (rb & MASK_RED_BLUE) | (g & MASK_GREEN) | MASK_ALPHA
        return _result(np.where(fg_a == 0, bg_arr, blended))


    @staticmethod
    def add(fg, bg):
        """
        Saturating per-channel addition, keeping the background alpha
        """
        fg_r, fg_g, fg_b, _ = _channels(fg)
        bg_r, bg_g, bg_b, bg_a = _channels(bg)

        return pack(np.minimum(fg_r + bg_r, 255),
                    np.minimum(fg_g + bg_g, 255),
                    np.minimum(fg_b + bg_b, 255),
                    bg_a)


    @staticmethod
    def alpha_weighted_add(fg, bg):
        """
        Saturating addition of the foreground scaled by its own alpha,
        keeping the background alpha
        """
        fg_r, fg_g, fg_b, fg_a = _channels(fg)
        bg_r, bg_g, bg_b, bg_a = _channels(bg)

        return pack(np.minimum(bg_r + fg_r * fg_a // 255, 255),
                    np.minimum(bg_g + fg_g * fg_a // 255, 255),
                    np.minimum(bg_b + fg_b * fg_a // 255, 255),
                    bg_a)


    @classmethod
    def get_modes(cls) -> list:
        """Return list of available blend function names."""
        return [mode.value for mode in BlendMode]


class BlendMode(Enum):
    """
    Selectable blend functions for a Canvas
    """
    OVERWRITE = 'overwrite'
    ALPHA_COMPOSITE = 'alpha_composite'
    FAST_ALPHA_COMPOSITE = 'fast_alpha_composite'
    ADD = 'add'
    ALPHA_WEIGHTED_ADD = 'alpha_weighted_add'

    @property
    def function(self):
        """
        The BlendOp function implementing this mode
        """
        return getattr(BlendOp, self.value)


def resolve_blend(blend):
    """
    Resolve a blend strategy to a blend function

    :param blend: A BlendMode, a mode name (case insensitive), or
                  any callable taking (fg, bg)

    :return: Tuple of (BlendMode or None, blend function)
    """
    if isinstance(blend, BlendMode):
        return blend, blend.function

    if isinstance(blend, str):
        key = blend.strip().lower()
        for mode in BlendMode:
            if key in (mode.value, mode.name.lower()):
                return mode, mode.function
        raise ValueError('Invalid blend mode: %s. Valid modes: %s' % (blend, BlendOp.get_modes()))

    if callable(blend):
        return None, blend

    raise TypeError('Unable to use %r as a blend function' % (blend,))


class PixelLayout(NamedTuple):
    """
    Byte offsets of each channel within a 4-byte pixel

    The offsets must be a permutation of 0..3. This is not checked.
    """
    red: int
    green: int
    blue: int
    alpha: int


RGBA = PixelLayout(0, 1, 2, 3)
BGRA = PixelLayout(2, 1, 0, 3)
ARGB = PixelLayout(1, 2, 3, 0)
