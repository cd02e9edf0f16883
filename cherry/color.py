#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name
"""
Conversion of human-friendly color values into packed pixels.

The engine itself only deals in packed ints; this module lets callers
say 'red', '#ff880080' or (1.0, 0.5, 0.0) wherever a color is expected.
"""
import re

from typing import Iterable, Union

import numpy as np
from coloraide import Color as _BaseColor

from cherry.pixel import pack, unpack
from cherry.util import autocast_decorator, clamp


class Color(_BaseColor):
    """Color class with the factory methods used across cherry."""

    @classmethod
    def NewFromHtml(cls, html: str) -> "Color":
        """Create color from HTML hex or named color."""
        return cls(html)

    @classmethod
    def NewFromRgb(cls, r: float, g: float, b: float, a: float = 1.0) -> "Color":
        """Create color from RGB floats (0-1 range)."""
        c = cls("srgb", [r, g, b])
        c["alpha"] = a
        return c

    @classmethod
    def NewFromPixel(cls, pixel: int) -> "Color":
        """Create color from a packed pixel."""
        r, g, b, a = unpack(pixel)
        return cls.NewFromRgb(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    @property
    def rgba(self) -> tuple:
        """Get RGBA as float tuple (0-1)."""
        srgb = self.convert("srgb")
        return (srgb["red"], srgb["green"], srgb["blue"], self.alpha())

    @property
    def intTuple(self) -> tuple:
        """Get RGBA as int tuple (0-255), clamped to gamut."""
        return tuple(clamp(int(round(x * 255)), 0, 255) for x in self.rgba)

    @property
    def pixel(self) -> int:
        """Get this color as a packed pixel."""
        return pack(*self.intTuple)


# Type hint for decorated color arguments
ColorType = Union[Color, str, int, Iterable[int], Iterable[float], None]

COLOR_TUPLE_STR = re.compile(r'\((.*, .*, .*, .*)\)')


def rgb_from_tuple(arg: tuple) -> Color:
    """
    Convert a 3- or 4-tuple of ints (0-255) or floats (0-1) to a Color

    :param arg: The RGB(A) tuple to convert
    :return: The Color object
    """
    if 3 <= len(arg) <= 4:
        if all(isinstance(n, (int, np.integer)) for n in arg):
            return Color.NewFromRgb(*[n / 255.0 for n in arg])
        if all(isinstance(n, (float, np.floating)) for n in arg):
            return Color.NewFromRgb(*arg)

    raise TypeError('Unable to convert %s to color' % (arg,))


def to_color(*color_args) -> Color:
    """
    Convert various color representations to Color

    Handles packed pixels, RGB(A) tuples, hexcodes and html color names.

    :return: The color, or a list of colors if more than one was given
    """
    colors = []
    for arg in color_args:
        value = None
        if arg is not None:
            if isinstance(arg, Color):
                value = arg
            elif isinstance(arg, _BaseColor):
                value = Color(arg)
            elif isinstance(arg, (int, np.integer)) and not isinstance(arg, bool):
                value = Color.NewFromPixel(int(arg))
            elif isinstance(arg, str):
                if arg != '':
                    strtuple = COLOR_TUPLE_STR.match(arg)
                    if strtuple:
                        value = Color.NewFromRgb(*[float(x) \
                                for x in strtuple.group(1).split(', ')])
                    else:
                        try:
                            value = Color.NewFromHtml(arg)
                        except ValueError as err:
                            raise ValueError('Unable to parse color from \'%s\'' % arg) from err
            elif isinstance(arg, Iterable):
                value = rgb_from_tuple(tuple(arg))
            else:
                raise TypeError('Unable to parse color from \'%s\' (%s)' % (arg, type(arg)))
        colors.append(value)

    if len(colors) == 0:
        return None
    if len(colors) == 1:
        return colors[0]

    return colors


def to_pixel(arg) -> int:
    """
    Convert any supported color representation to a packed pixel

    Packed ints and integer numpy arrays pass through untouched,
    None becomes fully transparent black.

    :return: The packed pixel
    """
    if arg is None:
        return 0
    if isinstance(arg, (int, np.integer)) and not isinstance(arg, bool):
        return int(arg) & 0xFFFFFFFF
    if isinstance(arg, np.ndarray) and np.issubdtype(arg.dtype, np.integer):
        return arg
    return to_color(arg).pixel


pixelarg = autocast_decorator(ColorType, to_pixel)
