#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name, too-many-arguments, too-many-instance-attributes
"""
Canvas: a bounds-checked, non-owning view over a caller's pixel buffer.

Every other component reads and writes pixels through a Canvas. The
Canvas never allocates pixel storage of its own and never frees the
buffer it was built over; sub-canvases alias their parent's memory.
"""
import numpy as np

from cherry import transform
from cherry.color import ColorType, pixelarg
from cherry.config import DEFAULTS
from cherry.log import Log
from cherry.pixel import BlendMode, PixelLayout, pack, resolve_blend
from cherry.util import sort_corners


class CanvasError(Exception):
    """
    Base class for programmer errors raised by the engine
    """


class OutOfBounds(CanvasError, IndexError):
    """
    A coordinate fell outside the canvas
    """


class InvalidDimension(CanvasError, ValueError):
    """
    A canvas was constructed with an impossible geometry
    """


def _as_flat(buffer, dtype) -> np.ndarray:
    """
    Get a flat view over caller storage without copying it
    """
    if isinstance(buffer, np.ndarray):
        if not buffer.flags.c_contiguous:
            raise InvalidDimension('Canvas buffers must be C-contiguous')
        flat = buffer.reshape(-1)
        if flat.dtype != dtype:
            flat = flat.view(dtype)
        return flat

    return np.frombuffer(buffer, dtype=dtype)


class BlendModeGuard(object):
    """
    Scoped blend mode change

    Captures the canvas's current blend mode on construction, applies
    the new one, and restores the captured mode when the scope exits,
    however it exits.
    """

    def __init__(self, canvas: 'Canvas', mode):
        self._canvas = canvas
        self._previous = canvas.blend_mode
        canvas.set_blend_mode(mode)


    @property
    def previous(self):
        """
        The blend mode that will be restored
        """
        return self._previous


    def __enter__(self) -> 'Canvas':
        return self._canvas


    def __exit__(self, exc_type, exc_value, traceback):
        self._canvas.set_blend_mode(self._previous)
        return False


class Canvas(object):
    """
    A rectangular view of width x height pixels over a flat buffer,
    with rows stride pixels apart.

    The buffer holds packed 32-bit pixels, or bytes when a PixelLayout
    gives the byte offset of each channel. Writes go through the
    canvas's blend mode unless a blend strategy is passed to the call.

    :param buffer: Caller-owned storage of at least stride * height pixels
    :param width: Width in pixels
    :param height: Height in pixels
    :param stride: Distance between rows in pixels (defaults to width)
    :param blend_mode: Initial BlendMode (or name, or blend function)
    :param layout: PixelLayout for byte buffers, None for packed pixels
    :param check_bounds: Validate coordinates (defaults to DEFAULTS.check_bounds)
    """

    def __init__(self, buffer, width: int, height: int, stride: int = None,
                 blend_mode=None, layout: PixelLayout = None,
                 check_bounds: bool = None, logger=None):

        if stride is None:
            stride = width
        if check_bounds is None:
            check_bounds = DEFAULTS.check_bounds
        if blend_mode is None:
            blend_mode = DEFAULTS.blend_mode

        if logger is None:
            self._logger = Log.get('canvas')
        else:
            self._logger = logger

        self._width = width
        self._height = height
        self._stride = stride
        self._layout = layout
        self._check_bounds = check_bounds

        if check_bounds:
            if width < 0:
                raise InvalidDimension('Invalid width: %d' % width)
            if height < 0:
                raise InvalidDimension('Invalid height: %d' % height)
            if stride < 0 or stride < width:
                raise InvalidDimension('Invalid stride: %d' % stride)

        if layout is None:
            self._data = _as_flat(buffer, np.uint32)
            needed = stride * height
        else:
            self._data = _as_flat(buffer, np.uint8)
            needed = stride * height * 4

        if check_bounds and self._data.size < needed:
            raise InvalidDimension('Buffer of %d elements is too small for %dx%d (stride %d)'
                                   % (self._data.size, width, height, stride))

        if layout is None:
            rows = self._data[:needed].reshape(height, stride)
        else:
            rows = self._data[:needed].reshape(height, stride, 4)

        self._init_view(rows)
        self._blend_mode = None
        self._blend_fn = None
        self.set_blend_mode(blend_mode)


    def _init_view(self, rows: np.ndarray):
        # rows spans the full stride so sub-canvases can keep slicing it
        self._rows = rows
        self._pixels = rows[:, :self._width]


    @classmethod
    def _from_rows(cls, parent: 'Canvas', rows: np.ndarray, width: int, height: int) -> 'Canvas':
        view = cls.__new__(cls)
        view._logger = parent._logger
        view._width = width
        view._height = height
        view._stride = parent._stride
        view._layout = parent._layout
        view._check_bounds = parent._check_bounds
        view._data = parent._data
        view._init_view(rows)
        view._blend_mode = parent._blend_mode
        view._blend_fn = parent._blend_fn
        return view


    def __repr__(self):
        return '<Canvas %dx%d stride=%d mode=%s%s>' % (
            self._width, self._height, self._stride,
            self._blend_mode.name if self._blend_mode is not None else self._blend_fn,
            '' if self._layout is None else ' layout=%s' % (tuple(self._layout),))


    @property
    def width(self) -> int:
        """
        The width of this canvas in pixels
        """
        return self._width


    @property
    def height(self) -> int:
        """
        The height of this canvas in pixels
        """
        return self._height


    @property
    def stride(self) -> int:
        """
        Distance between the starts of two rows, in pixels
        """
        return self._stride


    @property
    def empty(self) -> bool:
        """
        True if this canvas has no pixels
        """
        return self._width == 0 or self._height == 0


    @property
    def layout(self) -> PixelLayout:
        """
        Channel byte offsets for byte buffers, None for packed pixels
        """
        return self._layout


    @property
    def check_bounds(self) -> bool:
        """
        True if coordinate access is validated
        """
        return self._check_bounds


    @property
    def data(self) -> np.ndarray:
        """
        Flat view over the whole underlying buffer
        """
        return self._data


    @property
    def pixels(self) -> np.ndarray:
        """
        The (height, width) view of this canvas's pixels

        For byte layouts this is a (height, width, 4) uint8 view.
        Writes to it go straight to the underlying buffer.
        """
        return self._pixels


    @property
    def blend_mode(self):
        """
        The current BlendMode, or the blend function if a custom
        one was set
        """
        if self._blend_mode is None:
            return self._blend_fn
        return self._blend_mode


    @property
    def blend_function(self):
        """
        The function used to combine written pixels with stored ones
        """
        return self._blend_fn


    def set_blend_mode(self, mode) -> 'Canvas':
        """
        Change the blend mode used for writes

        :param mode: A BlendMode, a mode name, or a blend function

        :return: This canvas instance
        """
        self._blend_mode, self._blend_fn = resolve_blend(mode)
        return self


    def with_blend_mode(self, mode) -> BlendModeGuard:
        """
        Temporarily change the blend mode

        Use as a context manager; the previous mode is restored on exit:

            with canvas.with_blend_mode(BlendMode.ADD):
                draw_line(canvas, 0, 0, 10, 10, 'red')

        :param mode: A BlendMode, a mode name, or a blend function

        :return: The guard object
        """
        return BlendModeGuard(self, mode)


    def is_within_bounds(self, x: int, y: int) -> bool:
        """
        Test if a coordinate lies on this canvas
        """
        return 0 <= x < self._width and 0 <= y < self._height


    def _raise_out_of_bounds(self, x, y):
        raise OutOfBounds('Coordinates (%d, %d) are out of bounds for image size (%d, %d)'
                          % (x, y, self._width, self._height))


    def _check(self, x: int, y: int):
        if self._check_bounds and not self.is_within_bounds(x, y):
            self._raise_out_of_bounds(x, y)


    def _check_all(self, xs: np.ndarray, ys: np.ndarray):
        if not self._check_bounds or xs.size == 0:
            return
        outside = (xs < 0) | (xs >= self._width) | (ys < 0) | (ys >= self._height)
        if np.any(outside):
            idx = np.flatnonzero(outside)[0]
            self._raise_out_of_bounds(int(xs.flat[idx]), int(ys.flat[idx]))


    def _read(self, ys, xs):
        if self._layout is None:
            return self._pixels[ys, xs]

        cells = self._pixels[ys, xs]
        lay = self._layout
        return pack(cells[..., lay.red], cells[..., lay.green],
                    cells[..., lay.blue], cells[..., lay.alpha])


    def _write(self, ys, xs, values):
        if self._layout is None:
            self._pixels[ys, xs] = values
            return

        p = np.asarray(values).astype(np.int64)
        lay = self._layout
        cells = np.empty(p.shape + (4,), dtype=np.uint8)
        cells[..., lay.red] = p & 0xFF
        cells[..., lay.green] = (p >> 8) & 0xFF
        cells[..., lay.blue] = (p >> 16) & 0xFF
        cells[..., lay.alpha] = (p >> 24) & 0xFF
        self._pixels[ys, xs] = cells


    def pixel(self, x: int, y: int) -> int:
        """
        Get the packed value of an individual pixel

        :param x: X coordinate of the pixel
        :param y: Y coordinate of the pixel

        :return: The packed pixel
        """
        self._check(x, y)
        return int(self._read(y, x))


    def pixels_at(self, xs, ys) -> np.ndarray:
        """
        Get the packed values at many coordinates at once

        :param xs: Array of X coordinates
        :param ys: Array of Y coordinates (same shape as xs)

        :return: uint32 array shaped like xs
        """
        xs = np.asarray(xs, dtype=np.intp)
        ys = np.asarray(ys, dtype=np.intp)
        self._check_all(xs, ys)
        return np.asarray(self._read(ys, xs), dtype=np.uint32)


    @pixelarg
    def overwrite_pixel(self, x: int, y: int, color: ColorType) -> 'Canvas':
        """
        Store a pixel verbatim, ignoring the blend mode

        :return: This canvas instance
        """
        self._check(x, y)
        self._write(y, x, color)
        return self


    @pixelarg
    def blend_pixel(self, x: int, y: int, color: ColorType, blend=None) -> 'Canvas':
        """
        Combine a color into an individual pixel

        :param x: X coordinate of the pixel
        :param y: Y coordinate of the pixel
        :param color: Color to blend in
        :param blend: Blend strategy for this call only (defaults to
                      the canvas's blend mode)

        :return: This canvas instance
        """
        self._check(x, y)
        fn = self._blend_fn if blend is None else resolve_blend(blend)[1]
        self._write(y, x, fn(color, int(self._read(y, x))))
        return self


    def blend_pixels(self, xs, ys, colors, blend=None) -> 'Canvas':
        """
        Combine colors into many pixels at once

        In checked mode every coordinate is validated before anything
        is written. Coordinates must not repeat.

        :param xs: Array of X coordinates
        :param ys: Array of Y coordinates (same shape as xs)
        :param colors: A packed pixel, or an array of them shaped like xs
        :param blend: Blend strategy for this call only

        :return: This canvas instance
        """
        xs = np.asarray(xs, dtype=np.intp)
        ys = np.asarray(ys, dtype=np.intp)
        self._check_all(xs, ys)
        if xs.size == 0:
            return self

        fn = self._blend_fn if blend is None else resolve_blend(blend)[1]
        current = np.asarray(self._read(ys, xs), dtype=np.uint32)
        self._write(ys, xs, np.broadcast_to(np.asarray(fn(colors, current)), xs.shape))
        return self


    def sub_canvas(self, x0: int, y0: int, x1: int, y1: int) -> 'Canvas':
        """
        Get a view of a rectangle of this canvas

        The corners may be given in any order. The view shares this
        canvas's storage, stride and blend mode.

        :return: The aliasing canvas
        """
        x0, y0, x1, y1 = sort_corners(x0, y0, x1, y1)

        self._check(x0, y0)
        self._check(x1 - 1, y1 - 1)

        return Canvas._from_rows(self, self._rows[y0:y1, x0:], x1 - x0, y1 - y0)


    @pixelarg
    def fill(self, color: ColorType) -> 'Canvas':
        """
        Blend a color into every pixel of this canvas

        :return: This canvas instance
        """
        if self.empty:
            return self

        ys, xs = np.indices((self._height, self._width))
        return self.blend_pixels(xs, ys, color)


    def clear(self) -> 'Canvas':
        """
        Set every pixel to transparent black, ignoring the blend mode

        :return: This canvas instance
        """
        self._pixels[...] = 0
        return self


    def blend(self, src: 'Canvas', left: int, top: int, right: int, bottom: int,
              blend=None) -> 'Canvas':
        """
        Scale another canvas onto a rectangle of this one

        Swapping left/right or top/bottom mirrors the image.

        :return: This canvas instance
        """
        return transform.copy(src, self, left, top, right, bottom, blend=blend)


    def blit(self, src: 'Canvas', x: int, y: int, xform: 'transform.Transform' = None,
             blend=None) -> 'Canvas':
        """
        Draw another canvas with its pivot placed at (x, y)

        :param xform: Rotation, pivot and scale to apply (identity if None)

        :return: This canvas instance
        """
        return transform.blit(src, self, x, y, xform, blend=blend)
