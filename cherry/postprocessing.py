#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name, too-many-arguments, too-many-locals
"""
Post-processing: separable convolution, brightness filtering and bloom.

Convolution works on alpha-premultiplied color so transparent pixels do
not bleed their (meaningless) color into their neighbors, and it
renormalizes by the weight of the taps that actually landed on the
source, so edges are not darkened.
"""
import math

import numpy as np

from cherry.color import ColorType, pixelarg
from cherry.config import DEFAULTS, RenderConfig
from cherry.log import Log
from cherry.pixel import BlendMode, pack, unpack
from cherry.pool import BufferPool
from cherry.transform import copy


def _odd_size(size: int) -> int:
    size = max(int(size), 0)
    if size % 2 == 0:
        size += 1
    return size


def box_kernel(size: int) -> np.ndarray:
    """
    Uniform 1D kernel

    Negative sizes are treated as zero and even sizes are rounded up
    to the next odd one.

    :return: float64 array of size weights, each 1/size
    """
    size = _odd_size(size)
    return np.full(size, 1.0 / size, dtype=np.float64)


def gaussian_kernel(size: int, sigma: float = None, normalize: bool = False) -> np.ndarray:
    """
    1D kernel sampling the normal density around its center

    :param size: Number of taps (forced odd, negative treated as zero)
    :param sigma: Standard deviation, (size - 1) / 2 if not given
    :param normalize: Scale the weights to sum to one

    :return: float64 array of weights
    """
    size = _odd_size(size)
    if sigma is None:
        sigma = (size - 1) / 2.0

    offsets = np.arange(size, dtype=np.float64) - size // 2

    if sigma <= 0:
        # a vanishing deviation collapses to the center tap
        weights = np.where(offsets == 0, 1.0, 0.0)
    else:
        weights = np.exp(-(offsets * offsets) / (2.0 * sigma * sigma)) \
                / (sigma * math.sqrt(2.0 * math.pi))

    if normalize:
        weights = weights / weights.sum()

    return weights


def _convolve(src, dst, kernel, horizontal: bool):
    kernel = np.asarray(kernel, dtype=np.float64).reshape(-1)
    if dst.empty:
        return dst

    radius = kernel.size // 2
    ys, xs = np.indices((dst.height, dst.width))

    acc_color = np.zeros((dst.height, dst.width, 3), dtype=np.float64)
    acc_alpha = np.zeros((dst.height, dst.width), dtype=np.float64)
    acc_weight = np.zeros((dst.height, dst.width), dtype=np.float64)

    for tap, weight in enumerate(kernel):
        offset = tap - radius
        if horizontal:
            sx, sy = xs + offset, ys
        else:
            sx, sy = xs, ys + offset

        # taps off the source are skipped, not clamped or wrapped
        inside = (sx >= 0) & (sx < src.width) & (sy >= 0) & (sy < src.height)
        if not np.any(inside):
            continue

        r, g, b, a = (c.astype(np.float64) for c in unpack(src.pixels_at(sx[inside], sy[inside])))

        premultiplied = np.stack((r, g, b), axis=-1) * (a / 255.0 * weight)[:, np.newaxis]
        acc_color[inside] += premultiplied
        acc_alpha[inside] += a * weight
        acc_weight[inside] += weight

    # a fully transparent neighborhood has no color to recover
    visible = (acc_alpha > 0) & (acc_weight != 0)
    weight = np.where(visible, acc_weight, 1.0)

    alpha = np.where(visible, acc_alpha / weight, 255.0)
    # color / weight, then un-premultiply by alpha / 255
    color = acc_color / weight[..., np.newaxis] / (alpha / 255.0)[..., np.newaxis]

    def _channel(values):
        return np.where(visible, np.clip(np.rint(values), 0, 255), 0).astype(np.int64)

    out = pack(_channel(color[..., 0]), _channel(color[..., 1]), _channel(color[..., 2]),
               _channel(alpha))

    return dst.blend_pixels(xs, ys, out)


def convolve_horizontal(src, dst, kernel):
    """
    Convolve src along rows, writing the result through dst's blend mode

    Fully transparent neighborhoods produce transparent black.

    :return: The destination canvas
    """
    return _convolve(src, dst, kernel, True)


def convolve_vertical(src, dst, kernel):
    """
    Convolve src along columns, writing the result through dst's blend mode

    Fully transparent neighborhoods produce transparent black.

    :return: The destination canvas
    """
    return _convolve(src, dst, kernel, False)


def gaussian_blur(src, dst, kernel, pool: BufferPool = None):
    """
    Separable 2D blur: a horizontal pass into a scratch canvas, then a
    vertical pass from it into dst

    :param kernel: 1D kernel applied along both axes
    :param pool: Pool to borrow the scratch canvas from (the default
                 pool if None)

    :return: The destination canvas
    """
    if pool is None:
        pool = BufferPool.default()

    with pool.borrow_canvas(src.width, src.height, BlendMode.OVERWRITE) as scratch:
        convolve_horizontal(src, scratch, kernel)
        convolve_vertical(scratch, dst, kernel)

    return dst


def max_channel(pixel):
    """
    Brightness as the strongest color channel, weighted by alpha

    :return: Brightness in [0, 1] (float, or array for array input)
    """
    r, g, b, a = (np.asarray(c, dtype=np.float64) for c in unpack(pixel))
    value = np.maximum(np.maximum(r, g), b) * a / (255.0 * 255.0)
    return float(value) if value.ndim == 0 else value


def luminance(pixel):
    """
    Perceived brightness, sqrt(0.299 r^2 + 0.587 g^2 + 0.114 b^2),
    weighted by alpha

    :return: Brightness in [0, 1] (float, or array for array input)
    """
    r, g, b, a = (np.asarray(c, dtype=np.float64) for c in unpack(pixel))
    value = np.sqrt(0.299 * r * r + 0.587 * g * g + 0.114 * b * b) * a / (255.0 * 255.0)
    return float(value) if value.ndim == 0 else value


BRIGHTNESS = {
    'luminance': luminance,
    'max_channel': max_channel,
}


def _brightness_fn(brightness):
    if callable(brightness):
        return brightness
    try:
        return BRIGHTNESS[brightness.lower()]
    except (AttributeError, KeyError) as err:
        raise ValueError('Invalid brightness function: %s. Valid functions: %s'
                         % (brightness, list(BRIGHTNESS.keys()))) from err


@pixelarg
def filter_by_brightness(src, dst, threshold: float, brightness=luminance,
                         fill: ColorType = 0):
    """
    Keep pixels at least as bright as threshold, replace the rest

    Covers the area shared by src and dst; results are written
    through dst's blend mode.

    :param threshold: Minimum brightness (0.0 - 1.0) to keep a pixel
    :param brightness: Brightness function or its name
    :param fill: Color for pixels below the threshold

    :return: The destination canvas
    """
    fn = _brightness_fn(brightness)

    width = min(src.width, dst.width)
    height = min(src.height, dst.height)
    if width == 0 or height == 0:
        return dst

    ys, xs = np.indices((height, width))
    pixels = src.pixels_at(xs, ys)
    out = np.where(fn(pixels) < threshold, np.uint32(fill), pixels).astype(np.uint32)

    return dst.blend_pixels(xs, ys, out)


def bloom(src, dst, threshold: float, kernel, pool: BufferPool = None,
          brightness=luminance):
    """
    Make the bright parts of src glow

    The bright pass of src is blurred, src is copied onto dst, and the
    blurred bright pass is added on top. dst's blend mode is left as
    it was.

    :param threshold: Minimum brightness (0.0 - 1.0) that glows
    :param kernel: 1D blur kernel
    :param pool: Pool for the scratch canvases (the default pool if None)
    :param brightness: Brightness function or its name

    :return: The destination canvas
    """
    if pool is None:
        pool = BufferPool.default()

    logger = Log.get('postprocessing')
    logger.debug('Bloom %dx%d -> %dx%d, threshold=%.3f, kernel=%d',
                 src.width, src.height, dst.width, dst.height, threshold, len(kernel))

    with pool.borrow_canvas(src.width, src.height, BlendMode.OVERWRITE) as bright, \
            pool.borrow_canvas(src.width, src.height, BlendMode.OVERWRITE) as blurred:

        filter_by_brightness(src, bright, threshold, brightness=brightness)
        gaussian_blur(bright, blurred, kernel, pool)

        with dst.with_blend_mode(BlendMode.OVERWRITE):
            copy(src, dst, 0, 0, dst.width, dst.height)

        with dst.with_blend_mode(BlendMode.ADD):
            copy(blurred, dst, 0, 0, dst.width, dst.height)

    return dst


class PostProcessor(object):
    """
    Post-processing bound to a buffer pool and a RenderConfig

    Scratch buffers are recycled across calls on the same instance.

    :param pool: Pool to borrow scratch canvases from (a new one if None)
    :param config: Kernel, threshold and brightness settings
                   (cherry.config.DEFAULTS if None)
    """

    def __init__(self, pool: BufferPool = None, config: RenderConfig = None):
        self._pool = BufferPool() if pool is None else pool
        self._config = DEFAULTS if config is None else config


    @property
    def pool(self) -> BufferPool:
        """
        The pool scratch canvases are borrowed from
        """
        return self._pool


    @property
    def config(self) -> RenderConfig:
        """
        The settings in use
        """
        return self._config


    def kernel(self) -> np.ndarray:
        """
        The configured Gaussian kernel
        """
        return gaussian_kernel(self._config.kernel_size, self._config.sigma)


    def blur(self, src, dst):
        """
        Gaussian blur src into dst with the configured kernel
        """
        return gaussian_blur(src, dst, self.kernel(), self._pool)


    def filter(self, src, dst):
        """
        Brightness filter src into dst with the configured threshold
        """
        return filter_by_brightness(src, dst, self._config.threshold,
                                    brightness=self._config.brightness,
                                    fill=self._config.fill_color)


    def bloom(self, src, dst):
        """
        Bloom src into dst with the configured kernel and threshold
        """
        return bloom(src, dst, self._config.threshold, self.kernel(), self._pool,
                     brightness=self._config.brightness)
