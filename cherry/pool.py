#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
"""
Recycling of temporary pixel buffers.

Post-processing needs scratch canvases on every call. A BufferPool lends
them out and takes them back when the borrowing scope ends; buffers are
never freed or shrunk, so the pool's footprint is the high-water mark of
buffers borrowed at the same time.
"""
import numpy as np
from wrapt import synchronized

from cherry.canvas import Canvas
from cherry.log import Log


class PooledBuffer(object):
    """
    A buffer on loan from a BufferPool

    Use as a context manager; entering yields the flat uint32 buffer,
    leaving returns it to the pool. The buffer may be larger than
    requested and holds whatever the previous borrower left in it.
    """

    def __init__(self, pool: 'BufferPool', size: int):
        self._pool = pool
        self._size = size
        self._buffer = None


    @property
    def size(self) -> int:
        """
        The number of pixels requested
        """
        return self._size


    @property
    def buffer(self) -> np.ndarray:
        """
        The borrowed storage, or None when not on loan
        """
        return self._buffer


    def __enter__(self) -> np.ndarray:
        if self._buffer is not None:
            raise RuntimeError('Buffer is already on loan')
        self._buffer = self._pool._acquire(self._size)
        return self._buffer


    def __exit__(self, exc_type, exc_value, traceback):
        buffer, self._buffer = self._buffer, None
        self._pool._release(buffer)
        return False


class PooledCanvas(PooledBuffer):
    """
    A Canvas over a buffer on loan from a BufferPool

    Entering yields the Canvas (stride equal to its width); the canvas
    must not be used after the scope ends.
    """

    def __init__(self, pool: 'BufferPool', width: int, height: int, blend_mode=None):
        super(PooledCanvas, self).__init__(pool, width * height)
        self._width = width
        self._height = height
        self._blend_mode = blend_mode


    def __enter__(self):
        buffer = super(PooledCanvas, self).__enter__()
        return Canvas(buffer, self._width, self._height, blend_mode=self._blend_mode)


class BufferPool(object):
    """
    First-fit pool of flat uint32 pixel buffers
    """

    _default = None

    def __init__(self, logger=None):
        if logger is None:
            self._logger = Log.get('pool')
        else:
            self._logger = logger

        # (capacity, buffer) pairs, in release order
        self._free = []
        # id(buffer) -> (capacity, buffer)
        self._used = {}
        self._allocated = 0


    @synchronized
    @classmethod
    def default(cls) -> 'BufferPool':
        """
        The process-wide pool, created on first use

        Not thread safe beyond its creation; prefer passing an
        explicit pool where one is available.
        """
        if cls._default is None:
            cls._default = BufferPool()
        return cls._default


    @property
    def free_count(self) -> int:
        """
        Number of buffers ready to be lent
        """
        return len(self._free)


    @property
    def used_count(self) -> int:
        """
        Number of buffers currently on loan
        """
        return len(self._used)


    @property
    def allocated(self) -> int:
        """
        Total pixels ever allocated by this pool
        """
        return self._allocated


    def borrow(self, width: int, height: int) -> PooledBuffer:
        """
        Borrow a buffer of at least width * height pixels

            with pool.borrow(64, 64) as buffer:
                canvas = Canvas(buffer, 64, 64)

        :return: The scoped loan
        """
        if width < 0 or height < 0:
            raise ValueError('Invalid buffer dimensions: %dx%d' % (width, height))
        return PooledBuffer(self, width * height)


    def borrow_canvas(self, width: int, height: int, blend_mode=None) -> PooledCanvas:
        """
        Borrow a buffer and wrap it in a Canvas of width x height

        :return: The scoped loan, yielding the Canvas
        """
        if width < 0 or height < 0:
            raise ValueError('Invalid canvas dimensions: %dx%d' % (width, height))
        return PooledCanvas(self, width, height, blend_mode=blend_mode)


    def _acquire(self, size: int) -> np.ndarray:
        for idx, (capacity, buffer) in enumerate(self._free):
            if capacity >= size:
                del self._free[idx]
                self._used[id(buffer)] = (capacity, buffer)
                self._logger.debug('Reusing buffer of %d for %d pixels', capacity, size)
                return buffer

        buffer = np.zeros(size, dtype=np.uint32)
        self._allocated += size
        self._used[id(buffer)] = (size, buffer)
        self._logger.debug('Allocated buffer of %d pixels (%d total)', size, self._allocated)
        return buffer


    def _release(self, buffer: np.ndarray):
        capacity, buffer = self._used.pop(id(buffer))
        self._free.append((capacity, buffer))
