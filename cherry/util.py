#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
# pylint: disable=invalid-name
"""
Various helper functions that are used across the library.
"""
import inspect
import typing

import numpy as np
from wrapt import decorator


AUTOCAST_CACHE = {}

def autocast_decorator(type_hint, fix_arg_func):
    """
    Decorator which will invoke fix_arg_func for any
    arguments annotated with type_hint. The decorated
    function will then be called with the result.

    :param type_hint: A PEP484 type hint
    :param fix_arg_func: Function to invoke

    :return: decorator
    """
    @decorator
    def wrapper(wrapped, instance, args, kwargs):
        hinted_args = names = None
        cache_key = '%s-%s-%s' % (wrapped.__module__,
                                  wrapped.__qualname__, str(type_hint))

        if cache_key in AUTOCAST_CACHE:
            hinted_args, names = AUTOCAST_CACHE[cache_key]
        else:
            sig = inspect.signature(wrapped)
            names = list(sig.parameters.keys())
            hinted_args = [x[0] for x in typing.get_type_hints(wrapped).items() \
                    if x[1] == type_hint or x[1] == typing.Optional[type_hint]]
            AUTOCAST_CACHE[cache_key] = hinted_args, names

        if len(hinted_args) == 0:
            raise ValueError("No arguments with %s hint found" % type_hint)

        new_args = list(args)
        for hinted_arg in hinted_args:
            if hinted_arg in kwargs:
                kwargs[hinted_arg] = fix_arg_func(kwargs[hinted_arg])

            elif hinted_arg in names:
                idx = names.index(hinted_arg)
                if idx < len(new_args):
                    new_args[idx] = fix_arg_func(new_args[idx])

        return wrapped(*new_args, **kwargs)

    return wrapper


def clamp(value, min_, max_):
    """
    Constrain a value to the specified range

    :param value: Input value
    :param min_: Range minimum
    :param max_: Range maximum

    :return: The constrained value
    """
    return max(min_, min(value, max_))


def sort_corners(x0: int, y0: int, x1: int, y1: int) -> tuple:
    """
    Normalize a pair of corners so the first is the top-left one

    :return: Tuple of (left, top, right, bottom)
    """
    if x1 < x0:
        x0, x1 = x1, x0
    if y1 < y0:
        y0, y1 = y1, y0
    return x0, y0, x1, y1


def lround(value):
    """
    Round to the nearest integer, with halves rounded away from zero

    Works on scalars (returning an int) and on numpy arrays
    (returning an int64 array). Python's round() rounds halves
    to even, which would make rotated coordinates drift.
    """
    arr = np.asarray(value, dtype=np.float64)
    rounded = np.where(arr >= 0, np.floor(arr + 0.5), np.ceil(arr - 0.5)).astype(np.int64)
    if rounded.ndim == 0:
        return int(rounded)
    return rounded


def trunc_div(numerator, denominator):
    """
    Integer division truncating toward zero

    Scan conversion interpolates edges with truncating division;
    Python's // floors, which shifts negative slopes by a pixel.
    Accepts ints or integer numpy arrays.
    """
    num = np.asarray(numerator, dtype=np.int64)
    den = np.asarray(denominator, dtype=np.int64)
    quotient = np.sign(num) * np.sign(den) * (np.abs(num) // np.abs(den))
    if quotient.ndim == 0:
        return int(quotient)
    return quotient
