#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
import logging

import colorlog
from wrapt import synchronized


# Trace log level, used for per-call (never per-pixel) detail
LOG_TRACE = 5

ROOT_TAG = 'cherry'


class Log(object):
    """
    Logging for the rendering engine

    Call get() with a component name ('canvas', 'pool', ...) to get
    a cached logger tagged 'cherry.<component>'. Only the root
    'cherry' logger carries a handler, so enabling color or changing
    the level applies to every component at once.
    """

    _LOGGERS = {}
    _use_color = False
    _level = logging.WARNING


    @classmethod
    def _make_handler(cls) -> logging.Handler:
        if cls._use_color:
            handler = colorlog.StreamHandler()
            handler.setFormatter(colorlog.ColoredFormatter( \
                ' %(log_color)s%(name)s/%(levelname)-8s%(reset)s |'
                ' %(log_color)s%(message)s%(reset)s'))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter( \
                ' %(name)s/%(levelname)-8s | %(message)s'))
        return handler


    @synchronized
    @classmethod
    def get(cls, component: str = None) -> logging.Logger:
        """
        Get the global logger instance for the given component

        :param component: the component name, or a full 'cherry.*' tag
        :return: the logger instance
        """
        if ROOT_TAG not in cls._LOGGERS:
            root = logging.getLogger(ROOT_TAG)
            root.addHandler(cls._make_handler())
            root.setLevel(cls._level)
            root.propagate = False
            cls._LOGGERS[ROOT_TAG] = root

        if component is None:
            tag = ROOT_TAG
        elif component == ROOT_TAG or component.startswith(ROOT_TAG + '.'):
            tag = component
        else:
            tag = '%s.%s' % (ROOT_TAG, component)

        if tag not in cls._LOGGERS:
            cls._LOGGERS[tag] = logging.getLogger(tag)

        return cls._LOGGERS[tag]


    @classmethod
    def enable_color(cls, enable: bool):
        """
        Enable colored output for loggers. Must be called before
        any loggers are initialized with get()
        """
        cls._use_color = enable


    @synchronized
    @classmethod
    def set_level(cls, level):
        """
        Set the level of the engine's root logger

        :param level: a logging level, or LOG_TRACE
        """
        cls._level = level
        if ROOT_TAG in cls._LOGGERS:
            cls._LOGGERS[ROOT_TAG].setLevel(level)


logging.addLevelName(LOG_TRACE, 'TRACE')
