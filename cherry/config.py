#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
"""
Engine configuration.

RenderConfig is a plain traitlets record; nothing is read from files or
the environment. DEFAULTS is consulted by Canvas for the bounds-checking
mode and initial blend mode whenever a caller does not pass them.
"""
from traitlets import Bool, CaselessStrEnum, Float, HasTraits, Int, observe

from cherry.log import Log
from cherry.pixel import BlendMode
from cherry.traits import PixelTrait, UseEnumCaseless


BRIGHTNESS_FUNCTIONS = ('luminance', 'max_channel')


class RenderConfig(HasTraits):
    """
    Settings shared by canvases and the post-processing stage

    check_bounds selects between the checked mode (coordinate access
    raises OutOfBounds, construction raises InvalidDimension) and the
    unchecked mode, where the caller guarantees validity.
    """
    check_bounds = Bool(default_value=True)
    blend_mode = UseEnumCaseless(BlendMode, default_value=BlendMode.OVERWRITE)

    kernel_size = Int(default_value=5, min=0)
    sigma = Float(default_value=None, allow_none=True, min=0.0)
    threshold = Float(default_value=0.7, min=0.0, max=1.0)
    brightness = CaselessStrEnum(BRIGHTNESS_FUNCTIONS, default_value='luminance')
    fill_color = PixelTrait()


    @observe('check_bounds')
    def _check_bounds_changed(self, change):
        if not change.new:
            Log.get('config').debug('Bounds checking disabled, caller guarantees validity')


DEFAULTS = RenderConfig()
