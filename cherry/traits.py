#
# Copyright (C) 2026 Cherry Developers — LGPL-3.0-or-later
#
# pylint: disable=protected-access, invalid-name
"""
Custom traits used by the engine's configuration records.
"""
from traitlets import TraitType, Undefined, UseEnum

from cherry.color import to_pixel


class PixelTrait(TraitType):
    """
    A traitlet which holds a packed pixel and performs
    type coercion from any supported color representation.
    """
    info_text = "a color or packed pixel"
    default_value = 0

    def validate(self, obj, value):
        try:
            return to_pixel(value)
        except (TypeError, ValueError):
            self.error(obj, value)


class UseEnumCaseless(UseEnum):
    """
    Subclass of UseEnum which allows selection of values using
    case insensitive strings, matching either member names or values.
    """

    def select_by_name(self, value, default=Undefined):
        if value.startswith(self.name_prefix):
            # -- SUPPORT SCOPED-NAMES, like: "BlendMode.add" => "add"
            value = value.replace(self.name_prefix, "", 1)

        key = value.lower()
        for name, member in self.enum_class.__members__.items():
            if key == name.lower():
                return member
            if isinstance(member.value, str) and key == member.value.lower():
                return member
        return default


    def validate(self, obj, value):
        result = super(UseEnumCaseless, self).validate(obj, value)
        if result is Undefined:
            self.error(obj, value)
        return result
