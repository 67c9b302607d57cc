"""Marker field translation."""

from adaptivemaps.translate.translator import FieldTranslator, coerce_descriptor, tooltip_anchor

__all__ = ["FieldTranslator", "coerce_descriptor", "tooltip_anchor"]
