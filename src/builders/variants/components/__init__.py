"""Variant build components."""

from src.builders.variants.components.resize import resize_icon
from src.builders.variants.components.stroke import apply_stroke
from src.builders.variants.components.variant_set import build_variant_set

__all__ = [
    "apply_stroke",
    "build_variant_set",
    "resize_icon",
]
