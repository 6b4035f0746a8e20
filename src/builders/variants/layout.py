"""Layout constants, naming policy and vertical stacking for variant sets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.builders.variants.scene_types import LayoutSettings


@dataclass(frozen=True)
class VariantLayout:
    item_spacing: float = 16.0
    padding: float = 16.0
    stack_gap: float = 32.0

    def group_settings(self) -> LayoutSettings:
        return LayoutSettings(
            layout_mode="HORIZONTAL",
            primary_axis_sizing="AUTO",
            counter_axis_sizing="AUTO",
            item_spacing=self.item_spacing,
            padding_left=self.padding,
            padding_right=self.padding,
            padding_top=self.padding,
            padding_bottom=self.padding,
        )


DEFAULT_LAYOUT = VariantLayout()


def format_size(size: float) -> str:
    value = float(size)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def component_name(size: float) -> str:
    return f"Size={format_size(size)}"


def variant_set_name(
    source_name: str,
    custom_name: Optional[str],
    position: int,
    total: int,
) -> str:
    """Name for the set built from the ``position``-th (1-based) of ``total`` icons."""
    if not custom_name:
        return source_name
    if total > 1:
        return f"{custom_name}-{position}"
    return custom_name


class VerticalStack:
    """Place nodes top-to-bottom in one column, ``gap`` apart."""

    def __init__(self, x: float, y: float, gap: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.gap = float(gap)

    def place(self, node) -> tuple[float, float]:
        node.x = self.x
        node.y = self.y
        position = (self.x, self.y)
        self.y += float(node.height) + self.gap
        return position
