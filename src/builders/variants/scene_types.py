"""Scene node kinds and the narrow host capability interface.

The core only talks to the design host through ``HostScene`` and the
``SceneNode`` surface below. Whether a node can carry a stroke, hold
children or be rescaled is asked through the capability predicates, never
by probing attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, Sequence, Tuple


class NodeKind(str, Enum):
    PAGE = "PAGE"
    VECTOR = "VECTOR"
    GROUP = "GROUP"
    FRAME = "FRAME"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    LINE = "LINE"
    POLYGON = "POLYGON"
    STAR = "STAR"
    BOOLEAN_OPERATION = "BOOLEAN_OPERATION"
    TEXT = "TEXT"
    SLICE = "SLICE"


@dataclass(frozen=True)
class Fill:
    """Solid paint."""

    color: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    opacity: float = 1.0
    type: str = "SOLID"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "color": list(self.color), "opacity": self.opacity}


@dataclass(frozen=True)
class LayoutSettings:
    """Auto-arrangement properties applied to a container."""

    layout_mode: str = "NONE"
    primary_axis_sizing: str = "FIXED"
    counter_axis_sizing: str = "FIXED"
    item_spacing: float = 0.0
    padding_left: float = 0.0
    padding_right: float = 0.0
    padding_top: float = 0.0
    padding_bottom: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "layoutMode": self.layout_mode,
            "primaryAxisSizingMode": self.primary_axis_sizing,
            "counterAxisSizingMode": self.counter_axis_sizing,
            "itemSpacing": self.item_spacing,
            "paddingLeft": self.padding_left,
            "paddingRight": self.padding_right,
            "paddingTop": self.padding_top,
            "paddingBottom": self.padding_bottom,
        }


class SceneNode(Protocol):
    id: str
    name: str
    kind: NodeKind
    x: float
    y: float
    width: float
    height: float
    clips_content: bool
    stroke_weight: Optional[float]
    children: Optional[list]

    @property
    def supports_stroke(self) -> bool: ...

    @property
    def is_container(self) -> bool: ...

    @property
    def can_rescale(self) -> bool: ...

    def rescale(self, factor: float) -> None: ...

    def resize_without_constraints(self, width: float, height: float) -> None: ...

    def append_child(self, child: "SceneNode") -> None: ...


class HostScene(Protocol):
    """Operations the design host provides to the core."""

    def current_selection(self) -> list: ...

    def set_selection(self, nodes: Sequence[SceneNode]) -> None: ...

    def clone(self, node: SceneNode) -> SceneNode: ...

    def create_container(self) -> SceneNode: ...

    def combine_as_variants(self, components: Sequence[SceneNode]) -> SceneNode: ...

    def apply_layout(self, node: SceneNode, settings: LayoutSettings) -> None: ...

    def set_fills(self, node: SceneNode, fills: Sequence[Fill]) -> None: ...

    def remove(self, node: SceneNode) -> None: ...

    def scroll_into_view(self, nodes: Sequence[SceneNode]) -> None: ...

    def notify(self, message: str, error: bool = False) -> None: ...

    def post_message(self, payload: dict) -> None: ...

    def show_ui(self, width: int, height: int) -> None: ...

    def close(self) -> None: ...
