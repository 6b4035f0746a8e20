"""In-memory design host.

Implements the ``HostScene`` capability interface over a plain node tree so
the generator can run outside a live design tool (tests, CLI, batch jobs).
Node coordinates are relative to the parent node.
"""

from __future__ import annotations

import math
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence

from src.builders.variants.geom_utils import nodes_union_bbox
from src.builders.variants.scene_types import Fill, LayoutSettings, NodeKind

_NO_STROKE_KINDS = frozenset({NodeKind.PAGE, NodeKind.GROUP, NodeKind.SLICE})
_CONTAINER_KINDS = frozenset(
    {
        NodeKind.PAGE,
        NodeKind.GROUP,
        NodeKind.FRAME,
        NodeKind.COMPONENT,
        NodeKind.COMPONENT_SET,
        NodeKind.BOOLEAN_OPERATION,
    }
)
_CLIPPING_KINDS = frozenset({NodeKind.FRAME, NodeKind.COMPONENT, NodeKind.COMPONENT_SET})
_FIXED_SCALE_KINDS = frozenset({NodeKind.PAGE, NodeKind.SLICE})
_AUTO_LAYOUT_MODES = frozenset({"HORIZONTAL", "VERTICAL"})

DEFAULT_CONTAINER_SIZE = 100.0


def _positive_finite(value: float, label: str) -> float:
    number = float(value)
    if not math.isfinite(number) or number <= 0.0:
        raise ValueError(f"{label} must be a positive finite number, got {value!r}")
    return number


@dataclass(eq=False)
class MemoryNode:
    id: str
    name: str
    kind: NodeKind
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    clips_content: bool = False
    stroke_weight: Optional[float] = None
    fills: list = field(default_factory=list)
    rescalable: bool = True
    children: Optional[list] = None
    layout: Optional[LayoutSettings] = None
    parent: Optional["MemoryNode"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.kind = NodeKind(self.kind)
        if self.is_container and self.children is None:
            self.children = []
        if not self.is_container:
            self.children = None
        if not self.supports_stroke:
            self.stroke_weight = None
        elif self.stroke_weight is None:
            self.stroke_weight = 1.0
        for child in self.children or []:
            child.parent = self

    @property
    def supports_stroke(self) -> bool:
        return self.kind not in _NO_STROKE_KINDS

    @property
    def is_container(self) -> bool:
        return self.kind in _CONTAINER_KINDS

    @property
    def can_rescale(self) -> bool:
        return self.rescalable and self.kind not in _FIXED_SCALE_KINDS

    def rescale(self, factor: float) -> None:
        if not self.can_rescale:
            raise TypeError(f"{self.kind.value} node '{self.name}' cannot be rescaled")
        self._scale_subtree(_positive_finite(factor, "rescale factor"))

    def _scale_subtree(self, factor: float) -> None:
        self.width *= factor
        self.height *= factor
        if self.stroke_weight is not None:
            self.stroke_weight *= factor
        for child in self.children or []:
            child.x *= factor
            child.y *= factor
            child._scale_subtree(factor)

    def resize_without_constraints(self, width: float, height: float) -> None:
        self.width = _positive_finite(width, "width")
        self.height = _positive_finite(height, "height")

    def append_child(self, child: "MemoryNode") -> None:
        if not self.is_container:
            raise TypeError(f"{self.kind.value} node '{self.name}' cannot hold children")
        child.detach()
        self.children.append(child)
        child.parent = self

    def detach(self) -> None:
        if self.parent is not None and self.parent.children is not None:
            self.parent.children = [item for item in self.parent.children if item is not self]
        self.parent = None

    def iter_subtree(self) -> Iterator["MemoryNode"]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children or []))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "fills": [fill.to_dict() for fill in self.fills],
        }
        if self.kind in _CLIPPING_KINDS:
            data["clipsContent"] = self.clips_content
        if self.stroke_weight is not None:
            data["strokeWeight"] = self.stroke_weight
        if not self.rescalable:
            data["rescalable"] = False
        if self.layout is not None:
            data["layout"] = self.layout.to_dict()
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def _fill_from_dict(raw: dict) -> Fill:
    color = raw.get("color", (1.0, 1.0, 1.0))
    return Fill(
        color=tuple(float(channel) for channel in color),
        opacity=float(raw.get("opacity", 1.0)),
        type=str(raw.get("type", "SOLID")),
    )


def _layout_from_dict(raw: dict) -> LayoutSettings:
    return LayoutSettings(
        layout_mode=str(raw.get("layoutMode", "NONE")),
        primary_axis_sizing=str(raw.get("primaryAxisSizingMode", "FIXED")),
        counter_axis_sizing=str(raw.get("counterAxisSizingMode", "FIXED")),
        item_spacing=float(raw.get("itemSpacing", 0.0)),
        padding_left=float(raw.get("paddingLeft", 0.0)),
        padding_right=float(raw.get("paddingRight", 0.0)),
        padding_top=float(raw.get("paddingTop", 0.0)),
        padding_bottom=float(raw.get("paddingBottom", 0.0)),
    )


@dataclass(frozen=True)
class Notification:
    message: str
    error: bool = False


class MemoryHost:
    """Single-page document with selection, viewport, notifications and UI queue."""

    def __init__(self, page_name: str = "Page 1", id_prefix: str = "1") -> None:
        self._id_prefix = id_prefix
        self._next_id = 0
        self._nodes: dict[str, MemoryNode] = {}
        self.page = MemoryNode(id="0:1", name=page_name, kind=NodeKind.PAGE)
        self.selection: list[MemoryNode] = []
        self.viewport: Optional[tuple[float, float, float, float]] = None
        self.notifications: list[Notification] = []
        self.ui_messages: list[dict] = []
        self.ui_size: Optional[tuple[int, int]] = None
        self.closed = False

    # -------------------------
    # document access
    # -------------------------

    def _new_id(self) -> str:
        while True:
            self._next_id += 1
            candidate = f"{self._id_prefix}:{self._next_id}"
            if candidate not in self._nodes:
                return candidate

    def _register(self, node: MemoryNode) -> None:
        for item in node.iter_subtree():
            if not item.id or item.id in self._nodes:
                item.id = self._new_id()
            self._nodes[item.id] = item

    def add_node(self, node: MemoryNode, parent: Optional[MemoryNode] = None) -> MemoryNode:
        self._register(node)
        (parent or self.page).append_child(node)
        return node

    def create_node(self, kind: NodeKind | str, name: str, **attrs: Any) -> MemoryNode:
        """Build a node with a fresh id and put it on the page."""
        node = MemoryNode(id="", name=name, kind=kind, **attrs)
        return self.add_node(node)

    def get(self, node_id: str) -> MemoryNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise KeyError(f"unknown node id: {node_id}") from None

    def find_by_name(self, name: str) -> list[MemoryNode]:
        return [node for node in self.page.iter_subtree() if node.name == name and node is not self.page]

    @property
    def top_level(self) -> list[MemoryNode]:
        return list(self.page.children or [])

    # -------------------------
    # capability interface
    # -------------------------

    def current_selection(self) -> list[MemoryNode]:
        return list(self.selection)

    def set_selection(self, nodes: Sequence[MemoryNode]) -> None:
        self.selection = list(nodes)

    def clone(self, node: MemoryNode) -> MemoryNode:
        copied = self._copy_subtree(node)
        self._register(copied)
        (node.parent or self.page).append_child(copied)
        return copied

    def _copy_subtree(self, node: MemoryNode) -> MemoryNode:
        children = None
        if node.children is not None:
            children = [self._copy_subtree(child) for child in node.children]
        return MemoryNode(
            id="",
            name=node.name,
            kind=node.kind,
            x=node.x,
            y=node.y,
            width=node.width,
            height=node.height,
            clips_content=node.clips_content,
            stroke_weight=node.stroke_weight,
            fills=list(node.fills),
            rescalable=node.rescalable,
            children=children,
            layout=node.layout,
        )

    def create_container(self) -> MemoryNode:
        return self.create_node(
            NodeKind.COMPONENT,
            "Component",
            width=DEFAULT_CONTAINER_SIZE,
            height=DEFAULT_CONTAINER_SIZE,
            fills=[Fill()],
            clips_content=True,
            stroke_weight=0.0,
        )

    def combine_as_variants(self, components: Sequence[MemoryNode]) -> MemoryNode:
        if not components:
            raise ValueError("cannot combine an empty list of components")
        for component in components:
            if component.kind is not NodeKind.COMPONENT:
                raise TypeError(
                    f"only COMPONENT nodes can be combined, got {component.kind.value} '{component.name}'"
                )
        variant_set = self.create_node(
            NodeKind.COMPONENT_SET,
            "Component Set",
            fills=[Fill()],
            stroke_weight=0.0,
        )
        for component in components:
            variant_set.append_child(component)
        variant_set.width = max(child.x + child.width for child in variant_set.children)
        variant_set.height = max(child.y + child.height for child in variant_set.children)
        return variant_set

    def apply_layout(self, node: MemoryNode, settings: LayoutSettings) -> None:
        node.layout = settings
        self._reflow(node)

    def _reflow(self, node: MemoryNode) -> None:
        settings = node.layout
        if settings is None or settings.layout_mode not in _AUTO_LAYOUT_MODES:
            return
        children = node.children or []
        horizontal = settings.layout_mode == "HORIZONTAL"
        cursor = settings.padding_left if horizontal else settings.padding_top
        counter_extent = 0.0
        for index, child in enumerate(children):
            if index > 0:
                cursor += settings.item_spacing
            if horizontal:
                child.x = cursor
                child.y = settings.padding_top
                cursor += child.width
                counter_extent = max(counter_extent, child.height)
            else:
                child.x = settings.padding_left
                child.y = cursor
                cursor += child.height
                counter_extent = max(counter_extent, child.width)
        primary_extent = cursor + (settings.padding_right if horizontal else settings.padding_bottom)
        counter_total = counter_extent + (
            settings.padding_top + settings.padding_bottom
            if horizontal
            else settings.padding_left + settings.padding_right
        )
        width_auto = settings.primary_axis_sizing == "AUTO" if horizontal else settings.counter_axis_sizing == "AUTO"
        height_auto = settings.counter_axis_sizing == "AUTO" if horizontal else settings.primary_axis_sizing == "AUTO"
        if width_auto:
            node.width = primary_extent if horizontal else counter_total
        if height_auto:
            node.height = counter_total if horizontal else primary_extent

    def set_fills(self, node: MemoryNode, fills: Sequence[Fill]) -> None:
        node.fills = list(fills)

    def remove(self, node: MemoryNode) -> None:
        removed = list(node.iter_subtree())
        node.detach()
        removed_ids = {item.id for item in removed}
        for node_id in removed_ids:
            self._nodes.pop(node_id, None)
        self.selection = [item for item in self.selection if item.id not in removed_ids]

    def scroll_into_view(self, nodes: Sequence[MemoryNode]) -> None:
        if not nodes:
            return
        bbox = nodes_union_bbox(nodes)
        (min_x, min_y), (max_x, max_y) = bbox["min"], bbox["max"]
        self.viewport = (min_x, min_y, max_x - min_x, max_y - min_y)

    def notify(self, message: str, error: bool = False) -> None:
        self.notifications.append(Notification(message=message, error=bool(error)))

    def post_message(self, payload: dict) -> None:
        self.ui_messages.append(deepcopy(payload))

    def show_ui(self, width: int, height: int) -> None:
        self.ui_size = (int(width), int(height))

    def close(self) -> None:
        self.closed = True

    # -------------------------
    # documents
    # -------------------------

    def node_from_dict(self, raw: dict[str, Any]) -> MemoryNode:
        children = None
        if isinstance(raw.get("children"), list):
            children = [self.node_from_dict(child) for child in raw["children"]]
        layout = raw.get("layout")
        stroke_weight = raw.get("strokeWeight")
        return MemoryNode(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            kind=NodeKind(str(raw.get("type", "")).upper()),
            x=float(raw.get("x", 0.0)),
            y=float(raw.get("y", 0.0)),
            width=float(raw.get("width", 0.0)),
            height=float(raw.get("height", 0.0)),
            clips_content=bool(raw.get("clipsContent", False)),
            stroke_weight=float(stroke_weight) if stroke_weight is not None else None,
            fills=[_fill_from_dict(item) for item in raw.get("fills", []) if isinstance(item, dict)],
            rescalable=bool(raw.get("rescalable", True)),
            children=children,
            layout=_layout_from_dict(layout) if isinstance(layout, dict) else None,
        )

    @classmethod
    def from_dict(cls, document: dict[str, Any]) -> "MemoryHost":
        host = cls(page_name=str(document.get("name", "Page 1")))
        for raw in document.get("children", []):
            host.add_node(host.node_from_dict(raw))
        host.selection = [host.get(str(node_id)) for node_id in document.get("selection", [])]
        return host

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.page.name,
            "selection": [node.id for node in self.selection],
            "children": [node.to_dict() for node in self.top_level],
        }
