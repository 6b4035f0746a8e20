"""Stroke weight propagation over a cloned subtree."""

from __future__ import annotations

from src.builders.variants.scene_types import SceneNode


def apply_stroke(node: SceneNode, width: float) -> int:
    """Set ``width`` on every stroke-capable node under ``node``, inclusive.

    Depth-first, parents before children. Returns how many nodes were set.
    """
    width = float(width)
    updated = 0
    stack = [node]
    while stack:
        current = stack.pop()
        if current.supports_stroke:
            current.stroke_weight = width
            updated += 1
        if current.is_container and current.children:
            stack.extend(reversed(current.children))
    return updated
