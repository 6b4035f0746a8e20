"""Shared numeric and geometry helpers for variant builder modules."""

from __future__ import annotations

import math
from typing import Dict, Iterable, Protocol, Tuple

EPSILON = 1e-6


class BoxLike(Protocol):
    x: float
    y: float
    width: float
    height: float


def reference_dimension(width: float, height: float) -> float:
    """Larger side of a box; uniform scaling by it fits the box in a square."""
    return max(float(width), float(height))


def scale_factor(target_size: float, reference: float) -> float:
    reference = float(reference)
    if not math.isfinite(reference) or reference <= 0.0:
        raise ValueError(f"reference dimension must be positive, got {reference!r}")
    return float(target_size) / reference


def centered_offset(container_size: float, child_size: float) -> float:
    return (float(container_size) - float(child_size)) / 2.0


def is_close(actual: float, expected: float, eps: float = EPSILON) -> bool:
    return abs(float(actual) - float(expected)) <= eps


def nodes_union_bbox(nodes: Iterable[BoxLike]) -> Dict[str, Tuple[float, float]]:
    min_x = float("inf")
    min_y = float("inf")
    max_x = float("-inf")
    max_y = float("-inf")
    has_any = False
    for node in nodes:
        has_any = True
        min_x = min(min_x, float(node.x))
        min_y = min(min_y, float(node.y))
        max_x = max(max_x, float(node.x) + float(node.width))
        max_y = max(max_y, float(node.y) + float(node.height))
    if not has_any:
        return {
            "min": (0.0, 0.0),
            "max": (0.0, 0.0),
        }
    return {
        "min": (min_x, min_y),
        "max": (max_x, max_y),
    }
