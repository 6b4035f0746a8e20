"""Stable serialization of batch results for regression snapshots."""

from __future__ import annotations

from typing import Any

from src.builders.variants.plan_types import BatchResult, GeneratedComponent, VariantGroup


def _round_value(value: Any):
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return round(float(value), 6)
    if isinstance(value, (list, tuple)):
        return [_round_value(item) for item in value]
    if isinstance(value, dict):
        normalized: dict[str, Any] = {}
        for key in sorted(value):
            normalized[str(key)] = _round_value(value[key])
        return normalized
    return value


def _box(node) -> list[float]:
    return _round_value((node.x, node.y, node.width, node.height))


def _stroke_weights(node) -> list[dict[str, Any]]:
    weights: list[dict[str, Any]] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.supports_stroke:
            weights.append({"name": current.name, "stroke_weight": _round_value(current.stroke_weight)})
        if current.is_container and current.children:
            stack.extend(reversed(current.children))
    return weights


def _component_snapshot(component: GeneratedComponent) -> dict[str, Any]:
    return {
        "name": component.name,
        "size": _round_value(component.size),
        "stroke": _round_value(component.stroke),
        "box": _box(component.container),
        "fills": len(component.container.fills),
        "artwork_box": _box(component.artwork),
        "strokes": _stroke_weights(component.artwork),
    }


def _group_snapshot(group: VariantGroup) -> dict[str, Any]:
    layout = group.node.layout
    return {
        "name": group.name,
        "source_name": group.source_name,
        "box": _box(group.node),
        "fills": len(group.node.fills),
        "layout": _round_value(layout.to_dict()) if layout is not None else None,
        "components": [_component_snapshot(component) for component in group.components],
    }


def batch_to_snapshot(result: BatchResult) -> dict[str, Any]:
    return {
        "groups": [_group_snapshot(group) for group in result.groups],
        "failures": [
            {"source_name": failure.source_name, "message": failure.message}
            for failure in result.failures
        ],
    }
