"""Variant set assembly for a single source icon."""

from __future__ import annotations

from src.builders.variants.components.resize import resize_icon
from src.builders.variants.components.stroke import apply_stroke
from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import Severity, emit_simple
from src.builders.variants.geom_utils import centered_offset
from src.builders.variants.layout import DEFAULT_LAYOUT, VariantLayout, component_name
from src.builders.variants.plan_types import GeneratedComponent, SizeStrokePlan, VariantGroup
from src.builders.variants.scene_types import HostScene, SceneNode


def _discard(host: HostScene, roots: list) -> None:
    for node in reversed(roots):
        host.remove(node)
    roots.clear()


def _build_component(
    host: HostScene,
    source: SceneNode,
    size: float,
    stroke: float,
    roots: list,
    ctx: BuildContext | None,
) -> GeneratedComponent:
    artwork = resize_icon(host, source, size, ctx=ctx)
    roots.append(artwork)
    stroked = apply_stroke(artwork, stroke)

    container = host.create_container()
    roots.append(container)
    container.resize_without_constraints(size, size)
    container.append_child(artwork)
    roots.remove(artwork)
    # Centering uses the post-scale artwork size.
    artwork.x = centered_offset(size, artwork.width)
    artwork.y = centered_offset(size, artwork.height)
    host.set_fills(container, [])
    container.name = component_name(size)

    if ctx is not None and ctx.debug:
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="build",
            component="variant_set",
            code="COMPONENT_BUILT",
            severity=Severity.INFO,
            path=f"{source.name}.{container.name}",
            source="computed",
            input_value={"size": size, "stroke": stroke},
            resolved_value={
                "artwork_x": artwork.x,
                "artwork_y": artwork.y,
                "artwork_width": artwork.width,
                "artwork_height": artwork.height,
                "stroked_nodes": stroked,
            },
        )
    return GeneratedComponent(
        name=container.name,
        size=size,
        stroke=stroke,
        container=container,
        artwork=artwork,
    )


def build_variant_set(
    host: HostScene,
    source: SceneNode,
    plan: SizeStrokePlan,
    *,
    name: str,
    layout: VariantLayout = DEFAULT_LAYOUT,
    ctx: BuildContext | None = None,
) -> VariantGroup:
    """Build one component per size/stroke pair and combine them, in plan order.

    On any failure every node created so far is removed and the error is
    re-raised, so either a complete group exists or nothing does.
    """
    roots: list = []
    try:
        components = [
            _build_component(host, source, size, stroke, roots, ctx)
            for size, stroke in plan.pairs()
        ]
        group_node = host.combine_as_variants([component.container for component in components])
        roots[:] = [group_node]
        group_node.name = name
        host.apply_layout(group_node, layout.group_settings())
        host.set_fills(group_node, [])
    except Exception:
        _discard(host, roots)
        raise

    if ctx is not None:
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="build",
            component="variant_set",
            code="VARIANT_SET_BUILT",
            severity=Severity.INFO,
            path=source.name,
            source="computed",
            input_value={"sizes": list(plan.sizes), "strokes": list(plan.strokes)},
            resolved_value={
                "name": name,
                "components": [component.name for component in components],
                "width": float(group_node.width),
                "height": float(group_node.height),
            },
        )
    return VariantGroup(
        name=name,
        source_name=source.name,
        components=tuple(components),
        node=group_node,
    )
