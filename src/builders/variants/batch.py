"""Drive variant set generation across a batch of source icons."""

from __future__ import annotations

from typing import Sequence

from src.builders.variants.components.variant_set import build_variant_set
from src.builders.variants.context import BuildContext, make_build_context
from src.builders.variants.diagnostics import Severity, emit_simple
from src.builders.variants.errors import NoEligibleSelectionError
from src.builders.variants.finalize import finalize_batch
from src.builders.variants.layout import DEFAULT_LAYOUT, VariantLayout, VerticalStack, variant_set_name
from src.builders.variants.plan_types import BatchResult, BuildFailure, SizeStrokePlan
from src.builders.variants.scene_types import HostScene, SceneNode
from src.builders.variants.validator import filter_eligible


def _failure_message(exc: Exception) -> str:
    message = str(exc).strip()
    return message or "Unknown error"


def run_batch(
    host: HostScene,
    sources: Sequence[SceneNode],
    plan: SizeStrokePlan,
    *,
    layout: VariantLayout = DEFAULT_LAYOUT,
    ctx: BuildContext | None = None,
) -> BatchResult:
    """Build one variant set per source icon, in order.

    Groups share the first source's x and stack downward from its y. A
    failing icon is recorded and skipped; it takes no slot in the stack.
    """
    if not sources:
        raise NoEligibleSelectionError()
    ctx = ctx or make_build_context()
    total = len(sources)
    stack = VerticalStack(x=sources[0].x, y=sources[0].y, gap=layout.stack_gap)
    result = BatchResult()

    emit_simple(
        ctx.diag,
        run_id=ctx.run_id,
        stage="build",
        component="batch",
        code="BATCH_START",
        severity=Severity.INFO,
        source="request",
        input_value={
            "sources": [source.name for source in sources],
            "sizes": list(plan.sizes),
            "strokes": list(plan.strokes),
            "custom_name": plan.custom_name,
        },
        reason="batch generation start",
    )

    for position, source in enumerate(sources, start=1):
        name = variant_set_name(source.name, plan.custom_name, position, total)
        try:
            group = build_variant_set(host, source, plan, name=name, layout=layout, ctx=ctx)
        except Exception as exc:
            failure = BuildFailure(source_name=source.name, message=_failure_message(exc))
            result.failures.append(failure)
            emit_simple(
                ctx.diag,
                run_id=ctx.run_id,
                stage="build",
                component="batch",
                code="ICON_BUILD_FAILED",
                severity=Severity.ERROR,
                path=source.name,
                source="host",
                input_value={"position": position, "name": name},
                reason=failure.message,
                meta={"exception": type(exc).__name__},
            )
            continue
        # Height is only known once the group is laid out.
        x, y = stack.place(group.node)
        result.groups.append(group)
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="layout",
            component="batch",
            code="GROUP_PLACED",
            severity=Severity.INFO,
            path=name,
            source="computed",
            resolved_value={"x": x, "y": y, "height": group.height},
        )

    return result


def generate_from_selection(
    host: HostScene,
    selection: Sequence[SceneNode],
    plan: SizeStrokePlan,
    *,
    layout: VariantLayout = DEFAULT_LAYOUT,
    ctx: BuildContext | None = None,
) -> BatchResult:
    """Validate ``selection``, run the batch and publish its outcome to the host."""
    ctx = ctx or make_build_context()
    sources = filter_eligible(selection, ctx)
    if not sources:
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="validate",
            component="validator",
            code="NO_ELIGIBLE_SELECTION",
            severity=Severity.WARN,
            source="selection",
            input_value={"selected": len(selection)},
            reason="no selected node is vector, group or clipping frame",
        )
        raise NoEligibleSelectionError()
    result = run_batch(host, sources, plan, layout=layout, ctx=ctx)
    finalize_batch(host, result, ctx=ctx)
    return result
