"""Finalize-stage helpers for a generation batch."""

from __future__ import annotations

from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import Severity, emit_simple
from src.builders.variants.plan_types import BatchResult
from src.builders.variants.scene_types import HostScene


def finalize_batch(host: HostScene, result: BatchResult, *, ctx: BuildContext) -> BatchResult:
    nodes = [group.node for group in result.groups]
    if nodes:
        host.set_selection(nodes)
        host.scroll_into_view(nodes)
    host.notify(result.summary_message(), error=not result.ok)
    emit_simple(
        ctx.diag,
        run_id=ctx.run_id,
        stage="finalize",
        component="finalize",
        code="BATCH_DONE",
        severity=Severity.INFO if result.ok else Severity.WARN,
        source="computed",
        reason="batch generation done",
        resolved_value={
            "succeeded": result.succeeded,
            "failed": result.failed,
            "groups": [group.name for group in result.groups],
            "failures": [
                {"name": failure.source_name, "error": failure.message}
                for failure in result.failures
            ],
        },
    )
    return result
