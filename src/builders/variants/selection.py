"""Report which selected nodes can be used as icon sources."""

from __future__ import annotations

from typing import Sequence

from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import Severity, emit_simple
from src.builders.variants.scene_types import HostScene, SceneNode
from src.builders.variants.validator import filter_eligible
from src.schema import SelectionStatus


def selection_status(selection: Sequence[SceneNode]) -> SelectionStatus:
    eligible = filter_eligible(selection)
    names = [node.name for node in eligible]
    return SelectionStatus(
        has_valid_selection=bool(names),
        count=len(names),
        icon_names=names,
    )


def report_selection_status(
    host: HostScene,
    selection: Sequence[SceneNode],
    ctx: BuildContext | None = None,
) -> SelectionStatus:
    status = selection_status(selection)
    host.post_message(status.to_message())
    if ctx is not None:
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="selection",
            component="selection",
            code="SELECTION_STATUS",
            severity=Severity.INFO,
            source="selection",
            input_value={"selected": len(selection)},
            resolved_value={"count": status.count, "icon_names": list(status.icon_names)},
        )
    return status
