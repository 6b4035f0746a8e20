"""Source artwork eligibility checks."""

from __future__ import annotations

from typing import Iterable, Optional

from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import Severity, emit_simple
from src.builders.variants.scene_types import NodeKind, SceneNode

ELIGIBLE_KINDS = frozenset({NodeKind.VECTOR, NodeKind.GROUP, NodeKind.FRAME})


def rejection_reason(node: SceneNode) -> Optional[str]:
    """Return why ``node`` is not icon artwork, or None when it is."""
    if node.kind not in ELIGIBLE_KINDS:
        return f"unsupported node kind {node.kind.value}"
    if node.kind is NodeKind.FRAME and not node.clips_content:
        # Unclipped frames are layout containers, not icons.
        return "frame does not clip content"
    return None


def is_eligible(node: SceneNode) -> bool:
    return rejection_reason(node) is None


def filter_eligible(nodes: Iterable[SceneNode], ctx: BuildContext | None = None) -> list:
    """Keep eligible nodes in their original order."""
    eligible = []
    for node in nodes:
        reason = rejection_reason(node)
        if reason is None:
            eligible.append(node)
            continue
        if ctx is not None and ctx.debug:
            emit_simple(
                ctx.diag,
                run_id=ctx.run_id,
                stage="validate",
                component="validator",
                code="NODE_REJECTED",
                severity=Severity.INFO,
                path=f"selection.{node.id}",
                source="selection",
                input_value={"name": node.name, "kind": node.kind.value},
                reason=reason,
            )
    return eligible
