"""Named size/stroke plan presets.

Precedence (low -> high):
1) default preset
2) selected preset
3) explicit sizes/strokes from the caller
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import Severity, emit_simple
from src.builders.variants.plan_types import SizeStrokePlan

DEFAULT_PRESET_ID = "standard"


@dataclass(frozen=True)
class PlanPreset:
    sizes: tuple[float, ...]
    strokes: tuple[float, ...]
    description: str = ""


_PRESETS: dict[str, PlanPreset] = {
    "compact": PlanPreset(
        sizes=(12.0, 16.0, 20.0),
        strokes=(1.0, 1.25, 1.5),
        description="dense toolbars and inline text",
    ),
    "standard": PlanPreset(
        sizes=(16.0, 20.0, 24.0, 32.0),
        strokes=(1.25, 1.5, 1.5, 2.0),
        description="general purpose UI icon set",
    ),
    "large": PlanPreset(
        sizes=(32.0, 48.0, 64.0),
        strokes=(2.0, 2.5, 3.0),
        description="empty states and illustrations",
    ),
}


def preset_ids() -> tuple[str, ...]:
    return tuple(sorted(_PRESETS))


def _normalize_preset_id(preset_id: str | None) -> str:
    normalized = str(preset_id or "").strip().lower()
    return normalized or DEFAULT_PRESET_ID


def get_preset(preset_id: str | None, ctx: BuildContext | None = None) -> PlanPreset:
    normalized = _normalize_preset_id(preset_id)
    preset = _PRESETS.get(normalized)
    if preset is not None:
        return preset
    if ctx is not None:
        emit_simple(
            ctx.diag,
            run_id=ctx.run_id,
            stage="request",
            component="plugin",
            code="PRESET_FALLBACK",
            severity=Severity.WARN,
            path="preset",
            source="fallback",
            input_value=preset_id,
            resolved_value=DEFAULT_PRESET_ID,
            reason="unknown preset id",
        )
    return _PRESETS[DEFAULT_PRESET_ID]


def resolve_plan(
    preset_id: str | None = None,
    *,
    sizes: Optional[Sequence[float]] = None,
    strokes: Optional[Sequence[float]] = None,
    custom_name: Optional[str] = None,
    ctx: BuildContext | None = None,
) -> SizeStrokePlan:
    """Merge explicit sizes/strokes over a preset into a validated plan."""
    preset = get_preset(preset_id, ctx=ctx)
    resolved_sizes = tuple(sizes) if sizes else preset.sizes
    resolved_strokes = tuple(strokes) if strokes else preset.strokes
    return SizeStrokePlan.from_lists(resolved_sizes, resolved_strokes, custom_name)
