"""Runtime context and environment configuration for variant builds."""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass, field

from src.builders.variants.diagnostics import (
    DiagnosticsSink,
    JsonlDiagnosticsSink,
    NoopDiagnosticsSink,
)

DEFAULT_UI_WIDTH = 400
DEFAULT_UI_HEIGHT = 300


@dataclass(frozen=True)
class BuildContext:
    run_id: str
    debug: bool
    diag: DiagnosticsSink = field(default_factory=NoopDiagnosticsSink, repr=False, compare=False)


def _debug_env_enabled() -> bool:
    # Any non-falsey DEBUG* env variable enables debug-mode events.
    falsey = {"", "0", "false", "off", "no", "none"}
    for key, value in os.environ.items():
        if not key.startswith("DEBUG"):
            continue
        if str(value).strip().lower() not in falsey:
            return True
    return False


def _diag_sink_from_env() -> DiagnosticsSink:
    # Diagnostics are opt-in: JSONL sink only when ICON_VARIANTS_DIAG_JSONL is set.
    path = os.environ.get("ICON_VARIANTS_DIAG_JSONL", "")
    if isinstance(path, str) and path.strip():
        return JsonlDiagnosticsSink(path.strip())
    return NoopDiagnosticsSink()


def _env_int(name: str, default: int, min_value: int = 1) -> int:
    raw = os.environ.get(name, str(default))
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = int(default)
    return max(int(min_value), int(value))


def ui_size_from_env() -> tuple[int, int]:
    return (
        _env_int("PLUGIN_UI_WIDTH", DEFAULT_UI_WIDTH),
        _env_int("PLUGIN_UI_HEIGHT", DEFAULT_UI_HEIGHT),
    )


def make_build_context(diag: DiagnosticsSink | None = None) -> BuildContext:
    """Create a context for one request; sink and debug flag come from env."""
    return BuildContext(
        run_id=uuid.uuid4().hex,
        debug=_debug_env_enabled(),
        diag=diag if diag is not None else _diag_sink_from_env(),
    )
