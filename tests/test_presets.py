from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import ListDiagnosticsSink
from src.builders.variants.errors import MalformedRequestError
from src.builders.variants.presets.catalog import DEFAULT_PRESET_ID, get_preset, preset_ids, resolve_plan


def test_every_preset_is_a_valid_plan():
    for preset_id in preset_ids():
        preset = get_preset(preset_id)
        plan = resolve_plan(preset_id)
        assert plan.sizes == preset.sizes
        assert plan.strokes == preset.strokes


def test_missing_preset_id_uses_default():
    assert resolve_plan(None) == resolve_plan(DEFAULT_PRESET_ID)
    assert resolve_plan("  Standard ") == resolve_plan(DEFAULT_PRESET_ID)


def test_unknown_preset_falls_back_with_warning():
    sink = ListDiagnosticsSink()

    plan = resolve_plan("retina", ctx=BuildContext(run_id="p", debug=False, diag=sink))

    assert plan == resolve_plan(DEFAULT_PRESET_ID)
    assert sink.codes() == ["PRESET_FALLBACK"]
    assert sink.events[0].source == "fallback"


def test_explicit_values_override_preset():
    plan = resolve_plan("large", sizes=[10, 20], strokes=[1, 2], custom_name="Arrow")

    assert plan.sizes == (10.0, 20.0)
    assert plan.strokes == (1.0, 2.0)
    assert plan.custom_name == "Arrow"


def test_explicit_sizes_must_still_match_strokes():
    with pytest.raises(MalformedRequestError):
        resolve_plan("compact", sizes=[10, 20])
