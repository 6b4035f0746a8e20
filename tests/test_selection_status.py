from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import ListDiagnosticsSink
from src.builders.variants.memory_host import MemoryHost
from src.builders.variants.scene_types import NodeKind
from src.builders.variants.selection import report_selection_status, selection_status


def test_status_lists_only_eligible_names_in_order():
    host = MemoryHost()
    star = host.create_node(NodeKind.FRAME, "star", width=24, height=24, clips_content=True)
    layout = host.create_node(NodeKind.FRAME, "layout", width=200, height=200, clips_content=False)
    home = host.create_node(NodeKind.VECTOR, "home", width=24, height=24)

    status = selection_status([star, layout, home])

    assert status.has_valid_selection is True
    assert status.count == 2
    assert status.icon_names == ["star", "home"]


def test_empty_or_ineligible_selection_reports_nothing():
    host = MemoryHost()
    text = host.create_node(NodeKind.TEXT, "label", width=10, height=10)

    for selection in ([], [text]):
        status = selection_status(selection)
        assert status.has_valid_selection is False
        assert status.count == 0
        assert status.icon_names == []


def test_report_posts_camel_case_message_to_ui():
    host = MemoryHost()
    icon = host.create_node(NodeKind.GROUP, "icon", width=24, height=24)
    sink = ListDiagnosticsSink()

    report_selection_status(host, [icon], ctx=BuildContext(run_id="sel", debug=False, diag=sink))

    assert host.ui_messages == [
        {
            "type": "selection-status",
            "hasValidSelection": True,
            "count": 1,
            "iconNames": ["icon"],
        }
    ]
    assert sink.codes() == ["SELECTION_STATUS"]
    assert sink.events[0].stage == "selection"
