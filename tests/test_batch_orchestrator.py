from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.builders.variants.batch import generate_from_selection, run_batch
from src.builders.variants.context import BuildContext
from src.builders.variants.diagnostics import ListDiagnosticsSink, Severity
from src.builders.variants.errors import NoEligibleSelectionError
from src.builders.variants.memory_host import MemoryHost
from src.builders.variants.plan_types import SizeStrokePlan
from src.builders.variants.scene_types import NodeKind


PLAN = SizeStrokePlan.from_lists([16, 24, 32], [1, 1.5, 2])


class FailingCloneHost(MemoryHost):
    """Refuses to clone nodes whose name is listed in ``fail_names``."""

    def __init__(self, fail_names=()) -> None:
        super().__init__()
        self.fail_names = set(fail_names)

    def clone(self, node):
        if node.name in self.fail_names:
            raise RuntimeError(f"cannot clone {node.name}")
        return super().clone(node)


def _ctx(sink: ListDiagnosticsSink | None = None) -> BuildContext:
    return BuildContext(run_id="batch-test", debug=False, diag=sink or ListDiagnosticsSink())


def _icons(host: MemoryHost, names, start_y: float = 50.0):
    nodes = []
    for index, name in enumerate(names):
        nodes.append(
            host.create_node(NodeKind.VECTOR, name, x=200 + index * 40, y=start_y + index * 30, width=24, height=24)
        )
    return nodes


def test_override_name_with_several_icons_gets_position_suffix():
    host = MemoryHost()
    sources = _icons(host, ["a", "b", "c"])

    result = run_batch(host, sources, SizeStrokePlan.from_lists([16], [1], "Arrow"), ctx=_ctx())

    assert [group.name for group in result.groups] == ["Arrow-1", "Arrow-2", "Arrow-3"]


def test_override_name_with_single_icon_is_verbatim():
    host = MemoryHost()
    sources = _icons(host, ["a"])

    result = run_batch(host, sources, SizeStrokePlan.from_lists([16], [1], "Arrow"), ctx=_ctx())

    assert [group.name for group in result.groups] == ["Arrow"]


def test_without_override_source_names_are_kept():
    host = MemoryHost()
    sources = _icons(host, ["home", "search"])

    result = run_batch(host, sources, PLAN, ctx=_ctx())

    assert [group.name for group in result.groups] == ["home", "search"]
    assert [group.source_name for group in result.groups] == ["home", "search"]


def test_groups_stack_below_first_icon_in_one_column():
    host = MemoryHost()
    sources = _icons(host, ["a", "b", "c"])

    result = run_batch(host, sources, PLAN, ctx=_ctx())

    assert [group.x for group in result.groups] == [200, 200, 200]
    ys = [group.y for group in result.groups]
    assert ys[0] == 50
    for previous, current, y in zip(result.groups, result.groups[1:], ys[1:]):
        assert y == previous.y + previous.height + 32
    assert result.groups[0].height == 64


def test_failure_is_isolated_and_recorded():
    host = FailingCloneHost(fail_names={"B"})
    sources = _icons(host, ["A", "B", "C"])
    sink = ListDiagnosticsSink()

    result = run_batch(host, sources, PLAN, ctx=_ctx(sink))

    assert [group.source_name for group in result.groups] == ["A", "C"]
    assert len(result.failures) == 1
    assert result.failures[0].source_name == "B"
    assert result.failures[0].message == "cannot clone B"
    assert not result.ok
    # Failed icon takes no slot in the stack.
    first, second = result.groups
    assert second.y == first.y + first.height + 32
    failed = [event for event in sink.events if event.code == "ICON_BUILD_FAILED"]
    assert len(failed) == 1
    assert failed[0].severity == Severity.ERROR
    assert failed[0].meta["exception"] == "RuntimeError"


def test_every_source_gets_exactly_one_outcome():
    host = FailingCloneHost(fail_names={"b", "d"})
    sources = _icons(host, ["a", "b", "c", "d"])

    result = run_batch(host, sources, PLAN, ctx=_ctx())

    outcomes = [group.source_name for group in result.groups] + [failure.source_name for failure in result.failures]
    assert sorted(outcomes) == ["a", "b", "c", "d"]
    assert result.succeeded + result.failed == len(sources)


def test_names_use_batch_position_even_when_earlier_icon_fails():
    host = FailingCloneHost(fail_names={"first"})
    sources = _icons(host, ["first", "second"])

    result = run_batch(host, sources, SizeStrokePlan.from_lists([16], [1], "Icon"), ctx=_ctx())

    assert [group.name for group in result.groups] == ["Icon-2"]


def test_sources_are_not_mutated():
    host = MemoryHost()
    sources = _icons(host, ["a", "b"])
    before = [(node.name, node.x, node.y, node.width, node.height) for node in sources]

    run_batch(host, sources, SizeStrokePlan.from_lists([48, 12], [3, 1], "Renamed"), ctx=_ctx())

    assert [(node.name, node.x, node.y, node.width, node.height) for node in sources] == before


def test_empty_batch_is_rejected():
    with pytest.raises(NoEligibleSelectionError):
        run_batch(MemoryHost(), [], PLAN, ctx=_ctx())


def test_generate_from_selection_filters_selects_and_notifies():
    host = MemoryHost()
    icon = host.create_node(NodeKind.VECTOR, "icon", x=10, y=10, width=24, height=24)
    text = host.create_node(NodeKind.TEXT, "label", x=10, y=100, width=40, height=12)

    result = generate_from_selection(host, [text, icon], PLAN, ctx=_ctx())

    assert [group.name for group in result.groups] == ["icon"]
    assert host.selection == [result.groups[0].node]
    group = result.groups[0]
    assert host.viewport == (group.x, group.y, group.width, group.height)
    assert host.notifications[-1].message == "✅ Generated 1 component set"
    assert host.notifications[-1].error is False


def test_generate_from_selection_reports_partial_failure_as_error():
    host = FailingCloneHost(fail_names={"bad"})
    _icons(host, ["good", "bad", "fine"])

    result = generate_from_selection(host, host.top_level, PLAN, ctx=_ctx())

    assert result.succeeded == 2
    assert host.notifications[-1].message == "Generated 2 sets, 1 failed"
    assert host.notifications[-1].error is True
    assert [node.name for node in host.selection] == ["good", "fine"]


def test_generate_from_selection_plural_message():
    host = MemoryHost()
    _icons(host, ["a", "b"])

    generate_from_selection(host, host.top_level, PLAN, ctx=_ctx())

    assert host.notifications[-1].message == "✅ Generated 2 component sets"


def test_generate_from_selection_without_eligible_nodes_mutates_nothing():
    host = MemoryHost()
    text = host.create_node(NodeKind.TEXT, "label", width=40, height=12)
    sink = ListDiagnosticsSink()

    with pytest.raises(NoEligibleSelectionError):
        generate_from_selection(host, [text], PLAN, ctx=_ctx(sink))

    assert host.top_level == [text]
    assert host.notifications == []
    assert sink.codes() == ["NO_ELIGIBLE_SELECTION"]
