from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.builders.variants.memory_host import MemoryHost, MemoryNode
from src.builders.variants.scene_types import Fill, LayoutSettings, NodeKind
from src.pipeline.document import load_document, save_document


def test_capabilities_follow_node_kind():
    host = MemoryHost()
    vector = host.create_node(NodeKind.VECTOR, "v", width=1, height=1)
    group = host.create_node(NodeKind.GROUP, "g", width=1, height=1)
    frame = host.create_node(NodeKind.FRAME, "f", width=1, height=1)
    slice_node = host.create_node(NodeKind.SLICE, "s", width=1, height=1)

    assert (vector.supports_stroke, vector.is_container, vector.can_rescale) == (True, False, True)
    assert (group.supports_stroke, group.is_container, group.can_rescale) == (False, True, True)
    assert (frame.supports_stroke, frame.is_container) == (True, True)
    assert (slice_node.supports_stroke, slice_node.can_rescale) == (False, False)
    assert vector.children is None
    assert group.stroke_weight is None


def test_clone_copies_subtree_with_fresh_ids_next_to_source():
    host = MemoryHost()
    group = host.create_node(NodeKind.GROUP, "g", x=3, y=4, width=10, height=10)
    host.add_node(MemoryNode(id="", name="v", kind=NodeKind.VECTOR, width=5, height=5), parent=group)

    copy = host.clone(group)

    assert copy is not group
    assert copy.id != group.id
    assert copy.children[0].id != group.children[0].id
    assert (copy.x, copy.y, copy.width) == (3, 4, 10)
    assert copy.parent is host.page
    copy.children[0].width = 99
    assert group.children[0].width == 5


def test_rescale_rejects_non_positive_factors():
    host = MemoryHost()
    vector = host.create_node(NodeKind.VECTOR, "v", width=10, height=10)

    with pytest.raises(ValueError):
        vector.rescale(0)
    with pytest.raises(ValueError):
        vector.rescale(float("nan"))


def test_rescale_unsupported_node_raises_type_error():
    host = MemoryHost()
    node = host.create_node(NodeKind.VECTOR, "v", width=10, height=10, rescalable=False)

    with pytest.raises(TypeError):
        node.rescale(2)


def test_append_child_moves_node_between_parents():
    host = MemoryHost()
    first = host.create_container()
    second = host.create_container()
    vector = host.create_node(NodeKind.VECTOR, "v", width=1, height=1)

    first.append_child(vector)
    second.append_child(vector)

    assert first.children == []
    assert second.children == [vector]
    assert vector not in host.top_level

    with pytest.raises(TypeError):
        vector.append_child(MemoryNode(id="", name="x", kind=NodeKind.VECTOR))


def test_create_container_defaults():
    host = MemoryHost()

    container = host.create_container()

    assert container.kind is NodeKind.COMPONENT
    assert (container.width, container.height) == (100, 100)
    assert container.fills == [Fill()]


def test_combine_requires_components():
    host = MemoryHost()
    with pytest.raises(ValueError):
        host.combine_as_variants([])
    with pytest.raises(TypeError):
        host.combine_as_variants([host.create_node(NodeKind.VECTOR, "v", width=1, height=1)])


def test_vertical_auto_layout_reflows_children():
    host = MemoryHost()
    a = host.create_container()
    b = host.create_container()
    a.resize_without_constraints(10, 20)
    b.resize_without_constraints(30, 5)
    variant_set = host.combine_as_variants([a, b])

    host.apply_layout(
        variant_set,
        LayoutSettings(
            layout_mode="VERTICAL",
            primary_axis_sizing="AUTO",
            counter_axis_sizing="AUTO",
            item_spacing=2,
            padding_left=1,
            padding_right=1,
            padding_top=3,
            padding_bottom=3,
        ),
    )

    assert [(child.x, child.y) for child in variant_set.children] == [(1, 3), (1, 25)]
    assert (variant_set.width, variant_set.height) == (32, 33)


def test_remove_drops_subtree_and_selection():
    host = MemoryHost()
    container = host.create_container()
    vector = host.create_node(NodeKind.VECTOR, "v", width=1, height=1)
    container.append_child(vector)
    host.set_selection([container])

    host.remove(container)

    assert container not in host.top_level
    assert host.selection == []
    with pytest.raises(KeyError):
        host.get(vector.id)


def test_resize_without_constraints_rejects_zero():
    host = MemoryHost()
    container = host.create_container()

    with pytest.raises(ValueError):
        container.resize_without_constraints(0, 16)


def test_document_load_and_save(tmp_path):
    host = load_document(ROOT / "data" / "examples" / "icons_document.json")

    assert [node.name for node in host.current_selection()] == ["chevron", "layout", "arrow", "label", "star-frame"]
    arrow = host.get("2:4")
    assert [child.name for child in arrow.children] == ["shaft", "head"]
    assert host.get("2:7").clips_content is True

    out_path = tmp_path / "saved.json"
    save_document(host, out_path)
    reloaded = load_document(out_path)

    assert [node.id for node in reloaded.current_selection()] == ["2:1", "2:10", "2:4", "2:12", "2:7"]
    assert reloaded.get("2:8").stroke_weight == 1.5
    assert reloaded.get("2:10").fills == [Fill(color=(1.0, 1.0, 1.0))]
