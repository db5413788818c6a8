"""Tests for the mutable node model."""

import pytest

from dom.node import Element, Other, Text
from dom.protocol import NodeKind, TreeNode


def test_kinds_are_tagged() -> None:
    assert Element("DIV").kind is NodeKind.ELEMENT
    assert Text("x").kind is NodeKind.TEXT
    assert Other("c").kind is NodeKind.OTHER


def test_tag_is_lower_cased() -> None:
    assert Element("SPAN").tag == "span"


def test_nodes_satisfy_tree_protocol() -> None:
    assert isinstance(Element("div"), TreeNode)
    assert isinstance(Text("x"), TreeNode)


def test_append_sets_parent_and_order() -> None:
    a, b = Text("a"), Text("b")
    div = Element("div", children=[a, b])
    assert div.children == (a, b)
    assert a.parent is div
    assert b.index_in_parent() == 1


def test_insert_before_reference() -> None:
    a, c = Text("a"), Text("c")
    div = Element("div", children=[a, c])
    b = Text("b")
    div.insert_before(b, c)
    assert [n.data for n in div.children] == ["a", "b", "c"]


def test_insert_moves_node_from_previous_parent() -> None:
    child = Text("x")
    old = Element("div", children=[child])
    new = Element("p")
    new.append_child(child)
    assert old.children == ()
    assert child.parent is new


def test_insert_before_foreign_reference_raises() -> None:
    div = Element("div")
    with pytest.raises(ValueError, match="is not a child"):
        div.insert_before(Text("x"), Text("y"))


def test_insert_into_own_subtree_raises() -> None:
    inner = Element("span")
    outer = Element("div", children=[inner])
    with pytest.raises(ValueError, match="own subtree"):
        inner.append_child(outer)


def test_detach() -> None:
    child = Text("x")
    div = Element("div", children=[child])
    child.detach()
    assert child.parent is None
    assert div.children == ()
    child.detach()  # no-op when already detached


def test_snapshot_is_stable_under_mutation() -> None:
    a, b = Text("a"), Text("b")
    div = Element("div", children=[a, b])
    snapshot = div.child_snapshot()
    a.detach()
    div.append_child(Text("c"))
    assert snapshot == (a, b)


def test_attributes_keep_insertion_order() -> None:
    div = Element("div", {"id": "x"})
    div.set_attribute("class", "a")
    div.set_attribute("title", "t")
    assert list(div.attributes) == ["id", "class", "title"]
    div.remove_attribute("class")
    assert not div.has_attribute("class")
    assert div.get_attribute("missing") is None


def test_text_nodes_have_no_attributes_or_children() -> None:
    text = Text("x")
    assert text.attributes == {}
    with pytest.raises(TypeError):
        text.set_attribute("id", "x")
    with pytest.raises(TypeError):
        text.append_child(Text("y"))


def test_index_in_parent_of_root_raises() -> None:
    with pytest.raises(ValueError, match="no parent"):
        Element("div").index_in_parent()


def test_iter_tree_with_shadow_root() -> None:
    host = Element("div", children=[Text("light")])
    shadow = host.attach_shadow()
    shadow.append_child(Text("shadow"))
    order = [repr(n) for n in host.iter_tree(include_shadow=True)]
    assert order == ["<div>", "#text('light')", "#shadow-root(open) of <div>", "#text('shadow')"]
    assert host.count_nodes() == 2
    assert host.count_nodes(include_shadow=True) == 4


def test_text_content() -> None:
    div = Element("div", children=[Text("Hello "), Element("b", children=[Text("world")])])
    assert div.text_content() == "Hello world"


def test_get_original_node() -> None:
    source = Element("div")
    clone = Element("div")
    clone.origin = source
    assert clone.get_original_node() is source
    assert source.get_original_node() is source
