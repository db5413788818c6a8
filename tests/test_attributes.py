"""Tests for attribute merging and unfold."""

import pytest

from dom.node import Element, Text
from simplify import UnfoldRootError, concat_properties_from, unfold


def test_concat_appends_to_existing_values() -> None:
    target = Element("a", {"class": "b", "href": "/x"})
    source = Element("div", {"class": "a", "id": "wrap"})

    concat_properties_from(target, source)

    assert target.attributes == {"class": "b a", "href": "/x", "id": "wrap"}
    assert source.attributes == {"class": "a", "id": "wrap"}


def test_concat_restricted_to_named_properties() -> None:
    target = Element("a")
    concat_properties_from(target, Element("div", {"Class": "a", "style": "x"}), {"class"})
    assert target.attributes == {"Class": "a"}


def test_unfold_promotes_children_in_place() -> None:
    first, second = Element("b"), Text("t")
    wrapper = Element("div", {"class": "w"}, children=[first, second])
    after = Element("p")
    parent = Element("body", children=[wrapper, after])

    promoted = unfold(wrapper, propagate_attributes=True)

    assert promoted == [first, second]
    assert parent.children == (first, second, after)
    assert wrapper.parent is None
    assert wrapper.children == ()
    assert first.get_attribute("class") == "w"
    assert first.parent is parent and second.parent is parent


def test_unfold_without_propagation_keeps_attributes() -> None:
    child = Element("span", {"class": "c"})
    parent = Element("body", children=[Element("div", {"class": "w"}, children=[child])])

    unfold(parent.children[0])

    assert child.attributes == {"class": "c"}


def test_unfold_of_empty_element_just_removes_it() -> None:
    empty = Element("div")
    parent = Element("body", children=[empty])
    assert unfold(empty) == []
    assert parent.children == ()


def test_unfold_root_raises() -> None:
    root = Element("div", children=[Text("x")])
    with pytest.raises(UnfoldRootError):
        unfold(root)
    assert root.children[0].data == "x"


def test_concat_property_names_ignore_case() -> None:
    target = Element("a")
    concat_properties_from(target, Element("div", {"class": "a", "ID": "x"}), {"Class", "id"})
    assert target.attributes == {"class": "a", "ID": "x"}


def test_concat_rejects_a_bare_attribute_name() -> None:
    target = Element("a")
    with pytest.raises(TypeError, match="'class'"):
        concat_properties_from(target, Element("div", {"class": "a", "id": "x"}), "class")
    assert target.attributes == {}


def test_unfold_rejects_a_bare_attribute_name_before_moving_anything() -> None:
    wrapper = Element("div", {"class": "w"}, children=[Text("t"), Element("b")])
    parent = Element("body", children=[wrapper])

    with pytest.raises(TypeError):
        unfold(wrapper, propagate_attributes=True, properties="class")

    assert parent.children == (wrapper,)
    assert len(wrapper.children) == 2
