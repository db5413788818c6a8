"""Tests for HTML parsing, conversion and serialisation."""

import pytest
from bs4 import BeautifulSoup

from dom.node import Element, Other, Text
from dom.serialize import to_html, to_soup
from dom.soup import body_of, from_soup, parse_html


def test_body_of_converts_elements_text_and_comments() -> None:
    body = body_of('<html><body><div class="a b" id="x">Hi<!-- note --></div></body></html>')

    assert body.tag == "body"
    div = body.children[0]
    assert isinstance(div, Element)
    assert div.attributes == {"class": "a b", "id": "x"}
    text, comment = div.children
    assert isinstance(text, Text) and text.data == "Hi"
    assert isinstance(comment, Other) and comment.name == "comment"
    assert comment.data == " note "


def test_from_soup_of_document_uses_root_element() -> None:
    converted = from_soup(parse_html("<!DOCTYPE html><html><body><p>x</p></body></html>"))
    assert isinstance(converted, Element)
    assert converted.tag == "html"


def test_from_soup_of_empty_document_raises() -> None:
    with pytest.raises(ValueError, match="no element"):
        from_soup(BeautifulSoup("", "lxml"))


def test_declarative_shadow_root_is_out_of_band() -> None:
    body = body_of(
        '<body><div id="host"><template shadowrootmode="open"><p>inside</p></template>'
        "<span>light</span></div></body>"
    )
    host = body.children[0]

    assert [c.tag for c in host.children] == ["span"]
    assert host.shadow_root is not None
    assert host.shadow_root.mode == "open"
    assert host.shadow_root.children[0].tag == "p"
    assert host.shadow_root.children[0].parent is host.shadow_root


def test_plain_template_stays_a_child() -> None:
    body = body_of("<body><div><template><p>x</p></template></div></body>")
    assert body.children[0].children[0].tag == "template"


def test_to_html_compact() -> None:
    tree = Element("div", {"class": "a"}, children=[Text("x < y"), Element("b", children=[Text("bold")])])
    assert to_html(tree) == '<div class="a">x &lt; y<b>bold</b></div>'


def test_to_html_pretty_puts_tags_on_their_own_lines() -> None:
    tree = Element("div", children=[Element("span", children=[Text("Hi")])])
    lines = [line.strip() for line in to_html(tree, pretty=True).splitlines()]
    assert lines == ["<div>", "<span>", "Hi", "</span>", "</div>"]


def test_to_html_writes_comments_and_shadow_roots() -> None:
    host = Element("div", children=[Other("c")])
    host.attach_shadow().append_child(Element("p", children=[Text("s")]))

    html = to_html(host)

    assert html == '<div><template shadowrootmode="open"><p>s</p></template><!--c--></div>'


def test_shadow_root_survives_serialise_and_parse() -> None:
    host = Element("div")
    host.attach_shadow().append_child(Element("p", children=[Text("s")]))

    body = body_of(to_html(host))

    assert body.children[0].shadow_root.children[0].text_content() == "s"


def test_to_soup_returns_document() -> None:
    soup = to_soup(Element("p", children=[Text("x")]))
    assert soup.find("p").get_text() == "x"


def test_to_html_keeps_attribute_order() -> None:
    link = Element("a", {"href": "/cart", "class": "cart", "data-x": "1 < 2"}, children=[Text("Cart")])

    assert to_html(link) == '<a href="/cart" class="cart" data-x="1 &lt; 2">Cart</a>'
    assert to_html(link, pretty=True).splitlines()[0] == '<a href="/cart" class="cart" data-x="1 &lt; 2">'
