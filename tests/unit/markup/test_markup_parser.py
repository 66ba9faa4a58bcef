"""Tests for the markup tag-structure parser."""
from __future__ import annotations

from stencil.core.markup import Element, Text, parse_attributes, parse_markup


def _element(source: str) -> Element:
    nodes = parse_markup(source)
    assert len(nodes) == 1 and isinstance(nodes[0], Element)
    return nodes[0]


class TestStructure:
    def test_plain_text(self) -> None:
        assert parse_markup("hello") == (Text("hello"),)

    def test_empty_source(self) -> None:
        assert parse_markup("") == ()

    def test_same_name_nesting_pairs_by_depth(self) -> None:
        outer = _element("<div><div>a</div>b</div>")
        assert outer.close_tag == "</div>"
        inner, tail = outer.children
        assert isinstance(inner, Element) and inner.children == (Text("a"),)
        assert tail == Text("b")

    def test_void_elements_take_no_children(self) -> None:
        br, p = parse_markup("<br><p>x</p>")
        assert br.tag == "br" and br.children == () and br.close_tag is None
        assert not br.self_closing
        assert p.children == (Text("x"),)

    def test_self_closing(self) -> None:
        card = _element('<Card title="x"/>')
        assert card.self_closing
        assert card.tag == "Card"
        assert card.get("title").value == "x"

    def test_raw_text_body_not_parsed(self) -> None:
        script = _element('<script>if (a < b) { el.innerHTML = "<p x-if=\'z\'>"; }</script>')
        assert script.children == (Text('if (a < b) { el.innerHTML = "<p x-if=\'z\'>"; }'),)

    def test_comment_is_text(self) -> None:
        assert parse_markup('<!-- <div x-if="a"> -->') == (Text('<!-- <div x-if="a"> -->'),)

    def test_doctype_is_text(self) -> None:
        assert parse_markup("<!DOCTYPE html>") == (Text("<!DOCTYPE html>"),)

    def test_expression_regions_skipped(self) -> None:
        assert parse_markup("{{ a<b }} and {{{ c>d }}}") == (Text("{{ a<b }} and {{{ c>d }}}"),)

    def test_unclosed_braces_do_not_hide_markup(self) -> None:
        p, ul = parse_markup('<p>Use {{ to open</p><ul><li x-for="xs">{{ item }}</li></ul>')
        assert p.children == (Text("Use {{ to open"),)
        (li,) = ul.children
        assert li.get("x-for").value == "xs"
        assert li.children == (Text("{{ item }}"),)

    def test_braces_closed_past_markup_are_text(self) -> None:
        code, li = parse_markup('<code>{{</code><li x-for="xs">{{ item }}</li>')
        assert code.children == (Text("{{"),)
        assert li.tag == "li" and li.children == (Text("{{ item }}"),)

    def test_braces_before_another_opening_are_text(self) -> None:
        assert parse_markup("{{ {{ a }}") == (Text("{{ {{ a }}"),)

    def test_lone_less_than_is_text(self) -> None:
        assert parse_markup("a < b") == (Text("a < b"),)

    def test_unmatched_close_tag_is_text(self) -> None:
        assert parse_markup("a</span>b") == (Text("a</span>b"),)

    def test_unclosed_inner_element_children_become_siblings(self) -> None:
        div = _element("<div><p>x</div>")
        p, text = div.children
        assert p.tag == "p" and p.children == () and p.close_tag is None
        assert text == Text("x")

    def test_unclosed_at_end(self) -> None:
        p, text = parse_markup("<p>x")
        assert p.open_tag == "<p>" and p.close_tag is None
        assert text == Text("x")

    def test_close_tags_case_insensitive(self) -> None:
        div = _element("<DIV>x</div>")
        assert div.close_tag == "</div>"

    def test_open_tag_source_preserved(self) -> None:
        div = _element('<div  class="a"\n  id=b >x</div>')
        assert div.open_tag == '<div  class="a"\n  id=b >'

    def test_parse_is_cached(self) -> None:
        assert parse_markup("<i>x</i>") is parse_markup("<i>x</i>")


class TestAttributes:
    def test_quoting_styles_and_valueless(self) -> None:
        attrs = parse_attributes(' class="a b" data-x=\'y\' n=1 hidden')
        assert [(a.name, a.value) for a in attrs] == [
            ("class", "a b"),
            ("data-x", "y"),
            ("n", "1"),
            ("hidden", None),
        ]
        assert attrs[0].raw == 'class="a b"'

    def test_quoted_value_may_contain_angle_brackets(self) -> None:
        el = _element('<p x-if="a > b && c < d">x</p>')
        assert el.get("x-if").value == "a > b && c < d"

    def test_get_is_case_insensitive(self) -> None:
        el = _element('<p X-IF="ok">x</p>')
        assert el.has("x-if")
        assert el.get("missing") is None

    def test_without_and_rebuild(self) -> None:
        el = _element('<li class="a" x-for="xs" x-row="r">x</li>')
        attrs = el.without("x-for", "x-row")
        assert el.build_open_tag(attrs) == '<li class="a">'
