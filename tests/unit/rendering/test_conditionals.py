"""Tests for the x-if conditional directive."""
from __future__ import annotations

import pytest

from stencil.core.exceptions import ExpressionEvaluationError


class TestConditionals:
    def test_true_keeps_element_and_strips_directive(self, render) -> None:
        assert render('<p class="a" x-if="ok">yes</p>', {"ok": True}) == '<p class="a">yes</p>'

    def test_false_removes_subtree(self, render) -> None:
        assert render('<div>a<p x-if="ok"><b>x</b></p>b</div>', {"ok": False}) == "<div>ab</div>"

    def test_removed_subtree_is_not_evaluated(self, render) -> None:
        assert render('<div x-if="false"><span>{{ )( }}</span></div>') == ""

    @pytest.mark.parametrize("value", [None, 0, "", False, float("nan")])
    def test_falsy_values(self, render, value) -> None:
        assert render('<i x-if="v">x</i>', {"v": value}) == ""

    @pytest.mark.parametrize("value", [1, "0", "false", [], {}, -1])
    def test_truthy_values(self, render, value) -> None:
        assert render('<i x-if="v">x</i>', {"v": value}) == "<i>x</i>"

    @pytest.mark.parametrize("source", ['<p x-if="">a</p>', "<p x-if>a</p>", '<p x-if="  ">a</p>'])
    def test_empty_directive_left_alone(self, render, source) -> None:
        assert render(source) == source

    def test_missing_name_is_false(self, render) -> None:
        assert render('<i x-if="nope">x</i>') == ""

    def test_compound_expression(self, render) -> None:
        source = '<p x-if="user.age >= 18 && !user.banned">adult</p>'
        assert render(source, {"user": {"age": 20, "banned": False}}) == "<p>adult</p>"
        assert render(source, {"user": {"age": 20, "banned": True}}) == ""
        assert render(source, {"user": {"age": 12}}) == ""

    def test_body_uses_surrounding_scope(self, render) -> None:
        assert render('<p x-if="show">{{ msg }}</p>', {"show": 1, "msg": "hi"}) == "<p>hi</p>"

    def test_nested_conditionals(self, render) -> None:
        source = '<div x-if="a"><p x-if="b">ab</p><p x-if="!b">a</p></div>'
        assert render(source, {"a": True, "b": False}) == "<div><p>a</p></div>"

    def test_void_and_self_closing_elements(self, render) -> None:
        assert render('<img x-if="no" src="a.png">', {"no": False}) == ""
        assert render('<br x-if="yes"/>', {"yes": True}) == "<br/>"

    def test_invalid_expression_raises(self, render) -> None:
        with pytest.raises(ExpressionEvaluationError) as exc_info:
            render('<p x-if="a ==">x</p>', {"a": 1})
        assert exc_info.value.expression == "a =="

    def test_type_error_raises(self, render) -> None:
        with pytest.raises(ExpressionEvaluationError):
            render('<p x-if="name > 3">x</p>', {"name": "abc"})
