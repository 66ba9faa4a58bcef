"""End-to-end behaviour of TemplateEngine.render / render_with_layout."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path

import pytest

from stencil import (
    ConfigurationError,
    CyclicIncludeError,
    EngineConfig,
    ExpressionEvaluationError,
    RenderDepthExceededError,
    TemplateEngine,
    TemplateNotFoundError,
    create_template_engine,
)


def _include_chain(length: int) -> dict:
    """t0 includes t1 ... t{length-1} includes t{length}, which prints 'end'."""
    templates = {f"t{i}.html": f"<t{i + 1}/>" for i in range(length)}
    templates[f"t{length}.html"] = "end"
    return templates


class TestConstruction:
    def test_requires_a_directory(self) -> None:
        with pytest.raises(ConfigurationError):
            TemplateEngine(EngineConfig(directories=()))

    def test_accepts_bare_directory_list(self, template_dir: Path, write_templates) -> None:
        write_templates(template_dir, {"a.html": "A"})
        engine = create_template_engine([template_dir])
        assert engine.list_template_names() == ["a"]

    def test_accepts_mapping(self, template_dir: Path, write_templates) -> None:
        write_templates(template_dir, {"a.html": "A"})
        engine = create_template_engine({"directories": [str(template_dir)], "maxDepth": 3})
        assert engine.config.max_depth == 3
        assert engine.render("a") == "A"

    def test_constructor_does_not_scan(self, template_dir: Path, write_templates) -> None:
        write_templates(template_dir, {"a.html": "A"})
        engine = TemplateEngine([template_dir])
        assert engine.list_template_names() == []
        assert engine.reload() == 1


class TestListing:
    def test_names_sorted_without_duplicates(self, tmp_path: Path, write_templates) -> None:
        first = write_templates(tmp_path / "one", {"b.html": "B", "A.html": "A1"})
        second = write_templates(tmp_path / "two", {"sub/c.htm": "C", "a.tpl": "A2"})
        engine = create_template_engine([first, second])
        assert engine.list_template_names() == ["a", "b", "c"]
        # Later directory wins
        assert engine.render("a") == "A2"

    def test_reload_picks_up_new_files(self, make_engine, template_dir: Path) -> None:
        engine = make_engine({"a.html": "A"})
        (template_dir / "b.html").write_text("B", encoding="utf-8")
        assert engine.list_template_names() == ["a"]
        assert engine.reload() == 2
        assert engine.list_template_names() == ["a", "b"]


class TestRender:
    def test_unregistered_template_raises(self, make_engine) -> None:
        engine = make_engine({"a.html": "A"})
        with pytest.raises(TemplateNotFoundError) as exc_info:
            engine.render("Missing", {})
        assert exc_info.value.name == "Missing"

    def test_escaped_and_raw_interpolation(self, make_engine) -> None:
        engine = make_engine({"esc.html": "{{ v }}", "raw.html": "{{{ v }}}"})
        assert engine.render("esc", {"v": "<b>"}) == "&lt;b&gt;"
        assert engine.render("raw", {"v": "<b>"}) == "<b>"

    def test_loop_preserves_order(self, make_engine) -> None:
        engine = make_engine({"list.html": '<ul><li x-for="items">{{ item.n }}</li></ul>'})
        html = engine.render("list", {"items": [{"n": 1}, {"n": 2}, {"n": 3}]})
        assert html == "<ul><li>1</li><li>2</li><li>3</li></ul>"

    def test_loop_over_null_removes_element(self, make_engine) -> None:
        engine = make_engine({"list.html": '<ul><li x-for="items">{{ item.n }}</li></ul>'})
        assert engine.render("list", {"items": None}) == "<ul></ul>"

    def test_conditional(self, make_engine) -> None:
        engine = make_engine({"c.html": '<div><p x-if="show">{{ msg }}</p></div>'})
        assert engine.render("c", {"show": False, "msg": "hi"}) == "<div></div>"
        assert engine.render("c", {"show": True, "msg": "hi"}) == "<div><p>hi</p></div>"

    def test_self_include_is_cyclic(self, make_engine) -> None:
        engine = make_engine({"a.html": "<div><a/></div>"})
        with pytest.raises(CyclicIncludeError) as exc_info:
            engine.render("a")
        assert exc_info.value.chain == ["a", "a"]

    def test_include_chain_of_fifty_succeeds(self, make_engine) -> None:
        engine = make_engine(_include_chain(50))
        assert engine.render("t0") == "end"

    def test_include_chain_of_fifty_one_exceeds_depth(self, make_engine) -> None:
        engine = make_engine(_include_chain(51))
        with pytest.raises(RenderDepthExceededError) as exc_info:
            engine.render("t0")
        assert exc_info.value.max_depth == 50

    def test_case_insensitive_lookup_by_file_name(self, make_engine) -> None:
        engine = make_engine({"UserCard.html": "<div>card</div>"})
        assert engine.render("usercard", {}) == "<div>card</div>"
        assert engine.render("USERCARD", {}) == "<div>card</div>"

    def test_undefined_identifier_renders_empty(self, make_engine) -> None:
        engine = make_engine({"a.html": "[{{ nope }}]"})
        assert engine.render("a", {}) == "[]"

    def test_invalid_syntax_names_expression(self, make_engine) -> None:
        engine = make_engine({"a.html": "{{ )( }}"})
        with pytest.raises(ExpressionEvaluationError) as exc_info:
            engine.render("a", {})
        assert exc_info.value.expression == ")("
        assert ")(" in str(exc_info.value)

    def test_data_object_fields_and_root(self, make_engine) -> None:
        @dataclass
        class Page:
            title: str
            count: int

        engine = make_engine({"p.html": "{{ title }}/{{ $root.count }}"})
        assert engine.render("p", Page(title="T", count=2)) == "T/2"

    def test_none_data(self, make_engine) -> None:
        engine = make_engine({"p.html": "<p>{{ title }}</p>"})
        assert engine.render("p") == "<p></p>"

    def test_caller_data_not_mutated(self, make_engine) -> None:
        engine = make_engine({"p.html": '<i x-for="xs">{{ item }}</i>'})
        data = {"xs": [1, 2]}
        engine.render("p", data)
        assert data == {"xs": [1, 2]}

    def test_markup_without_directives_is_unchanged(self, make_engine) -> None:
        source = '<!DOCTYPE html>\n<html lang="en">\n<body class="x">\n  <br>\n  <img src="a.png"/>\n</body>\n</html>\n'
        engine = make_engine({"plain.html": source})
        assert engine.render("plain") == source

    def test_registered_string_template(self, make_engine) -> None:
        engine = make_engine({"a.html": "A"})
        engine.register("Inline", "<b>{{ x }}</b>")
        assert engine.render("inline", {"x": 1}) == "<b>1</b>"


class TestRenderWithLayout:
    def test_layout_receives_content(self, make_engine) -> None:
        engine = make_engine({
            "layout.html": "<h1>{{ title }}</h1>{{{ content }}}",
            "page.html": "<p>Hi</p>",
        })
        assert engine.render_with_layout("layout", "page", {"title": "T"}) == "<h1>T</h1><p>Hi</p>"

    def test_custom_content_variable(self, make_engine) -> None:
        engine = make_engine({
            "layout.html": "<main>{{{ body }}}</main>",
            "page.html": "<p>{{ who }}</p>",
        })
        html = engine.render_with_layout("layout", "page", {"who": "me"}, content_var_name="body")
        assert html == "<main><p>me</p></main>"

    def test_configured_content_variable(self, make_engine) -> None:
        engine = make_engine(
            {"layout.html": "<main>{{{ inner }}}</main>", "page.html": "x"},
            content_var_name="inner",
        )
        assert engine.render_with_layout("layout", "page") == "<main>x</main>"

    def test_inner_content_is_not_interpolated_again(self, make_engine) -> None:
        engine = make_engine({
            "layout.html": "{{{ content }}}",
            "page.html": "{{{ snippet }}}",
        })
        html = engine.render_with_layout("layout", "page", {"snippet": "{{ secret }}", "secret": "s"})
        assert html == "{{ secret }}"

    def test_escaped_content_variable(self, make_engine) -> None:
        engine = make_engine({"layout.html": "{{ content }}", "page.html": "<p>Hi</p>"})
        assert engine.render_with_layout("layout", "page") == "&lt;p&gt;Hi&lt;/p&gt;"

    def test_missing_layout(self, make_engine) -> None:
        engine = make_engine({"page.html": "x"})
        with pytest.raises(TemplateNotFoundError) as exc_info:
            engine.render_with_layout("Layout", "page")
        assert exc_info.value.name == "Layout"


class TestConcurrency:
    def test_renders_during_reloads_see_whole_snapshots(self, make_engine, template_dir: Path) -> None:
        engine = make_engine({"page.html": "<x-part/>|<x-part/>", "x-part.html": "v1"})
        errors = []
        stop = threading.Event()

        def reloader() -> None:
            while not stop.is_set():
                engine.reload()

        def renderer() -> None:
            for _ in range(200):
                html = engine.render("page")
                left, right = html.split("|")
                if left != right:
                    errors.append(html)

        thread = threading.Thread(target=reloader)
        thread.start()
        try:
            (template_dir / "x-part.html").write_text("v2", encoding="utf-8")
            renderer()
        finally:
            stop.set()
            thread.join()
        assert errors == []
