import sys
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'stencil'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from stencil import EngineConfig, TemplateEngine, create_template_engine  # noqa: E402


def _write_templates(root: Path, templates: Dict[str, str]) -> Path:
    """Write ``{relative_path: body}`` below ``root`` and return ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, body in templates.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    return root


@pytest.fixture
def write_templates() -> Callable[[Path, Dict[str, str]], Path]:
    """Helper writing `{relative_path: body}` below a directory."""
    return _write_templates


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Empty template directory."""
    root = tmp_path / "templates"
    root.mkdir()
    return root


@pytest.fixture
def make_engine(template_dir: Path) -> Callable[..., TemplateEngine]:
    """Factory: write templates into ``template_dir`` and return a loaded engine."""

    def _make(templates: Dict[str, str], **options) -> TemplateEngine:
        _write_templates(template_dir, templates)
        return create_template_engine(EngineConfig(directories=(template_dir,), **options))

    return _make


@pytest.fixture
def render() -> Callable[..., str]:
    """Render a source string directly, with optional in-memory templates."""
    from types import MappingProxyType

    from stencil.core.expressions import Scope
    from stencil.core.registry import TemplateRecord, normalize_name
    from stencil.core.rendering import DirectiveRenderer, RenderContext

    renderer = DirectiveRenderer()

    def _render(source: str, data=None, templates: Optional[Dict[str, str]] = None, max_depth: int = 50) -> str:
        records = {
            normalize_name(name): TemplateRecord(name=normalize_name(name), source=body)
            for name, body in (templates or {}).items()
        }
        context = RenderContext(
            records=MappingProxyType(records),
            normalize=normalize_name,
            scope=Scope.root(data),
            max_depth=max_depth,
        )
        return renderer.render_source(source, context)

    return _render
