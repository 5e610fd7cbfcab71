"""Shared fixtures and helpers for tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from tree_sitter import Language, Parser, Query
from tree_sitter_language_pack import get_language, get_parser

from codex_lens import engine
from codex_lens.core.compress import CommentStripper
from codex_lens.core.dependencies import DependencyScanner
from codex_lens.core.registry import ParserRegistry
from codex_lens.core.workspace import StaticWorkspaceRoots
from codex_lens.grammars.locator import DefaultGrammarLocator

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Raw tree-sitter fixtures for query tests
# ---------------------------------------------------------------------------


@pytest.fixture
def queries_dir() -> Path:
    """Return the path to the queries directory."""
    return _REPO_ROOT / "src" / "codex_lens" / "queries"


@pytest.fixture
def python_parser() -> Parser:
    return get_parser("python")


@pytest.fixture
def go_parser() -> Parser:
    return get_parser("go")


@pytest.fixture
def javascript_parser() -> Parser:
    return get_parser("javascript")


@pytest.fixture
def python_language() -> Language:
    return get_language("python")


@pytest.fixture
def go_language() -> Language:
    return get_language("go")


@pytest.fixture
def javascript_language() -> Language:
    return get_language("javascript")


@pytest.fixture
def python_imports_query(queries_dir: Path, python_language: Language) -> Query:
    return Query(python_language, (queries_dir / "python_imports.scm").read_text())


@pytest.fixture
def go_imports_query(queries_dir: Path, go_language: Language) -> Query:
    return Query(go_language, (queries_dir / "go_imports.scm").read_text())


@pytest.fixture
def javascript_imports_query(queries_dir: Path, javascript_language: Language) -> Query:
    return Query(javascript_language, (queries_dir / "javascript_imports.scm").read_text())


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> ParserRegistry:
    return ParserRegistry(DefaultGrammarLocator())


@pytest.fixture
def scanner(registry: ParserRegistry) -> DependencyScanner:
    """Scanner without workspace roots: paths are relative to the importing file."""
    return DependencyScanner(registry)


@pytest.fixture
def ws_scanner(registry: ParserRegistry) -> DependencyScanner:
    """Scanner with ``/ws`` as the only workspace root."""
    return DependencyScanner(registry, StaticWorkspaceRoots(["/ws"]))


@pytest.fixture
def stripper(registry: ParserRegistry) -> CommentStripper:
    return CommentStripper(registry)


@pytest.fixture
def fresh_engine() -> Iterator[None]:
    """Rebuild the process-wide engine objects around a test."""
    engine.reset()
    yield
    engine.reset()
