"""Process-wide registry, scanner and stripper, created lazily on first use."""

from __future__ import annotations

from codex_lens.config import Settings, load_settings
from codex_lens.core.compress import CommentStripper
from codex_lens.core.dependencies import DependencyScanner
from codex_lens.core.registry import ParserRegistry
from codex_lens.core.workspace import StaticWorkspaceRoots
from codex_lens.grammars.locator import DefaultGrammarLocator

_registry: ParserRegistry | None = None
_scanner: DependencyScanner | None = None
_stripper: CommentStripper | None = None


def build_registry(settings: Settings) -> ParserRegistry:
    return ParserRegistry(DefaultGrammarLocator(prefer_standalone=settings.prefer_standalone_grammars))


def get_registry() -> ParserRegistry:
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = build_registry(load_settings())
    return _registry


def get_scanner() -> DependencyScanner:
    global _scanner  # noqa: PLW0603
    if _scanner is None:
        _scanner = DependencyScanner(get_registry(), StaticWorkspaceRoots(load_settings().workspace_roots))
    return _scanner


def get_stripper() -> CommentStripper:
    global _stripper  # noqa: PLW0603
    if _stripper is None:
        _stripper = CommentStripper(get_registry())
    return _stripper


def reset() -> None:
    """Forget the process-wide objects; the next call rebuilds them from settings."""
    global _registry, _scanner, _stripper  # noqa: PLW0603
    if _scanner is not None:
        _scanner.queries.clear()
    if _registry is not None:
        _registry.reset()
    _registry = None
    _scanner = None
    _stripper = None
