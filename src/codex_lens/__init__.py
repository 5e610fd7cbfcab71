from codex_lens.core.compress import CommentStripper, basic_whitespace_minify, minify_whitespace, strip_comments
from codex_lens.core.dependencies import DependencyScanner, DependencySet, scan_dependencies
from codex_lens.core.languages import Language, resolve_language_id
from codex_lens.core.registry import GrammarLoadError, InitState, ParserHandle, ParserRegistry

__all__ = [
    "CommentStripper",
    "DependencyScanner",
    "DependencySet",
    "GrammarLoadError",
    "InitState",
    "Language",
    "ParserHandle",
    "ParserRegistry",
    "basic_whitespace_minify",
    "minify_whitespace",
    "resolve_language_id",
    "scan_dependencies",
    "strip_comments",
]
