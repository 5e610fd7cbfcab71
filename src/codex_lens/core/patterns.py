from __future__ import annotations

import functools
import logging
from enum import Enum
from pathlib import Path

from tree_sitter import Query

from codex_lens.core.languages import JS_FAMILY, Language
from codex_lens.core.registry import ParserHandle

logger = logging.getLogger(__name__)

_QUERIES_DIR = Path(__file__).parent.parent / "queries"


class PatternSet(str, Enum):
    JAVASCRIPT_IMPORTS = "javascript_imports"
    PYTHON_IMPORTS = "python_imports"
    GO_IMPORTS = "go_imports"


def import_patterns_for(language: Language) -> PatternSet | None:
    if language in JS_FAMILY:
        return PatternSet.JAVASCRIPT_IMPORTS
    if language is Language.PYTHON:
        return PatternSet.PYTHON_IMPORTS
    if language is Language.GO:
        return PatternSet.GO_IMPORTS
    return None


@functools.cache
def load_pattern_source(pattern_set: PatternSet) -> str:
    query_path = _QUERIES_DIR / f"{pattern_set.value}.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    return query_path.read_text(encoding="utf-8")


class QueryCache:
    """Compiled queries keyed by (language, pattern source)."""

    def __init__(self) -> None:
        self._queries: dict[tuple[Language, str], Query] = {}

    def __len__(self) -> int:
        return len(self._queries)

    def get(self, handle: ParserHandle, pattern_set: PatternSet) -> Query:
        source = load_pattern_source(pattern_set)
        key = (handle.language, source)
        query = self._queries.get(key)
        if query is None:
            query = Query(handle.grammar, source)
            self._queries[key] = query
            logger.debug("Compiled %s query for '%s'", pattern_set.value, handle.language.value)
        return query

    def clear(self) -> None:
        self._queries.clear()
