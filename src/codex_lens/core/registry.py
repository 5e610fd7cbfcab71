from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

import tree_sitter
from tree_sitter import Language as Grammar
from tree_sitter import Parser

from codex_lens.core.languages import Language, resolve_language_id
from codex_lens.core.ports.grammar import GrammarLocator
from codex_lens.core.syntax import SyntaxTree

logger = logging.getLogger(__name__)


class GrammarLoadError(RuntimeError):
    """No usable grammar could be loaded for a language."""


class InitState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


@dataclass(frozen=True, eq=False)
class ParserHandle:
    language: Language
    grammar: Grammar
    parser: Parser
    source: str = ""

    def parse(self, source: bytes) -> SyntaxTree:
        return SyntaxTree(self.parser.parse(source), source)


class ParserRegistry:
    """Resolve language ids to cached, ready-to-use parsers.

    Grammars are located through a ``GrammarLocator`` on first use. A failed
    lookup is never cached, so the next request searches again.
    """

    def __init__(self, locator: GrammarLocator) -> None:
        self._locator = locator
        self._cache: dict[Language, ParserHandle] = {}
        self._state = InitState.UNINITIALIZED
        self._init_task: asyncio.Task[None] | None = None
        self._abi_range: tuple[int, int] | None = None

    @property
    def state(self) -> InitState:
        return self._state

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    async def get_parser(self, language_id: str) -> ParserHandle | None:
        language = resolve_language_id(language_id)
        if language is None:
            logger.debug("No grammar mapping for language id %r", language_id)
            return None

        cached = self._cache.get(language)
        if cached is not None:
            return cached

        try:
            await self.ensure_initialized()
            handle = self._load(language)
        except GrammarLoadError as exc:
            logger.error("%s", exc)
            return None
        except Exception:
            logger.exception("Failed to load grammar for '%s'", language.value)
            return None

        # A concurrent first request may have stored a handle already; keep it.
        return self._cache.setdefault(language, handle)

    async def ensure_initialized(self) -> None:
        """Prepare the tree-sitter runtime once.

        Concurrent first callers share a single initialization task.
        """
        if self._state is InitState.READY:
            return
        if self._init_task is None:
            self._state = InitState.INITIALIZING
            self._init_task = asyncio.get_running_loop().create_task(self._initialize())
        task = self._init_task
        try:
            await asyncio.shield(task)
        except Exception:
            if self._init_task is task:
                self._init_task = None
                self._state = InitState.UNINITIALIZED
            raise

    async def _initialize(self) -> None:
        self._abi_range = (tree_sitter.MIN_COMPATIBLE_LANGUAGE_VERSION, tree_sitter.LANGUAGE_VERSION)
        self._state = InitState.READY
        logger.debug("tree-sitter runtime ready (grammar ABI %d..%d)", *self._abi_range)

    def _load(self, language: Language) -> ParserHandle:
        candidates = self._locator.candidates(language)
        candidate = next((c for c in candidates if c.exists()), None)
        if candidate is None:
            searched = ", ".join(c.description for c in candidates) or "none"
            raise GrammarLoadError(f"No grammar found for language '{language.value}' (searched: {searched})")

        grammar = candidate.load()
        if self._abi_range is not None:
            low, high = self._abi_range
            if not low <= grammar.abi_version <= high:
                raise GrammarLoadError(
                    f"Grammar {candidate.description} has ABI {grammar.abi_version}, runtime supports {low}..{high}"
                )

        logger.info("Loaded tree-sitter grammar %s for '%s'", candidate.description, language.value)
        return ParserHandle(language=language, grammar=grammar, parser=Parser(grammar), source=candidate.description)

    def reset(self) -> None:
        """Drop every cached parser and return to the uninitialized state."""
        self._cache.clear()
        self._init_task = None
        self._abi_range = None
        self._state = InitState.UNINITIALIZED
        logger.info("Parser registry reset")
