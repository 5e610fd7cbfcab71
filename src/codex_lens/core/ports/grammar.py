from collections.abc import Sequence
from typing import Protocol

from tree_sitter import Language as Grammar

from codex_lens.core.languages import Language


class GrammarCandidate(Protocol):
    @property
    def description(self) -> str: ...

    def exists(self) -> bool: ...

    def load(self) -> Grammar: ...


class GrammarLocator(Protocol):
    def candidates(self, language: Language) -> Sequence[GrammarCandidate]: ...
