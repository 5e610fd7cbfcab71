from __future__ import annotations

import importlib
import importlib.util
from collections.abc import Sequence
from dataclasses import dataclass
from typing import cast

from tree_sitter import Language as Grammar
from tree_sitter_language_pack import SupportedLanguage, get_language

from codex_lens.core.languages import Language
from codex_lens.core.ports.grammar import GrammarCandidate

# Standalone grammar wheels: (module, attribute returning the language pointer)
_STANDALONE_GRAMMARS: dict[Language, tuple[str, str]] = {
    Language.C: ("tree_sitter_c", "language"),
    Language.CPP: ("tree_sitter_cpp", "language"),
    Language.CSHARP: ("tree_sitter_c_sharp", "language"),
    Language.CSS: ("tree_sitter_css", "language"),
    Language.GO: ("tree_sitter_go", "language"),
    Language.INI: ("tree_sitter_ini", "language"),
    Language.JAVA: ("tree_sitter_java", "language"),
    Language.JAVASCRIPT: ("tree_sitter_javascript", "language"),
    Language.PYTHON: ("tree_sitter_python", "language"),
    Language.REGEX: ("tree_sitter_regex", "language"),
    Language.RUBY: ("tree_sitter_ruby", "language"),
    Language.RUST: ("tree_sitter_rust", "language"),
    Language.TSX: ("tree_sitter_typescript", "language_tsx"),
    Language.TYPESCRIPT: ("tree_sitter_typescript", "language_typescript"),
    Language.YAML: ("tree_sitter_yaml", "language"),
}

_LANGUAGE_PACK_MODULE = "tree_sitter_language_pack"


def _module_available(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False


@dataclass(frozen=True)
class LanguagePackGrammar:
    """Grammar compiled into ``tree_sitter_language_pack``."""

    name: str

    @property
    def description(self) -> str:
        return f"{_LANGUAGE_PACK_MODULE}:{self.name}"

    def exists(self) -> bool:
        return _module_available(_LANGUAGE_PACK_MODULE)

    def load(self) -> Grammar:
        return get_language(cast(SupportedLanguage, self.name))


@dataclass(frozen=True)
class StandaloneGrammar:
    """Grammar shipped as its own ``tree_sitter_<lang>`` wheel."""

    module: str
    attribute: str

    @property
    def description(self) -> str:
        return f"{self.module}.{self.attribute}"

    def exists(self) -> bool:
        return _module_available(self.module)

    def load(self) -> Grammar:
        module = importlib.import_module(self.module)
        return Grammar(getattr(module, self.attribute)())


class DefaultGrammarLocator:
    """Locate grammars in the language pack and in standalone grammar wheels.

    The language pack is searched first unless ``prefer_standalone`` is set.
    """

    def __init__(self, prefer_standalone: bool = False) -> None:
        self._prefer_standalone = prefer_standalone

    def candidates(self, language: Language) -> Sequence[GrammarCandidate]:
        found: list[GrammarCandidate] = [LanguagePackGrammar(language.value)]
        standalone = _STANDALONE_GRAMMARS.get(language)
        if standalone is not None:
            module, attribute = standalone
            if self._prefer_standalone:
                found.insert(0, StandaloneGrammar(module, attribute))
            else:
                found.append(StandaloneGrammar(module, attribute))
        return found
