from enum import Enum
from pathlib import Path


class Language(str, Enum):
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    PYTHON = "python"
    GO = "go"
    CSS = "css"
    RUBY = "ruby"
    CSHARP = "csharp"
    C = "c"
    CPP = "cpp"
    RUST = "rust"
    JAVA = "java"
    YAML = "yaml"
    INI = "ini"
    REGEX = "regex"


_LANGUAGE_ALIASES = {
    "c#": Language.CSHARP,
    "csharp": Language.CSHARP,
    "cs": Language.CSHARP,
    "c": Language.C,
    "cpp": Language.CPP,
    "c++": Language.CPP,
    "css": Language.CSS,
    "scss": Language.CSS,
    "less": Language.CSS,
    "go": Language.GO,
    "golang": Language.GO,
    "ini": Language.INI,
    "properties": Language.INI,
    "java": Language.JAVA,
    "javascript": Language.JAVASCRIPT,
    "javascriptreact": Language.JAVASCRIPT,
    "js": Language.JAVASCRIPT,
    "jsx": Language.JAVASCRIPT,
    "python": Language.PYTHON,
    "py": Language.PYTHON,
    "rb": Language.RUBY,
    "ruby": Language.RUBY,
    "regex": Language.REGEX,
    "rs": Language.RUST,
    "rust": Language.RUST,
    "ts": Language.TYPESCRIPT,
    "typescript": Language.TYPESCRIPT,
    "tsx": Language.TSX,
    "typescriptreact": Language.TSX,
    "yaml": Language.YAML,
    "yml": Language.YAML,
}

_EXTENSION_LANGUAGE_MAP = {
    ".c": "c",
    ".cc": "cpp",
    ".cjs": "javascript",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".css": "css",
    ".cxx": "cpp",
    ".go": "go",
    ".h": "c",
    ".hh": "cpp",
    ".hpp": "cpp",
    ".ini": "ini",
    ".java": "java",
    ".js": "javascript",
    ".jsx": "jsx",
    ".less": "less",
    ".mjs": "javascript",
    ".properties": "properties",
    ".py": "python",
    ".rb": "ruby",
    ".rs": "rust",
    ".scss": "scss",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".yaml": "yaml",
    ".yml": "yaml",
}

_INDENT_SENSITIVE_LANGUAGES = frozenset({Language.PYTHON, Language.YAML})
# Raw ids for languages without a grammar.
_INDENT_SENSITIVE_IDS = frozenset({"makefile", "make"})

JS_FAMILY = frozenset({Language.JAVASCRIPT, Language.TYPESCRIPT, Language.TSX})
TYPESCRIPT_FAMILY = frozenset({Language.TYPESCRIPT, Language.TSX})


def resolve_language_id(language_id: str) -> Language | None:
    """Map an editor/user language id to a supported ``Language``, or ``None``."""
    return _LANGUAGE_ALIASES.get(language_id.strip().lower())


def language_aliases(language: Language) -> list[str]:
    return sorted(alias for alias, target in _LANGUAGE_ALIASES.items() if target is language)


def is_indent_sensitive(language_id: str) -> bool:
    normalized = language_id.strip().lower()
    return normalized in _INDENT_SENSITIVE_IDS or resolve_language_id(normalized) in _INDENT_SENSITIVE_LANGUAGES


def detect_language_id(file_path: Path) -> str:
    """Return the language id for a file extension.

    Makefiles are recognised by name since they have no extension.
    """
    if file_path.name.lower() in {"makefile", "gnumakefile"}:
        return "makefile"
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def resolve_language_option(language: str | None, file_path: Path | None) -> str:
    if language:
        return language.strip().lower()
    if file_path:
        return detect_language_id(file_path)
    raise ValueError("Language must be provided when no file path is available.")
