"""Comment stripping and whitespace minification.

Comments are removed by deleting the byte ranges of comment nodes. Whitespace
is then collapsed everywhere except inside protected literal nodes (strings,
regexes, templates, preprocessor lines), which are copied verbatim.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from codex_lens.core.languages import TYPESCRIPT_FAMILY, Language, is_indent_sensitive
from codex_lens.core.registry import ParserRegistry
from codex_lens.core.syntax import ByteRange, SyntaxNode, SyntaxTree
from codex_lens.models import CompressionStats

logger = logging.getLogger(__name__)

COMMENT_KINDS = frozenset({"comment", "line_comment", "block_comment"})

PROTECTED_KINDS = frozenset(
    {
        "string",
        "raw_string",
        "template_string",
        "regex",
        "preproc_directive",
        "string_literal",
        "template_literal",
        "regular_expression",
        "quoted_string",
        "backtick_string",
        "interpreted_string_literal",
        "raw_string_literal",
        "char_literal",
        "character_literal",
        "heredoc_body",
        "preproc_include",
        "preproc_def",
        "preproc_function_def",
        "preproc_call",
    }
)

_TS_REMOVED_KINDS = frozenset(
    {
        "type_annotation",
        "type_parameters",
        "type_arguments",
        "implements_clause",
        "readonly_modifier",
        "abstract_modifier",
        "override_modifier",
    }
)
_TS_DECLARATION_KINDS = frozenset({"interface_declaration", "type_alias_declaration"})
_TS_ASSERTION_KINDS = frozenset({"as_expression", "satisfies_expression", "non_null_expression"})
_TS_TYPE_ONLY_STATEMENT = re.compile(rb"^\s*(?:import|export)\s+type\b")

_INLINE_SPACE = re.compile(r"[ \t\u00a0]+")
_NEWLINE_RUN = re.compile(r"\s*\n+\s*")
_LEADING_INDENT = re.compile(r"^[ \t]+")


def minify_segment(
    segment: str,
    language_id: str,
    *,
    at_line_start: bool = True,
    before_protected: bool = False,
) -> str:
    """Collapse whitespace in code that contains no protected literals.

    Indent-sensitive languages keep every newline and reduce any indentation
    to a single tab; everything else is flattened onto one line.

    ``at_line_start`` is false when the segment continues a line that began
    before it, and ``before_protected`` is true when a protected literal
    follows on the segment's last line. Both only matter for indent-sensitive
    languages.
    """
    if not is_indent_sensitive(language_id):
        return _NEWLINE_RUN.sub(" ", _INLINE_SPACE.sub(" ", segment))

    lines = segment.split("\n")
    last_index = len(lines) - 1
    out: list[str] = []
    for index, line in enumerate(lines):
        if index == 0 and not at_line_start:
            out.append(line)
        elif line.strip():
            out.append(_LEADING_INDENT.sub("\t", line))
        elif index == last_index and before_protected and line:
            # indentation of a line that starts with a literal
            out.append("\t")
        else:
            out.append("")
    return "\n".join(out)


def basic_whitespace_minify(code: str, language_id: str) -> str:
    """Minify without a syntax tree, used when no parser is available."""
    return minify_segment(code, language_id).strip()


def _starts_line(source: bytes, offset: int) -> bool:
    return offset == 0 or source[offset - 1 : offset] == b"\n"


def merge_ranges(ranges: Iterable[ByteRange]) -> list[ByteRange]:
    merged: list[ByteRange] = []
    for start, end in sorted(ranges):
        if merged and start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = ByteRange(last.start, max(last.end, end))
        else:
            merged.append(ByteRange(start, end))
    return merged


def remove_ranges(source: bytes, ranges: Iterable[ByteRange]) -> bytes:
    pieces: list[bytes] = []
    last = 0
    for start, end in merge_ranges(ranges):
        pieces.append(source[last:start])
        last = end
    pieces.append(source[last:])
    return b"".join(pieces)


def expand_to_line(span: ByteRange, source: bytes) -> ByteRange:
    """Widen ``span`` over surrounding blanks and one trailing line break."""
    start, end = span
    while start > 0 and source[start - 1 : start] in (b" ", b"\t"):
        start -= 1
    while end < len(source) and source[end : end + 1] in (b" ", b"\t"):
        end += 1
    if source[end : end + 2] == b"\r\n":
        end += 2
    elif source[end : end + 1] == b"\n":
        end += 1
    return ByteRange(start, end)


def _leading_docstring(body: SyntaxNode) -> SyntaxNode | None:
    for child in body.named_children:
        if child.kind == "comment":
            continue
        if child.kind == "expression_statement":
            named = child.named_children
            if len(named) == 1 and "string" in named[0].kind:
                return child
        return None
    return None


def python_docstring_ranges(tree: SyntaxTree) -> list[ByteRange]:
    """Ranges of module, class and function docstrings.

    A docstring that is the only statement of a class or function body is kept
    so the body stays non-empty.
    """
    ranges: list[ByteRange] = []
    for node in tree.root.walk():
        if node.kind == "module":
            body: SyntaxNode | None = node
        elif node.kind in ("function_definition", "class_definition"):
            body = node.field("body")
        else:
            continue
        if body is None:
            continue
        docstring = _leading_docstring(body)
        if docstring is None:
            continue
        if body is not node and len([c for c in body.named_children if c.kind != "comment"]) == 1:
            continue
        ranges.append(expand_to_line(docstring.byte_range(), tree.source))
    return ranges


def typescript_type_ranges(tree: SyntaxTree) -> list[ByteRange]:
    source = tree.source
    root = tree.root
    ranges = [node.byte_range() for node in root.descendants_of_kind(_TS_REMOVED_KINDS)]

    for node in root.descendants_of_kind(_TS_DECLARATION_KINDS):
        parent = node.parent
        target = parent if parent is not None and parent.kind == "export_statement" else node
        ranges.append(expand_to_line(target.byte_range(), source))

    for node in root.walk():
        if node.kind in _TS_ASSERTION_KINDS:
            named = node.named_children
            if named:
                start = named[0].byte_range().end
                end = node.byte_range().end
                if start < end:
                    ranges.append(ByteRange(start, end))
        elif node.kind in ("import_statement", "export_statement"):
            start, end = node.byte_range()
            if _TS_TYPE_ONLY_STATEMENT.match(source[start:end]):
                ranges.append(expand_to_line(ByteRange(start, end), source))
    return ranges


class CommentStripper:
    def __init__(self, registry: ParserRegistry) -> None:
        self._registry = registry

    async def strip(
        self,
        code: str,
        language_id: str,
        *,
        strip_docstrings: bool = False,
        strip_types: bool = False,
    ) -> str:
        """Remove comments and minify whitespace. Returns ``code`` unchanged on any internal error."""
        try:
            return await self._strip(code, language_id, strip_docstrings, strip_types)
        except Exception:
            logger.exception("Error stripping comments for %s", language_id)
            return code

    async def _strip(self, code: str, language_id: str, strip_docstrings: bool, strip_types: bool) -> str:
        handle = await self._registry.get_parser(language_id)
        if handle is None:
            logger.info("Unsupported language for compression: %s, applying basic whitespace minification", language_id)
            return basic_whitespace_minify(code, language_id)

        try:
            tree = handle.parse(code.encode("utf-8"))
        except Exception:
            logger.warning("Failed to parse %s code, applying basic whitespace minification", language_id, exc_info=True)
            return basic_whitespace_minify(code, language_id)

        ranges = [node.byte_range() for node in tree.root.descendants_of_kind(COMMENT_KINDS)]
        comments_removed = len(ranges)
        docstrings: list[ByteRange] = []
        if strip_docstrings and handle.language is Language.PYTHON:
            docstrings = python_docstring_ranges(tree)
            ranges.extend(docstrings)
        if strip_types and handle.language in TYPESCRIPT_FAMILY:
            ranges.extend(typescript_type_ranges(tree))

        result = remove_ranges(tree.source, ranges).decode("utf-8") if ranges else code
        result = await self.minify_whitespace(result, language_id)

        stats = CompressionStats(
            language=language_id,
            original_length=len(code),
            compressed_length=len(result),
            comments_removed=comments_removed,
            docstrings_removed=len(docstrings),
        )
        logger.debug(
            "Compressed %s code: removed %d comments and %d docstrings (%d -> %d chars, %d%% reduction)",
            language_id,
            stats.comments_removed,
            stats.docstrings_removed,
            stats.original_length,
            stats.compressed_length,
            stats.reduction_percent,
        )
        return result

    async def minify_whitespace(self, code: str, language_id: str) -> str:
        try:
            handle = await self._registry.get_parser(language_id)
            if handle is None:
                return basic_whitespace_minify(code, language_id)

            tree = handle.parse(code.encode("utf-8"))
            source = tree.source
            pieces: list[str] = []
            last = 0
            for node in tree.root.descendants_of_kind(PROTECTED_KINDS):
                start, end = node.byte_range()
                pieces.append(
                    minify_segment(
                        source[last:start].decode("utf-8"),
                        language_id,
                        at_line_start=_starts_line(source, last),
                        before_protected=True,
                    )
                )
                pieces.append(source[start:end].decode("utf-8"))
                last = end
            pieces.append(
                minify_segment(source[last:].decode("utf-8"), language_id, at_line_start=_starts_line(source, last))
            )
            return "".join(pieces).strip()
        except Exception as exc:
            logger.warning("Error minifying whitespace for %s: %s", language_id, exc)
            return basic_whitespace_minify(code, language_id)


def _stripper_for(registry: ParserRegistry | None) -> CommentStripper:
    from codex_lens.engine import get_stripper

    return get_stripper() if registry is None else CommentStripper(registry)


async def strip_comments(
    code: str,
    language_id: str,
    registry: ParserRegistry | None = None,
    *,
    strip_docstrings: bool = False,
    strip_types: bool = False,
) -> str:
    """Strip comments using ``registry`` for parsers (the process-wide one by default)."""
    stripper = _stripper_for(registry)
    return await stripper.strip(code, language_id, strip_docstrings=strip_docstrings, strip_types=strip_types)


async def minify_whitespace(code: str, language_id: str, registry: ParserRegistry | None = None) -> str:
    return await _stripper_for(registry).minify_whitespace(code, language_id)
