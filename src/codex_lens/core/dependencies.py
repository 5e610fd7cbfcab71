"""Import/dependency extraction from syntax trees.

Every scan returns a list of dependency tokens: either a forward-slash path
relative to the workspace root (or the importing file's directory), or
``external:<name>`` for anything that is not a relative import.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping, Sequence

from tree_sitter import Node, QueryCursor

from codex_lens.core.languages import Language
from codex_lens.core.patterns import QueryCache, import_patterns_for, load_pattern_source
from codex_lens.core.ports.workspace import WorkspaceRootProvider
from codex_lens.core.registry import ParserRegistry
from codex_lens.core.resolver import format_relative_import, resolve_import_path, resolve_python_relative
from codex_lens.core.syntax import SyntaxTree
from codex_lens.models import EXTERNAL_PREFIX

logger = logging.getLogger(__name__)

_QUOTES = "'\"`"

Captures = Mapping[str, Sequence[Node]]


class DependencySet:
    """Insertion-ordered set of dependency tokens.

    Adding a token that is already present is a no-op: the first occurrence
    keeps its position.
    """

    def __init__(self) -> None:
        self._tokens: dict[str, None] = {}

    def add(self, token: str) -> None:
        self._tokens.setdefault(token, None)

    def add_external(self, name: str) -> None:
        self.add(f"{EXTERNAL_PREFIX}{name}")

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def to_list(self) -> list[str]:
        return list(self._tokens)


def strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return text


class _ScanContext:
    def __init__(self, tree: SyntaxTree, base_dir: str, workspace_root: str | None) -> None:
        self.tree = tree
        self.base_dir = base_dir
        self.workspace_root = workspace_root
        self.dependencies = DependencySet()

    def text(self, captures: Captures, name: str) -> str | None:
        nodes = captures.get(name)
        if not nodes:
            return None
        return self.tree.wrap(nodes[0]).text()

    def add_path(self, resolved_path: str) -> None:
        self.dependencies.add(format_relative_import(resolved_path, self.workspace_root, self.base_dir))


class DependencyScanner:
    def __init__(
        self,
        registry: ParserRegistry,
        workspace: WorkspaceRootProvider | None = None,
        queries: QueryCache | None = None,
    ) -> None:
        self._registry = registry
        self._workspace = workspace
        self._queries = queries if queries is not None else QueryCache()

    @property
    def queries(self) -> QueryCache:
        return self._queries

    async def scan(self, file_path: str, content: str, language_id: str) -> list[str]:
        """Return the dependency tokens of ``content``. Never raises."""
        base_dir = os.path.dirname(file_path)

        handle = await self._registry.get_parser(language_id)
        if handle is None:
            logger.warning("Failed to get parser for language: %s in %s", language_id, file_path)
            return []

        workspace_root = self._workspace.root_for(file_path) if self._workspace is not None else None
        if workspace_root is None:
            logger.debug("Workspace root not found, resolving %s relative to its directory", file_path)

        try:
            tree = handle.parse(content.encode("utf-8"))
        except Exception:
            logger.exception("Error parsing %s file %s", language_id, file_path)
            return []

        pattern_set = import_patterns_for(handle.language)
        if pattern_set is None:
            logger.warning("No import query defined for language: %s", language_id)
            return []

        ctx = _ScanContext(tree, base_dir, workspace_root)
        try:
            query = self._queries.get(handle, pattern_set)
            for _, captures in QueryCursor(query).matches(tree.root.raw):
                if handle.language is Language.PYTHON and self._handle_python_match(ctx, captures):
                    continue
                self._handle_path_match(ctx, captures)
        except Exception:
            # Tokens collected before the failure are still returned.
            logger.exception(
                "Error executing import query for %s in %s: query=\n%s",
                language_id,
                file_path,
                load_pattern_source(pattern_set),
            )
        return ctx.dependencies.to_list()

    def _handle_path_match(self, ctx: _ScanContext, captures: Captures) -> None:
        func = ctx.text(captures, "func")
        if func is not None and func != "require":
            return

        raw = ctx.text(captures, "path")
        if raw is None:
            return
        specifier = strip_quotes(raw)
        if not specifier.strip():
            return

        if specifier.startswith("."):
            ctx.add_path(resolve_import_path(specifier, ctx.base_dir))
        else:
            ctx.dependencies.add_external(specifier)

    def _handle_python_match(self, ctx: _ScanContext, captures: Captures) -> bool:
        dots = ctx.text(captures, "dots")
        module = ctx.text(captures, "module")
        item_name = ctx.text(captures, "item_name")

        if dots is not None:
            tail = module if module is not None else (item_name or "")
            ctx.add_path(resolve_python_relative(dots.count("."), tail, ctx.base_dir))
            return True

        if module is not None:
            if not module:
                return True
            if module.startswith("."):
                ctx.add_path(resolve_import_path(module, ctx.base_dir))
                return True
            ctx.dependencies.add_external(module.split(".")[0])
            return True

        if item_name:
            ctx.dependencies.add_external(item_name.split(".")[0])
            return True

        return False


async def scan_dependencies(file_path: str, content: str, language_id: str) -> list[str]:
    """Scan with the process-wide scanner from ``codex_lens.engine``."""
    from codex_lens.engine import get_scanner

    return await get_scanner().scan(file_path, content, language_id)
