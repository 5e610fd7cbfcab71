"""Unit tests for the import queries."""

from tree_sitter import Parser, Query, QueryCursor


def get_captures_with_text(query: Query, parser: Parser, source: str) -> dict[str, list[str]]:
    """Parse source and return capture names mapped to their matched text."""
    source_bytes = source.encode("utf-8")
    tree = parser.parse(source_bytes)
    cursor = QueryCursor(query)
    result: dict[str, list[str]] = {}
    for _, matched_captures in cursor.matches(tree.root_node):
        for cap_name, nodes in matched_captures.items():
            result.setdefault(cap_name, [])
            for node in nodes:
                result[cap_name].append(source_bytes[node.start_byte : node.end_byte].decode("utf-8"))
    return result


class TestJavaScriptImportsQuery:
    def test_captures_static_import_source(self, javascript_imports_query: Query, javascript_parser: Parser) -> None:
        captures = get_captures_with_text(javascript_imports_query, javascript_parser, "import React from 'react';")
        assert captures["path"] == ["'react'"]

    def test_captures_dynamic_import(self, javascript_imports_query: Query, javascript_parser: Parser) -> None:
        source = "async function f() { await import('./lazy'); }"
        captures = get_captures_with_text(javascript_imports_query, javascript_parser, source)
        assert captures["path"] == ["'./lazy'"]

    def test_captures_require_only(self, javascript_imports_query: Query, javascript_parser: Parser) -> None:
        source = "const a = require('fs');\nconst b = load('./nope');"
        captures = get_captures_with_text(javascript_imports_query, javascript_parser, source)
        assert captures["path"] == ["'fs'"]
        assert captures["func"] == ["require"]

    def test_captures_reexport_source(self, javascript_imports_query: Query, javascript_parser: Parser) -> None:
        source = "export { a } from './a';\nexport * from \"./b\";\nexport const c = 1;"
        captures = get_captures_with_text(javascript_imports_query, javascript_parser, source)
        assert captures["path"] == ["'./a'", '"./b"']


class TestPythonImportsQuery:
    def test_captures_plain_import(self, python_imports_query: Query, python_parser: Parser) -> None:
        captures = get_captures_with_text(python_imports_query, python_parser, "import os.path")
        assert captures["module"] == ["os.path"]

    def test_captures_aliased_import(self, python_imports_query: Query, python_parser: Parser) -> None:
        captures = get_captures_with_text(python_imports_query, python_parser, "import numpy as np")
        assert captures["module"] == ["numpy"]

    def test_captures_from_import_module(self, python_imports_query: Query, python_parser: Parser) -> None:
        captures = get_captures_with_text(python_imports_query, python_parser, "from collections.abc import Mapping")
        assert captures["module"] == ["collections.abc"]
        assert "item_name" not in captures

    def test_captures_relative_module_and_dots_separately(
        self, python_imports_query: Query, python_parser: Parser
    ) -> None:
        captures = get_captures_with_text(python_imports_query, python_parser, "from ..pkg.mod import z")
        assert captures["dots"] == [".."]
        assert captures["module"] == ["pkg.mod"]
        assert "item_name" not in captures

    def test_captures_relative_item_names(self, python_imports_query: Query, python_parser: Parser) -> None:
        captures = get_captures_with_text(python_imports_query, python_parser, "from . import a, b as c")
        assert captures["dots"] == [".", "."]
        assert captures["item_name"] == ["a", "b"]
        assert "module" not in captures

    def test_captures_relative_wildcard(self, python_imports_query: Query, python_parser: Parser) -> None:
        captures = get_captures_with_text(python_imports_query, python_parser, "from .. import *")
        assert captures["dots"] == [".."]


class TestGoImportsQuery:
    def test_captures_single_and_grouped_imports(self, go_imports_query: Query, go_parser: Parser) -> None:
        source = 'package main\n\nimport "fmt"\n\nimport (\n\t"os"\n\tstr "strings"\n)\n'
        captures = get_captures_with_text(go_imports_query, go_parser, source)
        assert captures["path"] == ['"fmt"', '"os"', '"strings"']

    def test_captures_raw_string_import(self, go_imports_query: Query, go_parser: Parser) -> None:
        captures = get_captures_with_text(go_imports_query, go_parser, "package main\n\nimport `fmt`\n")
        assert captures["path"] == ["`fmt`"]
