import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from codex_lens.config import load_settings
from codex_lens.core.compress import CommentStripper
from codex_lens.core.dependencies import DependencyScanner
from codex_lens.core.languages import Language, language_aliases, resolve_language_option
from codex_lens.core.workspace import StaticWorkspaceRoots
from codex_lens.engine import get_registry
from codex_lens.models import CompressionStats, DependencyReport, is_external

console = Console()
err_console = Console(stderr=True)


def _read_source(path: Path, language: str | None) -> tuple[str, str]:
    try:
        language_id = resolve_language_option(language, path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--language") from None
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        raise typer.BadParameter(f"File not found: {path}", param_hint="PATH") from None
    return language_id, content


def deps(
    path: Annotated[Path, typer.Argument(help="Source file to scan.")],
    language: Annotated[str | None, typer.Option(help="Language id (e.g. python, typescriptreact, go).")] = None,
    root: Annotated[list[str] | None, typer.Option(help="Workspace root; repeat for several.")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print a JSON report.")] = False,
) -> None:
    """List the dependencies of a source file."""
    language_id, content = _read_source(path, language)
    file_path = str(path.resolve())
    roots = root if root else load_settings().workspace_roots
    scanner = DependencyScanner(get_registry(), StaticWorkspaceRoots(roots))

    dependencies = asyncio.run(scanner.scan(file_path, content, language_id))
    report = DependencyReport(file_path=file_path, language=language_id, dependencies=dependencies)

    if as_json:
        console.print_json(report.model_dump_json())
        return

    table = Table(show_lines=False)
    table.add_column("kind")
    table.add_column("dependency")
    for token in report.dependencies:
        table.add_row("external" if is_external(token) else "relative", token)
    console.print(table)
    console.print(f"({len(report.dependencies)} dependencies)")


def strip(
    path: Annotated[Path, typer.Argument(help="Source file to compress.")],
    language: Annotated[str | None, typer.Option(help="Language id (e.g. python, typescriptreact, go).")] = None,
    strip_docstrings: Annotated[bool, typer.Option(help="Also remove Python docstrings.")] = False,
    strip_types: Annotated[bool, typer.Option(help="Also remove TypeScript type syntax.")] = False,
    stats: Annotated[bool, typer.Option(help="Print size statistics to stderr.")] = False,
) -> None:
    """Strip comments and minify whitespace, printing the result."""
    language_id, content = _read_source(path, language)
    stripper = CommentStripper(get_registry())

    result = asyncio.run(
        stripper.strip(content, language_id, strip_docstrings=strip_docstrings, strip_types=strip_types)
    )
    typer.echo(result)

    if stats:
        summary = CompressionStats(language=language_id, original_length=len(content), compressed_length=len(result))
        err_console.print(
            f"[green]{summary.original_length} -> {summary.compressed_length} chars[/green] "
            f"({summary.reduction_percent}% reduction)"
        )


def languages() -> None:
    """List supported languages and their aliases."""
    table = Table(show_lines=False)
    table.add_column("language")
    table.add_column("aliases")
    for language in Language:
        table.add_row(language.value, ", ".join(language_aliases(language)))
    console.print(table)
