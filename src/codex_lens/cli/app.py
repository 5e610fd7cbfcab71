import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from codex_lens.cli.analyze import deps, languages, strip
from codex_lens.config import load_settings

app = typer.Typer(
    name="codex-lens",
    help="Codex Lens CLI: extract dependencies and strip comments with tree-sitter.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _configure(
    log_level: Annotated[str | None, typer.Option(help="Log level (default from CODEX_LENS_LOG_LEVEL).")] = None,
) -> None:
    level = (log_level or load_settings().log_level).upper()
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


app.command("deps")(deps)
app.command("strip")(strip)
app.command("languages")(languages)


def main() -> None:
    app()
