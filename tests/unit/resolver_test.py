"""Unit tests for import path resolution and formatting."""

from pathlib import Path

from codex_lens.core.resolver import format_relative_import, resolve_import_path, resolve_python_relative


def test_specifier_with_extension_resolves_directly() -> None:
    assert resolve_import_path("./style.css", "/a/b") == "/a/b/style.css"
    assert resolve_import_path("../lib/util.js", "/a/b") == "/a/lib/util.js"


def test_missing_file_returns_extensionless_path() -> None:
    assert resolve_import_path("./utils", "/nonexistent/dir") == "/nonexistent/dir/utils"


def test_probes_extensions_in_order(tmp_path: Path) -> None:
    (tmp_path / "utils.js").write_text("")
    (tmp_path / "utils.tsx").write_text("")
    assert resolve_import_path("./utils", str(tmp_path)) == str(tmp_path / "utils.tsx")

    (tmp_path / "utils.ts").write_text("")
    assert resolve_import_path("./utils", str(tmp_path)) == str(tmp_path / "utils.ts")


def test_probes_python_and_go_files(tmp_path: Path) -> None:
    (tmp_path / "helpers.py").write_text("")
    (tmp_path / "server.go").write_text("")
    assert resolve_import_path("./helpers", str(tmp_path)) == str(tmp_path / "helpers.py")
    assert resolve_import_path("./server", str(tmp_path)) == str(tmp_path / "server.go")


def test_python_relative_single_dot_is_current_package() -> None:
    assert resolve_python_relative(1, "models", "/ws/pkg") == "/ws/pkg/models"
    assert resolve_python_relative(1, "", "/ws/pkg") == "/ws/pkg"


def test_python_relative_extra_dots_go_up() -> None:
    assert resolve_python_relative(2, "config", "/ws/src") == "/ws/config"
    assert resolve_python_relative(3, "pkg.sub", "/ws/a/b") == "/ws/pkg/sub"


def test_format_relative_to_workspace_root() -> None:
    assert format_relative_import("/ws/src/utils", "/ws", "/ws/src") == "src/utils"


def test_format_falls_back_to_base_dir() -> None:
    assert format_relative_import("/ws/config", None, "/ws/src") == "../config"


def test_format_same_directory_is_dot() -> None:
    assert format_relative_import("/ws/src", None, "/ws/src") == "."
    assert format_relative_import("/ws", "/ws", "/ws/src") == "."
