import os
from pathlib import Path

PROBE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".py", ".go")


def _resolve(base_dir: str, *segments: str) -> str:
    return os.path.abspath(os.path.join(base_dir, *segments))


def resolve_import_path(specifier: str, base_dir: str) -> str:
    """Resolve a relative import specifier to an absolute path.

    Extensionless specifiers are probed against ``PROBE_EXTENSIONS`` on disk;
    when nothing exists the extensionless path is returned.
    """
    if os.path.splitext(specifier)[1]:
        return _resolve(base_dir, specifier)

    for ext in PROBE_EXTENSIONS:
        candidate = _resolve(base_dir, specifier + ext)
        if Path(candidate).exists():
            return candidate

    return _resolve(base_dir, specifier)


def resolve_python_relative(dot_count: int, tail: str, base_dir: str) -> str:
    """Resolve ``from <dots><tail> import ...`` against the importing file's directory.

    One dot is the current package, each further dot goes up one directory.
    """
    segments = [".."] * max(dot_count - 1, 0)
    if tail:
        # a.b names the nested package directory a/b
        segments.extend(tail.split("."))
    return _resolve(base_dir, *segments)


def format_relative_import(target_path: str, workspace_root: str | None, base_dir: str) -> str:
    base = workspace_root if workspace_root is not None else base_dir
    try:
        relative = os.path.relpath(target_path, base)
    except ValueError:
        # different drives on Windows
        relative = target_path
    return (relative or ".").replace("\\", "/")
