import os

from pydantic import BaseModel

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    workspace_roots: list[str] = []
    prefer_standalone_grammars: bool = False
    log_level: str = "WARNING"


def load_settings() -> Settings:
    """Read settings from ``CODEX_LENS_*`` environment variables."""
    roots = os.getenv("CODEX_LENS_WORKSPACE_ROOTS", "")
    return Settings(
        workspace_roots=[root for root in roots.split(os.pathsep) if root],
        prefer_standalone_grammars=os.getenv("CODEX_LENS_PREFER_STANDALONE_GRAMMARS", "").strip().lower() in _TRUTHY,
        log_level=os.getenv("CODEX_LENS_LOG_LEVEL", "WARNING").upper(),
    )
