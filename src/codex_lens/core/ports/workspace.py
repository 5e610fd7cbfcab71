from typing import Protocol


class WorkspaceRootProvider(Protocol):
    def root_for(self, file_path: str) -> str | None: ...
