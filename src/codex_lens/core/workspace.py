from collections.abc import Iterable
from pathlib import PurePath


class StaticWorkspaceRoots:
    """Workspace roots from a fixed, ordered list.

    A file belongs to the first root that contains it. Files outside every
    root fall back to the first root.
    """

    def __init__(self, roots: Iterable[str] = ()) -> None:
        self._roots = [str(root) for root in roots]

    def root_for(self, file_path: str) -> str | None:
        path = PurePath(file_path)
        for root in self._roots:
            if path.is_relative_to(root):
                return root
        return self._roots[0] if self._roots else None
