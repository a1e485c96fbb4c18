# src/fcom/core/tree.py
import os
from pathlib import Path
from typing import FrozenSet, List, Optional

from fcom.core.ignore import is_ignored, matches_extension
from fcom.errors import TraversalError


def _list_entries(path: Path, extensions: Optional[FrozenSet[str]], ignore: FrozenSet[str]) -> List[os.DirEntry]:
    try:
        with os.scandir(path) as it:
            entries = [
                e for e in it
                if not is_ignored(e.name, ignore)
                and (e.is_dir() or matches_extension(e.name, extensions))
            ]
    except OSError as e:
        raise TraversalError(f"Unable to list directory '{path}': {e.strerror or e}") from e
    # Directories first, then alphabetical within each group.
    entries.sort(key=lambda e: (not e.is_dir(), e.name))
    return entries


def render_tree(root_dir: Path, extensions: Optional[FrozenSet[str]], ignore: FrozenSet[str]) -> str:
    """Renders the folder as an indented box-drawing diagram, one entry per line."""
    lines: List[str] = []

    def _generate_lines_recursive(path: Path, prefix: str):
        entries = _list_entries(path, extensions, ignore)
        for i, entry in enumerate(entries):
            is_last = (i == len(entries) - 1)
            connector = "└── " if is_last else "├── "

            if entry.is_dir():
                lines.append(f"{prefix}{connector}{entry.name}/")
                new_prefix = prefix + ("    " if is_last else "│   ")
                _generate_lines_recursive(Path(entry.path), new_prefix)
            else:
                lines.append(f"{prefix}{connector}{entry.name}")

    _generate_lines_recursive(Path(root_dir), "")
    return "".join(line + "\n" for line in lines)
