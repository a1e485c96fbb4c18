# src/fcom/core/scanner.py
import os
from pathlib import Path
from typing import FrozenSet, List, Optional

from fcom.core.ignore import is_ignored, matches_extension
from fcom.errors import TraversalError


def _raise_traversal_error(err: OSError):
    raise TraversalError(f"Unable to list directory '{err.filename}': {err.strerror or err}") from err


def collect_files(root_dir: Path, extensions: Optional[FrozenSet[str]], ignore: FrozenSet[str]) -> List[Path]:
    """
    Walks the directory tree, pruning ignored directories, and returns the
    matching files sorted by full path.
    """
    root_dir = Path(root_dir)
    collected: List[Path] = []

    # os.walk reads `dirs` back after we yield, so removing a name here stops
    # the walk from ever entering that directory.
    for root, dirs, files in os.walk(root_dir, onerror=_raise_traversal_error, followlinks=True):
        root_path = Path(root)

        dirs[:] = [d for d in dirs if not is_ignored(d, ignore)]

        for f in files:
            if is_ignored(f, ignore):
                continue
            if not matches_extension(f, extensions):
                continue
            collected.append(root_path / f)

    collected.sort()
    return collected
