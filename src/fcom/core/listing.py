# src/fcom/core/listing.py
from pathlib import Path
from typing import FrozenSet, List, Optional

from fcom.core.scanner import collect_files


def format_file_list(root_dir: Path, files: List[Path]) -> str:
    return "\n".join(f"- {f.relative_to(root_dir).as_posix()}" for f in files)


def create_file_list(root_dir: Path, extensions: Optional[FrozenSet[str]], ignore: FrozenSet[str]) -> str:
    """Bullet list of every included file, relative to `root_dir`."""
    root_dir = Path(root_dir)
    return format_file_list(root_dir, collect_files(root_dir, extensions, ignore))
