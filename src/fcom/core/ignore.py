# src/fcom/core/ignore.py
import sys
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional

from fcom.config import DEFAULT_IGNORE_NAMES, IGNORE_FILE_NAME
from fcom.models import FilterConfig


def read_ignore_file(root_dir: Path) -> List[str]:
    """
    Reads ignore tokens from the folder's .gitignore.

    Each non-empty line that is not a comment becomes one token. Tokens are
    matched against entry names literally: no glob or negation handling.
    """
    ignore_file = root_dir / IGNORE_FILE_NAME
    if not ignore_file.exists():
        return []

    tokens = []
    try:
        with open(ignore_file, "r", encoding="utf-8") as f:
            for line in f:
                stripped = line.strip()
                if stripped and not stripped.startswith("#"):
                    tokens.append(stripped)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Warning: Failed to read {ignore_file.name}: {e}", file=sys.stderr)
    return tokens


def build_ignore_set(extra: Optional[Iterable[str]] = None, ignore_file_dir: Optional[Path] = None) -> FrozenSet[str]:
    """Defaults, plus the ignore file tokens (when a folder is given), plus `extra`."""
    names = set(DEFAULT_IGNORE_NAMES)
    if ignore_file_dir is not None:
        names.update(read_ignore_file(ignore_file_dir))
    if extra:
        names.update(e.strip() for e in extra if e.strip())
    return frozenset(names)


def normalize_extensions(values: Optional[Iterable[str]]) -> Optional[FrozenSet[str]]:
    """'rs', '.rs' and ' rs ' all become 'rs'. Empty or missing input accepts every file."""
    if values is None:
        return None
    exts = frozenset(v.strip().lstrip(".") for v in values if v.strip().lstrip("."))
    return exts or None


def make_filter_config(extensions: Optional[Iterable[str]], ignore: Iterable[str]) -> FilterConfig:
    return FilterConfig(extensions=normalize_extensions(extensions), ignore=frozenset(ignore))


def is_ignored(name: str, ignore: FrozenSet[str]) -> bool:
    return name in ignore


def matches_extension(name: str, extensions: Optional[FrozenSet[str]]) -> bool:
    # Only ever applied to files; directories are always traversed.
    if extensions is None:
        return True
    # The part before the extension must be non-empty: ".rs" has no extension.
    return any(name.endswith("." + ext) and len(name) > len(ext) + 1 for ext in extensions)
