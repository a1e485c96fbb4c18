# src/fcom/models.py
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional


@dataclass(frozen=True)
class FilterConfig:
    """Extension allow-list (None = all files) and exact-name ignore tokens."""
    extensions: Optional[FrozenSet[str]] = None
    ignore: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class RenderedFile:
    """Immutable data class holding one file's template fields."""
    rel_path: str
    name: str
    line_count: int
    modified: str
    content: str

    def template_fields(self) -> dict:
        return {
            "FILE_PATH": self.rel_path,
            "FILE_NAME": self.name,
            "LINES_COUNT": self.line_count,
            "MODIFIED_TIME": self.modified,
            "FILE_CONTENT": self.content,
        }


@dataclass
class CombinedDocument:
    text: str
    files: List[RenderedFile] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.files)
