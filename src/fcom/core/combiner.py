# src/fcom/core/combiner.py
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from fcom.config import LINE_NUMBER_WIDTH, TIMESTAMP_FORMAT
from fcom.core.listing import format_file_list
from fcom.core.scanner import collect_files
from fcom.core.template import resolve_templates
from fcom.core.tree import render_tree
from fcom.errors import InputError, OutputWriteError
from fcom.models import CombinedDocument, FilterConfig, RenderedFile


def split_lines(content: str) -> List[str]:
    """Splits on '\\n'; a trailing newline does not open an extra empty line."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def number_lines(lines: List[str]) -> str:
    return "\n".join(f"{i:<{LINE_NUMBER_WIDTH}}| {line}" for i, line in enumerate(lines, start=1))


def format_timestamp(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime(TIMESTAMP_FORMAT)


def read_source(path: Path) -> str:
    """Reads UTF-8 text with line endings left exactly as stored."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def render_file(root_dir: Path, path: Path, add_line_numbers: bool) -> RenderedFile:
    """Reads one file and derives its template fields. Raises OSError/UnicodeDecodeError."""
    content = read_source(path)
    modified = format_timestamp(path.stat().st_mtime)

    lines = split_lines(content)
    formatted = number_lines(lines) if add_line_numbers else content

    return RenderedFile(
        rel_path=path.relative_to(root_dir).as_posix(),
        name=path.name,
        line_count=len(lines),
        modified=modified,
        content=formatted.strip(),
    )


def build_document(
    root_dir: Path,
    filters: FilterConfig,
    add_line_numbers: bool = False,
    mode: str = "xml",
    custom_output_template: Optional[Path] = None,
    custom_file_template: Optional[Path] = None,
) -> CombinedDocument:
    """
    Builds the combined document in memory.

    Files that fail to read are reported on stderr and left out; every other
    failure propagates and nothing is produced.
    """
    root_dir = Path(root_dir)
    if not root_dir.is_dir():
        raise InputError(f"The folder '{root_dir}' does not exist.")

    output_template, file_template = resolve_templates(mode, custom_output_template, custom_file_template)

    all_files = collect_files(root_dir, filters.extensions, filters.ignore)
    folder_tree = render_tree(root_dir, filters.extensions, filters.ignore)
    files_included = format_file_list(root_dir, all_files)

    rendered: List[RenderedFile] = []
    skipped: List[str] = []
    blocks: List[str] = []
    for path in all_files:
        try:
            rf = render_file(root_dir, path, add_line_numbers)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Warning: Couldn't read file '{path}': {e}", file=sys.stderr)
            skipped.append(path.relative_to(root_dir).as_posix())
            continue
        rendered.append(rf)
        blocks.append(file_template.render(rf.template_fields()))

    text = output_template.render({
        "TOTAL_FILES": len(rendered),
        "DATE_GENERATED": datetime.now().strftime(TIMESTAMP_FORMAT),
        "FOLDER_TREE": folder_tree.strip(),
        "FILES_INCLUDED": files_included,
        "FILE_CONTENTS": "".join(blocks),
    })
    return CombinedDocument(text=text, files=rendered, skipped=skipped)


def write_output(output_file: Path, text: str):
    try:
        with open(output_file, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise OutputWriteError(f"Unable to write output file '{output_file}': {e}") from e


def combine(
    root_dir: Path,
    output_file: Path,
    filters: FilterConfig,
    add_line_numbers: bool = False,
    mode: str = "xml",
    custom_output_template: Optional[Path] = None,
    custom_file_template: Optional[Path] = None,
) -> CombinedDocument:
    document = build_document(
        root_dir,
        filters,
        add_line_numbers=add_line_numbers,
        mode=mode,
        custom_output_template=custom_output_template,
        custom_file_template=custom_file_template,
    )
    write_output(Path(output_file), document.text)
    print(f"All files have been processed and combined into '{output_file}' using {mode} mode.")
    return document
