# tests/test_combiner.py

import re
import pytest

import fcom.core.combiner as combiner
from fcom.core.combiner import build_document, combine, number_lines, split_lines
from fcom.core.ignore import make_filter_config
from fcom.errors import ConfigurationError, InputError, OutputWriteError
from fcom.models import FilterConfig


@pytest.fixture
def three_files(tmp_path):
    root = tmp_path / "proj"
    root.mkdir()
    (root / "a.txt").write_text("one\ntwo\nthree\n", encoding="utf-8")
    (root / "b.txt").write_text("single line", encoding="utf-8")
    (root / "sub").mkdir()
    (root / "sub" / "c.txt").write_text("x\ny\n", encoding="utf-8")
    return root


def test_split_lines():
    assert split_lines("") == []
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("a\nb\n") == ["a", "b"]
    assert split_lines("a\n\nb") == ["a", "", "b"]
    assert split_lines("a\r\nb\r\n") == ["a", "b"]


def test_number_lines():
    assert number_lines(split_lines("a\nb")) == "1     | a\n2     | b"


def test_xml_document(three_files):
    doc = build_document(three_files, FilterConfig())

    assert doc.total_files == 3
    assert "Total files: 3" in doc.text
    assert re.search(r"Date generated: \d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", doc.text)
    assert "Files included:\n- a.txt\n- b.txt\n- sub/c.txt\n</file_overview>" in doc.text
    assert "Folder Structure:\n├── sub/\n│   └── c.txt\n├── a.txt\n└── b.txt\n\nFiles included:" in doc.text

    assert doc.text.count("<file path=") == 3
    assert '<file path="a.txt" lines="3" modified="' in doc.text
    assert '<file path="b.txt" lines="1" modified="' in doc.text
    assert '<file path="sub/c.txt" lines="2" modified="' in doc.text
    assert '">\none\ntwo\nthree\n</file>' in doc.text
    assert re.search(r'modified="\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"', doc.text)


def test_file_blocks_in_sorted_order(three_files):
    doc = build_document(three_files, FilterConfig())
    positions = [doc.text.index(f'<file path="{p}"') for p in ("a.txt", "b.txt", "sub/c.txt")]
    assert positions == sorted(positions)


def test_markdown_document_with_line_numbers(three_files):
    doc = build_document(three_files, FilterConfig(), add_line_numbers=True, mode="markdown")

    assert "- **Total files:** 3" in doc.text
    assert "### c.txt" in doc.text
    assert "- **Path:** `sub/c.txt`" in doc.text
    assert "- **Lines:** 2" in doc.text
    assert "```\n1     | x\n2     | y\n```" in doc.text


def test_extension_filter_scenario(tmp_path):
    (tmp_path / "x.rs").write_text("".join(f"line {i}\n" for i in range(10)), encoding="utf-8")
    (tmp_path / "y.md").write_text("".join(f"line {i}\n" for i in range(5)), encoding="utf-8")

    doc = build_document(tmp_path, make_filter_config(["rs"], []))

    assert doc.total_files == 1
    assert '<file path="x.rs" lines="10"' in doc.text
    assert "y.md" not in doc.text


def test_custom_templates(three_files, tmp_path):
    outer = tmp_path / "outer.tpl"
    outer.write_text("N={TOTAL_FILES} {UNKNOWN}\n{FILE_CONTENTS}", encoding="utf-8")
    inner = tmp_path / "inner.tpl"
    inner.write_text("[{FILE_NAME}:{LINES_COUNT}]", encoding="utf-8")

    doc = build_document(
        three_files, FilterConfig(), mode="custom",
        custom_output_template=outer, custom_file_template=inner,
    )
    assert doc.text == "N=3 {UNKNOWN}\n[a.txt:3][b.txt:1][c.txt:2]"


def test_content_is_not_reexpanded(tmp_path):
    (tmp_path / "tpl.txt").write_text("uses {FILE_PATH} and {TOTAL_FILES}\n", encoding="utf-8")
    doc = build_document(tmp_path, FilterConfig())
    assert "uses {FILE_PATH} and {TOTAL_FILES}" in doc.text


def test_missing_folder_raises(tmp_path):
    with pytest.raises(InputError):
        build_document(tmp_path / "nope", FilterConfig())


def test_custom_mode_missing_file_template_writes_nothing(three_files, tmp_path):
    outer = tmp_path / "outer.tpl"
    outer.write_text("{FILE_CONTENTS}", encoding="utf-8")
    output = tmp_path / "out.txt"

    with pytest.raises(ConfigurationError):
        combine(three_files, output, FilterConfig(), mode="custom", custom_output_template=outer)
    assert not output.exists()


def test_unreadable_file_is_skipped(three_files, monkeypatch, capsys):
    real_collect = combiner.collect_files

    def collect_then_remove(root, extensions, ignore):
        files = real_collect(root, extensions, ignore)
        (three_files / "b.txt").unlink()
        return files

    monkeypatch.setattr(combiner, "collect_files", collect_then_remove)

    doc = build_document(three_files, FilterConfig())

    assert doc.total_files == 2
    assert doc.skipped == ["b.txt"]
    assert "Total files: 2" in doc.text
    assert doc.text.count("<file path=") == 2
    assert "Warning: Couldn't read file" in capsys.readouterr().err


def test_invalid_utf8_is_skipped(three_files, capsys):
    (three_files / "blob.bin").write_bytes(b"\xff\xfe\x00bad")
    doc = build_document(three_files, FilterConfig())
    assert doc.total_files == 3
    assert doc.skipped == ["blob.bin"]
    assert "blob.bin" in capsys.readouterr().err


def test_combine_writes_and_overwrites(three_files, tmp_path, capsys):
    output = tmp_path / "combined.txt"
    output.write_text("stale", encoding="utf-8")

    combine(three_files, output, FilterConfig(), mode="markdown")

    content = output.read_text(encoding="utf-8")
    assert "stale" not in content
    assert content.startswith("# File Overview")
    assert "using markdown mode" in capsys.readouterr().out


def test_combine_unwritable_output(three_files, tmp_path):
    with pytest.raises(OutputWriteError):
        combine(three_files, tmp_path / "missing-dir" / "out.txt", FilterConfig())


def test_line_endings_kept_as_stored(tmp_path):
    (tmp_path / "w.txt").write_bytes(b"a\r\nb\r\n")
    (tmp_path / "m.txt").write_bytes(b"a\rb")

    doc = build_document(tmp_path, FilterConfig())

    assert '<file path="w.txt" lines="2"' in doc.text
    assert '">\na\r\nb\n</file>' in doc.text
    # A lone carriage return does not end a line.
    assert '<file path="m.txt" lines="1"' in doc.text
    assert '">\na\rb\n</file>' in doc.text


def test_line_numbers_drop_carriage_returns(tmp_path):
    (tmp_path / "w.txt").write_bytes(b"a\r\nb\r\n")
    doc = build_document(tmp_path, FilterConfig(), add_line_numbers=True)
    assert doc.files[0].content == "1     | a\n2     | b"


def test_combine_writes_crlf_unchanged(tmp_path):
    root = tmp_path / "proj"
    root.mkdir()
    (root / "w.txt").write_bytes(b"a\r\nb\r\n")
    output = tmp_path / "out.txt"

    combine(root, output, FilterConfig())

    assert b"a\r\nb\n</file>" in output.read_bytes()
