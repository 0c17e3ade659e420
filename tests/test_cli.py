"""CLI tests via click's CliRunner (offline: --engine none)."""

from click.testing import CliRunner

from mermaid_fallback.__main__ import main


def run(args, input=None):
    return CliRunner().invoke(main, ["--engine", "none", *args], input=input)


def test_stdin_renders_text_graph():
    result = run([], input="graph TD\nA[Start] --> B[End]\n")
    assert result.exit_code == 0
    assert "│ Start │" in result.output
    assert "▼" in result.output


def test_ascii_flag():
    result = run(["--ascii"], input="graph TD\nA[Start] --> B[End]\n")
    assert result.exit_code == 0
    assert "+-------+" in result.output
    assert "│" not in result.output


def test_empty_input_placeholder():
    result = run([], input="")
    assert result.exit_code == 0
    assert result.output == "No diagram provided\n"


def test_prose_prints_text():
    result = run([], input="nothing to draw here\n")
    assert result.exit_code == 0
    assert result.output == "nothing to draw here\n"


def test_file_input(tmp_path):
    src = tmp_path / "flow.mmd"
    src.write_text("graph TD\nA[One] --> B[Two]\n")
    result = run([str(src)])
    assert result.exit_code == 0
    assert "One" in result.output


def test_missing_file_exits_1(tmp_path):
    result = run([str(tmp_path / "missing.mmd")])
    assert result.exit_code == 1
    assert "error: cannot read" in result.output


def test_output_file(tmp_path):
    out = tmp_path / "out.txt"
    result = run(["--output", str(out)], input="graph TD\nA --> B\n")
    assert result.exit_code == 0
    assert "▼" in out.read_text(encoding="utf-8")


def test_unwritable_output_exits_1(tmp_path):
    result = run(["--output", str(tmp_path / "no" / "such" / "dir.txt")], input="graph TD\nA --> B\n")
    assert result.exit_code == 1
    assert "error: cannot write" in result.output


def test_markdown_message():
    message = "Here you go:\n\n```mermaid\ngraph TD\nA[Ask] --> B[Answer]\n```\n"
    result = run(["--markdown"], input=message)
    assert result.exit_code == 0
    assert "Ask" in result.output
    assert "Here you go" not in result.output


def test_show_repairs():
    result = run(["--show-repairs"], input="A[Emoji 🎯] --> B\n")
    assert result.exit_code == 0
    assert "missing-header" in result.output
    assert "non-ascii-in-label" in result.output


def test_missing_mmdc_still_renders(tmp_path):
    result = CliRunner().invoke(main, ["--mmdc", str(tmp_path / "no-mmdc")], input="graph TD\nA --> B\n")
    assert result.exit_code == 0
    assert "▼" in result.output
