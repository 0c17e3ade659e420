"""Tests for mermaid_fallback.syntax.fence."""

from mermaid_fallback.syntax.fence import extract_diagram


def test_fenced_block():
    message = "Here is the flow:\n\n```mermaid\ngraph TD\nA --> B\n```\n\nHope it helps."
    assert extract_diagram(message) == "graph TD\nA --> B"


def test_first_fence_wins():
    message = "```mermaid\ngraph TD\nA --> B\n```\nand\n```mermaid\ngraph LR\nC --> D\n```"
    assert extract_diagram(message) == "graph TD\nA --> B"


def test_unterminated_fence_runs_to_end():
    assert extract_diagram("```mermaid\ngraph TD\nA --> B") == "graph TD\nA --> B"


def test_fence_info_string_case_insensitive():
    assert extract_diagram("```Mermaid title\npie\n```") == "pie"


def test_bare_header_without_fence():
    message = "Sure!\ngraph LR\nA --> B"
    assert extract_diagram(message) == "graph LR\nA --> B"


def test_other_fences_ignored():
    assert extract_diagram("```python\nprint('graph')\n```") == ""


def test_nothing_found():
    assert extract_diagram("no diagram here, just a graph of words") == ""
