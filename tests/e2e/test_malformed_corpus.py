"""End-to-end properties over a corpus of broken model output and random text."""

from __future__ import annotations

import random

import pytest

from mermaid_fallback import (
    AsciiRenderer,
    DiagramRenderer,
    GenericGraphSuccess,
    PrimaryEngineSuccess,
    RejectingEngine,
    TextFallback,
    extract_graph,
    sanitize,
    validate_and_sanitize,
)
from mermaid_fallback.layout import layout

CORPUS = [
    "graph TD\nA[Start] --> B[End]",
    "A[Step 1]B[Step 2] --> C[Step 3]",
    "graph TD\nA[**Load** data] --> B[_Clean_ it]\nB --> C[Train 🚀]",
    "flowchart LR\nA[Unclosed --> B(Also unclosed\nB --> C{Decide}",
    "graph TD\n--> A\nB -->\nC --> --> D",
    "graph TD\nA[x]]]\nB[[y]",
    "graph TD\nA -->|yes|B\nA -->|no| C[Stop]",
    "graph\nA((Circle)) ==> B{{Hex}} -.-> C[(DB)]",
    "sequenceDiagram\nAlice->>Bob: Hello 👋\nBob-->>Alice: Hi",
    "mindmap\n  root((Ideas))\n    A\n    B",
    "Here is my plan: first collect data, then train, then deploy.",
    "```mermaid\ngraph TD\nA --> B\n```",
    "graph TD\nA[Line one\nline two] --> B",
    "graph TD\nsubgraph One\nA --> B\nend\nB --> C\nclassDef k fill:#fff\nclass A k",
    "%% only a comment",
    "]]]] [[[[ |||| ---> <--> ==>",
    "flowchart A[Start] --> B[End]",
    "Graph of the process: A[Start] --> B[End]",
    "graph TD; A[Start] --> B[End]",
    "graph TD\nA --> B & C[Salt & Pepper]",
    "graph",
    "graph TD\n" + "\n".join(f"N{i}[Node {i}] --> N{i + 1}[Node {i + 1}]" for i in range(30)),
]

ALPHABET = "AB12_ []()<>{}|-.=>*\n\t\"`%🎯é"


def random_inputs(count: int, seed: int = 1234) -> list[str]:
    rng = random.Random(seed)
    return ["".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, 60))) for _ in range(count)]


INPUTS = CORPUS + random_inputs(150)


@pytest.mark.parametrize("raw", INPUTS)
def test_repair_output_balanced(raw):
    result = validate_and_sanitize(raw)
    assert result.text.count("[") == result.text.count("]")
    assert result.valid == (not result.repairs)


@pytest.mark.parametrize("raw", INPUTS)
def test_extracted_edges_never_dangle(raw):
    for text in (raw, validate_and_sanitize(raw).text):
        graph = extract_graph(text)
        known = {n.id for n in graph.nodes}
        for edge in graph.edges:
            assert edge.source_id in known
            assert edge.target_id in known
        for node in graph.nodes:
            assert 0 < len(node.label) <= 40
            assert "\n" not in node.label


@pytest.mark.parametrize("raw", INPUTS)
def test_layout_and_draw_total(raw):
    graph = extract_graph(validate_and_sanitize(raw).text)
    positioned = layout(graph)
    assert len(positioned.positions) == graph.node_count()
    ys = [positioned.position(n.id).y for n in graph.nodes]
    assert all(a < b for a, b in zip(ys, ys[1:]))
    drawn = AsciiRenderer().render(positioned)
    assert (drawn == "") == graph.is_empty()


@pytest.mark.parametrize("raw", INPUTS)
def test_sanitize_idempotent(raw):
    once = sanitize(raw)
    assert sanitize(once) == once


@pytest.mark.asyncio
async def test_render_always_yields_one_variant():
    renderer = DiagramRenderer(RejectingEngine())
    for raw in INPUTS:
        result = await renderer.render(raw)
        assert isinstance(result, (PrimaryEngineSuccess, GenericGraphSuccess, TextFallback))
        if isinstance(result, TextFallback):
            assert result.text
            assert len(result.text) <= 303
