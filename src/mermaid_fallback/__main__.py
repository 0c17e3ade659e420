"""CLI entry point for mermaid-fallback."""

import asyncio
import logging
import sys

import click

from mermaid_fallback.engines import MermaidCliEngine, RejectingEngine
from mermaid_fallback.logging import setup_logging
from mermaid_fallback.orchestrator import DiagramRenderer, GenericGraphSuccess, PrimaryEngineSuccess, RenderResult
from mermaid_fallback.renderers.ascii import AsciiRenderer
from mermaid_fallback.renderers.base import Renderer
from mermaid_fallback.syntax.fence import extract_diagram


def _format(result: RenderResult, use_ascii: bool) -> str:
    if isinstance(result, PrimaryEngineSuccess):
        return result.svg if result.svg.endswith("\n") else result.svg + "\n"
    if isinstance(result, GenericGraphSuccess):
        renderer: Renderer = AsciiRenderer(unicode=not use_ascii)
        return renderer.render(result.positioned)
    return result.text + "\n"


@click.command()
@click.argument("input", required=False, type=str)
@click.option(
    "--engine",
    "engine_name",
    type=click.Choice(["mmdc", "none"]),
    default="mmdc",
    show_default=True,
    help="Primary engine; 'none' skips straight to the fallbacks",
)
@click.option("--mmdc", "mmdc_path", type=str, default="mmdc", show_default=True, help="Path to the mermaid-cli executable")
@click.option("--ascii", "-a", "use_ascii", is_flag=True, help="Use plain ASCII instead of Unicode")
@click.option("--markdown", "-m", "markdown", is_flag=True, help="Input is a chat message; render its first diagram")
@click.option("--show-repairs", "show_repairs", is_flag=True, help="List repairs applied to the diagram on stderr")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log pipeline steps to stderr")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
def main(
    input: str | None,
    engine_name: str,
    mmdc_path: str,
    use_ascii: bool,
    markdown: bool,
    show_repairs: bool,
    verbose: bool,
    output: str | None,
) -> None:
    """Render a Mermaid diagram, degrading to a text graph or plain text."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    if markdown:
        text = extract_diagram(text)

    engine = MermaidCliEngine(mmdc_path) if engine_name == "mmdc" else RejectingEngine()
    renderer = DiagramRenderer(engine)
    result = asyncio.run(renderer.render(text))

    if show_repairs and renderer.sanitized is not None:
        for event in renderer.sanitized.repairs:
            click.echo(f"line {event.line_number}: {event.kind.value}: {event.message}", err=True)

    rendered = _format(result, use_ascii)
    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
