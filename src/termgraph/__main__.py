"""CLI entry point for termgraph."""

import logging
import sys

import click

from termgraph.config import RenderConfig, char_count_width, wcwidth_width
from termgraph.edgelist import parse_edge_list
from termgraph.renderers.charset import CharSet
from termgraph.renderers.terminal import to_ansi
from termgraph.render import render
from termgraph.types import FeedbackPlacement


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--ascii", "-a", "use_ascii", is_flag=True, help="Use plain ASCII instead of Unicode")
@click.option("--min-width", "min_width", type=click.IntRange(min=0), default=1, help="Minimum node width")
@click.option("--h-spacing", "h_spacing", type=click.IntRange(min=0), default=2, help="Columns between nodes")
@click.option("--v-spacing", "v_spacing", type=click.IntRange(min=1), default=2, help="Rows between layers")
@click.option(
    "--feedback",
    "feedback",
    type=click.Choice(["above", "below"], case_sensitive=False),
    default="below",
    help="Where cycle-closing edges are routed",
)
@click.option("--color/--no-color", "color", default=None, help="Colour edges per source node")
@click.option("--wide", is_flag=True, help="Measure labels with terminal glyph widths (wide scripts)")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log layout stages to stderr")
def main(
    input: str | None,
    use_ascii: bool,
    min_width: int,
    h_spacing: int,
    v_spacing: int,
    feedback: str,
    color: bool | None,
    wide: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Render a directed graph, given as an edge list, as terminal text."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        graph = parse_edge_list(text)
    except ValueError as e:
        click.echo(f"parse error: {e}", err=True)
        sys.exit(1)

    config = RenderConfig(
        min_node_width=min_width,
        horizontal_spacing=h_spacing,
        vertical_spacing=v_spacing,
        glyph_width=wcwidth_width if wide else char_count_width,
        feedback_placement=FeedbackPlacement(feedback.lower()),
        charset=CharSet.Ascii if use_ascii else CharSet.Unicode,
    )
    if color:
        config = config.default_colors()

    grid = render(graph, config)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(to_ansi(grid, color=bool(color)))
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(to_ansi(grid, color=color is not False), nl=False, color=color)


if __name__ == "__main__":
    main()
