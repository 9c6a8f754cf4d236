"""Render configuration and glyph-width capabilities."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Protocol

from wcwidth import wcwidth

from termgraph.formatter import LabelFormatter, NodeFormat
from termgraph.renderers.charset import CharSet, LineGlyphs
from termgraph.types import Color, FeedbackPlacement, LineKind


class GlyphWidth(Protocol):
    """Number of terminal columns a piece of label text occupies."""

    def __call__(self, text: str) -> int: ...


def char_count_width(text: str) -> int:
    """One column per character."""
    return len(text)


def wcwidth_width(text: str) -> int:
    """Terminal column width using wcwidth; wide scripts count two columns."""
    return sum(max(wcwidth(ch), 1) for ch in text)


@dataclass(frozen=True)
class RenderConfig:
    """Immutable configuration for one render call.

    Attributes:
        min_node_width: Lower bound on a node's column span.
        horizontal_spacing: Blank columns between neighbouring entries of a layer.
        vertical_spacing: Minimum rows between two node rows; widened when a
            gap needs more edge lanes.
        glyph_width: Width capability applied to node labels.
        feedback_placement: Which side of the layer band feedback edges use.
        merge_junction_glyph: Glyph painted where paths of different edges
            meet; None derives a junction from the meeting arms.
        charset: Unicode box drawing or plain ASCII.
        line_glyphs: Explicit glyph table, overriding ``charset``.
        color_palette: Style tags handed out per source node to edges that
            carry no colour of their own; None disables automatic colouring.
        feedback_line_kind: Line kind of feedback edges without an explicit kind.
        formatter: Produces the displayed label of each node.
        center_layers: Centre every layer on the widest one.
    """

    min_node_width: int = 1
    horizontal_spacing: int = 2
    vertical_spacing: int = 2
    glyph_width: GlyphWidth = char_count_width
    feedback_placement: FeedbackPlacement = FeedbackPlacement.BELOW
    merge_junction_glyph: str | None = None
    charset: CharSet = CharSet.Unicode
    line_glyphs: LineGlyphs | None = None
    color_palette: tuple[object, ...] | None = None
    feedback_line_kind: LineKind = LineKind.Dotted
    formatter: NodeFormat = field(default_factory=LabelFormatter)
    center_layers: bool = True

    def __post_init__(self) -> None:
        if self.min_node_width < 0:
            raise ValueError(f"min_node_width must be >= 0, got {self.min_node_width}")
        if self.horizontal_spacing < 0:
            raise ValueError(f"horizontal_spacing must be >= 0, got {self.horizontal_spacing}")
        if self.vertical_spacing < 1:
            raise ValueError(f"vertical_spacing must be >= 1, got {self.vertical_spacing}")
        if self.merge_junction_glyph is not None and len(self.merge_junction_glyph) != 1:
            raise ValueError("merge_junction_glyph must be a single character")
        if self.color_palette is not None and not self.color_palette:
            raise ValueError("color_palette must not be empty; use None to disable colours")

    def label_width(self, text: str) -> int:
        """Columns a label occupies when painted one glyph at a time."""
        return sum(self.glyph_columns(ch) for ch in text)

    def glyph_columns(self, ch: str) -> int:
        return max(self.glyph_width(ch), 1)

    @property
    def glyphs(self) -> LineGlyphs:
        if self.line_glyphs is not None:
            return self.line_glyphs
        return LineGlyphs.for_charset(self.charset)

    def with_options(self, **changes: object) -> RenderConfig:
        return dataclasses.replace(self, **changes)

    def default_colors(self) -> RenderConfig:
        return dataclasses.replace(self, color_palette=Color.default_palette())

    def custom_colors(self, colors: tuple[object, ...] | list[object]) -> RenderConfig:
        return dataclasses.replace(self, color_palette=tuple(colors))

    def disable_colors(self) -> RenderConfig:
        return dataclasses.replace(self, color_palette=None)

    def with_line_glyphs(self, glyphs: LineGlyphs) -> RenderConfig:
        return dataclasses.replace(self, line_glyphs=glyphs)

    def with_formatter(self, formatter: NodeFormat) -> RenderConfig:
        return dataclasses.replace(self, formatter=formatter)
