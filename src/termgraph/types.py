"""Shared type definitions for termgraph.

Enums and small types used across the graph model, layout, and renderers.
"""

from __future__ import annotations

from enum import Enum, auto


class LineKind(Enum):
    Solid = auto()  # ───
    Dotted = auto()  # ╌╌╌
    Thick = auto()  # ═══

    @classmethod
    def default(cls) -> LineKind:
        return cls.Solid


class FeedbackPlacement(Enum):
    """Where feedback (cycle-closing) edges leave the normal layer band."""

    ABOVE = "above"
    BELOW = "below"

    @classmethod
    def default(cls) -> FeedbackPlacement:
        return cls.BELOW


class Side(Enum):
    """Node boundary side an anchor sits on; also an arrowhead's approach."""

    TOP = auto()
    BOTTOM = auto()
    LEFT = auto()
    RIGHT = auto()


class Color(Enum):
    """Terminal colours usable as style tags."""

    Black = "black"
    White = "white"
    Red = "red"
    Green = "green"
    Yellow = "yellow"
    Blue = "blue"
    Magenta = "magenta"
    Cyan = "cyan"

    @classmethod
    def default_palette(cls) -> tuple[Color, ...]:
        return (cls.Red, cls.Green, cls.Yellow, cls.Blue, cls.Magenta, cls.Cyan)
