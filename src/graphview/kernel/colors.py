"""Type -> color assignment."""

from typing import Dict, Iterable, Sequence

from .model import DEFAULT_TYPE, Node, resolve_type


ColorMap = Dict[str, str]

DEFAULT_PALETTE: tuple[str, ...] = (
    "#4fcfff", "#ffb347", "#7ed957", "#ff6f91", "#a084e8",
    "#f9a602", "#e57373", "#64b5f6", "#81c784", "#ba68c8",
    "#ffd54f", "#90a4ae", "#f06292", "#9575cd", "#4db6ac",
    "#dce775", "#ffd740", "#bdbdbd", "#ff8a65", "#a1887f",
)

# Fill used for Default when no node resolves to it.
DEFAULT_COLOR = "#b2eaff"


def assign_colors(
    nodes: Iterable[Node],
    palette: Sequence[str] = DEFAULT_PALETTE,
    default_color: str = DEFAULT_COLOR,
) -> ColorMap:
    """Map every observed node type to a palette color.

    Types are sorted before assignment, so the same set of types always
    yields the same mapping regardless of node order. The palette wraps
    when there are more types than colors. The result always has a
    `Default` entry.

    Raises:
        ValueError: If the palette is empty.
    """
    if not palette:
        raise ValueError("palette must contain at least one color")

    types = sorted({resolve_type(n) for n in nodes})
    color_map: ColorMap = {
        type_name: palette[i % len(palette)]
        for i, type_name in enumerate(types)
    }
    color_map.setdefault(DEFAULT_TYPE, default_color)
    return color_map


def color_for(color_map: ColorMap, type_name: str) -> str:
    """Color of a type, falling back to the Default entry."""
    return color_map.get(type_name) or color_map.get(DEFAULT_TYPE, DEFAULT_COLOR)
