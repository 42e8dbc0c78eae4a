"""Public API for graphview.

High-level helpers that run the whole pipeline and return structured
results. Long-lived views should use GraphRenderSession directly.
"""

import os
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from graphview.config import RenderConfig
from graphview.contracts import GraphSummary, LegendEntry, RenderReport
from graphview.kernel.colors import assign_colors
from graphview.kernel.model import DEFAULT_TYPE, Dataset, resolve_type
from graphview.session import GraphRenderSession
from graphview.surface import DisplaySurface
from graphview._internal.io.dataset_file import load_dataset as _load_dataset


def load_dataset(path: Union[str, os.PathLike, Path]) -> Dataset:
    """Load a node-link JSON graph document."""
    return _load_dataset(Path(path))


def render_html(
    dataset: Dataset,
    filter_set: Optional[Iterable[str]] = None,
    *,
    config: Optional[RenderConfig] = None,
    width: int = 960,
    height: int = 640,
) -> Tuple[RenderReport, str]:
    """Render a dataset once and return the report and the HTML document.

    Raises:
        ConstructionFailure: If the view could not be built.
    """
    surface = DisplaySurface(width, height)
    with GraphRenderSession(surface, config=config) as session:
        report = session.render(dataset, filter_set)
        document = surface.document
    return report, document


def legend_entries(
    dataset: Dataset,
    color_map: Optional[Mapping[str, str]] = None,
    *,
    config: Optional[RenderConfig] = None,
) -> List[LegendEntry]:
    """Legend rows for the dataset's types, sorted by type name.

    The Default fallback is not listed.
    """
    config = config or RenderConfig()
    if color_map is None:
        color_map = assign_colors(dataset.nodes, config.palette, config.default_color)
    counts = Counter(resolve_type(n) for n in dataset.nodes)
    return [
        LegendEntry(type=type_name, color=color, count=counts.get(type_name, 0))
        for type_name, color in sorted(color_map.items())
        if type_name != DEFAULT_TYPE
    ]


def summarize(dataset: Dataset) -> GraphSummary:
    """Node/edge counts and observed types."""
    return GraphSummary(
        node_count=len(dataset.nodes),
        edge_count=len(dataset.edges),
        types=dataset.observed_types(),
    )
