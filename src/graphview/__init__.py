"""graphview: type-colored, filterable node-link graph rendering."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("graphview")
except PackageNotFoundError:
    __version__ = "dev"

from graphview.api import legend_entries, load_dataset, render_html, summarize
from graphview.codes import IssueCode, SessionState
from graphview.config import RenderConfig, load_config
from graphview.contracts import GraphSummary, LegendEntry, RenderIssue, RenderReport
from graphview.errors import ConstructionFailure, GraphViewError
from graphview.session import GraphRenderSession

__all__ = [
    "__version__",
    "ConstructionFailure",
    "GraphRenderSession",
    "GraphSummary",
    "GraphViewError",
    "IssueCode",
    "LegendEntry",
    "RenderConfig",
    "RenderIssue",
    "RenderReport",
    "SessionState",
    "legend_entries",
    "load_config",
    "load_dataset",
    "render_html",
    "summarize",
]
