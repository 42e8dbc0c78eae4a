"""Pure recompute step: dataset + filter + colors -> node/edge view models.

Malformed entities never abort a build. They are left out of the plan and
reported as issues so the caller can surface them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict

from graphview.codes import IssueCode
from graphview.contracts import RenderIssue
from .colors import ColorMap, color_for
from .filtering import filter_dataset
from .model import Dataset, Edge, Identifier, Node, resolve_type


# Keys the view models compute themselves; input attributes with these
# names do not pass through.
RESERVED_NODE_KEYS = frozenset({"id", "n_id", "label", "color", "font"})
RESERVED_EDGE_KEYS = frozenset({
    "source", "target", "from", "to", "dest", "directed", "label", "color", "arrows", "font",
})


class ViewStyle(BaseModel):
    """Fixed styling applied to every node and edge view."""
    font_face: str = "Vazirmatn, Arial"
    node_font_size: int = 16
    node_font_color: str = "#222b45"
    node_border_color: str = "#222b45"
    node_highlight_background: str = "#fff"
    edge_font_size: int = 14
    edge_font_color: str = "#888"
    edge_color: str = "#b2eaff"
    edge_highlight_color: str = "#4fcfff"

    model_config = ConfigDict(extra="forbid", frozen=True)


@dataclass(frozen=True)
class NodeView:
    """Renderable node."""
    id: Identifier
    label: str
    type: str
    fill: str
    border: str
    highlight_background: str
    font: Dict[str, Any]
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_vis(self) -> Dict[str, Any]:
        """vis-network node options. Computed keys win over passed-through ones."""
        options = {k: v for k, v in self.attributes.items() if k not in RESERVED_NODE_KEYS}
        options.update(
            id=self.id,
            label=self.label,
            type=self.type,
            font=dict(self.font),
            color={
                "background": self.fill,
                "border": self.border,
                "highlight": {
                    "background": self.highlight_background,
                    "border": self.fill,
                },
            },
        )
        return options


@dataclass(frozen=True)
class EdgeView:
    """Renderable directed edge."""
    source: Identifier
    target: Identifier
    label: str
    color: str
    highlight: str
    font: Dict[str, Any]
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_vis(self) -> Dict[str, Any]:
        """vis-network edge options, without the endpoints."""
        options = {k: v for k, v in self.attributes.items() if k not in RESERVED_EDGE_KEYS}
        options.update(
            label=self.label,
            arrows="to",
            font=dict(self.font),
            color={"color": self.color, "highlight": self.highlight},
        )
        return options


@dataclass(frozen=True)
class RenderPlan:
    """Everything a view needs to draw one (dataset, filter, colors) triple."""
    nodes: Tuple[NodeView, ...]
    edges: Tuple[EdgeView, ...]
    issues: Tuple[RenderIssue, ...]

    def node_ids(self) -> List[Identifier]:
        return [n.id for n in self.nodes]


def build_node_view(node: Node, color_map: ColorMap, style: ViewStyle) -> NodeView:
    type_name = resolve_type(node)
    fill = color_for(color_map, type_name)
    attributes = node.attributes
    # Declared-but-optional fields still count as attributes for styling.
    for name in ("source_type", "target_type"):
        value = getattr(node, name)
        if value is not None:
            attributes.setdefault(name, value)
    return NodeView(
        id=node.id,
        label=node.display_label,
        type=type_name,
        fill=fill,
        border=style.node_border_color,
        highlight_background=style.node_highlight_background,
        font={"face": style.font_face, "size": style.node_font_size, "color": style.node_font_color},
        attributes=attributes,
    )


def build_edge_view(edge: Edge, style: ViewStyle) -> EdgeView:
    return EdgeView(
        source=edge.source,
        target=edge.target,
        label=edge.label or "",
        color=style.edge_color,
        highlight=style.edge_highlight_color,
        font={"face": style.font_face, "size": style.edge_font_size, "color": style.edge_font_color},
        attributes=edge.attributes,
    )


def _edge_ref(edge: Edge) -> str:
    return f"{edge.source}->{edge.target}"


def build_render_plan(
    dataset: Dataset,
    active_types: Optional[Iterable[str]],
    color_map: ColorMap,
    style: Optional[ViewStyle] = None,
) -> RenderPlan:
    """Filter the dataset and build view models for what remains.

    Exclusions (index = position in the visible sequence):
    - nodes without an id, and repeats of an id already seen
    - edges without both endpoints
    - edges whose endpoints are not among the visible nodes
    """
    style = style or ViewStyle()
    visible = filter_dataset(dataset, active_types)
    issues: List[RenderIssue] = []

    node_views: List[NodeView] = []
    seen: Set[Identifier] = set()
    for index, node in enumerate(visible.nodes):
        if not node.has_id:
            issues.append(RenderIssue(
                code=IssueCode.MISSING_NODE_ID,
                message="node has no identifier",
                index=index,
            ))
            continue
        if node.id in seen:
            issues.append(RenderIssue(
                code=IssueCode.DUPLICATE_NODE_ID,
                message=f"duplicate node id: {node.id}",
                element_id=node.id,
                index=index,
            ))
            continue
        seen.add(node.id)
        node_views.append(build_node_view(node, color_map, style))

    edge_views: List[EdgeView] = []
    for index, edge in enumerate(visible.edges):
        if not edge.has_endpoints:
            issues.append(RenderIssue(
                code=IssueCode.MISSING_EDGE_ENDPOINT,
                message=f"edge is missing an endpoint: {_edge_ref(edge)}",
                element_id=_edge_ref(edge),
                index=index,
            ))
            continue
        if edge.source not in seen or edge.target not in seen:
            issues.append(RenderIssue(
                code=IssueCode.DANGLING_EDGE,
                message=f"edge references a node that is not rendered: {_edge_ref(edge)}",
                element_id=_edge_ref(edge),
                index=index,
            ))
            continue
        edge_views.append(build_edge_view(edge, style))

    return RenderPlan(
        nodes=tuple(node_views),
        edges=tuple(edge_views),
        issues=tuple(sort_issues(issues)),
    )


def sort_issues(issues: Iterable[RenderIssue]) -> List[RenderIssue]:
    """Stable issue order: by code, then input position."""
    return sorted(issues, key=lambda i: (i.code.value, -1 if i.index is None else i.index))
