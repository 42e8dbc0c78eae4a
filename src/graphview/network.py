"""Visualization instance: a pyvis (vis-network) graph built from a RenderPlan."""

import json
from typing import List, Tuple

from pyvis.network import Network

from graphview.config import RenderConfig
from graphview.errors import GraphViewError
from graphview.kernel.model import Identifier
from graphview.kernel.render_plan import RenderPlan


class NetworkView:
    """One live vis-network instance.

    Built in full from a plan; never patched. `destroy()` drops the
    underlying network and is safe to call more than once.
    """

    def __init__(self, plan: RenderPlan, config: RenderConfig, size: Tuple[int, int]):
        width, height = size
        net = Network(
            height=f"{height}px",
            width=f"{width}px",
            directed=True,
            bgcolor=config.background,
            cdn_resources="remote",
        )
        for node in plan.nodes:
            options = node.to_vis()
            n_id = options.pop("id")
            label = options.pop("label")
            color = options.pop("color")
            shape = options.pop("shape", config.node_shape)
            # Extra attributes must not reach add_node as keywords (font_color, group).
            net.add_node(n_id, label=label, shape=shape, color=color)
            net.get_node(n_id).update(options)
        for edge in plan.edges:
            net.add_edge(edge.source, edge.target, **edge.to_vis())
        net.set_options(json.dumps(config.vis_options()))

        self._net = net
        self._size = (width, height)
        self.fit_count = 0

    @property
    def alive(self) -> bool:
        return self._net is not None

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def _network(self) -> Network:
        if self._net is None:
            raise GraphViewError("view has been destroyed")
        return self._net

    def node_ids(self) -> List[Identifier]:
        return list(self._network().get_nodes())

    def edge_pairs(self) -> List[Tuple[Identifier, Identifier]]:
        return [(e["from"], e["to"]) for e in self._network().get_edges()]

    def html(self) -> str:
        """Standalone HTML document for the current state."""
        return self._network().generate_html()

    def fit(self, width: int, height: int) -> None:
        """Fit the viewport to a new surface size."""
        net = self._network()
        net.width = f"{width}px"
        net.height = f"{height}px"
        self._size = (width, height)
        self.fit_count += 1

    def destroy(self) -> None:
        self._net = None
