"""Dataset I/O: node-link JSON graph documents on disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from graphview.errors import DatasetLoadError
from graphview.kernel.model import Dataset, parse_dataset


logger = logging.getLogger(__name__)

GRAPH_SUFFIX = ".json"


def load_dataset(path: Union[str, Path]) -> Dataset:
    """Load a node-link JSON document (`nodes` plus `links` or `edges`).

    Raises:
        DatasetLoadError: If the file is missing, not JSON, or not a graph.
    """
    path = Path(path)
    if not path.exists():
        raise DatasetLoadError(f"Graph file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DatasetLoadError(f"Graph file is not valid JSON: {path}: {e}") from e
    if not isinstance(data, dict) or "nodes" not in data:
        raise DatasetLoadError(f"Graph file has no 'nodes' list: {path}")
    try:
        dataset = parse_dataset(data)
    except ValidationError as e:
        raise DatasetLoadError(f"Graph file failed validation: {path}: {e}") from e
    logger.info("Loaded %s (%d nodes, %d edges)", path.name, len(dataset.nodes), len(dataset.edges))
    return dataset


class GraphDirectory:
    """Dataset source backed by a directory of graph documents.

    `load(None)` is "no graph selected" and returns None, which is distinct
    from a selected graph with no nodes.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def list_graphs(self) -> List[str]:
        """Graph file names, sorted."""
        if not self.root.is_dir():
            return []
        return sorted(p.name for p in self.root.iterdir() if p.is_file() and p.suffix == GRAPH_SUFFIX)

    def load(self, name: Optional[str]) -> Optional[Dataset]:
        if name is None:
            return None
        if Path(name).name != name:
            raise DatasetLoadError(f"Graph name must be a bare file name: {name}")
        return load_dataset(self.root / name)
