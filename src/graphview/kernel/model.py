"""Node/edge dataset models.

Nodes and edges keep every attribute they arrive with (extra="allow") so
downstream styling can read fields this package knows nothing about.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Set, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


DEFAULT_TYPE = "Default"

# Precedence order for a node's effective type. source_type/target_type are
# kept at node level because that is how exported graph documents carry them.
TYPE_FIELDS = ("type", "source_type", "target_type")

Identifier = Union[str, int]


def _coerce_text(value: Any) -> Any:
    """Coerce any non-string value to str so one odd node never fails a load.

    Lists and objects become compact JSON with sorted keys.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


class Node(BaseModel):
    """A graph node. Missing `id` is tolerated here and rejected at render time."""
    id: Optional[Identifier] = None
    label: Optional[str] = None
    type: Optional[str] = None
    source_type: Optional[str] = None
    target_type: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("label", "type", "source_type", "target_type", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _coerce_text(v)

    @property
    def has_id(self) -> bool:
        return self.id is not None and self.id != ""

    @property
    def resolved_type(self) -> str:
        return resolve_type(self)

    @property
    def display_label(self) -> str:
        """Label shown in the view: the label if present, else the identifier."""
        if self.label:
            return self.label
        return "" if self.id is None else str(self.id)

    @property
    def attributes(self) -> Dict[str, Any]:
        """Attributes outside the declared fields, in arrival order."""
        return dict(self.model_extra or {})


class Edge(BaseModel):
    """A directed edge from `source` to `target`.

    vis-network style `from`/`to` keys are accepted as aliases.
    """
    source: Optional[Identifier] = Field(None, validation_alias=AliasChoices("source", "from"))
    target: Optional[Identifier] = Field(None, validation_alias=AliasChoices("target", "to"))
    label: Optional[str] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("label", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return _coerce_text(v)

    @property
    def has_endpoints(self) -> bool:
        return all(v is not None and v != "" for v in (self.source, self.target))

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class Dataset(BaseModel):
    """Ordered nodes and edges of one selected graph.

    Node-link documents name the edge list `links`; both spellings load.
    Other top-level keys (`directed`, `multigraph`, `graph`) are ignored.
    """
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list, validation_alias=AliasChoices("edges", "links"))

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def node_ids(self) -> Set[Identifier]:
        """Identifiers of all nodes that have one."""
        return {n.id for n in self.nodes if n.has_id}

    def observed_types(self) -> List[str]:
        """Distinct resolved types, sorted."""
        return sorted({resolve_type(n) for n in self.nodes})


def resolve_type(node: Node) -> str:
    """Resolve a node's effective type: type -> source_type -> target_type -> Default.

    The first non-empty value wins. No case or whitespace normalization.
    """
    for field in TYPE_FIELDS:
        value = getattr(node, field)
        if value:
            return value
    return DEFAULT_TYPE


def parse_dataset(data: dict) -> Dataset:
    """Parse a decoded node-link dict into a Dataset."""
    return Dataset.model_validate(data)
