"""Public result models for graphview."""

from typing import List, Optional, Union
from pydantic import BaseModel

from graphview.codes import IssueCode, SessionState


class RenderIssue(BaseModel):
    """A non-fatal problem found while building a render."""
    code: IssueCode
    message: str
    element_id: Optional[Union[str, int]] = None  # node id, or "source->target" for edges
    index: Optional[int] = None  # position in the input sequence, when known


class RenderReport(BaseModel):
    """Outcome of a render call."""
    state: SessionState
    rebuilt: bool  # False when the inputs matched the previous render
    node_count: int  # visible nodes actually handed to the view
    edge_count: int
    issues: List[RenderIssue]  # sorted by (code, index)

    @property
    def ok(self) -> bool:
        return self.state == SessionState.ATTACHED


class LegendEntry(BaseModel):
    """One row of the type legend."""
    type: str
    color: str
    count: int


class GraphSummary(BaseModel):
    """Headline counts for a dataset."""
    node_count: int
    edge_count: int
    types: List[str]  # sorted resolved types
