"""Issue code constants for render reports.

These constants prevent stringly-typed issue codes and ensure
client code matches on the codes the session actually emits.
"""

from enum import Enum


class IssueCode(str, Enum):
    """Render issue codes. None of these are fatal to a render."""

    # Excluded entities
    MISSING_NODE_ID = "MISSING_NODE_ID"
    DUPLICATE_NODE_ID = "DUPLICATE_NODE_ID"
    MISSING_EDGE_ENDPOINT = "MISSING_EDGE_ENDPOINT"
    DANGLING_EDGE = "DANGLING_EDGE"

    # Deferred renders
    SURFACE_UNAVAILABLE = "SURFACE_UNAVAILABLE"


class SessionState(str, Enum):
    """Lifecycle state of a render session."""

    UNATTACHED = "unattached"
    ATTACHED = "attached"
