"""Type filtering of datasets, and the staged legend selection that feeds it."""

from typing import FrozenSet, Iterable, List, Optional

from .model import Dataset, resolve_type


FilterSet = Optional[FrozenSet[str]]


def normalize_filter(active_types: Optional[Iterable[str]]) -> FilterSet:
    """Normalize a filter input. None and empty both mean "show all" (None)."""
    if active_types is None:
        return None
    if isinstance(active_types, str):
        active_types = [active_types]
    normalized = frozenset(active_types)
    return normalized or None


def filter_dataset(dataset: Dataset, active_types: Optional[Iterable[str]]) -> Dataset:
    """Return the visible subgraph for a type filter.

    With no filter the dataset itself is returned. Otherwise nodes whose
    resolved type is in the filter are kept, and an edge survives only when
    both of its endpoints do. Input order is preserved; the input is never
    mutated.
    """
    filter_set = normalize_filter(active_types)
    if filter_set is None:
        return dataset

    visible_nodes = [n for n in dataset.nodes if resolve_type(n) in filter_set]
    visible_ids = {n.id for n in visible_nodes if n.has_id}
    visible_edges = [
        e for e in dataset.edges
        if e.source in visible_ids and e.target in visible_ids
    ]
    return Dataset(nodes=visible_nodes, edges=visible_edges)


class LegendSelection:
    """Staged legend checkboxes vs. the filter actually applied.

    Checking a type only stages it; nothing changes on screen until
    `apply()` publishes the staged set.
    """

    def __init__(self) -> None:
        self._pending: List[str] = []
        self._applied: FilterSet = None

    @property
    def pending(self) -> List[str]:
        """Staged types, in the order they were checked."""
        return list(self._pending)

    @property
    def applied(self) -> FilterSet:
        return self._applied

    def is_checked(self, type_name: str) -> bool:
        return type_name in self._pending

    def check(self, type_name: str) -> None:
        if type_name not in self._pending:
            self._pending.append(type_name)

    def uncheck(self, type_name: str) -> None:
        if type_name in self._pending:
            self._pending.remove(type_name)

    def toggle(self, type_name: str) -> bool:
        """Flip a type's staged state; returns the new state."""
        if type_name in self._pending:
            self.uncheck(type_name)
            return False
        self.check(type_name)
        return True

    def apply(self) -> FilterSet:
        """Publish the staged selection. An empty selection applies "show all"."""
        self._applied = normalize_filter(self._pending)
        return self._applied

    def clear(self) -> None:
        """Drop both the staged and the applied selection."""
        self._pending = []
        self._applied = None

    # A newly selected graph starts unfiltered.
    reset = clear
