"""Render session: owns one live view bound to one display surface.

States:
    UNATTACHED  no view exists (no surface, no dataset, or a failed build)
    ATTACHED    a view is mounted on the surface and shows the latest inputs

Every change of dataset content, filter set or color map rebuilds the view
from scratch: the old view is destroyed and unmounted before the new one is
constructed. Identical inputs are a no-op.

Resize notifications from the surface are debounced; only the last one in a
burst triggers a refit. Refits may arrive on a timer thread when no event
loop is running, so every state change happens under the session lock.
"""

import logging
import threading
from typing import Iterable, Mapping, Optional, Tuple

from graphview.codes import IssueCode, SessionState
from graphview.config import RenderConfig
from graphview.contracts import RenderIssue, RenderReport
from graphview.errors import ConstructionFailure
from graphview.kernel.colors import ColorMap, assign_colors
from graphview.kernel.filtering import FilterSet, normalize_filter
from graphview.kernel.hash_utils import hash_color_map, hash_dataset
from graphview.kernel.model import DEFAULT_TYPE, Dataset
from graphview.kernel.render_plan import RenderPlan, build_render_plan
from graphview.network import NetworkView
from graphview.scheduling import Scheduler, TimerHandle, call_later
from graphview.surface import DisplaySurface, ResizeSubscription


logger = logging.getLogger(__name__)


class GraphRenderSession:
    """Keeps a surface's view in sync with (dataset, filter set, color map).

    Usable as a context manager; leaving the block disposes the session.
    """

    def __init__(
        self,
        surface: Optional[DisplaySurface] = None,
        *,
        config: Optional[RenderConfig] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self.config = config or RenderConfig()
        self._scheduler = scheduler
        self._surface = surface

        # Inputs
        self._dataset: Optional[Dataset] = None
        self._filter_set: FilterSet = None
        self._color_override: Optional[ColorMap] = None

        # Derived
        self._color_map: Optional[ColorMap] = None
        self._color_cache: Optional[Tuple[str, ColorMap]] = None  # (dataset fingerprint, map)
        self._plan: Optional[RenderPlan] = None
        self._inputs_key: Optional[Tuple[str, FilterSet, str]] = None

        # Owned resources
        self._view: Optional[NetworkView] = None
        self._subscription: Optional[ResizeSubscription] = None
        self._refit_handle: Optional[TimerHandle] = None
        self._refit_generation = 0
        self._lock = threading.RLock()
        self.refit_count = 0

    def __enter__(self) -> "GraphRenderSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    @property
    def state(self) -> SessionState:
        return SessionState.ATTACHED if self._view is not None else SessionState.UNATTACHED

    @property
    def surface(self) -> Optional[DisplaySurface]:
        return self._surface

    @property
    def view(self) -> Optional[NetworkView]:
        return self._view

    @property
    def plan(self) -> Optional[RenderPlan]:
        return self._plan

    @property
    def color_map(self) -> Optional[ColorMap]:
        return dict(self._color_map) if self._color_map is not None else None

    @property
    def filter_set(self) -> FilterSet:
        return self._filter_set

    def render(
        self,
        dataset: Optional[Dataset],
        filter_set: Optional[Iterable[str]] = None,
        color_map: Optional[Mapping[str, str]] = None,
    ) -> RenderReport:
        """Show `dataset` through `filter_set`.

        `dataset=None` means no graph is selected and tears the view down.
        `color_map=None` derives colors from the dataset with the configured
        palette.

        Raises:
            ConstructionFailure: If the view could not be built or mounted.
                The session is left unattached.
        """
        with self._lock:
            self._dataset = dataset
            self._filter_set = normalize_filter(filter_set)
            self._color_override = dict(color_map) if color_map is not None else None
            if dataset is None:
                self._teardown()
                self._color_map = None
                return self._report(rebuilt=False)
            return self._sync()

    def attach_surface(self, surface: DisplaySurface) -> Optional[RenderReport]:
        """Bind a surface, building right away when a dataset is waiting."""
        with self._lock:
            if surface is self._surface and self._view is not None:
                return None
            self.detach_surface()
            self._surface = surface
            if self._dataset is None:
                return None
            return self._sync()

    def detach_surface(self) -> None:
        """Tear down and forget the surface. Inputs are kept for the next one."""
        with self._lock:
            self._teardown()
            self._surface = None

    def dispose(self) -> None:
        """Release everything the session owns. Safe to call repeatedly."""
        with self._lock:
            self._teardown()
            self._surface = None
            self._dataset = None
            self._filter_set = None
            self._color_override = None
            self._color_map = None
            self._color_cache = None

    def refit(self) -> None:
        """Fit the view to the surface now, dropping any pending debounced refit."""
        with self._lock:
            self._cancel_refit()
            self._refit_now()

    def _resolve_color_map(self, fingerprint: str) -> ColorMap:
        if self._color_override is not None:
            color_map = dict(self._color_override)
            color_map.setdefault(DEFAULT_TYPE, self.config.default_color)
            return color_map
        if self._color_cache is not None and self._color_cache[0] == fingerprint:
            return self._color_cache[1]
        color_map = assign_colors(self._dataset.nodes, self.config.palette, self.config.default_color)
        self._color_cache = (fingerprint, color_map)
        return color_map

    def _sync(self) -> RenderReport:
        fingerprint = hash_dataset(self._dataset)
        color_map = self._resolve_color_map(fingerprint)
        self._color_map = color_map
        key = (fingerprint, self._filter_set, hash_color_map(color_map))

        if self._surface is None:
            self._teardown()
            logger.debug("No surface bound; render deferred")
            return self._report(rebuilt=False, extra_issues=[RenderIssue(
                code=IssueCode.SURFACE_UNAVAILABLE,
                message="no display surface is bound; render deferred",
            )])

        if self._view is not None and key == self._inputs_key:
            return self._report(rebuilt=False)

        plan = build_render_plan(self._dataset, self._filter_set, color_map, self.config.style)
        self._teardown()
        self._attach(plan)
        self._plan = plan
        self._inputs_key = key
        if plan.issues:
            logger.warning(
                "Excluded %d malformed or dangling entities from render on %s",
                len(plan.issues), self._surface.surface_id,
            )
            for issue in plan.issues:
                logger.debug("%s: %s", issue.code.value, issue.message)
        return self._report(rebuilt=True)

    def _attach(self, plan: RenderPlan) -> None:
        surface = self._surface
        try:
            view = NetworkView(plan, self.config, surface.size)
        except Exception as e:
            logger.error("Failed to build view for %s: %s", surface.surface_id, e)
            raise ConstructionFailure(
                f"Could not build view for {surface.surface_id}: {e}", surface.surface_id
            ) from e
        try:
            surface.mount(self, view.html())
        except Exception as e:
            view.destroy()
            surface.unmount(self)
            logger.error("Failed to mount view on %s: %s", surface.surface_id, e)
            raise ConstructionFailure(
                f"Could not mount view on {surface.surface_id}: {e}", surface.surface_id
            ) from e

        self._view = view
        self._subscription = surface.observe_resize(self._on_resize)
        logger.info(
            "Attached view to %s (%d nodes, %d edges)",
            surface.surface_id, len(plan.nodes), len(plan.edges),
        )

    def _teardown(self) -> None:
        self._cancel_refit()
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        view, self._view = self._view, None
        try:
            if view is not None:
                view.destroy()
        finally:
            if self._surface is not None:
                self._surface.unmount(self)
            self._plan = None
            self._inputs_key = None
        if view is not None:
            logger.debug("Detached view from %s", self._surface.surface_id if self._surface else "surface")

    def _cancel_refit(self) -> None:
        # A timer thread may already be waiting on the lock; the generation
        # bump makes it a no-op.
        self._refit_generation += 1
        if self._refit_handle is not None:
            self._refit_handle.cancel()
            self._refit_handle = None

    def _on_resize(self, width: int, height: int) -> None:
        with self._lock:
            if self._view is None:
                return
            self._cancel_refit()
            generation = self._refit_generation
            self._refit_handle = call_later(
                self._scheduler,
                self.config.debounce_seconds,
                lambda: self._debounced_refit(generation),
            )

    def _debounced_refit(self, generation: int) -> None:
        with self._lock:
            if generation != self._refit_generation:
                return
            self._refit_handle = None
            self._refit_now()

    def _refit_now(self) -> None:
        if self._view is None or self._surface is None:
            return
        width, height = self._surface.size
        self._view.fit(width, height)
        self._surface.refresh(self, self._view.html())
        self.refit_count += 1
        logger.debug("Refit view on %s to %dx%d", self._surface.surface_id, width, height)

    def _report(self, rebuilt: bool, extra_issues: Iterable[RenderIssue] = ()) -> RenderReport:
        plan = self._plan if self._view is not None else None
        issues = list(plan.issues) if plan is not None else []
        issues.extend(extra_issues)
        return RenderReport(
            state=self.state,
            rebuilt=rebuilt,
            node_count=len(plan.nodes) if plan is not None else 0,
            edge_count=len(plan.edges) if plan is not None else 0,
            issues=issues,
        )
