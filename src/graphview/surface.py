"""Display surfaces: regions a rendered graph document is mounted on.

A surface holds at most one mounted document at a time, owned by whoever
mounted it. It has a size in pixels and tells subscribers when that size
changes.
"""

import itertools
import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Union

from graphview.errors import GraphViewError, SurfaceBusyError


logger = logging.getLogger(__name__)

ResizeCallback = Callable[[int, int], None]

_surface_ids = itertools.count(1)


class ResizeSubscription:
    """Handle for a resize listener. Closing is idempotent."""

    def __init__(self, surface: "DisplaySurface", token: int):
        self._surface = surface
        self._token = token

    @property
    def active(self) -> bool:
        return self._token in self._surface._listeners

    def close(self) -> None:
        self._surface._listeners.pop(self._token, None)


class DisplaySurface:
    """In-memory surface; the mounted document is kept as a string."""

    def __init__(self, width: int = 960, height: int = 640, surface_id: Optional[str] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        self.surface_id = surface_id or f"surface-{next(_surface_ids)}"
        self._width = width
        self._height = height
        self._owner: Optional[object] = None
        self._document: Optional[str] = None
        self._listeners: Dict[int, ResizeCallback] = {}
        self._tokens = itertools.count()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.surface_id!r}, {self._width}x{self._height})"

    @property
    def size(self) -> Tuple[int, int]:
        return self._width, self._height

    @property
    def is_mounted(self) -> bool:
        return self._owner is not None

    @property
    def document(self) -> Optional[str]:
        """The currently mounted document, or None when nothing is mounted."""
        return self._document

    def is_owned_by(self, owner: object) -> bool:
        return self._owner is owner

    def mount(self, owner: object, document: str) -> None:
        """Mount a document.

        Raises:
            SurfaceBusyError: If a different owner already has a mount.
        """
        if self._owner is not None and self._owner is not owner:
            raise SurfaceBusyError(self.surface_id)
        self._owner = owner
        self._publish(document)
        logger.debug("Mounted document on %s", self.surface_id)

    def refresh(self, owner: object, document: str) -> None:
        """Replace the mounted document in place (after a refit)."""
        if self._owner is not owner:
            raise GraphViewError(f"Refresh by a non-owner of {self.surface_id}")
        self._publish(document)

    def unmount(self, owner: object) -> None:
        """Remove the owner's document. No-op for a non-owner or an empty surface."""
        if self._owner is not owner:
            return
        self._owner = None
        self._clear()
        logger.debug("Unmounted document from %s", self.surface_id)

    def observe_resize(self, callback: ResizeCallback) -> ResizeSubscription:
        token = next(self._tokens)
        self._listeners[token] = callback
        return ResizeSubscription(self, token)

    def resize(self, width: int, height: int) -> None:
        """Change the size and notify every listener."""
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        for callback in list(self._listeners.values()):
            callback(width, height)

    def _publish(self, document: str) -> None:
        self._document = document

    def _clear(self) -> None:
        self._document = None


class HtmlFileSurface(DisplaySurface):
    """Surface backed by an HTML file.

    The file is rewritten on every mount and refit and deleted on unmount,
    so it never outlives the view it shows.
    """

    def __init__(
        self,
        path: Union[str, Path],
        width: int = 960,
        height: int = 640,
        surface_id: Optional[str] = None,
    ):
        self.path = Path(path)
        super().__init__(width, height, surface_id or str(self.path))

    def _publish(self, document: str) -> None:
        super()._publish(document)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(document, encoding="utf-8")

    def _clear(self) -> None:
        super()._clear()
        self.path.unlink(missing_ok=True)
