"""Exceptions raised across the graphview package."""


class GraphViewError(Exception):
    """Base exception for graphview errors."""
    pass


class ConstructionFailure(GraphViewError):
    """Raised when a visualization instance could not be built or mounted.

    The session that raised it is left unattached; nothing partially
    constructed remains on the surface.
    """
    def __init__(self, message: str, surface_id: str | None = None):
        self.surface_id = surface_id
        super().__init__(message)


class SurfaceBusyError(GraphViewError):
    """Raised when mounting onto a surface that already holds a view."""
    def __init__(self, surface_id: str):
        self.surface_id = surface_id
        super().__init__(f"Surface already has a mounted view: {surface_id}")


class DatasetLoadError(ValueError):
    """Raised when a graph dataset file cannot be read or decoded."""


class ConfigError(ValueError):
    """Raised when a render configuration file is invalid."""
