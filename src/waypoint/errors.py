"""Waypoint exception hierarchy.

Shared across the path compiler, Route, and Router so every module
raises and catches the same types.
"""


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when a route tree is built incorrectly.

    Construction-time mistakes: surfaced immediately, never retried.
    """


class PathSyntaxError(ConfigurationError, ValueError):
    """A route path pattern could not be compiled.

    ``str(err)`` is the stable reason; the offending pattern is kept on
    ``pattern`` for diagnostics.
    """

    def __init__(self, reason: str, pattern: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.pattern = pattern


class AlreadyAppendedError(ConfigurationError):
    """A route was appended a second time (to any parent or router)."""

    def __init__(self, detail: str = "Cannot append route that has already been appended") -> None:
        super().__init__(detail)


class NotInHierarchyError(WaypointError):
    """A link was requested for a route no router owns."""

    def __init__(
        self, detail: str = "Cannot generate link for route that is not in the hierarchy"
    ) -> None:
        super().__init__(detail)


class MissingParameterError(WaypointError, KeyError):
    """A link needs a path parameter value that was not supplied."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Missing value for parameter {self.name!r}"
