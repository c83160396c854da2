"""Waypoint — hierarchical path matching and route selection.

Compiles path patterns, selects the chain of routes a path resolves to,
extracts path and query parameters, and generates links back to routes.

Basic usage::

    from waypoint import Route, Router

    router = Router()
    users = Route("/users")
    user = Route("/{id}?{tab}", guard=lambda request: request.context.logged_in)
    users.append(user)
    router.append(users)

    selections = router.select(context, "/users/42?tab=posts")
    router.link(user, {"id": 42})
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AlreadyAppendedError",
    "ConfigurationError",
    "DispatchResult",
    "MatchType",
    "MissingParameterError",
    "NotInHierarchyError",
    "PathDefinition",
    "PathSyntaxError",
    "Proceed",
    "QueryParams",
    "Redirect",
    "Reject",
    "Route",
    "RouteRequest",
    "Router",
    "RouterConfig",
    "Selection",
    "WaypointError",
    "compile_path",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "AlreadyAppendedError": "waypoint.errors",
    "ConfigurationError": "waypoint.errors",
    "MissingParameterError": "waypoint.errors",
    "NotInHierarchyError": "waypoint.errors",
    "PathSyntaxError": "waypoint.errors",
    "WaypointError": "waypoint.errors",
    "RouterConfig": "waypoint.config",
    "QueryParams": "waypoint.http.query",
    "PathDefinition": "waypoint.routing.path",
    "compile_path": "waypoint.routing.path",
    "MatchType": "waypoint.routing.results",
    "Proceed": "waypoint.routing.results",
    "Redirect": "waypoint.routing.results",
    "Reject": "waypoint.routing.results",
    "RouteRequest": "waypoint.routing.results",
    "Selection": "waypoint.routing.results",
    "Route": "waypoint.routing.route",
    "DispatchResult": "waypoint.routing.router",
    "Router": "waypoint.routing.router",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
