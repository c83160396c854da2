"""Router — owns route hierarchies, turns paths into selections and back.

Root routes are appended during setup. ``select()`` parses a path string
and hands its segments to each root route in registration order;
``link()`` walks from the hierarchy root down to a route and fills in
parameter values.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, unquote, urlencode

from waypoint.config import RouterConfig
from waypoint.errors import NotInHierarchyError
from waypoint.http.query import QueryParams
from waypoint.routing.results import Redirect, SelectResult, Selection
from waypoint.routing.route import Route, claim_batch

logger = logging.getLogger("waypoint.routing")

_DEFAULT_CONFIG = RouterConfig()


@dataclass(frozen=True, slots=True)
class ParsedPath:
    """A path string split into what ``Route.select`` consumes."""

    segments: tuple[str, ...]
    trailing_slash: bool
    search_params: QueryParams


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of ``Router.dispatch``.

    ``redirect`` is set when a guard asked for one; ``selections`` holds
    the chain whose handlers were invoked.
    """

    success: bool
    redirect: str | None = None
    selections: tuple[Selection, ...] = ()


def parse_path(path: str, config: RouterConfig | None = None) -> ParsedPath | None:
    """Split *path* into segments, trailing-slash flag and query params.

    Examples::

        "/foo/bar"          -> ("foo", "bar"), trailing_slash=False
        "/foo/bar/?q=1"     -> ("foo", "bar"), trailing_slash=True, q=1
        "/app/foo" (prefix "/app") -> ("foo",)

    Any ``#fragment`` is ignored. Empty segments are dropped. Returns
    ``None`` when a ``path_prefix`` is configured and *path* lies outside it.
    """
    config = config or _DEFAULT_CONFIG
    path, _, _fragment = path.partition("#")
    path, _, query = path.partition("?")

    prefix = config.path_prefix
    if prefix:
        if path != prefix and not path.startswith(prefix + "/"):
            return None
        path = path[len(prefix) :]

    parts = [part for part in path.split("/") if part]
    if config.decode_segments:
        parts = [unquote(part) for part in parts]
    trailing_slash = bool(parts) and path.endswith("/")
    return ParsedPath(
        segments=tuple(parts),
        trailing_slash=trailing_slash,
        search_params=QueryParams(query),
    )


class Router:
    """Registry of root routes.

    Usage::

        router = Router()
        users = Route("/users")
        users.append(Route("/{id}"))
        router.append(users)

        router.select(context, "/users/42")
        router.link(users.children[0], {"id": 42})  # "/users/42"
    """

    __slots__ = ("_routes", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config = config or _DEFAULT_CONFIG
        self._routes: list[Route] = []

    @property
    def routes(self) -> tuple[Route, ...]:
        """Root routes in registration order."""
        return tuple(self._routes)

    def append(self, routes: Route | Iterable[Route]) -> None:
        """Add one root route or several, preserving order.

        Same rule as ``Route.append``: a route can only ever be appended once.
        """
        for route in claim_batch(routes):
            route._adopt(router=self)
            self._routes.append(route)

    def select(self, context: Any, path: str) -> SelectResult:
        """Match *path* against the root routes, first match wins."""
        parsed = parse_path(path, self.config)
        if parsed is None:
            logger.debug("Path %r is outside prefix %r", path, self.config.path_prefix)
            return ()
        for route in self._routes:
            result = route.select(
                context, parsed.segments, parsed.trailing_slash, parsed.search_params
            )
            if isinstance(result, Redirect) or result:
                return result
        logger.debug("No route matches %r", path)
        return ()

    def dispatch(self, context: Any, path: str) -> DispatchResult:
        """Select *path* and invoke each selection's handler, root first."""
        result = self.select(context, path)
        if isinstance(result, Redirect):
            return DispatchResult(success=False, redirect=result.path)
        if not result:
            return DispatchResult(success=False)
        for selection in result:
            selection.handler()
        return DispatchResult(success=True, selections=result)

    def link(self, route: Route, params: Mapping[str, Any] | None = None) -> str:
        """Build the path leading to *route*, substituting *params*.

        Search parameters are added for the names present in *params*; a
        name declared by several routes in the chain is emitted once.

        Raises ``NotInHierarchyError`` if *route* does not belong to this
        router, ``MissingParameterError`` if a path parameter has no value.
        """
        if route.router is not self:
            raise NotInHierarchyError
        params = params or {}

        segments: list[str] = []
        query: list[tuple[str, str]] = []
        emitted: set[str] = set()
        trailing_slash = False
        for node in route.ancestors():
            if node.path is None:
                continue
            node_segments, node_query = node.path.render(params)
            segments.extend(quote(segment, safe="") for segment in node_segments)
            query.extend(pair for pair in node_query if pair[0] not in emitted)
            emitted.update(node.path.search_parameters)
            trailing_slash = node.path.trailing_slash

        link = self.config.path_prefix + "/" + "/".join(segments)
        if trailing_slash and segments:
            link += "/"
        if query:
            link += "?" + urlencode(query)
        logger.debug("Link for %r: %s", route, link)
        return link
