"""Route nodes and hierarchical selection.

A ``Route`` is one node of a route tree: an optional compiled path,
an optional guard, an optional parameter extractor, an optional outlet
id, and an ordered list of children. Trees are assembled during setup
with ``append()`` and are read-only once selection starts.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from functools import partial
from typing import TYPE_CHECKING, Any

from waypoint.errors import AlreadyAppendedError, ConfigurationError, NotInHierarchyError
from waypoint.http.query import QueryParams
from waypoint.routing.path import PathDefinition, compile_path
from waypoint.routing.results import (
    PROCEED,
    MatchType,
    Redirect,
    Reject,
    RouteRequest,
    SelectResult,
    Selection,
    as_guard_outcome,
    noop_handler,
)

if TYPE_CHECKING:
    from waypoint._internal.multimap import MultiValueMapping
    from waypoint._internal.types import Guard, Handler, ParamsExtractor
    from waypoint.routing.router import Router

logger = logging.getLogger("waypoint.routing")


class Route:
    """A node in a route tree.

    Usage::

        users = Route("/users")
        user = Route("/{id}?{tab}", guard=lambda request: request.context.logged_in)
        users.append(user)

        users.select(context, ["users", "42"], False, QueryParams("tab=posts"))

    Args:
        path: Pattern compiled with ``compile_path``. Without one the route
            consumes no segments.
        guard: Called with a ``RouteRequest``; answers ``Proceed``, ``Reject``
            or ``Redirect`` (or ``True`` / ``False`` / a path string).
        params: Custom extractor ``(raw_path_values, search_params) -> mapping``.
            Returning ``None`` makes the route not match. Only allowed when
            the path declares parameters.
        outlet: Opaque outlet id. Routes with an outlet are selected as an
            ``ERROR`` boundary when their children cannot match the rest.
        trailing_slash_must_match: When ``False``, a terminal match ignores
            whether the incoming path had a trailing slash.
        handler: Called with a ``RouteRequest`` when the caller invokes a
            selection's deferred ``handler``.
    """

    __slots__ = (
        "_appended",
        "_children",
        "_extractor",
        "_guard",
        "_handler",
        "_parent",
        "_router",
        "_outlet",
        "_path",
        "_trailing_slash_must_match",
    )

    def __init__(
        self,
        path: str | None = None,
        *,
        guard: Guard | None = None,
        params: ParamsExtractor | None = None,
        outlet: Any = None,
        trailing_slash_must_match: bool = True,
        handler: Handler | None = None,
    ) -> None:
        self._path: PathDefinition | None = compile_path(path) if path is not None else None
        if params is not None and (self._path is None or not self._path.has_parameters):
            msg = "Can't specify params() if path doesn't contain any"
            raise ConfigurationError(msg)

        self._outlet = outlet
        self._trailing_slash_must_match = trailing_slash_must_match
        self._guard = guard
        self._extractor = params
        self._handler = handler
        self._children: list[Route] = []
        self._parent: Route | None = None
        self._router: Router | None = None
        self._appended = False

    def __repr__(self) -> str:
        path = str(self.path) if self.path is not None else None
        return f"Route(path={path!r}, outlet={self.outlet!r})"

    @property
    def path(self) -> PathDefinition | None:
        return self._path

    @property
    def outlet(self) -> Any:
        return self._outlet

    @property
    def trailing_slash_must_match(self) -> bool:
        return self._trailing_slash_must_match

    # -- Hierarchy --

    @property
    def parent(self) -> Route | None:
        return self._parent

    @property
    def children(self) -> tuple[Route, ...]:
        return tuple(self._children)

    @property
    def is_appended(self) -> bool:
        """True once this route has been appended to a route or a router."""
        return self._appended

    @property
    def router(self) -> Router | None:
        """The router owning this route's hierarchy, if any."""
        node = self
        while node._parent is not None:
            node = node._parent
        return node._router

    def ancestors(self) -> list[Route]:
        """Routes from the hierarchy root down to and including this one."""
        chain: list[Route] = []
        node: Route | None = self
        while node is not None:
            chain.append(node)
            node = node._parent
        chain.reverse()
        return chain

    def append(self, routes: Route | Iterable[Route]) -> None:
        """Add one route or several as children, preserving order.

        Raises ``AlreadyAppendedError`` if any of them was ever appended
        before, to this route or anywhere else. Nothing is attached when
        the call fails.
        """
        batch = claim_batch(routes)
        lineage = {id(node) for node in self.ancestors()}
        for route in batch:
            if id(route) in lineage:
                msg = "Cannot append a route to itself or to one of its descendants"
                raise ConfigurationError(msg)
        for route in batch:
            route._adopt(parent=self)
            self._children.append(route)

    def link(self, params: Mapping[str, Any] | None = None) -> str:
        """Generate a path to this route through the owning router.

        Raises ``NotInHierarchyError`` if no router owns the hierarchy.
        """
        router = self.router
        if router is None:
            raise NotInHierarchyError
        return router.link(self, params)

    # -- Selection --

    def select(
        self,
        context: Any,
        segments: Sequence[str],
        has_trailing_slash: bool = False,
        search_params: MultiValueMapping | None = None,
    ) -> SelectResult:
        """Match *segments* against this route and its descendants.

        Returns the root-to-leaf chain of selections, an empty tuple when
        nothing matches, or a ``Redirect`` when a guard asked for one.
        Redirects are returned unchanged from any depth.
        """
        if search_params is None:
            search_params = QueryParams()

        path = self.path
        raw_path_values: tuple[str, ...] = ()
        remaining = tuple(segments)
        if path is not None:
            matched = path.match_prefix(remaining)
            if matched is None:
                return ()
            raw_path_values = matched
            remaining = remaining[len(path.expected_segments) :]

        if not remaining:
            if (
                path is not None
                and self.trailing_slash_must_match
                and path.trailing_slash != has_trailing_slash
            ):
                return ()
        elif not self._children and self.outlet is None:
            # Nothing could consume the rest; skip extraction and the guard
            return ()

        raw_search_params = _raw_search_params(path, search_params)
        params = self._extract_params(raw_path_values, raw_search_params, search_params)
        if not isinstance(params, Mapping):
            return ()

        outcome = (
            as_guard_outcome(self._guard(RouteRequest(context, params)))
            if self._guard is not None
            else PROCEED
        )
        if isinstance(outcome, Reject):
            return ()
        if isinstance(outcome, Redirect):
            logger.debug("Guard of %r requested redirect to %r", self, outcome.path)
            return outcome

        def selection(match_type: MatchType) -> Selection:
            return Selection(
                route=self,
                params=params,
                raw_path_values=raw_path_values,
                raw_search_params=raw_search_params,
                path=path,
                type=match_type,
                handler=self._deferred_handler(context, params),
            )

        if not remaining:
            return (selection(MatchType.INDEX),)

        for child in self._children:
            result = child.select(context, remaining, has_trailing_slash, search_params)
            if isinstance(result, Redirect):
                return result
            if result:
                return (selection(MatchType.PARTIAL), *result)

        if self.outlet is not None:
            return (selection(MatchType.ERROR),)
        return ()

    def _extract_params(
        self,
        raw_path_values: tuple[str, ...],
        raw_search_params: Mapping[str, tuple[str, ...]],
        search_params: MultiValueMapping,
    ) -> Mapping[str, Any] | None:
        if self._extractor is not None:
            return self._extractor(raw_path_values, search_params)

        params: dict[str, Any] = {}
        if self.path is not None:
            params.update(zip(self.path.parameters, raw_path_values, strict=True))
        for name, values in raw_search_params.items():
            params[name] = values[0]
        return params

    def _deferred_handler(self, context: Any, params: Mapping[str, Any]) -> Callable[[], Any]:
        if self._handler is None:
            return noop_handler
        return partial(self._handler, RouteRequest(context, params))

    def _claim(self) -> None:
        if self._appended:
            raise AlreadyAppendedError

    def _adopt(self, *, parent: Route | None = None, router: Router | None = None) -> None:
        self._parent = parent
        self._router = router
        self._appended = True


def _raw_search_params(
    path: PathDefinition | None, search_params: MultiValueMapping
) -> dict[str, tuple[str, ...]]:
    """Every value present for each declared search parameter, in order."""
    if path is None:
        return {}
    found: dict[str, tuple[str, ...]] = {}
    for name in path.search_parameters:
        values = search_params.get_list(name)
        if values:
            found[name] = tuple(values)
    return found


def claim_batch(routes: Route | Iterable[Route]) -> list[Route]:
    """Normalise an ``append()`` argument and check no route is owned yet.

    Raises ``AlreadyAppendedError`` for a route appended before, or listed
    twice in the same batch.
    """
    batch = [routes] if isinstance(routes, Route) else list(routes)
    seen: set[int] = set()
    for route in batch:
        if id(route) in seen:
            raise AlreadyAppendedError
        route._claim()
        seen.add(id(route))
    return batch
