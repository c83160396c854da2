"""Selection results and guard outcomes.

Everything a traversal hands back is a frozen value: ``Selection`` for
each matched route, ``Redirect`` when a guard aborts the traversal.
Guards answer with ``Proceed``, ``Reject`` or ``Redirect``; plain
``True`` / ``False`` / ``str`` are accepted and normalised on the way in.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from waypoint.routing.path import PathDefinition
    from waypoint.routing.route import Route


class MatchType(Enum):
    """How a selected route relates to the segments it was offered."""

    # Route consumed every remaining segment; leaf of the chain
    INDEX = "index"
    # Route matched its own segments; a child matched the rest
    PARTIAL = "partial"
    # Route matched its own segments, nothing matched the rest, route has an outlet
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class RouteRequest:
    """What guards and handlers receive: caller context plus extracted params."""

    context: Any
    params: Mapping[str, Any]


# -- Guard outcomes --


@dataclass(frozen=True, slots=True)
class Proceed:
    """Guard allows the route to be selected."""


@dataclass(frozen=True, slots=True)
class Reject:
    """Guard vetoes the route; the traversal moves on to siblings."""


@dataclass(frozen=True, slots=True)
class Redirect:
    """Abort the whole traversal and go to *path* instead.

    An empty path is a valid redirect target.
    """

    path: str


PROCEED = Proceed()
REJECT = Reject()

GuardOutcome = Proceed | Reject | Redirect


def as_guard_outcome(value: object) -> GuardOutcome:
    """Normalise a guard's return value.

    ``True`` -> ``Proceed``, ``False`` -> ``Reject``, ``str`` -> ``Redirect``.
    Tagged outcomes pass through. Raises ``TypeError`` for anything else.
    """
    if isinstance(value, (Proceed, Reject, Redirect)):
        return value
    if value is True:
        return PROCEED
    if value is False:
        return REJECT
    if isinstance(value, str):
        return Redirect(value)
    msg = f"Guard must return a bool, a path string or a guard outcome, got {type(value).__name__}"
    raise TypeError(msg)


# -- Selections --


def noop_handler() -> None:
    return None


@dataclass(frozen=True, slots=True)
class Selection:
    """One route's contribution to a successful traversal.

    Attributes:
        route: The matched route.
        params: Extracted parameters (default or custom extraction).
        raw_path_values: Segments consumed for the route's path parameters.
        raw_search_params: Search-parameter name -> every value found, in order.
        path: The route's compiled path, ``None`` for pathless routes.
        type: How the route matched.
        handler: Deferred call of the route's handler with context and params.
            Invoking it is up to the caller; selection never does.
    """

    route: Route
    params: Mapping[str, Any]
    raw_path_values: tuple[str, ...] = ()
    raw_search_params: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    path: PathDefinition | None = None
    type: MatchType = MatchType.INDEX
    handler: Callable[[], Any] = noop_handler


SelectResult = tuple[Selection, ...] | Redirect
