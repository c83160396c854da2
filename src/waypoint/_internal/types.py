"""Shared type aliases used across waypoint modules."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeAlias

from waypoint._internal.multimap import MultiValueMapping

# Route guard — receives a RouteRequest, returns a guard outcome (or bool / str)
Guard: TypeAlias = Callable[..., Any]

# Custom parameter extraction — (raw path values, search params) -> mapping or None
ParamsExtractor: TypeAlias = Callable[
    [Sequence[str], MultiValueMapping], Mapping[str, Any] | None
]

# Route handler — receives a RouteRequest, return value is the caller's business
Handler: TypeAlias = Callable[..., Any]
