"""Path pattern compilation.

Turns a route pattern such as ``/users/{id}?{tab}&{page}`` into an
immutable ``PathDefinition``. Compiled once per Route at construction
time; never mutated afterwards.

Grammar::

    pattern   = [ "/" ] segment ( "/" segment )* [ "/" ] [ "?" search ]
    segment   = literal | "{" name "}"
    search    = "{" name "}" ( "&" "{" name "}" )*
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, NoReturn

from waypoint.errors import MissingParameterError, PathSyntaxError

# Characters that may never appear inside a parameter name
_FORBIDDEN_IN_NAME = "{&:"


@dataclass(frozen=True, slots=True)
class LiteralSegment:
    """A segment that must equal the incoming path segment exactly."""

    literal: str


@dataclass(frozen=True, slots=True)
class ParameterSegment:
    """A ``{name}`` segment that captures any single path segment."""

    name: str


Segment = LiteralSegment | ParameterSegment


@dataclass(frozen=True, slots=True)
class PathDefinition:
    """The compiled, immutable structure of a route pattern.

    Attributes:
        expected_segments: Literal and parameter segments, in order.
        parameters: Path-parameter names, in declaration order.
        search_parameters: Query-string parameter names, in declaration order.
        leading_slash: The pattern started with ``/``.
        trailing_slash: The path component ended with ``/``.
    """

    expected_segments: tuple[Segment, ...]
    parameters: tuple[str, ...] = ()
    search_parameters: tuple[str, ...] = ()
    leading_slash: bool = False
    trailing_slash: bool = False

    def __str__(self) -> str:
        path = "/".join(
            s.literal if isinstance(s, LiteralSegment) else f"{{{s.name}}}"
            for s in self.expected_segments
        )
        if self.leading_slash:
            path = "/" + path
        if self.trailing_slash:
            path += "/"
        if self.search_parameters:
            path += "?" + "&".join(f"{{{name}}}" for name in self.search_parameters)
        return path

    @property
    def has_parameters(self) -> bool:
        return bool(self.parameters or self.search_parameters)

    def match_prefix(self, segments: Sequence[str]) -> tuple[str, ...] | None:
        """Match the expected segments against the head of *segments*.

        Returns the raw values captured for each path parameter (in
        declaration order), or ``None`` when there are too few segments
        or a literal differs.
        """
        if len(segments) < len(self.expected_segments):
            return None
        values: list[str] = []
        for expected, actual in zip(self.expected_segments, segments, strict=False):
            if isinstance(expected, LiteralSegment):
                if expected.literal != actual:
                    return None
            else:
                values.append(actual)
        return tuple(values)

    def render(self, params: Mapping[str, Any]) -> tuple[list[str], list[tuple[str, str]]]:
        """Substitute *params* into this pattern.

        Returns the path segments and the ``(name, value)`` query pairs for
        the search parameters present in *params*. A search parameter given
        as a list or tuple contributes one pair per item.

        Raises ``MissingParameterError`` when a path parameter has no value.
        """
        segments: list[str] = []
        for segment in self.expected_segments:
            if isinstance(segment, LiteralSegment):
                segments.append(segment.literal)
                continue
            value = params.get(segment.name)
            if value is None:
                raise MissingParameterError(segment.name)
            segments.append(str(value))

        query: list[tuple[str, str]] = []
        for name in self.search_parameters:
            value = params.get(name)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                query.extend((name, str(item)) for item in value)
            else:
                query.append((name, str(value)))
        return segments, query


@lru_cache(maxsize=512)
def compile_path(pattern: str) -> PathDefinition:
    """Compile *pattern* into a ``PathDefinition``.

    Examples::

        compile_path("/users")           -> [LiteralSegment("users")]
        compile_path("/users/{id}")      -> [LiteralSegment("users"), ParameterSegment("id")]
        compile_path("/search?{q}&{p}")  -> search_parameters ("q", "p")

    Raises ``PathSyntaxError`` with a stable reason when the pattern is
    invalid. Results are cached per pattern string; they are immutable,
    so sharing them between routes is safe.
    """
    return _Compiler(pattern).compile()


class _Compiler:
    """Single-use scanner over one pattern string."""

    __slots__ = ("_names", "_pattern", "_pos")

    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._pos = 0
        self._names: list[str] = []

    def compile(self) -> PathDefinition:
        pattern = self._pattern
        if "#" in pattern:
            self._fail("Path must not contain '#'")

        leading_slash = pattern.startswith("/")
        if leading_slash:
            self._pos = 1

        segments, trailing_slash = self._path_segments()
        if not segments:
            self._fail("Path must contain at least one segment")
        parameters = tuple(self._names)

        search_parameters: tuple[str, ...] = ()
        if self._peek() == "?":
            self._pos += 1
            search_parameters = tuple(self._search_parameters())

        return PathDefinition(
            expected_segments=tuple(segments),
            parameters=parameters,
            search_parameters=search_parameters,
            leading_slash=leading_slash,
            trailing_slash=trailing_slash,
        )

    # -- Path component --

    def _path_segments(self) -> tuple[list[Segment], bool]:
        pattern = self._pattern
        segments: list[Segment] = []
        while self._pos < len(pattern) and pattern[self._pos] != "?":
            if pattern[self._pos] == "{":
                self._pos += 1
                segments.append(ParameterSegment(self._parameter_name()))
                char = self._peek()
                if char and char not in "/?":
                    self._fail(f"Parameter must be followed by '/' or '?', got {char!r}")
            else:
                end = self._find_any("/?")
                literal = pattern[self._pos : end]
                if not literal:
                    self._fail("Path segment must not be empty")
                if "&" in literal:
                    self._fail("Path segment must not contain '&'")
                if "{" in literal or "}" in literal:
                    self._fail("Path segment must not contain '{' or '}'")
                segments.append(LiteralSegment(literal))
                self._pos = end

            if self._peek() == "/":
                self._pos += 1
                if self._peek() in ("", "?"):
                    return segments, bool(segments)
        return segments, False

    # -- Search component --

    def _search_parameters(self) -> Iterator[str]:
        pattern = self._pattern
        while True:
            char = self._peek()
            if char != "{":
                if char in ("/", "?", "&"):
                    found = char
                else:
                    found = pattern[self._pos : self._find_any("{&/?")]
                self._fail(f"Expected parameter in search component, got {found!r}")
            self._pos += 1
            yield self._parameter_name()

            char = self._peek()
            if not char:
                return
            if char != "&":
                self._fail(f"Search parameter must be followed by '&', got {char!r}")
            self._pos += 1

    # -- Shared --

    def _parameter_name(self) -> str:
        """Read a name up to and including its closing ``}``."""
        pattern = self._pattern
        start = self._pos
        end = self._find_any("}/?" + _FORBIDDEN_IN_NAME)
        char = pattern[end] if end < len(pattern) else ""
        if char and char in _FORBIDDEN_IN_NAME:
            self._fail("Parameter name must not contain '{', '&' or ':'")
        if char != "}":
            self._fail(f"Parameter name must be followed by '}}', got {char!r}")
        name = pattern[start:end]
        if not name:
            self._fail("Parameter must have a name")
        if name in self._names:
            self._fail(f"Parameter must have a unique name, got {name!r}")
        self._names.append(name)
        self._pos = end + 1
        return name

    def _peek(self) -> str:
        if self._pos < len(self._pattern):
            return self._pattern[self._pos]
        return ""

    def _find_any(self, chars: str) -> int:
        pattern = self._pattern
        pos = self._pos
        while pos < len(pattern) and pattern[pos] not in chars:
            pos += 1
        return pos

    def _fail(self, reason: str) -> NoReturn:
        raise PathSyntaxError(reason, self._pattern)
