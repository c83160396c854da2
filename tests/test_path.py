"""Tests for waypoint.routing.path — pattern compilation."""

import pytest

from waypoint.errors import ConfigurationError, MissingParameterError, PathSyntaxError
from waypoint.routing.path import (
    LiteralSegment,
    ParameterSegment,
    PathDefinition,
    compile_path,
)


class TestCompilePath:
    def test_literal_segments(self) -> None:
        path = compile_path("/api/v2/users")
        assert path.expected_segments == (
            LiteralSegment("api"),
            LiteralSegment("v2"),
            LiteralSegment("users"),
        )
        assert path.parameters == ()
        assert path.search_parameters == ()

    def test_parameters_and_search(self) -> None:
        path = compile_path("/foo/{bar}?{baz}")
        assert path.expected_segments == (LiteralSegment("foo"), ParameterSegment("bar"))
        assert path.parameters == ("bar",)
        assert path.search_parameters == ("baz",)
        assert path.leading_slash is True
        assert path.trailing_slash is False

    def test_parameter_order_preserved(self) -> None:
        path = compile_path("/{foo}/{bar}?{baz}&{qux}")
        assert path.parameters == ("foo", "bar")
        assert path.search_parameters == ("baz", "qux")

    def test_without_leading_slash(self) -> None:
        path = compile_path("foo")
        assert path.leading_slash is False
        assert path.expected_segments == (LiteralSegment("foo"),)

    def test_trailing_slash(self) -> None:
        assert compile_path("/foo/").trailing_slash is True
        assert compile_path("/foo/?{q}").trailing_slash is True
        assert compile_path("/foo?{q}").trailing_slash is False

    def test_str_reconstructs_pattern(self) -> None:
        assert str(compile_path("/foo/{bar}/?{baz}&{qux}")) == "/foo/{bar}/?{baz}&{qux}"
        assert str(compile_path("foo")) == "foo"

    def test_same_pattern_compiles_equal(self) -> None:
        assert compile_path("/foo/{param}?{foo}") == compile_path("/foo/{param}?{foo}")

    def test_has_parameters(self) -> None:
        assert compile_path("/foo").has_parameters is False
        assert compile_path("/foo/{id}").has_parameters is True
        assert compile_path("/foo?{q}").has_parameters is True


class TestImmutability:
    def test_definition_frozen(self) -> None:
        path = compile_path("/foo/{bar}?{baz}")
        with pytest.raises(AttributeError):
            path.parameters = ("other",)  # type: ignore[misc]

    def test_segments_frozen(self) -> None:
        path = compile_path("/foo/{bar}")
        literal, parameter = path.expected_segments
        with pytest.raises(AttributeError):
            literal.literal = "other"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            parameter.name = "other"  # type: ignore[misc]

    def test_collections_are_tuples(self) -> None:
        path = compile_path("/foo/{bar}?{baz}")
        assert isinstance(path.expected_segments, tuple)
        assert isinstance(path.parameters, tuple)
        assert isinstance(path.search_parameters, tuple)


class TestSyntaxErrors:
    @pytest.mark.parametrize(
        ("pattern", "reason"),
        [
            ("/foo#", "Path must not contain '#'"),
            ("/&/bar", "Path segment must not contain '&'"),
            ("/foo{bar}", "Path segment must not contain '{' or '}'"),
            ("/foo/bar}", "Path segment must not contain '{' or '}'"),
            ("/foo//bar", "Path segment must not be empty"),
            ("//foo", "Path segment must not be empty"),
            ("?{query}", "Path must contain at least one segment"),
            ("/?{query}", "Path must contain at least one segment"),
            ("/{{}", "Parameter name must not contain '{', '&' or ':'"),
            ("/{&}", "Parameter name must not contain '{', '&' or ':'"),
            ("/{:}", "Parameter name must not contain '{', '&' or ':'"),
            ("/{}/", "Parameter must have a name"),
            ("/{foo/", "Parameter name must be followed by '}', got '/'"),
            ("/{foo}{bar}", "Parameter must be followed by '/' or '?', got '{'"),
            ("/segment?{foo}{bar}", "Search parameter must be followed by '&', got '{'"),
            ("/segment?foo=bar", "Expected parameter in search component, got 'foo=bar'"),
            ("/segment?{foo}&/bar", "Expected parameter in search component, got '/'"),
            ("/segment?{foo}&?bar", "Expected parameter in search component, got '?'"),
            ("/segment?{foo}&&bar", "Expected parameter in search component, got '&'"),
            ("/{foo}/{foo}", "Parameter must have a unique name, got 'foo'"),
            ("/{foo}?{foo}", "Parameter must have a unique name, got 'foo'"),
            ("/segment?{foo}&{foo}", "Parameter must have a unique name, got 'foo'"),
        ],
    )
    def test_rejected(self, pattern: str, reason: str) -> None:
        with pytest.raises(PathSyntaxError) as exc_info:
            compile_path(pattern)
        assert str(exc_info.value) == reason
        assert exc_info.value.pattern == pattern

    def test_unclosed_at_end(self) -> None:
        with pytest.raises(PathSyntaxError, match="must be followed by '}'"):
            compile_path("/{foo")

    def test_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_path("/foo#")

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            compile_path("")


class TestMatchPrefix:
    def test_captures_parameters(self) -> None:
        path = compile_path("/foo/{bar}/{baz}")
        assert path.match_prefix(["foo", "one", "two", "extra"]) == ("one", "two")

    def test_literal_mismatch(self) -> None:
        path = compile_path("/foo/bar")
        assert path.match_prefix(["foo", "baz"]) is None

    def test_too_few_segments(self) -> None:
        path = compile_path("/foo/bar")
        assert path.match_prefix(["foo"]) is None


class TestRender:
    def test_substitutes_path_parameters(self) -> None:
        segments, query = compile_path("/users/{id}").render({"id": 42})
        assert segments == ["users", "42"]
        assert query == []

    def test_missing_path_parameter(self) -> None:
        path = compile_path("/users/{id}")
        with pytest.raises(MissingParameterError) as exc_info:
            path.render({})
        assert exc_info.value.name == "id"

    def test_search_parameters_optional(self) -> None:
        path = compile_path("/search?{q}&{page}")
        segments, query = path.render({"page": 2})
        assert segments == ["search"]
        assert query == [("page", "2")]

    def test_search_parameter_list(self) -> None:
        _, query = compile_path("/search?{tag}").render({"tag": ["a", "b"]})
        assert query == [("tag", "a"), ("tag", "b")]


def test_definition_is_plain_value() -> None:
    path = PathDefinition(expected_segments=(LiteralSegment("foo"),))
    assert path.parameters == ()
    assert path.leading_slash is False
