"""Tests for waypoint.http.query — immutable QueryParams."""

import pytest

from waypoint._internal.multimap import MultiValueMapping
from waypoint.http.query import QueryParams


class TestQueryParams:
    def test_getitem(self) -> None:
        q = QueryParams("q=hello&page=2")
        assert q["q"] == "hello"
        assert q["page"] == "2"

    def test_missing_key_raises(self) -> None:
        q = QueryParams("q=hello")
        with pytest.raises(KeyError):
            q["missing"]

    def test_contains(self) -> None:
        q = QueryParams("q=hello")
        assert "q" in q
        assert "missing" not in q

    def test_len(self) -> None:
        q = QueryParams("a=1&b=2&c=3")
        assert len(q) == 3

    def test_iter(self) -> None:
        q = QueryParams("a=1&b=2")
        assert set(q) == {"a", "b"}

    def test_get_with_default(self) -> None:
        q = QueryParams("q=hello")
        assert q.get("q") == "hello"
        assert q.get("missing") is None
        assert q.get("missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        q = QueryParams("tag=python&tag=rust&q=hello")
        assert q.get_list("tag") == ["python", "rust"]
        assert q.get_list("q") == ["hello"]
        assert q.get_list("missing") == []

    def test_get_list_is_a_copy(self) -> None:
        q = QueryParams("tag=a")
        q.get_list("tag").append("b")
        assert q.get_list("tag") == ["a"]

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert list(q) == []

    def test_blank_value_preserved(self) -> None:
        q = QueryParams("flag=")
        assert q["flag"] == ""

    def test_first_value_returned(self) -> None:
        q = QueryParams("x=first&x=second")
        assert q["x"] == "first"

    def test_leading_question_mark(self) -> None:
        q = QueryParams("?a=1")
        assert q["a"] == "1"
        assert q.raw == "a=1"

    def test_bytes(self) -> None:
        q = QueryParams(b"a=1&a=2")
        assert q.get_list("a") == ["1", "2"]

    def test_percent_decoding(self) -> None:
        q = QueryParams("q=hello%20world&r=a+b")
        assert q["q"] == "hello world"
        assert q["r"] == "a b"

    def test_from_mapping(self) -> None:
        q = QueryParams({"foo": ["foo"], "baz": ["one", "two"], "single": "x"})
        assert q.get_list("baz") == ["one", "two"]
        assert q["single"] == "x"

    def test_from_pairs(self) -> None:
        q = QueryParams([("a", "1"), ("a", "2")])
        assert q.get_list("a") == ["1", "2"]

    def test_immutable(self) -> None:
        q = QueryParams("a=1")
        with pytest.raises(AttributeError):
            q._data = {}  # type: ignore[misc]

    def test_satisfies_multivalue_mapping(self) -> None:
        q = QueryParams("a=1")
        assert isinstance(q, MultiValueMapping)

    def test_repr(self) -> None:
        q = QueryParams("a=1&a=2")
        assert repr(q) == "QueryParams({'a': ['1', '2']})"
