"""Immutable query string parameters.

Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol.
"""

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    Attributes:
        _data: Parsed query string as field name -> list of values.
        _raw: Raw query string.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.

    Accepts a raw query string (``str`` or ``bytes``, with or without the
    leading ``?``), a mapping of name -> value(s), or an iterable of pairs::

        QueryParams("baz=grault&baz=garply")
        QueryParams({"foo": ["foo"], "baz": ["one", "two"]})
    """

    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(
        self,
        query: str | bytes | Mapping[str, str | Iterable[str]] | Iterable[tuple[str, str]] = "",
    ) -> None:
        data: dict[str, list[str]] = {}
        if isinstance(query, bytes):
            query = query.decode("latin-1")
        if isinstance(query, str):
            raw = query.removeprefix("?")
            pairs: Iterable[tuple[str, str]] = parse_qsl(raw, keep_blank_values=True)
        else:
            raw = ""
            pairs = _pairs(query)
        for key, value in pairs:
            data.setdefault(key, []).append(value)
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_data", data)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "QueryParams is immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self.get_list(k)!r}" for k in self)
        return f"QueryParams({{{items}}})"

    @property
    def raw(self) -> str:
        """The query string this was parsed from (empty when built from pairs)."""
        return self._raw

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))


def _pairs(
    source: Mapping[str, str | Iterable[str]] | Iterable[tuple[str, str]],
) -> Iterator[tuple[str, str]]:
    if isinstance(source, Mapping):
        for key, value in source.items():
            if isinstance(value, str):
                yield key, value
            else:
                for item in value:
                    yield key, item
        return
    yield from source
