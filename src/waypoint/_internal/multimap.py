"""MultiValueMapping protocol — the read-only query capability routes consume.

A structural protocol so ``Route.select`` can accept any multi-valued
mapping without coupling to the concrete ``QueryParams`` type.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A read-only string mapping where keys can have multiple values.

    ``get`` returns the first value for a key.
    ``get_list`` returns all values for a key, in order of occurrence.

    Routes never mutate it.
    """

    def get(self, key: str, default: str | None = None) -> str | None: ...
    def get_list(self, key: str) -> list[str]: ...
