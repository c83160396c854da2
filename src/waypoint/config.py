"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(path_prefix="/app")
    """

    # Mount point: stripped from incoming paths, prepended to generated links
    path_prefix: str = ""

    # Percent-decode incoming path segments before matching
    decode_segments: bool = True

    def __post_init__(self) -> None:
        prefix = self.path_prefix.rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix
        object.__setattr__(self, "path_prefix", prefix)
