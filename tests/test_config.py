"""Tests for waypoint.config — RouterConfig frozen dataclass."""

import pytest

from waypoint.config import RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()
        assert cfg.path_prefix == ""
        assert cfg.decode_segments is True

    def test_override(self) -> None:
        cfg = RouterConfig(path_prefix="/app", decode_segments=False)
        assert cfg.path_prefix == "/app"
        assert cfg.decode_segments is False

    def test_frozen(self) -> None:
        cfg = RouterConfig()
        with pytest.raises(AttributeError):
            cfg.path_prefix = "/other"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("given", "expected"),
        [("/app/", "/app"), ("app", "/app"), ("/", ""), ("/a/b/", "/a/b")],
    )
    def test_prefix_normalised(self, given: str, expected: str) -> None:
        assert RouterConfig(path_prefix=given).path_prefix == expected
