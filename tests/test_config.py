"""Tests for waypost.config — NavigatorConfig frozen dataclass."""

import pytest

from waypost.config import NavigatorConfig


class TestNavigatorConfig:
    def test_defaults(self) -> None:
        cfg = NavigatorConfig()

        assert cfg.fallback_route is None
        assert cfg.root_url == "/"
        assert cfg.key_field == "name"
        assert cfg.log_level == "info"

    def test_override(self) -> None:
        cfg = NavigatorConfig(fallback_route="/cars", root_url="/app", key_field="id")

        assert cfg.fallback_route == "/cars"
        assert cfg.root_url == "/app"
        assert cfg.key_field == "id"

    def test_frozen(self) -> None:
        cfg = NavigatorConfig()

        with pytest.raises(AttributeError):
            cfg.fallback_route = "/cars"  # type: ignore[misc]
