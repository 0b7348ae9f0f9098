"""Tests for wren.config — frozen application configuration."""

import dataclasses

import pytest

from wren.config import AppConfig, WrenOptions


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.debug is False
        assert config.log_level == "info"
        assert config.reload is False

    def test_override(self) -> None:
        config = AppConfig(debug=True, port=3000)
        assert config.debug is True
        assert config.port == 3000

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 9000  # type: ignore[misc]

    def test_replace(self) -> None:
        config = dataclasses.replace(AppConfig(), host="0.0.0.0")
        assert config.host == "0.0.0.0"
        assert config.port == 8000


class TestWrenOptions:
    def test_defaults_are_none(self) -> None:
        options = WrenOptions()
        assert options.before is None
        assert options.after is None

    def test_holds_hooks(self) -> None:
        def before(ctx) -> bool:
            return True

        options = WrenOptions(before=before)
        assert options.before is before
        assert options.after is None

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            WrenOptions().before = None  # type: ignore[misc]
