import pytest

from framedump.core.config import FrameDumpConfig, get_config, set_config


def test_defaults():
    config = FrameDumpConfig()

    assert config.log_level == "WARNING"
    assert config.hex_window_ids is True
    assert config.color is True


def test_from_env(monkeypatch):
    monkeypatch.setenv("FRAMEDUMP_LOG_LEVEL", "debug")
    monkeypatch.setenv("FRAMEDUMP_HEX_WINDOW_IDS", "no")
    monkeypatch.setenv("FRAMEDUMP_COLOR", "0")

    config = FrameDumpConfig.from_env()

    assert config.log_level == "DEBUG"
    assert config.hex_window_ids is False
    assert config.color is False


def test_from_env_rejects_bad_flag(monkeypatch):
    monkeypatch.setenv("FRAMEDUMP_COLOR", "maybe")

    with pytest.raises(ValueError, match="FRAMEDUMP_COLOR"):
        FrameDumpConfig.from_env()


def test_get_config_is_lazy_singleton(monkeypatch):
    set_config(None)
    monkeypatch.setenv("FRAMEDUMP_LOG_LEVEL", "info")

    first = get_config()

    assert first.log_level == "INFO"
    assert get_config() is first


def test_set_config_overrides():
    custom = FrameDumpConfig(hex_window_ids=False)
    set_config(custom)

    assert get_config() is custom
