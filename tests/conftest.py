"""Shared fixtures for the framedump test suite."""

import pytest

from framedump.core.config import FrameDumpConfig, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Give every test a fresh default config, unaffected by FRAMEDUMP_* env vars."""
    config = FrameDumpConfig()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def sample_dump():
    return "(split horizontal:0.5:1 (clients max:0 0x1400003) (clients vertical:-1))"
