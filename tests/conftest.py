"""Pytest configuration and fixtures for island game tests."""

from dataclasses import replace

import pytest

from game.island import DEFAULT_CONFIG, FrameController


@pytest.fixture
def quiet_config():
    """Default rules with bonus spawning switched off."""
    return replace(DEFAULT_CONFIG, bonus_spawn_chance=0.0)


@pytest.fixture
def controller(quiet_config):
    """A fresh session that never spawns bonuses on its own."""
    return FrameController(config=quiet_config, seed=42)
