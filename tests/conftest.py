import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from orbit_demo.core.controller import SimulationController


@pytest.fixture
def controller() -> SimulationController:
    return SimulationController()
