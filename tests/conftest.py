import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from config import Config
from engine import RunController
from engine.token import CancellationToken


@pytest.fixture
def config() -> Config:
    """No step delays, snapshots kept for inspection."""

    return Config(delay_scale=0, keep_snapshots=True, stop_join_timeout=5.0)


@pytest.fixture
def controller(config):
    ctl = RunController(config)
    yield ctl
    ctl.stop()


@pytest.fixture
def token() -> CancellationToken:
    return CancellationToken()
