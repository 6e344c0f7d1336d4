from __future__ import annotations

import pytest

from timevalue.config import EngineSettings
from timevalue.logging_setup import configure_logging


@pytest.fixture(scope="session", autouse=True)
def _quiet_logging():
    configure_logging(level="WARNING", format_json=True)


@pytest.fixture()
def settings() -> EngineSettings:
    return EngineSettings()
