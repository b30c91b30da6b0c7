"""Shared fixtures: isolated settings and the sample roster."""

import pytest

from dcm.config import get_settings
from dcm.engine import Participant


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at an empty temp data dir and reset the cached singleton."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DCM_DATA_DIR", str(tmp_path / "data"))
    for var in ("DCM_LOGFIRE_TOKEN", "DCM_ENGINE__LEVERAGE_BOUND", "DCM_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_participants() -> list[Participant]:
    return [
        Participant(name="A", stake=100, confidence=80, side="YES"),
        Participant(name="B", stake=100, confidence=30, side="YES"),
        Participant(name="C", stake=100, confidence=60, side="NO"),
    ]
