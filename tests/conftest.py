import sys
from collections.abc import Generator
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import capcue.config as config  # noqa: E402


@pytest.fixture(autouse=True)
def _silence_halo(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Halo spinners with a no-op context manager for tests."""

    class _DummyHalo:
        def __init__(self, *args, **kwargs):
            self.text = kwargs.get("text")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("capcue.utils.timeline_utils.Halo", _DummyHalo)


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keeps global settings independent of the developer's environment."""
    for name in (
        "CAPCUE_WINDOW_SIZE",
        "CAPCUE_FALLBACK_TEXT",
        "CAPCUE_FALLBACK_SECONDS",
        "CAPCUE_SEGMENT_SECONDS",
        "CAPCUE_DEFAULT_PRESET",
        "CAPCUE_FPS",
        "CAPCUE_CUES_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    config.reload_settings()
    yield
    config.apply_settings(config.AppConfig())

