"""Tests for environment-driven settings."""

import pytest

from config import Settings

_VARS = (
    "SIMPLIFY_LOG_LEVEL",
    "SIMPLIFY_VIEWPORT_WIDTH",
    "SIMPLIFY_VIEWPORT_HEIGHT",
    "SIMPLIFY_MAX_VISITS_PER_NODE",
    "SIMPLIFY_MAX_HTML_BYTES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = Settings.from_env()
    assert settings == Settings()
    assert settings.max_visits_per_node is None


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIMPLIFY_LOG_LEVEL", "debug")
    monkeypatch.setenv("SIMPLIFY_VIEWPORT_WIDTH", "800")
    monkeypatch.setenv("SIMPLIFY_VIEWPORT_HEIGHT", "600")
    monkeypatch.setenv("SIMPLIFY_MAX_VISITS_PER_NODE", "50")
    monkeypatch.setenv("SIMPLIFY_MAX_HTML_BYTES", "1024")

    settings = Settings.from_env()

    assert settings.log_level == "DEBUG"
    assert (settings.viewport_width, settings.viewport_height) == (800, 600)
    assert settings.max_visits_per_node == 50
    assert settings.max_html_bytes == 1024


def test_zero_budget_disables_it(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIMPLIFY_MAX_VISITS_PER_NODE", "0")
    assert Settings.from_env().max_visits_per_node is None


def test_non_integer_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIMPLIFY_VIEWPORT_WIDTH", "wide")
    with pytest.raises(ValueError, match="SIMPLIFY_VIEWPORT_WIDTH"):
        Settings.from_env()
