import pytest
from pydantic import ValidationError

from sleepcycle.config import Settings


def test_clock_format_from_env(monkeypatch):
    monkeypatch.setenv("CLOCK_FORMAT", "24h")
    assert Settings().clock_format == "24h"


def test_clock_format_rejects_unknown_value(monkeypatch):
    """Ошибка должна всплывать при старте, а не при первом расчёте"""
    monkeypatch.setenv("CLOCK_FORMAT", "12H")
    with pytest.raises(ValidationError):
        Settings()
