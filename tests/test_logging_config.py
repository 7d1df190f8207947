import logging

import pytest

from phasebank.logging_config import configure_logging


@pytest.fixture
def basic_config(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    return calls


def test_level_name_is_accepted(basic_config, monkeypatch):
    monkeypatch.delenv("PHASEBANK_LOG_LEVEL", raising=False)
    configure_logging("debug")
    assert basic_config[0]["level"] == logging.DEBUG
    assert "%(name)s" in basic_config[0]["format"]


def test_env_var_wins(basic_config, monkeypatch):
    monkeypatch.setenv("PHASEBANK_LOG_LEVEL", "ERROR")
    configure_logging(logging.INFO)
    assert basic_config[0]["level"] == logging.ERROR


def test_unknown_env_level_keeps_default(basic_config, monkeypatch):
    monkeypatch.setenv("PHASEBANK_LOG_LEVEL", "chatty")
    configure_logging(logging.WARNING)
    assert basic_config[0]["level"] == logging.WARNING
