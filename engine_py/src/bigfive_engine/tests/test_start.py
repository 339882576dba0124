"""
Tests for the server bootstrap settings.
"""

import pytest

from bigfive_engine import start


def test_defaults():
    assert start.server_settings({}) == {
        "host": "0.0.0.0",
        "port": 8000,
        "reload": False,
        "log_level": "info",
    }


def test_environment_overrides():
    settings = start.server_settings({
        "HOST": "127.0.0.1", "PORT": "9001", "RELOAD": "True", "LOG_LEVEL": "DEBUG",
    })
    assert settings == {
        "host": "127.0.0.1",
        "port": 9001,
        "reload": True,
        "log_level": "debug",
    }


def test_bad_port():
    with pytest.raises(ValueError):
        start.server_settings({"PORT": "eighty"})


def test_main_runs_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(start.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.delenv("RELOAD", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    start.main()

    assert calls == [("bigfive_engine.ws.server:app", {
        "host": calls[0][1]["host"], "port": 8123, "reload": False, "log_level": "info",
    })]
