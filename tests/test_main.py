"""Tests for logging configuration and server bootstrap."""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import SecretStr

from usersearch import main as main_module
from usersearch.config import SearchSettings, ServerSettings
from usersearch.logging import configure_logging


def test_configure_logging_outputs_json(capsys):
    configure_logging()
    logger = structlog.get_logger()
    logger.info("unit-test", foo="bar")
    out = capsys.readouterr().out
    assert "unit-test" in out
    assert "foo" in out


def test_configure_logging_accepts_level_names(capsys):
    configure_logging("WARNING")
    logger = structlog.get_logger()
    logger.info("hidden-event")
    logger.warning("visible-event")
    out = capsys.readouterr().out
    assert "hidden-event" not in out
    assert "visible-event" in out
    configure_logging()


def test_main_bootstrap(monkeypatch):
    settings = SearchSettings(
        server=ServerSettings(
            host="0.0.0.0",
            port=9000,
            dataset_path=Path("users.xml"),
            access_token=SecretStr("token"),
        )
    )
    captured = {}

    def fake_run(app, **kwargs):
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main()

    assert captured["host"] == "0.0.0.0"
    assert captured["port"] == 9000
    app = captured["app"]
    assert app.state.settings is settings.server
    assert app.state.store.path == Path("users.xml")
    assert app.state.store.loaded is False
