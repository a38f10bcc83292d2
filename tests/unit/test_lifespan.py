import asyncio
import logging

from fastapi import FastAPI

from taxengine import lifespan
from taxengine.config import get_settings


def _run(app: FastAPI, body=None) -> None:
    async def _cycle():
        async with lifespan.build_application_lifespan("test-app", startup_hook=body)(app):
            assert app.state.app_label == "test-app"

    asyncio.run(_cycle())


def test_lifespan_populates_and_clears_state(monkeypatch):
    monkeypatch.delenv("FEATURE_FILE_LOG", raising=False)
    get_settings.cache_clear()
    app = FastAPI()
    seen = {}

    def capture(app_: FastAPI) -> None:
        seen["years"] = app_.state.supported_years
        seen["catalogue"] = app_.state.province_catalogue
        seen["handler"] = app_.state.telemetry_handler

    _run(app, capture)

    assert seen["years"] == (2022, 2023, 2024)
    assert len(seen["catalogue"][2024]) == 13
    ontario = next(row for row in seen["catalogue"][2024] if row["code"] == "ON")
    assert ontario == {
        "code": "ON",
        "name": "Ontario",
        "basic_personal": 11865,
        "sales_tax": "HST: 13%",
        "scheme": "brackets",
    }
    assert seen["handler"] is None
    assert not hasattr(app.state, "province_catalogue")
    get_settings.cache_clear()


def test_file_log_sink_attached_only_while_running(monkeypatch, tmp_path):
    monkeypatch.setenv("FEATURE_FILE_LOG", "true")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    get_settings.cache_clear()
    app = FastAPI()
    seen = {}

    async def capture(app_: FastAPI) -> None:
        seen["handler"] = app_.state.telemetry_handler
        logging.getLogger("taxengine.test").warning("hello from the test")

    _run(app, capture)

    handler = seen["handler"]
    assert isinstance(handler, logging.FileHandler)
    assert handler not in logging.getLogger("taxengine").handlers
    log_file = tmp_path / "logs" / "test-app.log"
    assert "hello from the test" in log_file.read_text(encoding="utf-8")
    get_settings.cache_clear()
