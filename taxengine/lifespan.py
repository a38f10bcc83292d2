from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncContextManager

from fastapi import FastAPI

from taxengine.config import Settings, get_settings
from taxengine.core.provinces import list_provinces
from taxengine.core.tax_years import SUPPORTED_YEARS

Hook = Callable[[FastAPI], Awaitable[None] | None]

_STATE_ATTRS = (
    "settings",
    "supported_years",
    "province_catalogue",
    "telemetry_handler",
    "app_label",
)


def _province_catalogue() -> dict[int, list[dict[str, object]]]:
    return {
        year: [
            {
                "code": profile.code,
                "name": profile.name,
                "basic_personal": int(profile.basic_personal_amount),
                "sales_tax": profile.sales_tax,
                "scheme": profile.scheme,
            }
            for profile in list_provinces(year)
        ]
        for year in SUPPORTED_YEARS
    }


def _open_telemetry_sink(logger: logging.Logger, settings: Settings, app_label: str) -> logging.Handler | None:
    if not settings.feature_file_log:
        return None
    logs_dir = Path(settings.log_dir)
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Unable to create logs directory %s: %s", logs_dir, exc)
        return None
    handler = logging.FileHandler(logs_dir / f"{app_label}.log", encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    logging.getLogger("taxengine").addHandler(handler)
    return handler


async def _invoke_hook(hook: Hook | None, app: FastAPI) -> None:
    if hook is None:
        return
    try:
        result = hook(app)
        if inspect.isawaitable(result):
            await result  # type: ignore[func-returns-value]
    except Exception:  # pragma: no cover - hooks are user provided
        logging.getLogger("taxengine").exception("Application lifecycle hook failed")


def build_application_lifespan(
    app_label: str,
    *,
    startup_hook: Hook | None = None,
    shutdown_hook: Hook | None = None,
) -> Callable[[FastAPI], AsyncContextManager[None]]:
    base_logger = logging.getLogger("taxengine")

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = get_settings()
        logger = base_logger.getChild(app_label)
        catalogue = _province_catalogue()
        telemetry_handler = _open_telemetry_sink(logger, settings, app_label)

        app.state.settings = settings
        app.state.supported_years = SUPPORTED_YEARS
        app.state.province_catalogue = catalogue
        app.state.telemetry_handler = telemetry_handler
        app.state.app_label = app_label

        logger.info(
            "Startup complete: tax_years=%s provinces=%s default_tax_year=%s",
            ",".join(map(str, SUPPORTED_YEARS)),
            len(catalogue[settings.default_tax_year]),
            settings.default_tax_year,
        )

        try:
            await _invoke_hook(startup_hook, app)
            yield
        finally:
            await _invoke_hook(shutdown_hook, app)
            if telemetry_handler is not None:
                logging.getLogger("taxengine").removeHandler(telemetry_handler)
                telemetry_handler.close()
            for attr in _STATE_ATTRS:
                if hasattr(app.state, attr):
                    delattr(app.state, attr)
            logger.info("Shutdown complete")

    return _lifespan
