"""
FastAPI application, the fathom entry point.

Serves the converter page and a small JSON API:
  - /api/v1/convert    run a conversion (no side effects)
  - /api/history       list / record / clear recent conversions
  - /api/v1/units      category + unit catalog for the UI
  - /api/v1/beaufort   the Beaufort table
Recording a conversion is a separate call the page makes after it has a
result; the convert endpoint never writes history.
"""

import logging
import math
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, FileResponse

from fathom import __version__
from fathom.config import get_config, get_runtime_config, update_runtime_config, history_enabled
from fathom.storage.models import ConversionRecord
from fathom.storage.sqlite_store import SQLiteStore
from fathom.units import (
    BEAUFORT_SCALE,
    Category,
    ConversionFailure,
    UnknownCategoryError,
    convert,
    format_failure,
    format_result,
    wind_force,
)
from fathom.units.registry import catalog

logger = logging.getLogger(__name__)

_WEB_DIR = Path(__file__).parent / "web"


# ---------------------------------------------------------------------------
# Globals, initialized at startup
# ---------------------------------------------------------------------------
sqlite_store: SQLiteStore | None = None


def _setup_logging(cfg: dict):
    log_cfg = cfg.get("logging", {})
    level = getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO)
    log_file = log_cfg.get("file")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def _history_limit() -> int:
    return int(get_config().get("history", {}).get("limit", 50))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    global sqlite_store

    cfg = get_config()
    _setup_logging(cfg)

    sqlite_store = SQLiteStore(cfg["storage"]["sqlite_path"])

    logger.info(
        "Fathom %s started on %s:%s",
        __version__, cfg["server"]["host"], cfg["server"]["port"],
    )
    logger.info("History: %s (limit %d)", "recording" if history_enabled() else "paused", _history_limit())

    yield

    logger.info("Fathom shutting down")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Fathom",
    description="Maritime unit converter.",
    version=__version__,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

@app.post("/api/v1/convert")
async def api_convert(request: Request):
    """
    Convert a value. Body: {category, fromUnit, toUnit, inputValue}.
    Bad input or an unknown unit is not an HTTP error: it comes back as
    ok=false with the placeholder the page displays.
    """
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Body must be JSON"}, status_code=400)
    if not isinstance(body, dict):
        return JSONResponse({"error": "Body must be a JSON object"}, status_code=400)

    category = body.get("category")
    from_unit = str(body.get("fromUnit", ""))
    to_unit = str(body.get("toUnit", ""))
    input_value = body.get("inputValue")

    try:
        result = convert(category, from_unit, to_unit, input_value)
    except UnknownCategoryError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    beaufort = None
    if Category.parse(category) is Category.WIND:
        entry = wind_force(from_unit, input_value)
        beaufort = entry.to_dict() if entry else None

    if isinstance(result, ConversionFailure):
        return JSONResponse({
            "ok": False,
            "reason": result.reason,
            "detail": result.detail,
            "result": None,
            "formatted": format_failure(),
            "beaufort": None,
        })

    # JSON has no Infinity; overflowed results are shown but carry no value
    return JSONResponse({
        "ok": True,
        "result": result if math.isfinite(result) else None,
        "formatted": format_result(result),
        "beaufort": beaufort,
    })


@app.get("/api/v1/units")
async def api_units():
    """Category tabs, unit lists and default from/to selections."""
    return JSONResponse({"categories": catalog()})


@app.get("/api/v1/beaufort")
async def api_beaufort():
    """The Beaufort scale, level 0 to 12."""
    return JSONResponse({"scale": [e.to_dict() for e in BEAUFORT_SCALE]})


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

@app.get("/api/history")
async def get_history():
    """Most recent conversions, newest first."""
    try:
        return JSONResponse(sqlite_store.get_recent(limit=_history_limit()))
    except Exception as e:
        logger.error("Failed to fetch history: %s", e)
        return JSONResponse({"error": "Failed to fetch history"}, status_code=500)


@app.post("/api/history")
async def save_history(request: Request):
    """Record one completed conversion. Body: {category, fromUnit, toUnit, inputValue, outputValue}."""
    if not history_enabled():
        return JSONResponse({"error": "History recording is paused"}, status_code=409)

    try:
        body = await request.json()
        record = ConversionRecord.from_request(body)
    except (ValueError, TypeError, KeyError) as e:
        return JSONResponse({"error": f"Invalid history entry: {e}"}, status_code=400)

    try:
        sqlite_store.record_conversion(record)
    except Exception as e:
        logger.error("Failed to save history: %s", e)
        return JSONResponse({"error": "Failed to save history"}, status_code=500)
    return JSONResponse({"success": True, "id": record.id}, status_code=201)


@app.delete("/api/history")
async def clear_history():
    """Delete every recorded conversion."""
    try:
        deleted = sqlite_store.clear_history()
    except Exception as e:
        logger.error("Failed to clear history: %s", e)
        return JSONResponse({"error": "Failed to clear history"}, status_code=500)
    return JSONResponse({"success": True, "deleted": deleted})


@app.post("/api/v1/history/toggle")
async def toggle_history():
    """Pause or resume history recording. Persisted to runtime_config.yaml."""
    new_value = not history_enabled()
    ok = update_runtime_config("history_enabled", new_value)
    logger.info("History recording %s", "resumed" if new_value else "paused")
    return JSONResponse({"ok": ok, "history_enabled": new_value if ok else not new_value})


@app.get("/api/v1/stats")
async def api_stats():
    """Record counts from the history store."""
    return JSONResponse(sqlite_store.get_stats() if sqlite_store else {})


@app.get("/api/v1/export")
async def api_export():
    """All recorded conversions, oldest first."""
    data = sqlite_store.export_all_json() if sqlite_store else []
    return JSONResponse({"conversions": data, "count": len(data)})


# ---------------------------------------------------------------------------
# Service info
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    """Health check."""
    return JSONResponse({"status": "ok", "version": __version__})


@app.get("/api/v1/config")
async def api_config():
    """Effective configuration, with runtime overrides applied."""
    cfg = get_config()
    rt = get_runtime_config()
    return JSONResponse({
        "server": {
            "host": cfg.get("server", {}).get("host", "0.0.0.0"),
            "port": cfg.get("server", {}).get("port", 3000),
        },
        "storage": {
            "sqlite_path": cfg.get("storage", {}).get("sqlite_path", ""),
        },
        "history": {
            "enabled": history_enabled(),
            "limit": _history_limit(),
        },
        "logging": {
            "level": cfg.get("logging", {}).get("level", "INFO"),
        },
        "runtime": rt,
    })


# ---------------------------------------------------------------------------
# Web UI
# ---------------------------------------------------------------------------

@app.get("/")
async def root():
    """Serve the converter page."""
    return FileResponse(_WEB_DIR / "index.html", media_type="text/html")


@app.get("/ui")
async def ui():
    """Alias for root."""
    return FileResponse(_WEB_DIR / "index.html", media_type="text/html")
