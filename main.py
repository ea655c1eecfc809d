# ─────────────────────────────────────────────────────────────────
# main.py — Outage Agent Entry Point
#
# Wires everything together:
#   config.py   → settings from the environment
#   alerts.py   → logging + outage notifications
#   database.py → the one AssetCache for the process
#   timer.py    → periodic dead check, started in the lifespan
#   routes/     → event ingestion and query endpoints
#
# Run with:  uvicorn main:app
# ─────────────────────────────────────────────────────────────────

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

import database
from alerts import setup_logging
from config import get_settings
from routes.assets import router as assets_router
from routes.events import router as events_router
from timer import run_dead_check_loop

logger = logging.getLogger("main")

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.verbose)

    database.asset_cache.set_default_expiry(settings.default_expiry_sec)
    database.asset_cache.set_verbose(settings.verbose)
    logger.info(
        f"🚀 Outage agent starting | default expiry: {settings.default_expiry_sec}s "
        f"| dead check every {settings.dead_check_interval_sec}s"
    )

    task = asyncio.create_task(run_dead_check_loop(settings.dead_check_interval_sec))
    try:
        yield
    finally:
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info(f"🛑 Outage agent stopped | {len(database.asset_cache)} assets were tracked")


app = FastAPI(
    title="Outage Agent",
    description="Detects non-responding UPS, ePDU and sensor assets from their metric streams",
    version=APP_VERSION,
    lifespan=lifespan
)

app.include_router(events_router)
app.include_router(assets_router)


# ─────────────────────────────────────────────────────────────────
# GET / — Health check
# ─────────────────────────────────────────────────────────────────

@app.get("/")
def root():
    return {
        "message": "Outage agent is running",
        "version": APP_VERSION,
        "tracked_assets": len(database.asset_cache),
        "docs": "/docs"
    }
