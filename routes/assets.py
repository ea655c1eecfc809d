# ─────────────────────────────────────────────────────────────────
# routes/assets.py — Tracked Asset Queries
#
# Read side of the cache, plus explicit removal and the default
# expiry knob. Static paths (/dead, /sensors, /config/...) are
# declared before /{name} so they are not swallowed by it.
# ─────────────────────────────────────────────────────────────────

import logging

from fastapi import APIRouter, HTTPException, Query

import database
from expiration import Expiration
from models import ASSET_SUBTYPE, AssetList, AssetStatus, DefaultExpiry, NameList

logger = logging.getLogger("routes")

router = APIRouter(
    prefix="/assets",
    tags=["Assets"]
)


def _status(expiration: Expiration, now_sec: int) -> AssetStatus:
    expires_at = expiration.expires_at()
    return AssetStatus(
        name=expiration.name,
        subtype=expiration.asset.aux_string(ASSET_SUBTYPE),
        ttl_sec=expiration.ttl_sec,
        last_seen_sec=expiration.last_seen_sec,
        expires_at=expires_at,
        dead=expires_at <= now_sec,
    )


# ─────────────────────────────────────────────────────────────────
# GET /assets — Every tracked asset
# ─────────────────────────────────────────────────────────────────

@router.get("", response_model=AssetList)
async def list_assets():
    cache = database.asset_cache
    now_sec = cache.now()
    assets = [_status(cache.get(name), now_sec) for name in cache.names()]
    return {"assets": assets, "total": len(assets)}


# ─────────────────────────────────────────────────────────────────
# GET /assets/dead — Non-responding assets right now
# ─────────────────────────────────────────────────────────────────

@router.get("/dead", response_model=NameList)
async def get_dead():
    dead = database.asset_cache.get_dead()
    return {"names": dead, "total": len(dead)}


# ─────────────────────────────────────────────────────────────────
# GET /assets/sensors?port=..&parent=.. — Sensors on a device port
# ─────────────────────────────────────────────────────────────────

@router.get("/sensors", response_model=NameList)
async def get_sensors(
    port: str = Query(..., description="Port on the parent device, e.g. TH1"),
    parent: str = Query(..., description="Name of the parent device"),
):
    sensors = database.asset_cache.get_sensors(port, parent)
    return {"names": sensors, "total": len(sensors)}


# ─────────────────────────────────────────────────────────────────
# GET / PUT /assets/config/default-expiry
# ─────────────────────────────────────────────────────────────────

@router.get("/config/default-expiry", response_model=DefaultExpiry)
async def get_default_expiry():
    return {"default_expiry_sec": database.asset_cache.default_expiry()}


@router.put("/config/default-expiry", response_model=DefaultExpiry)
async def set_default_expiry(body: DefaultExpiry):
    """Applies to assets tracked from now on; existing ones keep their TTL."""
    database.asset_cache.set_default_expiry(body.default_expiry_sec)
    logger.info(f"⚙️  Default expiry set to {body.default_expiry_sec}s")
    return {"default_expiry_sec": database.asset_cache.default_expiry()}


# ─────────────────────────────────────────────────────────────────
# GET /assets/{name} — One tracked asset
# ─────────────────────────────────────────────────────────────────

@router.get("/{name}", response_model=AssetStatus)
async def get_asset(name: str):
    cache = database.asset_cache
    expiration = cache.get(name)
    if expiration is None:
        raise HTTPException(
            status_code=404,
            detail=f"Asset '{name}' is not tracked."
        )
    return _status(expiration, cache.now())


# ─────────────────────────────────────────────────────────────────
# DELETE /assets/{name} — Stop tracking an asset
# ─────────────────────────────────────────────────────────────────

@router.delete("/{name}")
async def delete_asset(name: str):
    """Idempotent: deleting an untracked asset still succeeds."""
    cache = database.asset_cache
    was_tracked = name in cache
    cache.delete(name)

    if was_tracked:
        logger.info(f"🗑️  Asset '{name}' removed from cache")

    return {
        "message": f"Asset '{name}' is no longer tracked",
        "name": name,
        "was_tracked": was_tracked
    }
