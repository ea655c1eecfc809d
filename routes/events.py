# ─────────────────────────────────────────────────────────────────
# routes/events.py — Event Ingestion Endpoints
#
# The messaging layer decodes each incoming message and POSTs it
# here. Every endpoint just hands the event to the cache's put()
# and reports whether the asset is tracked afterwards.
#
# Unknown assets and uninteresting asset kinds are NOT errors:
# the cache drops them silently and the response says tracked=false.
# ─────────────────────────────────────────────────────────────────

import logging
from typing import Annotated

from fastapi import APIRouter, Body

import database
from models import AssetEvent, Event, EventAccepted, MetricEvent

logger = logging.getLogger("routes")

router = APIRouter(
    prefix="/events",
    tags=["Events"]
)


@router.post("", status_code=202, response_model=EventAccepted)
async def put_event(
    event: Annotated[Event, Body(discriminator="kind")],
):
    """Accepts either kind of event, told apart by its "kind" field."""
    if isinstance(event, MetricEvent):
        return await put_metric(event)
    return await put_asset(event)


@router.post("/metric", status_code=202, response_model=EventAccepted)
async def put_metric(metric: MetricEvent):
    """A metric refreshes a tracked asset, or is dropped."""
    database.asset_cache.put(metric)
    tracked = metric.source in database.asset_cache

    if database.asset_cache.verbose:
        logger.debug(f"📈 Metric '{metric.source}@{metric.type}' ttl={metric.ttl}s tracked={tracked}")

    return {"accepted": True, "tracked": tracked}


@router.post("/asset", status_code=202, response_model=EventAccepted)
async def put_asset(asset: AssetEvent):
    """An asset event starts or stops tracking, or is dropped."""
    name = asset.name
    database.asset_cache.put(asset)
    tracked = name in database.asset_cache

    logger.info(f"📦 Asset '{name}' | operation: {asset.operation} | tracked: {tracked}")

    return {"accepted": True, "tracked": tracked}
