# ─────────────────────────────────────────────────────────────────
# timer.py — Periodic Dead-Asset Check
#
# The cache never looks at the clock on its own. Something has to
# ask it "who is dead right now?" on a regular beat. That is this
# file:
#
#   check_dead_assets()   → one tick: ask the cache, raise alerts for
#                           assets that just died, resolve alerts for
#                           assets that came back
#   run_dead_check_loop() → runs check_dead_assets() forever on the
#                           event loop until the app shuts down
#
# Everything runs on the event loop thread, same as the HTTP
# handlers, so cache access is serialized without locks.
# ─────────────────────────────────────────────────────────────────

import asyncio
import logging
from datetime import datetime, timezone
from typing import List

import database
from alerts import fire_alert, resolve_alert

logger = logging.getLogger("timer")


def check_dead_assets() -> List[str]:
    """
    Runs one dead check and returns the names that newly went dead.

    An asset stays in active_alerts while it is dead so the alert is
    raised once, not on every tick.
    """
    cache = database.asset_cache
    dead = set(cache.get_dead())
    timestamp = datetime.now(timezone.utc).isoformat()

    newly_dead = sorted(dead - database.active_alerts)
    for name in newly_dead:
        logger.warning(f"⚠️  No metrics from '{name}' within 2x its TTL")
        fire_alert(name, timestamp)
        database.active_alerts.add(name)

    for name in sorted(database.active_alerts - dead):
        database.active_alerts.discard(name)
        if name in cache:
            resolve_alert(name, timestamp)
        else:
            # asset was deleted while dead, nobody to tell
            logger.info(f"Dropping alert for '{name}', asset no longer tracked")

    return newly_dead


async def run_dead_check_loop(interval_sec: int):
    """Calls check_dead_assets() every `interval_sec` seconds until cancelled."""
    logger.info(f"⏱️  Dead-check loop started, interval {interval_sec}s")
    try:
        while True:
            await asyncio.sleep(interval_sec)
            try:
                check_dead_assets()
            except Exception:
                # one failed tick must not stop the next ones
                logger.exception("Dead check failed, retrying on the next tick")
    except asyncio.CancelledError:
        logger.info("⏱️  Dead-check loop stopped")
        raise
