# ─────────────────────────────────────────────────────────────────
# database.py — Process-Lifetime State
#
# The agent keeps exactly one AssetCache for its whole life. It is
# created here at import time and configured from settings when the
# app starts (see main.py lifespan).
#
# Nothing here survives a restart: after a restart the cache is
# empty until asset events arrive again.
# ─────────────────────────────────────────────────────────────────

from typing import Set

from cache import AssetCache

# asset name → Expiration, plus default TTL and clock
asset_cache = AssetCache()

# Names for which an outage alert is currently raised.
# The dead-check tick adds a name when it first shows up in
# get_dead() and removes it once the asset responds again.
active_alerts: Set[str] = set()


def reset():
    """Drops all tracked assets and raised alerts."""
    global asset_cache
    asset_cache = AssetCache()
    active_alerts.clear()
