# ─────────────────────────────────────────────────────────────────
# expiration.py — Per-Asset Expiration Record
#
# One Expiration per tracked asset. It remembers two numbers:
#   ttl_sec        → the tightest TTL any metric of the asset promised
#   last_seen_sec  → the newest accepted observation time
#
# The asset is considered dead once
#       now >= last_seen_sec + 2 * ttl_sec
# i.e. after it missed roughly two full reporting intervals.
#
# Both numbers only ever move in one direction, so a late or
# out-of-order update can never pull the deadline backwards.
# ─────────────────────────────────────────────────────────────────

import logging

from models import AssetEvent

logger = logging.getLogger("expiration")


class Expiration:
    """Liveness state of one asset, plus the asset event that created it."""

    def __init__(self, default_ttl_sec: int, asset: AssetEvent):
        self.ttl_sec = default_ttl_sec
        self.last_seen_sec = 0
        self.asset = asset

    @property
    def name(self) -> str:
        return self.asset.name

    def update_last_seen(self, new_time_seen_sec: int, verbose: bool = False):
        """
        Moves last_seen_sec forward, never backward.

        A metric averaged over 24h may arrive at 03:33 carrying time=00:00.
        With a 5 minute TTL that would put the deadline at 00:10, hours in
        the past, and raise a false alert.
        """
        if new_time_seen_sec > self.last_seen_sec:
            self.last_seen_sec = new_time_seen_sec
        if verbose:
            logger.debug(f"last_seen_time[s]: {self.last_seen_sec}")

    def update_ttl(self, proposed_ttl_sec: int, verbose: bool = False):
        # Keep the minimum: a fast metric stream must not be masked by a slow one.
        # If every metric's TTL is above the default, the default wins and the
        # asset is checked at that pace.
        if proposed_ttl_sec < self.ttl_sec:
            self.ttl_sec = proposed_ttl_sec
        if verbose:
            logger.debug(f"ttl[s]: {self.ttl_sec}")

    def expires_at(self) -> int:
        return self.last_seen_sec + self.ttl_sec * 2

    def __repr__(self) -> str:
        return (
            f"Expiration(name={self.name!r}, ttl_sec={self.ttl_sec}, "
            f"last_seen_sec={self.last_seen_sec})"
        )
