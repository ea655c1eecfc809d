# ─────────────────────────────────────────────────────────────────
# cache.py — Asset Liveness Cache
#
# Owns every Expiration record, keyed by asset name.
#
# Events flow in through put():
#   MetricEvent → narrows the asset's TTL, advances its last-seen time
#   AssetEvent  → starts tracking a UPS / ePDU / sensor, or stops
#                 tracking one that was deleted or retired
#
# Queries flow out through:
#   get_dead()    → assets whose deadline has passed
#   get_sensors() → sensors plugged into a port of a parent device
#
# There is no stored "dead" state. Deadness is computed on every
# get_dead() call from last_seen + 2 * ttl and the current time.
#
# Not thread safe. One owner (the agent's event loop) serializes
# every call.
# ─────────────────────────────────────────────────────────────────

import logging
import time
from typing import Callable, Dict, List, Optional

from expiration import Expiration
from models import (
    ASSET_OP_DELETE,
    ASSET_PARENT,
    ASSET_PORT,
    ASSET_STATUS,
    ASSET_SUBTYPE,
    ASSET_TYPE,
    METRIC_TIME,
    AssetEvent,
    Event,
    MetricEvent,
)

logger = logging.getLogger("cache")

# Used as TTL, but the deadline formula waits ttl * 2, so with
# 15 minutes here the first alert would only come after 30 minutes.
DEFAULT_ASSET_EXPIRATION_TIME_SEC = 15 * 60 // 2

# Device subtypes whose liveness is tracked
TRACKED_SUBTYPES = ("ups", "epdu", "sensor")


def wall_clock() -> int:
    """Current time in whole seconds since the epoch."""
    return int(time.time())


class AssetCache:
    """
    In-memory map of asset name → Expiration.

    `clock` is any zero-argument callable returning the current time in
    seconds. Tests pass a fake one so they never have to sleep.
    """

    def __init__(
        self,
        default_expiry_sec: int = DEFAULT_ASSET_EXPIRATION_TIME_SEC,
        verbose: bool = False,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._assets: Dict[str, Expiration] = {}
        self._default_expiry_sec = default_expiry_sec
        self._verbose = verbose
        self._clock = clock or wall_clock

    # ── accessors ─────────────────────────────────────────────────

    @property
    def verbose(self) -> bool:
        return self._verbose

    def set_verbose(self, verbose: bool):
        self._verbose = verbose

    def default_expiry(self) -> int:
        """Seconds in which a newly added asset would expire."""
        return self._default_expiry_sec

    def set_default_expiry(self, expiry_sec: int):
        """Only affects assets tracked after this call."""
        self._default_expiry_sec = expiry_sec

    def now(self) -> int:
        return int(self._clock())

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, name: str) -> bool:
        return name in self._assets

    def names(self) -> List[str]:
        return list(self._assets)

    def get(self, name: str) -> Optional[Expiration]:
        return self._assets.get(name)

    def get_expiration(self, name: str) -> Optional[int]:
        """Expiration instant of a tracked asset, None if untracked."""
        expiration = self._assets.get(name)
        if expiration is None:
            return None
        return expiration.expires_at()

    # ── event ingestion ───────────────────────────────────────────

    def put(self, event: Optional[Event]):
        """
        Applies one decoded event to the cache.

        The event is consumed: an AssetEvent that starts tracking is kept
        as the asset's snapshot, anything else is dropped. Callers must
        not reuse it afterwards.
        """
        if event is None:
            return

        if isinstance(event, MetricEvent):
            self._put_metric(event)
        elif isinstance(event, AssetEvent):
            self._put_asset(event)
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def _put_metric(self, metric: MetricEvent):
        expiration = self._assets.get(metric.source)
        if expiration is None:
            # not tracked, not interesting
            return

        expiration.update_ttl(metric.ttl, self._verbose)

        now_sec = self.now()
        timestamp = metric.aux_number(METRIC_TIME, now_sec)
        if timestamp > now_sec:
            logger.info(
                f"Got metric '{metric.source}@{metric.type}' from the future "
                f"(time={timestamp}, now={now_sec}), ignoring it"
            )
            return

        expiration.update_last_seen(timestamp, self._verbose)

    def _put_asset(self, asset: AssetEvent):
        name = asset.name
        operation = asset.operation
        if self._verbose:
            logger.debug(f"asset: name={name}, operation={operation}")

        if operation == ASSET_OP_DELETE or asset.aux_string(ASSET_STATUS) == "retired":
            self.delete(name)
            return

        if asset.aux_string(ASSET_TYPE) != "device":
            return
        if asset.aux_string(ASSET_SUBTYPE) not in TRACKED_SUBTYPES:
            return

        if name in self._assets:
            # Already tracked: the first snapshot is kept as is.
            return

        # Build the record completely before it becomes reachable.
        expiration = Expiration(self._default_expiry_sec, asset)
        now_sec = self.now()
        expiration.update_last_seen(now_sec, self._verbose)
        self._assets[name] = expiration

        if self._verbose:
            logger.debug(
                f"asset: ADDED: name='{name}', now={now_sec}s, "
                f"expires_at={expiration.expires_at()}s"
            )

    # ── removal ───────────────────────────────────────────────────

    def delete(self, name: str):
        """Stops tracking `name`. Deleting an unknown name is a no-op."""
        if name is None:
            raise ValueError("Asset name is required")
        self._assets.pop(name, None)

    # ── queries ───────────────────────────────────────────────────

    def get_sensors(self, port: str, parent_name: str) -> List[str]:
        """
        Names of all tracked assets plugged into `port` of `parent_name`.

        Returns a new list, empty when nothing matches. Order follows
        the internal map and carries no meaning.
        """
        if port is None or parent_name is None:
            raise ValueError("Both port and parent name are required")

        sensors = []
        for name, expiration in self._assets.items():
            asset = expiration.asset
            if (
                asset.ext_string(ASSET_PORT) == port
                and asset.aux_string(ASSET_PARENT) == parent_name
            ):
                sensors.append(name)
        return sensors

    def get_dead(self) -> List[str]:
        """
        Names of all tracked assets whose deadline has passed.

        The current time is read once, so every asset is judged
        against the same instant.
        """
        now_sec = self.now()
        if self._verbose:
            logger.debug(f"now={now_sec}s")

        dead = []
        for name, expiration in self._assets.items():
            expires_at = expiration.expires_at()
            if self._verbose:
                logger.debug(
                    f"asset: name={name}, ttl={expiration.ttl_sec}, expires_at={expires_at}"
                )
            if expires_at <= now_sec:
                dead.append(name)
        return dead
