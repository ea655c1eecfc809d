# ─────────────────────────────────────────────────────────────────
# models.py — Decoded Events & API Schemas (Pydantic)
#
# The outage agent never parses raw bytes. By the time an event
# reaches the cache it has already been decoded into one of two
# shapes:
#   - MetricEvent → "asset X reported metric Y, expect another in TTL s"
#   - AssetEvent  → "asset X was created / updated / deleted"
#
# Both are frozen: once decoded, an event is never mutated. The cache
# keeps the AssetEvent that started tracking an asset and reads its
# port / parent attributes later.
# ─────────────────────────────────────────────────────────────────

import re
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

# Asset operations carried by AssetEvent.operation
ASSET_OP_CREATE = "create"
ASSET_OP_DELETE = "delete"

# Well known aux / ext keys
ASSET_TYPE = "type"
ASSET_SUBTYPE = "subtype"
ASSET_STATUS = "status"
ASSET_PORT = "port"
ASSET_PARENT = "parent_name.1"
METRIC_TIME = "time"


_LEADING_DIGITS = re.compile(r"\s*\+?(\d+)")


def _as_number(raw: Optional[str], default: int) -> int:
    # Missing → default. Present → its leading digits, so "1700000000.5"
    # reads as 1700000000 and garbage or a negative value reads as 0.
    if raw is None:
        return default
    match = _LEADING_DIGITS.match(raw)
    if match is None:
        return 0
    return int(match.group(1))


def _stringify(value: Any) -> Any:
    # JSON producers often send numbers, e.g. {"time": 1700000000}
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# aux / ext attribute values are strings on the wire
Attribute = Annotated[str, BeforeValidator(_stringify)]


class MetricEvent(BaseModel):
    """
    One metric observation for an asset.

    {
        "kind": "metric",
        "type": "realpower.default",
        "source": "UPS4",
        "value": "100",
        "unit": "W",
        "ttl": 300,
        "aux": {"time": "1700000000"}
    }
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["metric"] = "metric"
    type: str                                   # metric quantity name
    source: str                                 # asset the metric belongs to
    value: str = ""
    unit: str = ""
    ttl: int = Field(ge=0)                      # seconds until next expected value
    aux: Dict[str, Attribute] = Field(default_factory=dict)

    def aux_number(self, key: str, default: int) -> int:
        """Integer value of an aux attribute, `default` only if it is missing."""
        return _as_number(self.aux.get(key), default)


class AssetEvent(BaseModel):
    """
    An asset lifecycle notification.

    {
        "kind": "asset",
        "name": "sensor-12",
        "operation": "create",
        "aux": {"type": "device", "subtype": "sensor", "parent_name.1": "UPS4"},
        "ext": {"port": "TH1"}
    }
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["asset"] = "asset"
    name: str
    operation: str
    aux: Dict[str, Attribute] = Field(default_factory=dict)
    ext: Dict[str, Attribute] = Field(default_factory=dict)

    def aux_string(self, key: str, default: str = "") -> str:
        return self.aux.get(key, default)

    def ext_string(self, key: str, default: str = "") -> str:
        return self.ext.get(key, default)


# The tagged variant the cache consumes, told apart by "kind"
Event = Union[MetricEvent, AssetEvent]


# ─────────────────────────────────────────────────────────────────
# RESPONSE / REQUEST MODELS for the HTTP surface
# ─────────────────────────────────────────────────────────────────

class EventAccepted(BaseModel):
    """Returned by the event ingestion endpoints."""

    accepted: bool
    tracked: bool     # is the event's asset tracked after the put?


class AssetStatus(BaseModel):
    """Current liveness view of one tracked asset."""

    name: str
    subtype: str
    ttl_sec: int
    last_seen_sec: int
    expires_at: int
    dead: bool


class AssetList(BaseModel):
    assets: List[AssetStatus]
    total: int


class NameList(BaseModel):
    names: List[str]
    total: int


class DefaultExpiry(BaseModel):
    default_expiry_sec: int = Field(ge=1)
