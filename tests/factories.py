"""Builders for the decoded events the cache consumes."""

from models import ASSET_OP_CREATE, AssetEvent, MetricEvent


def make_device(name, subtype="ups", operation=ASSET_OP_CREATE, **aux):
    aux.setdefault("type", "device")
    aux.setdefault("subtype", subtype)
    return AssetEvent(name=name, operation=operation, aux=aux)


def make_sensor(name, port, parent_name):
    return AssetEvent(
        name=name,
        operation=ASSET_OP_CREATE,
        aux={"type": "device", "subtype": "sensor", "parent_name.1": parent_name},
        ext={"port": port},
    )


def make_metric(source, ttl, time=None, quantity="realpower.default"):
    aux = {"key1": "val1", "key2": "val2"}
    if time is not None:
        aux["time"] = str(time)
    return MetricEvent(type=quantity, source=source, value="100", unit="C", ttl=ttl, aux=aux)
