# ─────────────────────────────────────────────────────────────────
# alerts.py — Logging Setup & Outage Notifications
#
# All alerting lives here. The dead-check tick (timer.py) only
# decides WHICH assets changed state; this file decides HOW the
# world hears about it. Swapping the simulated notification for a
# real mail / message bus publisher only touches this file.
# ─────────────────────────────────────────────────────────────────

import logging

LOG_FORMAT = "%(asctime)s — %(levelname)s — [%(name)s] — %(message)s"

logger = logging.getLogger("alerts")


def setup_logging(level: str = "INFO", verbose: bool = False):
    """
    Configures the root logger for the whole agent.

    verbose=True forces DEBUG so the cache's diagnostic lines
    (ttl / last seen / expires_at per asset) become visible.
    """
    effective = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=effective, format=LOG_FORMAT)
    logging.getLogger().setLevel(effective)


def simulate_notification(asset_name: str, subject: str, body: str, timestamp: str):
    """
    Logs the notification an operator would receive.

    In production this would publish to the alert stream of the
    messaging layer instead of logging.
    """
    logger.info("=" * 55)
    logger.info("📧 SIMULATING OUTAGE NOTIFICATION")
    logger.info(f"   Asset:   {asset_name}")
    logger.info(f"   Subject: {subject}")
    logger.info(f"   Body:    {body}")
    logger.info(f"   Time:    {timestamp}")
    logger.info("=" * 55)


def fire_alert(asset_name: str, timestamp: str) -> dict:
    """Raises an outage alert for an asset that stopped responding."""
    alert_payload = {
        "ALERT": f"Asset {asset_name} is not responding!",
        "state": "ACTIVE",
        "time": timestamp,
    }

    logger.critical("🚨 " + "=" * 50)
    logger.critical(f"ASSET DOWN: {alert_payload}")
    logger.critical("=" * 50)

    simulate_notification(
        asset_name,
        f"CRITICAL — Asset '{asset_name}' is not responding",
        f"No metrics received from '{asset_name}' within its expected interval.",
        timestamp,
    )
    return alert_payload


def resolve_alert(asset_name: str, timestamp: str) -> dict:
    """Clears a previously raised outage alert."""
    alert_payload = {
        "ALERT": f"Asset {asset_name} is responding again.",
        "state": "RESOLVED",
        "time": timestamp,
    }

    logger.info(f"✅ ASSET BACK: {alert_payload}")

    simulate_notification(
        asset_name,
        f"RESOLVED — Asset '{asset_name}' is responding again",
        f"Metrics from '{asset_name}' are arriving again.",
        timestamp,
    )
    return alert_payload
