"""Webhook payloads and dispatch for alerts and identity changes."""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from wifiwatch.alerts.models import Alert
from wifiwatch.monitor.models import ChangeEvent, Snapshot

logger = logging.getLogger(__name__)


def _connection(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "interface": snapshot.interface,
        "ssid": snapshot.ssid,
        "bssid": snapshot.bssid,
        "channel": snapshot.channel,
    }


def alert_payload(alert: Alert, snapshot: Snapshot, webhook_url: str) -> dict[str, Any]:
    """Build the webhook payload for a fired alert."""
    return {
        "event": "alert",
        "timestamp": snapshot.timestamp.astimezone(UTC).isoformat(),
        "alert": {
            "rule": alert.rule,
            "value": alert.value,
            "threshold": alert.threshold,
            "message": alert.message,
        },
        "connection": _connection(snapshot),
        "_webhook_url": webhook_url,  # Internal field for dispatch
    }


def change_payload(change: ChangeEvent, webhook_url: str) -> dict[str, Any]:
    """Build the webhook payload for an SSID/BSSID change."""
    return {
        "event": "identity_change",
        "timestamp": change.timestamp.astimezone(UTC).isoformat(),
        "change": {
            "field": str(change.field),
            "old": change.old_value,
            "new": change.new_value,
            "message": change.message,
        },
        "_webhook_url": webhook_url,
    }


def dispatch_webhooks(payloads: list[dict[str, Any]], timeout: float = 10.0) -> list[dict[str, Any]]:
    """POST each payload to its webhook. Return one delivery result per payload.

    Args:
        payloads: Payloads from alert_payload / change_payload
        timeout: Per-request timeout in seconds

    Returns:
        List of dicts with keys: payload, url, status_code, success, error (if failed)
    """
    results: list[dict[str, Any]] = []
    if not payloads:
        return results

    with httpx.Client(timeout=timeout) as client:
        for payload in payloads:
            url = payload.pop("_webhook_url", None)
            if not url or not isinstance(url, str):
                logger.warning("No webhook URL found in payload: %s", payload)
                continue

            result: dict[str, Any] = {"payload": payload, "url": url}
            try:
                response = client.post(url, json=payload)
            except httpx.HTTPError as e:
                logger.error("Webhook dispatch error: %s → %s: %s", payload["event"], url, e)
                result.update(status_code=None, success=False, error=str(e))
            else:
                result.update(status_code=response.status_code, success=response.is_success)
                level = logging.INFO if response.is_success else logging.WARNING
                logger.log(
                    level,
                    "Webhook %s: %s → %s (HTTP %d)",
                    "delivered" if response.is_success else "failed",
                    payload["event"],
                    url,
                    response.status_code,
                )
            results.append(result)

    return results
