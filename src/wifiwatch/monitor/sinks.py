"""Outputs for each monitor cycle: console, diagnostics log, history DB, webhook."""

import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from sqlalchemy.engine import Engine
from sqlmodel import Session

from wifiwatch.alerts.manager import alert_payload, change_payload, dispatch_webhooks
from wifiwatch.alerts.models import Alert
from wifiwatch.history.store import record_snapshot
from wifiwatch.monitor import render
from wifiwatch.monitor.models import ChangeEvent, Snapshot

logger = logging.getLogger(__name__)


class MonitorSink:
    """Receives cycle outputs. Handlers default to no-ops."""

    def on_change(self, change: ChangeEvent) -> None:
        """An SSID or BSSID differs from the previous cycle."""

    def on_alert(self, alert: Alert, snapshot: Snapshot) -> None:
        """A threshold rule fired."""

    def on_snapshot(self, snapshot: Snapshot) -> None:
        """Called once per cycle, after changes and alerts."""

    def on_diagnostic(self, output: str) -> None:
        """Raw traceroute output, on diagnostic cycles only."""


class ConsoleSink(MonitorSink):
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _print(self, line: str) -> None:
        print(line, file=self._stream or sys.stdout, flush=True)

    def on_change(self, change: ChangeEvent) -> None:
        self._print(f"{render.ALERT_PREFIX} {change.message}")

    def on_alert(self, alert: Alert, snapshot: Snapshot) -> None:
        self._print(f"{render.ALERT_PREFIX} {alert.message}")

    def on_snapshot(self, snapshot: Snapshot) -> None:
        self._print(render.console_line(snapshot))


class LogFileSink(MonitorSink):
    """Appends snapshot blocks, change entries and traceroutes to a text file.

    Alerts are not written; they can be re-derived from the logged metrics.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _append(self, text: str) -> None:
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(text)

    def on_change(self, change: ChangeEvent) -> None:
        self._append(render.change_log_line(change))

    def on_snapshot(self, snapshot: Snapshot) -> None:
        self._append(render.log_block(snapshot))

    def on_diagnostic(self, output: str) -> None:
        self._append(render.traceroute_block(output))


class HistorySink(MonitorSink):
    """Stores every snapshot in the SQLite history table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def on_snapshot(self, snapshot: Snapshot) -> None:
        with Session(self.engine) as session:
            record_snapshot(session, snapshot)


class WebhookSink(MonitorSink):
    """Posts the cycle's alerts and identity changes to a webhook."""

    def __init__(self, url: str) -> None:
        self.url = url
        self._pending: list[dict[str, Any]] = []

    def on_change(self, change: ChangeEvent) -> None:
        self._pending.append(change_payload(change, self.url))

    def on_alert(self, alert: Alert, snapshot: Snapshot) -> None:
        self._pending.append(alert_payload(alert, snapshot, self.url))

    def on_snapshot(self, snapshot: Snapshot) -> None:
        payloads, self._pending = self._pending, []
        if payloads:
            dispatch_webhooks(payloads)
