"""Snapshot history table."""

from datetime import datetime

from sqlmodel import Field, SQLModel


class SnapshotRecord(SQLModel, table=True):
    """One monitor cycle, as logged to the diagnostics file."""

    id: int | None = Field(default=None, primary_key=True)
    timestamp: datetime = Field(index=True)
    interface: str | None = None
    ssid: str | None = None
    bssid: str | None = None
    channel: str | None = None
    rssi: int | None = None  # dBm
    noise: int | None = None  # dBm
    tx_rate: float | None = None  # Mbps
    signal_tier: str = "unknown"
    internet_loss_pct: float | None = None
    router_loss_pct: float | None = None
    latency_ms: float | None = None
    dns_time_ms: float | None = None
