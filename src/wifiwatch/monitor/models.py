"""Per-cycle value types: snapshot, signal tier, change events and alerts."""

import enum
from dataclasses import dataclass
from datetime import datetime


class SignalTier(enum.StrEnum):
    unknown = "unknown"
    poor = "poor"
    fair = "fair"
    good = "good"
    very_good = "very_good"
    excellent = "excellent"

    @property
    def percent(self) -> int | None:
        return _TIER_PERCENT[self]

    @property
    def label(self) -> str:
        """Human label, e.g. "Very Good (80%)"."""
        name = self.value.replace("_", " ").title()
        if self.percent is None:
            return name
        return f"{name} ({self.percent}%)"


_TIER_PERCENT: dict[SignalTier, int | None] = {
    SignalTier.unknown: None,
    SignalTier.poor: 20,
    SignalTier.fair: 40,
    SignalTier.good: 60,
    SignalTier.very_good: 80,
    SignalTier.excellent: 100,
}


@dataclass(frozen=True)
class Snapshot:
    """One sample of link health. None means the probe could not tell."""

    timestamp: datetime
    interface: str | None = None
    ssid: str | None = None
    bssid: str | None = None
    channel: str | None = None
    rssi: int | None = None  # dBm
    noise: int | None = None  # dBm
    tx_rate: float | None = None  # Mbps
    signal_tier: SignalTier = SignalTier.unknown
    internet_loss_pct: float | None = None
    router_loss_pct: float | None = None
    latency_ms: float | None = None
    dns_time_ms: float | None = None


class IdentityField(enum.StrEnum):
    ssid = "SSID"
    bssid = "BSSID"


@dataclass(frozen=True)
class ChangeEvent:
    field: IdentityField
    old_value: str
    new_value: str
    timestamp: datetime

    @property
    def message(self) -> str:
        return f"{self.field} changed from '{self.old_value}' to '{self.new_value}'"
