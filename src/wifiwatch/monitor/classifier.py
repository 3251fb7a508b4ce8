"""RSSI to signal quality tier."""

from wifiwatch.monitor.models import SignalTier

# Inclusive lower bounds in dBm, strongest first; first match wins.
_TIER_LADDER: list[tuple[int, SignalTier]] = [
    (-50, SignalTier.excellent),
    (-60, SignalTier.very_good),
    (-67, SignalTier.good),
    (-70, SignalTier.fair),
]


def classify_signal(rssi: int | None) -> SignalTier:
    if rssi is None:
        return SignalTier.unknown
    for lower_bound, tier in _TIER_LADDER:
        if rssi >= lower_bound:
            return tier
    return SignalTier.poor
