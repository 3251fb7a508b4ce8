"""Assembles one Snapshot per cycle from the probes."""

import logging
from collections.abc import Awaitable
from datetime import datetime
from typing import TypeVar

from wifiwatch.monitor.classifier import classify_signal
from wifiwatch.monitor.models import Snapshot
from wifiwatch.probes.network import NetworkProbes, PingResult
from wifiwatch.probes.radio import RadioInfo, RadioSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _guarded(name: str, call: Awaitable[T], default: T) -> T:
    """Await a probe; an unexpected error only costs that probe's fields."""
    try:
        return await call
    except Exception:
        logger.exception("%s probe failed", name)
        return default


class SnapshotBuilder:
    """Runs radio, internet ping, router ping and DNS probes, in that order."""

    def __init__(self, radio: RadioSource, network: NetworkProbes) -> None:
        self.radio = radio
        self.network = network

    async def build(self, timestamp: datetime) -> Snapshot:
        radio = await _guarded(
            "radio", self.radio.collect(), RadioInfo(interface=self.radio.default_interface)
        )
        internet = await _guarded("internet ping", self.network.ping_internet(), PingResult())
        router = await _guarded("router ping", self.network.ping_router(), PingResult())
        dns_time = await _guarded("dns", self.network.dns_time(), None)

        return Snapshot(
            timestamp=timestamp,
            interface=radio.interface,
            ssid=radio.ssid,
            bssid=radio.bssid,
            channel=radio.channel,
            rssi=radio.rssi,
            noise=radio.noise,
            tx_rate=radio.tx_rate,
            signal_tier=classify_signal(radio.rssi),
            internet_loss_pct=internet.loss_pct,
            router_loss_pct=router.loss_pct,
            latency_ms=internet.avg_latency_ms,
            dns_time_ms=dns_time,
        )
