"""Radio-link and identity info from the host's Wi-Fi tools.

Two sources are supported:

* a structured identity tool (wifi-unredactor) printing a JSON object with
  ``ssid``, ``bssid`` and ``interface``;
* a plain-text report (``wdutil info``) with ``Label : value`` lines for
  SSID, BSSID, Channel, RSSI, Noise and Tx Rate.

The JSON tool is preferred because recent macOS releases redact SSID/BSSID in
wdutil output, but it carries no signal metrics, so wdutil still fills those in.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from wifiwatch.probes.base import CommandResult, CommandRunner, run_command
from wifiwatch.probes.parsing import (
    extract_numeric,
    extract_string,
    json_number,
    json_string,
    parse_json_object,
)

logger = logging.getLogger(__name__)


def _as_int(value: float | None) -> int | None:
    return int(value) if value is not None else None


@dataclass(frozen=True)
class RadioInfo:
    """Whatever the radio tools could tell us; every field may be absent."""

    interface: str | None = None
    ssid: str | None = None
    bssid: str | None = None
    channel: str | None = None
    rssi: int | None = None  # dBm
    noise: int | None = None  # dBm
    tx_rate: float | None = None  # Mbps

    @property
    def has_signal_metrics(self) -> bool:
        return None not in (self.rssi, self.noise, self.tx_rate, self.channel)

    def merge_signal(self, other: "RadioInfo") -> "RadioInfo":
        """Fill missing signal fields from ``other``; identity fields are kept."""
        return replace(
            self,
            channel=self.channel if self.channel is not None else other.channel,
            rssi=self.rssi if self.rssi is not None else other.rssi,
            noise=self.noise if self.noise is not None else other.noise,
            tx_rate=self.tx_rate if self.tx_rate is not None else other.tx_rate,
        )


def parse_radio_output(text: str, default_interface: str) -> RadioInfo:
    """Parse radio tool output, auto-detecting JSON vs. plain text."""
    data = parse_json_object(text)
    if data is not None:
        return RadioInfo(
            interface=json_string(data, "interface") or default_interface,
            ssid=json_string(data, "ssid"),
            bssid=json_string(data, "bssid"),
            channel=json_string(data, "channel"),
            rssi=_as_int(json_number(data, "rssi")),
            noise=_as_int(json_number(data, "noise")),
            tx_rate=json_number(data, "tx_rate"),
        )

    # wdutil does not report the interface name
    return RadioInfo(
        interface=default_interface,
        ssid=extract_string(text, "SSID"),
        bssid=extract_string(text, "BSSID"),
        channel=extract_string(text, "Channel"),
        rssi=_as_int(extract_numeric(text, "RSSI")),
        noise=_as_int(extract_numeric(text, "Noise")),
        tx_rate=extract_numeric(text, "Tx Rate"),
    )


def _usable(result: CommandResult | None) -> bool:
    return result is not None and result.ok and bool(result.stdout.strip())


class RadioSource:
    """Collects one RadioInfo per cycle, merging primary and fallback tools."""

    def __init__(
        self,
        fallback_command: list[str],
        primary_command: list[str] | None = None,
        default_interface: str = "en0",
        timeout: float = 30.0,
        runner: CommandRunner = run_command,
    ) -> None:
        self.fallback_command = fallback_command
        self.primary_command = primary_command
        self.default_interface = default_interface
        self.timeout = timeout
        self._run = runner

    @classmethod
    def from_paths(
        cls,
        fallback_command: list[str],
        unredactor_path: Path | None,
        **kwargs: object,
    ) -> "RadioSource":
        """Use the identity tool only if it is installed."""
        primary = None
        if unredactor_path is not None:
            if unredactor_path.is_file():
                primary = [str(unredactor_path)]
            else:
                logger.warning(
                    "wifi-unredactor not found at %s; using %s (SSID/BSSID may be redacted). "
                    "To install it, visit https://github.com/noperator/wifi-unredactor",
                    unredactor_path,
                    " ".join(fallback_command),
                )
        return cls(fallback_command, primary_command=primary, **kwargs)  # type: ignore[arg-type]

    async def _fallback(self) -> RadioInfo:
        result = await self._run(self.fallback_command, self.timeout)
        if result is None or not result.stdout.strip():
            logger.debug("Radio command produced no output")
            return RadioInfo(interface=self.default_interface)
        return parse_radio_output(result.stdout, self.default_interface)

    async def collect(self) -> RadioInfo:
        if self.primary_command is None:
            return await self._fallback()

        result = await self._run(self.primary_command, self.timeout)
        if not _usable(result):
            logger.warning(
                "wifi-unredactor failed, falling back to %s (may show redacted info)",
                " ".join(self.fallback_command),
            )
            return await self._fallback()

        assert result is not None
        info = parse_radio_output(result.stdout, self.default_interface)
        if info.has_signal_metrics:
            return info
        return info.merge_signal(await self._fallback())
