"""Text rendering of snapshots for the console and the diagnostics log."""

from datetime import datetime

from wifiwatch.monitor.models import ChangeEvent, Snapshot

NUMBER_PLACEHOLDER = "N/A"
TEXT_PLACEHOLDER = "unknown"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
BLOCK_SEPARATOR = "-" * 48
TRACEROUTE_HEADER = "--- Traceroute ---"
TRACEROUTE_FOOTER = "-" * 18
ALERT_PREFIX = "[!]"


def fmt_time(ts: datetime) -> str:
    return ts.strftime(TIMESTAMP_FORMAT)


def fmt_number(value: float | None) -> str:
    """-67 -> "-67", 0.0 -> "0", 12.345 -> "12.345", None -> "N/A"."""
    if value is None:
        return NUMBER_PLACEHOLDER
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def fmt_text(value: str | None) -> str:
    return value if value else TEXT_PLACEHOLDER


def console_line(snapshot: Snapshot) -> str:
    return (
        f"{fmt_time(snapshot.timestamp)} — "
        f"Interface: {fmt_text(snapshot.interface)}, "
        f"SSID: {fmt_text(snapshot.ssid)}, "
        f"Signal: {fmt_number(snapshot.rssi)} dBm ({snapshot.signal_tier.label}), "
        f"Loss: {fmt_number(snapshot.internet_loss_pct)}% @ {fmt_number(snapshot.latency_ms)}ms, "
        f"Router Loss: {fmt_number(snapshot.router_loss_pct)}%"
    )


def log_block(snapshot: Snapshot) -> str:
    """Multi-line block appended to the diagnostics log, newline-terminated."""
    identity = (
        f"SSID: {fmt_text(snapshot.ssid)} | BSSID: {fmt_text(snapshot.bssid)} | "
        f"Channel: {fmt_text(snapshot.channel)}"
    )
    if snapshot.interface:
        identity = f"Interface: {snapshot.interface} | " + identity
    lines = [
        fmt_time(snapshot.timestamp),
        identity,
        f"RSSI: {fmt_number(snapshot.rssi)} dBm ({snapshot.signal_tier.label}) | "
        f"Noise: {fmt_number(snapshot.noise)} dBm | Rate: {fmt_number(snapshot.tx_rate)} Mbps",
        f"Ping Loss: {fmt_number(snapshot.internet_loss_pct)}% | "
        f"Avg Latency: {fmt_number(snapshot.latency_ms)} ms | "
        f"Router Loss: {fmt_number(snapshot.router_loss_pct)}% | "
        f"DNS Time: {fmt_number(snapshot.dns_time_ms)} ms",
        BLOCK_SEPARATOR,
    ]
    return "\n".join(lines) + "\n"


def change_log_line(change: ChangeEvent) -> str:
    return f"{fmt_time(change.timestamp)} [LOG] {change.message}\n"


def traceroute_block(output: str) -> str:
    body = output if output.endswith("\n") or not output else output + "\n"
    return f"{TRACEROUTE_HEADER}\n{body}{TRACEROUTE_FOOTER}\n"
