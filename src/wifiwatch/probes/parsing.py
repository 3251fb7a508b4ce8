"""Line-oriented extraction of labelled values from probe output.

Radio tools print ``Label : value`` blocks. The first line whose label
matches wins; a missing label yields None, never zero or an exception.
"""

import json
import re
from typing import Any

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

# ping summaries differ between Linux and macOS/BSD:
#   5 packets transmitted, 5 received, 0% packet loss, time 4005ms
#   5 packets transmitted, 5 packets received, 0.0% packet loss
#   rtt min/avg/max/mdev = 11.2/12.5/14.1/0.9 ms
#   round-trip min/avg/max/stddev = 11.2/12.5/14.1/0.9 ms
_PING_LOSS_RE = re.compile(r"(\d+(?:\.\d+)?)% packet loss")
_PING_RTT_RE = re.compile(r"(?:rtt|round-trip) min/avg/max/\w+ = [\d.]+/(\d+(?:\.\d+)?)/")

# dig +stats: ";; Query time: 23 msec"
_DIG_QUERY_TIME_RE = re.compile(r"Query time:\s*(\d+(?:\.\d+)?)")


def _find_line(text: str, label: str) -> str | None:
    pattern = re.compile(r"^\s*" + re.escape(label) + r"\s*:")
    for line in text.splitlines():
        if pattern.match(line):
            return line
    return None


def extract_numeric(text: str, label: str) -> float | None:
    """Return the first signed integer or decimal on the line labelled ``label``."""
    line = _find_line(text, label)
    if line is None:
        return None
    m = _NUMBER_RE.search(line)
    return float(m.group(0)) if m else None


def extract_string(text: str, label: str) -> str | None:
    """Return everything after the first ``": "`` on the line labelled ``label``."""
    line = _find_line(text, label)
    if line is None or ": " not in line:
        return None
    value = line.split(": ", 1)[1].strip()
    return value or None


def parse_json_object(text: str) -> dict[str, Any] | None:
    """Parse ``text`` as a JSON object, or None if it is anything else."""
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def is_json(text: str) -> bool:
    return parse_json_object(text) is not None


def json_string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def json_number(data: dict[str, Any], key: str) -> float | None:
    value = data.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        m = _NUMBER_RE.search(value)
        return float(m.group(0)) if m else None
    return None


def parse_ping_loss(text: str) -> float | None:
    m = _PING_LOSS_RE.search(text)
    return float(m.group(1)) if m else None


def parse_ping_avg_latency(text: str) -> float | None:
    m = _PING_RTT_RE.search(text)
    return float(m.group(1)) if m else None


def parse_dig_query_time(text: str) -> float | None:
    m = _DIG_QUERY_TIME_RE.search(text)
    return float(m.group(1)) if m else None
