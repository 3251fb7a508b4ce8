"""Shared test fixtures."""

from collections.abc import Generator, Sequence
from datetime import datetime

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import wifiwatch.history.models  # noqa: F401
from wifiwatch.monitor.classifier import classify_signal
from wifiwatch.monitor.models import Snapshot
from wifiwatch.probes.base import CommandResult

WDUTIL_OUTPUT = """\
————————————————————————————————————————————————————————————————————
WIFI
————————————————————————————————————————————————————————————————————
    MAC Address          : 3c:22:fb:aa:bb:cc (hw=3c:22:fb:aa:bb:cc)
    Interface Name       : en0
    Power                : On [On]
    Op Mode              : STA
    SSID                 : HomeNet
    BSSID                : 30:de:4b:d2:69:7b
    RSSI                 : -58 dBm
    CCA                  : 12 %
    Noise                : -92 dBm
    Tx Rate              : 866.0 Mbps
    Security             : WPA2 Personal
    PHY Mode             : 11ac
    Channel              : 5g149/80
"""

LINUX_PING_OUTPUT = """\
PING 8.8.8.8 (8.8.8.8) 56(84) bytes of data.

--- 8.8.8.8 ping statistics ---
5 packets transmitted, 5 received, 0% packet loss, time 4006ms
rtt min/avg/max/mdev = 11.204/12.512/14.093/0.981 ms
"""

MAC_PING_OUTPUT = """\
PING 192.168.88.1 (192.168.88.1): 56 data bytes

--- 192.168.88.1 ping statistics ---
5 packets transmitted, 4 packets received, 20.0% packet loss
round-trip min/avg/max/stddev = 2.114/3.020/4.551/0.870 ms
"""

TOTAL_LOSS_PING_OUTPUT = """\
PING 192.168.88.1 (192.168.88.1): 56 data bytes

--- 192.168.88.1 ping statistics ---
5 packets transmitted, 0 packets received, 100.0% packet loss
"""

DIG_OUTPUT = """\
; <<>> DiG 9.10.6 <<>> +stats google.com
;; ANSWER SECTION:
google.com.		120	IN	A	142.250.184.206

;; Query time: 23 msec
;; SERVER: 192.168.88.1#53(192.168.88.1)
"""


class FakeRunner:
    """Stands in for run_command.

    ``outputs`` maps either the full command line or just the program name
    to a CommandResult, None (could not run) or an exception to raise.
    """

    def __init__(self, outputs: dict[str, object] | None = None) -> None:
        self.outputs = outputs or {}
        self.calls: list[list[str]] = []

    async def __call__(self, argv: Sequence[str], timeout: float) -> CommandResult | None:
        self.calls.append(list(argv))
        key = " ".join(argv)
        out = self.outputs[key] if key in self.outputs else self.outputs.get(argv[0])
        if isinstance(out, Exception):
            raise out
        return out  # type: ignore[return-value]

    @property
    def programs(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_runner() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture
def ok():
    """Build a successful CommandResult from stdout."""

    def _ok(stdout: str, returncode: int = 0) -> CommandResult:
        return CommandResult(returncode=returncode, stdout=stdout)

    return _ok


@pytest.fixture
def probe_outputs() -> dict[str, str]:
    return {
        "wdutil": WDUTIL_OUTPUT,
        "linux_ping": LINUX_PING_OUTPUT,
        "mac_ping": MAC_PING_OUTPUT,
        "total_loss_ping": TOTAL_LOSS_PING_OUTPUT,
        "dig": DIG_OUTPUT,
    }


@pytest.fixture
def make_snapshot():
    """Snapshot factory; signal_tier follows rssi unless given."""

    def _make(**overrides: object) -> Snapshot:
        values: dict[str, object] = {
            "timestamp": datetime(2024, 1, 15, 10, 30, 0),
            "interface": "en0",
            "ssid": "HomeNet",
            "bssid": "30:de:4b:d2:69:7b",
            "channel": "5g149/80",
            "rssi": -58,
            "noise": -92,
            "tx_rate": 866.0,
            "internet_loss_pct": 0.0,
            "router_loss_pct": 0.0,
            "latency_ms": 12.5,
            "dns_time_ms": 23.0,
        }
        values.update(overrides)
        if "signal_tier" not in overrides:
            values["signal_tier"] = classify_signal(values["rssi"])  # type: ignore[arg-type]
        return Snapshot(**values)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def engine():
    """In-memory SQLite engine with all tables created.

    StaticPool ensures every session uses the same connection,
    so the in-memory database is shared across the test.
    """
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(eng)
    return eng


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as s:
        yield s
