"""Network-path probes: ping, DNS query time and traceroute."""

import logging
from dataclasses import dataclass

from wifiwatch.probes.base import CommandRunner, run_command
from wifiwatch.probes.parsing import (
    parse_dig_query_time,
    parse_ping_avg_latency,
    parse_ping_loss,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PingResult:
    loss_pct: float | None = None
    avg_latency_ms: float | None = None


class NetworkProbes:
    """Runs the network probes against the configured targets."""

    def __init__(
        self,
        ping_target: str,
        router_ip: str,
        dns_query_name: str = "google.com",
        ping_count: int = 5,
        traceroute_max_hops: int = 5,
        timeout: float = 30.0,
        runner: CommandRunner = run_command,
    ) -> None:
        self.ping_target = ping_target
        self.router_ip = router_ip
        self.dns_query_name = dns_query_name
        self.ping_count = ping_count
        self.traceroute_max_hops = traceroute_max_hops
        self.timeout = timeout
        self._run = runner

    async def ping(self, target: str) -> PingResult:
        # ping exits non-zero on total loss but still prints the summary
        result = await self._run(["ping", "-c", str(self.ping_count), "-q", target], self.timeout)
        if result is None:
            return PingResult()
        return PingResult(
            loss_pct=parse_ping_loss(result.stdout),
            avg_latency_ms=parse_ping_avg_latency(result.stdout),
        )

    async def ping_internet(self) -> PingResult:
        return await self.ping(self.ping_target)

    async def ping_router(self) -> PingResult:
        return await self.ping(self.router_ip)

    async def dns_time(self) -> float | None:
        """DNS resolution time in ms, or None if dig failed."""
        result = await self._run(["dig", "+stats", self.dns_query_name], self.timeout)
        if result is None or not result.ok:
            return None
        return parse_dig_query_time(result.stdout)

    async def traceroute(self) -> str:
        """Raw traceroute output for the diagnostics log."""
        argv = ["traceroute", "-m", str(self.traceroute_max_hops), "-q", "1", self.ping_target]
        result = await self._run(argv, self.timeout)
        if result is None:
            logger.warning("traceroute to %s could not be run", self.ping_target)
            return ""
        return result.stdout
