"""The sampling loop: snapshot, diff, alert, publish, occasionally traceroute, sleep."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime

from wifiwatch.alerts.models import Alert
from wifiwatch.alerts.rules import AlertEvaluator
from wifiwatch.monitor.builder import SnapshotBuilder
from wifiwatch.monitor.models import ChangeEvent, Snapshot
from wifiwatch.monitor.sinks import MonitorSink
from wifiwatch.monitor.tracker import StateTracker
from wifiwatch.probes.network import NetworkProbes

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class ScheduleState:
    # Monotonic clock reading of the last traceroute; None runs it on the first cycle.
    last_traceroute: float | None = None


@dataclass
class CycleResult:
    snapshot: Snapshot
    changes: list[ChangeEvent] = field(default_factory=list)
    alerts: list[Alert] = field(default_factory=list)
    traceroute_ran: bool = False


class Monitor:
    """Single-task monitor loop.

    Every step of a cycle is awaited in sequence. The traceroute has its own
    interval but no timer: it is re-checked once per cycle, so its period is
    rounded up to a multiple of the sampling interval.
    """

    def __init__(
        self,
        builder: SnapshotBuilder,
        network: NetworkProbes,
        evaluator: AlertEvaluator,
        sinks: list[MonitorSink],
        interval: float = 10.0,
        traceroute_interval: float = 300.0,
        tracker: StateTracker | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        wall_clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self.builder = builder
        self.network = network
        self.evaluator = evaluator
        self.sinks = sinks
        self.interval = interval
        self.traceroute_interval = traceroute_interval
        self.tracker = tracker or StateTracker()
        self.schedule = ScheduleState()
        self._clock = clock
        self._sleep = sleep
        self._wall_clock = wall_clock
        self._running = False
        self._task: asyncio.Task[None] | None = None

    def _publish(self, handler: str, *args: object) -> None:
        for sink in self.sinks:
            try:
                getattr(sink, handler)(*args)
            except Exception:
                logger.exception("%s.%s failed", type(sink).__name__, handler)

    def traceroute_due(self, now: float) -> bool:
        last = self.schedule.last_traceroute
        return last is None or now - last >= self.traceroute_interval

    async def run_cycle(self) -> CycleResult:
        timestamp = self._wall_clock()
        now = self._clock()

        snapshot = await self.builder.build(timestamp)
        result = CycleResult(snapshot=snapshot)

        result.changes = self.tracker.observe(snapshot)
        for change in result.changes:
            logger.info(change.message)
            self._publish("on_change", change)

        result.alerts = self.evaluator.evaluate(snapshot)
        for alert in result.alerts:
            self._publish("on_alert", alert, snapshot)

        self._publish("on_snapshot", snapshot)

        if self.traceroute_due(now):
            try:
                output = await self.network.traceroute()
            except Exception:
                logger.exception("traceroute probe failed")
                output = ""
            self._publish("on_diagnostic", output)
            self.schedule.last_traceroute = now
            result.traceroute_ran = True

        return result

    async def run(self, max_cycles: int | None = None) -> None:
        """Sample every ``interval`` seconds until stopped (or ``max_cycles`` ran)."""
        self._running = True
        cycles = 0
        while self._running:
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Monitor cycle failed")

            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            await self._sleep(self.interval)
        self._running = False

    async def start(self) -> None:
        logger.info(
            "Starting monitor (interval=%gs, traceroute every %gs)",
            self.interval,
            self.traceroute_interval,
        )
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        logger.info("Stopping monitor")
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
