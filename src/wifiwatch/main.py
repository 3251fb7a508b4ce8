"""wifiwatch entrypoint."""

import asyncio
import logging
import shlex
import subprocess
import sys

from wifiwatch.alerts.rules import AlertEvaluator
from wifiwatch.config import Settings, load_config
from wifiwatch.database import create_db_engine, init_db
from wifiwatch.monitor.builder import SnapshotBuilder
from wifiwatch.monitor.loop import Monitor
from wifiwatch.monitor.sinks import (
    ConsoleSink,
    HistorySink,
    LogFileSink,
    MonitorSink,
    WebhookSink,
)
from wifiwatch.probes.network import NetworkProbes
from wifiwatch.probes.radio import RadioSource

logger = logging.getLogger(__name__)


def check_privileges(cfg: Settings) -> bool:
    """Run the authorization command (``sudo -v``) once, before the loop."""
    argv = shlex.split(cfg.privilege_command)
    if not argv:
        return True
    try:
        result = subprocess.run(argv, check=False)
    except OSError as e:
        logger.error("Privilege check %r could not run: %s", cfg.privilege_command, e)
        return False
    if result.returncode != 0:
        logger.error("Privilege check %r failed (exit %d)", cfg.privilege_command, result.returncode)
        return False
    return True


def _create_sinks(cfg: Settings) -> list[MonitorSink]:
    sinks: list[MonitorSink] = [ConsoleSink(), LogFileSink(cfg.log_file)]
    if cfg.db_path:
        engine = create_db_engine(cfg.db_path)
        init_db(engine)
        logger.info("Snapshot history enabled: %s", cfg.db_path)
        sinks.append(HistorySink(engine))
    if cfg.webhook_url:
        logger.info("Webhook notifications enabled")
        sinks.append(WebhookSink(cfg.webhook_url))
    return sinks


def create_monitor(cfg: Settings) -> Monitor:
    """Wire probes, evaluator and sinks from configuration."""
    radio = RadioSource.from_paths(
        shlex.split(cfg.radio_command),
        cfg.unredactor_path,
        default_interface=cfg.default_interface,
        timeout=cfg.command_timeout,
    )
    network = NetworkProbes(
        ping_target=cfg.ping_target,
        router_ip=cfg.router_ip,
        dns_query_name=cfg.dns_query_name,
        ping_count=cfg.ping_count,
        traceroute_max_hops=cfg.traceroute_max_hops,
        timeout=cfg.command_timeout,
    )
    return Monitor(
        builder=SnapshotBuilder(radio, network),
        network=network,
        evaluator=AlertEvaluator.from_thresholds(cfg.threshold_signal, cfg.threshold_loss),
        sinks=_create_sinks(cfg),
        interval=cfg.interval,
        traceroute_interval=cfg.traceroute_interval,
    )


def _print_banner(cfg: Settings) -> None:
    print("===== Wi-Fi Diagnostic Monitor =====")
    print(f"Target: {cfg.ping_target} | Router: {cfg.router_ip}")
    print(f"Logging to: {cfg.log_file}")
    print("-" * 37, flush=True)


def main() -> None:
    cfg = load_config(cli=True)
    logging.basicConfig(level=cfg.log_level.upper())

    if not check_privileges(cfg):
        sys.exit(1)

    monitor = create_monitor(cfg)
    _print_banner(cfg)
    try:
        asyncio.run(monitor.run())
    except KeyboardInterrupt:
        logger.info("Monitor stopped")


if __name__ == "__main__":
    main()
