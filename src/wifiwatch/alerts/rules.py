"""Threshold rules applied to every snapshot."""

import logging

from wifiwatch.alerts.models import Alert, AlertRule, Comparison
from wifiwatch.monitor.models import Snapshot
from wifiwatch.monitor.render import fmt_number

logger = logging.getLogger(__name__)

# Router loss has its own fixed limit, independent of the configurable
# internet loss threshold.
ROUTER_LOSS_THRESHOLD = 5.0


def default_rules(threshold_signal: float = -70, threshold_loss: float = 5.0) -> list[AlertRule]:
    """Signal, internet loss and router loss rules, in evaluation order."""
    return [
        AlertRule(
            name="weak_signal",
            metric="rssi",
            comparison=Comparison.lt,
            threshold=threshold_signal,
            message_template="Weak signal: {value} dBm",
        ),
        AlertRule(
            name="internet_loss",
            metric="internet_loss_pct",
            comparison=Comparison.gt,
            threshold=threshold_loss,
            message_template="High internet packet loss: {value}%",
        ),
        AlertRule(
            name="router_loss",
            metric="router_loss_pct",
            comparison=Comparison.gt,
            threshold=ROUTER_LOSS_THRESHOLD,
            message_template="High router packet loss: {value}%",
        ),
    ]


class AlertEvaluator:
    """Checks each rule against a snapshot; absent metrics skip their rule."""

    def __init__(self, rules: list[AlertRule]) -> None:
        self.rules = list(rules)

    @classmethod
    def from_thresholds(cls, threshold_signal: float, threshold_loss: float) -> "AlertEvaluator":
        return cls(default_rules(threshold_signal, threshold_loss))

    def evaluate(self, snapshot: Snapshot) -> list[Alert]:
        alerts: list[Alert] = []
        for rule in self.rules:
            value = getattr(snapshot, rule.metric, None)
            if value is None:
                continue
            if rule.comparison.holds(value, rule.threshold):
                logger.debug("Rule %s fired: %s vs %s", rule.name, value, rule.threshold)
                alerts.append(
                    Alert(
                        rule=rule.name,
                        value=value,
                        threshold=rule.threshold,
                        message=rule.message_template.format(
                            value=fmt_number(value), threshold=fmt_number(rule.threshold)
                        ),
                    )
                )
        return alerts
