"""Alert rule models."""

import enum
import operator
from dataclasses import dataclass


class Comparison(enum.StrEnum):
    lt = "lt"
    gt = "gt"

    def holds(self, value: float, threshold: float) -> bool:
        return _OPERATORS[self](value, threshold)


_OPERATORS = {
    Comparison.lt: operator.lt,
    Comparison.gt: operator.gt,
}


@dataclass(frozen=True)
class AlertRule:
    """Fires when a snapshot metric compares against a threshold."""

    name: str
    metric: str  # Snapshot attribute name
    comparison: Comparison
    threshold: float
    message_template: str  # formatted with {value} and {threshold} as rendered numbers


@dataclass(frozen=True)
class Alert:
    rule: str
    value: float
    threshold: float
    message: str
