"""Persisting snapshots to the history database."""

import dataclasses
import logging

from sqlmodel import Session

from wifiwatch.history.models import SnapshotRecord
from wifiwatch.monitor.models import Snapshot

logger = logging.getLogger(__name__)


def record_snapshot(session: Session, snapshot: Snapshot) -> SnapshotRecord:
    """Insert one snapshot row and return it with its id."""
    values = dataclasses.asdict(snapshot)
    values["signal_tier"] = str(snapshot.signal_tier)
    record = SnapshotRecord(**values)
    session.add(record)
    session.commit()
    session.refresh(record)
    logger.debug("Recorded snapshot %s (id=%s)", snapshot.timestamp, record.id)
    return record
