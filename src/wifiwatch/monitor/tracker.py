"""Detects SSID/BSSID changes between consecutive snapshots."""

from wifiwatch.monitor.models import ChangeEvent, IdentityField, Snapshot


class StateTracker:
    """Owns the last-seen identity for the lifetime of a monitor run.

    Previous values start empty, so the first observed network is reported
    as a change from ''. Absent values compare as ''.
    """

    def __init__(self) -> None:
        self.previous_ssid = ""
        self.previous_bssid = ""

    def observe(self, snapshot: Snapshot) -> list[ChangeEvent]:
        ssid = snapshot.ssid or ""
        bssid = snapshot.bssid or ""
        events: list[ChangeEvent] = []

        if ssid != self.previous_ssid:
            events.append(
                ChangeEvent(IdentityField.ssid, self.previous_ssid, ssid, snapshot.timestamp)
            )
        if bssid != self.previous_bssid:
            events.append(
                ChangeEvent(IdentityField.bssid, self.previous_bssid, bssid, snapshot.timestamp)
            )

        self.previous_ssid = ssid
        self.previous_bssid = bssid
        return events
