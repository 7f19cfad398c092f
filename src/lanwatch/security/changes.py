"""Scan-to-scan change detection.

Compares the stored inventory from the previous scan with the inventory a
complete scan just produced. Devices are matched by ``device_id`` (MAC when
known, otherwise IP), so a DHCP renumbering is not reported as one device
leaving and another arriving.

Severities:

* new device, device type changed: medium
* ports opened: high when a new port is in ``HIGH_RISK_PORTS``, else medium
* device left, device returned, ports closed: low
* hostname changed: info
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable

from lanwatch.models import Device, DeviceType, ip_sort_key
from lanwatch.security.severity import Severity

# Remote-access, file-sharing and database ports whose appearance is a red flag
HIGH_RISK_PORTS: frozenset[int] = frozenset({
    21, 22, 23, 25, 53, 135, 139, 445, 1433, 1434,
    3306, 3389, 5432, 5900, 6379, 8080, 8888, 27017,
})


class ChangeType(enum.Enum):
    NEW_DEVICE = "new_device"
    DEVICE_LEFT = "device_left"
    DEVICE_RETURNED = "device_returned"
    PORTS_OPENED = "ports_opened"
    PORTS_CLOSED = "ports_closed"
    HOSTNAME_CHANGED = "hostname_changed"
    DEVICE_TYPE_CHANGED = "device_type_changed"


_TYPE_ORDER = {change_type: i for i, change_type in enumerate(ChangeType)}


@dataclass(frozen=True)
class DeviceChange:
    """One difference between two consecutive scans."""

    change_type: ChangeType
    ip_address: str
    severity: Severity
    details: str
    mac_address: str | None = None
    hostname: str | None = None
    ports: tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "change_type": self.change_type.value,
            "ip_address": self.ip_address,
            "mac_address": self.mac_address,
            "hostname": self.hostname,
            "severity": self.severity.value,
            "details": self.details,
            "ports": list(self.ports),
        }


def _change(
    change_type: ChangeType,
    device: Device,
    severity: Severity,
    details: str,
    ports: Iterable[int] = (),
) -> DeviceChange:
    return DeviceChange(
        change_type=change_type,
        ip_address=device.ip_address,
        severity=severity,
        details=details,
        mac_address=device.mac_address,
        hostname=device.hostname,
        ports=tuple(sorted(ports)),
    )


def _port_list(ports: Iterable[int]) -> str:
    return ", ".join(str(p) for p in sorted(ports))


def compare_device(previous: Device, current: Device) -> list[DeviceChange]:
    """Changes to a device present in both scans."""
    changes: list[DeviceChange] = []

    if not previous.is_online:
        changes.append(_change(
            ChangeType.DEVICE_RETURNED, current, Severity.LOW,
            f"Device back online: {current.display_name}",
        ))

    opened = current.port_numbers - previous.port_numbers
    if opened:
        severity = Severity.HIGH if opened & HIGH_RISK_PORTS else Severity.MEDIUM
        changes.append(_change(
            ChangeType.PORTS_OPENED, current, severity,
            f"New ports opened: {_port_list(opened)}", opened,
        ))

    closed = previous.port_numbers - current.port_numbers
    if closed:
        changes.append(_change(
            ChangeType.PORTS_CLOSED, current, Severity.LOW,
            f"Ports closed: {_port_list(closed)}", closed,
        ))

    if previous.hostname and current.hostname and previous.hostname != current.hostname:
        changes.append(_change(
            ChangeType.HOSTNAME_CHANGED, current, Severity.INFO,
            f"Hostname changed: {previous.hostname} -> {current.hostname}",
        ))

    # an unclassified reading says nothing about the device itself
    if (
        previous.device_type is not current.device_type
        and DeviceType.UNKNOWN not in (previous.device_type, current.device_type)
    ):
        changes.append(_change(
            ChangeType.DEVICE_TYPE_CHANGED, current, Severity.MEDIUM,
            f"Device type changed: {previous.device_type.value} -> {current.device_type.value}",
        ))

    return changes


def detect_changes(previous: Iterable[Device], current: Iterable[Device]) -> list[DeviceChange]:
    """Diff two inventories.

    Parameters
    ----------
    previous:
        Stored inventory before this scan, including devices already marked
        offline.
    current:
        Devices found by this scan.

    Returns
    -------
    list[DeviceChange]:
        Ordered by IP address (numerically), then by change type.
    """
    before = {d.device_id: d for d in previous}
    after = {d.device_id: d for d in current}
    changes: list[DeviceChange] = []

    for device_id, device in after.items():
        old = before.get(device_id)
        if old is None:
            changes.append(_change(
                ChangeType.NEW_DEVICE, device, Severity.MEDIUM,
                f"New device discovered: {device.display_name}",
            ))
        else:
            changes.extend(compare_device(old, device))

    for device_id, device in before.items():
        if device_id not in after and device.is_online:
            changes.append(_change(
                ChangeType.DEVICE_LEFT, device, Severity.LOW,
                f"Device went offline: {device.display_name}",
            ))

    return sorted(changes, key=lambda c: (ip_sort_key(c.ip_address), _TYPE_ORDER[c.change_type]))
