"""Known-device allowlist and rogue-device evaluation.

A device is rogue when it was first seen within the recency window and its
MAC address is not on the allowlist. Rogue status is derived, so it is
re-evaluated on every scan: adding a MAC to the allowlist clears the flag
on the next evaluation.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, Mapping

from lanwatch.devices.oui import normalize_mac
from lanwatch.models import Device

logger = logging.getLogger(__name__)

DEFAULT_ROGUE_WINDOW = timedelta(hours=1)


class KnownDeviceAllowlist:
    """MAC address -> friendly name allowlist.

    MACs are normalized on the way in, so lookups are format-insensitive.
    """

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = {}
        for mac, name in (entries or {}).items():
            self.add(mac, name)

    def add(self, mac: str, name: str = "") -> None:
        normalized = normalize_mac(mac)
        if normalized is None:
            raise ValueError(f"invalid MAC address: {mac!r}")
        self._entries[normalized] = name

    def remove(self, mac: str) -> bool:
        normalized = normalize_mac(mac)
        if normalized is None:
            return False
        return self._entries.pop(normalized, None) is not None

    def contains(self, mac: str | None) -> bool:
        if not mac:
            return False
        normalized = normalize_mac(mac)
        return normalized is not None and normalized in self._entries

    def name_for(self, mac: str | None) -> str | None:
        if not mac:
            return None
        normalized = normalize_mac(mac)
        if normalized is None:
            return None
        return self._entries.get(normalized)

    def to_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, mac: object) -> bool:
        return isinstance(mac, str) and self.contains(mac)


def is_rogue(
    device: Device,
    allowlist: KnownDeviceAllowlist,
    window: timedelta,
    now: datetime,
) -> bool:
    """Return True if *device* is new within *window* and not allowlisted."""
    if allowlist.contains(device.mac_address):
        return False
    return now - device.first_seen <= window


def apply_trust_status(
    devices: Iterable[Device],
    allowlist: KnownDeviceAllowlist,
    window: timedelta,
    now: datetime,
) -> list[Device]:
    """Return copies of *devices* with ``is_known_device`` and ``is_rogue`` set.

    Allowlisted devices without a hostname get their allowlist name.
    """
    evaluated: list[Device] = []
    for device in devices:
        known = allowlist.contains(device.mac_address)
        update: dict[str, object] = {
            "is_known_device": known,
            "is_rogue": is_rogue(device, allowlist, window, now),
        }
        name = allowlist.name_for(device.mac_address)
        if known and name and not device.hostname:
            update["hostname"] = name
        if update["is_rogue"] and not device.is_rogue:
            logger.info("Rogue device detected: %s (%s)", device.ip_address, device.mac_address)
        evaluated.append(device.model_copy(update=update))
    return evaluated
