"""Unit tests for the known-device allowlist and rogue evaluation."""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from lanwatch.devices.rogue import KnownDeviceAllowlist, apply_trust_status, is_rogue
from lanwatch.models import Device

MAC = "aa:bb:cc:dd:ee:01"


def _device(now: datetime, age: timedelta, mac: str | None = MAC, **kwargs) -> Device:
    return Device(
        ip_address="192.168.1.50",
        mac_address=mac,
        first_seen=now - age,
        last_seen=now,
        **kwargs,
    )


class TestKnownDeviceAllowlist:
    def test_lookup_is_format_insensitive(self) -> None:
        allowlist = KnownDeviceAllowlist({"AA-BB-CC-DD-EE-01": "Laptop"})
        assert allowlist.contains(MAC)
        assert MAC.upper() in allowlist
        assert allowlist.name_for("aabb.ccdd.ee01") == "Laptop"
        assert allowlist.to_dict() == {MAC: "Laptop"}

    def test_invalid_mac_rejected(self) -> None:
        with pytest.raises(ValueError):
            KnownDeviceAllowlist().add("not-a-mac")

    def test_remove(self) -> None:
        allowlist = KnownDeviceAllowlist({MAC: ""})
        assert allowlist.remove(MAC.upper())
        assert not allowlist.remove(MAC)
        assert len(allowlist) == 0

    def test_missing_mac_is_never_known(self) -> None:
        allowlist = KnownDeviceAllowlist({MAC: ""})
        assert not allowlist.contains(None)
        assert None not in allowlist


class TestIsRogue:
    """New, unlisted devices are rogue; listing clears the flag."""

    def test_new_unknown_device_then_allowlisted(self, now: datetime) -> None:
        window = timedelta(minutes=15)
        device = _device(now, timedelta(minutes=2))
        allowlist = KnownDeviceAllowlist()
        assert is_rogue(device, allowlist, window, now)

        allowlist.add(MAC, "Guest laptop")
        assert not is_rogue(device, allowlist, window, now)

    def test_outside_window_not_rogue(self, now: datetime) -> None:
        device = _device(now, timedelta(minutes=16))
        assert not is_rogue(device, KnownDeviceAllowlist(), timedelta(minutes=15), now)

    def test_device_without_mac_can_be_rogue(self, now: datetime) -> None:
        device = _device(now, timedelta(seconds=1), mac=None)
        assert is_rogue(device, KnownDeviceAllowlist({MAC: ""}), timedelta(minutes=15), now)


class TestApplyTrustStatus:
    def test_flags_and_names(self, now: datetime) -> None:
        allowlist = KnownDeviceAllowlist({MAC: "NAS"})
        known = _device(now, timedelta(minutes=1))
        stranger = Device(
            ip_address="192.168.1.60",
            mac_address="aa:bb:cc:dd:ee:02",
            first_seen=now - timedelta(minutes=1),
            last_seen=now,
        )
        evaluated = apply_trust_status([known, stranger], allowlist, timedelta(minutes=15), now)

        assert evaluated[0].is_known_device
        assert not evaluated[0].is_rogue
        assert evaluated[0].hostname == "NAS"
        assert not evaluated[1].is_known_device
        assert evaluated[1].is_rogue

    def test_existing_hostname_kept(self, now: datetime) -> None:
        allowlist = KnownDeviceAllowlist({MAC: "NAS"})
        device = _device(now, timedelta(minutes=1), hostname="diskstation.lan")
        [evaluated] = apply_trust_status([device], allowlist, timedelta(minutes=15), now)
        assert evaluated.hostname == "diskstation.lan"

    def test_inputs_not_mutated(self, now: datetime) -> None:
        device = _device(now, timedelta(minutes=1))
        apply_trust_status([device], KnownDeviceAllowlist(), timedelta(minutes=15), now)
        assert not device.is_rogue
