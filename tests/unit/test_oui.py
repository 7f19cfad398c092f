"""Unit tests for MAC normalization and OUI manufacturer lookup."""
from __future__ import annotations

import pytest

from lanwatch.devices.classifier import classify_device
from lanwatch.devices.oui import (
    OUI_MANUFACTURERS,
    is_locally_administered,
    lookup_manufacturer,
    normalize_mac,
    oui_prefix,
)
from lanwatch.devices.oui_db import OUI_DB
from lanwatch.models import DeviceType


class TestNormalizeMac:
    @pytest.mark.parametrize(
        "raw",
        ["AA:BB:CC:DD:EE:FF", "aa-bb-cc-dd-ee-ff", "aabb.ccdd.eeff", "aabbccddeeff", " AA:BB:CC:DD:EE:FF "],
    )
    def test_accepted_forms(self, raw: str) -> None:
        assert normalize_mac(raw) == "aa:bb:cc:dd:ee:ff"

    def test_unpadded_octets(self) -> None:
        assert normalize_mac("0:1a:2b:3:4:5") == "00:1a:2b:03:04:05"

    @pytest.mark.parametrize("raw", ["", "aa:bb:cc", "zz:bb:cc:dd:ee:ff", "aa:bb:cc:dd:ee:ff:00", "(incomplete)"])
    def test_rejected(self, raw: str) -> None:
        assert normalize_mac(raw) is None


class TestLookup:
    def test_known_vendor(self) -> None:
        assert lookup_manufacturer("00:50:56:01:02:03") == "VMware"
        assert lookup_manufacturer("f0-18-98-aa-bb-cc") == "Apple"

    def test_unknown_vendor(self) -> None:
        assert lookup_manufacturer("00:00:01:02:03:04") is None

    def test_randomized_mac(self) -> None:
        assert is_locally_administered("da:a1:19:00:00:01")
        assert lookup_manufacturer("da:a1:19:00:00:01") == "Private MAC"

    def test_listed_local_prefix_wins(self) -> None:
        # Docker's prefix has the locally administered bit set
        assert lookup_manufacturer("02:42:ac:11:00:02") == "Docker"

    def test_missing_or_invalid(self) -> None:
        assert lookup_manufacturer(None) is None
        assert lookup_manufacturer("not-a-mac") is None

    def test_prefix(self) -> None:
        assert oui_prefix("aa-bb-cc-dd-ee-ff") == "AA:BB:CC"
        assert oui_prefix("nope") is None


class TestBulkRegistryFallback:
    def test_prefix_only_in_bulk_registry(self) -> None:
        assert "D0:73:D5" not in OUI_MANUFACTURERS
        assert lookup_manufacturer("d0:73:d5:01:02:03") == "LIFX"
        assert lookup_manufacturer("44:32:c8:aa:bb:cc") == "Wyze Labs"

    def test_curated_table_wins(self) -> None:
        assert OUI_DB["00:17:88"] == "Philips Lighting"
        assert lookup_manufacturer("00:17:88:00:00:01") == "Philips Hue"

    def test_bulk_vendor_feeds_classifier_hints(self) -> None:
        assert "2C:CF:67" not in OUI_MANUFACTURERS
        manufacturer = lookup_manufacturer("2c:cf:67:12:34:56")
        assert classify_device([], manufacturer=manufacturer) is DeviceType.COMPUTER
