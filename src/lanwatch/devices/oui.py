"""MAC address normalization and OUI manufacturer lookup.

The first three octets of a MAC address (the Organizationally Unique
Identifier) identify the vendor of the network interface. The table below
is a curated subset of the IEEE registry covering vendors commonly seen on
home and small-office networks. Prefixes missing from it fall back to the
bulk registry in ``oui_db``, generated by ``scripts/update_oui_db.py``.
"""

from __future__ import annotations

import re

from lanwatch.devices.oui_db import OUI_DB

_HEX_RE = re.compile(r"^[0-9a-f]+$")

OUI_MANUFACTURERS: dict[str, str] = {
    # Virtualization
    "00:50:56": "VMware",
    "00:0C:29": "VMware",
    "00:05:69": "VMware",
    "08:00:27": "Oracle VirtualBox",
    "52:54:00": "QEMU/KVM",
    "00:15:5D": "Microsoft Hyper-V",
    "02:42:AC": "Docker",
    # Apple
    "00:03:93": "Apple",
    "00:1B:63": "Apple",
    "00:1E:C2": "Apple",
    "28:CF:E9": "Apple",
    "3C:07:54": "Apple",
    "A4:5E:60": "Apple",
    "AC:BC:32": "Apple",
    "F0:18:98": "Apple",
    "F4:5C:89": "Apple",
    # Samsung
    "00:12:FB": "Samsung",
    "5C:0A:5B": "Samsung",
    "8C:77:12": "Samsung",
    "F4:7B:5E": "Samsung",
    # Networking
    "00:1D:7E": "Cisco-Linksys",
    "00:40:96": "Cisco",
    "00:1A:A1": "Cisco",
    "14:CC:20": "TP-Link",
    "50:C7:BF": "TP-Link",
    "C0:4A:00": "TP-Link",
    "00:05:5D": "D-Link",
    "1C:7E:E5": "D-Link",
    "00:14:6C": "Netgear",
    "A0:40:A0": "Netgear",
    "04:18:D6": "Ubiquiti",
    "24:A4:3C": "Ubiquiti",
    "78:8A:20": "Ubiquiti",
    "F0:9F:C2": "Ubiquiti",
    "00:1F:C6": "ASUS",
    "2C:56:DC": "ASUS",
    "00:11:32": "Synology",
    "24:5E:BE": "QNAP",
    # Computers and peripherals
    "00:14:22": "Dell",
    "F8:BC:12": "Dell",
    "00:21:5A": "HP",
    "3C:D9:2B": "HP",
    "00:80:77": "Brother",
    "00:26:AB": "Epson",
    "54:EE:75": "Lenovo",
    "00:1B:21": "Intel",
    "3C:97:0E": "Intel",
    # Consumer / IoT
    "B8:27:EB": "Raspberry Pi",
    "DC:A6:32": "Raspberry Pi",
    "E4:5F:01": "Raspberry Pi",
    "F4:F5:D8": "Google",
    "54:60:09": "Google",
    "18:B4:30": "Nest Labs",
    "44:65:0D": "Amazon",
    "FC:65:DE": "Amazon",
    "24:0A:C4": "Espressif",
    "30:AE:A4": "Espressif",
    "EC:FA:BC": "Espressif",
    "00:0E:58": "Sonos",
    "5C:AA:FD": "Sonos",
    "00:17:88": "Philips Hue",
    "B0:C5:54": "D-Link",
    "68:37:E9": "Amazon",
    "D8:F1:5B": "Tuya",
    "28:57:BE": "Hikvision",
    "44:19:B6": "Hikvision",
    "3C:EF:8C": "Dahua",
    "90:02:A9": "Dahua",
}


def normalize_mac(mac: str) -> str | None:
    """Return *mac* as lowercase colon-separated hex, or ``None`` if invalid.

    Accepts ``:``, ``-`` and Cisco dotted formats, and unpadded octets as
    printed by BSD ``arp`` (``0:1a:2b:3:4:5``).
    """
    value = mac.strip().lower()
    if ":" in value or "-" in value:
        parts = re.split(r"[:-]", value)
        if len(parts) != 6 or not all(1 <= len(p) <= 2 for p in parts):
            return None
        flat = "".join(p.zfill(2) for p in parts)
    else:
        flat = value.replace(".", "")
    if len(flat) != 12 or not _HEX_RE.match(flat):
        return None
    return ":".join(flat[i:i + 2] for i in range(0, 12, 2))


def oui_prefix(mac: str) -> str | None:
    """Return the uppercase ``AA:BB:CC`` OUI prefix of *mac*."""
    normalized = normalize_mac(mac)
    if normalized is None:
        return None
    return normalized[:8].upper()


def is_locally_administered(mac: str) -> bool:
    """True for randomized/private MACs (second-least-significant bit of octet 0)."""
    normalized = normalize_mac(mac)
    if normalized is None:
        return False
    return bool(int(normalized[:2], 16) & 0x02)


def lookup_manufacturer(mac: str | None) -> str | None:
    """Look up the interface vendor for *mac*.

    The curated table wins over the bulk registry. Returns ``None`` for
    unknown prefixes and invalid addresses.
    Randomized (locally administered) addresses are reported as
    ``"Private MAC"`` unless the prefix is explicitly listed.
    """
    if not mac:
        return None
    prefix = oui_prefix(mac)
    if prefix is None:
        return None
    manufacturer = OUI_MANUFACTURERS.get(prefix) or OUI_DB.get(prefix)
    if manufacturer is None and is_locally_administered(mac):
        return "Private MAC"
    return manufacturer
