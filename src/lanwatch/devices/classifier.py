"""Device-type classification from open ports, hostnames and vendors.

Classification is a deterministic rule table, not a statistical model:
the first rule whose port set intersects the device's open ports wins.

Rule order:
1. {53, 67, 68}              -> router
2. {3306, 5432, 1433, 27017} -> server
3. {631, 9100}               -> printer
4. {1883, 8883}              -> iot
5. {139, 445, 548}           -> computer
6. otherwise                 -> unknown

``classify_device`` layers hostname and manufacturer hints on top, used
only when the port table yields ``unknown``.
"""

from __future__ import annotations

from typing import Iterable

from lanwatch.models import DeviceType, PortInfo

PORT_RULES: tuple[tuple[frozenset[int], DeviceType], ...] = (
    (frozenset({53, 67, 68}), DeviceType.ROUTER),
    (frozenset({3306, 5432, 1433, 27017}), DeviceType.SERVER),
    (frozenset({631, 9100}), DeviceType.PRINTER),
    (frozenset({1883, 8883}), DeviceType.IOT),
    (frozenset({139, 445, 548}), DeviceType.COMPUTER),
)

# Substring hints, checked in order against the lowercased hostname
_HOSTNAME_HINTS: tuple[tuple[tuple[str, ...], DeviceType], ...] = (
    (("router", "gateway", "unifi", "edgerouter", "openwrt"), DeviceType.ROUTER),
    (("iphone", "ipad", "android", "pixel", "galaxy", "phone"), DeviceType.MOBILE),
    (("printer", "epson", "brother", "laserjet", "officejet"), DeviceType.PRINTER),
    (("macbook", "imac", "desktop", "laptop", "workstation", "-pc"), DeviceType.COMPUTER),
    (("nas", "server", "synology", "diskstation", "proxmox"), DeviceType.SERVER),
    (("nest", "ring", "sonos", "hue", "echo", "chromecast", "tuya", "esp"), DeviceType.IOT),
)

_MANUFACTURER_HINTS: tuple[tuple[tuple[str, ...], DeviceType], ...] = (
    (("ubiquiti", "netgear", "cisco", "tp-link", "d-link", "asus"), DeviceType.ROUTER),
    (("brother", "epson"), DeviceType.PRINTER),
    (("synology", "qnap", "vmware", "virtualbox", "qemu", "hyper-v"), DeviceType.SERVER),
    (("espressif", "tuya", "nest", "philips hue", "sonos", "amazon", "hikvision", "dahua"), DeviceType.IOT),
    (("raspberry pi", "dell", "lenovo", "intel"), DeviceType.COMPUTER),
)

# (ports, OS name) used when no banner carries an OS hint
_PORT_OS_HINTS: tuple[tuple[frozenset[int], str], ...] = (
    (frozenset({62078}), "iOS"),
    (frozenset({135, 3389, 5985}), "Windows"),
    (frozenset({548}), "macOS"),
    (frozenset({9100, 515}), "Printer firmware"),
)


def classify_device_type(ports: Iterable[int]) -> DeviceType:
    """Classify a device from its open ports using the fixed rule table."""
    port_set = frozenset(ports)
    for rule_ports, device_type in PORT_RULES:
        if port_set & rule_ports:
            return device_type
    return DeviceType.UNKNOWN


def _match_hints(
    text: str | None,
    hints: tuple[tuple[tuple[str, ...], DeviceType], ...],
) -> DeviceType | None:
    if not text:
        return None
    lowered = text.lower()
    for needles, device_type in hints:
        if any(needle in lowered for needle in needles):
            return device_type
    return None


def classify_device(
    ports: Iterable[int],
    manufacturer: str | None = None,
    hostname: str | None = None,
) -> DeviceType:
    """Classify using the port table first, then hostname and vendor hints."""
    device_type = classify_device_type(ports)
    if device_type is not DeviceType.UNKNOWN:
        return device_type
    return (
        _match_hints(hostname, _HOSTNAME_HINTS)
        or _match_hints(manufacturer, _MANUFACTURER_HINTS)
        or DeviceType.UNKNOWN
    )


def detect_operating_system(
    open_ports: Iterable[PortInfo],
    os_hints: Iterable[str | None] = (),
) -> str | None:
    """Guess the OS from banner hints, falling back to port signatures.

    Parameters
    ----------
    open_ports:
        The device's open ports.
    os_hints:
        OS names extracted from banners, in port order. The first non-empty
        hint wins.
    """
    for hint in os_hints:
        if hint:
            return hint
    port_set = frozenset(p.port for p in open_ports)
    for ports, name in _PORT_OS_HINTS:
        if port_set & ports:
            return name
    return None
