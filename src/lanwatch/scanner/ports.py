"""Port sets and canonical service names.

The size of the port working set is the dominant cost of a scan, so it is
selected by ``ScanMode`` rather than hardcoded in the scanner. Backdoor and
trojan ports are folded into every preset: an open backdoor port is a
direct security signal, not a service-discovery target.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from lanwatch.errors import ConfigurationError
from lanwatch.models import ScanType


class ScanMode(str, Enum):
    QUICK = "quick"
    COMMON = "common"
    STANDARD = "standard"
    FULL = "full"
    COMPREHENSIVE = "comprehensive"

    @classmethod
    def for_scan_type(cls, scan_type: ScanType) -> ScanMode:
        """Map a schedule's scan type onto a port-set mode."""
        return _SCAN_TYPE_MODES[scan_type]


_SCAN_TYPE_MODES = {
    ScanType.QUICK: ScanMode.QUICK,
    ScanType.FULL: ScanMode.FULL,
    ScanType.DEEP: ScanMode.STANDARD,
}


# -- Service names -----------------------------------------------------------

SERVICE_NAMES: dict[int, str] = {
    20: "FTP-Data",
    21: "FTP",
    22: "SSH",
    23: "Telnet",
    25: "SMTP",
    53: "DNS",
    67: "DHCP",
    68: "DHCP",
    69: "TFTP",
    80: "HTTP",
    88: "Kerberos",
    110: "POP3",
    111: "RPCBind",
    119: "NNTP",
    123: "NTP",
    135: "MSRPC",
    137: "NetBIOS-NS",
    138: "NetBIOS-DGM",
    139: "NetBIOS",
    143: "IMAP",
    161: "SNMP",
    162: "SNMP-Trap",
    389: "LDAP",
    443: "HTTPS",
    445: "SMB",
    465: "SMTPS",
    514: "Syslog",
    515: "LPD",
    548: "AFP",
    554: "RTSP",
    587: "SMTP-Submission",
    631: "IPP",
    636: "LDAPS",
    873: "Rsync",
    993: "IMAPS",
    995: "POP3S",
    1080: "SOCKS",
    1194: "OpenVPN",
    1433: "MSSQL",
    1434: "MSSQL-Monitor",
    1521: "Oracle",
    1723: "PPTP",
    1883: "MQTT",
    1900: "UPnP",
    2049: "NFS",
    2082: "cPanel",
    2083: "cPanel-SSL",
    2181: "ZooKeeper",
    2375: "Docker",
    2376: "Docker-TLS",
    3000: "HTTP-Dev",
    3128: "Squid",
    3268: "LDAP-GC",
    3306: "MySQL",
    3389: "RDP",
    3690: "SVN",
    4369: "EPMD",
    5000: "UPnP/Flask",
    5001: "Synology-DSM",
    5060: "SIP",
    5222: "XMPP",
    5223: "XMPP-SSL",
    5269: "XMPP-Server",
    5353: "mDNS",
    5432: "PostgreSQL",
    5555: "ADB",
    5672: "AMQP",
    5800: "VNC-HTTP",
    5900: "VNC",
    5985: "WinRM",
    5986: "WinRM-HTTPS",
    6000: "X11",
    6379: "Redis",
    6443: "Kubernetes",
    7000: "Cassandra",
    7001: "Cassandra-SSL",
    8000: "HTTP-Alt",
    8008: "HTTP-Alt",
    8080: "HTTP-Alt",
    8081: "HTTP-Alt",
    8086: "InfluxDB",
    8123: "Home-Assistant",
    8443: "HTTPS-Alt",
    8883: "MQTT-TLS",
    8888: "HTTP-Alt",
    9000: "HTTP-Alt",
    9042: "Cassandra-CQL",
    9090: "HTTP-Admin",
    9100: "JetDirect",
    9200: "Elasticsearch",
    9300: "Elasticsearch-Cluster",
    11211: "Memcached",
    27017: "MongoDB",
    27018: "MongoDB",
    27019: "MongoDB",
    32400: "Plex",
    49152: "UPnP",
    62078: "iPhone-Sync",
    # Backdoor / trojan ports
    1243: "SubSeven",
    1337: "Elite/Backdoor",
    1999: "BackDoor",
    2001: "Trojan.Cow",
    6666: "IRC/Botnet",
    6667: "IRC/Botnet",
    6668: "IRC/Botnet",
    6669: "IRC/Botnet",
    12345: "NetBus",
    12346: "NetBus",
    27374: "SubSeven",
    30100: "NetSphere",
    30101: "NetSphere",
    30102: "NetSphere",
    31337: "Back Orifice",
    54321: "Back Orifice 2000",
}


def get_service_name(port: int) -> str:
    """Return the canonical service name for *port*, or ``"Unknown"``."""
    return SERVICE_NAMES.get(port, "Unknown")


# -- Port sets ---------------------------------------------------------------

BACKDOOR_PORTS: tuple[int, ...] = (1243, 1337, 6666, 6667, 12345, 27374, 31337, 54321)

QUICK_PORTS: tuple[int, ...] = (
    21, 22, 23, 25, 80, 110, 143, 443, 3306, 3389, 5432, 5900,
    8080, 8443, 31337, 12345, 6667,
)

COMMON_PORTS: tuple[int, ...] = (
    20, 21, 22, 23, 25, 53, 67, 68, 69, 80, 88, 110, 111, 119, 123, 135,
    137, 138, 139, 143, 161, 162, 389, 443, 445, 465, 514, 515, 548, 554,
    587, 631, 636, 873, 993, 995, 1080, 1194, 1433, 1434, 1521, 1723, 1883,
    1900, 2049, 2082, 2083, 2181, 2375, 2376, 3000, 3128, 3306, 3389, 3690,
    4369, 5000, 5001, 5060, 5222, 5353, 5432, 5555, 5672, 5800, 5900, 5985,
    5986, 6000, 6379, 6443, 7000, 7001, 8000, 8008, 8080, 8081, 8086, 8123,
    8443, 8883, 8888, 9000, 9042, 9090, 9100, 9200, 9300, 11211, 27017,
    32400, 49152, 62078,
) + BACKDOOR_PORTS

EXTENDED_PORTS: tuple[int, ...] = (
    1999, 2001, 3268, 5223, 5269, 6001, 6668, 6669, 8082, 9001, 9091,
    12346, 27015, 27016, 27018, 27019, 30100, 30101, 30102, 50000, 50001,
)


def _ordered_unique(ports: Iterable[int]) -> list[int]:
    return sorted(set(ports))


def ports_for_mode(mode: ScanMode | str) -> list[int]:
    """Return the sorted port working set for *mode*."""
    mode = ScanMode(mode)
    if mode is ScanMode.QUICK:
        return _ordered_unique(QUICK_PORTS)
    if mode is ScanMode.COMMON:
        return _ordered_unique(COMMON_PORTS)
    if mode is ScanMode.STANDARD:
        return _ordered_unique(list(range(1, 1025)) + list(BACKDOOR_PORTS))
    if mode is ScanMode.FULL:
        return _ordered_unique(COMMON_PORTS + EXTENDED_PORTS)
    return list(range(1, 65536))


def validate_ports(ports: Iterable[int]) -> list[int]:
    """Validate a custom port list and return it sorted and deduplicated.

    Raises
    ------
    ConfigurationError:
        If the list is empty or contains a value outside 1-65535.
    """
    result: set[int] = set()
    for port in ports:
        if isinstance(port, bool) or not isinstance(port, int):
            raise ConfigurationError(f"port must be an integer, got {port!r}")
        if not 1 <= port <= 65535:
            raise ConfigurationError(f"port out of range: {port}")
        result.add(port)
    if not result:
        raise ConfigurationError("port set must not be empty")
    return sorted(result)


def parse_port_spec(spec: str) -> list[int]:
    """Parse ``"22,80,8000-8010"`` into a validated port list."""
    ports: list[int] = []
    for chunk in spec.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            if "-" in chunk:
                low, high = (int(part) for part in chunk.split("-", 1))
                if low > high:
                    raise ConfigurationError(f"invalid port range: {chunk}")
                ports.extend(range(low, high + 1))
            else:
                ports.append(int(chunk))
        except ValueError as exc:
            raise ConfigurationError(f"invalid port spec: {chunk!r}") from exc
    return validate_ports(ports)
