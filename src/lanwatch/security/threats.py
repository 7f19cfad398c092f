"""Threat analysis over a completed device inventory.

``analyze_device`` turns one device into a list of ``ThreatFinding``
values using a small knowledge base of risky ports; ``summarize`` rolls
findings for the whole network into a ``NetworkThreatSummary`` with an
overall 0-100 risk score (100 = no findings).

Everything here is a pure function of the inventory.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable

from lanwatch.models import Device
from lanwatch.scanner.banner import find_vulnerabilities
from lanwatch.scanner.ports import get_service_name
from lanwatch.security.severity import Severity


class ThreatCategory(enum.Enum):
    BACKDOOR = "backdoor"
    EXPOSED_SERVICE = "exposed_service"
    WEAK_SECURITY = "weak_security"
    MISCONFIGURATION = "misconfiguration"
    ROGUE_DEVICE = "rogue_device"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"
    DATA_EXPOSURE = "data_exposure"
    DENIAL_OF_SERVICE = "denial_of_service"


# -- Port knowledge base ------------------------------------------------------

BACKDOOR_PORTS: dict[int, str] = {
    31337: "Back Orifice",
    12345: "NetBus",
    12346: "NetBus",
    1243: "SubSeven",
    6667: "IRC botnet C&C",
    6668: "IRC botnet C&C",
    6669: "IRC botnet C&C",
    27374: "SubSeven",
    2001: "Trojan.Cow",
    1999: "BackDoor",
    30100: "NetSphere",
    30101: "NetSphere",
    30102: "NetSphere",
    5000: "Blazer5 / Bubbel",
    5001: "Back Door Setup",
    5002: "Shaft",
}
BACKDOOR_PORT_SET = frozenset(BACKDOOR_PORTS)

REMOTE_ACCESS_PORTS = frozenset({22, 23, 3389, 5900, 5901, 5902, 5800, 5801, 5802})
VNC_PORTS = frozenset(range(5900, 5911))
SMB_PORTS = frozenset({139, 445})
DATABASE_PORTS = frozenset({
    3306, 5432, 1433, 1434, 27017, 27018, 27019, 6379, 9042, 7000, 7001, 8086,
})


@dataclass(frozen=True)
class ThreatFinding:
    """A single security finding on one device."""

    ip_address: str
    title: str
    description: str
    remediation: str
    severity: Severity
    category: ThreatCategory
    cvss: float
    port: int | None = None
    cve: str | None = None


@dataclass
class NetworkThreatSummary:
    """Network-wide roll-up of threat findings."""

    total_devices: int
    findings: list[ThreatFinding] = field(default_factory=list)
    rogue_devices: list[str] = field(default_factory=list)
    backdoor_devices: list[str] = field(default_factory=list)
    exposed_services: list[tuple[str, int, str]] = field(default_factory=list)

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity == severity)

    @property
    def critical_count(self) -> int:
        return self.count(Severity.CRITICAL)

    @property
    def high_count(self) -> int:
        return self.count(Severity.HIGH)

    @property
    def medium_count(self) -> int:
        return self.count(Severity.MEDIUM)

    @property
    def low_count(self) -> int:
        return self.count(Severity.LOW)

    @property
    def total_risk(self) -> int:
        return sum(f.severity.risk_weight for f in self.findings)

    @property
    def risk_score(self) -> int:
        """0-100, where 100 means no weighted findings at all."""
        if self.total_devices == 0:
            return 100
        max_risk = self.total_devices * 50
        score = 100 - (self.total_risk / max_risk) * 100
        return max(0, int(score))

    @property
    def risk_level(self) -> str:
        score = self.risk_score
        if score >= 90:
            return "Low"
        if score >= 70:
            return "Moderate"
        if score >= 40:
            return "High"
        return "Critical"


# -- Analysis -----------------------------------------------------------------

def analyze_device(device: Device) -> list[ThreatFinding]:
    """Evaluate one device against the threat knowledge base.

    Findings are ordered from most to least severe; ties keep rule order.
    """
    ip = device.ip_address
    ports = device.port_numbers
    findings: list[ThreatFinding] = []

    if device.is_rogue:
        findings.append(ThreatFinding(
            ip_address=ip,
            title="Rogue device",
            description=(
                "An unrecognized device joined the network recently and is not "
                "on the known-device list."
            ),
            remediation="Identify the device owner, then allowlist it or remove it from the network.",
            severity=Severity.CRITICAL,
            category=ThreatCategory.ROGUE_DEVICE,
            cvss=9.0,
        ))

    for port in sorted(ports & BACKDOOR_PORT_SET):
        trojan = BACKDOOR_PORTS[port]
        findings.append(ThreatFinding(
            ip_address=ip,
            title=f"Backdoor port {port} open",
            description=f"Port {port} is commonly used by {trojan}. This may indicate a compromised host.",
            remediation="Isolate the device, run a malware scan and identify the listening process.",
            severity=Severity.CRITICAL,
            category=ThreatCategory.BACKDOOR,
            cvss=10.0,
            port=port,
        ))

    if 23 in ports:
        findings.append(ThreatFinding(
            ip_address=ip,
            title="Telnet service exposed",
            description="Telnet sends credentials and session data in plaintext.",
            remediation="Disable Telnet and use SSH instead.",
            severity=Severity.CRITICAL,
            category=ThreatCategory.WEAK_SECURITY,
            cvss=9.8,
            port=23,
        ))

    if 21 in ports:
        findings.append(ThreatFinding(
            ip_address=ip,
            title="FTP service exposed",
            description="FTP sends credentials and files in plaintext.",
            remediation="Replace FTP with SFTP or FTPS.",
            severity=Severity.HIGH,
            category=ThreatCategory.WEAK_SECURITY,
            cvss=7.5,
            port=21,
        ))

    if 80 in ports and 443 not in ports:
        findings.append(ThreatFinding(
            ip_address=ip,
            title="Unencrypted web interface",
            description="HTTP is available without an HTTPS alternative.",
            remediation="Enable HTTPS and redirect HTTP traffic to it.",
            severity=Severity.MEDIUM,
            category=ThreatCategory.MISCONFIGURATION,
            cvss=5.3,
            port=80,
        ))

    for port in sorted(ports & VNC_PORTS):
        findings.append(ThreatFinding(
            ip_address=ip,
            title=f"VNC exposed on port {port}",
            description="VNC often uses weak authentication and unencrypted sessions.",
            remediation="Restrict VNC to a VPN or tunnel it over SSH.",
            severity=Severity.HIGH,
            category=ThreatCategory.EXPOSED_SERVICE,
            cvss=8.1,
            port=port,
        ))

    if 3389 in ports:
        findings.append(ThreatFinding(
            ip_address=ip,
            title="Remote Desktop exposed",
            description="RDP is a frequent target for brute-force attacks and wormable exploits.",
            remediation="Enable Network Level Authentication and restrict RDP to a VPN.",
            severity=Severity.HIGH,
            category=ThreatCategory.EXPOSED_SERVICE,
            cvss=8.1,
            port=3389,
            cve="CVE-2019-0708",
        ))

    for port in sorted(ports & SMB_PORTS):
        findings.append(ThreatFinding(
            ip_address=ip,
            title=f"SMB file sharing on port {port}",
            description="SMB has a history of wormable vulnerabilities.",
            remediation="Disable SMBv1 and restrict file sharing to trusted hosts.",
            severity=Severity.HIGH,
            category=ThreatCategory.EXPOSED_SERVICE,
            cvss=8.1,
            port=port,
            cve="CVE-2017-0144",
        ))

    remote = sorted(ports & REMOTE_ACCESS_PORTS)
    if len(remote) > 2:
        findings.append(ThreatFinding(
            ip_address=ip,
            title="Multiple remote access services",
            description=f"{len(remote)} remote access services are running ({', '.join(map(str, remote))}).",
            remediation="Keep a single, encrypted remote access method and disable the rest.",
            severity=Severity.HIGH,
            category=ThreatCategory.SUSPICIOUS_ACTIVITY,
            cvss=7.0,
        ))

    for port in sorted(ports & DATABASE_PORTS):
        findings.append(ThreatFinding(
            ip_address=ip,
            title=f"{get_service_name(port)} database exposed",
            description=f"Database port {port} is reachable from the local network.",
            remediation="Bind the database to localhost or restrict access with a firewall.",
            severity=Severity.CRITICAL,
            category=ThreatCategory.DATA_EXPOSURE,
            cvss=9.8,
            port=port,
        ))

    for info in device.open_ports:
        if info.product and info.version:
            for note in find_vulnerabilities(info.product, info.version):
                findings.append(ThreatFinding(
                    ip_address=ip,
                    title=f"Vulnerable {info.product} {info.version}",
                    description=note,
                    remediation=f"Upgrade {info.product} to a supported release.",
                    severity=Severity.HIGH,
                    category=ThreatCategory.WEAK_SECURITY,
                    cvss=7.5,
                    port=info.port,
                ))

    findings.sort(key=lambda f: f.severity, reverse=True)
    return findings


def summarize(devices: Iterable[Device]) -> NetworkThreatSummary:
    """Analyze every device and build the network-wide summary."""
    devices = list(devices)
    summary = NetworkThreatSummary(total_devices=len(devices))
    for device in devices:
        findings = analyze_device(device)
        summary.findings.extend(findings)
        if device.is_rogue:
            summary.rogue_devices.append(device.ip_address)
        if device.port_numbers & BACKDOOR_PORT_SET:
            summary.backdoor_devices.append(device.ip_address)
        for finding in findings:
            if finding.category is ThreatCategory.EXPOSED_SERVICE and finding.port is not None:
                summary.exposed_services.append(
                    (device.ip_address, finding.port, get_service_name(finding.port))
                )
    return summary
