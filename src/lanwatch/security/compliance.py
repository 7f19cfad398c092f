"""Framework compliance checks over a device inventory.

Each check is a named control from a security framework (CIS, NIST,
PCI-DSS) evaluated against the whole inventory. The report carries
pass/fail counts, a 0-100 compliance score, a status label and a letter
grade.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable

from lanwatch.models import Device, utcnow
from lanwatch.security.severity import Severity
from lanwatch.security.threats import BACKDOOR_PORT_SET

_OPENSSH_VERSION_RE = re.compile(r"OpenSSH[_\s-]?(\d+)\.(\d+)", re.IGNORECASE)

# OpenSSH major versions at or below this are considered outdated
_OUTDATED_OPENSSH_MAJOR = 7


@dataclass(frozen=True)
class ComplianceCheck:
    """Result of one control evaluated against the inventory."""

    check_id: str
    framework: str
    title: str
    severity: Severity
    passed: bool
    affected: tuple[str, ...] = ()
    recommendation: str = ""


@dataclass
class ComplianceReport:
    checks: list[ComplianceCheck] = field(default_factory=list)
    generated_at: datetime = field(default_factory=utcnow)

    @property
    def total(self) -> int:
        return len(self.checks)

    @property
    def passed(self) -> int:
        return sum(1 for c in self.checks if c.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def critical_failures(self) -> int:
        return sum(1 for c in self.checks if not c.passed and c.severity == Severity.CRITICAL)

    @property
    def score(self) -> int:
        if self.total == 0:
            return 100
        return self.passed * 100 // self.total

    @property
    def status(self) -> str:
        score = self.score
        if score >= 90:
            return "Compliant"
        if score >= 75:
            return "Mostly Compliant"
        if score >= 50:
            return "Partially Compliant"
        return "Non-Compliant"

    @property
    def grade(self) -> str:
        score = self.score
        if score >= 90:
            return "A"
        if score >= 80:
            return "B"
        if score >= 70:
            return "C"
        if score >= 60:
            return "D"
        return "F"

    def failures(self) -> list[ComplianceCheck]:
        return sorted((c for c in self.checks if not c.passed), key=lambda c: c.severity, reverse=True)


def _devices_with_ports(devices: list[Device], ports: set[int] | frozenset[int]) -> tuple[str, ...]:
    return tuple(d.ip_address for d in devices if d.port_numbers & ports)


def _outdated_ssh(device: Device) -> bool:
    info = device.port_info(22)
    if info is None:
        return False
    text = " ".join(filter(None, (info.banner, info.product, info.version)))
    match = _OPENSSH_VERSION_RE.search(text)
    return match is not None and int(match.group(1)) <= _OUTDATED_OPENSSH_MAJOR


def check_telnet_disabled(devices: list[Device]) -> ComplianceCheck:
    affected = _devices_with_ports(devices, {23})
    return ComplianceCheck(
        check_id="CIS-1.1",
        framework="CIS",
        title="Telnet service disabled",
        severity=Severity.CRITICAL,
        passed=not affected,
        affected=affected,
        recommendation="Disable Telnet on all devices and use SSH for remote administration.",
    )


def check_ftp_disabled(devices: list[Device]) -> ComplianceCheck:
    affected = _devices_with_ports(devices, {21})
    return ComplianceCheck(
        check_id="CIS-1.2",
        framework="CIS",
        title="FTP service disabled",
        severity=Severity.HIGH,
        passed=not affected,
        affected=affected,
        recommendation="Replace FTP with SFTP or FTPS.",
    )


def check_ssh_current(devices: list[Device]) -> ComplianceCheck:
    affected = tuple(d.ip_address for d in devices if _outdated_ssh(d))
    return ComplianceCheck(
        check_id="CIS-2.1",
        framework="CIS",
        title="SSH server version current",
        severity=Severity.MEDIUM,
        passed=not affected,
        affected=affected,
        recommendation="Upgrade OpenSSH to version 8.0 or later.",
    )


def check_limited_exposure(devices: list[Device]) -> ComplianceCheck:
    exposed = tuple(d.ip_address for d in devices if d.open_ports)
    passed = len(exposed) < len(devices) * 3 / 4 if devices else True
    return ComplianceCheck(
        check_id="NIST-AC-3",
        framework="NIST",
        title="Network services limited to required devices",
        severity=Severity.MEDIUM,
        passed=passed,
        affected=() if passed else exposed,
        recommendation="Close services that are not needed and segment devices that must expose them.",
    )


def check_encrypted_admin(devices: list[Device]) -> ComplianceCheck:
    affected = _devices_with_ports(devices, {23, 80, 8080})
    return ComplianceCheck(
        check_id="PCI-2.2.3",
        framework="PCI-DSS",
        title="Administrative access encrypted",
        severity=Severity.CRITICAL,
        passed=not affected,
        affected=affected,
        recommendation="Serve administrative interfaces over HTTPS or SSH only.",
    )


def check_no_backdoors(devices: list[Device]) -> ComplianceCheck:
    affected = _devices_with_ports(devices, BACKDOOR_PORT_SET)
    return ComplianceCheck(
        check_id="CIS-9.2",
        framework="CIS",
        title="No known backdoor ports open",
        severity=Severity.CRITICAL,
        passed=not affected,
        affected=affected,
        recommendation="Isolate affected devices and investigate for compromise.",
    )


DEFAULT_CHECKS: tuple[Callable[[list[Device]], ComplianceCheck], ...] = (
    check_telnet_disabled,
    check_ftp_disabled,
    check_ssh_current,
    check_limited_exposure,
    check_encrypted_admin,
    check_no_backdoors,
)


class ComplianceChecker:
    """Runs a fixed set of framework checks over an inventory.

    Parameters
    ----------
    checks:
        Check functions to run, in report order.
    """

    def __init__(
        self,
        checks: Iterable[Callable[[list[Device]], ComplianceCheck]] = DEFAULT_CHECKS,
    ) -> None:
        self._checks = tuple(checks)

    def run(self, devices: Iterable[Device]) -> ComplianceReport:
        device_list = list(devices)
        return ComplianceReport(checks=[check(device_list) for check in self._checks])
