"""Unit tests for framework compliance checks."""
from __future__ import annotations

from lanwatch.models import Device, PortInfo
from lanwatch.security.compliance import (
    ComplianceCheck,
    ComplianceChecker,
    ComplianceReport,
    check_limited_exposure,
    check_ssh_current,
)
from lanwatch.security.severity import Severity


def _device(*ports: int, ip: str = "10.0.0.5") -> Device:
    return Device(ip_address=ip, open_ports=[PortInfo(port=p) for p in ports])


def _check(passed: bool, severity: Severity = Severity.MEDIUM, check_id: str = "X") -> ComplianceCheck:
    return ComplianceCheck(check_id=check_id, framework="CIS", title="t", severity=severity, passed=passed)


class TestChecks:
    def test_clean_network_passes_everything(self) -> None:
        report = ComplianceChecker().run([_device(443, ip="10.0.0.1"), _device(ip="10.0.0.2")])
        assert report.total == 6
        assert report.passed == 6
        assert report.score == 100
        assert report.status == "Compliant"
        assert report.grade == "A"

    def test_report_order(self) -> None:
        report = ComplianceChecker().run([])
        assert [c.check_id for c in report.checks] == [
            "CIS-1.1", "CIS-1.2", "CIS-2.1", "NIST-AC-3", "PCI-2.2.3", "CIS-9.2",
        ]

    def test_telnet_fails_two_controls(self) -> None:
        report = ComplianceChecker().run([_device(23, ip="10.0.0.9"), _device(ip="10.0.0.1")])
        failed = {c.check_id: c.affected for c in report.checks if not c.passed}
        assert failed == {"CIS-1.1": ("10.0.0.9",), "PCI-2.2.3": ("10.0.0.9",)}
        assert report.critical_failures == 2
        # 4 of 6 passed
        assert report.score == 66
        assert report.status == "Partially Compliant"
        assert report.grade == "D"

    def test_backdoor_control(self) -> None:
        report = ComplianceChecker().run([_device(12345, ip="10.0.0.3"), _device(ip="10.0.0.4")])
        backdoor = next(c for c in report.checks if c.check_id == "CIS-9.2")
        assert not backdoor.passed
        assert backdoor.affected == ("10.0.0.3",)

    def test_outdated_ssh_from_banner(self) -> None:
        old = Device(
            ip_address="10.0.0.7",
            open_ports=[PortInfo(port=22, banner="SSH-2.0-OpenSSH_7.4p1 Debian")],
        )
        current = Device(
            ip_address="10.0.0.8",
            open_ports=[PortInfo(port=22, product="OpenSSH", version="9.6")],
        )
        check = check_ssh_current([old, current])
        assert not check.passed
        assert check.affected == ("10.0.0.7",)

    def test_ssh_without_version_passes(self) -> None:
        assert check_ssh_current([_device(22)]).passed

    def test_limited_exposure_threshold(self) -> None:
        three_of_four = [_device(80, ip=f"10.0.0.{i}") for i in range(1, 4)] + [_device(ip="10.0.0.4")]
        check = check_limited_exposure(three_of_four)
        assert not check.passed
        assert len(check.affected) == 3

        half = [_device(80, ip="10.0.0.1"), _device(ip="10.0.0.2")]
        check = check_limited_exposure(half)
        assert check.passed
        assert check.affected == ()

    def test_limited_exposure_empty_network(self) -> None:
        assert check_limited_exposure([]).passed


class TestReport:
    def test_empty_report(self) -> None:
        report = ComplianceReport()
        assert report.score == 100
        assert report.grade == "A"

    def test_thresholds(self) -> None:
        checks = [_check(True)] * 3 + [_check(False)]
        report = ComplianceReport(checks=checks)
        assert report.score == 75
        assert report.status == "Mostly Compliant"
        assert report.grade == "C"

        report = ComplianceReport(checks=[_check(False)] * 2 + [_check(True)])
        assert report.score == 33
        assert report.status == "Non-Compliant"
        assert report.grade == "F"

    def test_failures_sorted_by_severity(self) -> None:
        report = ComplianceReport(checks=[
            _check(False, Severity.LOW, "a"),
            _check(True, Severity.CRITICAL, "b"),
            _check(False, Severity.CRITICAL, "c"),
            _check(False, Severity.MEDIUM, "d"),
        ])
        assert [c.check_id for c in report.failures()] == ["c", "d", "a"]
