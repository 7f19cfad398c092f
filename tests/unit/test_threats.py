"""Unit tests for threat analysis and the network summary."""
from __future__ import annotations

import pytest

from lanwatch.models import Device, PortInfo
from lanwatch.security.severity import Severity
from lanwatch.security.threats import (
    NetworkThreatSummary,
    ThreatCategory,
    ThreatFinding,
    analyze_device,
    summarize,
)


def _device(*ports: int, ip: str = "10.0.0.5", **kwargs) -> Device:
    return Device(ip_address=ip, open_ports=[PortInfo(port=p) for p in ports], **kwargs)


class TestAnalyzeDevice:
    """Per-device rules against the port knowledge base."""

    def test_clean_device_has_no_findings(self) -> None:
        assert analyze_device(_device(443)) == []

    def test_rogue_device_is_critical(self) -> None:
        findings = analyze_device(_device(is_rogue=True))
        assert len(findings) == 1
        assert findings[0].category is ThreatCategory.ROGUE_DEVICE
        assert findings[0].severity == Severity.CRITICAL

    def test_backdoor_port(self) -> None:
        findings = analyze_device(_device(31337))
        assert findings[0].category is ThreatCategory.BACKDOOR
        assert findings[0].port == 31337
        assert "Back Orifice" in findings[0].description

    def test_telnet_and_ftp(self) -> None:
        findings = analyze_device(_device(21, 23))
        assert [(f.port, f.severity) for f in findings] == [
            (23, Severity.CRITICAL),
            (21, Severity.HIGH),
        ]

    def test_http_without_https(self) -> None:
        findings = analyze_device(_device(80))
        assert [f.severity for f in findings] == [Severity.MEDIUM]
        assert analyze_device(_device(80, 443)) == []

    def test_rdp_and_smb_carry_cves(self) -> None:
        findings = analyze_device(_device(445, 3389))
        cves = {f.port: f.cve for f in findings}
        assert cves[3389] == "CVE-2019-0708"
        assert cves[445] == "CVE-2017-0144"

    def test_vnc_range(self) -> None:
        findings = analyze_device(_device(5900, 5905))
        vnc = [f for f in findings if f.title.startswith("VNC")]
        assert [f.port for f in vnc] == [5900, 5905]

    def test_many_remote_access_services(self) -> None:
        findings = analyze_device(_device(22, 3389, 5900))
        assert any(f.category is ThreatCategory.SUSPICIOUS_ACTIVITY for f in findings)
        assert not any(
            f.category is ThreatCategory.SUSPICIOUS_ACTIVITY for f in analyze_device(_device(22, 3389))
        )

    def test_database_exposure(self) -> None:
        findings = analyze_device(_device(3306, 6379))
        data = [f for f in findings if f.category is ThreatCategory.DATA_EXPOSURE]
        assert [f.port for f in data] == [3306, 6379]
        assert all(f.severity == Severity.CRITICAL for f in data)

    def test_vulnerable_banner_version(self) -> None:
        device = Device(
            ip_address="10.0.0.5",
            open_ports=[PortInfo(port=8443, product="Apache", version="2.4.49")],
        )
        findings = analyze_device(device)
        assert len(findings) == 1
        assert "CVE-2021-41773" in findings[0].description

    def test_findings_sorted_by_severity(self) -> None:
        findings = analyze_device(_device(21, 80, 23, 3306, is_rogue=True))
        severities = [f.severity for f in findings]
        assert severities == sorted(severities, reverse=True)
        assert findings[0].category is ThreatCategory.ROGUE_DEVICE


class TestSummary:
    def test_empty_network(self) -> None:
        summary = summarize([])
        assert summary.risk_score == 100
        assert summary.risk_level == "Low"

    def test_counts_and_lists(self) -> None:
        devices = [
            _device(31337, ip="10.0.0.2"),
            _device(5900, ip="10.0.0.3", is_rogue=True),
            _device(443, ip="10.0.0.4"),
        ]
        summary = summarize(devices)
        assert summary.total_devices == 3
        assert summary.backdoor_devices == ["10.0.0.2"]
        assert summary.rogue_devices == ["10.0.0.3"]
        assert summary.exposed_services == [("10.0.0.3", 5900, "VNC")]
        assert summary.critical_count == 2
        assert summary.high_count == 1

    @pytest.mark.parametrize(
        ("severities", "devices", "score", "level"),
        [
            ([], 1, 100, "Low"),
            ([Severity.MEDIUM], 1, 96, "Low"),
            ([Severity.CRITICAL], 1, 80, "Moderate"),
            ([Severity.CRITICAL] * 3, 1, 40, "High"),
            ([Severity.CRITICAL] * 6, 1, 0, "Critical"),
            ([Severity.INFO] * 10, 1, 100, "Low"),
        ],
    )
    def test_risk_score(self, severities, devices, score, level) -> None:
        findings = [_finding(severity) for severity in severities]
        summary = NetworkThreatSummary(total_devices=devices, findings=findings)
        assert summary.risk_score == score
        assert summary.risk_level == level


def _finding(severity: Severity) -> ThreatFinding:
    return ThreatFinding(
        ip_address="10.0.0.1",
        title="t",
        description="d",
        remediation="r",
        severity=severity,
        category=ThreatCategory.MISCONFIGURATION,
        cvss=1.0,
    )
