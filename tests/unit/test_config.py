"""Tests for the configuration loader."""

import os
import pathlib

import pytest
import yaml

from lanwatch.config import (
    DiscoveryConfig,
    ScannerConfig,
    SchedulerConfig,
    Settings,
    StorageConfig,
    _BUILTIN_DEFAULTS_PATH,
    _coerce,
    _deep_merge,
    load_settings,
)
from lanwatch.models import ScanType
from lanwatch.scanner.ports import ScanMode


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: pathlib.Path):
    """No stray LANWATCH_* variables and no ./data/config.yaml from the caller."""
    for key in list(os.environ):
        if key.startswith("LANWATCH_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


class TestSettingsModels:
    """Verify that Pydantic config models have correct defaults."""

    def test_scanner_defaults(self) -> None:
        cfg = ScannerConfig()
        assert cfg.mode is ScanMode.QUICK
        assert cfg.port_timeout == 1.5
        assert cfg.banner_timeout == 2.0
        assert cfg.max_concurrent_probes == 100
        assert cfg.max_concurrent_hosts == 10
        assert cfg.grab_banners is True

    def test_discovery_defaults(self) -> None:
        cfg = DiscoveryConfig()
        assert cfg.subnet == "auto"
        assert (cfg.known_timeout, cfg.common_timeout, cfg.sweep_timeout) == (0.3, 0.4, 0.5)
        assert cfg.liveness_ports == [80, 443]
        assert cfg.arp_source == "auto"

    def test_storage_db_path(self) -> None:
        cfg = StorageConfig(data_dir="/var/lib/lanwatch")
        assert cfg.db_path == pathlib.Path("/var/lib/lanwatch/lanwatch.db")

    def test_default_schedules(self) -> None:
        defaults = SchedulerConfig().defaults
        assert [(s.name, s.scan_type, s.interval_seconds, s.enabled) for s in defaults] == [
            ("Hourly Quick Scan", ScanType.QUICK, 3600, True),
            ("Daily Full Scan", ScanType.FULL, 86400, False),
        ]

    def test_packaged_yaml_matches_model_defaults(self) -> None:
        data = yaml.safe_load(_BUILTIN_DEFAULTS_PATH.read_text())
        assert Settings(**data) == Settings()


class TestLoadSettings:
    def test_builtin_defaults(self) -> None:
        settings = load_settings()
        assert settings.reputation.rogue_window_minutes == 60
        assert settings.uptime.max_observations == 1000

    def test_explicit_file_overrides(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text(yaml.safe_dump({
            "scanner": {"mode": "full"},
            "known_devices": {"aa:bb:cc:dd:ee:ff": "NAS"},
        }))
        settings = load_settings(path)
        assert settings.scanner.mode is ScanMode.FULL
        # untouched keys keep model defaults
        assert settings.scanner.port_timeout == 1.5
        assert settings.known_devices == {"aa:bb:cc:dd:ee:ff": "NAS"}

    def test_missing_file_falls_back_to_defaults(self, tmp_path: pathlib.Path) -> None:
        assert load_settings(tmp_path / "nope.yaml") == Settings()

    def test_persisted_config_layered_over_defaults(self, tmp_path: pathlib.Path) -> None:
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "config.yaml").write_text("discovery:\n  subnet: 10.9.8\n")
        assert load_settings().discovery.subnet == "10.9.8"

    def test_persisted_config_ignored_with_explicit_file(self, tmp_path: pathlib.Path) -> None:
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "config.yaml").write_text("discovery:\n  subnet: 10.9.8\n")
        explicit = tmp_path / "explicit.yaml"
        explicit.write_text("scanner:\n  mode: quick\n")
        assert load_settings(explicit).discovery.subnet == "auto"

    def test_env_overrides_win(self, monkeypatch, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("scanner:\n  port_timeout: 3.0\n")
        monkeypatch.setenv("LANWATCH_SCANNER__PORT_TIMEOUT", "0.75")
        monkeypatch.setenv("LANWATCH_SCANNER__GRAB_BANNERS", "false")
        monkeypatch.setenv("LANWATCH_DISCOVERY__SUBNET", "10.0.0")
        monkeypatch.setenv("LANWATCH_SCANNER__MODE", "comprehensive")
        settings = load_settings(path)
        assert settings.scanner.port_timeout == 0.75
        assert settings.scanner.grab_banners is False
        assert settings.discovery.subnet == "10.0.0"
        assert settings.scanner.mode is ScanMode.COMPREHENSIVE

    @pytest.mark.parametrize(
        "text",
        [
            "storage:\n  backend: postgres\n",
            "discovery:\n  arp_source: magic\n",
            "scanner:\n  port_timeout: 0\n",
            "scanner:\n  max_concurrent_hosts: 0\n",
            "scanner:\n  mode: turbo\n",
            "uptime:\n  unreliable_threshold: 150\n",
        ],
    )
    def test_invalid_values_rejected(self, tmp_path: pathlib.Path, text: str) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(ValueError):
            load_settings(path)


class TestHelpers:
    def test_deep_merge_is_recursive_and_pure(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = _deep_merge(base, {"a": {"y": 3}, "c": 4})
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base == {"a": {"x": 1, "y": 2}, "b": 1}

    @pytest.mark.parametrize(
        "raw,value",
        [("42", 42), ("1.5", 1.5), ("TRUE", True), ("false", False), ("10.0.0", "10.0.0")],
    )
    def test_coerce(self, raw: str, value) -> None:
        assert _coerce(raw) == value
