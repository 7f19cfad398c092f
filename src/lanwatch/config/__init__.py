"""Configuration loader for lanwatch.

Loads settings from a YAML file with built-in defaults. Supports environment
variable overrides using the LANWATCH_ prefix with double-underscore
nesting (e.g., LANWATCH_SCANNER__PORT_TIMEOUT=1.5).
"""

from __future__ import annotations

import os
import pathlib
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from lanwatch.models import ScanType
from lanwatch.scanner.ports import ScanMode


# ---------------------------------------------------------------------------
# Config sub-models
# ---------------------------------------------------------------------------

class ScannerConfig(BaseModel):
    mode: ScanMode = ScanMode.QUICK
    port_timeout: float = Field(default=1.5, gt=0)
    banner_timeout: float = Field(default=2.0, gt=0)
    max_concurrent_probes: int = Field(default=100, ge=1)
    max_concurrent_hosts: int = Field(default=10, ge=1)
    grab_banners: bool = True
    resolve_hostnames: bool = True


class DiscoveryConfig(BaseModel):
    subnet: str = "auto"
    known_timeout: float = Field(default=0.3, gt=0)
    common_timeout: float = Field(default=0.4, gt=0)
    sweep_timeout: float = Field(default=0.5, gt=0)
    max_concurrent_probes: int = Field(default=64, ge=1)
    liveness_ports: list[int] = Field(default_factory=lambda: [80, 443])
    arp_source: Literal["auto", "proc", "command", "scapy", "none"] = "auto"
    known_octets: list[int] | None = None


class ReputationConfig(BaseModel):
    rogue_window_minutes: int = Field(default=60, ge=0)


class UptimeConfig(BaseModel):
    max_observations: int = Field(default=1000, ge=1)
    unreliable_threshold: float = Field(default=90.0, ge=0, le=100)


class StorageConfig(BaseModel):
    backend: Literal["sqlite", "memory"] = "sqlite"
    data_dir: str = "./data"
    db_name: str = "lanwatch.db"

    @property
    def db_path(self) -> pathlib.Path:
        return pathlib.Path(self.data_dir) / self.db_name


class ScheduleConfig(BaseModel):
    name: str
    scan_type: ScanType = ScanType.QUICK
    interval_seconds: int = 3600
    enabled: bool = True


class SchedulerConfig(BaseModel):
    check_interval_seconds: int = Field(default=60, gt=0)
    defaults: list[ScheduleConfig] = Field(
        default_factory=lambda: [
            ScheduleConfig(name="Hourly Quick Scan", scan_type=ScanType.QUICK, interval_seconds=3600),
            ScheduleConfig(
                name="Daily Full Scan",
                scan_type=ScanType.FULL,
                interval_seconds=86400,
                enabled=False,
            ),
        ]
    )


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseModel):
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    reputation: ReputationConfig = Field(default_factory=ReputationConfig)
    uptime: UptimeConfig = Field(default_factory=UptimeConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    # MAC address -> friendly name
    known_devices: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Deep merge helper
# ---------------------------------------------------------------------------

def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into *base*, returning a new dict."""
    merged = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# ---------------------------------------------------------------------------
# Environment variable overrides
# ---------------------------------------------------------------------------

_ENV_PREFIX = "LANWATCH_"


def _coerce(value: str) -> Any:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def _collect_env_overrides() -> dict[str, Any]:
    """Collect LANWATCH_* env vars and build a nested dict.

    Double-underscore separates nesting levels.
    Example: LANWATCH_SCANNER__PORT_TIMEOUT=1.5
    becomes  {"scanner": {"port_timeout": 1.5}}
    """
    overrides: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        parts = key[len(_ENV_PREFIX) :].lower().split("__")
        current = overrides
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = _coerce(value)
    return overrides


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

_BUILTIN_DEFAULTS_PATH = pathlib.Path(__file__).resolve().parents[3] / "config" / "lanwatch_defaults.yaml"


def _read_yaml(path: pathlib.Path) -> dict[str, Any]:
    with open(path) as fh:
        data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def load_settings(
    config_path: pathlib.Path | None = None,
) -> Settings:
    """Load settings with layered precedence: defaults < file < persisted < env vars.

    Parameters
    ----------
    config_path:
        Path to a YAML config file. If ``None`` or the file does not exist,
        built-in defaults are used.
    """
    base: dict[str, Any] = {}

    path = config_path if config_path is not None else _BUILTIN_DEFAULTS_PATH
    if path.exists():
        base = _deep_merge(base, _read_yaml(path))

    # Persisted runtime config only applies when no explicit file is given
    if config_path is None:
        data_dir = base.get("storage", {}).get("data_dir", "./data")
        persisted_path = pathlib.Path(data_dir) / "config.yaml"
        if persisted_path.exists():
            base = _deep_merge(base, _read_yaml(persisted_path))

    env_overrides = _collect_env_overrides()
    if env_overrides:
        base = _deep_merge(base, env_overrides)

    return Settings(**base)
