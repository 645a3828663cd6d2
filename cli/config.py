"""Configuration loader for the dwhprov CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULTS = {
    "project_name": "dwhprov",
    "default_format": "json",
    "region": "us-east-1",
    "availability_zones": None,
    "discover_availability_zones": False,
    "log_level": "WARNING",
}


@dataclass(slots=True)
class Settings:
    project_name: str = DEFAULTS["project_name"]
    default_format: str = DEFAULTS["default_format"]
    region: str = DEFAULTS["region"]
    availability_zones: list[str] | None = DEFAULTS["availability_zones"]
    discover_availability_zones: bool = DEFAULTS["discover_availability_zones"]
    log_level: str = DEFAULTS["log_level"]
    parameters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Settings":
        zones = data.get("availability_zones", DEFAULTS["availability_zones"])
        if zones is not None and not isinstance(zones, list):
            raise ValueError("availability_zones must be a list of zone names.")
        parameters = data.get("parameters") or {}
        if not isinstance(parameters, dict):
            raise ValueError("parameters must be a mapping of parameter names to values.")
        return cls(
            project_name=data.get("project_name", DEFAULTS["project_name"]),
            default_format=data.get("default_format", DEFAULTS["default_format"]),
            region=data.get("region", DEFAULTS["region"]),
            availability_zones=[str(zone) for zone in zones] if zones is not None else None,
            discover_availability_zones=bool(
                data.get("discover_availability_zones", DEFAULTS["discover_availability_zones"])
            ),
            log_level=str(data.get("log_level", DEFAULTS["log_level"])).upper(),
            parameters=dict(parameters),
        )

    def merge_cli(
        self,
        format_override: str | None = None,
        region: str | None = None,
        log_level: str | None = None,
    ) -> "Settings":
        return Settings(
            project_name=self.project_name,
            default_format=format_override or self.default_format,
            region=region or self.region,
            availability_zones=self.availability_zones,
            discover_availability_zones=self.discover_availability_zones,
            log_level=(log_level or self.log_level).upper(),
            parameters=dict(self.parameters),
        )

    def zones(self) -> list[str]:
        """Configured zones, or the first two lettered zones of the region."""
        if self.availability_zones:
            return list(self.availability_zones)
        return [f"{self.region}a", f"{self.region}b"]


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError("Configuration file must be a mapping of keys to values.")

    return Settings.from_mapping(data)


def load_parameter_file(path: Path) -> dict[str, Any]:
    """Read a YAML (or JSON) mapping of parameter values."""
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of parameter names to values.")
    return data


__all__ = ["Settings", "load_parameter_file", "load_settings"]
