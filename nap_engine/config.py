"""Configuration helpers for scoring weights and audit thresholds."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

from .models import NAPField

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Relative weight of each field in a citation's consistency score."""

    name: int = 30
    address: int = 40
    phone: int = 20
    website: int = 10

    def __post_init__(self) -> None:
        for nap_field in NAPField:
            value = getattr(self, nap_field.value)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(
                    f"Weight for '{nap_field.value}' must be a non-negative integer, got {value!r}"
                )
        if self.name <= 0:
            raise ConfigurationError("The name weight must be greater than zero")

    def weight_for(self, nap_field: NAPField) -> int:
        return getattr(self, nap_field.value)


@dataclass(frozen=True, slots=True)
class AuditSettings:
    """Thresholds used when aggregating analyzed citations."""

    weights: ScoringWeights = field(default_factory=ScoringWeights)
    consistent_threshold: int = 95
    management_service_threshold: int = 80


DEFAULT_WEIGHTS = ScoringWeights()
DEFAULT_SETTINGS = AuditSettings()


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid JSON: {exc}") from exc
    else:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - dependency optional
            raise ConfigurationError(
                "YAML configuration requires the 'pyyaml' package to be installed"
            ) from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Configuration file '{file_path}' is not valid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


def settings_from_config(config: Mapping[str, Any]) -> AuditSettings:
    """Build :class:`AuditSettings` from a configuration mapping.

    Every key is optional; missing entries keep their defaults.
    """

    weights_cfg = config.get("weights") or {}
    if not isinstance(weights_cfg, Mapping):
        raise ConfigurationError("'weights' must be a mapping of field name to weight")

    known_fields = {nap_field.value for nap_field in NAPField}
    unknown = sorted(set(weights_cfg) - known_fields)
    if unknown:
        raise ConfigurationError(f"Unknown weight field(s): {', '.join(unknown)}")

    weights = ScoringWeights(**{key: weights_cfg[key] for key in known_fields if key in weights_cfg})
    settings = AuditSettings(
        weights=weights,
        consistent_threshold=_read_threshold(config, "consistent_threshold", DEFAULT_SETTINGS.consistent_threshold),
        management_service_threshold=_read_threshold(
            config, "management_service_threshold", DEFAULT_SETTINGS.management_service_threshold
        ),
    )
    LOGGER.debug("Loaded audit settings %s", settings)
    return settings


def load_audit_settings(path: str | Path) -> AuditSettings:
    return settings_from_config(load_configuration(path))


def _read_threshold(config: Mapping[str, Any], key: str, default: int) -> int:
    value = config.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
        raise ConfigurationError(f"'{key}' must be an integer between 0 and 100, got {value!r}")
    return value


__all__ = [
    "AuditSettings",
    "ConfigurationError",
    "DEFAULT_SETTINGS",
    "DEFAULT_WEIGHTS",
    "ScoringWeights",
    "load_audit_settings",
    "load_configuration",
    "settings_from_config",
]
