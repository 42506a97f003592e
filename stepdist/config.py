"""
Localization Configuration
The filter parameters bundle handed to the engine when localization starts.

Usage:
    from stepdist.config import LocalizationConfig

    config = LocalizationConfig.from_dict({
        "distanceFilter": 5.0,
        "accuracyFilter": 10.0,
        "perpendicularDistanceFilter": 0.0001,
        "locationsSequenceFilter": 8,
        "locationsSequenceDistanceFilter": 100.0,
    })

    # or from a YAML profile
    config = LocalizationConfig.from_yaml("config/localization.yaml", "urban")
"""

import math
import yaml
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .exceptions import ConfigurationError


# Host bundle key -> dataclass field
BUNDLE_KEYS = {
    "distanceFilter": "distance_filter",
    "accuracyFilter": "accuracy_filter",
    "perpendicularDistanceFilter": "perpendicular_distance_filter",
    "locationsSequenceFilter": "locations_sequence_filter",
    "locationsSequenceDistanceFilter": "locations_sequence_distance_filter",
}


@dataclass(frozen=True)
class LocalizationConfig:
    """Filter parameters for one localization session.

    All parameters are required and immutable once the session starts.

    Attributes:
        distance_filter: Minimum movement (m) before the location source
            reports a new fix. Used by the location source only.
        accuracy_filter: Maximum accepted horizontal accuracy (m). Fixes
            with a worse rounded accuracy are discarded.
        perpendicular_distance_filter: Maximum deviation (degrees) of a fix
            from the fitted line for it to count as on path.
        locations_sequence_filter: Maximum number of recent fixes used for
            the line fit. At least 2.
        locations_sequence_distance_filter: Straight-line distance (m) a
            segment must cover before a calibration commits.
    """
    distance_filter: float
    accuracy_filter: float
    perpendicular_distance_filter: float
    locations_sequence_filter: int
    locations_sequence_distance_filter: float

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "locations_sequence_filter":
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigurationError(f"{f.name} must be an integer, got {value!r}")
                if value < 2:
                    raise ConfigurationError(f"{f.name} must be at least 2, got {value}")
                continue

            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{f.name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(f"{f.name} must be finite and >= 0, got {value}")
            object.__setattr__(self, f.name, float(value))

    @classmethod
    def from_dict(cls, bundle: Mapping[str, Any]) -> "LocalizationConfig":
        """
        Build a configuration from a host bundle.

        Args:
            bundle: Mapping with the camelCase host keys (distanceFilter, ...)
                    or the snake_case field names

        Returns:
            LocalizationConfig instance

        Raises:
            ConfigurationError: If a parameter is missing or has a bad value
        """
        if not isinstance(bundle, Mapping):
            raise ConfigurationError(f"Expected a mapping, got {type(bundle).__name__}")

        values: Dict[str, Any] = {}
        missing = []
        for bundle_key, field_name in BUNDLE_KEYS.items():
            if bundle_key in bundle:
                values[field_name] = bundle[bundle_key]
            elif field_name in bundle:
                values[field_name] = bundle[field_name]
            else:
                missing.append(bundle_key)

        if missing:
            raise ConfigurationError(f"Missing localization parameters: {missing}")

        return cls(**values)

    @classmethod
    def from_yaml(
        cls,
        filepath: Union[str, Path],
        profile: str = "default",
    ) -> "LocalizationConfig":
        """
        Load a named profile from a YAML configuration file.

        Args:
            filepath: Path to the YAML file
            profile: Name of the top-level profile to load

        Returns:
            LocalizationConfig instance
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        with open(filepath, 'r') as f:
            config = yaml.safe_load(f) or {}

        if profile not in config:
            available = list(config.keys())
            raise ConfigurationError(
                f"Profile '{profile}' not found. "
                f"Available: {available}"
            )

        return cls.from_dict(config[profile])

    def to_dict(self) -> Dict[str, Any]:
        """Render the configuration with the host bundle keys."""
        return {
            bundle_key: getattr(self, field_name)
            for bundle_key, field_name in BUNDLE_KEYS.items()
        }
