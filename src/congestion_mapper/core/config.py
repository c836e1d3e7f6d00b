"""Configuration management for congestion-mapper."""

import configparser
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError


class Config:
    """Parse and manage application configuration."""

    DATASET_SOURCES = ("default", "custom")

    # Default dataset locations (used if no config file provided)
    DEFAULT_DATASET = {
        "source": "default",
        "default_path": "data/riyadh_hexagons.geojson",
        "custom_path": "data/custom_hexagons.geojson",
    }

    # Default analysis parameters
    DEFAULT_ANALYSIS = {
        "metric": "mean_conge",
        "hotspot_metric": "mean_conge",
        "hotspot_threshold": 0.5,
        "max_hotspots": 20,
        "search_radius": 500,
        "result_limit": 10,
        "max_workers": 1,
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to INI file. If None, uses defaults.
        """
        self.dataset = self.DEFAULT_DATASET.copy()
        self.analysis = self.DEFAULT_ANALYSIS.copy()

        if config_file:
            self._load_config(config_file)

        self._validate()

    def _load_config(self, config_file: str):
        """Load configuration from INI file."""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        parser = configparser.ConfigParser()
        try:
            parser.read(config_path)
        except configparser.Error as e:
            raise ConfigurationError(f"Invalid config file {config_file}: {e}")

        if 'dataset' in parser:
            for key, value in parser['dataset'].items():
                self.dataset[key] = value.strip()

        if 'analysis' in parser:
            for key, value in parser['analysis'].items():
                self.analysis[key] = self._coerce(key, value.strip())

    def _coerce(self, key: str, value: str):
        """Convert INI strings to the type of the matching default."""
        default = self.DEFAULT_ANALYSIS.get(key)
        try:
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
        except ValueError:
            raise ConfigurationError(
                f"Invalid value for analysis.{key}: {value!r}"
            )
        return value

    def _validate(self):
        if self.dataset["source"] not in self.DATASET_SOURCES:
            raise ConfigurationError(
                f"Unknown dataset source: {self.dataset['source']}. "
                f"Valid options: {', '.join(self.DATASET_SOURCES)}"
            )
        if self.analysis["max_workers"] < 1:
            raise ConfigurationError("analysis.max_workers must be at least 1")

    @property
    def dataset_source(self) -> str:
        return self.dataset["source"]

    def get_dataset_path(self, source: Optional[str] = None) -> Path:
        """
        Get dataset path for a source (defaults to the configured source).

        Raises:
            ConfigurationError: If the source is unknown
        """
        source = source or self.dataset_source
        if source not in self.DATASET_SOURCES:
            raise ConfigurationError(f"Unknown dataset source: {source}")
        return Path(self.dataset[f"{source}_path"])

    def get(self, key: str, default=None):
        """Get an analysis parameter."""
        return self.analysis.get(key, default)

