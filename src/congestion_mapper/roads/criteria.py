"""Road congestion criteria configuration management."""

from pathlib import Path
from typing import List, Optional

import yaml
from loguru import logger

from ..core.errors import ConfigurationError


class RoadCriteria:
    """Parse and manage road congestion scoring criteria."""

    # Congestion multiplier by road class (major roads are more congested)
    DEFAULT_CLASS_MULTIPLIERS = {
        'motorway': 1.3,
        'trunk': 1.3,
        'primary': 1.3,
        'secondary': 1.1,
        'tertiary': 1.1,
    }

    # Free-flow speed by road class (km/h)
    DEFAULT_BASE_SPEEDS = {
        'motorway': 120,
        'trunk': 100,
        'primary': 80,
        'secondary': 60,
        'tertiary': 50,
        'residential': 30,
    }
    DEFAULT_BASE_SPEED = 40

    DEFAULT_SCORING = {
        'speed_reduction': 0.8,  # speed = base * (1 - congestion * reduction)
        'jitter': 0.2,           # congestion *= uniform(1 - jitter, 1 + jitter)
    }

    DEFAULT_TILEQUERY = {
        'radius': 500,
        'limit': 5,
        'layer': 'road',
        'timeout': 10,
    }

    DEFAULT_SYNTHETIC = {
        'min_length': 200,
        'max_length': 1000,
        'points': 5,
        'lateral_jitter': 20,  # meters
        'road_class': 'street',
        'name_templates': [
            'King Fahd Road',
            'Olaya Street',
            'Tahlia Street',
            'King Abdullah Road',
            'Makkah Road',
            'Northern Ring Road',
            'Eastern Ring Road',
            'Al Imam Saud Road',
        ],
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize road criteria.

        Args:
            config_file: Path to YAML config file. If None, uses defaults.
        """
        self.class_multipliers = self.DEFAULT_CLASS_MULTIPLIERS.copy()
        self.base_speeds = self.DEFAULT_BASE_SPEEDS.copy()
        self.default_base_speed = self.DEFAULT_BASE_SPEED
        self.scoring = self.DEFAULT_SCORING.copy()
        self.tilequery = self.DEFAULT_TILEQUERY.copy()
        self.synthetic = dict(self.DEFAULT_SYNTHETIC)
        self.synthetic['name_templates'] = list(self.DEFAULT_SYNTHETIC['name_templates'])

        if config_file:
            self._load_config(config_file)

        self._validate()

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'RoadCriteria':
        """
        Load criteria from YAML file, falling back to defaults if it is missing.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            RoadCriteria instance
        """
        yaml_file = Path(yaml_path)

        if not yaml_file.exists():
            logger.warning("Road criteria file not found: {}; using defaults", yaml_path)
            return cls()

        return cls(config_file=yaml_path)

    def _load_config(self, config_file: str):
        """Load configuration from YAML file."""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        try:
            with open(config_path) as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file: {e}")

        if not isinstance(config, dict):
            raise ConfigurationError(f"Road criteria must be a mapping: {config_file}")

        if 'class_multipliers' in config:
            self.class_multipliers.update(config['class_multipliers'])

        if 'base_speeds' in config:
            speeds = dict(config['base_speeds'])
            self.default_base_speed = speeds.pop('default', self.default_base_speed)
            self.base_speeds.update(speeds)

        if 'scoring' in config:
            self.scoring.update(config['scoring'])

        if 'tilequery' in config:
            self.tilequery.update(config['tilequery'])

        if 'synthetic' in config:
            self.synthetic.update(config['synthetic'])

    def _validate(self):
        if self.synthetic['min_length'] > self.synthetic['max_length']:
            raise ConfigurationError("synthetic.min_length must not exceed max_length")
        if self.synthetic['points'] < 2:
            raise ConfigurationError("synthetic.points must be at least 2")
        if not self.synthetic['name_templates']:
            raise ConfigurationError("synthetic.name_templates must not be empty")
        if not 0 <= self.scoring['jitter'] < 1:
            raise ConfigurationError("scoring.jitter must be within [0, 1)")

    def get_class_multiplier(self, road_class: Optional[str]) -> float:
        """Get congestion multiplier for a road class (1.0 for minor roads)."""
        return self.class_multipliers.get(road_class, 1.0)

    def get_base_speed(self, road_class: Optional[str]) -> float:
        """Get free-flow speed for a road class in km/h."""
        return self.base_speeds.get(road_class, self.default_base_speed)

    def estimate_speed(self, road_class: Optional[str], congestion_level: float) -> float:
        """Estimated travel speed under a congestion level."""
        reduction = self.scoring['speed_reduction']
        return self.get_base_speed(road_class) * (1 - congestion_level * reduction)

    @property
    def jitter(self) -> float:
        return self.scoring['jitter']

    @property
    def name_templates(self) -> List[str]:
        return self.synthetic['name_templates']

