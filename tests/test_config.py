"""Tests for INI application config and YAML road criteria."""

from pathlib import Path

import pytest

from congestion_mapper.core.config import Config
from congestion_mapper.core.errors import ConfigurationError
from congestion_mapper.roads.criteria import RoadCriteria

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config"


class TestConfig:
    """Application settings from congestion_mapper.ini."""

    def test_defaults(self):
        config = Config()
        assert config.dataset_source == "default"
        assert config.get_dataset_path() == Path("data/riyadh_hexagons.geojson")
        assert config.get("hotspot_threshold") == 0.5
        assert config.get("max_workers") == 1
        assert config.get("missing", "fallback") == "fallback"

    def test_load_ini(self, tmp_path):
        path = tmp_path / "app.ini"
        path.write_text(
            "[dataset]\n"
            "source = custom\n"
            "custom_path = /data/mine.geojson\n"
            "\n"
            "[analysis]\n"
            "hotspot_threshold = 0.65\n"
            "max_hotspots = 5\n"
            "max_workers = 4\n"
            "metric = mean_speed\n"
        )
        config = Config(str(path))
        assert config.dataset_source == "custom"
        assert config.get_dataset_path() == Path("/data/mine.geojson")
        assert config.get_dataset_path("default") == Path("data/riyadh_hexagons.geojson")
        assert config.get("hotspot_threshold") == 0.65
        assert config.get("max_hotspots") == 5
        assert config.get("max_workers") == 4
        assert config.get("metric") == "mean_speed"

    def test_repository_config_loads(self):
        config = Config(str(REPO_CONFIG / "congestion_mapper.ini"))
        assert config.dataset_source in Config.DATASET_SOURCES

    def test_unknown_source(self, tmp_path):
        path = tmp_path / "app.ini"
        path.write_text("[dataset]\nsource = remote\n")
        with pytest.raises(ConfigurationError):
            Config(str(path))

    def test_bad_number(self, tmp_path):
        path = tmp_path / "app.ini"
        path.write_text("[analysis]\nmax_hotspots = many\n")
        with pytest.raises(ConfigurationError):
            Config(str(path))

    def test_zero_workers(self, tmp_path):
        path = tmp_path / "app.ini"
        path.write_text("[analysis]\nmax_workers = 0\n")
        with pytest.raises(ConfigurationError):
            Config(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "nope.ini"))

    def test_unknown_source_lookup(self):
        with pytest.raises(ConfigurationError):
            Config().get_dataset_path("remote")


class TestRoadCriteria:
    """Road scoring settings from road_criteria.yaml."""

    def test_defaults(self):
        criteria = RoadCriteria()
        assert criteria.get_class_multiplier("motorway") == 1.3
        assert criteria.get_class_multiplier("secondary") == 1.1
        assert criteria.get_class_multiplier("residential") == 1.0
        assert criteria.get_class_multiplier(None) == 1.0
        assert criteria.get_base_speed("primary") == 80
        assert criteria.get_base_speed("unknown") == 40
        assert criteria.jitter == 0.2
        assert len(criteria.name_templates) == 8

    def test_estimate_speed(self):
        criteria = RoadCriteria()
        assert criteria.estimate_speed("primary", 0.5) == pytest.approx(48)
        assert criteria.estimate_speed("service", 0.0) == 40

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "criteria.yaml"
        path.write_text(
            "class_multipliers:\n"
            "  residential: 0.9\n"
            "base_speeds:\n"
            "  default: 35\n"
            "  primary: 70\n"
            "scoring:\n"
            "  jitter: 0.0\n"
            "tilequery:\n"
            "  radius: 250\n"
            "synthetic:\n"
            "  name_templates: [Test Road]\n"
        )
        criteria = RoadCriteria.from_yaml(str(path))
        assert criteria.get_class_multiplier("residential") == 0.9
        assert criteria.get_class_multiplier("motorway") == 1.3
        assert criteria.get_base_speed("primary") == 70
        assert criteria.get_base_speed("unknown") == 35
        assert "default" not in criteria.base_speeds
        assert criteria.jitter == 0.0
        assert criteria.tilequery["radius"] == 250
        assert criteria.tilequery["limit"] == 5
        assert criteria.name_templates == ["Test Road"]

    def test_defaults_are_not_shared(self):
        first = RoadCriteria()
        first.name_templates.append("Extra Road")
        first.class_multipliers["street"] = 2.0
        second = RoadCriteria()
        assert "Extra Road" not in second.name_templates
        assert "street" not in second.class_multipliers

    def test_missing_yaml_uses_defaults(self, tmp_path, loguru_messages):
        criteria = RoadCriteria.from_yaml(str(tmp_path / "missing.yaml"))
        assert criteria.jitter == RoadCriteria.DEFAULT_SCORING["jitter"]
        assert loguru_messages

    def test_repository_yaml_loads(self):
        criteria = RoadCriteria.from_yaml(str(REPO_CONFIG / "road_criteria.yaml"))
        assert criteria.tilequery["layer"] == "road"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "criteria.yaml"
        path.write_text("scoring: [1, 2\n")
        with pytest.raises(ConfigurationError):
            RoadCriteria(str(path))

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / "criteria.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            RoadCriteria(str(path))

    @pytest.mark.parametrize("body", [
        "synthetic:\n  min_length: 900\n  max_length: 100\n",
        "synthetic:\n  points: 1\n",
        "synthetic:\n  name_templates: []\n",
        "scoring:\n  jitter: 1.5\n",
    ])
    def test_invalid_values(self, tmp_path, body):
        path = tmp_path / "criteria.yaml"
        path.write_text(body)
        with pytest.raises(ConfigurationError):
            RoadCriteria(str(path))
