from pathlib import Path

import pytest
import yaml

from boundaryspace.configs import get_config_value, load_config, validate_config
from boundaryspace.records.schema import CompatibilityCategory, InsightStatus
from boundaryspace.scoring import ScoringConfig, ThresholdSet

CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "config.yaml"


def test_shipped_config_is_valid_and_matches_defaults():
    config = load_config(str(CONFIG_PATH))
    assert validate_config(config) == []
    assert ScoringConfig.from_config(config) == ScoringConfig()


def test_missing_and_empty_config_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    with pytest.raises(ValueError):
        load_config(str(empty))


def test_validate_reports_bad_values():
    config = {
        "scoring": {
            "thresholds": {
                "energy": {"excellent": 50, "good": 60, "concerning": 40},
                "mood": {"excellent": 80},
                "trigger": {"excellent": 120, "good": 60, "concerning": 40},
            },
            "flag_ratio": {"flag_weight": 0.8, "safety_weight": 0.3},
            "alignment": {"non_negotiable_importance": 12},
        },
        "notifications": {"capacity": 0},
    }
    issues = validate_config(config)

    assert "Missing section: global (defaults will be used)" in issues
    assert any("energy must be descending" in i for i in issues)
    assert "Unknown threshold set: mood" in issues
    assert any("trigger must be in [0, 100]" in i for i in issues)
    assert any("don't sum to 1" in i for i in issues)
    assert any("non_negotiable_importance" in i for i in issues)
    assert any("capacity" in i for i in issues)


def test_from_config_overrides_partially():
    config = yaml.safe_load("""
scoring:
  thresholds:
    energy:
      good: 60
  alignment:
    non_negotiable_importance: 7
notifications:
  capacity: 3
""")
    scoring = ScoringConfig.from_config(config)

    assert scoring.energy == ThresholdSet(70, 60, 40)
    assert scoring.communication == ThresholdSet(80, 60, 40)
    assert scoring.non_negotiable_importance == 7
    assert scoring.notification_capacity == 3
    assert scoring.deal_breaker_window_days == 30
    assert scoring.thresholds_for(CompatibilityCategory.ENERGY_IMPACT).classify(58) is InsightStatus.CONCERNING


def test_scoring_config_validate_rejects_bad_sets():
    with pytest.raises(ValueError):
        ScoringConfig(overall=ThresholdSet(40, 60, 80)).validate()
    with pytest.raises(ValueError):
        ScoringConfig(flag_weight=0.5, safety_weight=0.2).validate()
    with pytest.raises(ValueError):
        ScoringConfig(notification_capacity=0).validate()


def test_scoring_config_save_load(tmp_path):
    original = ScoringConfig(boundary_respect=ThresholdSet(95, 75, 55), min_word_length=5)
    path = tmp_path / "scoring.json"
    original.save(str(path))
    assert ScoringConfig.load(str(path)) == original


def test_threshold_boundaries_are_inclusive():
    thresholds = ThresholdSet(90, 70, 50)
    assert thresholds.classify(90) is InsightStatus.EXCELLENT
    assert thresholds.classify(89.9) is InsightStatus.GOOD
    assert thresholds.classify(50) is InsightStatus.CONCERNING
    assert thresholds.classify(49.9) is InsightStatus.POOR


def test_get_config_value():
    config = {"scoring": {"thresholds": {"energy": {"good": 55}}}}
    assert get_config_value(config, "scoring.thresholds.energy.good") == 55
    assert get_config_value(config, "scoring.flag_ratio.flag_weight", 0.7) == 0.7


def test_get_config_value_treats_blank_keys_as_absent():
    config = {"global": {"log_level": None}, "notifications": None}
    assert get_config_value(config, "global.log_level", "INFO") == "INFO"
    assert get_config_value(config, "notifications.capacity", 10) == 10
