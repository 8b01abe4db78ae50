"""
Threshold sets and scoring configuration.

Every scorer buckets its 0-100 score with its own named threshold set.
The sets look alike numerically but key different downstream treatments,
so they are kept independent:

    Communication Style / Trigger Management:  80 / 60 / 40
    Boundary Respect:                          90 / 70 / 50
    Energy Impact / Self-Worth Impact:         70 / 55 / 40
    Overall compatibility (headline):          80 / 60 / 40
    Flag-ratio tiers:                          80 / 60 / 40

A score >= `excellent` is excellent, >= `good` is good, >= `concerning`
is concerning, anything lower is poor.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any
import json

from ..records.schema import InsightStatus, CompatibilityCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThresholdSet:
    """Lower bounds for the excellent / good / concerning buckets."""
    excellent: float
    good: float
    concerning: float

    def classify(self, score: float) -> InsightStatus:
        """Bucket a score into a status."""
        if score >= self.excellent:
            return InsightStatus.EXCELLENT
        if score >= self.good:
            return InsightStatus.GOOD
        if score >= self.concerning:
            return InsightStatus.CONCERNING
        return InsightStatus.POOR

    def validate(self, name: str) -> None:
        for bound in (self.excellent, self.good, self.concerning):
            if not 0 <= bound <= 100:
                raise ValueError(f"{name} thresholds must be in [0, 100], got {bound}")
        if not self.excellent >= self.good >= self.concerning:
            raise ValueError(
                f"{name} thresholds must be descending: "
                f"{self.excellent} / {self.good} / {self.concerning}"
            )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any], default: "ThresholdSet") -> "ThresholdSet":
        return cls(
            excellent=d.get("excellent", default.excellent),
            good=d.get("good", default.good),
            concerning=d.get("concerning", default.concerning),
        )


COMMUNICATION_THRESHOLDS = ThresholdSet(80, 60, 40)
BOUNDARY_RESPECT_THRESHOLDS = ThresholdSet(90, 70, 50)
TRIGGER_THRESHOLDS = ThresholdSet(80, 60, 40)
ENERGY_THRESHOLDS = ThresholdSet(70, 55, 40)
SELF_WORTH_THRESHOLDS = ThresholdSet(70, 55, 40)
OVERALL_THRESHOLDS = ThresholdSet(80, 60, 40)
FLAG_RATIO_THRESHOLDS = ThresholdSet(80, 60, 40)

OVERALL_LABELS = {
    InsightStatus.EXCELLENT: "Highly Compatible",
    InsightStatus.GOOD: "Moderately Compatible",
    InsightStatus.CONCERNING: "Some Compatibility Issues",
    InsightStatus.POOR: "Low Compatibility",
}

FLAG_RATIO_LABELS = {
    InsightStatus.EXCELLENT: ("Excellent Match", "green"),
    InsightStatus.GOOD: ("Good Match", "blue"),
    InsightStatus.CONCERNING: ("Fair Match", "yellow"),
    InsightStatus.POOR: ("Poor Match", "red"),
}

# Threshold set names, as used in config files
THRESHOLD_NAMES = (
    "communication",
    "boundary_respect",
    "trigger",
    "energy",
    "self_worth",
    "overall",
    "flag_ratio",
)

# Neutral midpoint of the 1-10 energy / self-worth scales
SCALE_MIDPOINT = 5.0

# Boundaries at or above this importance (1-10) are non-negotiable
NON_NEGOTIABLE_IMPORTANCE = 8

# Cap on simultaneously active notification cards
NOTIFICATION_CAPACITY = 2

DEAL_BREAKER_WINDOW_DAYS = 30


@dataclass
class ScoringConfig:
    """
    Configuration for all scorers.

    Defaults reproduce the production constants, so scorers can be
    called without any configuration.

    Attributes:
        communication ... flag_ratio: Threshold set per scorer
        flag_weight: Weight of the green-flag ratio in the flag scorer
        safety_weight: Weight of the scaled safety rating in the flag scorer
        neutral_flag_ratio: Flag ratio used when no flags are recorded
        non_negotiable_importance: Importance cutoff for non-negotiable boundaries
        min_word_length: Shortest title word used for word-level matching
        notification_capacity: Maximum active notifications
        deal_breaker_window_days: Look-back window for deal-breaker alerts
    """
    communication: ThresholdSet = COMMUNICATION_THRESHOLDS
    boundary_respect: ThresholdSet = BOUNDARY_RESPECT_THRESHOLDS
    trigger: ThresholdSet = TRIGGER_THRESHOLDS
    energy: ThresholdSet = ENERGY_THRESHOLDS
    self_worth: ThresholdSet = SELF_WORTH_THRESHOLDS
    overall: ThresholdSet = OVERALL_THRESHOLDS
    flag_ratio: ThresholdSet = FLAG_RATIO_THRESHOLDS
    flag_weight: float = 0.7
    safety_weight: float = 0.3
    neutral_flag_ratio: int = 50
    non_negotiable_importance: int = NON_NEGOTIABLE_IMPORTANCE
    min_word_length: int = 4
    notification_capacity: int = NOTIFICATION_CAPACITY
    deal_breaker_window_days: int = DEAL_BREAKER_WINDOW_DAYS

    def validate(self) -> None:
        """Validate configuration values."""
        for name in THRESHOLD_NAMES:
            getattr(self, name).validate(name)
        if abs(self.flag_weight + self.safety_weight - 1.0) > 0.01:
            raise ValueError(
                f"Flag ratio weights don't sum to 1: {self.flag_weight} + {self.safety_weight}"
            )
        if not 0 <= self.neutral_flag_ratio <= 100:
            raise ValueError(f"neutral_flag_ratio must be in [0, 100], got {self.neutral_flag_ratio}")
        if not 1 <= self.non_negotiable_importance <= 10:
            raise ValueError(
                f"non_negotiable_importance must be in [1, 10], got {self.non_negotiable_importance}"
            )
        if self.min_word_length < 1:
            raise ValueError(f"min_word_length must be positive, got {self.min_word_length}")
        if self.notification_capacity < 1:
            raise ValueError(
                f"notification_capacity must be positive, got {self.notification_capacity}"
            )
        if self.deal_breaker_window_days < 1:
            raise ValueError(
                f"deal_breaker_window_days must be positive, got {self.deal_breaker_window_days}"
            )

    def thresholds_for(self, category: CompatibilityCategory) -> ThresholdSet:
        """Threshold set used for a scoring category."""
        return {
            CompatibilityCategory.COMMUNICATION_STYLE: self.communication,
            CompatibilityCategory.BOUNDARY_RESPECT: self.boundary_respect,
            CompatibilityCategory.TRIGGER_MANAGEMENT: self.trigger,
            CompatibilityCategory.ENERGY_IMPACT: self.energy,
            CompatibilityCategory.SELF_WORTH_IMPACT: self.self_worth,
        }[category]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringConfig":
        """Create from dictionary (as produced by `to_dict`)."""
        defaults = cls()
        kwargs = dict(d)
        for name in THRESHOLD_NAMES:
            if name in kwargs and isinstance(kwargs[name], dict):
                kwargs[name] = ThresholdSet.from_dict(kwargs[name], getattr(defaults, name))
        return cls(**kwargs)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringConfig":
        """Create from main config dictionary."""
        defaults = cls()
        scoring = config.get("scoring", {}) or {}
        thresholds = scoring.get("thresholds", {}) or {}
        flag_config = scoring.get("flag_ratio", {}) or {}
        alignment_config = scoring.get("alignment", {}) or {}
        notification_config = config.get("notifications", {}) or {}

        threshold_sets = {
            name: ThresholdSet.from_dict(thresholds.get(name, {}) or {}, getattr(defaults, name))
            for name in THRESHOLD_NAMES
        }

        return cls(
            **threshold_sets,
            flag_weight=flag_config.get("flag_weight", defaults.flag_weight),
            safety_weight=flag_config.get("safety_weight", defaults.safety_weight),
            neutral_flag_ratio=flag_config.get("neutral_ratio", defaults.neutral_flag_ratio),
            non_negotiable_importance=alignment_config.get(
                "non_negotiable_importance", defaults.non_negotiable_importance
            ),
            min_word_length=alignment_config.get("min_word_length", defaults.min_word_length),
            notification_capacity=notification_config.get(
                "capacity", defaults.notification_capacity
            ),
            deal_breaker_window_days=notification_config.get(
                "deal_breaker_window_days", defaults.deal_breaker_window_days
            ),
        )

    def save(self, filepath: str) -> None:
        """Save to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved scoring config to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "ScoringConfig":
        """Load from JSON file."""
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)


DEFAULT_CONFIG = ScoringConfig()
