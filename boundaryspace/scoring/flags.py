"""
Flag-based relationship scoring.

Used where baseline and interaction data are unavailable but aggregate
green/red flag counts exist per relationship.

Flag-ratio formula:
    flag_ratio = round(100 * green / (green + red))    (50 when no flags)
    score      = round(0.7 * flag_ratio + 0.3 * safety_rating * 10)
                 or flag_ratio when no safety rating is recorded

Flag balance (health tracker):
    health     = green - red
    percentage = clamp(0, 100, (health + 20) * 2.5)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..records.schema import (
    Relationship,
    RelationshipStats,
    FlagRatioResult,
    FlagBalance,
    number_or,
    optional_number,
)
from .thresholds import ScoringConfig, DEFAULT_CONFIG, FLAG_RATIO_LABELS
from .categories import round_half_up

logger = logging.getLogger(__name__)

HEALTHY_SCORE = 70
CONCERNING_SCORE = 40


def _flag_counts(stats: RelationshipStats):
    """Green and red counts, with negative or unusable values read as 0."""
    green = max(int(number_or(stats.green_flags, 0)), 0)
    red = max(int(number_or(stats.red_flags, 0)), 0)
    return green, red


def score_flag_ratio(
    stats: RelationshipStats,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> FlagRatioResult:
    """
    Compatibility estimate from green/red flag counts and safety rating.

    Args:
        stats: Flag counts and optional average safety rating (1-10)
        config: Scoring configuration (weights, neutral ratio, tiers)

    Returns:
        FlagRatioResult with score, flag ratio, label and color tier
    """
    green, red = _flag_counts(stats)
    total = green + red

    if total > 0:
        flag_ratio = round_half_up(100.0 * green / total)
    else:
        flag_ratio = config.neutral_flag_ratio

    rating = optional_number(stats.average_safety_rating)
    used_safety = rating is not None
    if used_safety:
        score = round_half_up(
            flag_ratio * config.flag_weight + rating * 10 * config.safety_weight
        )
        score = int(np.clip(score, 0, 100))
    else:
        score = flag_ratio

    label, tier = FLAG_RATIO_LABELS[config.flag_ratio.classify(score)]
    return FlagRatioResult(
        score=score,
        flag_ratio=flag_ratio,
        label=label,
        tier=tier,
        used_safety_rating=used_safety,
    )


def score_flag_balance(stats: RelationshipStats) -> FlagBalance:
    """
    Green-minus-red balance shown by the relationship health tracker.

    Returns:
        FlagBalance with the raw balance, a clamped 0-100 percentage and a label
    """
    green, red = _flag_counts(stats)
    health = green - red
    percentage = float(np.clip((health + 20) * 2.5, 0.0, 100.0))

    if health >= 5:
        label = "Going Well"
    elif health >= 0:
        label = "Balanced"
    elif health >= -3:
        label = "Mixed Signals"
    else:
        label = "Needs Attention"

    return FlagBalance(health_score=health, percentage=percentage, label=label)


def summarize_relationships(
    relationships: Sequence[Relationship],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> Optional[Dict[str, Any]]:
    """
    Compare flag-ratio scores across relationships.

    Relationships without stats are scored from empty stats (neutral).

    Args:
        relationships: The user's relationships
        config: Scoring configuration

    Returns:
        Dictionary with per-relationship scores, healthy/concerning counts,
        the average score and the healthiest / most problematic relationship
        names; None when there are no relationships
    """
    if not relationships:
        return None

    scored: List[Dict[str, Any]] = []
    for rel in relationships:
        result = score_flag_ratio(rel.stats or RelationshipStats(), config)
        scored.append({"id": rel.id, "name": rel.name, **result.to_dict()})

    scores = np.array([s["score"] for s in scored], dtype=float)
    # first occurrence wins on ties, so input order decides
    healthiest = scored[int(np.argmax(scores))]
    most_problematic = scored[int(np.argmin(scores))]

    return {
        "relationships": scored,
        "total_relationships": len(scored),
        "healthy_relationships": int(np.sum(scores >= HEALTHY_SCORE)),
        "concerning_relationships": int(np.sum(scores < CONCERNING_SCORE)),
        "average_score": float(scores.mean()),
        "healthiest": healthiest["name"],
        "most_problematic": most_problematic["name"],
    }
