"""
Per-category compatibility scoring for one relationship.

Scores a relationship's interaction log against the user's baseline in
five fixed categories:

    Communication Style:  100 * respected / n
    Boundary Respect:     100 * respected / n
    Trigger Management:   100 * avoided / n
    Energy Impact:        clamp(0, 100, (mean(after - before) + 5) * 10)
    Self-Worth Impact:    clamp(0, 100, (mean(after - before) + 5) * 10)

The impact transform maps a mean change of -5 to 0, 0 to 50 and +5 to 100.
Missing before/after values default to the scale midpoint (5), so partly
filled records do not drag scores down.

An empty interaction log (or missing baseline) yields no insights at all
rather than five zero scores.
"""

import logging
from typing import List, Optional, Sequence, Callable

import numpy as np

from ..records.schema import (
    Baseline,
    Interaction,
    CompatibilityCategory,
    CompatibilityInsight,
    number_or,
)
from .thresholds import ScoringConfig, DEFAULT_CONFIG, SCALE_MIDPOINT

logger = logging.getLogger(__name__)


def ratio_score(flags: Sequence[bool]) -> float:
    """
    Percentage of truthy flags.

    Args:
        flags: One flag per interaction

    Returns:
        Score in [0, 100]; 0.0 for an empty sequence
    """
    if len(flags) == 0:
        return 0.0
    # multiply before dividing so whole percentages stay exact
    return float(100.0 * np.count_nonzero(np.asarray(flags, dtype=bool)) / len(flags))


def mean_change(
    interactions: Sequence[Interaction],
    before: Callable[[Interaction], Optional[float]],
    after: Callable[[Interaction], Optional[float]],
) -> float:
    """
    Mean of after - before over interactions, reading missing or unusable
    values (None, NaN, non-numeric) as 5.

    Returns 0.0 for an empty sequence.
    """
    if len(interactions) == 0:
        return 0.0
    changes = np.array([
        number_or(after(i), SCALE_MIDPOINT) - number_or(before(i), SCALE_MIDPOINT)
        for i in interactions
    ], dtype=float)
    return float(changes.mean())


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(np.floor(value + 0.5))


def impact_score(change: float) -> float:
    """Rescale a mean change on the 1-10 scale to a clamped 0-100 score."""
    if np.isnan(change):
        change = 0.0
    return float(np.clip((change + 5.0) * 10.0, 0.0, 100.0))


def _signed(value: float) -> str:
    return f"+{value:.1f}" if value > 0 else f"{value:.1f}"


def _communication_insight(
    interactions: Sequence[Interaction],
    baseline: Baseline,
    relationship_name: str,
    config: ScoringConfig,
) -> CompatibilityInsight:
    score = ratio_score([i.communication_style_respected for i in interactions])
    if score < config.communication.good:
        recommendation = (
            f"Consider discussing your {baseline.communication_style.value} "
            f"communication preference with {relationship_name}"
        )
    else:
        recommendation = "Your communication styles are well-aligned"
    return CompatibilityInsight(
        category=CompatibilityCategory.COMMUNICATION_STYLE,
        score=score,
        status=config.communication.classify(score),
        insight=f"Your communication style is respected in {score:.0f}% of interactions",
        recommendation=recommendation,
    )


def _boundary_insight(
    interactions: Sequence[Interaction],
    config: ScoringConfig,
) -> CompatibilityInsight:
    score = ratio_score([i.boundaries_respected for i in interactions])
    if score < config.boundary_respect.good:
        recommendation = (
            "This relationship shows concerning patterns of boundary violations "
            "that need addressing"
        )
    else:
        recommendation = "Your boundaries are generally well-respected"
    return CompatibilityInsight(
        category=CompatibilityCategory.BOUNDARY_RESPECT,
        score=score,
        status=config.boundary_respect.classify(score),
        insight=f"Your boundaries are respected in {score:.0f}% of interactions",
        recommendation=recommendation,
    )


def _trigger_insight(
    interactions: Sequence[Interaction],
    relationship_name: str,
    config: ScoringConfig,
) -> CompatibilityInsight:
    score = ratio_score([i.triggers_avoided for i in interactions])
    if score < config.trigger.good:
        recommendation = (
            f"Share your trigger list with {relationship_name} to improve emotional safety"
        )
    else:
        recommendation = "Your emotional triggers are well-managed in this relationship"
    return CompatibilityInsight(
        category=CompatibilityCategory.TRIGGER_MANAGEMENT,
        score=score,
        status=config.trigger.classify(score),
        insight=f"Your emotional triggers are avoided in {score:.0f}% of interactions",
        recommendation=recommendation,
    )


def _energy_insight(
    interactions: Sequence[Interaction],
    config: ScoringConfig,
) -> CompatibilityInsight:
    change = mean_change(interactions, lambda i: i.energy_before, lambda i: i.energy_after)
    score = impact_score(change)
    if change > 0:
        insight = f"This relationship energizes you ({_signed(change)} average energy change)"
    else:
        insight = f"This relationship drains your energy ({_signed(change)} average energy change)"
    if change < -1:
        recommendation = (
            "Consider limiting time or changing interaction patterns to protect your energy"
        )
    else:
        recommendation = "This relationship has a positive or neutral energy impact"
    return CompatibilityInsight(
        category=CompatibilityCategory.ENERGY_IMPACT,
        score=score,
        status=config.energy.classify(score),
        insight=insight,
        recommendation=recommendation,
    )


def _self_worth_insight(
    interactions: Sequence[Interaction],
    config: ScoringConfig,
) -> CompatibilityInsight:
    change = mean_change(
        interactions, lambda i: i.self_worth_before, lambda i: i.self_worth_after
    )
    score = impact_score(change)
    if change > 0:
        insight = f"This relationship boosts your self-worth ({_signed(change)} average)"
    else:
        insight = (
            f"This relationship impacts your self-worth negatively ({_signed(change)} average)"
        )
    if change < -1:
        recommendation = (
            "This relationship may be damaging to your self-esteem and needs careful evaluation"
        )
    else:
        recommendation = "This relationship supports or maintains your self-worth"
    return CompatibilityInsight(
        category=CompatibilityCategory.SELF_WORTH_IMPACT,
        score=score,
        status=config.self_worth.classify(score),
        insight=insight,
        recommendation=recommendation,
    )


def score_categories(
    interactions: Sequence[Interaction],
    baseline: Optional[Baseline],
    relationship_name: str,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> List[CompatibilityInsight]:
    """
    Compute one CompatibilityInsight per category for a relationship.

    Args:
        interactions: The relationship's interaction log (may be empty)
        baseline: The user's current baseline
        relationship_name: Used only in messages
        config: Scoring configuration (thresholds)

    Returns:
        Five insights in the order Communication Style, Boundary Respect,
        Trigger Management, Energy Impact, Self-Worth Impact; an empty
        list when there are no interactions or no baseline
    """
    if not interactions or baseline is None:
        return []

    insights = [
        _communication_insight(interactions, baseline, relationship_name, config),
        _boundary_insight(interactions, config),
        _trigger_insight(interactions, relationship_name, config),
        _energy_insight(interactions, config),
        _self_worth_insight(interactions, config),
    ]
    logger.debug(
        f"Scored {len(interactions)} interactions for {relationship_name}: "
        + ", ".join(f"{i.category.value}={i.score:.1f}" for i in insights)
    )
    return insights
