"""
Scoring engine service layer.

This module provides one stateless entry point that an API handler or a
batch job can call with already-fetched records:

1. Scores each relationship's interactions against the current baseline
2. Aggregates the category scores into a headline compatibility score
3. Adds the flag-ratio estimate where flag stats exist, and pattern warnings
4. Scores boundary alignment with the baseline
5. Derives notification cards and deal-breaker alerts

The engine holds only configuration. Every call recomputes from scratch,
and the reference time is always an argument.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .records.schema import (
    Baseline,
    Boundary,
    Interaction,
    Relationship,
    parse_timestamp,
)
from .scoring import (
    ScoringConfig,
    score_categories,
    aggregate_overall,
    score_boundary_alignment,
    score_flag_ratio,
    score_flag_balance,
    summarize_relationships,
)
from .notifications import (
    derive_notifications,
    derive_deal_breaker_alerts,
    derive_pattern_warnings,
)

logger = logging.getLogger(__name__)


class BoundarySpaceEngine:
    """
    Compatibility scoring engine.

    Attributes:
        config: ScoringConfig used by every scorer
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Scoring configuration; defaults to the built-in constants
        """
        self.config = config or ScoringConfig()
        self.config.validate()
        logger.info(
            f"Initialized BoundarySpaceEngine "
            f"(notification capacity={self.config.notification_capacity})"
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "BoundarySpaceEngine":
        """Create from main config dictionary."""
        return cls(ScoringConfig.from_config(config))

    def analyze_relationship(
        self,
        relationship: Relationship,
        interactions: Sequence[Interaction],
        baseline: Optional[Baseline],
        now: Optional[datetime] = None,
        dismissed_warnings: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """
        Score one relationship.

        Args:
            relationship: The relationship to score
            interactions: Interactions belonging to this relationship
            baseline: The user's current baseline
            now: Reference time bounding the pattern-warning window
            dismissed_warnings: Pattern-warning ids already dismissed

        Returns:
            Dictionary with `insights`, `overall`, and `flag_ratio` /
            `flag_balance` when the relationship has stats. `status` is
            "no_baseline" or "no_interactions" when the category scorer
            has nothing to work with, otherwise "scored". `warnings` holds
            pattern warnings, which need no baseline.
        """
        insights = score_categories(interactions, baseline, relationship.name, self.config)
        overall = aggregate_overall(insights, self.config)

        if baseline is None:
            status = "no_baseline"
        elif not interactions:
            status = "no_interactions"
        else:
            status = "scored"

        result = {
            "id": relationship.id,
            "name": relationship.name,
            "relationship_type": relationship.relationship_type,
            "status": status,
            "interaction_count": len(interactions),
            "insights": [insight.to_dict() for insight in insights],
            "overall": overall.to_dict(),
            "warnings": [
                w.to_dict() for w in derive_pattern_warnings(
                    relationship, interactions, now, dismissed_warnings
                )
            ],
        }
        if relationship.stats is not None:
            result["flag_ratio"] = score_flag_ratio(relationship.stats, self.config).to_dict()
            result["flag_balance"] = score_flag_balance(relationship.stats).to_dict()
        return result

    def analyze_user(
        self,
        baseline: Optional[Baseline],
        relationships: Sequence[Relationship],
        interactions: Sequence[Interaction],
        boundaries: Sequence[Boundary],
        now: Optional[datetime] = None,
        dismissed_alerts: Optional[Iterable[str]] = None,
        dismissed_warnings: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """
        Build the full scoring report for one user.

        Args:
            baseline: Current baseline (None if the assessment is incomplete)
            relationships: The user's relationships
            interactions: Interactions across all relationships
            boundaries: The user's standalone boundaries
            now: Reference time for time-based rules; without it the daily
                check-in and deal-breaker alerts are skipped
            dismissed_alerts: Deal-breaker alert ids already dismissed
            dismissed_warnings: Pattern-warning ids already dismissed

        Returns:
            JSON-serialisable report dictionary
        """
        now = parse_timestamp(now)
        relationships = list(relationships or [])
        interactions = list(interactions or [])
        dismissed_warnings = list(dismissed_warnings or [])

        by_relationship: Dict[Any, List[Interaction]] = {rel.id: [] for rel in relationships}
        for interaction in interactions:
            if interaction.relationship_id in by_relationship:
                by_relationship[interaction.relationship_id].append(interaction)

        relationship_reports = [
            self.analyze_relationship(
                rel, by_relationship[rel.id], baseline, now, dismissed_warnings
            )
            for rel in relationships
        ]

        alignment = score_boundary_alignment(boundaries or [], baseline, self.config)
        notifications = derive_notifications(
            interactions, relationships, self.config.notification_capacity, now
        )
        if now is not None:
            alerts = derive_deal_breaker_alerts(
                interactions, baseline, now,
                window_days=self.config.deal_breaker_window_days,
                dismissed=dismissed_alerts,
            )
        else:
            alerts = []

        logger.info(
            f"Analyzed {len(relationships)} relationships, {len(interactions)} interactions: "
            f"{len(notifications)} notifications, {len(alerts)} deal-breaker alerts"
        )

        return {
            "generated_for": now.isoformat() if now else None,
            "baseline_complete": baseline is not None,
            "relationships": relationship_reports,
            "boundary_alignment": alignment.to_dict() if alignment else None,
            "summary": summarize_relationships(relationships, self.config),
            "notifications": [n.to_dict() for n in notifications],
            "deal_breaker_alerts": [a.to_dict() for a in alerts],
        }


def create_engine(config: Optional[Dict[str, Any]] = None) -> BoundarySpaceEngine:
    """
    Factory function to create a BoundarySpaceEngine.

    Args:
        config: Main configuration dictionary (as loaded from YAML), or None
            for the built-in defaults

    Returns:
        Configured BoundarySpaceEngine instance
    """
    if config is None:
        return BoundarySpaceEngine()
    return BoundarySpaceEngine.from_config(config)
