"""
Deal-breaker alerts.

Every deal-breaker crossed in a recent interaction produces one alert.
Alerts are `high` severity when the deal-breaker is one of the baseline's
non-negotiable boundaries, `medium` otherwise.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from ..records.schema import (
    Baseline,
    Interaction,
    DealBreakerAlert,
    SuggestedAction,
    parse_timestamp,
)
from ..scoring.thresholds import DEAL_BREAKER_WINDOW_DAYS

logger = logging.getLogger(__name__)


def deal_breaker_severity(deal_breaker: str, baseline: Optional[Baseline]) -> str:
    """Severity of a crossed deal-breaker given the baseline."""
    if baseline is None or not baseline.non_negotiable_boundaries:
        return "medium"
    return "high" if deal_breaker in baseline.non_negotiable_boundaries else "medium"


def suggested_actions(deal_breaker: str) -> List[SuggestedAction]:
    """Follow-up steps for a crossed deal-breaker; always ends with an evaluation step."""
    text = deal_breaker.lower()
    actions = []
    if "communication" in text or "dismissive" in text:
        actions.append(SuggestedAction(
            type="communication",
            text="Have a direct conversation about communication needs",
        ))
    if "boundary" in text or "respect" in text:
        actions.append(SuggestedAction(
            type="boundary",
            text="Clearly restate your boundaries",
        ))
    actions.append(SuggestedAction(
        type="evaluation",
        text="Evaluate if this relationship aligns with your values",
    ))
    return actions


def derive_deal_breaker_alerts(
    interactions: Sequence[Interaction],
    baseline: Optional[Baseline],
    now: datetime,
    window_days: int = DEAL_BREAKER_WINDOW_DAYS,
    dismissed: Optional[Iterable[str]] = None,
) -> List[DealBreakerAlert]:
    """
    Build alerts for deal-breakers crossed within the look-back window.

    Args:
        interactions: Interactions to scan
        baseline: The user's current baseline (used for severity only)
        now: Reference time; interactions at or before now - window_days,
            or without a timestamp, are ignored
        window_days: Look-back window in days
        dismissed: Alert ids the user has already dismissed

    Returns:
        One alert per (interaction, deal-breaker), in input order
    """
    now = parse_timestamp(now)
    if now is None:
        return []
    cutoff = now - timedelta(days=window_days)
    dismissed = set(dismissed or [])

    alerts = []
    for interaction in interactions:
        if interaction.timestamp is None or interaction.timestamp <= cutoff:
            continue
        for deal_breaker in interaction.deal_breakers_crossed:
            alert_id = f"{interaction.id}-{deal_breaker}"
            if alert_id in dismissed:
                continue
            alerts.append(DealBreakerAlert(
                alert_id=alert_id,
                interaction_id=interaction.id,
                relationship_id=interaction.relationship_id,
                deal_breaker=deal_breaker,
                severity=deal_breaker_severity(deal_breaker, baseline),
                timestamp=interaction.timestamp,
                suggested_actions=suggested_actions(deal_breaker),
            ))

    if alerts:
        logger.info(f"{len(alerts)} deal-breaker alerts in the last {window_days} days")
    return alerts
