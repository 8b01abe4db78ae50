"""
Per-relationship pattern warnings.

Looks at one relationship's recent interactions (the last 30 days when a
reference time is given, otherwise all of them) and flags patterns worth
acting on before the next encounter:

    energy_drain   more than 70% of recent interactions end over 3 points
                   below where they started                    (high)
    slow_recovery  2+ recent interactions end with energy below 4  (medium)

A relationship with fewer than 3 logged interactions never gets warnings.
Missing or unusable energy levels read as the scale midpoint (5) for the
drain check; the recovery check only counts recorded after-levels.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..records.schema import (
    Interaction,
    Relationship,
    PatternWarning,
    number_or,
    optional_number,
    parse_timestamp,
)
from ..scoring.thresholds import SCALE_MIDPOINT
from .templates import WARNING_TEMPLATES

logger = logging.getLogger(__name__)

Context = Dict[str, Any]
PatternRule = Callable[[List[Interaction]], Optional[Context]]

MIN_INTERACTIONS = 3
RECENT_WINDOW_DAYS = 30
DRAIN_DROP = 3
DRAIN_SHARE_PERCENT = 70
LOW_ENERGY_AFTER = 4
SLOW_RECOVERY_MIN = 2


def recent_interactions(
    interactions: Sequence[Interaction],
    now: Optional[datetime],
    window_days: int = RECENT_WINDOW_DAYS,
) -> List[Interaction]:
    """Interactions strictly inside the window; all of them without a clock."""
    if now is None:
        return list(interactions)
    cutoff = now - timedelta(days=window_days)
    return [i for i in interactions if i.timestamp is not None and i.timestamp > cutoff]


def detect_energy_drain(recent: List[Interaction]) -> Optional[Context]:
    drained = [
        i for i in recent
        if number_or(i.energy_after, SCALE_MIDPOINT)
        < number_or(i.energy_before, SCALE_MIDPOINT) - DRAIN_DROP
    ]
    # integer comparison keeps the 70% boundary exact
    if recent and 100 * len(drained) > DRAIN_SHARE_PERCENT * len(recent):
        return {"drained_count": len(drained), "recent_count": len(recent)}
    return None


def detect_slow_recovery(recent: List[Interaction]) -> Optional[Context]:
    low = [
        i for i in recent
        if optional_number(i.energy_after) is not None
        and optional_number(i.energy_after) < LOW_ENERGY_AFTER
    ]
    if len(low) >= SLOW_RECOVERY_MIN:
        return {"low_energy_count": len(low)}
    return None


PATTERN_RULES: List[Tuple[str, PatternRule]] = [
    ("energy_drain", detect_energy_drain),
    ("slow_recovery", detect_slow_recovery),
]


def derive_pattern_warnings(
    relationship: Relationship,
    interactions: Sequence[Interaction],
    now: Optional[datetime] = None,
    dismissed: Optional[Iterable[str]] = None,
) -> List[PatternWarning]:
    """
    Build pattern warnings for one relationship.

    Args:
        relationship: The relationship the interactions belong to
        interactions: That relationship's interactions
        now: Reference time bounding the 30-day window; without it every
            interaction counts as recent
        dismissed: Warning ids the user has already dismissed

    Returns:
        Warnings in rule order (energy drain first)
    """
    interactions = list(interactions or [])
    if len(interactions) < MIN_INTERACTIONS:
        return []

    recent = recent_interactions(interactions, parse_timestamp(now))
    dismissed = set(dismissed or [])

    warnings = []
    for name, rule in PATTERN_RULES:
        context = rule(recent)
        if context is None:
            continue
        warning = WARNING_TEMPLATES[name].render(relationship.id, context)
        if warning.id not in dismissed:
            warnings.append(warning)

    if warnings:
        logger.info(
            f"{len(warnings)} pattern warnings for {relationship.name}: "
            f"{[w.id for w in warnings]}"
        )
    return warnings
