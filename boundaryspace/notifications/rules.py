"""
Trigger-condition detection for notification cards.

Each rule is an independent predicate over the interaction and relationship
lists. A rule returns None when it does not fire, or a (possibly empty)
context dict used to fill its template when it does. Rules carry no copy;
see templates.py.

Interactions are read most-recent first. When every interaction carries a
timestamp they are sorted by it; otherwise the given order is trusted.
Energy changes read missing values as the scale midpoint (5).

Rules, in priority order:
    bounce_back             negative interaction, and a drop of >= 2 points
                            directly followed by a gain of >= 2 points
    boundary_champion       boundaries tested, met and not violated
    daily_check_in          3+ interactions, 8h <= time since latest < 48h
    workplace_energy_drain  2+ workplace interactions losing >= 2 points
    relationship_growth     latest interaction gains >= 2 after one losing >= 1
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..records.schema import Interaction, Relationship, number_or, parse_timestamp
from ..scoring.thresholds import SCALE_MIDPOINT

logger = logging.getLogger(__name__)

Context = Dict[str, Any]
Rule = Callable[[List[Interaction], Sequence[Relationship], Optional[datetime]], Optional[Context]]

WORKPLACE_TYPE = "workplace"
ACTIVE_USER_MIN_INTERACTIONS = 3
CHECK_IN_MIN_HOURS = 8
CHECK_IN_MAX_HOURS = 48
# hours assumed when the latest interaction has no timestamp
UNKNOWN_HOURS_SINCE = 24


def energy_change(interaction: Interaction) -> float:
    """Energy after minus energy before, reading unusable values as 5."""
    return (
        number_or(interaction.energy_after, SCALE_MIDPOINT)
        - number_or(interaction.energy_before, SCALE_MIDPOINT)
    )


def most_recent_first(interactions: Sequence[Interaction]) -> List[Interaction]:
    """Order interactions newest first when all of them are timestamped."""
    ordered = list(interactions)
    if ordered and all(i.timestamp is not None for i in ordered):
        ordered.sort(key=lambda i: i.timestamp, reverse=True)
    return ordered


def is_negative(interaction: Interaction) -> bool:
    """A difficult interaction: big energy drop, physical symptoms or violations."""
    return (
        energy_change(interaction) <= -3
        or bool(interaction.physical_symptoms)
        or bool(interaction.boundaries_violated)
    )


def detect_bounce_back(interactions, relationships, now) -> Optional[Context]:
    if not any(is_negative(i) for i in interactions):
        return None
    # interactions[k] is newer than interactions[k + 1]
    for newer, older in zip(interactions, interactions[1:]):
        if energy_change(older) <= -2 and energy_change(newer) >= 2:
            return {}
    return None


def detect_boundary_champion(interactions, relationships, now) -> Optional[Context]:
    for i in interactions:
        if i.boundary_testing and i.boundaries_met and not i.boundaries_violated:
            return {}
    return None


def detect_daily_check_in(interactions, relationships, now) -> Optional[Context]:
    # needs a caller-supplied clock
    if now is None or len(interactions) < ACTIVE_USER_MIN_INTERACTIONS:
        return None
    latest = interactions[0].timestamp
    if latest is None:
        hours = UNKNOWN_HOURS_SINCE
    else:
        hours = (now - latest).total_seconds() / 3600
    if CHECK_IN_MIN_HOURS <= hours < CHECK_IN_MAX_HOURS:
        return {"hours_since_last": hours}
    return None


def detect_workplace_energy_drain(interactions, relationships, now) -> Optional[Context]:
    workplace_ids = {
        rel.id for rel in relationships
        if (rel.relationship_type or "").lower() == WORKPLACE_TYPE
    }
    draining = [
        i for i in interactions
        if i.relationship_id in workplace_ids and energy_change(i) <= -2
    ]
    if len(draining) >= 2:
        return {"draining_count": len(draining)}
    return None


def detect_relationship_growth(interactions, relationships, now) -> Optional[Context]:
    for rel in relationships:
        recent = [i for i in interactions if i.relationship_id == rel.id][:3]
        if len(recent) < 2:
            continue
        if energy_change(recent[1]) <= -1 and energy_change(recent[0]) >= 2:
            return {"relationship_name": rel.name, "relationship_id": rel.id}
    return None


RULES: List[Tuple[str, Rule]] = [
    ("bounce_back", detect_bounce_back),
    ("boundary_champion", detect_boundary_champion),
    ("daily_check_in", detect_daily_check_in),
    ("workplace_energy_drain", detect_workplace_energy_drain),
    ("relationship_growth", detect_relationship_growth),
]


def evaluate_conditions(
    interactions: Sequence[Interaction],
    relationships: Sequence[Relationship],
    now: Optional[datetime] = None,
) -> List[Tuple[str, Context]]:
    """
    Evaluate every rule in priority order.

    Args:
        interactions: Recent interactions across all relationships
        relationships: The user's relationships
        now: Reference time for time-based rules (naive values are read as
            UTC); those rules are skipped when it is None

    Returns:
        (condition name, context) for every rule that fired, in priority order
    """
    ordered = most_recent_first(interactions or [])
    now = parse_timestamp(now)
    relationships = list(relationships or [])
    fired = []
    for name, rule in RULES:
        context = rule(ordered, relationships, now)
        if context is not None:
            fired.append((name, context))
    logger.debug(f"Trigger conditions fired: {[name for name, _ in fired]}")
    return fired
