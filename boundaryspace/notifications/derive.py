"""
Notification derivation: detect trigger conditions, then render the first
`capacity` of them in priority order.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from ..records.schema import Interaction, Relationship, Notification
from ..scoring.thresholds import NOTIFICATION_CAPACITY
from .rules import evaluate_conditions
from .templates import render_notification

logger = logging.getLogger(__name__)


def derive_notifications(
    interactions: Sequence[Interaction],
    relationships: Sequence[Relationship],
    capacity: int = NOTIFICATION_CAPACITY,
    now: Optional[datetime] = None,
) -> List[Notification]:
    """
    Decide which notification cards to show.

    Args:
        interactions: Recent interactions across all relationships
        relationships: The user's relationships
        capacity: Maximum number of active notifications
        now: Reference time for the daily check-in rule

    Returns:
        At most `capacity` notifications, highest priority rule first
    """
    fired = evaluate_conditions(interactions, relationships, now)
    selected = fired[:max(capacity, 0)]
    if len(fired) > len(selected):
        logger.debug(
            f"Dropped {len(fired) - len(selected)} notifications over capacity {capacity}"
        )
    return [render_notification(name, context) for name, context in selected]
