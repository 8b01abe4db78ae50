"""Notification, alert and pattern-warning derivation."""

from .rules import evaluate_conditions, RULES
from .templates import (
    TEMPLATES,
    WARNING_TEMPLATES,
    NotificationTemplate,
    WarningTemplate,
    render_notification,
)
from .derive import derive_notifications
from .deal_breakers import derive_deal_breaker_alerts
from .patterns import derive_pattern_warnings, PATTERN_RULES

__all__ = [
    "evaluate_conditions",
    "RULES",
    "TEMPLATES",
    "NotificationTemplate",
    "WARNING_TEMPLATES",
    "WarningTemplate",
    "render_notification",
    "derive_notifications",
    "derive_deal_breaker_alerts",
    "derive_pattern_warnings",
    "PATTERN_RULES",
]
