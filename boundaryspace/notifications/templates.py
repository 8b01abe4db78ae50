"""
Notification and pattern-warning templates keyed by condition name.

Templates hold all card copy; message, description and action target
strings are filled from the context a rule returns.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..records.schema import Notification, PatternWarning


@dataclass(frozen=True)
class NotificationTemplate:
    """Static copy for one notification card."""
    id: str
    type: str
    title: str
    message: str
    priority: str
    action_text: Optional[str]
    action_target: Optional[str]
    trigger_condition: str

    def render(self, context: Dict[str, Any]) -> Notification:
        """Fill the template from a rule context."""
        return Notification(
            id=self.id,
            type=self.type,
            title=self.title,
            message=self.message.format(**context),
            priority=self.priority,
            action_text=self.action_text,
            action_target=self.action_target.format(**context) if self.action_target else None,
            trigger_condition=self.trigger_condition,
        )


TEMPLATES: Dict[str, NotificationTemplate] = {
    "bounce_back": NotificationTemplate(
        id="bounce-back-stronger",
        type="bounce-back",
        title="Bounce Back Stronger!",
        message="You recovered beautifully from a challenging interaction. That's real growth!",
        priority="high",
        action_text="See Your Progress",
        action_target="/insights",
        trigger_condition="Negative interaction followed by positive recovery",
    ),
    "boundary_champion": NotificationTemplate(
        id="boundary-champion",
        type="achievement",
        title="Boundary Champion!",
        message="You stood strong when your boundaries were tested. That takes courage!",
        priority="high",
        action_text="View Achievement",
        action_target="/achievements/boundary-defender",
        trigger_condition="Maintained boundaries despite testing",
    ),
    "daily_check_in": NotificationTemplate(
        id="daily-check-in",
        type="daily-prompt",
        title="Daily Reflection Time",
        message="How did your relationships feel today? A quick check-in helps track patterns.",
        priority="medium",
        action_text="Quick Check-in",
        action_target="/dashboard#boundary-form",
        trigger_condition="Active user, 8+ hours since last interaction",
    ),
    "workplace_energy_drain": NotificationTemplate(
        id="workplace-energy-drain",
        type="warning",
        title="Workplace Energy Alert",
        message=(
            "Your workplace interactions are consistently draining. "
            "Consider protective strategies."
        ),
        priority="high",
        action_text="See Recommendations",
        action_target="/insights?tab=wellness",
        trigger_condition="Multiple draining workplace interactions",
    ),
    "relationship_growth": NotificationTemplate(
        id="relationship-growth",
        type="achievement",
        title="Relationship Growth!",
        message="Your relationship with {relationship_name} is showing positive changes!",
        priority="medium",
        action_text="View Progress",
        action_target="/relationships/{relationship_id}",
        trigger_condition="Positive trend in previously challenging relationship",
    ),
}


def render_notification(condition: str, context: Dict[str, Any]) -> Notification:
    """
    Look up the template for a fired condition and render it.

    Raises:
        KeyError: If no template exists for the condition
    """
    return TEMPLATES[condition].render(context)


@dataclass(frozen=True)
class WarningTemplate:
    """Static copy for one pattern warning."""
    id: str
    type: str
    severity: str
    title: str
    description: str
    triggers: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    confidence: int
    timeframe: str

    def render(self, relationship_id: Any, context: Dict[str, Any]) -> PatternWarning:
        """Fill the template for one relationship."""
        return PatternWarning(
            id=self.id,
            relationship_id=relationship_id,
            type=self.type,
            severity=self.severity,
            title=self.title,
            description=self.description.format(**context),
            triggers=list(self.triggers),
            recommendations=list(self.recommendations),
            confidence=self.confidence,
            timeframe=self.timeframe,
        )


WARNING_TEMPLATES: Dict[str, WarningTemplate] = {
    "energy_drain": WarningTemplate(
        id="energy-drain",
        type="pattern",
        severity="high",
        title="Severe Energy Drain Pattern",
        description=(
            "Most interactions with this person leave you significantly drained "
            "({drained_count} of {recent_count} recently)."
        ),
        triggers=("Consistent energy loss", "Emotional exhaustion", "Physical symptoms"),
        recommendations=(
            "Limit interaction time to protect your energy",
            "Schedule recovery time after seeing them",
            "Consider if this relationship is worth the energy cost",
            "Notice what specific behaviors drain you most",
        ),
        confidence=80,
        timeframe="Ongoing pattern management",
    ),
    "slow_recovery": WarningTemplate(
        id="recovery-concern",
        type="recovery",
        severity="medium",
        title="Slow Recovery Pattern",
        description="You're taking longer to feel normal after interactions with this person.",
        triggers=("Extended recovery time", "Lingering emotional impact", "Disrupted well-being"),
        recommendations=(
            "Build in longer buffer time after seeing them",
            "Practice self-care rituals that help you recover",
            "Notice what helps you bounce back faster",
            "Consider reducing frequency of contact",
        ),
        confidence=70,
        timeframe="After each interaction",
    ),
}
