"""
Record schema for scoring inputs and outputs.

Defines the data structures the scoring engine reads (baselines,
relationships, interactions, boundaries) and the derived results it
produces. Input records are built from the JSON the web API returns,
so `from_dict` accepts both camelCase and snake_case keys and ignores
fields it does not know.

Numeric fields are never range-checked here: out-of-range values are
clamped at the score stage instead.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from enum import Enum
import math
import re


class CommunicationStyle(Enum):
    """Communication style options from the baseline assessment."""
    DIRECT = "direct"
    GENTLE = "gentle"
    COLLABORATIVE = "collaborative"
    ASSERTIVE = "assertive"
    UNKNOWN = "unknown"


class PersonalSpaceNeeds(Enum):
    """Personal space needs from the baseline assessment."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class InsightStatus(Enum):
    """Qualitative status bucket for a score."""
    EXCELLENT = "excellent"
    GOOD = "good"
    CONCERNING = "concerning"
    POOR = "poor"


class CompatibilityCategory(Enum):
    """Fixed scoring categories, in reporting order."""
    COMMUNICATION_STYLE = "Communication Style"
    BOUNDARY_RESPECT = "Boundary Respect"
    TRIGGER_MANAGEMENT = "Trigger Management"
    ENERGY_IMPACT = "Energy Impact"
    SELF_WORTH_IMPACT = "Self-Worth Impact"


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Convert camelCase keys to snake_case."""
    return {_snake_case(k): v for k, v in data.items()}


def _coerce_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return enum_cls.UNKNOWN
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return enum_cls.UNKNOWN


def _as_list(value) -> List[str]:
    """Normalize a string-set field (None, str, list, tuple, set) to a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    return [str(v) for v in value]


# Importance assumed for boundaries without a usable value
DEFAULT_IMPORTANCE = 5

BOOL_TRUE = {"true", "1", "yes", "y", "t"}
BOOL_FALSE = {"false", "0", "no", "n", "f", ""}


def optional_number(value) -> Optional[float]:
    """
    Read a numeric field leniently.

    Returns None for missing, blank, NaN, infinite or non-numeric values.
    """
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def number_or(value, default: float) -> float:
    """`optional_number` with a fallback for unusable values."""
    number = optional_number(value)
    return default if number is None else number


def parse_flag(value) -> bool:
    """
    Read a boolean field from JSON or CSV.

    "true"/"false", "yes"/"no" and "1"/"0" are recognised; any other
    non-empty string (such as a boundary set serialised as text) counts
    as true. Non-strings are read by truthiness.
    """
    if isinstance(value, str):
        text = value.strip().lower()
        if text in BOOL_TRUE:
            return True
        if text in BOOL_FALSE:
            return False
        return True
    return bool(value)


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Naive values are taken to be UTC. Returns None for missing or
    unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Baseline:
    """
    A user's self-reported baseline assessment.

    Only the latest version is used for scoring; see
    `select_current_baseline`.

    Attributes:
        communication_style: Preferred communication style
        conflict_resolution: Preferred conflict resolution approach
        personal_space_needs: high / medium / low
        emotional_support_level: Free-form support level
        non_negotiable_boundaries: Boundaries that must never be crossed
        flexible_boundaries: Boundaries open to negotiation
        triggers: Emotional triggers
        version: Assessment version number
        created_at: When this version was created
    """
    communication_style: CommunicationStyle = CommunicationStyle.UNKNOWN
    conflict_resolution: Optional[str] = None
    personal_space_needs: PersonalSpaceNeeds = PersonalSpaceNeeds.UNKNOWN
    emotional_support_level: Optional[str] = None
    non_negotiable_boundaries: List[str] = field(default_factory=list)
    flexible_boundaries: List[str] = field(default_factory=list)
    triggers: List[str] = field(default_factory=list)
    version: int = 1
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Convert string inputs to enums and lists."""
        self.communication_style = _coerce_enum(CommunicationStyle, self.communication_style)
        self.personal_space_needs = _coerce_enum(PersonalSpaceNeeds, self.personal_space_needs)
        self.non_negotiable_boundaries = _as_list(self.non_negotiable_boundaries)
        self.flexible_boundaries = _as_list(self.flexible_boundaries)
        self.triggers = _as_list(self.triggers)
        self.created_at = parse_timestamp(self.created_at)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with string values."""
        return {
            "communication_style": self.communication_style.value,
            "conflict_resolution": self.conflict_resolution,
            "personal_space_needs": self.personal_space_needs.value,
            "emotional_support_level": self.emotional_support_level,
            "non_negotiable_boundaries": list(self.non_negotiable_boundaries),
            "flexible_boundaries": list(self.flexible_boundaries),
            "triggers": list(self.triggers),
            "version": self.version,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Baseline":
        """Create from an API dictionary."""
        d = _normalize_keys(data)
        return cls(
            communication_style=d.get("communication_style"),
            conflict_resolution=d.get("conflict_resolution"),
            personal_space_needs=d.get("personal_space_needs"),
            # older records call this field "emotional_support"
            emotional_support_level=d.get("emotional_support_level", d.get("emotional_support")),
            non_negotiable_boundaries=d.get("non_negotiable_boundaries"),
            flexible_boundaries=d.get("flexible_boundaries"),
            triggers=d.get("triggers"),
            version=int(number_or(d.get("version"), 1)),
            created_at=d.get("created_at"),
        )


def select_current_baseline(baselines: List[Baseline]) -> Optional[Baseline]:
    """
    Pick the current baseline from a user's retained versions.

    The highest version wins; ties are broken by the latest creation time.

    Args:
        baselines: All baseline versions for one user (may be empty)

    Returns:
        The current Baseline, or None when there is none
    """
    if not baselines:
        return None
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    return max(baselines, key=lambda b: (b.version, b.created_at or epoch))


@dataclass
class RelationshipStats:
    """Aggregate flag counts and check-in stats for one relationship."""
    green_flags: int = 0
    red_flags: int = 0
    average_safety_rating: Optional[float] = None
    check_in_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RelationshipStats":
        d = _normalize_keys(data)
        return cls(
            green_flags=int(number_or(d.get("green_flags"), 0)),
            red_flags=int(number_or(d.get("red_flags"), 0)),
            average_safety_rating=optional_number(d.get("average_safety_rating")),
            check_in_count=int(number_or(d.get("check_in_count"), 0)),
        )


@dataclass
class Relationship:
    """
    A relationship tracked by the user.

    Attributes:
        id: Relationship identifier
        name: Display name of the other person
        relationship_type: Category such as romantic, family, friend, workplace
        status: Current relationship status
        stats: Optional aggregate flag stats
    """
    id: Any
    name: str
    relationship_type: Optional[str] = None
    status: Optional[str] = None
    stats: Optional[RelationshipStats] = None

    def __post_init__(self):
        if isinstance(self.stats, dict):
            self.stats = RelationshipStats.from_dict(self.stats)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "name": self.name,
            "relationship_type": self.relationship_type,
            "status": self.status,
        }
        if self.stats is not None:
            result["stats"] = self.stats.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Relationship":
        d = _normalize_keys(data)
        stats = d.get("stats")
        if stats is None and ("green_flags" in d or "red_flags" in d):
            stats = {k: d[k] for k in
                     ("green_flags", "red_flags", "average_safety_rating", "check_in_count")
                     if k in d}
        return cls(
            id=d.get("id"),
            name=d.get("name") or "",
            relationship_type=d.get("relationship_type", d.get("category", d.get("type"))),
            status=d.get("status"),
            stats=stats,
        )


@dataclass
class Interaction:
    """
    A single logged encounter within a relationship.

    Energy and self-worth are measured on a 1-10 scale before and after
    the encounter; missing values are left as None and read as the
    neutral midpoint by the scorers.
    """
    relationship_id: Any = None
    communication_style_respected: bool = False
    boundaries_respected: bool = False
    boundaries_met: List[str] = field(default_factory=list)
    boundaries_violated: List[str] = field(default_factory=list)
    boundary_testing: bool = False
    triggers_avoided: bool = False
    energy_before: Optional[float] = None
    energy_after: Optional[float] = None
    self_worth_before: Optional[float] = None
    self_worth_after: Optional[float] = None
    physical_symptoms: List[str] = field(default_factory=list)
    deal_breakers_crossed: List[str] = field(default_factory=list)
    timestamp: Optional[datetime] = None
    id: Any = None

    def __post_init__(self):
        self.boundaries_met = _as_list(self.boundaries_met)
        self.boundaries_violated = _as_list(self.boundaries_violated)
        self.physical_symptoms = _as_list(self.physical_symptoms)
        self.deal_breakers_crossed = _as_list(self.deal_breakers_crossed)
        self.timestamp = parse_timestamp(self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["timestamp"] = self.timestamp.isoformat() if self.timestamp else None
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Interaction":
        """
        Create from an API dictionary.

        Accepts the legacy `preEnergyLevel` / `postEnergyLevel` names and
        `createdAt` as the timestamp. Boolean fields go through `parse_flag`,
        so "false" reads as False; `boundariesRespected` may also be a
        string set.
        """
        d = _normalize_keys(data)
        energy_before = d.get("energy_before", d.get("pre_energy_level"))
        energy_after = d.get("energy_after", d.get("post_energy_level"))
        return cls(
            relationship_id=d.get("relationship_id"),
            communication_style_respected=parse_flag(d.get("communication_style_respected")),
            boundaries_respected=parse_flag(d.get("boundaries_respected")),
            boundaries_met=d.get("boundaries_met"),
            boundaries_violated=d.get("boundaries_violated"),
            boundary_testing=d.get("boundary_testing") is True,
            triggers_avoided=parse_flag(d.get("triggers_avoided")),
            energy_before=optional_number(energy_before),
            energy_after=optional_number(energy_after),
            self_worth_before=optional_number(d.get("self_worth_before")),
            self_worth_after=optional_number(d.get("self_worth_after")),
            physical_symptoms=d.get("physical_symptoms"),
            deal_breakers_crossed=d.get("deal_breakers_crossed"),
            timestamp=d.get("timestamp", d.get("created_at")),
            id=d.get("id"),
        )


@dataclass
class Boundary:
    """A standalone boundary goal (importance on a 1-10 scale)."""
    title: str
    category: str = ""
    importance: int = DEFAULT_IMPORTANCE
    id: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Boundary":
        d = _normalize_keys(data)
        return cls(
            title=d.get("title") or "",
            category=d.get("category") or "",
            importance=int(number_or(d.get("importance"), DEFAULT_IMPORTANCE)),
            id=d.get("id"),
        )


# =============================================================================
# Derived results
# =============================================================================

@dataclass
class CompatibilityInsight:
    """
    One category score for a relationship.

    Attributes:
        category: One of CompatibilityCategory
        score: Score in [0, 100]
        status: Status bucket for the score
        insight: Human-readable summary
        recommendation: Human-readable recommendation
    """
    category: CompatibilityCategory
    score: float
    status: InsightStatus
    insight: str
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "score": self.score,
            "status": self.status.value,
            "insight": self.insight,
            "recommendation": self.recommendation,
        }


@dataclass
class OverallCompatibility:
    """Headline compatibility score and its label."""
    score: float
    label: str
    status: InsightStatus

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "label": self.label, "status": self.status.value}


@dataclass
class BoundaryMatch:
    """Per-boundary outcome of the alignment check."""
    title: str
    category: str
    importance: int
    non_negotiable: bool
    aligned: bool
    priority: str  # high / medium / neutral

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BoundaryAlignment:
    """
    Result of the baseline-boundary alignment check.

    Attributes:
        score: Percentage of aligned boundaries, rounded
        aligned_count: Number of aligned boundaries
        total_count: Number of boundaries checked
        non_negotiable_count: Boundaries classified non-negotiable
        flexible_count: Boundaries classified flexible
        misaligned: Titles of non-negotiable boundaries with no baseline match
        matches: Per-boundary details
    """
    score: int
    aligned_count: int
    total_count: int
    non_negotiable_count: int
    flexible_count: int
    misaligned: List[str] = field(default_factory=list)
    matches: List[BoundaryMatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["matches"] = [m.to_dict() for m in self.matches]
        return result


@dataclass
class FlagRatioResult:
    """Flag-ratio compatibility estimate for one relationship."""
    score: int
    flag_ratio: int
    label: str
    tier: str  # green / blue / yellow / red
    used_safety_rating: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FlagBalance:
    """Green-minus-red flag balance for one relationship."""
    health_score: int
    percentage: float
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Notification:
    """
    A notification card emitted by a trigger condition.

    Attributes:
        id: Stable notification identifier
        type: bounce-back / daily-prompt / achievement / warning
        title: Card title
        message: Card body
        priority: high / medium / low
        action_text: Call-to-action label
        action_target: Route the action opens
        trigger_condition: Human-readable description of the rule that fired
    """
    id: str
    type: str
    title: str
    message: str
    priority: str
    action_text: Optional[str] = None
    action_target: Optional[str] = None
    trigger_condition: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SuggestedAction:
    """A follow-up step suggested for a deal-breaker alert."""
    type: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DealBreakerAlert:
    """An alert for one deal-breaker crossed in one interaction."""
    alert_id: str
    interaction_id: Any
    relationship_id: Any
    deal_breaker: str
    severity: str  # high / medium
    timestamp: Optional[datetime] = None
    suggested_actions: List[SuggestedAction] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alert_id": self.alert_id,
            "interaction_id": self.interaction_id,
            "relationship_id": self.relationship_id,
            "deal_breaker": self.deal_breaker,
            "severity": self.severity,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "suggested_actions": [a.to_dict() for a in self.suggested_actions],
        }


@dataclass
class PatternWarning:
    """
    A per-relationship warning derived from recent interaction patterns.

    Attributes:
        id: Warning identifier, stable per pattern
        relationship_id: Relationship the pattern was found in
        type: pattern / recovery
        severity: high / medium
        title: Card title
        description: Card body
        triggers: Short descriptions of what set the warning off
        recommendations: Suggested responses
        confidence: Heuristic confidence, 0-100
        timeframe: When the user should act
    """
    id: str
    relationship_id: Any
    type: str
    severity: str
    title: str
    description: str
    triggers: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    confidence: int = 0
    timeframe: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
