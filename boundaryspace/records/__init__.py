"""
Record types consumed and produced by the scoring engine.
"""

from .schema import (
    Baseline,
    Relationship,
    RelationshipStats,
    Interaction,
    Boundary,
    CommunicationStyle,
    PersonalSpaceNeeds,
    InsightStatus,
    CompatibilityCategory,
    CompatibilityInsight,
    OverallCompatibility,
    BoundaryAlignment,
    BoundaryMatch,
    FlagRatioResult,
    FlagBalance,
    Notification,
    DealBreakerAlert,
    SuggestedAction,
    PatternWarning,
    select_current_baseline,
    parse_timestamp,
    parse_flag,
    optional_number,
    number_or,
)

__all__ = [
    "Baseline",
    "Relationship",
    "RelationshipStats",
    "Interaction",
    "Boundary",
    "CommunicationStyle",
    "PersonalSpaceNeeds",
    "InsightStatus",
    "CompatibilityCategory",
    "CompatibilityInsight",
    "OverallCompatibility",
    "BoundaryAlignment",
    "BoundaryMatch",
    "FlagRatioResult",
    "FlagBalance",
    "Notification",
    "DealBreakerAlert",
    "SuggestedAction",
    "PatternWarning",
    "select_current_baseline",
    "parse_timestamp",
    "parse_flag",
    "optional_number",
    "number_or",
]
