"""Compatibility scoring functions."""

from .thresholds import ScoringConfig, ThresholdSet, DEFAULT_CONFIG
from .categories import score_categories
from .aggregate import aggregate_overall
from .alignment import score_boundary_alignment, boundary_priority
from .flags import score_flag_ratio, score_flag_balance, summarize_relationships

__all__ = [
    "ScoringConfig",
    "ThresholdSet",
    "DEFAULT_CONFIG",
    "score_categories",
    "aggregate_overall",
    "score_boundary_alignment",
    "boundary_priority",
    "score_flag_ratio",
    "score_flag_balance",
    "summarize_relationships",
]
