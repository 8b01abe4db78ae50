"""
Baseline-boundary alignment.

Estimates what share of a user's standalone boundaries line up with the
non-negotiable boundaries declared in their baseline:

    non-negotiable  = importance >= 8
    importance      = 5 when missing or unusable
    aligned         = flexible, or matches a baseline non-negotiable entry
    score           = round(100 * aligned / total)

Matching is a free-text heuristic: a baseline entry (token) matches a
boundary field (category or title) when, case-insensitively,

    field contains token, or token contains field, or
    token contains a word of field, or field contains a word of token

Only words of at least `min_word_length` characters take part in the
word-level checks.
"""

import logging
from typing import List, Optional, Sequence

from ..records.schema import (
    Baseline,
    Boundary,
    BoundaryAlignment,
    BoundaryMatch,
    DEFAULT_IMPORTANCE,
    number_or,
)
from .thresholds import ScoringConfig, DEFAULT_CONFIG
from .categories import round_half_up

logger = logging.getLogger(__name__)


def _words(text: str, min_length: int) -> List[str]:
    return [w for w in text.split() if len(w) >= min_length]


def text_matches(token: str, field: str, min_word_length: int = 4) -> bool:
    """
    Case-insensitive bidirectional containment check between two phrases.

    Args:
        token: A baseline boundary entry
        field: A boundary title or category
        min_word_length: Shortest word used for word-level containment

    Returns:
        True when either phrase contains the other or one of its words
    """
    token = token.strip().lower()
    field = field.strip().lower()
    if not token or not field:
        return False
    if token in field or field in token:
        return True
    if any(word in token for word in _words(field, min_word_length)):
        return True
    return any(word in field for word in _words(token, min_word_length))


def matches_any(
    entries: Sequence[str],
    boundary: Boundary,
    min_word_length: int = 4,
) -> bool:
    """Whether any baseline entry matches the boundary's category or title."""
    return any(
        text_matches(entry, field, min_word_length)
        for entry in entries
        for field in (boundary.category or "", boundary.title or "")
    )


def boundary_priority(
    boundary: Boundary,
    baseline: Baseline,
    min_word_length: int = 4,
) -> str:
    """
    Priority level of a boundary in light of the baseline.

    Returns:
        "high" when it matches a non-negotiable entry, "medium" when it
        matches a flexible entry, otherwise "neutral"
    """
    if matches_any(baseline.non_negotiable_boundaries, boundary, min_word_length):
        return "high"
    if matches_any(baseline.flexible_boundaries, boundary, min_word_length):
        return "medium"
    return "neutral"


def score_boundary_alignment(
    boundaries: Sequence[Boundary],
    baseline: Optional[Baseline],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> Optional[BoundaryAlignment]:
    """
    Score how well standalone boundaries align with the baseline.

    Args:
        boundaries: The user's boundary goals
        baseline: The user's current baseline
        config: Scoring configuration (importance cutoff, word length)

    Returns:
        BoundaryAlignment, or None when the baseline is missing or there
        are no boundaries (callers should prompt for the assessment)
    """
    if baseline is None or not boundaries:
        return None

    min_len = config.min_word_length
    matches = []
    for boundary in boundaries:
        importance = int(number_or(boundary.importance, DEFAULT_IMPORTANCE))
        non_negotiable = importance >= config.non_negotiable_importance
        priority = boundary_priority(boundary, baseline, min_len)
        # only non-negotiable mismatches count against the score
        aligned = (not non_negotiable) or priority == "high"
        matches.append(BoundaryMatch(
            title=boundary.title,
            category=boundary.category,
            importance=importance,
            non_negotiable=non_negotiable,
            aligned=aligned,
            priority=priority,
        ))

    total = len(matches)
    aligned_count = sum(1 for m in matches if m.aligned)
    non_negotiable_count = sum(1 for m in matches if m.non_negotiable)

    result = BoundaryAlignment(
        score=round_half_up(100.0 * aligned_count / total),
        aligned_count=aligned_count,
        total_count=total,
        non_negotiable_count=non_negotiable_count,
        flexible_count=total - non_negotiable_count,
        misaligned=[m.title for m in matches if not m.aligned],
        matches=matches,
    )
    logger.debug(f"Boundary alignment: {aligned_count}/{total} aligned, score={result.score}")
    return result
