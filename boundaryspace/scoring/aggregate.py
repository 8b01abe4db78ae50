"""
Headline compatibility score.

Reduces the per-category insights to one number:

    overall = mean(insight.score for insight in insights)

An empty insight list gives 0, never NaN. The headline uses its own
threshold set (80 / 60 / 40) and labels.
"""

from typing import Sequence

import numpy as np

from ..records.schema import CompatibilityInsight, OverallCompatibility
from .thresholds import ScoringConfig, DEFAULT_CONFIG, OVERALL_LABELS


def aggregate_overall(
    insights: Sequence[CompatibilityInsight],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> OverallCompatibility:
    """
    Combine category insights into the overall compatibility score.

    Args:
        insights: Output of score_categories (possibly empty)
        config: Scoring configuration

    Returns:
        OverallCompatibility with score, label and status
    """
    if not insights:
        score = 0.0
    else:
        score = float(np.mean([insight.score for insight in insights]))

    status = config.overall.classify(score)
    return OverallCompatibility(score=score, label=OVERALL_LABELS[status], status=status)
