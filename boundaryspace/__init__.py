"""
BoundarySpace Compatibility Scoring Engine

This package implements the relationship compatibility and boundary-alignment
scoring used by BoundarySpace. It consumes a user's baseline assessment,
relationship records and logged interactions, and produces category scores,
a headline compatibility score, alignment and flag-ratio estimates, and
notification cards.

Key Design Decisions:
- Every scorer is a pure function over already-fetched records
- Missing or empty inputs resolve to defined "no data" results, never errors
- Threshold sets are named constants per category, overridable from YAML
- Notification detection is separated from notification copy
"""

__version__ = "1.0.0"
