"""Data loading module for exported BoundarySpace records."""

from .loaders import load_export, parse_export, load_interactions_csv

__all__ = ["load_export", "parse_export", "load_interactions_csv"]
