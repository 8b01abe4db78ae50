"""
Data loading functions for batch scoring.

Reads records exported from the BoundarySpace API. A JSON export holds
`baseline` (or a `baselines` history), `relationships`, `interactions` and
`boundaries`; interactions can also come from a CSV file with one row per
interaction. No scoring is done here.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any

import numpy as np
import pandas as pd

from ..records.schema import (
    Baseline,
    Relationship,
    Interaction,
    Boundary,
    select_current_baseline,
    parse_flag,
)

logger = logging.getLogger(__name__)

# CSV columns holding string sets, separated by ";"
LIST_COLUMNS = [
    "boundariesMet", "boundariesViolated", "physicalSymptoms", "dealBreakersCrossed",
    "boundaries_met", "boundaries_violated", "physical_symptoms", "deal_breakers_crossed",
]


def load_export(filepath: str) -> Dict[str, Any]:
    """
    Load a JSON export of one user's records.

    Args:
        filepath: Path to the JSON export

    Returns:
        Dictionary with keys `baseline` (current Baseline or None),
        `relationships`, `interactions` and `boundaries` (lists of records)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a JSON object
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Export file not found: {filepath}")

    logger.info(f"Loading export from {filepath}")
    text = path.read_text()
    if not text.strip():
        raise ValueError(f"Export file is empty: {filepath}")

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Export must be a JSON object: {filepath}")

    return parse_export(data)


def parse_export(data: Dict[str, Any]) -> Dict[str, Any]:
    """Build records from an export dictionary."""
    baselines = [Baseline.from_dict(b) for b in data.get("baselines") or []]
    if data.get("baseline"):
        baselines.append(Baseline.from_dict(data["baseline"]))

    records = {
        "baseline": select_current_baseline(baselines),
        "relationships": [Relationship.from_dict(r) for r in data.get("relationships") or []],
        "interactions": [Interaction.from_dict(i) for i in data.get("interactions") or []],
        "boundaries": [Boundary.from_dict(b) for b in data.get("boundaries") or []],
    }
    logger.info(
        f"Parsed export: baseline={'yes' if records['baseline'] else 'no'}, "
        f"{len(records['relationships'])} relationships, "
        f"{len(records['interactions'])} interactions, "
        f"{len(records['boundaries'])} boundaries"
    )
    return records


def _clean_value(value: Any) -> Any:
    """Map pandas missing values to None and numpy scalars to Python ones."""
    if value is None:
        return None
    if isinstance(value, float) and np.isnan(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def load_interactions_csv(filepath: str, delimiter: str = ",") -> List[Interaction]:
    """
    Load interactions from a CSV file.

    Column names follow the API fields (camelCase or snake_case). String-set
    columns are ";"-separated; boolean columns accept true/false, yes/no, 1/0.

    Args:
        filepath: Path to the CSV file
        delimiter: Field delimiter

    Returns:
        List of Interaction records

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has no rows
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Interactions file not found: {filepath}")

    logger.info(f"Loading interactions from {filepath} (delimiter: {repr(delimiter)})")
    df = pd.read_csv(filepath, sep=delimiter)

    if df.empty:
        raise ValueError(f"Interactions file is empty: {filepath}")

    bool_columns = [
        c for c in df.columns
        if c in ("communicationStyleRespected", "boundariesRespected", "triggersAvoided",
                 "boundaryTesting", "communication_style_respected", "boundaries_respected",
                 "triggers_avoided", "boundary_testing")
    ]

    interactions = []
    for row in df.to_dict(orient="records"):
        record = {k: _clean_value(v) for k, v in row.items()}
        for col in LIST_COLUMNS:
            if col in record:
                raw = record[col]
                record[col] = [s.strip() for s in str(raw).split(";") if s.strip()] if raw else []
        for col in bool_columns:
            if record.get(col) is not None:
                record[col] = parse_flag(record[col])
        interactions.append(Interaction.from_dict(record))

    logger.info(f"Loaded {len(interactions)} interactions")
    return interactions
