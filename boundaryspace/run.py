"""
Batch runner for the BoundarySpace scoring engine.

Scores one user's exported records and writes a JSON report.

Usage:
    python -m boundaryspace.run --input export.json --config configs/config.yaml

The runner performs the following steps:
1. Load and validate configuration (optional; defaults apply without it)
2. Load the exported records (JSON, optionally interactions from CSV)
3. Score relationships, boundary alignment and notifications
4. Write the report to a file or stdout
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_scoring(
    input_path: str,
    config_path: Optional[str] = None,
    now: Optional[str] = None,
    interactions_csv: Optional[str] = None,
    output_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Score an exported record set.

    Args:
        input_path: Path to the JSON export
        config_path: Path to the YAML configuration, or None for defaults
        now: ISO-8601 reference time for time-based rules
        interactions_csv: Optional CSV of interactions replacing those in the export
        output_path: Where to write the JSON report; not written when None

    Returns:
        The report dictionary
    """
    from .configs import get_config_value, load_config, validate_config
    from .data_loading import load_export, load_interactions_csv
    from .engine import create_engine

    config = None
    if config_path is not None:
        config = load_config(config_path)
        for issue in validate_config(config):
            logger.warning(f"Config issue: {issue}")
        setup_logging(get_config_value(config, "global.log_level", "INFO"))

    records = load_export(input_path)
    if interactions_csv is not None:
        records["interactions"] = load_interactions_csv(interactions_csv)

    if records["baseline"] is None:
        logger.info("No baseline in export; category scores and alignment will be empty")

    engine = create_engine(config)
    report = engine.analyze_user(
        baseline=records["baseline"],
        relationships=records["relationships"],
        interactions=records["interactions"],
        boundaries=records["boundaries"],
        now=now,
    )

    if output_path is not None:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(report, f, indent=2, default=str)
        logger.info(f"Saved report to {output_path}")

    return report


def main(argv=None):
    """Main entry point for the runner."""
    parser = argparse.ArgumentParser(
        description="Score a BoundarySpace record export"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Path to the JSON export"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--now",
        type=str,
        default=None,
        help="ISO-8601 reference time for daily check-in and deal-breaker rules"
    )
    parser.add_argument(
        "--interactions-csv",
        type=str,
        default=None,
        help="CSV of interactions to use instead of the export's"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path for the JSON report (prints to stdout when omitted)"
    )

    args = parser.parse_args(argv)

    try:
        report = run_scoring(
            args.input,
            config_path=args.config,
            now=args.now,
            interactions_csv=args.interactions_csv,
            output_path=args.output,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Scoring failed: {e}")
        return 1

    if args.output is None:
        print(json.dumps(report, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
