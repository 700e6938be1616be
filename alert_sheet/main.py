"""Main entry point for the job alert sheet updater."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout
from pydantic import ValidationError

from .config import get_config, load_config
from .gmail_client import GmailMailSource
from .pipeline import run_extraction
from .sheets import SheetsRecordSink

LOCK_FILE = Path("/tmp/alert_sheet.lock")
LOG_DIR = Path(__file__).parent.parent / "logs"


def setup_logging() -> None:
    """Configure logging for the application."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / "app.log"

    config = get_config()
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout),
        ],
    )


def run_pipeline() -> dict:
    """Wire up Gmail and Sheets and run one extraction pass."""
    logger = logging.getLogger(__name__)
    config = get_config()

    logger.info("Starting job alert extraction")

    sink = SheetsRecordSink(
        config.spreadsheet_id,
        config.sheet_name,
        result_range=config.result_range,
        date_column=config.date_column,
    )

    return run_extraction(
        GmailMailSource(),
        sink,
        max_threads=config.max_threads,
        sender_pattern=config.sender_pattern,
        time_zone=config.time_zone,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alert-sheet",
        description="Copy LinkedIn job alert listings into a Google Sheet",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.yaml (default: config/config.yaml)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point with concurrency protection."""
    args = _build_parser().parse_args(argv)

    try:
        load_config(args.config)
        setup_logging()
    except (FileNotFoundError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    logger = logging.getLogger(__name__)

    try:
        with FileLock(LOCK_FILE, timeout=10):
            logger.info("Acquired lock, starting pipeline")
            run_pipeline()
            return 0

    except Timeout:
        logger.warning("Could not acquire lock - another instance is running")
        return 0

    except Exception as e:
        logger.exception(f"Pipeline failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
