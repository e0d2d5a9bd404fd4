"""Post-run artifact scraping step."""

from __future__ import annotations

import logging
from pathlib import Path

from nx_test_executor.execution_results import ExecutionResult

from .object_store_scraper import Scraper, ScrapeError

logger = logging.getLogger(__name__)

ARTIFACT_SUBDIRECTORIES = ("cypress/videos", "cypress/screenshots")


def artifact_directories(run_path: Path) -> tuple[Path, ...]:
    return tuple(run_path / subdirectory for subdirectory in ARTIFACT_SUBDIRECTORIES)


def scrape_artifacts(
    result: ExecutionResult,
    *,
    execution_id: str,
    run_path: Path,
    scraper: Scraper,
) -> ExecutionResult:
    """Upload artifacts; a failure is attached to `result`, whose steps are kept."""
    logger.debug("start: scraping artifacts")
    try:
        scraper.scrape(execution_id, artifact_directories(run_path))
    except ScrapeError as exc:
        logger.warning("scrape artifacts error: %s", exc)
        return result.with_errors(f"scrape artifacts error: {exc}")
    logger.debug("end: scraping artifacts")
    return result
