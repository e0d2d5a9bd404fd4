"""Artifact scraping exports."""

from .object_store_scraper import ObjectStoreScraper, Scraper, ScrapeError
from .scrape_gate import ARTIFACT_SUBDIRECTORIES, artifact_directories, scrape_artifacts

__all__ = [
    "ARTIFACT_SUBDIRECTORIES",
    "ObjectStoreScraper",
    "Scraper",
    "ScrapeError",
    "artifact_directories",
    "scrape_artifacts",
]
