# ABOUTME: Business logic and orchestration layer
# ABOUTME: Pipeline Stage 3: Ingestion with dedup and curation of stored articles

"""
Core Layer: Business logic and workflow orchestration

This layer handles:
- Ingestion: fetch → extract → dedup → create
- Curation: save toggling and note attachment
- The error taxonomy surfaced to callers

Data Flow: extraction/ candidates → persistence/ store → trigger surface
"""

from .errors import (
    DuplicateRecordError,
    FetchError,
    NoteLinkError,
    NotFoundError,
    PersistenceError,
    ScraperError,
)

# Import services on-demand to avoid circular imports
# Use: from webdev_scraper.core.ingestion import IngestionCoordinator

__all__ = [
    "DuplicateRecordError",
    "FetchError",
    "NoteLinkError",
    "NotFoundError",
    "PersistenceError",
    "ScraperError",
]
