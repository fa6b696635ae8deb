# ABOUTME: Database operations and data persistence layer
# ABOUTME: Pipeline Stage 2: Candidates → stored articles and notes

"""
Persistence Layer: Save and retrieve articles and notes

This layer handles:
- SQLModel tables for articles and notes
- Create/find/update helpers used by ingestion and curation
- Mapping database failures to PersistenceError

Data Flow: extraction/ candidates → Database → core/ curation
"""

from .manager import RecordStore
from .models import SAVED_STATUS, UNSAVED_STATUS, Article, Note

__all__ = [
    "RecordStore",
    "Article",
    "Note",
    "SAVED_STATUS",
    "UNSAVED_STATUS",
]
