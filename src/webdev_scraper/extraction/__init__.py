# ABOUTME: Data extraction from the remote listing page
# ABOUTME: Pipeline Stage 1: Fetch raw HTML and turn it into article candidates

"""
Extraction Layer: Get raw data from external sources

This layer handles:
- Fetching the listing page over HTTP
- Parsing title elements and their links into candidates

Data Flow: Listing page → Candidates → Ingestion coordinator
"""

from .base import Candidate, SourceFetcher
from .fetcher import HttpSourceFetcher
from .listing import CandidateSequence, ListingExtractor

__all__ = [
    "Candidate",
    "CandidateSequence",
    "HttpSourceFetcher",
    "ListingExtractor",
    "SourceFetcher",
]
