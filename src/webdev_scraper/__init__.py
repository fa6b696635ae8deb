# ABOUTME: Webdev Scraper - scrape a listing page into a curated article store
# ABOUTME: Layers: extraction (fetch + parse), persistence (SQLModel store), core (ingest + curate)

__version__ = "0.1.0"
