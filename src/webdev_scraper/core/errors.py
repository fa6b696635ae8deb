# ABOUTME: Exception hierarchy shared by the extraction, persistence and core layers
# ABOUTME: Fetch, persistence and not-found failures surfaced to the trigger surface


class ScraperError(Exception):
    """Base class for all webdev-scraper errors."""

    pass


class FetchError(ScraperError):
    """Raised when the source listing page cannot be fetched."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class PersistenceError(ScraperError):
    """Raised when the store is unreachable or a write fails."""

    pass


class DuplicateRecordError(PersistenceError):
    """Raised when an article with the same (title, link) already exists."""

    def __init__(self, title: str, link: str | None):
        super().__init__(f"Article already exists: title={title!r} link={link!r}")
        self.title = title
        self.link = link


class NoteLinkError(PersistenceError):
    """Raised when a note was created but could not be linked to its article.

    The created note is left in the store; ``note_id`` lets the caller decide
    whether to clean it up.
    """

    def __init__(self, message: str, article_id: int, note_id: int):
        super().__init__(message)
        self.article_id = article_id
        self.note_id = note_id


class NotFoundError(ScraperError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
