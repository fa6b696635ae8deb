# ABOUTME: Persistence models for scraped articles and their notes
# ABOUTME: Articles carry save state and an optional reference to a single note

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import UniqueConstraint
from sqlmodel import JSON, Column, Field, SQLModel

UNSAVED_STATUS = "Save Article"
SAVED_STATUS = "Saved"


def utcnow() -> datetime:
    """Returns the current UTC timestamp."""

    return datetime.now(UTC)


def status_for(saved: bool) -> str:
    """Display label mirroring the saved flag."""
    return SAVED_STATUS if saved else UNSAVED_STATUS


def as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; stored timestamps are always UTC."""
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class Note(SQLModel, table=True):
    """Free-form annotation attached to an article."""

    __tablename__ = "note"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True, description="Primary key for the note")
    body: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="Whatever fields the caller supplied",
    )
    created_at: datetime = Field(default_factory=utcnow, description="Creation timestamp")

    def to_dict(self) -> dict[str, Any]:
        return {**self.body, "id": self.id}


class Article(SQLModel, table=True):
    """A scraped listing item."""

    __tablename__ = "article"  # type: ignore[assignment]
    __table_args__ = (UniqueConstraint("title", "link", name="uq_article_title_link"),)

    id: int | None = Field(default=None, primary_key=True, description="Primary key for the article")
    title: str = Field(default="", description="Trimmed text of the title element")
    link: str | None = Field(default=None, description="href of the title's anchor, if any")
    saved: bool = Field(default=False, index=True, description="Whether the user saved this article")
    status: str = Field(default=UNSAVED_STATUS, description="Display label mirroring saved")
    created_at: datetime = Field(default_factory=utcnow, index=True, description="Creation timestamp")
    note_id: int | None = Field(default=None, foreign_key="note.id", description="Currently attached note")

    def to_dict(self, note: Note | None = None) -> dict[str, Any]:
        """JSON-serializable record shape exposed to collaborators.

        When ``note`` is given it is populated in place of the bare note id.
        """
        record: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "saved": self.saved,
            "status": self.status,
            "createdAt": as_utc(self.created_at).isoformat(),
        }
        if note is not None:
            record["note"] = note.to_dict()
        elif self.note_id is not None:
            record["note"] = self.note_id
        return record
