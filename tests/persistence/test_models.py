# ABOUTME: Model-level tests for article and note persistence schema
# ABOUTME: Ensures SQLModel definitions expose expected defaults and record shapes

from __future__ import annotations

from datetime import UTC, datetime

from webdev_scraper.persistence.models import SAVED_STATUS, UNSAVED_STATUS, Article, Note, status_for


def test_article_defaults():
    article = Article(title="Post A", link="/a")

    assert article.id is None
    assert article.saved is False
    assert article.status == UNSAVED_STATUS == "Save Article"
    assert article.note_id is None
    assert article.created_at.tzinfo is UTC


def test_article_link_optional():
    article = Article(title="Post B")
    assert article.link is None


def test_status_for_mirrors_saved():
    assert status_for(True) == SAVED_STATUS == "Saved"
    assert status_for(False) == UNSAVED_STATUS


def test_article_to_dict_shape():
    created = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)
    article = Article(id=3, title="Post A", link="/a", created_at=created)

    assert article.to_dict() == {
        "id": 3,
        "title": "Post A",
        "link": "/a",
        "saved": False,
        "status": "Save Article",
        "createdAt": created.isoformat(),
    }


def test_article_to_dict_note_reference_and_population():
    article = Article(id=1, title="Post A", link="/a", note_id=9)
    note = Note(id=9, body={"title": "Later", "body": "Read this"})

    assert article.to_dict()["note"] == 9
    assert article.to_dict(note=note)["note"] == {"id": 9, "title": "Later", "body": "Read this"}


def test_note_to_dict_keeps_store_id():
    note = Note(id=4, body={"id": "caller-supplied", "text": "hi"})
    assert note.to_dict() == {"id": 4, "text": "hi"}


def test_article_to_dict_treats_naive_timestamp_as_utc():
    article = Article(id=3, title="Post A", created_at=datetime(2024, 5, 1, 12, 30))

    assert article.to_dict()["createdAt"] == "2024-05-01T12:30:00+00:00"
