from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from kalima.models.article import Article
from kalima.models.user import UserProfile
from kalima.services.firebase_service import FirebaseService


def _article_doc(
    slug,
    languages=("en",),
    category="culture",
    subcategory="food",
    draft=False,
    created=None,
    titles=None,
    paragraph="Body text",
):
    """Firestore-shaped article document"""
    titles = titles or {}
    translations = {}
    for code in languages:
        translations[code] = {
            "title": titles.get(code, f"{slug} ({code})"),
            "summary": f"Summary {code}",
            "category": category,
            "subcategory": subcategory,
            "keywords": [],
            "content": [{"title": None, "paragraph": paragraph, "references": []}],
        }
    doc = {
        "slug": slug,
        "availableLanguages": list(languages),
        "translations": translations,
        "draft": draft,
        "imageUrl": "",
    }
    if created is not None:
        doc["createdAt"] = datetime(2024, 1, created, tzinfo=timezone.utc)
    return doc


def _make_article(doc_id, **kwargs) -> Article:
    return Article.model_validate({**_article_doc(kwargs.pop("slug", doc_id), **kwargs), "id": doc_id})


@pytest.fixture
def article_doc():
    return _article_doc


@pytest.fixture
def make_article():
    return _make_article


@pytest.fixture
def mock_store():
    """A FirebaseService double; every call is an AsyncMock"""
    return AsyncMock(spec=FirebaseService)


@pytest.fixture
def reader():
    return UserProfile(uid="u1", email="reader@example.com", display_name="Reader")


@pytest.fixture
def admin_user():
    return UserProfile(uid="a1", email="admin@example.com", display_name="Admin", is_admin=True)
