"""Shared in-memory fakes for the store and the chat service."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from errors import StoreError
from schemas.article import ArticleRecord, StoredArticle

ARTICLE_ID = "3f1c2b7a-9d4e-4c1a-8b2f-0e6d5a4c3b21"
MOD_KEY = "mod-secret"


class FakeStore:
    """Mimics ``ArticleStore``: url-keyed upserts, one admin row, articles by id."""

    def __init__(self, mod_key: str | None = MOD_KEY) -> None:
        self.mod_key = mod_key
        self.rows: dict[str, dict] = {}
        self.articles: dict[str, StoredArticle] = {}
        self.fail_urls: set[str] = set()
        self.upsert_calls = 0
        self.article_loads = 0

    def upsert_article(self, record: ArticleRecord) -> None:
        self.upsert_calls += 1
        if record.url in self.fail_urls:
            raise StoreError(f"Upsert failed for {record.url}", detail="simulated")
        self.rows[record.url] = record.model_dump()

    def fetch_mod_key(self) -> str | None:
        return self.mod_key

    def fetch_article(self, article_id: str) -> StoredArticle | None:
        self.article_loads += 1
        return self.articles.get(article_id)

    def add_article(self, **fields) -> StoredArticle:
        article = StoredArticle(id=fields.pop("id", ARTICLE_ID), **fields)
        self.articles[article.id] = article
        return article


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def chat() -> AsyncMock:
    """Stand-in for ``ChatService``; set ``chat.complete.return_value`` per test."""
    fake = AsyncMock()
    fake.complete = AsyncMock(return_value="[]")
    return fake
