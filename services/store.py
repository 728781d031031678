"""Article store backed by Supabase (PostgREST)."""

from __future__ import annotations

import logging

import httpx
from postgrest.exceptions import APIError
from supabase import Client, ClientOptions, create_client

from config import Settings
from errors import StoreError
from schemas.article import ArticleRecord, StoredArticle

logger = logging.getLogger("claimdesk.store")

ARTICLES_TABLE = "articles"
ADMIN_CONFIG_TABLE = "admin_config"
_ARTICLE_COLUMNS = "id, headline, ai_summary, url, outlet"


class ArticleStore:
    """Thin wrapper over the Supabase client.

    Every failed round trip surfaces as ``StoreError``; callers decide whether
    it is fatal.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> ArticleStore:
        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
            postgrest_client_timeout=settings.http_timeout,
        )
        client = create_client(settings.supabase_url, settings.supabase_service_role, options=options)
        return cls(client)

    def upsert_article(self, record: ArticleRecord) -> None:
        """Insert or replace the row sharing ``record.url``."""
        try:
            (
                self._client.table(ARTICLES_TABLE)
                .upsert(record.model_dump(), on_conflict="url")
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError(f"Upsert failed for {record.url}", detail=str(exc)) from exc

    def fetch_mod_key(self) -> str | None:
        try:
            resp = self._client.table(ADMIN_CONFIG_TABLE).select("mod_key").limit(1).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError("Failed to load moderator configuration", detail=str(exc)) from exc
        rows = resp.data or []
        if not rows:
            return None
        return rows[0].get("mod_key") or None

    def fetch_article(self, article_id: str) -> StoredArticle | None:
        try:
            resp = (
                self._client.table(ARTICLES_TABLE)
                .select(_ARTICLE_COLUMNS)
                .eq("id", article_id)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise StoreError(f"Failed to load article {article_id}", detail=str(exc)) from exc
        rows = resp.data or []
        if not rows:
            return None
        return StoredArticle.model_validate(rows[0])
