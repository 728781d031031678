"""Claimdesk configuration — loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # --- Ingestion ------------------------------------------------------
    cron_secret: str = ""  # shared secret expected as "Authorization: Bearer <secret>"
    rss_feeds: str = ""  # comma-separated feed URLs
    max_feed_entries: int = 30

    # --- Store (Supabase) -----------------------------------------------
    supabase_url: str = ""
    supabase_service_role: str = ""

    # --- LLM provider (optional) ----------------------------------------
    openai_api_key: str = ""
    llm_model: str = "gpt-4o-mini"
    llm_base_url: str = ""  # OpenAI-compatible endpoint; empty → api.openai.com
    llm_temperature: float = 0.2

    # --- Outbound calls -------------------------------------------------
    http_timeout: float = 15.0

    # --- Server ---------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"
    allowed_origins: str = "*"  # comma-separated origins

    @property
    def feed_urls(self) -> list[str]:
        return [u.strip() for u in self.rss_feeds.split(",") if u.strip()]

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role)

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)


settings = Settings()
