"""Claimdesk — news-feed ingestion and claim-suggestion service.

FastAPI application entry-point.
"""

from __future__ import annotations

import logging
import secrets
import sys
from contextlib import asynccontextmanager
from functools import partial

from fastapi import Depends, FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from engine.ingestion import run_ingestion
from engine.suggestion import suggest_claims
from errors import AppError, AuthError, InternalError
from schemas.response import ErrorResponse, IngestResponse, SuggestResponse
from services.feed_service import fetch_feed
from services.llm_service import ChatService
from services.store import ArticleStore

VERSION = "0.1.0"

# ── Logging ────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("claimdesk")


# ── Service handles ────────────────────────────────────────────────────

def get_store(request: Request) -> ArticleStore | None:
    return getattr(request.app.state, "store", None)


def get_chat(request: Request) -> ChatService | None:
    return getattr(request.app.state, "chat", None)


# ── Cron-secret auth dependency ────────────────────────────────────────

async def verify_cron_secret(
    authorization: str | None = Header(default=None),
) -> None:
    """Reject ingest calls that don't carry ``Authorization: Bearer <CRON_SECRET>``.

    An unset ``CRON_SECRET`` rejects everything.
    """
    expected = settings.cron_secret
    if not expected:
        logger.warning("CRON_SECRET is not configured; rejecting ingest request.")
        raise AuthError("Unauthorized")
    got = authorization or ""
    if not secrets.compare_digest(got.encode(), f"Bearer {expected}".encode()):
        raise AuthError("Unauthorized")


# ── Lifespan ───────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store = ArticleStore.from_settings(settings) if settings.store_configured else None
    app.state.chat = ChatService.from_settings(settings)
    logger.info(
        "Claimdesk starting — model=%s llm=%s feeds=%d store=%s",
        settings.llm_model,
        "enabled" if app.state.chat else "disabled (fallback only)",
        len(settings.feed_urls),
        "configured" if app.state.store else "missing",
    )
    yield
    logger.info("Claimdesk shutting down.")


# ── App ────────────────────────────────────────────────────────────────

app = FastAPI(
    title="Claimdesk",
    description="Feed ingestion into the shared article store and claim suggestions for moderators.",
    version=VERSION,
    lifespan=lifespan,
)

_origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:  # noqa: ARG001
    body = ErrorResponse(error=exc.message, detail=exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# ── Routes ─────────────────────────────────────────────────────────────

@app.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "engine": "claimdesk",
        "version": VERSION,
        "llm_enabled": get_chat(request) is not None,
        "store_configured": get_store(request) is not None,
    }


@app.api_route(
    "/api/ingest",
    methods=["GET", "POST"],
    response_model=IngestResponse,
    responses=_ERROR_RESPONSES,
    summary="Ingest configured RSS feeds",
    description="Fetches up to 30 entries per configured feed and upserts them into the "
    "articles table keyed by url. Intended to be triggered by a scheduler.",
    dependencies=[Depends(verify_cron_secret)],
)
def ingest(store: ArticleStore | None = Depends(get_store)) -> IngestResponse:
    try:
        result = run_ingestion(
            settings.feed_urls,
            store,
            fetch=partial(fetch_feed, timeout=settings.http_timeout),
            max_entries=settings.max_feed_entries,
        )
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Ingestion failed")
        raise InternalError(str(exc) or "ingest failed") from exc
    return IngestResponse(ok=True, scanned=result.scanned, inserted=result.inserted)


@app.api_route(
    "/api/suggest-claims",
    methods=["GET", "POST"],
    response_model=SuggestResponse,
    responses={**_ERROR_RESPONSES, 404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Suggest claims for an article",
    description="Returns up to three claim suggestions with verdicts for moderator review. "
    "Uses the LLM when configured, otherwise sentences from the article summary.",
)
async def suggest(
    key: str | None = Query(default=None),
    article_id: str | None = Query(default=None, alias="articleId"),
    store: ArticleStore | None = Depends(get_store),
    chat: ChatService | None = Depends(get_chat),
) -> SuggestResponse:
    try:
        return await suggest_claims(key, article_id, store, chat)
    except AppError:
        raise
    except Exception as exc:
        logger.exception("Claim suggestion failed")
        raise InternalError("suggest-claims failed", detail=str(exc)) from exc


# ── Dev runner ─────────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        reload=True,
    )
