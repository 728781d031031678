"""Error taxonomy shared by both pipelines.

Every error carries a human-readable ``message`` and an optional ``detail``;
``main.py`` renders them as ``ErrorResponse`` with the class's ``status_code``.
"""

from __future__ import annotations


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(AppError):
    """Missing/malformed request parameters or missing configuration."""

    status_code = 400


class AuthError(AppError):
    """Bad or missing shared secret / moderator key."""

    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class UpstreamServiceError(AppError):
    """The generation service answered with a non-success status or was unreachable."""

    status_code = 502


class InternalError(AppError):
    status_code = 500


class StoreError(InternalError):
    """A read or write against the article store failed."""


class FeedFetchError(InternalError):
    """A feed source could not be fetched or parsed."""
