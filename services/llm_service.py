"""Thin wrapper around an OpenAI-compatible chat-completions endpoint."""

from __future__ import annotations

import logging
from typing import Any

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from config import Settings
from errors import UpstreamServiceError

logger = logging.getLogger("claimdesk.llm")


class ChatService:
    """One configured client + model; a single round trip per call, no retries."""

    def __init__(self, client: AsyncOpenAI, model: str, *, temperature: float = 0.2) -> None:
        self._client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> ChatService | None:
        """Return ``None`` when no API key is configured."""
        if not settings.llm_enabled:
            return None
        client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.llm_base_url or None,
            timeout=settings.http_timeout,
            max_retries=0,
        )
        return cls(client, settings.llm_model, temperature=settings.llm_temperature)

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        *,
        temperature: float | None = None,
    ) -> str:
        """Send a chat-completion request and return the assistant's text reply.

        Parameters
        ----------
        system_prompt : str
            The system-level instruction.
        user_message : str
            The user-level content.
        temperature : float, optional
            Sampling temperature; defaults to the configured value.

        Returns
        -------
        str
            Raw text content of the assistant reply, ``""`` if it had none.

        Raises
        ------
        UpstreamServiceError
            Non-success status or transport failure; ``detail`` holds the
            upstream body when there is one.
        """
        kwargs: dict[str, Any] = {
            "model": self.model,
            "temperature": temperature if temperature is not None else self.temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        }

        try:
            response = await self._client.chat.completions.create(**kwargs)
        except APIStatusError as exc:
            logger.error("LLM returned HTTP %s", exc.status_code)
            raise UpstreamServiceError("LLM error", detail=exc.response.text) from exc
        except APIConnectionError as exc:
            logger.error("LLM unreachable: %s", exc)
            raise UpstreamServiceError("LLM error", detail=str(exc)) from exc

        if not response.choices:
            return ""
        content = response.choices[0].message.content
        return (content or "").strip()
