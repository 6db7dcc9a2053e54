"""AI gateway: one place that talks to the generative model (OpenAI chat completions)."""

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Type, TypeVar

import httpx
from openai import APIError, AsyncOpenAI
from pydantic import BaseModel, ValidationError

from resmo.config import (
    AI_CONNECT_TIMEOUT_SECONDS,
    AI_TEMPERATURE,
    AI_TIMEOUT_SECONDS,
    MODEL_NAME,
    OPENAI_API_KEY,
    OPENAI_BASE_URL,
)
from resmo.errors import InvalidResponseKind, RemoteCallFailure
from resmo.schemas.candidate import ResumeImage
from resmo.utils.helpers import parse_llm_json
from resmo.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

STRUCTURED_SYSTEM_PROMPT = """You are the AI assistant of a recruiting dashboard.
Return only valid JSON matching this JSON schema (no markdown, no code block):
{schema}
Use exactly the field names from the schema."""

TEXT_SYSTEM_PROMPT = "You are the AI assistant of a recruiting dashboard. Answer with plain text only."


def _user_content(prompt: str, images: Optional[Sequence[ResumeImage]]) -> Any:
    """Plain string for text-only prompts, content parts when images are attached."""
    if not images:
        return prompt
    parts: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
    for image in images:
        parts.append(
            {
                "type": "image_url",
                "image_url": {"url": f"data:{image.mime_type};base64,{image.data}"},
            }
        )
    return parts


class AIGateway:
    """
    Stateless wrapper around the model. Structured calls validate the reply
    against a pydantic model; text calls return the reply verbatim (stripped).
    No retries: callers decide on fallbacks.

    Unless a client is injected, each call opens its own ``AsyncOpenAI`` and
    closes it before returning, so the connection pool never outlives the
    event loop that ``run_sync`` creates for the call.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: str = MODEL_NAME,
        api_key: str = OPENAI_API_KEY,
        timeout_seconds: float = AI_TIMEOUT_SECONDS,
        base_url: str = OPENAI_BASE_URL,
    ) -> None:
        self._client = client
        self._model = model
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url or None

    @property
    def model(self) -> str:
        return self._model

    @asynccontextmanager
    async def _client_session(self) -> AsyncIterator[AsyncOpenAI]:
        if self._client is not None:
            yield self._client
            return
        if not self._api_key:
            raise RemoteCallFailure("OPENAI_API_KEY is not set. Add it to your .env file.")
        async with AsyncOpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout_seconds, connect=AI_CONNECT_TIMEOUT_SECONDS),
            max_retries=0,
        ) as client:
            yield client

    async def _complete(self, messages: List[Dict[str, Any]], json_mode: bool) -> str:
        kwargs: Dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "temperature": AI_TEMPERATURE,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            async with self._client_session() as client:
                response = await client.chat.completions.create(**kwargs)
        except APIError as e:
            logger.warning("Model call failed (%s): %s", type(e).__name__, e)
            raise RemoteCallFailure(f"AI service request failed: {e}") from e
        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            raise InvalidResponseKind("AI service returned an empty response.")
        return choice.message.content

    async def generate_structured(
        self,
        prompt: str,
        schema: Type[T],
        images: Optional[Sequence[ResumeImage]] = None,
    ) -> T:
        """Send ``prompt`` (and optional page images); parse the JSON reply into ``schema``."""
        system = STRUCTURED_SYSTEM_PROMPT.format(schema=json.dumps(schema.model_json_schema()))
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": _user_content(prompt, images)},
        ]
        logger.debug("Structured call: schema=%s images=%s", schema.__name__, len(images or []))
        raw = await self._complete(messages, json_mode=True)
        parsed = parse_llm_json(raw)
        if parsed is None:
            logger.warning("Unparseable JSON for %s: %.200s", schema.__name__, raw)
            raise InvalidResponseKind("Invalid JSON response from AI model.")
        try:
            return schema.model_validate(parsed)
        except ValidationError as e:
            logger.warning("Response did not match %s: %s", schema.__name__, e)
            raise InvalidResponseKind(f"AI response did not match {schema.__name__}.") from e

    async def generate_text(
        self,
        prompt: str,
        images: Optional[Sequence[ResumeImage]] = None,
    ) -> str:
        """Send ``prompt`` (and optional page images); return the raw text reply."""
        messages = [
            {"role": "system", "content": TEXT_SYSTEM_PROMPT},
            {"role": "user", "content": _user_content(prompt, images)},
        ]
        logger.debug("Text call: images=%s", len(images or []))
        text = (await self._complete(messages, json_mode=False)).strip()
        if not text:
            raise InvalidResponseKind("AI service returned an empty response.")
        return text
