"""Chat-completion client for an OpenAI-compatible LLM API (Groq by default).

One attempt per prompt. Any failure is absorbed into a ``Degraded`` result so
the caller always gets text back.
"""

from typing import Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict

from app.core.config import CompletionSettings, settings
from app.core.logging import logger

DEGRADED_OUTPUT = "AI service unavailable. Please try again later."


class Completed(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class Degraded(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: str
    text: str = DEGRADED_OUTPUT


CompletionResult = Union[Completed, Degraded]


class MalformedResponse(Exception):
    """The API answered but not with a usable first choice."""


def extract_content(data) -> str:
    """Pull ``choices[0].message.content`` out of a completion response body."""
    if not isinstance(data, dict):
        raise MalformedResponse("response body is not an object")

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MalformedResponse("no choices in the response")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise MalformedResponse("first choice has no message")

    content = message.get("content")
    if content is None:
        raise MalformedResponse("message has no content")
    return str(content)


class CompletionClient:
    """Sends single-turn prompts to the configured chat-completions endpoint."""

    def __init__(
        self,
        config: CompletionSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport

    def _build_payload(self, prompt: str) -> dict:
        return {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
        }

    async def complete(self, prompt: str) -> CompletionResult:
        if not self.config.api_key:
            logger.error("GROQ_API_KEY is not set. Add it to your .env file.")
            return Degraded(reason="missing API key")

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.config.url, headers=headers, json=self._build_payload(prompt)
                )
        except httpx.HTTPError as e:
            logger.error(f"LLM request failed: {e.__class__.__name__}: {e}")
            return Degraded(reason=f"transport error: {e.__class__.__name__}")
        except Exception as e:
            logger.exception(f"LLM request could not be sent: {e.__class__.__name__}: {e}")
            return Degraded(reason=f"unexpected error: {e.__class__.__name__}")

        if not response.is_success:
            logger.error(f"LLM API error ({response.status_code}): {response.text}")
            return Degraded(reason=f"status {response.status_code}")

        try:
            content = extract_content(response.json())
        except ValueError:
            logger.warning("LLM API returned a non-JSON body")
            return Degraded(reason="invalid JSON body")
        except MalformedResponse as e:
            logger.warning(f"LLM API returned an unusable response: {e}")
            return Degraded(reason=str(e))

        logger.debug(f"LLM completion received ({len(content)} chars)")
        return Completed(text=content)


# Singleton instance
completion_client = CompletionClient(CompletionSettings.from_settings(settings))
