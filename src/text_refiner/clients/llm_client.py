"""Claude API wrapper implementing the generation capability."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

import anthropic
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"

SCHEMA_SYSTEM = """\
You reply with a single JSON object and nothing else.
The object MUST conform to this JSON schema:
{schema}"""


@dataclass
class LLMResponse:
    """Raw reply text plus the usage and stop metadata of one call."""

    text: str
    model: str
    input_tokens: int
    output_tokens: int
    truncated: bool = False


class LLMClient:
    """Async Claude API client with exponential-backoff retries."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        *,
        model: str = DEFAULT_MODEL,
        max_retries: int = 3,
        max_tokens: int = 8192,
        temperature: float = 0.2,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.model = model
        self.max_retries = max_retries
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._token_log: list[LLMResponse] = []

    async def _call_api(self, prompt: str, system: str) -> anthropic.types.Message:
        """Make the actual API call with retry logic."""
        kwargs: dict = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(min=1, max=10),
            reraise=True,
        ):
            with attempt:
                return await self.client.messages.create(**kwargs)

    async def complete(self, prompt: str, system: str = "") -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage."""
        logger.debug("LLM call: model=%s", self.model)
        try:
            message = await self._call_api(prompt, system)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise
        response = LLMResponse(
            text=message.content[0].text,
            model=self.model,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
            truncated=message.stop_reason == "max_tokens",
        )
        logger.debug(
            "LLM response: %d input, %d output tokens", response.input_tokens, response.output_tokens
        )
        if response.truncated:
            logger.warning("Reply stopped at max_tokens=%d; the JSON is likely incomplete", self.max_tokens)
        self._token_log.append(response)
        return response

    async def generate(self, instructions: str, schema: dict) -> str:
        """Run the directive and return the raw reply text.

        The schema travels in the system prompt; the reply is not parsed here.
        """
        system = SCHEMA_SYSTEM.format(schema=json.dumps(schema, indent=2))
        response = await self.complete(instructions, system=system)
        return response.text

    def get_token_summary(self) -> dict:
        """Return token usage since the last summary and reset the log.

        Keys: input, output, requests, truncated (replies cut off at max_tokens).
        """
        summary = {
            "input": sum(r.input_tokens for r in self._token_log),
            "output": sum(r.output_tokens for r in self._token_log),
            "requests": len(self._token_log),
            "truncated": sum(1 for r in self._token_log if r.truncated),
        }
        self._token_log.clear()
        return summary
