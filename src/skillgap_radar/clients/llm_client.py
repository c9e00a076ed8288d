"""Claude API wrapper with async support and provider error mapping."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import anthropic

from skillgap_radar.errors import ModelUnavailableError, ProviderError
from skillgap_radar.utils.json_parser import parse_json_object

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int
    stop_reason: str | None = None


class LLMClient:
    """Async Claude API client.

    Failures are not retried; every SDK error is translated into a
    ProviderError (or ModelUnavailableError for an unknown model id).
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        if max_retries is not None:
            kwargs["max_retries"] = max_retries
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    async def _call_api(
        self,
        content: str | list[dict[str, Any]],
        system: str,
        model: str,
        temperature: float,
        max_tokens: int,
        thinking_budget: int,
    ) -> anthropic.types.Message:
        """Make the actual API call."""
        messages = [{"role": "user", "content": content}]
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if thinking_budget > 0:
            # extended thinking rejects any temperature other than the default
            kwargs["thinking"] = {"type": "enabled", "budget_tokens": thinking_budget}
        else:
            kwargs["temperature"] = temperature
        if system:
            kwargs["system"] = system
        return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        content: str | list[dict[str, Any]],
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 8192,
        thinking_budget: int = 0,
    ) -> LLMResponse:
        """Send a prompt (or a list of content blocks) and return the text response."""
        logger.debug("LLM call: model=%s thinking_budget=%d", model, thinking_budget)
        try:
            message = await self._call_api(
                content=content,
                system=system,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                thinking_budget=thinking_budget,
            )
        except anthropic.NotFoundError as exc:
            logger.error("Model %s not found", model, exc_info=True)
            raise ModelUnavailableError(model) from exc
        except anthropic.APIError as exc:
            logger.error("LLM call failed", exc_info=True)
            raise ProviderError(f"AI Request Failed: {exc}") from exc

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))

        if message.stop_reason == "max_tokens":
            logger.warning("LLM response truncated at max_tokens=%d", max_tokens)

        # thinking blocks precede the answer; only text blocks carry it
        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            stop_reason=message.stop_reason,
        )

    async def generate_json(
        self,
        content: str | list[dict[str, Any]],
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 8192,
        thinking_budget: int = 0,
    ) -> dict:
        """Send a prompt and parse the response as a single JSON object."""
        response = await self.generate(
            content=content,
            system=system,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            thinking_budget=thinking_budget,
        )
        if not response.text.strip():
            raise ProviderError("Empty response from AI model")
        try:
            return parse_json_object(response.text)
        except ValueError as exc:
            logger.error("Could not parse model output: %s", response.text[:200])
            raise ProviderError(f"AI Request Failed: {exc}") from exc

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
