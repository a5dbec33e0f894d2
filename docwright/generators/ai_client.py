"""Claude API client used by the AI-assisted commands.

Wraps the Anthropic SDK behind a single ``complete`` call with rate
limiting, exponential backoff on transient errors, and running token
totals for the end-of-command summary.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Optional

import anthropic

from docwright.utils.config import APIConfig

logger = logging.getLogger(__name__)


@dataclass
class TokenUsage:
    """Token counts for one or more API calls."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def add(self, other: "TokenUsage") -> None:
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens


@dataclass
class Completion:
    """Text returned by one completion call.

    Attributes:
        text: The generated text, stripped of surrounding whitespace.
        usage: Token usage for the call.
        model: Model that produced the text.
        stop_reason: Reason the generation stopped.
    """

    text: str
    usage: TokenUsage
    model: str
    stop_reason: Optional[str] = None


class AIClient:
    """Client for the Anthropic Messages API.

    The SDK client is created on first use, so commands that never reach
    the API (dry runs, empty diffs) work without a key.
    """

    def __init__(self, config: Optional[APIConfig] = None) -> None:
        self.config = config or APIConfig()
        self._api_key = os.getenv("ANTHROPIC_API_KEY", "")
        self._client: Optional[anthropic.Anthropic] = None
        self._last_request_time: float = 0.0
        self._request_interval: float = 60.0 / max(self.config.rate_limit_rpm, 1)
        self.usage = TokenUsage()

    @property
    def client(self) -> anthropic.Anthropic:
        """The authenticated SDK client.

        Raises:
            ValueError: If ANTHROPIC_API_KEY is not set.
        """
        if self._client is None:
            if not self._api_key:
                raise ValueError(
                    "ANTHROPIC_API_KEY environment variable is not set. "
                    "Set it before running AI-assisted commands."
                )
            self._client = anthropic.Anthropic(api_key=self._api_key)
        return self._client

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> Completion:
        """Send a single-turn prompt and return the reply.

        Args:
            prompt: The user message.
            system: Optional system prompt.
            max_tokens: Output token limit. Uses the config default.

        Returns:
            The completion text with its usage.

        Raises:
            ValueError: If the API key is not set.
            anthropic.APIError: If the call fails after all retries.
        """
        self._wait_for_slot()

        kwargs: dict = {
            "model": self.config.model,
            "max_tokens": max_tokens or self.config.max_tokens,
            "temperature": self.config.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        response = self._create_with_retry(**kwargs)

        text = "".join(
            getattr(block, "text", "") for block in response.content or []
        ).strip()
        usage = TokenUsage(
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
        self.usage.add(usage)
        logger.info(
            "Completion used %d tokens (input: %d, output: %d)",
            usage.total_tokens,
            usage.input_tokens,
            usage.output_tokens,
        )
        return Completion(
            text=text,
            usage=usage,
            model=response.model,
            stop_reason=response.stop_reason,
        )

    def _wait_for_slot(self) -> None:
        elapsed = time.monotonic() - self._last_request_time
        if elapsed < self._request_interval:
            delay = self._request_interval - elapsed
            logger.debug("Rate limiting: sleeping %.2f seconds", delay)
            time.sleep(delay)
        self._last_request_time = time.monotonic()

    def _create_with_retry(self, **kwargs: object) -> anthropic.types.Message:
        """Call messages.create, retrying rate limits and server errors.

        Raises:
            anthropic.APIError: If all attempts fail, or on a client error.
        """
        attempts = max(self.config.retry_max_attempts, 1)
        for attempt in range(attempts):
            try:
                return self.client.messages.create(**kwargs)
            except anthropic.APIStatusError as e:
                transient = isinstance(e, anthropic.RateLimitError) or e.status_code >= 500
                if not transient or attempt == attempts - 1:
                    raise
                delay = self.config.retry_base_delay * (2**attempt)
                logger.warning(
                    "API error %d (attempt %d/%d), retrying in %.1f seconds",
                    e.status_code,
                    attempt + 1,
                    attempts,
                    delay,
                )
                time.sleep(delay)
        raise AssertionError("unreachable")
