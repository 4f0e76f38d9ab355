# labelscan/engines/generation.py
from __future__ import annotations

import logging

import openai

from labelscan.errors import GenerationEngineError
from labelscan.utils.utils_retries import GPTRetryable, chat_with_attempts

logger = logging.getLogger(__name__)


class OpenAIGenerator:
    """Single-prompt text generation over OpenAI chat completions."""

    def __init__(self, client=None, *, model: str = "gpt-4o-mini", temperature: float = 0,
                 attempts: int = 3, timeout: float = 90):
        self._client = client
        self.model = model
        self.temperature = temperature
        self.attempts = attempts
        self.timeout = timeout

    @property
    def client(self):
        if self._client is None:
            self._client = openai.OpenAI()
        return self._client

    def generate(self, prompt: str) -> str:
        try:
            return chat_with_attempts(
                self.client,
                attempts=self.attempts,
                model=self.model,
                temperature=self.temperature,
                timeout=self.timeout,
                messages=[{"role": "user", "content": prompt}],
            )
        except (GPTRetryable, openai.OpenAIError) as e:
            logger.error("Generation call failed (model=%s): %s", self.model, e)
            raise GenerationEngineError(f"Generation engine failed: {e}") from e
