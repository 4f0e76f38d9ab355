# labelscan/utils/utils_retries.py
from __future__ import annotations

from typing import Any, Dict, List

import openai
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

TRANSIENT_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


class GPTRetryable(Exception):
    """Used to mark transient errors for retry."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause) or cause.__class__.__name__)
        self.cause = cause


@retry(
    reraise=True,
    stop=stop_after_attempt(3),                      # overridden per call via .retry_with
    wait=wait_exponential_jitter(initial=1, max=30), # 1s → 30s with jitter
    retry=retry_if_exception_type(GPTRetryable)
)
def safe_chat_completion(client, *, model: str, messages: List[Dict[str, Any]],
                         temperature: float = 0, top_p: float = 0, timeout: float = 90) -> str:
    """OpenAI chat completion with timeouts + retries for transient failures."""
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            top_p=top_p,
            timeout=timeout,
        )
    except TRANSIENT_ERRORS as e:
        raise GPTRetryable(e) from e
    if not resp.choices:
        return ""
    return (resp.choices[0].message.content or "").strip()


def chat_with_attempts(client, *, attempts: int, **kwargs) -> str:
    """Same as safe_chat_completion with a caller-chosen attempt budget (1 = no retry)."""
    return safe_chat_completion.retry_with(stop=stop_after_attempt(attempts))(client, **kwargs)
