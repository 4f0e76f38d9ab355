from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, List, Union

Reply = Union[str, BaseException, Callable[[str], str]]


class FakeGenerator:
    """
    Replays scripted replies in order; the last reply repeats.
    A reply may be a string, an exception to raise, or a callable(prompt).
    """

    def __init__(self, *replies: Reply):
        self.replies: List[Reply] = list(replies) or [""]
        self.prompts: List[str] = []
        self._lock = threading.Lock()

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def generate(self, prompt: str) -> str:
        with self._lock:
            self.prompts.append(prompt)
            reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


class FakeRecognizer:
    """
    Maps image bytes to recognized text, or to an exception to raise.
    `delays` (seconds per image bytes) lets tests scramble completion order.
    """

    def __init__(self, results: Dict[bytes, Any], delays: Dict[bytes, float] | None = None):
        self.results = results
        self.delays = delays or {}
        self.seen: List[bytes] = []
        self._lock = threading.Lock()

    def recognize(self, image_bytes: bytes, mime_type: str = "image/png") -> str:
        with self._lock:
            self.seen.append(image_bytes)
        time.sleep(self.delays.get(image_bytes, 0))
        result = self.results[image_bytes]
        if isinstance(result, BaseException):
            raise result
        return result
