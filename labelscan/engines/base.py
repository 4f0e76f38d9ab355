# labelscan/engines/base.py
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Recognizer(Protocol):
    """
    Optical-recognition engine.

    Returns the full text visible in one image ("" when nothing is readable)
    or raises; the OCR stage isolates the raise to that image.
    """

    def recognize(self, image_bytes: bytes, mime_type: str = "image/png") -> str:
        ...


@runtime_checkable
class Generator(Protocol):
    """
    Text-generation engine. No guarantee the reply is JSON, or valid JSON.
    Raises GenerationEngineError on transport/service failure.
    """

    def generate(self, prompt: str) -> str:
        ...
