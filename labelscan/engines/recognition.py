# labelscan/engines/recognition.py
from __future__ import annotations

import base64
import io
import logging
from typing import Optional

import openai
import pytesseract
from PIL import Image, UnidentifiedImageError

from labelscan.errors import RecognitionError
from labelscan.utils.utils_retries import GPTRetryable, chat_with_attempts

logger = logging.getLogger(__name__)

NO_TEXT_TOKEN = "NO_TEXT_FOUND"

LABEL_OCR_SYSTEM = f"""
You are an exacting OCR agent. You will be given a photo of a food or grocery product label.
Rules:
- Return ALL visible text exactly as printed. Preserve punctuation, brackets, symbols (%), numbers and dates.
- Keep the reading order: top to bottom, left to right. One printed line per output line.
- Do NOT infer, translate or add text that is not clearly readable.
- If no text is readable, output exactly: {NO_TEXT_TOKEN}
- Output plain text only.
""".strip()


def _encode_data_url(image_bytes: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(image_bytes).decode()}"


def _open_image(image_bytes: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(image_bytes))
        return img.convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        raise RecognitionError(f"Could not open image: {e}") from e


class TesseractRecognizer:
    """Local OCR through the tesseract binary."""

    def __init__(self, lang: str = "eng", config: str = ""):
        self.lang = lang
        self.config = config

    def recognize(self, image_bytes: bytes, mime_type: str = "image/png") -> str:
        img = _open_image(image_bytes)
        try:
            text = pytesseract.image_to_string(img, lang=self.lang, config=self.config)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            raise RecognitionError(f"Tesseract failed: {e}") from e
        return (text or "").strip()


class OpenAIVisionRecognizer:
    """OCR through a vision-capable chat model."""

    def __init__(self, client=None, *, model: str = "gpt-4o", attempts: int = 3, timeout: float = 90):
        self._client = client
        self.model = model
        self.attempts = attempts
        self.timeout = timeout

    @property
    def client(self):
        if self._client is None:
            self._client = openai.OpenAI()
        return self._client

    def recognize(self, image_bytes: bytes, mime_type: str = "image/png") -> str:
        if not image_bytes:
            raise RecognitionError("Empty image")
        try:
            text = chat_with_attempts(
                self.client,
                attempts=self.attempts,
                model=self.model,
                timeout=self.timeout,
                messages=[
                    {"role": "system", "content": LABEL_OCR_SYSTEM},
                    {"role": "user", "content": [
                        {"type": "text", "text": "Transcribe all text on this label."},
                        {"type": "image_url", "image_url": {"url": _encode_data_url(image_bytes, mime_type or "image/png")}}
                    ]}
                ],
            )
        except (GPTRetryable, openai.OpenAIError) as e:
            raise RecognitionError(f"Vision OCR failed: {e}") from e
        if text.strip().upper() == NO_TEXT_TOKEN:
            return ""
        return text.strip()


def build_recognizer(engine: str, *, lang: str = "eng", client=None, model: str = "gpt-4o",
                     attempts: int = 3, timeout: float = 90) -> "TesseractRecognizer | OpenAIVisionRecognizer":
    if engine == "tesseract":
        return TesseractRecognizer(lang=lang)
    if engine == "openai":
        return OpenAIVisionRecognizer(client, model=model, attempts=attempts, timeout=timeout)
    raise ValueError(f"Unsupported OCR engine: {engine}")
