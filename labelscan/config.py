# labelscan/config.py
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

OCR_ENGINES = ("tesseract", "openai")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}")


def _env_str(env: Mapping[str, str], key: str, default: str) -> str:
    return (env.get(key) or "").strip() or default


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration.

    Only `from_env` touches the environment; pipeline modules take the values
    they need as arguments.
    """

    generation_model: str = "gpt-4o-mini"
    vision_model: str = "gpt-4o"
    ocr_engine: str = "tesseract"
    tesseract_lang: str = "eng"
    max_images: int = 4
    max_image_bytes: int = 5 * 1024 * 1024
    engine_max_attempts: int = 3
    engine_timeout_s: float = 90.0
    batch_workers: int = 1
    allowed_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.ocr_engine not in OCR_ENGINES:
            raise ValueError(f"ocr_engine must be one of {OCR_ENGINES}, got {self.ocr_engine!r}")
        if self.max_images < 1:
            raise ValueError("max_images must be >= 1")
        if self.max_image_bytes < 1:
            raise ValueError("max_image_bytes must be >= 1")
        if self.engine_max_attempts < 1:
            raise ValueError("engine_max_attempts must be >= 1")
        if self.engine_timeout_s <= 0:
            raise ValueError("engine_timeout_s must be > 0")
        if self.batch_workers < 1:
            raise ValueError("batch_workers must be >= 1")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        origins = tuple(
            o.strip() for o in _env_str(env, "LABELSCAN_ALLOWED_ORIGINS", "*").split(",") if o.strip()
        )
        return cls(
            generation_model=_env_str(env, "LABELSCAN_GENERATION_MODEL", cls.generation_model),
            vision_model=_env_str(env, "LABELSCAN_VISION_MODEL", cls.vision_model),
            ocr_engine=_env_str(env, "LABELSCAN_OCR_ENGINE", cls.ocr_engine).lower(),
            tesseract_lang=_env_str(env, "LABELSCAN_TESSERACT_LANG", cls.tesseract_lang),
            max_images=_env_int(env, "LABELSCAN_MAX_IMAGES", cls.max_images),
            max_image_bytes=_env_int(env, "LABELSCAN_MAX_IMAGE_BYTES", cls.max_image_bytes),
            engine_max_attempts=_env_int(env, "LABELSCAN_ENGINE_MAX_ATTEMPTS", cls.engine_max_attempts),
            engine_timeout_s=_env_float(env, "LABELSCAN_ENGINE_TIMEOUT", cls.engine_timeout_s),
            batch_workers=_env_int(env, "LABELSCAN_BATCH_WORKERS", cls.batch_workers),
            allowed_origins=origins or ("*",),
            log_level=_env_str(env, "LABELSCAN_LOG_LEVEL", cls.log_level).upper(),
        )


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stdout handler to the package logger (idempotent)."""
    logger = logging.getLogger("labelscan")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_labelscan", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._labelscan = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
