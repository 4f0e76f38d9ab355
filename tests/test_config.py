from __future__ import annotations

import logging
import unittest

from labelscan.config import Settings, configure_logging


class TestSettings(unittest.TestCase):
    def test_defaults_when_env_is_empty(self) -> None:
        s = Settings.from_env({})
        self.assertEqual(s, Settings())
        self.assertEqual(s.max_images, 4)
        self.assertEqual(s.ocr_engine, "tesseract")
        self.assertEqual(s.allowed_origins, ("*",))

    def test_reads_overrides(self) -> None:
        s = Settings.from_env({
            "LABELSCAN_GENERATION_MODEL": "gpt-test",
            "LABELSCAN_OCR_ENGINE": "OpenAI",
            "LABELSCAN_MAX_IMAGES": "6",
            "LABELSCAN_ENGINE_MAX_ATTEMPTS": "1",
            "LABELSCAN_ENGINE_TIMEOUT": "12.5",
            "LABELSCAN_BATCH_WORKERS": "4",
            "LABELSCAN_ALLOWED_ORIGINS": "http://localhost:3000, https://app.example.com ,",
            "LABELSCAN_LOG_LEVEL": "debug",
        })
        self.assertEqual(s.generation_model, "gpt-test")
        self.assertEqual(s.ocr_engine, "openai")
        self.assertEqual(s.max_images, 6)
        self.assertEqual(s.engine_max_attempts, 1)
        self.assertEqual(s.engine_timeout_s, 12.5)
        self.assertEqual(s.batch_workers, 4)
        self.assertEqual(s.allowed_origins, ("http://localhost:3000", "https://app.example.com"))
        self.assertEqual(s.log_level, "DEBUG")

    def test_blank_values_fall_back_to_defaults(self) -> None:
        s = Settings.from_env({"LABELSCAN_MAX_IMAGES": "  ", "LABELSCAN_VISION_MODEL": ""})
        self.assertEqual(s.max_images, 4)
        self.assertEqual(s.vision_model, "gpt-4o")

    def test_invalid_values_rejected(self) -> None:
        bad_envs = (
            {"LABELSCAN_MAX_IMAGES": "four"},
            {"LABELSCAN_MAX_IMAGES": "0"},
            {"LABELSCAN_ENGINE_TIMEOUT": "soon"},
            {"LABELSCAN_ENGINE_MAX_ATTEMPTS": "0"},
            {"LABELSCAN_OCR_ENGINE": "abbyy"},
        )
        for env in bad_envs:
            with self.subTest(env=env):
                with self.assertRaises(ValueError):
                    Settings.from_env(env)


class TestConfigureLogging(unittest.TestCase):
    def test_handler_added_once(self) -> None:
        logger = configure_logging("WARNING")
        before = len(logger.handlers)
        configure_logging("DEBUG")
        self.assertEqual(len(logger.handlers), before)
        self.assertEqual(logger.level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
