from .base import Generator, Recognizer
from .generation import OpenAIGenerator
from .recognition import OpenAIVisionRecognizer, TesseractRecognizer, build_recognizer

__all__ = [
    "Generator",
    "Recognizer",
    "OpenAIGenerator",
    "OpenAIVisionRecognizer",
    "TesseractRecognizer",
    "build_recognizer",
]
