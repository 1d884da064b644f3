"""
Text-recognition collaborator
"""
from .vision import VisionTextRecognizer, clean_text, text_recognizer

__all__ = [
    "VisionTextRecognizer",
    "clean_text",
    "text_recognizer",
]
