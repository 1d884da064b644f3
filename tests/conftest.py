"""
Shared fixtures. Settings are read when essay_grader is first imported,
so the data and log directories are redirected before that happens.
"""
import os
import tempfile

_TEST_ROOT = tempfile.mkdtemp(prefix="essay_grader_tests_")
os.environ.setdefault("DATA_DIR", os.path.join(_TEST_ROOT, "data"))
os.environ.setdefault("LOGS_DIR", os.path.join(_TEST_ROOT, "logs"))
os.environ.setdefault("LLM_PROVIDER", "openai")

import cv2
import numpy as np
import pytest

from essay_grader.models import Rubric


class FakeGenerator:
    """Text-generation stand-in returning canned replies"""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, system_prompt, user_prompt, temperature=None):
        self.calls.append({
            "system": system_prompt,
            "user": user_prompt,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(system_prompt, user_prompt)
        return self.reply


def png_bytes(width=200, height=100):
    """A small white PNG with one dark word on it"""
    img = np.full((height, width, 3), 255, dtype=np.uint8)
    cv2.putText(img, "essay", (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 0, 0), 2)
    ok, buffer = cv2.imencode(".png", img)
    assert ok
    return buffer.tobytes()


class FakeRecognizer:
    """Text-recognition stand-in"""

    def __init__(self, text="Ths is a   sampel\n\nessay."):
        self.text = text
        self.calls = []

    def recognize(self, image_path):
        self.calls.append(str(image_path))
        return self.text


@pytest.fixture
def rubric():
    return Rubric.from_document({
        "name": "R1",
        "criteria": [
            {"title": "Clarity", "range": [0, 10]},
            {"title": "Organization & Structure", "range": [1, 4]},
            {"title": "Grammar", "range": [0, 20]},
        ],
    })


@pytest.fixture
def single_rubric():
    return Rubric.from_document({
        "name": "R1",
        "criteria": [{"title": "Clarity", "range": [0, 10]}],
    })
