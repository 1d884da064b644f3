"""
Text recognition with Google Cloud Vision
"""
import logging
import re
from pathlib import Path
from typing import Optional, Union

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import vision
from google.oauth2 import service_account

from ..config import settings
from ..core.constants import Messages
from ..core.exceptions import CollaboratorError

logger = logging.getLogger(__name__)

_NEWLINES = re.compile(r"\n+")
_WHITESPACE = re.compile(r"\s+")


def clean_text(raw_text: str) -> str:
    """Collapse line breaks and runs of whitespace into single spaces"""
    return _WHITESPACE.sub(" ", _NEWLINES.sub(" ", raw_text)).strip()


class VisionTextRecognizer:
    """Document text detection on a single image file"""

    def __init__(self, key_file: Optional[Union[str, Path]] = None):
        self.key_file = Path(key_file) if key_file else None
        self._client: Optional[vision.ImageAnnotatorClient] = None

    @property
    def client(self) -> vision.ImageAnnotatorClient:
        """Client built on first use, from the key file or default credentials"""
        if self._client is None:
            try:
                if self.key_file:
                    creds = service_account.Credentials.from_service_account_file(str(self.key_file))
                    self._client = vision.ImageAnnotatorClient(credentials=creds)
                else:
                    self._client = vision.ImageAnnotatorClient()
            except (auth_exceptions.GoogleAuthError, OSError, ValueError) as e:
                logger.error(f"Cannot create Vision client: {e}")
                raise CollaboratorError("text-recognition", "Vision credentials unavailable") from e
            logger.info("Vision client initialized")
        return self._client

    def recognize(self, image_path: Union[str, Path]) -> str:
        """
        Full text of the document in ``image_path``.

        Returns "No text detected." when the page has no recognizable text.

        Raises:
            CollaboratorError: the Vision call failed
        """
        image_path = Path(image_path)
        with open(image_path, "rb") as f:
            image = vision.Image(content=f.read())

        try:
            response = self.client.document_text_detection(image=image)
        except api_exceptions.GoogleAPICallError as e:
            logger.error(f"Vision API call failed: {e}")
            raise CollaboratorError("text-recognition", "Vision API call failed") from e

        if response.error.message:
            logger.error(f"Vision API error: {response.error.message}")
            raise CollaboratorError("text-recognition", response.error.message)

        text = response.full_text_annotation.text
        if not text:
            logger.warning(f"No text detected in {image_path.name}")
            return Messages.NO_TEXT_DETECTED
        return text


# Singleton instance
text_recognizer = VisionTextRecognizer(settings.GOOGLE_VISION_KEY_FILE)
