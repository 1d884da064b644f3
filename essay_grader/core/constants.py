"""
Application constants
"""


# API Response Messages
class Messages:
    """API response messages"""

    # Success messages
    UPLOAD_SUCCESS = "Essay transcribed successfully"
    FOLDER_CREATED = "Folder created"
    RUBRIC_SAVED = "Rubric saved"
    ASSESSMENT_CREATED = "Assessment created"
    GRADE_SAVED = "Grade saved"

    # Error messages
    NO_TEXT_DETECTED = "No text detected."
    FILE_REQUIRED = "An image file is required"
    INVALID_FILE_TYPE = "Only .jpg, .jpeg and .png images are accepted"
    FILE_TOO_LARGE = "File size exceeds limit"
    INVALID_FOLDER_NAME = "Folder names may not contain path separators"


# File size limits (in bytes)
class FileLimits:
    """File size limits"""
    MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB


class ScoreScale:
    """Native scale the assistant is asked to grade on"""
    RAW_MIN = 1
    RAW_MAX = 5


# Image extensions accepted as essay scans
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")

TRANSCRIPT_EXTENSION = ".txt"
PROCESSED_PREFIX = "processed-"
LINK_INDEX_FILE = ".links.json"
