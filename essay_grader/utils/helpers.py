"""
Utility functions for the application
"""
import json
import os
import logging
from pathlib import Path
from datetime import datetime
from typing import Any, Union

from ..core.constants import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)


def ensure_directory(path: Union[str, Path]) -> Path:
    """Ensure a directory exists, create if not"""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def generate_timestamp_id(prefix: str = "") -> str:
    """Generate a unique ID based on timestamp"""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    if prefix:
        return f"{prefix}_{timestamp}"
    return timestamp


def get_file_extension(filename: str) -> str:
    """Get file extension with its dot, lowercased"""
    return Path(filename).suffix.lower()


def is_valid_image(filename: str) -> bool:
    """Check if file is an accepted essay scan"""
    return get_file_extension(filename) in IMAGE_EXTENSIONS


def safe_filename(filename: str) -> str:
    """Make filename safe for filesystem"""
    unsafe_chars = '<>:"/\\|?*'
    for char in unsafe_chars:
        filename = filename.replace(char, "_")
    if filename in ("", ".", ".."):
        filename = filename.replace(".", "_") or "_"
    return filename



def read_json(path: Union[str, Path]) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Union[str, Path], data: Any) -> None:
    """Write JSON through a temp file so readers never see a partial document"""
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)
