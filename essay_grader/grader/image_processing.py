"""
Image Processing Module
Prepares scanned essay pages for text recognition
"""
import cv2
import numpy as np
from pathlib import Path
from typing import Optional, Union
import logging

from ..core.exceptions import FileProcessingError

logger = logging.getLogger(__name__)


def to_grayscale(img: np.ndarray) -> np.ndarray:
    """Convert BGR/BGRA images to single-channel grayscale"""
    if len(img.shape) == 2:
        return img
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def resize_to_width(img: np.ndarray, width: int) -> np.ndarray:
    """Resize keeping aspect ratio so the result is ``width`` pixels wide"""
    h, w = img.shape[:2]
    if w == width:
        return img
    height = max(1, round(h * width / w))
    interpolation = cv2.INTER_AREA if width < w else cv2.INTER_CUBIC
    return cv2.resize(img, (width, height), interpolation=interpolation)


def enhance_contrast(gray: np.ndarray) -> np.ndarray:
    """CLAHE contrast enhancement for uneven scan lighting"""
    clahe = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8))
    return clahe.apply(gray)


def preprocess_for_ocr(img: np.ndarray, width: int = 1000) -> np.ndarray:
    """
    Grayscale, resize and contrast-enhance a scanned page.

    Args:
        img: Input image (grayscale, BGR or BGRA)
        width: Target width in pixels

    Returns:
        Processed grayscale image
    """
    gray = to_grayscale(img)
    resized = resize_to_width(gray, width)
    return enhance_contrast(resized)


def load_image(path: Union[str, Path], grayscale: bool = False) -> Optional[np.ndarray]:
    """
    Load image from file.

    Args:
        path: Path to image file
        grayscale: Whether to load as grayscale

    Returns:
        Image array or None if loading fails
    """
    flag = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_UNCHANGED
    img = cv2.imread(str(path), flag)

    if img is None:
        logger.warning(f"Failed to load image: {path}")

    return img


def preprocess_file(
    source: Union[str, Path],
    destination: Union[str, Path],
    width: int = 1000
) -> Path:
    """
    Preprocess an image file and write the result as PNG.

    Raises:
        FileProcessingError: the source is not a readable image
    """
    source = Path(source)
    destination = Path(destination)

    img = load_image(source)
    if img is None:
        raise FileProcessingError(source.name, "not a readable image")

    processed = preprocess_for_ocr(img, width)
    if not cv2.imwrite(str(destination), processed):
        raise FileProcessingError(source.name, "could not write processed image")

    logger.info(f"Preprocessed {source.name} -> {destination.name} ({processed.shape[1]}x{processed.shape[0]})")
    return destination
