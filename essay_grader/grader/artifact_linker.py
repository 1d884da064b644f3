"""
Essay-Artifact Linker
Recovers the scanned image a stored transcript was produced from.

The upload pipeline records each transcript -> image pair in a per-folder
link index when it writes the transcript. For folders populated some other
way the image is guessed from the transcript's identifier prefix.
"""
import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, List, Union

from ..core.constants import IMAGE_EXTENSIONS, LINK_INDEX_FILE, TRANSCRIPT_EXTENSION
from ..core.exceptions import ArtifactLookupError
from ..utils import read_json, write_json

logger = logging.getLogger(__name__)

_index_lock = threading.Lock()


def base_id(transcript_filename: str) -> str:
    """Transcript filename without its trailing .txt"""
    if transcript_filename.endswith(TRANSCRIPT_EXTENSION):
        return transcript_filename[:-len(TRANSCRIPT_EXTENSION)]
    return transcript_filename


def is_image(filename: str) -> bool:
    return filename.lower().endswith(IMAGE_EXTENSIONS)


def list_folder(folder: Union[str, Path]) -> List[str]:
    """
    Sorted file names in ``folder``.

    Raises:
        ArtifactLookupError: the folder cannot be listed
    """
    folder = Path(folder)
    try:
        return sorted(os.listdir(folder))
    except OSError as e:
        logger.error(f"Cannot list essay folder {folder}: {e}")
        raise ArtifactLookupError(folder.name, e.strerror) from e


def read_links(folder: Union[str, Path]) -> Dict[str, str]:
    """Transcript -> image index recorded at upload time, empty if absent"""
    index_path = Path(folder) / LINK_INDEX_FILE
    if not index_path.exists():
        return {}
    try:
        links = read_json(index_path)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable link index {index_path}: {e}")
        return {}
    if not isinstance(links, dict):
        logger.warning(f"Ignoring malformed link index {index_path}")
        return {}
    return links


def record_link(folder: Union[str, Path], transcript_filename: str, image_filename: str) -> None:
    """Store an explicit transcript -> image reference"""
    folder = Path(folder)
    index_path = folder / LINK_INDEX_FILE
    with _index_lock:
        links = read_links(folder)
        links[transcript_filename] = image_filename
        write_json(index_path, links)
    logger.info(f"Linked {transcript_filename} -> {image_filename} in {folder.name}")


def guess_image(transcript_filename: str, filenames: List[str]) -> str:
    """
    Prefix heuristic: first image whose name starts with the transcript's id.

    Falls back to ``<id>.png`` when nothing matches.
    """
    prefix = base_id(transcript_filename)
    for name in filenames:
        if name.startswith(prefix) and is_image(name):
            return name
    return prefix + ".png"


def link_artifact(
    folder: Union[str, Path],
    transcript_filename: str,
    use_links: bool = True
) -> str:
    """
    Best-guess image filename for a transcript in ``folder``.

    Args:
        folder: Directory holding the essay artifacts
        transcript_filename: ``<id>.txt``
        use_links: Consult the link index before guessing; ``False``
            reproduces the prefix heuristic alone

    Raises:
        ArtifactLookupError: the folder cannot be listed
    """
    filenames = list_folder(folder)

    if use_links:
        linked = read_links(folder).get(transcript_filename)
        if linked and linked in filenames:
            return linked

    return guess_image(transcript_filename, filenames)
