# Utils package
from .helpers import (
    ensure_directory,
    generate_timestamp_id,
    get_file_extension,
    is_valid_image,
    safe_filename,
    read_json,
    write_json,
)

__all__ = [
    "ensure_directory",
    "generate_timestamp_id",
    "get_file_extension",
    "is_valid_image",
    "safe_filename",
    "read_json",
    "write_json",
]
