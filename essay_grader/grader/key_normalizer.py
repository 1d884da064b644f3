"""
Key Normalizer
Canonical form used to compare rubric titles with assistant-returned keys.
"""
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(value: str) -> str:
    """Lowercase and drop every character outside [a-z0-9]"""
    return _NON_ALNUM.sub("", value.lower())
