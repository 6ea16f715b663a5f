"""
Export naming helpers
"""

import re
from typing import Set

_INVALID_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1F]')
_WHITESPACE = re.compile(r'\s+')
MAX_NAME_LENGTH = 100
FALLBACK_NAME = 'animated_text'


def sanitize_filename(text: str) -> str:
    """
    Turn composition text into a safe file stem

    Newlines become underscores before control characters are stripped, so
    "HELLO\\nWORLD" exports as "HELLO_WORLD".
    """
    name = text.replace('\n', '_')
    name = _INVALID_CHARS.sub('', name)
    name = _WHITESPACE.sub('_', name).strip()
    return name[:MAX_NAME_LENGTH] or FALLBACK_NAME


def frame_filename(frame_number: int) -> str:
    return f"frame_{frame_number:05d}.png"


class UniqueFilenameRegistry:
    """Hands out file names not used earlier in this session"""

    def __init__(self):
        self.used: Set[str] = set()

    def claim(self, base_name: str, extension: str = '') -> str:
        suffix = f".{extension}" if extension else ''
        filename = f"{base_name}{suffix}"
        counter = 1
        while filename in self.used:
            filename = f"{base_name}_{counter}{suffix}"
            counter += 1
        self.used.add(filename)
        return filename
