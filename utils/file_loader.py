"""
File Loader
Maps letter files on disk to library entries and decodes them
"""

import os
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from core.asset_library import AssetLibrary
from renderer.video_decoder import open_video
from renderer.video_handle import VideoHandle

SEQUENCE_PATTERN = re.compile(r'^(.+?)_(\d+)\.(png|jpg|jpeg)$', re.IGNORECASE)
IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.gif', '.bmp', '.webp')
VIDEO_EXTENSIONS = ('.mp4', '.mov', '.webm', '.m4v', '.avi', '.mkv')
DEFAULT_VARIANT = 'default'


@dataclass
class LetterFiles:
    """Files that make up one letter asset"""
    letter: str
    kind: str  # 'sequence', 'image' or 'video'
    paths: List[str] = field(default_factory=list)


def group_letter_files(paths: Iterable[str]) -> Dict[str, LetterFiles]:
    """
    Group file paths by the letter they animate

    ``A_0001.png``-style names form an image sequence ordered by the numeric
    suffix. Other files use their first character. Later files win when two
    loose files claim the same letter.
    """
    numbered: Dict[str, List[Tuple[int, str]]] = {}
    groups: Dict[str, LetterFiles] = {}

    for path in paths:
        name = os.path.basename(path)
        if not name:
            continue
        match = SEQUENCE_PATTERN.match(name)
        if match:
            letter = match.group(1).upper()
            numbered.setdefault(letter, []).append((int(match.group(2)), path))
            continue
        ext = os.path.splitext(name)[1].lower()
        if ext in VIDEO_EXTENSIONS:
            kind = 'video'
        elif ext in IMAGE_EXTENSIONS:
            kind = 'image'
        else:
            continue
        letter = name[0].upper()
        groups[letter] = LetterFiles(letter, kind, [path])

    for letter, frames in numbered.items():
        frames.sort(key=lambda item: item[0])
        groups[letter] = LetterFiles(letter, 'sequence', [path for _, path in frames])

    return groups


def group_font_packs(relative_paths: Iterable[str]) -> Tuple[Dict[str, Dict[str, List[str]]], List[str]]:
    """
    Split a folder import into font packs

    ``pack/variant/file`` goes to that variant, ``pack/file`` to the
    ``default`` variant. Paths without a folder are returned as loose files.

    Returns:
        (packs, loose_files)
    """
    packs: Dict[str, Dict[str, List[str]]] = {}
    loose: List[str] = []
    for path in relative_paths:
        parts = path.replace('\\', '/').split('/')
        if len(parts) >= 2:
            variant = parts[1] if len(parts) > 2 else DEFAULT_VARIANT
            packs.setdefault(parts[0], {}).setdefault(variant, []).append(path)
        else:
            loose.append(path)
    return packs, loose


def scan_folder(root: str) -> List[str]:
    """Relative paths of every file under ``root``, sorted"""
    found = []
    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            full = os.path.join(dirpath, name)
            found.append(os.path.relpath(full, root).replace('\\', '/'))
    return sorted(found)


def load_video_letter(library: AssetLibrary, letter: str, path: str, fps: float,
                      video_opener: Callable[[str], VideoHandle] = open_video):
    """Open a clip and register it; its frame count follows ``fps``"""
    handle = video_opener(path)
    width, height = handle.size
    if not handle.duration or handle.duration <= 0:
        handle.close()
        raise ValueError(f"clip has no duration: {path}")
    return library.add_video(letter, handle, width, height, handle.duration, fps)


def load_letter_files(library: AssetLibrary, groups: Dict[str, LetterFiles],
                      log_callback: Optional[Callable[[str, str], None]] = None,
                      fps: float = 30,
                      video_opener: Callable[[str], VideoHandle] = open_video) -> int:
    """
    Decode letter files and add them to the library

    Still images and sequences are decoded with Pillow, video clips through
    ``video_opener``. Letters that fail to decode are left out of the
    library.

    Args:
        library: Library to fill
        groups: Output of group_letter_files
        log_callback: Receives (message, level)
        fps: Project frame rate used for video frame counts
        video_opener: Turns a video path into a VideoHandle

    Returns:
        Number of letters added
    """
    def log(message: str, level: str = "INFO"):
        if log_callback:
            log_callback(message, level)

    added = 0
    for letter, group in groups.items():
        if len(letter) != 1:
            log(f"Skipped '{letter}': sequence names must start with a single character", "WARNING")
            continue
        if group.kind == 'video':
            try:
                load_video_letter(library, letter, group.paths[0], fps, video_opener)
            except Exception as exc:
                # Decoder errors vary by backend; the letter is simply left out
                log(f"Could not load video for '{letter}': {exc}", "WARNING")
                continue
            added += 1
            continue
        frames = []
        try:
            for path in group.paths:
                with Image.open(path) as img:
                    frames.append(img.convert('RGBA'))
        except (OSError, UnidentifiedImageError) as exc:
            log(f"Could not load '{letter}': {exc}", "WARNING")
            continue
        library.add_image_sequence(letter, frames)
        added += 1
    return added
