"""
Utils module for AniType
Contains letter file loading, export naming, video encoding and settings persistence
"""

from .file_loader import group_letter_files, group_font_packs, load_letter_files, scan_folder
from .export_names import sanitize_filename, frame_filename, UniqueFilenameRegistry
from .video_export import VIDEO_FORMATS, VideoEncoder, VideoFormat, resolve_ffmpeg_path

__all__ = [
    'group_letter_files',
    'group_font_packs',
    'load_letter_files',
    'scan_folder',
    'sanitize_filename',
    'frame_filename',
    'UniqueFilenameRegistry',
    'VIDEO_FORMATS',
    'VideoEncoder',
    'VideoFormat',
    'resolve_ffmpeg_path',
]
