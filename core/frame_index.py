"""
Frame index resolution for a single letter
"""

from typing import Any, Optional

from .data_structures import AssetDescriptor


def resolve_frame_index(asset: AssetDescriptor, global_frame: int, stagger_offset: int,
                        duration_frames: int, hold_last_frame: bool) -> int:
    """
    Pick the source frame a letter shows at ``global_frame``

    Before its entrance a letter shows frame 0. Past the animation duration it
    freezes on its final frame when holding, otherwise it loops.
    """
    local_frame = global_frame - stagger_offset
    if local_frame < 0:
        return 0
    if local_frame >= duration_frames and hold_last_frame:
        return asset.frame_count - 1
    return local_frame % asset.frame_count


def video_seek_time(frame_index: int, fps: float, duration: float) -> float:
    """Seek position in seconds for ``frame_index``, wrapped to the clip length"""
    seek = frame_index / fps
    if duration and duration > 0:
        seek %= duration
    return seek


def sync_video_handle(handle: Any, frame_index: int, fps: float, duration: float) -> bool:
    """
    Seek a video handle to the frame, skipping redundant seeks

    Returns:
        True if a seek was issued
    """
    target = video_seek_time(frame_index, fps, duration)
    if handle.current_time == target:
        return False
    handle.seek(target)
    return True


def sequence_frame(asset: AssetDescriptor, frame_index: int) -> Optional[Any]:
    """Still image for ``frame_index`` or None when the index is out of range"""
    frames = asset.source or ()
    if 0 <= frame_index < len(frames):
        return frames[frame_index]
    return None
