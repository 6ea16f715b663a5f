"""
Video Export
Encodes rendered frames into video files with FFmpeg
"""

import os
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .export_names import frame_filename

FRAME_PATTERN = 'frame_%05d.png'


@dataclass(frozen=True)
class VideoFormat:
    """One FFmpeg output preset"""
    name: str
    extension: str
    codec_args: Tuple[str, ...]


# All presets keep the alpha channel of the rendered frames
VIDEO_FORMATS: Dict[str, VideoFormat] = {
    'webm': VideoFormat('WebM', 'webm', (
        '-c:v', 'libvpx-vp9', '-pix_fmt', 'yuva420p', '-b:v', '0', '-crf', '18',
        '-auto-alt-ref', '0',
    )),
    'prores': VideoFormat('ProRes 4444', 'mov', (
        '-c:v', 'prores_ks', '-profile:v', '4444', '-pix_fmt', 'yuva444p10le',
        '-vendor', 'apl0',
    )),
    'hevc': VideoFormat('HEVC', 'mov', (
        '-c:v', 'libx265', '-tag:v', 'hvc1', '-pix_fmt', 'yuva420p', '-crf', '18',
    )),
    'dxv': VideoFormat('DXV', 'mov', (
        '-c:v', 'dxv', '-pix_fmt', 'bgra',
    )),
}


def resolve_ffmpeg_path(preferred_path: Optional[str] = None) -> Optional[str]:
    """
    Resolve a usable FFmpeg binary path.

    Order of precedence:
      1. preferred_path if it exists
      2. Anything found on PATH
    """
    if preferred_path and os.path.isfile(preferred_path):
        return preferred_path
    return shutil.which('ffmpeg')


def ffmpeg_thread_args(max_threads: int = 0) -> List[str]:
    """Return FFmpeg thread arguments when multiple cores are available."""
    if max_threads <= 0:
        max_threads = os.cpu_count() or 1
    thread_count = max(1, min(32, int(max_threads)))
    if thread_count <= 1:
        return []
    return ['-threads', str(thread_count)]


def build_ffmpeg_command(ffmpeg_path: str, video_format: VideoFormat, fps: float,
                         input_pattern: str, output_path: str,
                         thread_args: Sequence[str] = ()) -> List[str]:
    cmd = [
        ffmpeg_path,
        '-y',
        '-framerate', f"{fps:g}",
        '-i', input_pattern,
    ]
    cmd += list(thread_args)
    cmd += list(video_format.codec_args)
    cmd += ['-an', output_path.replace('\\', '/')]
    return cmd


class VideoEncoder:
    """Writes frames to a temp folder as PNGs and runs FFmpeg over them"""

    def __init__(self, ffmpeg_path: str,
                 log_callback: Optional[Callable[[str, str], None]] = None,
                 runner: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        self.ffmpeg_path = ffmpeg_path
        self.log_callback = log_callback
        self.runner = runner

    def _log(self, message: str, level: str = "INFO"):
        if self.log_callback:
            self.log_callback(message, level)

    @staticmethod
    def write_frames(frames: Sequence, directory: str) -> str:
        """Save frames as numbered PNGs; returns the FFmpeg input pattern"""
        for index, image in enumerate(frames):
            image.save(os.path.join(directory, frame_filename(index)), "PNG")
        return os.path.join(directory, FRAME_PATTERN).replace('\\', '/')

    def encode(self, frames: Sequence, fps: float, output_path: str,
               video_format: VideoFormat) -> bool:
        """
        Encode frames into ``output_path``

        Args:
            frames: Pillow images, one per frame
            fps: Output frame rate
            output_path: Target file
            video_format: Codec preset from VIDEO_FORMATS

        Returns:
            True if FFmpeg produced the file
        """
        if not frames:
            self._log(f"No frames to encode as {video_format.name}", "WARNING")
            return False

        temp_dir = tempfile.mkdtemp(prefix='anitype_frames_')
        try:
            input_pattern = self.write_frames(frames, temp_dir)
            cmd = build_ffmpeg_command(self.ffmpeg_path, video_format, fps,
                                       input_pattern, output_path, ffmpeg_thread_args())
            self._log(f"Encoding {video_format.name} ({len(frames)} frames at {fps:g} FPS)...", "INFO")
            result = self.runner(cmd, capture_output=True, text=True)
            if result.returncode == 0 and os.path.exists(output_path):
                file_size = os.path.getsize(output_path)
                self._log(f"{video_format.name} exported to: {output_path} ({file_size} bytes)", "SUCCESS")
                return True
            message = (result.stderr or '').strip() or "Unknown error"
            self._log(f"{video_format.name} encoding failed: {message}", "ERROR")
            return False
        except OSError as exc:
            self._log(f"Error exporting {video_format.name}: {exc}", "ERROR")
            return False
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)
