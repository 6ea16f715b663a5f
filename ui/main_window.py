"""
Main Window
The main application window that ties everything together
"""

import os
from typing import Dict, List, Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QLabel,
    QFileDialog, QMessageBox, QSplitter, QProgressDialog, QStackedWidget,
    QScrollArea
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPixmap

from core.animation_player import PlaybackController
from core.asset_library import AssetLibrary
from core.data_structures import DurationMode, ProjectSettings, RenderResult
from core.exceptions import AniTypeError
from core.fps_detector import FrameRateDetector
from renderer.compositor import Compositor
from renderer.frame_scheduler import QtFrameScheduler
from renderer.frame_sequencer import FrameSequencer
from utils.export_names import UniqueFilenameRegistry, frame_filename
from utils.file_loader import group_font_packs, group_letter_files, load_letter_files, scan_folder
from utils.settings import SettingsManager
from utils.video_export import VIDEO_FORMATS, VideoEncoder, resolve_ffmpeg_path
from .control_panel import ControlPanel
from .log_widget import LogWidget


def pil_to_qimage(image) -> QImage:
    """Copy an RGBA Pillow image into a QImage"""
    rgba = image.convert("RGBA")
    data = rgba.tobytes("raw", "RGBA")
    qimage = QImage(data, rgba.width, rgba.height, rgba.width * 4, QImage.Format.Format_RGBA8888)
    return qimage.copy()


class AniTypeViewer(QMainWindow):
    """Main application window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("AniType")
        self.resize(1400, 900)

        self.settings_manager = SettingsManager()
        self.project: ProjectSettings = self.settings_manager.load_project_settings()
        self.library = AssetLibrary()
        self.font_packs: Dict[str, Dict[str, List[str]]] = {}
        self.import_root: str = ''
        self.export_names = UniqueFilenameRegistry()

        self.init_ui()

        self.detector = FrameRateDetector(log_callback=self.log_widget.log)
        self.compositor = Compositor(log_callback=self.log_widget.log)
        self.scheduler = QtFrameScheduler(self)
        self.playback = PlaybackController(
            self.library,
            self.render_frame,
            self.scheduler,
            validate=lambda: self.compositor.validate(self.library, self.project),
            status_callback=lambda _frame: self.update_status_bar(),
            log_callback=self.log_widget.log,
        )
        self.sequencer = FrameSequencer(self.compositor, self.playback, self.log_widget.log)

        geometry = self.settings_manager.get_window_geometry()
        if geometry:
            self.restoreGeometry(geometry)

        self.control_panel.set_settings(self.project)
        self.refresh()

    def init_ui(self):
        """Build the window layout"""
        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.control_panel = ControlPanel()
        self.control_panel.setMinimumWidth(320)
        self.control_panel.settings_changed.connect(self.on_settings_changed)
        self.control_panel.load_folder_clicked.connect(self.load_letter_folder)
        self.control_panel.pack_combo.currentIndexChanged.connect(self.on_pack_selected)
        self.control_panel.play_clicked.connect(self.toggle_playback)
        self.control_panel.reset_clicked.connect(self.reset_playback)
        self.control_panel.export_frames_clicked.connect(self.export_frames_as_png)
        self.control_panel.export_video_clicked.connect(self.export_as_video)
        splitter.addWidget(self.control_panel)

        right = QWidget()
        right_layout = QVBoxLayout(right)

        self.preview_stack = QStackedWidget()
        self.preview_label = QLabel()
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        preview_scroll = QScrollArea()
        preview_scroll.setWidgetResizable(True)
        preview_scroll.setWidget(self.preview_label)
        self.empty_label = QLabel("Load letters and enter text to see the animation")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview_stack.addWidget(preview_scroll)
        self.preview_stack.addWidget(self.empty_label)
        right_layout.addWidget(self.preview_stack, stretch=1)

        self.log_widget = LogWidget()
        right_layout.addWidget(self.log_widget)
        splitter.addWidget(right)
        splitter.setStretchFactor(1, 1)

        self.setCentralWidget(splitter)
        self.status_label = QLabel()
        self.statusBar().addWidget(self.status_label, 1)

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def render_frame(self, frame: Optional[int] = None) -> Optional[RenderResult]:
        """Render ``frame`` (default: the current global frame) into the preview"""
        if frame is None:
            frame = self.playback.global_frame
        try:
            self.compositor.validate(self.library, self.project)
        except AniTypeError as exc:
            if self.playback.playing:
                self.playback.stop()
                self.control_panel.set_play_button_text("Play")
            self.status_label.setText(str(exc))
            return None

        result = self.compositor.render(self.library, self.project, frame)
        if result.is_empty:
            self.preview_stack.setCurrentWidget(self.empty_label)
            return result

        self.preview_stack.setCurrentIndex(0)
        self.preview_label.setPixmap(QPixmap.fromImage(pil_to_qimage(result.image)))
        return result

    def refresh(self):
        """Re-render and update every dependent label"""
        self.render_frame()
        has_content = self.has_content()
        self.control_panel.set_content_available(has_content)
        self.update_duration_info()
        self.update_status_bar()

    def has_content(self) -> bool:
        layout, _ = self.compositor.resolve(self.library, self.project)
        return not layout.is_empty

    def update_status_bar(self):
        if self.has_content():
            self.status_label.setText(
                f"● Ready    Frame: {self.playback.global_frame}    Letters: {len(self.library)}"
            )
        else:
            self.status_label.setText("No content - Load letters and enter text")

    def update_duration_info(self):
        _, duration = self.compositor.resolve(self.library, self.project)
        seconds = duration / self.project.fps
        label = f"Duration: {duration}f ({seconds:.2f}s)"
        if self.project.duration_mode is DurationMode.AUTO:
            label = f"{self.project.fps:g} FPS | {label}"
        self.control_panel.duration_info_label.setText(label)

    # ------------------------------------------------------------------ #
    # Settings and letters
    # ------------------------------------------------------------------ #
    def on_settings_changed(self):
        settings = self.control_panel.get_settings()
        if settings.fps != self.project.fps:
            settings, updated = self.detector.change_fps(self.library, settings, settings.fps)
            if updated:
                self.log_widget.log(
                    f"Re-timed {updated} video clip(s) for {settings.fps:g} FPS", "INFO")
        self.project = settings
        self.refresh()

    def detect_fps(self):
        """Run fps detection after the library changed"""
        self.project, detection = self.detector.apply(self.library, self.project)
        self.control_panel.set_settings(self.project)
        self.control_panel.fps_source_label.setText(detection.describe())

    def load_letter_folder(self):
        """Pick a folder of letter files or font packs"""
        start_dir = self.settings_manager.get_last_import_path()
        folder = QFileDialog.getExistingDirectory(self, "Select Letter Folder", start_dir)
        if not folder:
            return
        self.settings_manager.set_last_import_path(folder)
        self.import_root = folder

        packs, loose = group_font_packs(scan_folder(folder))
        combo = self.control_panel.pack_combo
        combo.blockSignals(True)
        combo.clear()
        self.font_packs = packs
        for pack_name, variants in packs.items():
            for variant in variants:
                combo.addItem(f"{pack_name} / {variant}", (pack_name, variant))
        combo.setEnabled(bool(packs))
        combo.blockSignals(False)

        if packs:
            self.on_pack_selected(0)
        else:
            self.load_files([os.path.join(folder, path) for path in loose])

    def on_pack_selected(self, index: int):
        data = self.control_panel.pack_combo.itemData(index)
        if not data:
            return
        pack_name, variant = data
        files = self.font_packs.get(pack_name, {}).get(variant, [])
        self.log_widget.log(f"Loading font pack {pack_name} ({variant})", "INFO")
        self.load_files([os.path.join(self.import_root, path) for path in files])

    def load_files(self, paths: List[str]):
        if self.playback.playing:
            self.playback.stop()
            self.control_panel.set_play_button_text("Play")
        self.close_video_handles()
        self.library.clear()
        added = load_letter_files(self.library, group_letter_files(paths),
                                  self.log_widget.log, fps=self.project.fps)
        letters = " ".join(sorted(self.library))
        self.control_panel.library_label.setText(
            f"{len(self.library)} letters: {letters}" if letters else "No letters loaded"
        )
        self.log_widget.log(f"Loaded {added} letter(s)", "SUCCESS" if added else "WARNING")
        self.detect_fps()
        self.refresh()

    # ------------------------------------------------------------------ #
    # Playback
    # ------------------------------------------------------------------ #
    def toggle_playback(self):
        playing = self.playback.toggle()
        self.control_panel.set_play_button_text("Stop" if playing else "Play")

    def reset_playback(self):
        self.playback.reset()
        self.control_panel.set_play_button_text("Play")

    # ------------------------------------------------------------------ #
    # Export
    # ------------------------------------------------------------------ #
    def _render_for_export(self, title: str):
        """Render the full timeline behind a progress dialog; None on failure"""
        total = self.compositor.total_frames(self.library, self.project)
        progress = QProgressDialog("Rendering frames...", "Cancel", 0, max(1, total), self)
        progress.setCancelButton(None)
        progress.setWindowTitle(title)
        progress.setWindowModality(Qt.WindowModality.WindowModal)
        progress.show()

        def on_progress(done: int, count: int):
            progress.setValue(done)
            progress.setLabelText(f"Rendering frame {done} of {count}...")
            QApplication.processEvents()

        was_playing = self.playback.playing
        try:
            return self.sequencer.render_all(self.library, self.project, on_progress)
        except AniTypeError as exc:
            self.log_widget.log(f"Export failed: {exc}", "ERROR")
            QMessageBox.warning(self, "Export Failed", str(exc))
            return None
        finally:
            progress.close()
            self.control_panel.set_play_button_text("Stop" if was_playing else "Play")

    def export_frames_as_png(self):
        """Render the full timeline and save one PNG per frame"""
        if not self.has_content():
            QMessageBox.warning(self, "Error", "No letters match the text")
            return

        start_dir = self.settings_manager.get_export_directory()
        target_dir = QFileDialog.getExistingDirectory(self, "Select Destination Folder", start_dir)
        if not target_dir:
            return
        self.settings_manager.set_export_directory(target_dir)

        result = self._render_for_export("PNG Frames Export")
        if result is None:
            return

        folder_name = self.export_names.claim(result.suggested_name)
        export_root = os.path.join(target_dir, folder_name)
        try:
            os.makedirs(export_root, exist_ok=True)
            for index, image in enumerate(result.frames):
                image.save(os.path.join(export_root, frame_filename(index)), "PNG")
        except OSError as exc:
            self.log_widget.log(f"Error writing frames: {exc}", "ERROR")
            QMessageBox.warning(self, "Export Failed", str(exc))
            return

        self.log_widget.log(
            f"PNG frames exported to {export_root} ({result.frame_count} files at {result.fps:g} FPS)",
            "SUCCESS",
        )

    def _resolve_ffmpeg_path(self) -> Optional[str]:
        """Return a working FFmpeg path, updating the stored value as needed"""
        stored_path = self.settings_manager.get_ffmpeg_path()
        ffmpeg_path = resolve_ffmpeg_path(stored_path)
        if ffmpeg_path != stored_path:
            self.settings_manager.set_ffmpeg_path(ffmpeg_path or '')
        return ffmpeg_path

    def export_as_video(self, format_key: str):
        """Render the full timeline and encode it with FFmpeg"""
        video_format = VIDEO_FORMATS.get(format_key)
        if video_format is None:
            return
        if not self.has_content():
            QMessageBox.warning(self, "Error", "No letters match the text")
            return

        ffmpeg_path = self._resolve_ffmpeg_path()
        if not ffmpeg_path:
            QMessageBox.warning(
                self,
                "FFmpeg Required",
                f"FFmpeg is required for {video_format.name} export.\n\n"
                "Install FFmpeg and add it to PATH.",
            )
            self.log_widget.log("FFmpeg not available on PATH", "ERROR")
            return

        start_dir = self.settings_manager.get_export_directory()
        target_dir = QFileDialog.getExistingDirectory(self, "Select Destination Folder", start_dir)
        if not target_dir:
            return
        self.settings_manager.set_export_directory(target_dir)

        result = self._render_for_export(f"{video_format.name} Export")
        if result is None:
            return

        filename = self.export_names.claim(result.suggested_name, video_format.extension)
        output_path = os.path.join(target_dir, filename)
        encoder = VideoEncoder(ffmpeg_path, log_callback=self.log_widget.log)
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            success = encoder.encode(result.frames, result.fps, output_path, video_format)
        finally:
            QApplication.restoreOverrideCursor()

        if not success:
            QMessageBox.warning(
                self,
                f"{video_format.name} Export Failed",
                "FFmpeg was unable to encode the video. Check the log for details.",
            )

    def close_video_handles(self):
        for handle in self.library.video_handles():
            handle.close()

    def closeEvent(self, event):
        """Handle window close"""
        self.playback.stop()
        self.close_video_handles()
        self.settings_manager.save_project_settings(self.project)
        self.settings_manager.set_window_geometry(self.saveGeometry())
        event.accept()
