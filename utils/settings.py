"""
Settings Manager
Handles application settings persistence
"""

from typing import Optional

from PyQt6.QtCore import QSettings

from core.data_structures import (
    Alignment,
    DurationMode,
    DurationUnit,
    ProjectSettings,
    TimingMode,
)


def _enum_value(enum_cls, raw, default):
    try:
        return enum_cls(raw)
    except ValueError:
        return default


class SettingsManager:
    """Manages application settings"""

    def __init__(self, settings: Optional[QSettings] = None):
        self.settings = settings if settings is not None else QSettings('AniType', 'Settings')

    def load_project_settings(self) -> ProjectSettings:
        """Read the last used composition settings"""
        defaults = ProjectSettings()
        value = self.settings.value
        return ProjectSettings(
            text=value('project/text', defaults.text, type=str),
            spacing=value('project/spacing', defaults.spacing, type=int),
            char_spacing=value('project/char_spacing', defaults.char_spacing, type=int),
            line_spacing=value('project/line_spacing', defaults.line_spacing, type=int),
            alignment=_enum_value(
                Alignment, value('project/alignment', defaults.alignment.value, type=str),
                defaults.alignment),
            fps=value('project/fps', defaults.fps, type=float),
            timing_mode=_enum_value(
                TimingMode, value('project/timing_mode', defaults.timing_mode.value, type=str),
                defaults.timing_mode),
            stagger_frames=max(0, value('project/stagger_frames', defaults.stagger_frames, type=int)),
            duration_mode=_enum_value(
                DurationMode, value('project/duration_mode', defaults.duration_mode.value, type=str),
                defaults.duration_mode),
            custom_duration_value=value(
                'project/custom_duration_value', defaults.custom_duration_value, type=float),
            duration_unit=_enum_value(
                DurationUnit, value('project/duration_unit', defaults.duration_unit.value, type=str),
                defaults.duration_unit),
            hold_last_frame=value('project/hold_last_frame', defaults.hold_last_frame, type=bool),
            reserve_missing_slots=value(
                'project/reserve_missing_slots', defaults.reserve_missing_slots, type=bool),
        )

    def save_project_settings(self, project: ProjectSettings):
        """Persist composition settings"""
        self.settings.setValue('project/text', project.text)
        self.settings.setValue('project/spacing', project.spacing)
        self.settings.setValue('project/char_spacing', project.char_spacing)
        self.settings.setValue('project/line_spacing', project.line_spacing)
        self.settings.setValue('project/alignment', project.alignment.value)
        self.settings.setValue('project/fps', float(project.fps))
        self.settings.setValue('project/timing_mode', project.timing_mode.value)
        self.settings.setValue('project/stagger_frames', project.stagger_frames)
        self.settings.setValue('project/duration_mode', project.duration_mode.value)
        self.settings.setValue('project/custom_duration_value', float(project.custom_duration_value))
        self.settings.setValue('project/duration_unit', project.duration_unit.value)
        self.settings.setValue('project/hold_last_frame', project.hold_last_frame)
        self.settings.setValue('project/reserve_missing_slots', project.reserve_missing_slots)

    def get_last_import_path(self) -> str:
        """Get the last imported letter folder"""
        return self.settings.value('files/last_import_path', '', type=str)

    def set_last_import_path(self, path: str):
        self.settings.setValue('files/last_import_path', path)

    def get_export_directory(self) -> str:
        """Get the last export directory"""
        return self.settings.value('export/directory', '', type=str)

    def set_export_directory(self, path: str):
        self.settings.setValue('export/directory', path)

    def get_ffmpeg_path(self) -> str:
        """Get the last working FFmpeg binary"""
        return self.settings.value('ffmpeg/path', '', type=str)

    def set_ffmpeg_path(self, path: str):
        if path:
            self.settings.setValue('ffmpeg/path', path)
        else:
            self.settings.remove('ffmpeg/path')

    def get_window_geometry(self):
        """Get saved window geometry"""
        return self.settings.value('window_geometry')

    def set_window_geometry(self, geometry):
        """Save window geometry"""
        self.settings.setValue('window_geometry', geometry)
