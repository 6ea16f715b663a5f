"""Tests for persisted settings."""

import pytest

QtCore = pytest.importorskip("PyQt6.QtCore")

from core.data_structures import Alignment, ProjectSettings, TimingMode  # noqa: E402
from utils.settings import SettingsManager  # noqa: E402


@pytest.fixture
def manager(tmp_path):
    store = QtCore.QSettings(str(tmp_path / "anitype.ini"), QtCore.QSettings.Format.IniFormat)
    return SettingsManager(store)


def test_defaults_when_nothing_saved(manager):
    assert manager.load_project_settings() == ProjectSettings()
    assert manager.get_last_import_path() == ""


def test_project_settings_round_trip(manager):
    project = ProjectSettings(
        text="HI\nTHERE",
        spacing=4,
        alignment=Alignment.BASELINE,
        fps=24,
        timing_mode=TimingMode.STAGGER,
        stagger_frames=3,
        hold_last_frame=False,
    )
    manager.save_project_settings(project)
    manager.settings.sync()

    assert manager.load_project_settings() == project


def test_unknown_enum_value_falls_back(manager):
    manager.settings.setValue("project/alignment", "diagonal")
    assert manager.load_project_settings().alignment is Alignment.CENTER


def test_paths(manager):
    manager.set_last_import_path("/tmp/letters")
    manager.set_export_directory("/tmp/out")
    assert manager.get_last_import_path() == "/tmp/letters"
    assert manager.get_export_directory() == "/tmp/out"


def test_ffmpeg_path_is_stored_and_cleared(manager):
    manager.set_ffmpeg_path("/opt/ffmpeg/bin/ffmpeg")
    assert manager.get_ffmpeg_path() == "/opt/ffmpeg/bin/ffmpeg"
    manager.set_ffmpeg_path("")
    assert manager.get_ffmpeg_path() == ""
