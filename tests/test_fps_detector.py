"""Tests for frame rate detection."""

from core.asset_library import AssetLibrary
from core.data_structures import AssetDescriptor, AssetKind, ProjectSettings
from core.fps_detector import FpsSource, FrameRateDetector
from renderer.video_handle import FrameListVideo

from conftest import make_frames


def add_clip(library, letter, duration, fps):
    handle = FrameListVideo(make_frames(2, 20, 20), fps=2)
    return library.add_video(letter, handle, 20, 20, duration=duration, fps=fps)


class TestDetect:
    """Tests for the detection precedence."""

    def test_video_rate_from_stored_frame_count(self):
        library = AssetLibrary()
        asset = add_clip(library, "A", duration=2.0, fps=24)
        assert asset.frame_count == 48
        assert FrameRateDetector.detect(library) == (24, FpsSource.VIDEO)

    def test_video_beats_sequence_inserted_earlier(self):
        library = AssetLibrary()
        library.add_image_sequence("S", make_frames(30, 10, 10))
        add_clip(library, "V", duration=1.0, fps=25)
        assert FrameRateDetector.detect(library) == (25, FpsSource.VIDEO)

    def test_video_over_120_fps_is_rejected(self):
        library = AssetLibrary()
        library.add("V", AssetDescriptor(AssetKind.VIDEO, 10, 10, frame_count=13, duration=0.1))
        library.add_image_sequence("S", make_frames(12, 10, 10))
        assert FrameRateDetector.detect(library) == (12, FpsSource.SEQUENCE)

    def test_long_sequence_means_24(self):
        library = AssetLibrary()
        library.add_image_sequence("A", make_frames(12, 10, 10))
        library.add_image_sequence("B", make_frames(24, 10, 10))
        assert FrameRateDetector.detect(library) == (24, FpsSource.SEQUENCE)

    def test_short_sequence_means_12(self):
        library = AssetLibrary()
        library.add_image_sequence("A", make_frames(15, 10, 10))
        assert FrameRateDetector.detect(library) == (12, FpsSource.SEQUENCE)

    def test_nothing_conclusive(self):
        library = AssetLibrary()
        library.add_image_sequence("A", make_frames(5, 10, 10))
        assert FrameRateDetector.detect(library) is None


class TestApply:
    """Tests for the two-phase update of settings and library."""

    def test_equal_rate_is_a_no_op(self):
        library = AssetLibrary()
        add_clip(library, "A", duration=2.0, fps=24)
        version = library.version
        settings = ProjectSettings(fps=24)

        new_settings, detection = FrameRateDetector().apply(library, settings)

        assert new_settings is settings
        assert detection.fps == 24
        assert detection.changed is False
        assert library.version == version

    def test_new_rate_recomputes_video_frame_counts(self, log_recorder):
        library = AssetLibrary()
        add_clip(library, "A", duration=2.0, fps=24)
        add_clip(library, "B", duration=1.0, fps=30)
        settings = ProjectSettings(fps=30)

        new_settings, detection = FrameRateDetector(log_recorder).apply(library, settings)

        assert new_settings.fps == 24
        assert settings.fps == 30
        assert detection.changed is True
        assert detection.source is FpsSource.VIDEO
        assert library.get("A").frame_count == 48
        assert library.get("B").frame_count == 24
        assert "Auto-detected: 24 FPS from clips" in log_recorder.entries[0][0]

    def test_default_keeps_current_rate(self, log_recorder):
        library = AssetLibrary()
        library.add_image_sequence("A", make_frames(3, 10, 10))
        settings = ProjectSettings(fps=30)

        new_settings, detection = FrameRateDetector(log_recorder).apply(library, settings)

        assert new_settings.fps == 30
        assert detection.source is FpsSource.DEFAULT
        assert detection.describe() == "Default: 30 FPS"
        assert log_recorder.levels() == ["INFO"]

    def test_sequence_detection_leaves_sequences_alone(self):
        library = AssetLibrary()
        library.add_image_sequence("A", make_frames(24, 10, 10))
        new_settings, _ = FrameRateDetector().apply(library, ProjectSettings(fps=30))
        assert new_settings.fps == 24
        assert library.get("A").frame_count == 24


class TestChangeFps:
    """Tests for switching the project rate by hand."""

    def test_manual_change_retimes_videos(self):
        library = AssetLibrary()
        add_clip(library, "A", duration=2.0, fps=30)
        library.add_image_sequence("S", make_frames(5, 10, 10))
        version = library.version

        new_settings, updated = FrameRateDetector.change_fps(
            library, ProjectSettings(fps=30), 24)

        assert new_settings.fps == 24
        assert updated == 1
        assert library.get("A").frame_count == 48
        assert library.get("S").frame_count == 5
        assert library.version == version + 1

    def test_same_rate_keeps_settings(self):
        library = AssetLibrary()
        add_clip(library, "A", duration=2.0, fps=30)
        settings = ProjectSettings(fps=30)

        new_settings, updated = FrameRateDetector.change_fps(library, settings, 30)

        assert new_settings is settings
        assert updated == 0

    def test_settings_already_at_new_rate(self):
        library = AssetLibrary()
        add_clip(library, "A", duration=1.0, fps=30)
        settings = ProjectSettings(fps=12)

        new_settings, updated = FrameRateDetector.change_fps(library, settings, settings.fps)

        assert new_settings is settings
        assert updated == 1
        assert library.get("A").frame_count == 12
