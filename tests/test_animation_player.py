"""Tests for the playback controller and frame sources."""

from core.animation_player import PlaybackController, PlaybackState
from core.asset_library import AssetLibrary
from core.exceptions import StaggerOverflowError
from core.frame_source import LiveFrameSource, SweepFrameSource, pump
from renderer.video_handle import FrameListVideo

from conftest import make_frames


class StubbornVideo(FrameListVideo):
    """Video handle whose play() fails, like a clip blocked by the host."""

    def play(self):
        raise RuntimeError("playback not allowed")


def make_controller(scheduler, library=None, **kwargs):
    library = library if library is not None else AssetLibrary()
    rendered = []

    def render(frame):
        rendered.append(frame)
        return frame

    controller = PlaybackController(library, render, scheduler, **kwargs)
    return controller, rendered


class TestPlaybackController:
    """Tests for start/tick/stop/reset."""

    def test_start_plays_from_zero(self, scheduler):
        library = AssetLibrary()
        handle = FrameListVideo(make_frames(4, 10, 10), fps=4)
        handle.seek(0.5)
        library.add_video("V", handle, 10, 10, duration=1.0, fps=30)
        controller, _ = make_controller(scheduler, library)

        assert controller.start() is True
        assert controller.state is PlaybackState.PLAYING
        assert controller.global_frame == 0
        assert handle.current_time == 0
        assert handle.playing is True
        assert scheduler.active

    def test_each_tick_advances_one_frame(self, scheduler):
        controller, rendered = make_controller(scheduler)
        controller.start()
        scheduler.fire(3)

        assert rendered == [1, 2, 3]
        assert controller.global_frame == 3
        assert controller.last_result == 3

    def test_stop_keeps_frame_and_pauses_videos(self, scheduler):
        library = AssetLibrary()
        handle = FrameListVideo(make_frames(4, 10, 10), fps=4)
        library.add_video("V", handle, 10, 10, duration=1.0, fps=30)
        controller, _ = make_controller(scheduler, library)
        controller.start()
        scheduler.fire(5)

        controller.stop()

        assert controller.state is PlaybackState.STOPPED
        assert controller.global_frame == 5
        assert handle.playing is False
        assert not scheduler.active

    def test_restart_begins_at_zero(self, scheduler):
        controller, rendered = make_controller(scheduler)
        controller.start()
        scheduler.fire(4)
        controller.toggle()
        assert controller.playing is False

        controller.toggle()
        scheduler.fire(1)
        assert rendered[-1] == 1

    def test_reset_renders_frame_zero(self, scheduler):
        controller, rendered = make_controller(scheduler)
        controller.start()
        scheduler.fire(7)

        controller.reset()

        assert controller.state is PlaybackState.STOPPED
        assert controller.global_frame == 0
        assert rendered[-1] == 0

    def test_tick_while_stopped_does_nothing(self, scheduler):
        controller, rendered = make_controller(scheduler)
        controller.tick()
        assert rendered == []
        assert controller.global_frame == 0

    def test_video_play_failure_is_ignored(self, scheduler):
        library = AssetLibrary()
        handle = StubbornVideo(make_frames(4, 10, 10), fps=4)
        library.add_video("V", handle, 10, 10, duration=1.0, fps=30)
        controller, _ = make_controller(scheduler, library)

        assert controller.start() is True
        assert controller.playing

    def test_invalid_composition_does_not_start(self, scheduler, log_recorder):
        def validate():
            raise StaggerOverflowError(0, 120, 100)

        controller, _ = make_controller(scheduler, validate=validate, log_callback=log_recorder)

        assert controller.start() is False
        assert controller.playing is False
        assert scheduler.start_calls == 0
        assert log_recorder.levels() == ["ERROR"]

    def test_status_callback_reports_frame(self, scheduler):
        frames = []
        controller, _ = make_controller(scheduler, status_callback=frames.append)
        controller.start()
        scheduler.fire(2)
        controller.reset()
        assert frames == [1, 2, 0]


class TestFrameSources:
    """Tests for the live and sweep frame sources."""

    def test_live_source_counts_up(self):
        source = LiveFrameSource()
        assert [source.next_frame() for _ in range(3)] == [1, 2, 3]
        source.reset()
        assert source.frame == 0

    def test_sweep_covers_range_once(self):
        source = SweepFrameSource(4)
        assert pump(source, lambda frame: frame) == [0, 1, 2, 3]
        assert source.next_frame() is None

    def test_pump_respects_max_frames(self):
        assert pump(LiveFrameSource(), lambda frame: frame * 10, max_frames=2) == [10, 20]

    def test_empty_sweep(self):
        assert pump(SweepFrameSource(0), lambda frame: frame) == []
