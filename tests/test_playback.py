"""Tests for timed playback and the serialized command surface."""

import logging
import threading

import pytest

from mstviz.algorithms.kruskal import EdgeProcessingEngine
from mstviz.config import PlaybackConfig
from mstviz.playback import PlaybackScheduler
from mstviz.types.base import EngineStatus

# Worker never fires on its own; ticks are driven by the test
STALLED = PlaybackConfig(base_delay=3600.0, min_delay=3600.0)

# Worker fires quickly enough to finish small graphs in milliseconds
FAST = PlaybackConfig(base_delay=0.01, min_delay=0.001)


@pytest.fixture
def stalled(triangle):
    scheduler = PlaybackScheduler(config=STALLED)
    scheduler.load(triangle)
    yield scheduler
    scheduler.pause()
    scheduler.join(timeout=1.0)


class TestSpeed:
    def test_default_speed_and_delay(self):
        scheduler = PlaybackScheduler()
        assert scheduler.speed == 1.0
        assert scheduler.delay == pytest.approx(0.6)

    @pytest.mark.parametrize(
        "speed,delay", [(2.0, 0.3), (1.0, 0.6), (0.5, 1.2), (0.1, 6.0)]
    )
    def test_delay_scales_with_speed(self, speed, delay):
        scheduler = PlaybackScheduler()
        scheduler.set_speed(speed)
        assert scheduler.delay == pytest.approx(delay)

    def test_delay_floor(self):
        config = PlaybackConfig(base_delay=0.15, min_delay=0.1)
        scheduler = PlaybackScheduler(config=config)
        scheduler.set_speed(2.0)
        assert scheduler.delay == pytest.approx(0.1)

    @pytest.mark.parametrize("speed", [0.0, 0.05, 2.5, -1.0])
    def test_out_of_range_speed_rejected(self, speed):
        scheduler = PlaybackScheduler()
        with pytest.raises(ValueError):
            scheduler.set_speed(speed)
        assert scheduler.speed == 1.0


class TestPlayPause:
    def test_play_without_graph_does_nothing(self):
        scheduler = PlaybackScheduler(config=STALLED)
        assert scheduler.play() is False
        assert not scheduler.is_playing

    def test_play_on_complete_run_does_nothing(self, stalled):
        stalled.engine.run_to_completion()
        assert stalled.play() is False
        assert not stalled.is_playing

    def test_play_is_idempotent(self, stalled):
        assert stalled.play() is True
        thread = stalled._thread
        assert stalled.play() is True
        assert stalled._thread is thread

    def test_pause_twice_is_harmless(self, stalled):
        stalled.play()
        stalled.pause()
        before = stalled.snapshot()
        stalled.pause()
        assert not stalled.is_playing
        assert stalled.snapshot() == before
        assert stalled.join(timeout=1.0)

    def test_ticks_step_and_auto_pause_at_completion(self, stalled):
        stalled.play()
        assert stalled.tick() is True
        assert stalled.tick() is True
        assert stalled.snapshot().cursor == 2
        assert stalled.tick() is False
        assert stalled.engine.status == EngineStatus.COMPLETE
        assert not stalled.is_playing
        assert stalled.tick() is False
        assert stalled.snapshot().cursor == 3

    def test_tick_while_paused_does_nothing(self, stalled):
        assert stalled.tick() is False
        assert stalled.snapshot().cursor == 0


class TestCancellation:
    def test_stale_tick_after_pause_never_steps(self, stalled):
        stalled.play()
        epoch = stalled._epoch
        stalled.pause()
        # A tick from the cancelled run arriving late
        assert stalled.tick(epoch) is False
        assert stalled.snapshot().cursor == 0

    def test_stale_tick_after_restart_never_steps(self, stalled):
        stalled.play()
        old_epoch = stalled._epoch
        stalled.pause()
        stalled.play()
        assert stalled.tick(old_epoch) is False
        assert stalled.snapshot().cursor == 0
        assert stalled.tick(stalled._epoch) is True
        assert stalled.snapshot().cursor == 1

    def test_reset_cancels_playback(self, stalled):
        stalled.play()
        epoch = stalled._epoch
        stalled.tick(epoch)
        stalled.reset()
        assert not stalled.is_playing
        assert stalled.tick(epoch) is False
        assert stalled.snapshot().cursor == 0

    def test_load_cancels_playback(self, stalled, square_with_diagonal):
        stalled.play()
        epoch = stalled._epoch
        stalled.load(square_with_diagonal)
        assert not stalled.is_playing
        assert stalled.tick(epoch) is False
        assert stalled.engine.node_count == 4
        assert stalled.snapshot().cursor == 0

    def test_pause_wakes_sleeping_worker(self, stalled):
        stalled.play()
        stalled.pause()
        assert stalled.join(timeout=2.0)


class TestSerializedCommands:
    def test_manual_step_while_playing(self, stalled):
        stalled.play()
        stalled.step_forward()
        assert stalled.is_playing
        assert stalled.snapshot().cursor == 1
        stalled.tick()
        assert stalled.snapshot().cursor == 2

    def test_manual_step_to_completion_stops_playback(self, stalled):
        stalled.play()
        for _ in range(3):
            stalled.step_forward()
        assert not stalled.is_playing

    def test_step_backward_and_seek(self, stalled):
        stalled.seek(3)
        assert stalled.step_backward() is True
        assert stalled.snapshot().cursor == 2
        assert stalled.seek(2) is False

    def test_listener_sees_every_change(self, triangle):
        seen = []
        scheduler = PlaybackScheduler(config=STALLED, on_step=seen.append)
        scheduler.load(triangle)
        scheduler.step_forward()
        scheduler.step_forward()
        scheduler.step_backward()
        scheduler.step_backward()
        scheduler.step_backward()  # no-op at cursor 0
        assert [s.cursor for s in seen] == [0, 1, 2, 1, 0]
        assert [s.total_weight for s in seen] == [0, 1, 3, 1, 0]

    def test_wraps_existing_engine(self, triangle):
        engine = EdgeProcessingEngine(triangle)
        scheduler = PlaybackScheduler(engine, config=STALLED)
        scheduler.step_forward()
        assert engine.cursor == 1


class TestWorkerThread:
    def test_plays_to_completion(self, square_with_diagonal):
        done = threading.Event()
        cursors = []

        def on_step(snapshot):
            cursors.append(snapshot.cursor)
            if snapshot.is_complete:
                done.set()

        scheduler = PlaybackScheduler(config=FAST, on_step=on_step)
        scheduler.load(square_with_diagonal)
        assert scheduler.play()
        assert done.wait(timeout=5.0)
        assert scheduler.join(timeout=5.0)
        assert not scheduler.is_playing
        assert cursors == [0, 1, 2, 3, 4, 5]
        assert scheduler.snapshot().total_weight == 7

    def test_speed_change_while_playing(self, square_with_diagonal):
        scheduler = PlaybackScheduler(config=FAST)
        scheduler.load(square_with_diagonal)
        scheduler.play()
        scheduler.set_speed(2.0)
        assert scheduler.join(timeout=5.0)
        assert scheduler.engine.is_complete

    def test_listener_error_stops_playback_cleanly(self, square_with_diagonal, caplog):
        failed = []

        def on_step(snapshot):
            if snapshot.cursor == 1 and not failed:
                failed.append(snapshot.cursor)
                raise RuntimeError("listener broke")

        scheduler = PlaybackScheduler(config=FAST, on_step=on_step)
        scheduler.load(square_with_diagonal)
        with caplog.at_level(logging.ERROR, logger="mstviz"):
            assert scheduler.play()
            assert scheduler.join(timeout=5.0)

        assert failed == [1]
        assert not scheduler.is_playing
        assert scheduler.snapshot().cursor == 1
        assert "Playback worker failed" in caplog.text

        # A fresh play starts a new worker and finishes the run
        assert scheduler.play() is True
        assert scheduler.join(timeout=5.0)
        assert scheduler.engine.is_complete
