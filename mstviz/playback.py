"""Timed playback of an edge-processing run.

`PlaybackScheduler` is the single entry point through which a host issues
commands to an `EdgeProcessingEngine`. Manual commands and timer ticks take the
same re-entrant lock, so a background tick can never interleave with a manual
step, reset or load.

Cancellation uses a run epoch. ``play`` starts a worker bound to the current
epoch; ``pause``, ``load`` and ``reset`` advance the epoch while holding the
lock. A worker that wakes up after cancellation sees a stale epoch inside the
lock and exits without stepping.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from mstviz.algorithms.kruskal import EdgeProcessingEngine
from mstviz.config import PLAYBACK_CONFIG, PlaybackConfig
from mstviz.logging import get_logger
from mstviz.model.graph import Edge, Graph
from mstviz.types.base import EngineStatus
from mstviz.types.dto import EngineSnapshot

LOGGER = get_logger(__name__)

StepListener = Callable[[EngineSnapshot], None]


class PlaybackScheduler:
    """Serialized command surface plus a cancelable periodic stepper.

    Args:
        engine: Engine to drive. A fresh idle engine is created when omitted.
        config: Cadence settings (defaults to ``PLAYBACK_CONFIG``).
        on_step: Called with a snapshot after every command that changed the
            run, from inside the lock. Keep it short; it must not call back
            into a different thread that waits on this scheduler.
    """

    def __init__(
        self,
        engine: Optional[EdgeProcessingEngine] = None,
        config: Optional[PlaybackConfig] = None,
        on_step: Optional[StepListener] = None,
    ) -> None:
        self.engine = engine if engine is not None else EdgeProcessingEngine()
        self.config = config if config is not None else PLAYBACK_CONFIG
        self._on_step = on_step
        self._lock = threading.RLock()
        self._speed = self.config.validate_speed(self.config.default_speed)
        self._playing = False
        self._epoch = 0
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None

    #
    # Playback control
    #
    @property
    def is_playing(self) -> bool:
        with self._lock:
            return self._playing

    @property
    def speed(self) -> float:
        with self._lock:
            return self._speed

    @property
    def delay(self) -> float:
        """Current inter-step delay in seconds."""
        with self._lock:
            return self.config.delay_for(self._speed)

    def set_speed(self, multiplier: float) -> None:
        """Change the speed multiplier; applies from the next tick.

        Raises:
            ValueError: If ``multiplier`` is outside the configured range.
        """
        with self._lock:
            self._speed = self.config.validate_speed(multiplier)
            LOGGER.debug(f"Speed set to {self._speed}x (delay {self.delay:.3f}s)")

    def play(self) -> bool:
        """Start stepping on the configured cadence.

        Returns:
            True if playback is running after the call. Playing with no graph
            or a completed run does nothing and returns False.
        """
        with self._lock:
            if self._playing:
                return True
            if self.engine.status != EngineStatus.RUNNING:
                LOGGER.debug(f"play ignored in state {self.engine.status.name}")
                return False
            self._playing = True
            self._epoch += 1
            self._wake = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._epoch, self._wake),
                name="mstviz-playback",
                daemon=True,
            )
            self._thread.start()
            LOGGER.debug(f"Playback started (epoch {self._epoch})")
            return True

    def pause(self) -> None:
        """Stop stepping. Safe to call when already paused."""
        with self._lock:
            self._cancel()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker thread to exit.

        Returns:
            True if no worker is alive afterwards.
        """
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def tick(self, epoch: Optional[int] = None) -> bool:
        """Perform one scheduled step.

        Args:
            epoch: Run epoch the caller belongs to. A stale epoch makes the
                tick a no-op. None ticks unconditionally while playing.

        Returns:
            True if playback should continue.
        """
        with self._lock:
            if not self._playing:
                return False
            if epoch is not None and epoch != self._epoch:
                return False
            edge = self.engine.step_forward()
            if edge is not None:
                self._notify()
            if self.engine.is_complete:
                LOGGER.debug("Run complete; pausing playback")
                self._cancel()
                return False
            return True

    #
    # Serialized engine commands
    #
    def load(self, graph: Graph) -> None:
        """Cancel playback and load a new graph."""
        with self._lock:
            self._cancel()
            self.engine.load(graph)
            self._notify()

    def reset(self) -> None:
        """Cancel playback and restart the run on the same graph."""
        with self._lock:
            self._cancel()
            self.engine.reset()
            self._notify()

    def step_forward(self) -> Optional[Edge]:
        with self._lock:
            edge = self.engine.step_forward()
            if edge is not None:
                self._notify()
            if self._playing and self.engine.is_complete:
                self._cancel()
            return edge

    def step_backward(self) -> bool:
        with self._lock:
            moved = self.engine.step_backward()
            if moved:
                self._notify()
            return moved

    def seek(self, index: int) -> bool:
        with self._lock:
            moved = self.engine.seek(index)
            if moved:
                self._notify()
            return moved

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return self.engine.snapshot()

    #
    # Internals
    #
    def _cancel(self) -> None:
        """Stop the current run. Caller holds the lock."""
        if not self._playing:
            return
        self._playing = False
        self._epoch += 1
        self._wake.set()
        LOGGER.debug("Playback paused")

    def _notify(self) -> None:
        if self._on_step is not None:
            self._on_step(self.engine.snapshot())

    def _run(self, epoch: int, wake: threading.Event) -> None:
        try:
            while True:
                with self._lock:
                    if epoch != self._epoch:
                        return
                    delay = self.config.delay_for(self._speed)
                if wake.wait(delay):
                    return
                if not self.tick(epoch):
                    return
        except Exception:
            LOGGER.exception(f"Playback worker failed (epoch {epoch})")
        finally:
            # A worker that exits while its run is still current must not
            # leave the scheduler reporting playback.
            with self._lock:
                if epoch == self._epoch:
                    self._cancel()
