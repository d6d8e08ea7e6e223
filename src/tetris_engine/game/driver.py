from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, List, Optional

from tetris_engine.errors import SessionClosedError

from .core import Intent, StepResult, TetrisGame
from .state import GameConfig, GameState


logger = logging.getLogger(__name__)

Listener = Callable[[StepResult], None]


class Ticker:
    """Emits ``Intent.TICK`` every ``period_ms`` from a daemon thread."""

    def __init__(self, period_ms: int, emit: Callable[[Intent], None]) -> None:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        self.period_s = period_ms / 1000.0
        self._emit = emit
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="tetris-ticker", daemon=True)
        self._thread.start()
        logger.debug("ticker started (%.3fs)", self.period_s)

    def _run(self) -> None:
        while not self._stop.wait(self.period_s):
            self._emit(Intent.TICK)

    def stop(self) -> None:
        thread = self._thread
        if thread is None:
            return
        self._stop.set()
        if thread is not threading.current_thread():
            thread.join()
        self._thread = None
        logger.debug("ticker stopped")


class GameSession:
    """Serializes timer ticks and player input onto one game.

    Producers (the ticker thread, input handlers) only ``submit`` intents to an
    ordered queue. A single consumer calls ``pump`` or ``run`` and applies them
    one at a time, so every transition reads the latest committed state.

    Use as a context manager: entering starts the ticker, leaving stops it,
    drops pending intents and detaches listeners.
    """

    def __init__(self, game: Optional[TetrisGame] = None, config: Optional[GameConfig] = None) -> None:
        self.game = game or TetrisGame(config)
        self._intents: "queue.Queue[Intent]" = queue.Queue()
        self._listeners: List[Listener] = []
        self._ticker = Ticker(self.game.config.tick_ms, self.submit)
        self._closed = False

    @property
    def state(self) -> GameState:
        return self.game.state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return self._intents.qsize()

    def submit(self, intent: Intent) -> None:
        if self._closed:
            raise SessionClosedError(f"cannot submit {intent!r} to a closed session")
        self._intents.put(Intent(intent))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, intent: Intent) -> StepResult:
        result = self.game.step(intent)
        for listener in list(self._listeners):
            listener(result)
        return result

    def pump(self, block: bool = False, timeout: Optional[float] = None) -> int:
        """Apply queued intents in FIFO order; return how many were applied.

        With ``block=True`` waits up to ``timeout`` for the first intent.
        """
        applied = 0
        while not self._closed:
            try:
                intent = self._intents.get(block=block and applied == 0, timeout=timeout)
            except queue.Empty:
                break
            self._apply(intent)
            applied += 1
        return applied

    def run(self, stop: threading.Event, poll_s: float = 0.05) -> None:
        while not stop.is_set() and not self._closed:
            self.pump(block=True, timeout=poll_s)

    def open(self) -> "GameSession":
        if self._closed:
            raise SessionClosedError("session already closed")
        self._ticker.start()
        return self

    def close(self) -> None:
        if self._closed:
            return
        self._ticker.stop()
        self._closed = True
        dropped = 0
        while True:
            try:
                self._intents.get_nowait()
            except queue.Empty:
                break
            dropped += 1
        self._listeners.clear()
        logger.debug("session closed, dropped %d pending intents", dropped)

    def __enter__(self) -> "GameSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
