from __future__ import annotations
import heapq
import itertools
from typing import Any, Callable, List, Optional, Tuple

# Schedulers follow the tkinter ``widget.after`` / ``widget.after_cancel`` shape
After = Callable[[int, Callable[[], None]], Any]
AfterCancel = Callable[[Any], None]


class Ticker:
    """Fixed-interval tick source on top of an ``after``-style scheduler.

    ``stop()`` cancels the pending call, so no tick fires afterwards. A
    firing that arrives while the callback is still running is skipped.
    """

    def __init__(self, after: After, after_cancel: AfterCancel, interval_ms: int, callback: Callable[[], None]):
        if interval_ms <= 0:
            raise ValueError(f'interval_ms must be positive, got {interval_ms}')
        self._after = after
        self._after_cancel = after_cancel
        self.interval_ms = interval_ms
        self.callback = callback
        self.after_id = None
        self._running = False
        self._in_callback = False
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._schedule()

    def stop(self) -> None:
        self._running = False
        if self.after_id is not None:
            self._after_cancel(self.after_id)
            self.after_id = None

    def _schedule(self) -> None:
        self.after_id = self._after(self.interval_ms, self._fire)

    def _fire(self) -> None:
        self.after_id = None
        if not self._running:
            return
        if self._in_callback:
            self._schedule()
            return
        self._in_callback = True
        try:
            self.callback()
            self.ticks += 1
        except Exception:
            # A failed tick leaves the ticker stopped so it can be restarted
            self._running = False
            raise
        finally:
            self._in_callback = False
        # The callback may have stopped us
        if self._running and self.after_id is None:
            self._schedule()


class ManualScheduler:
    """``after``/``after_cancel`` driven by explicit ``advance(ms)`` calls.

    Used where there is no tk main loop: the pygame front-end pumps it from
    ``pygame.time.get_ticks()``, and tests step it deterministically.
    """

    def __init__(self):
        self.now = 0
        self._queue: List[Tuple[int, int, Callable[[], None]]] = []
        self._cancelled = set()
        self._ids = itertools.count(1)

    def after(self, ms: int, fn: Callable[[], None]) -> int:
        after_id = next(self._ids)
        heapq.heappush(self._queue, (self.now + max(0, int(ms)), after_id, fn))
        return after_id

    def after_cancel(self, after_id: Optional[int]) -> None:
        if after_id is not None:
            self._cancelled.add(after_id)

    def pending(self) -> int:
        return sum(1 for (_, i, _) in self._queue if i not in self._cancelled)

    def advance(self, ms: int) -> int:
        """Move the clock forward and run what was due. Returns how many ran.

        The clock jumps to the target before any callback runs, so work
        scheduled from a callback is due relative to the new time and waits
        for a later call. A stalled frame gives one tick, not a burst.
        """
        target = self.now + ms
        batch = []
        while self._queue and self._queue[0][0] <= target:
            batch.append(heapq.heappop(self._queue))
        self.now = target
        ran = 0
        for i, (_, after_id, fn) in enumerate(batch):
            if after_id in self._cancelled:
                self._cancelled.discard(after_id)
                continue
            try:
                fn()
            except Exception:
                for entry in batch[i + 1:]:
                    heapq.heappush(self._queue, entry)
                raise
            ran += 1
        return ran

    def advance_to(self, now_ms: int) -> int:
        return self.advance(max(0, now_ms - self.now))
