# sim/kernel.py

import heapq
import time
from collections.abc import Callable, Iterable

from .event import BaseEvent
from .hooks import KernelHooks, NoopHooks

Handler = Callable[[BaseEvent], Iterable[BaseEvent] | None]

_EPS = 1e-9


class Kernel:
    """
    Deterministic replay loop for one tracking session.

    Events pop by time, ties in scheduling order, so a fix scheduled up front lands
    before a tick scheduled later for the same instant. Handlers may return follow-up
    events; those must not lie in the past.
    """

    def __init__(self, hooks: KernelHooks | None = None):
        self._t = 0.0
        self._q: list[tuple[float, int, BaseEvent]] = []
        self._seq = 0
        self._subs: dict[type[BaseEvent], list[Handler]] = {}
        self._hooks = hooks or NoopHooks()

    @property
    def now(self) -> float:
        return self._t

    @property
    def pending(self) -> int:
        return len(self._q)

    def on(self, etype: type[BaseEvent], handler: Handler) -> None:
        self._subs.setdefault(etype, []).append(handler)

    def schedule(self, ev: BaseEvent) -> None:
        self._seq += 1
        heapq.heappush(self._q, (ev.t, self._seq, ev))
        self._hooks.schedule(ev, now=self._t, qsize=len(self._q))

    def schedule_all(self, events: Iterable[BaseEvent]) -> None:
        for ev in events:
            self.schedule(ev)

    def _due(self, until: float | None) -> bool:
        return bool(self._q) and (until is None or self._q[0][0] <= until)

    def _dispatch(self, ev: BaseEvent, seq: int) -> int:
        """Run every handler for `ev`; returns how many follow-ups were scheduled."""
        handlers = self._subs.get(type(ev), ())
        started = time.perf_counter()
        self._hooks.dispatch_start(ev, seq=seq, qsize=len(self._q), handlers=len(handlers))
        follow_ups = 0
        for h in handlers:
            for nxt in h(ev) or ():
                if nxt.t < self._t - _EPS:
                    self._hooks.error(
                        ev,
                        reason="scheduled_past",
                        scheduled_t=nxt.t,
                        nxt_type=type(nxt).__name__,
                    )
                    raise RuntimeError(f"{type(ev).__name__} handler scheduled t={nxt.t} < now {self._t}")
                self.schedule(nxt)
                follow_ups += 1
        ms = (time.perf_counter() - started) * 1000
        self._hooks.dispatch_end(ev, out_events=follow_ups, ms=ms)
        return follow_ups

    def run(
        self,
        until: float | None = None,
        max_events: int | None = None,
        stop_when: Callable[[], bool] | None = None,
    ) -> int:
        """
        Pop and dispatch events up to `until` (inclusive).

        Stops early after `max_events` dispatches or as soon as `stop_when()` is true
        after a dispatch. Returns the number of events processed by this call.
        """
        t0 = time.perf_counter()
        self._hooks.run_start(until=until, max_events=max_events, qsize=len(self._q))
        processed = 0
        while self._due(until):
            t, seq, ev = heapq.heappop(self._q)
            if t < self._t - _EPS:
                self._hooks.error(ev, reason="time_backwards", prev_t=self._t, t=t)
                raise RuntimeError(f"time went backwards: {t} < {self._t}")
            self._t = t
            self._dispatch(ev, seq)
            processed += 1
            if max_events and processed >= max_events:
                break
            if stop_when is not None and stop_when():
                break
        self._hooks.run_end(
            processed=processed,
            last_t=self._t,
            qsize=len(self._q),
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return processed
