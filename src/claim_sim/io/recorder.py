# claim_sim/io/recorder.py
import json
import logging
import sys
from dataclasses import asdict
from typing import Protocol

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, ev) -> None: ...


class JsonlSink:
    def __init__(self, fp=None):
        self.fp = fp or sys.stdout

    def write(self, ev) -> None:
        self.fp.write(json.dumps(asdict(ev)) + "\n")


class MemorySink:
    """Keeps events in memory; `recent` serves an in-app session log."""

    def __init__(self, maxlen: int | None = None):
        self.events: list = []
        self.maxlen = maxlen

    def write(self, ev) -> None:
        self.events.append(ev)
        if self.maxlen is not None and len(self.events) > self.maxlen:
            del self.events[: len(self.events) - self.maxlen]

    def recent(self, count: int) -> list:
        return self.events[-count:] if count > 0 else []

    def named(self, name: str) -> list:
        return [ev for ev in self.events if ev.name == name]

    def clear(self) -> None:
        self.events.clear()


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, ev) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                # a broken sink must not stop the tracking session
                logger.exception("sink %s failed to write %s", type(s).__name__, ev.name)
