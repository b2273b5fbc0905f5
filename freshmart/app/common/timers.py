from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, List, Protocol, Tuple


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable: ...


@dataclass(order=True)
class Timer:
    due: float
    seq: int
    callback: Callable[..., Any] = field(compare=False)
    args: Tuple[Any, ...] = field(compare=False, default=())
    cancelled: bool = field(compare=False, default=False)

    def cancel(self) -> None:
        self.cancelled = True


class DeferredScheduler:
    """Holds timers on a virtual clock until `advance()` is called.

    A web request finishes long before any UI delay elapses, so the web layer
    only inspects `pending`; tests move the clock forward explicitly.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: List[Timer] = []
        self._seq = itertools.count()

    @property
    def pending(self) -> List[Timer]:
        return sorted(t for t in self._timers if not t.cancelled)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Timer:
        timer = Timer(self.now + max(delay, 0.0), next(self._seq), callback, args)
        self._timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            timer = due[0]
            self._timers.remove(timer)
            self.now = timer.due
            timer.callback(*timer.args)
        self.now = target
