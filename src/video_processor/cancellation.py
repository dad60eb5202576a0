"""Deadline and termination handling for a processing run."""

import signal
from collections.abc import Iterator
from contextlib import contextmanager

from video_processor.exceptions import DeadlineExceeded, ProcessingCancelled


class _CancellationState:
    """Cancellations held back while a deferred block runs."""

    def __init__(self):
        self.deferring = 0
        self.pending: ProcessingCancelled | None = None


_state = _CancellationState()


def _cancel(error: ProcessingCancelled) -> None:
    if _state.deferring:
        if _state.pending is None:
            _state.pending = error
        return
    raise error


@contextmanager
def cancel_after(seconds: float | None) -> Iterator[None]:
    """
    Raises DeadlineExceeded in the main thread when the deadline passes, or
    ProcessingCancelled when SIGTERM arrives.

    Must be entered from the main thread. A deadline of None or <= 0 only
    installs the SIGTERM handler.
    """

    def on_alarm(signum, frame):
        _cancel(DeadlineExceeded(f"deadline of {seconds}s exceeded"))

    def on_term(signum, frame):
        _cancel(ProcessingCancelled("termination signal received"))

    previous_alarm = signal.signal(signal.SIGALRM, on_alarm)
    previous_term = signal.signal(signal.SIGTERM, on_term)
    if seconds and seconds > 0:
        signal.setitimer(signal.ITIMER_REAL, seconds)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, previous_alarm)
        signal.signal(signal.SIGTERM, previous_term)


@contextmanager
def deferred_cancellation() -> Iterator[None]:
    """
    Lets the block run to completion before a cancellation that arrives
    inside it is raised.

    The first held-back cancellation is raised when the outermost deferred
    block exits normally.
    """
    _state.deferring += 1
    pending = None
    try:
        yield
    finally:
        _state.deferring -= 1
        if not _state.deferring:
            pending, _state.pending = _state.pending, None
    if pending is not None:
        raise pending
