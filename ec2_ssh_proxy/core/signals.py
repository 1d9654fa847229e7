"""Signal handling while the session transport owns the terminal."""

from __future__ import annotations

import logging
import signal
import sys
import types
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)


def user_signals() -> list[signal.Signals]:
    """Return the interactive signals the parent must not react to.

    Returns
    -------
    list[signal.Signals]
        SIGINT on Windows; SIGINT, SIGQUIT and SIGTSTP elsewhere
    """
    if sys.platform == "win32":
        return [signal.SIGINT]
    return [signal.SIGINT, signal.SIGQUIT, signal.SIGTSTP]


def _swallow_signal(signum: int, frame: types.FrameType | None) -> None:
    logger.debug("Ignoring signal %d while session transport is running", signum)


@contextmanager
def ignore_user_signals() -> Generator[None, None, None]:
    """Suppress interactive signals in this process for the duration of the block.

    A no-op handler is installed instead of ``SIG_IGN`` so that a child
    started inside the block gets default dispositions on exec and still
    observes the signals itself. Previous handlers are restored on every
    exit path.

    Yields
    ------
    None
        Control back to the caller with signals suppressed
    """
    previous: dict[signal.Signals, Any] = {}
    try:
        for sig in user_signals():
            previous[sig] = signal.signal(sig, _swallow_signal)
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
