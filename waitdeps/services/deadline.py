import signal
import threading
from contextlib import contextmanager

from waitdeps.core.errors import ScriptTimeoutError


def hard_deadline_supported() -> bool:
    return hasattr(signal, "setitimer") and threading.current_thread() is threading.main_thread()


@contextmanager
def hard_deadline(seconds: float):
    """Raise ScriptTimeoutError from SIGALRM once ``seconds`` of wall-clock time pass.

    A no-op when ``seconds`` is 0, off the main thread, or on platforms without
    ``setitimer``.
    """
    if seconds <= 0 or not hard_deadline_supported():
        yield
        return

    def _expire(_signum, _frame):
        raise ScriptTimeoutError(f"Script timeout of {seconds:g}s reached")

    previous = signal.signal(signal.SIGALRM, _expire)
    signal.setitimer(signal.ITIMER_REAL, seconds)
    try:
        yield
    finally:
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, previous)
