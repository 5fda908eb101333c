"""Application shutdown notification.

Libraries that persist on shutdown subscribe a handler here. The host
application (or the atexit hook) fires the notifier exactly once while the
process is terminating.
"""

import atexit
import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

ShutdownHandler = Callable[[], None]


class ShutdownNotifier:
    """Single-shot event fired when the application is quitting."""

    def __init__(self):
        self._handlers: list[ShutdownHandler] = []
        self._lock = threading.RLock()
        self._fired = False
        self._atexit_installed = False

    @property
    def fired(self) -> bool:
        """Whether the notifier has already fired."""
        return self._fired

    @property
    def handler_count(self) -> int:
        """Number of currently subscribed handlers."""
        with self._lock:
            return len(self._handlers)

    def is_subscribed(self, handler: ShutdownHandler) -> bool:
        """Check if handler is currently subscribed."""
        with self._lock:
            return handler in self._handlers

    def subscribe(self, handler: ShutdownHandler) -> None:
        """Subscribe a handler. Subscribing twice is a no-op."""
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def unsubscribe(self, handler: ShutdownHandler) -> None:
        """Unsubscribe a handler, if subscribed."""
        with self._lock:
            if handler in self._handlers:
                self._handlers.remove(handler)

    def fire(self) -> None:
        """Invoke every subscribed handler once.

        Handler failures are logged and do not stop the remaining handlers.
        Only the first call has any effect.
        """
        with self._lock:
            if self._fired:
                return
            self._fired = True
            handlers = list(self._handlers)

        logger.debug(f"Shutdown notifier firing {len(handlers)} handler(s)")
        for handler in handlers:
            try:
                handler()
            except Exception as e:
                logger.error(f"Shutdown handler {handler!r} failed: {type(e).__name__}: {e}")

    def install_atexit(self) -> None:
        """Fire this notifier when the interpreter exits."""
        with self._lock:
            if not self._atexit_installed:
                atexit.register(self.fire)
                self._atexit_installed = True


_default_notifier: ShutdownNotifier | None = None
_default_lock = threading.Lock()


def get_shutdown_notifier() -> ShutdownNotifier:
    """Get the process-wide shutdown notifier."""
    global _default_notifier
    with _default_lock:
        if _default_notifier is None:
            _default_notifier = ShutdownNotifier()
        return _default_notifier
