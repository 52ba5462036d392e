import threading
from contextlib import contextmanager


class SharedLink:
    """
    A link that can be used from several threads. Created by Link.enable_link_lock().
    Callers hold the lock for the duration of an exchange:

        with shared.lock() as link:
            link.put_expr(expr)
            link.flush()
    """

    def __init__(self, link):
        self._link = link
        self._lock = threading.RLock()

    @contextmanager
    def lock(self):
        with self._lock:
            yield self._link

    def close(self):
        with self._lock:
            self._link.close()

    @property
    def closed(self):
        return self._link.closed
