"""
cancel.py

Cooperative cancellation tokens.

A token can hand out child tokens. Cancelling a token cancels every child
created from it; cancelling a child leaves its parent untouched. Long
computations call ``raise_if_cancelled`` at safe points.
"""

import threading
from concurrent.futures import CancelledError


class CancellationToken:
    def __init__(self, parent=None):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._children = []
        self._parent = parent

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        with self._lock:
            self._event.set()
            children, self._children = self._children, []
        for child in children:
            child.cancel()
        if self._parent is not None:
            self._parent._forget(self)

    def child_token(self) -> "CancellationToken":
        child = CancellationToken(parent=self)
        with self._lock:
            if not self._event.is_set():
                self._children.append(child)
                return child
        child.cancel()
        return child

    def _forget(self, child):
        with self._lock:
            if child in self._children:
                self._children.remove(child)

    def wait(self, timeout=None) -> bool:
        """Block until cancelled or *timeout* elapses; True if cancelled."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise CancelledError()
