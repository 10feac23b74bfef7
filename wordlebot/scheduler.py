"""
scheduler.py

Background suggestion updates for an interactive front end.

The front end keeps typing while suggestions are computed on a worker
thread. Only one generation of work is live: every new request cancels the
previous one, and a cancelled computation never delivers its result.
Finished results and user input arrive on a single event queue, so the
front end waits for "whichever comes first" with one call to next_event().
"""

import logging
import queue
import threading
from concurrent.futures import CancelledError, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .cancel import CancellationToken
from .errors import WordlebotError
from .solver import N_SUGGESTIONS


logger = logging.getLogger(__name__)


class EventKind(Enum):
    INPUT = "input"
    SUGGESTIONS = "suggestions"
    ERROR = "error"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    payload: Any
    generation: int = 0


class SuggestionScheduler:
    """
    Cancel-and-replace runner for Solver.suggest.

    Parameters
    ----------
    solver : Solver
        Shared, read-only engine.
    n : int
        Number of suggestions per request.
    two_level : bool
        Compute lookahead scores for the top suggestions.
    max_workers : int
        Worker threads. More than one lets a new generation start while a
        cancelled one is still winding down to its next checkpoint.
    """

    def __init__(self, solver, n=N_SUGGESTIONS, two_level=False, max_workers=2):
        self.solver = solver
        self.n = n
        self.two_level = two_level
        self._events = queue.Queue()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="suggest"
        )
        self._token = CancellationToken()
        self._child = None
        self._generation = 0
        self._last_guesses = None
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        return self._generation

    def request(self, guesses):
        """Start computing suggestions for *guesses*, superseding older work."""
        guesses = tuple(guesses)
        with self._lock:
            if self._token.cancelled:
                raise RuntimeError("scheduler is closed")
            if self._child is not None:
                self._child.cancel()
            self._generation += 1
            generation = self._generation
            child = self._token.child_token()
            self._child = child
            self._last_guesses = guesses

        logger.debug("generation %d: %d guesses", generation, len(guesses))
        return self._executor.submit(self._run, generation, child, guesses)

    def update(self, guesses):
        """Like request(), but does nothing if the history has not changed."""
        guesses = tuple(guesses)
        if guesses == self._last_guesses:
            return None
        return self.request(guesses)

    def _run(self, generation, token, guesses):
        try:
            suggestions = self.solver.suggest(
                guesses, n=self.n, two_level=self.two_level, token=token
            )
        except CancelledError:
            logger.debug("generation %d cancelled", generation)
            return None
        except WordlebotError as exc:
            if not token.cancelled:
                self._events.put(Event(EventKind.ERROR, exc, generation))
            return None
        except Exception as exc:
            logger.exception("generation %d failed", generation)
            if not token.cancelled:
                self._events.put(Event(EventKind.ERROR, exc, generation))
            return None

        if token.cancelled:
            logger.debug("generation %d finished after cancellation; dropped", generation)
            return None
        self._events.put(Event(EventKind.SUGGESTIONS, suggestions, generation))
        return suggestions

    def post_input(self, payload):
        self._events.put(Event(EventKind.INPUT, payload))

    def next_event(self, timeout=None):
        """
        Wait for the next user input or live result.

        Returns None if *timeout* expires first. Results from superseded
        generations that slipped past cancellation are skipped.
        """
        while True:
            try:
                event = self._events.get(timeout=timeout)
            except queue.Empty:
                return None
            if event.kind is not EventKind.INPUT and event.generation != self._generation:
                logger.debug("skipping stale result of generation %d", event.generation)
                continue
            return event

    def close(self):
        self._token.cancel()
        self._executor.shutdown(wait=True, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
