"""
patterns.py

Builds the feedback pattern matrix.

Matrix shape:
    (n_words, n_words)

Cell [g, s] holds the status code (0..242, see wordle.py) shown when word g
is guessed and word s is the secret. The matrix is square because every
vocabulary word is both an allowed guess and a potential secret; words that
can never be the secret simply carry a zero prior.

Every entropy calculation reads from this table, so all guess/secret
feedback is computed exactly once per solver.
"""

import logging
import multiprocessing as mp
import os
import time

import numpy as np
from tqdm import tqdm

from .wordle import WORD_LENGTH


logger = logging.getLogger(__name__)

# Below this vocabulary size a process pool costs more than it saves.
PARALLEL_MIN_WORDS = 2000
ROWS_PER_TASK = 256

_POWERS = np.array([3**i for i in range(WORD_LENGTH)], dtype=np.uint16)

_WORKER_STATE = {}


def encode_words(words) -> np.ndarray:
    """Letters as a (n_words, 5) uint8 array, 'a' -> 0 ... 'z' -> 25."""
    if not words:
        return np.zeros((0, WORD_LENGTH), dtype=np.uint8)
    joined = "".join(words).encode("ascii")
    letters = np.frombuffer(joined, dtype=np.uint8).reshape(len(words), WORD_LENGTH)
    return letters - ord("a")


def pattern_row(guess: np.ndarray, secrets: np.ndarray) -> np.ndarray:
    """
    Status codes of one guess against every secret.

    Vectorized form of wordle.compare. For a non-green guess position i with
    letter c, the tile is yellow exactly when the number of copies of c at the
    secret's non-green positions exceeds the number of earlier non-green guess
    positions that also hold c (those consume copies first, left to right).
    """
    green = secrets == guess
    open_secret = ~green
    codes = green.astype(np.uint16) @ (2 * _POWERS)

    for i in range(WORD_LENGTH):
        letter = guess[i]
        available = ((secrets == letter) & open_secret).sum(axis=1)
        used = np.zeros(len(secrets), dtype=available.dtype)
        for k in range(i):
            if guess[k] == letter:
                used += open_secret[:, k]
        yellow = open_secret[:, i] & (available > used)
        codes += yellow.astype(np.uint16) * _POWERS[i]

    return codes.astype(np.uint8)


def _build_rows(letters: np.ndarray, start: int, end: int) -> np.ndarray:
    block = np.empty((end - start, len(letters)), dtype=np.uint8)
    for offset, g in enumerate(range(start, end)):
        block[offset] = pattern_row(letters[g], letters)
    return block


def _init_worker(letters):
    _WORKER_STATE["letters"] = letters


def _worker_rows(task):
    start, end = task
    return start, _build_rows(_WORKER_STATE["letters"], start, end)


def build_matrix(words, workers=None, progress=False) -> np.ndarray:
    """
    Compute the full pattern matrix.

    This is the most expensive step of building a solver (quadratic in the
    vocabulary size). Rows are independent, so large vocabularies are split
    into row chunks and spread across a process pool. The result is frozen
    (read-only) before it is returned.
    """
    n_words = len(words)
    letters = encode_words(list(words))
    matrix = np.empty((n_words, n_words), dtype=np.uint8)

    worker_count = workers if workers is not None else (os.cpu_count() or 1)
    worker_count = max(1, int(worker_count))
    parallel = worker_count > 1 and n_words >= PARALLEL_MIN_WORDS

    tasks = [
        (start, min(start + ROWS_PER_TASK, n_words))
        for start in range(0, n_words, ROWS_PER_TASK)
    ]

    start_time = time.time()
    bar = tqdm(total=n_words, desc="Pattern matrix", unit="row", disable=not progress)

    if parallel:
        start_methods = mp.get_all_start_methods()
        start_method = "fork" if "fork" in start_methods else "spawn"
        ctx = mp.get_context(start_method)
        with ctx.Pool(
            processes=worker_count,
            initializer=_init_worker,
            initargs=(letters,),
        ) as pool:
            for start, block in pool.imap_unordered(_worker_rows, tasks, chunksize=1):
                matrix[start:start + len(block)] = block
                bar.update(len(block))
    else:
        for start, end in tasks:
            matrix[start:end] = _build_rows(letters, start, end)
            bar.update(end - start)

    bar.close()
    matrix.flags.writeable = False

    logger.info(
        "built %dx%d pattern matrix in %.2fs (%s)",
        n_words,
        n_words,
        time.time() - start_time,
        f"{worker_count} workers" if parallel else "in-process",
    )
    return matrix
