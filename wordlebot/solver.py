"""
solver.py

The guess-optimization engine.

A Solver is built once from a vocabulary and a parallel array of priors. It
owns the (read-only) pattern matrix and answers queries against it:

    remaining(guesses)      candidate set consistent with a guess history
    rank(n, candidates)     top-n guesses by expected information
    evaluate(word, ...)     GuessEvaluation snapshot for one guess
    suggest(guesses, ...)   ranked and evaluated suggestions for a history

Candidate sets are sorted, read-only numpy arrays of vocabulary indices.
Nothing mutates solver state after construction, so queries can run from
several threads at once.
"""

import logging
import math
import re
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

import numpy as np

from .entropy import entropy_from_counts, guess_entropies, pattern_histogram
from .errors import DataError, EmptyCandidateSet, UnknownWord
from .patterns import build_matrix
from .wordle import N_PATTERNS, Word, encode_status


logger = logging.getLogger(__name__)

N_SUGGESTIONS = 15
LOOKAHEAD_TOP = 10
DEFAULT_PENALTY = 0.1
LOOKAHEAD_PENALTY = 0.1
PRIOR_SCALE = 20.0
REMAINING_CACHE_SIZE = 256

# Composite scores are compared at this precision so that numerically equal
# entropies fall through to the lexical tie-break.
SCORE_DECIMALS = 9

_WORD_RE = re.compile(r"^[a-z]{5}$")


@dataclass(frozen=True)
class GuessEvaluation:
    """Quality of one guess against one candidate set."""

    word: Word
    expected_bits: float
    groups: int
    max_group_size: int
    group_sizes: Tuple[int, ...]
    group_probabilities: Tuple[Tuple[int, float], ...]
    n_remaining_before: int
    is_candidate: bool
    prior: float
    status: Optional[int] = None
    n_remaining_after: Optional[int] = None
    real_bits: Optional[float] = None
    two_level_bits: Optional[float] = None


def _validate(words, priors):
    checked = []
    for w in words:
        if isinstance(w, Word):
            if not w.is_complete:
                raise DataError(f"incomplete word in vocabulary: {w.text()}")
            w = w.text()
        if not isinstance(w, str) or not _WORD_RE.match(w):
            raise DataError(f"not a 5-letter lowercase word: {w!r}")
        checked.append(w)

    if not checked:
        raise DataError("vocabulary is empty")

    try:
        prior_array = np.asarray(priors, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise DataError(f"priors are not numeric: {exc}") from exc

    if prior_array.ndim != 1 or len(prior_array) != len(checked):
        raise DataError(
            f"{len(checked)} words but priors of shape {prior_array.shape}"
        )
    if not np.all(np.isfinite(prior_array)):
        raise DataError("priors must be finite")
    if np.any(prior_array < 0):
        raise DataError("priors must be non-negative")
    if not np.any(prior_array > 0):
        raise DataError("no word has a positive prior; nothing can be the secret")

    seen = set()
    for w in checked:
        if w in seen:
            raise DataError(f"duplicate word in vocabulary: {w}")
        seen.add(w)

    prior_array.flags.writeable = False
    return checked, prior_array


def _contains(sorted_idx, idx):
    pos = np.searchsorted(sorted_idx, idx)
    return bool(pos < len(sorted_idx) and sorted_idx[pos] == idx)


class Solver:
    def __init__(self, words, priors, workers=None, progress=False):
        start = time.time()
        self.words, self.priors = _validate(words, priors)
        self._index = {w: i for i, w in enumerate(self.words)}

        lex_rank = np.empty(len(self.words), dtype=np.intp)
        lex_rank[sorted(range(len(self.words)), key=self.words.__getitem__)] = np.arange(
            len(self.words)
        )
        self._lex_rank = lex_rank

        self.matrix = build_matrix(self.words, workers=workers, progress=progress)

        self._answer_mask = self.priors > 0
        self._answer_mask.flags.writeable = False
        answers = np.flatnonzero(self._answer_mask)
        answers.flags.writeable = False
        self._answers = answers

        self._remaining = lru_cache(maxsize=REMAINING_CACHE_SIZE)(self._resolve)

        logger.info(
            "solver ready: %d words, %d playable answers (%.2fs)",
            len(self.words),
            len(self._answers),
            time.time() - start,
        )

    @property
    def n_words(self) -> int:
        return len(self.words)

    @property
    def answers(self) -> np.ndarray:
        """Indices of every word with a positive prior."""
        return self._answers

    def index_of(self, word) -> int:
        if isinstance(word, str):
            key = word.lower()
        elif word.is_complete:
            key = word.text()
        else:
            raise UnknownWord(word.text())
        if key not in self._index:
            raise UnknownWord(key)
        return self._index[key]

    def word(self, idx) -> Word:
        return Word.from_string(self.words[int(idx)])

    def words_from_idx(self, idx):
        return [self.word(i) for i in idx]

    def is_valid_guess(self, word) -> bool:
        if isinstance(word, str):
            return word.lower() in self._index
        return word.is_complete and word.text() in self._index

    def remaining(self, guesses=()) -> np.ndarray:
        """
        Candidate set consistent with every guess in *guesses*.

        An empty history gives every word with a positive prior. Otherwise
        each guess keeps the secrets whose matrix cell equals its observed
        status. Results are memoized on the exact history.
        """
        return self._remaining(tuple(guesses))

    def _resolve(self, guesses):
        if not guesses:
            return self._answers

        mask = self._answer_mask.copy()
        for guess in guesses:
            row = self.matrix[self.index_of(guess.word)]
            mask &= row == guess.status

        result = np.flatnonzero(mask)
        result.flags.writeable = False
        logger.debug("resolved %d guesses to %d candidates", len(guesses), len(result))
        return result

    def _candidates(self, candidates):
        cand = np.unique(np.asarray(candidates, dtype=np.intp).ravel())
        if len(cand) == 0:
            raise EmptyCandidateSet()
        if cand[0] < 0:
            raise UnknownWord(int(cand[0]))
        if cand[-1] >= self.n_words:
            raise UnknownWord(int(cand[-1]))
        return cand

    def _weights(self, cand):
        weights = self.priors[cand]
        if weights.sum() <= 0:
            return np.ones(len(cand), dtype=np.float64)
        return weights

    def scores(self, candidates, penalty=0.0, token=None):
        """
        Entropy and composite score of every vocabulary word.

        Returns two arrays indexed like ``self.words``. Words that are still
        candidates get ``prior / PRIOR_SCALE * penalty`` on top of their
        entropy, since guessing them can end the game at once.
        """
        cand = self._candidates(candidates)
        weights = self._weights(cand)
        entropy = guess_entropies(self.matrix, cand, weights, token)
        composite = entropy.copy()
        composite[cand] += self.priors[cand] / PRIOR_SCALE * penalty
        return entropy, composite

    def _order(self, composite):
        return np.lexsort((self._lex_rank, -np.round(composite, SCORE_DECIMALS)))

    def rank_scored(self, n, candidates, penalty=0.0, token=None):
        """Top-n ``(word, composite score)`` pairs, best first."""
        cand = self._candidates(candidates)
        if n <= 0:
            return []
        if len(cand) == 1:
            return [(self.word(cand[0]), 0.0)]
        _, composite = self.scores(cand, penalty, token)
        order = self._order(composite)[:n]
        return [(self.word(i), float(composite[i])) for i in order]

    def rank(self, n, candidates, penalty=0.0, token=None):
        """Top-n guesses by composite score; ties go to the lexically smaller word."""
        return [word for word, _ in self.rank_scored(n, candidates, penalty, token)]

    def _best_entropy(self, cand, penalty, token):
        if len(cand) == 1:
            return 0.0
        entropy, composite = self.scores(cand, penalty, token)
        best = self._order(composite)[0]
        return float(entropy[best])

    def evaluate(
        self,
        word,
        candidates,
        status=None,
        two_level=False,
        token=None,
        lookahead_penalty=LOOKAHEAD_PENALTY,
    ) -> GuessEvaluation:
        """
        Snapshot of how well *word* splits *candidates*.

        With an observed *status* (a code or five LetterStatus values) the
        evaluation also reports how many candidates survived and the bits
        actually gained. With *two_level* it adds the expected entropy of the
        best follow-up guess, averaged over the feedback outcomes.
        """
        idx = self.index_of(word)
        word = self.word(idx)
        cand = self._candidates(candidates)
        weights = self._weights(cand)

        row = self.matrix[idx, cand]
        mass = pattern_histogram(row, weights)
        counts = np.bincount(row, minlength=N_PATTERNS)
        expected_bits = entropy_from_counts(mass)

        nonzero = np.flatnonzero(counts)
        total_mass = mass.sum()
        group_probabilities = tuple(
            (int(code), float(mass[code] / total_mass))
            for code in nonzero
            if mass[code] > 0
        )

        n_after = None
        real_bits = None
        if status is not None:
            if not isinstance(status, (int, np.integer)):
                status = encode_status(status)
            status = int(status)
            if not 0 <= status < N_PATTERNS:
                raise ValueError(f"status code out of range: {status}")
            n_after = int(counts[status])
            if n_after > 0:
                real_bits = math.log2(len(cand) / n_after)

        two_level_bits = None
        if two_level:
            two_level_bits = expected_bits + self._lookahead(
                row, cand, group_probabilities, lookahead_penalty, token
            )

        return GuessEvaluation(
            word=word,
            expected_bits=expected_bits,
            groups=len(nonzero),
            max_group_size=int(counts.max()),
            group_sizes=tuple(sorted(counts[nonzero].tolist(), reverse=True)),
            group_probabilities=group_probabilities,
            n_remaining_before=len(cand),
            is_candidate=_contains(cand, idx),
            prior=float(self.priors[idx]),
            status=status,
            n_remaining_after=n_after,
            real_bits=real_bits,
            two_level_bits=two_level_bits,
        )

    def _lookahead(self, row, cand, group_probabilities, penalty, token):
        # Each outcome's follow-up set is exactly the bucket's members.
        expected = 0.0
        for code, prob in group_probabilities:
            if token is not None:
                token.raise_if_cancelled()
            bucket = cand[row == code]
            expected += prob * self._best_entropy(bucket, penalty, token)
        return expected

    def two_level_bits(self, word, candidates, penalty=LOOKAHEAD_PENALTY, token=None):
        return self.evaluate(
            word, candidates, two_level=True, token=token, lookahead_penalty=penalty
        ).two_level_bits

    def suggest(self, guesses=(), n=N_SUGGESTIONS, two_level=False, token=None):
        """
        Best next guesses for a history, as GuessEvaluations.

        The prior bonus is off for the opening guess. With *two_level* only
        the first LOOKAHEAD_TOP ranked words get a lookahead score and are
        re-ordered by it.
        """
        guesses = tuple(guesses)
        cand = self.remaining(guesses)
        penalty = DEFAULT_PENALTY if guesses else 0.0

        words = self.rank(n, cand, penalty, token)
        evaluations = []
        for i, word in enumerate(words):
            if token is not None:
                token.raise_if_cancelled()
            evaluations.append(
                self.evaluate(
                    word, cand, two_level=two_level and i < LOOKAHEAD_TOP, token=token
                )
            )

        if two_level:
            head = sorted(
                evaluations[:LOOKAHEAD_TOP], key=lambda e: e.two_level_bits, reverse=True
            )
            evaluations = head + evaluations[LOOKAHEAD_TOP:]
        return evaluations

    def evaluate_history(self, guesses):
        """Evaluate every played guess against the candidates it faced."""
        guesses = tuple(guesses)
        return [
            self.evaluate(g.word, self.remaining(guesses[:i]), status=g.status)
            for i, g in enumerate(guesses)
        ]
