"""
errors.py

Exceptions raised by the solver engine.
"""


class WordlebotError(Exception):
    """Base class for every error the engine raises on purpose."""


class DataError(WordlebotError, ValueError):
    """The vocabulary or the priors cannot be used to build a solver."""


class UnknownWord(WordlebotError, KeyError):
    """A word (or word index) that is not part of the vocabulary."""

    def __init__(self, word):
        super().__init__(word)
        self.word = word

    def __str__(self):
        return f"word not found in vocabulary: {self.word}"


class NotAnAnswer(UnknownWord):
    """A vocabulary word with prior 0, which can be guessed but never be the secret."""

    def __str__(self):
        return f"not a playable answer: {self.word}"


class EmptyCandidateSet(WordlebotError):
    """No vocabulary word is consistent with the guesses played so far."""

    def __init__(self, message="candidate set is empty; the guess history is contradictory"):
        super().__init__(message)
