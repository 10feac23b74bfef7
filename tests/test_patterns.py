import numpy as np
import pytest

from wordlebot import patterns
from wordlebot.patterns import build_matrix, encode_words, pattern_row
from wordlebot.wordle import ALL_CORRECT, status_code

from conftest import VOCABULARY


def test_encode_words():
    letters = encode_words(["abcde", "zzzzz"])
    assert letters.shape == (2, 5)
    assert letters.tolist() == [[0, 1, 2, 3, 4], [25, 25, 25, 25, 25]]


def test_matrix_matches_compare():
    matrix = build_matrix(VOCABULARY, workers=1)
    assert matrix.shape == (len(VOCABULARY), len(VOCABULARY))
    assert matrix.dtype == np.uint8
    for g, guess in enumerate(VOCABULARY):
        for s, secret in enumerate(VOCABULARY):
            assert matrix[g, s] == status_code(secret, guess), (guess, secret)


def test_diagonal_is_all_correct():
    matrix = build_matrix(VOCABULARY, workers=1)
    assert np.all(np.diag(matrix) == ALL_CORRECT)


def test_matrix_is_read_only():
    matrix = build_matrix(["slate", "plate"], workers=1)
    with pytest.raises(ValueError):
        matrix[0, 1] = 0


def test_single_word_vocabulary():
    matrix = build_matrix(["slate"], workers=1)
    assert matrix.tolist() == [[ALL_CORRECT]]


def test_repeated_letters_row():
    words = ["esses", "sport", "geese", "speed"]
    letters = encode_words(words)
    row = pattern_row(letters[0], letters)
    assert row.tolist() == [status_code(secret, "esses") for secret in words]


def test_parallel_build_matches_serial(monkeypatch):
    monkeypatch.setattr(patterns, "PARALLEL_MIN_WORDS", 0)
    monkeypatch.setattr(patterns, "ROWS_PER_TASK", 7)
    serial = build_matrix(VOCABULARY, workers=1)
    parallel = build_matrix(VOCABULARY, workers=2)
    assert np.array_equal(serial, parallel)
