from itertools import product

import pytest

from wordlebot.wordle import (
    ALL_ABSENT,
    ALL_CORRECT,
    Guess,
    LetterStatus,
    Word,
    compare,
    decode_status,
    encode_status,
    parse_status,
    status_code,
)

A = LetterStatus.Absent
M = LetterStatus.Misplaced
C = LetterStatus.Correct


def test_encode_status():
    assert encode_status([A, A, A, A, A]) == 0
    assert encode_status([M, A, A, A, A]) == 1
    assert encode_status([M, A, M, A, A]) == 10
    assert encode_status([C, C, C, C, C]) == 242
    assert encode_status([C, C, M, C, C]) == 233


def test_decode_status():
    assert decode_status(0) == (A, A, A, A, A)
    assert decode_status(1) == (M, A, A, A, A)
    assert decode_status(10) == (M, A, M, A, A)
    assert decode_status(242) == (C, C, C, C, C)
    assert decode_status(233) == (C, C, M, C, C)


def test_codec_is_exact_inverse():
    seen = set()
    for status in product(LetterStatus, repeat=5):
        code = encode_status(status)
        assert decode_status(code) == status
        seen.add(code)
    assert seen == set(range(243))
    assert ALL_ABSENT == 0
    assert ALL_CORRECT == 242


@pytest.mark.parametrize("code", [-1, 243, 1000])
def test_decode_out_of_range(code):
    with pytest.raises(ValueError):
        decode_status(code)


@pytest.mark.parametrize(
    "secret, guess, expected",
    [
        ("water", "slate", (A, A, M, M, M)),
        ("water", "eerie", (M, A, M, A, A)),
        ("water", "eater", (A, C, C, C, C)),
        ("abide", "speed", (A, A, M, A, M)),
        ("erase", "speed", (M, A, M, M, A)),
        ("steal", "speed", (C, A, C, A, A)),
        ("crepe", "speed", (A, M, C, M, A)),
        ("steer", "slate", (C, A, A, M, M)),
        ("steer", "deers", (A, M, C, M, M)),
        ("tarse", "slate", (M, A, M, M, C)),
    ],
)
def test_compare(secret, guess, expected):
    assert compare(secret, guess) == expected


def test_compare_with_itself_is_all_correct():
    for w in ("slate", "esses", "goose"):
        assert status_code(w, w) == ALL_CORRECT


def test_duplicate_letters_credited_once():
    # "esses" has four s's, "sport" only one.
    assert compare("sport", "esses") == (A, M, A, A, A)


def test_word_from_string_and_display():
    word = Word.from_string("Slate")
    assert word.chars == ("s", "l", "a", "t", "e")
    assert word.is_complete
    assert str(word) == "SLATE"
    assert word == Word.from_string("slate")
    assert hash(word) == hash(Word.from_string("slate"))


def test_partial_word():
    word = Word.from_string("sl")
    assert not word.is_complete
    assert str(word) == "SL"
    assert word.text() == "sl___"


def test_set_letter_returns_new_word():
    word = Word()
    typed = word.set_letter("E", 0)
    assert word.chars[0] is None
    assert typed.chars[0] == "e"
    assert typed.set_letter(None, 0) == word


def test_word_too_long():
    with pytest.raises(ValueError):
        Word.from_string("slates")


def test_guess_status_editing():
    guess = Guess.new("slate", [A, A, A, A, A])
    toggled = guess.with_status(C, 2)
    assert guess.status == 0
    assert toggled.statuses == (A, A, C, A, A)
    assert toggled.status == 18
    assert Guess.empty().word == Word()


def test_guess_consistency():
    guess = Guess.new("slate", [A, C, C, C, C])
    assert guess.is_consistent("plate")
    assert not guess.is_consistent("water")


def test_parse_status():
    assert parse_status("10202") == (M, A, C, A, C)
    with pytest.raises(ValueError):
        parse_status("1020")
    with pytest.raises(ValueError):
        parse_status("10203")


def test_guess_str():
    assert str(Guess.new("tares", parse_status("12020"))) == "tares:12020"
