"""
wordle.py

Words, letter statuses and the feedback codec.

A feedback pattern is five letter statuses:

    0 = absent    (gray)
    1 = misplaced (yellow)
    2 = correct   (green)

It is stored as a single status code in 0..242, little-endian base-3:

    code = status[0] + 3 * status[1] + 9 * status[2] + ...
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple


WORD_LENGTH = 5
N_PATTERNS = 3**WORD_LENGTH
ALL_ABSENT = 0
ALL_CORRECT = N_PATTERNS - 1


class LetterStatus(IntEnum):
    Absent = 0
    Misplaced = 1
    Correct = 2


@dataclass(frozen=True)
class Word:
    """Five letter slots; ``None`` marks a slot that has not been typed yet."""

    chars: Tuple[Optional[str], ...] = (None,) * WORD_LENGTH

    def __post_init__(self):
        if len(self.chars) != WORD_LENGTH:
            raise ValueError(f"a word has {WORD_LENGTH} slots, got {len(self.chars)}")

    @classmethod
    def from_string(cls, text: str) -> "Word":
        """Build a word from up to five characters; missing slots stay unset."""
        if len(text) > WORD_LENGTH:
            raise ValueError(f"word longer than {WORD_LENGTH} letters: {text!r}")
        chars = tuple(text.lower()) + (None,) * (WORD_LENGTH - len(text))
        return cls(chars)

    def set_letter(self, char: Optional[str], position: int) -> "Word":
        chars = list(self.chars)
        chars[position] = char.lower() if char is not None else None
        return Word(tuple(chars))

    @property
    def is_complete(self) -> bool:
        return all(c is not None for c in self.chars)

    def count_char(self, char: str) -> int:
        return sum(1 for c in self.chars if c == char)

    def text(self) -> str:
        """Lower-case letters with ``_`` for unset slots."""
        return "".join(c if c is not None else "_" for c in self.chars)

    def __str__(self):
        out = []
        for c in self.chars:
            if c is None:
                break
            out.append(c.upper())
        return "".join(out)


def as_word(word) -> Word:
    """Accept a ``Word`` or a plain string."""
    if isinstance(word, Word):
        return word
    return Word.from_string(word)


def encode_status(status) -> int:
    """Pack five letter statuses into a status code."""
    if len(status) != WORD_LENGTH:
        raise ValueError(f"expected {WORD_LENGTH} statuses, got {len(status)}")
    code = 0
    for i, s in enumerate(status):
        code += 3**i * int(s)
    return code


def decode_status(code: int) -> Tuple[LetterStatus, ...]:
    """Unpack a status code into five letter statuses."""
    if not 0 <= code < N_PATTERNS:
        raise ValueError(f"status code out of range: {code}")
    result = []
    for _ in range(WORD_LENGTH):
        result.append(LetterStatus(code % 3))
        code //= 3
    return tuple(result)


def parse_status(text: str) -> Tuple[LetterStatus, ...]:
    """Parse a pattern written as five digits, e.g. ``"10202"``."""
    if len(text) != WORD_LENGTH or any(c not in "012" for c in text):
        raise ValueError(f"status must be {WORD_LENGTH} digits of 0/1/2, got {text!r}")
    return tuple(LetterStatus(int(c)) for c in text)


def compare(secret, guess) -> Tuple[LetterStatus, ...]:
    """
    Feedback shown when *guess* is checked against *secret*.

    Greens are marked first. The remaining guess positions are then scanned
    left to right; a letter is misplaced only while an unconsumed copy of it
    is left among the non-green secret positions, and each copy can be
    credited once.
    """
    secret_chars = list(as_word(secret).chars)
    guess_chars = as_word(guess).chars

    result = [LetterStatus.Absent] * WORD_LENGTH
    remaining_positions = []

    for i, g in enumerate(guess_chars):
        if g == secret_chars[i]:
            result[i] = LetterStatus.Correct
        else:
            remaining_positions.append(i)

    for pos in remaining_positions:
        letter = guess_chars[pos]
        for secret_pos in remaining_positions:
            if secret_chars[secret_pos] is not None and secret_chars[secret_pos] == letter:
                result[pos] = LetterStatus.Misplaced
                secret_chars[secret_pos] = None
                break

    return tuple(result)


def status_code(secret, guess) -> int:
    return encode_status(compare(secret, guess))


@dataclass(frozen=True)
class Guess:
    """A played word together with the feedback it received."""

    word: Word
    status: int = ALL_ABSENT

    @classmethod
    def new(cls, word, status) -> "Guess":
        return cls(as_word(word), encode_status(status))

    @classmethod
    def from_word(cls, word: Word, status) -> "Guess":
        return cls(word, encode_status(status))

    @classmethod
    def empty(cls) -> "Guess":
        return cls(Word(), ALL_ABSENT)

    @property
    def statuses(self) -> Tuple[LetterStatus, ...]:
        return decode_status(self.status)

    def with_status(self, status: LetterStatus, position: int) -> "Guess":
        current = list(self.statuses)
        current[position] = status
        return Guess(self.word, encode_status(current))

    def set_letter(self, char: Optional[str], position: int) -> "Guess":
        return Guess(self.word.set_letter(char, position), self.status)

    def is_consistent(self, candidate) -> bool:
        """True if *candidate* as the secret would have produced this feedback."""
        return status_code(candidate, self.word) == self.status

    def __str__(self):
        marks = {LetterStatus.Absent: "0", LetterStatus.Misplaced: "1", LetterStatus.Correct: "2"}
        return f"{self.word.text()}:{''.join(marks[s] for s in self.statuses)}"
