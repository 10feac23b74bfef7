"""
words.py

Loads the vocabulary and the per-word priors.
No numpy here, just clean text handling; the Solver validates the result.

Two formats:
  - Table (.csv / .tsv): a header row, then ``word<TAB>prior`` rows.
    Commas are accepted as the separator when the header has no tab.
  - Anything else: one word per line, every word gets prior 1.0.
"""

from pathlib import Path

from .errors import DataError


TABLE_SUFFIXES = (".csv", ".tsv")


def load_word_list(path):
    """Load a newline-separated word list into a Python list."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip().lower() for line in f if line.strip()]


def load_prior_table(path):
    """Load ``word, prior`` rows (after one header line)."""
    words = []
    priors = []
    with open(path, "r", encoding="utf-8") as f:
        header = f.readline()
        sep = "\t" if "\t" in header else ","
        for lineno, line in enumerate(f, start=2):
            line = line.strip()
            if not line:
                continue
            cells = line.split(sep)
            if len(cells) < 2:
                raise DataError(f"{path}:{lineno}: expected word and prior, got {line!r}")
            try:
                prior = float(cells[1])
            except ValueError as exc:
                raise DataError(f"{path}:{lineno}: bad prior {cells[1]!r}") from exc
            words.append(cells[0].strip().lower())
            priors.append(prior)
    return words, priors


def load_words(path, restrict=True):
    """
    With restrict=False every word gets prior 1.0, so any of them may be the
    secret and none is favored.

    Returns:
        words: vocabulary in file order
        priors: parallel list of prior weights (0 for guess-only words)
    """
    path = Path(path)
    if not path.exists():
        raise DataError(f"word list not found: {path}")

    if path.suffix.lower() in TABLE_SUFFIXES:
        words, priors = load_prior_table(path)
    else:
        words = load_word_list(path)
        priors = [1.0] * len(words)

    if not words:
        raise DataError(f"no words found in {path}")
    if not restrict:
        priors = [1.0] * len(words)
    return words, priors
