"""
entropy.py

Entropy calculations over feedback distributions.

A guess splits the candidate set into buckets, one per status code. Each
bucket carries the prior mass of the candidates that would produce that code;
the guess's expected information is the Shannon entropy of the normalized
bucket masses.
"""

import numpy as np

from .wordle import N_PATTERNS


# Rows of the pattern matrix handled per vectorized histogram pass.
ROW_BLOCK = 512


def entropy_from_counts(counts):
    """Compute Shannon entropy (bits) from bucket counts or masses."""
    counts = np.asarray(counts, dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        return 0.0
    probs = counts[counts > 0] / total
    return float(max(0.0, -np.sum(probs * np.log2(probs))))


def pattern_histogram(matrix_row, weights=None):
    """Mass per status code for one guess row restricted to the candidates."""
    return np.bincount(matrix_row, weights=weights, minlength=N_PATTERNS)


def single_guess_entropy(matrix_row, weights=None):
    """Entropy of one guess across the candidates in *matrix_row*."""
    return entropy_from_counts(pattern_histogram(matrix_row, weights))


def block_histograms(block, weights):
    """
    Weighted histograms for a block of guess rows at once.

    *block* has shape (n_rows, n_candidates). Each row's codes are shifted
    into their own 243-wide window so a single bincount covers the block.
    """
    n_rows, n_candidates = block.shape
    offsets = (np.arange(n_rows, dtype=np.intp) * N_PATTERNS)[:, None]
    flat = (block.astype(np.intp) + offsets).ravel()
    tiled = np.broadcast_to(weights, (n_rows, n_candidates)).ravel()
    hist = np.bincount(flat, weights=tiled, minlength=n_rows * N_PATTERNS)
    return hist.reshape(n_rows, N_PATTERNS)


def entropy_rows(hist):
    """Row-wise entropy of a (n_rows, 243) histogram array."""
    totals = hist.sum(axis=1, keepdims=True)
    safe_totals = np.where(totals > 0, totals, 1.0)
    probs = hist / safe_totals
    with np.errstate(divide="ignore", invalid="ignore"):
        terms = np.where(probs > 0, probs * np.log2(probs), 0.0)
    return np.maximum(-terms.sum(axis=1), 0.0)


def guess_entropies(matrix, candidates, weights, token=None):
    """
    Entropy of every guess row of *matrix* over *candidates*.

    Rows are processed in blocks of ROW_BLOCK; the optional cancellation
    token is checked before each block.
    """
    sub = matrix[:, candidates]
    n_rows = sub.shape[0]
    entropies = np.empty(n_rows, dtype=np.float64)
    for start in range(0, n_rows, ROW_BLOCK):
        if token is not None:
            token.raise_if_cancelled()
        end = min(start + ROW_BLOCK, n_rows)
        entropies[start:end] = entropy_rows(block_histograms(sub[start:end], weights))
    return entropies
