"""
simulate.py

Plays the solver against known secrets.

solve() follows the solver's own top recommendation each round, exactly as
a player taking the first suggestion would. benchmark() does that for every
playable answer and summarizes how many rounds were needed.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from tqdm import tqdm

from .errors import NotAnAnswer
from .solver import DEFAULT_PENALTY
from .wordle import ALL_CORRECT, Guess, as_word, status_code


MAX_ROUNDS = 6


@dataclass(frozen=True)
class SolveResult:
    secret: str
    guesses: Tuple[Guess, ...]
    solved: bool

    @property
    def steps(self) -> int:
        """Rounds used, or 0 if the secret was not found in time."""
        return len(self.guesses) if self.solved else 0


@dataclass
class BenchmarkResult:
    max_rounds: int
    step_counts: Dict[int, int] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)

    @property
    def n_solved(self) -> int:
        return sum(self.step_counts.values())

    @property
    def mean_steps(self) -> float:
        if not self.n_solved:
            return 0.0
        return sum(k * v for k, v in self.step_counts.items()) / self.n_solved


def solve(solver, secret, max_rounds=MAX_ROUNDS, opening=None) -> SolveResult:
    """Play *secret* to the end; *opening* skips ranking for the first guess."""
    idx = solver.index_of(secret)
    if solver.priors[idx] <= 0:
        raise NotAnAnswer(solver.words[idx])
    secret = solver.word(idx)

    guesses = []
    for _ in range(max_rounds):
        candidates = solver.remaining(guesses)
        if len(candidates) == 1:
            guess = solver.word(candidates[0])
        elif not guesses and opening is not None:
            guess = as_word(opening)
        else:
            penalty = DEFAULT_PENALTY if guesses else 0.0
            guess = solver.rank(1, candidates, penalty)[0]

        code = status_code(secret, guess)
        guesses.append(Guess(guess, code))
        if code == ALL_CORRECT:
            return SolveResult(secret.text(), tuple(guesses), True)

    return SolveResult(secret.text(), tuple(guesses), False)


def benchmark(solver, max_rounds=MAX_ROUNDS, progress=True) -> BenchmarkResult:
    """Solve every word with a positive prior and tally the rounds needed."""
    counts = Counter()
    failed = []
    answers = [solver.words[i] for i in solver.answers]
    opening = solver.rank(1, solver.answers, 0.0)[0]
    for secret in tqdm(answers, desc="Benchmark", disable=not progress):
        result = solve(solver, secret, max_rounds, opening)
        if result.solved:
            counts[result.steps] += 1
        else:
            failed.append(secret)
    return BenchmarkResult(max_rounds, dict(sorted(counts.items())), failed)
