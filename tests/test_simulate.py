import pytest

from wordlebot.errors import NotAnAnswer, UnknownWord
from wordlebot.simulate import benchmark, solve
from wordlebot.wordle import ALL_CORRECT, Word

from conftest import ANSWERS


def test_solve_finds_every_answer(solver):
    # Every round with two or more candidates strictly shrinks the set, so
    # len(ANSWERS) rounds are always enough.
    for secret in ANSWERS:
        result = solve(solver, secret, max_rounds=len(ANSWERS))
        assert result.solved, secret
        assert result.guesses[-1].word == Word.from_string(secret)
        assert result.guesses[-1].status == ALL_CORRECT
        assert result.steps == len(result.guesses)


def test_solve_opens_with_top_ranked_word(solver):
    result = solve(solver, "plaid")
    assert result.guesses[0].word == solver.rank(1, solver.remaining([]))[0]


def test_solve_respects_round_limit(solver):
    opening = solver.rank(1, solver.remaining([]))[0]
    secret = next(w for w in ANSWERS if w != opening.text())
    result = solve(solver, secret, max_rounds=1)
    assert not result.solved
    assert result.steps == 0
    assert len(result.guesses) == 1
    assert result.guesses[0].word == opening


def test_solve_unknown_secret(solver):
    with pytest.raises(UnknownWord):
        solve(solver, "zzzzz")


@pytest.mark.parametrize("secret", ["plaids", "pla"])
def test_solve_malformed_secret(solver, secret):
    with pytest.raises(UnknownWord):
        solve(solver, secret)


def test_solve_rejects_guess_only_secret(solver):
    with pytest.raises(NotAnAnswer, match="not a playable answer: hated"):
        solve(solver, "hated")


def test_benchmark_accounts_for_every_answer(solver):
    result = benchmark(solver, max_rounds=6, progress=False)
    assert result.n_solved + len(result.failed) == len(ANSWERS)
    assert all(1 <= steps <= 6 for steps in result.step_counts)
    if result.n_solved:
        assert 1.0 <= result.mean_steps <= 6.0
