import pytest

from wordlebot.solver import Solver


ANSWERS = [
    "slate", "plate", "water", "eater", "tares", "penny", "speed", "abide",
    "erase", "steal", "crepe", "steer", "deers", "goose", "bacon", "ronin",
    "resin", "feels", "agree", "brake", "songs", "bloom", "least", "plaid",
    "eaten", "gated", "dated", "sport", "spout",
]
GUESS_ONLY = ["hated", "eerie", "esses", "reede"]

VOCABULARY = ANSWERS + GUESS_ONLY
PRIORS = [1.0] * len(ANSWERS) + [0.0] * len(GUESS_ONLY)


@pytest.fixture(scope="session")
def solver():
    return Solver(VOCABULARY, PRIORS, workers=1)


@pytest.fixture
def trio(solver):
    return [solver.index_of(w) for w in ("slate", "plate", "water")]
