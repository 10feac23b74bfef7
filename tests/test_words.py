import pytest

from wordlebot.errors import DataError
from wordlebot.solver import Solver
from wordlebot.words import load_words


def test_load_prior_table(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("word\tprior\nslate\t0.5\nPlate\t0\n\nwater\t1.25\n", encoding="utf-8")
    words, priors = load_words(path)
    assert words == ["slate", "plate", "water"]
    assert priors == [0.5, 0.0, 1.25]


def test_load_comma_table(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("word,prior\nslate,1\nplate,2\n", encoding="utf-8")
    assert load_words(path) == (["slate", "plate"], [1.0, 2.0])


def test_load_plain_list(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("slate\n  plate \n\nwater\n", encoding="utf-8")
    words, priors = load_words(path)
    assert words == ["slate", "plate", "water"]
    assert priors == [1.0, 1.0, 1.0]


def test_loaded_words_build_a_solver(tmp_path):
    path = tmp_path / "words.tsv"
    path.write_text("word\tprior\nslate\t1\nplate\t1\nwater\t0\n", encoding="utf-8")
    solver = Solver(*load_words(path), workers=1)
    assert len(solver.answers) == 2


@pytest.mark.parametrize(
    "content",
    [
        "word\tprior\nslate\tlots\n",
        "word\tprior\nslate\n",
        "word\tprior\n",
    ],
)
def test_malformed_table(tmp_path, content):
    path = tmp_path / "words.tsv"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(DataError):
        load_words(path)


def test_missing_file(tmp_path):
    with pytest.raises(DataError):
        load_words(tmp_path / "nope.txt")


def test_unrestricted_load_makes_every_word_an_answer(tmp_path):
    path = tmp_path / "words.tsv"
    path.write_text("word\tprior\nslate\t0.5\nplate\t0\nwater\t2\n", encoding="utf-8")
    words, priors = load_words(path, restrict=False)
    assert words == ["slate", "plate", "water"]
    assert priors == [1.0, 1.0, 1.0]
    solver = Solver(words, priors, workers=1)
    assert len(solver.answers) == 3
