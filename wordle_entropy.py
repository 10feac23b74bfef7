"""
wordle_entropy.py

Command line front end for the wordlebot engine.

Modes:
(default): top suggestions for the guess history given with -guess
-history: evaluate each played guess (expected vs. realized bits)
-solve WORD [WORD ...]: play the solver against the given secrets
-benchmark: solve every playable answer and print the step distribution
-deep: two-level (lookahead) ranking of the top opening guesses

Optional:
-guess WORD STATUS: a played guess, STATUS as five digits 0/1/2
  (0 absent, 1 misplaced, 2 correct); repeat for each round.
-two-level: add lookahead scores to the suggestions.
-no-restriction: every word in the list may be the secret, not only the
  ones with a positive prior.
-verbose: log engine timings.
"""

import argparse
import logging
import time

from tqdm import tqdm

from wordlebot.errors import WordlebotError
from wordlebot.simulate import MAX_ROUNDS, benchmark, solve
from wordlebot.solver import N_SUGGESTIONS, Solver
from wordlebot.wordle import Guess, parse_status
from wordlebot.words import load_words


TOP_DEEP = 20


def _flag(evaluation):
    return "+" if evaluation.is_candidate else "-"


def run_suggestions(solver, guesses, top, two_level):
    candidates = solver.remaining(guesses)
    print(f"Possible solutions: {len(candidates)}")
    if len(candidates) <= 20:
        print("  " + ", ".join(str(w) for w in solver.words_from_idx(candidates)))

    start_time = time.time()
    suggestions = solver.suggest(guesses, n=top, two_level=two_level)
    elapsed = time.time() - start_time

    print(f"\nBest next guesses ({elapsed:.2f}s):")
    print("Legend: word [flag]: expected bits | groups | max group | prior")
    print("flag: [+] possible solution, [-] guess-only")
    for e in suggestions:
        line = (
            f"{e.word} [{_flag(e)}]: {e.expected_bits:.4f} bits | "
            f"{e.groups} groups | max {e.max_group_size} | prior {e.prior:.4f}"
        )
        if e.two_level_bits is not None:
            line += f" | two-level {e.two_level_bits:.4f} bits"
        print(line)


def run_history(solver, guesses):
    print("Played guesses:")
    print("Legend: word: expected bits -> real bits | groups | remaining before -> after")
    for guess, e in zip(guesses, solver.evaluate_history(guesses)):
        real = f"{e.real_bits:.2f}" if e.real_bits is not None else "n/a"
        print(
            f"{guess}: {e.expected_bits:.2f} -> {real} bits | {e.groups} groups | "
            f"{e.n_remaining_before} -> {e.n_remaining_after}"
        )


def run_solve(solver, secrets, max_rounds):
    for secret in secrets:
        print(f"----- {secret.upper()} -----")
        result = solve(solver, secret, max_rounds)
        for step, guess in enumerate(result.guesses, start=1):
            remaining = len(solver.remaining(result.guesses[: step - 1]))
            print(f"Step {step}: {remaining} remaining, guess {guess}")
        if result.solved:
            print(f"Solved after {result.steps} steps\n")
        else:
            print(f"Failed to solve after {max_rounds} rounds\n")


def run_benchmark(solver, max_rounds):
    print("Starting benchmark.")
    result = benchmark(solver, max_rounds, progress=True)
    tqdm.write(
        f"{len(result.failed)} words could not be solved in {max_rounds} guesses: "
        + ", ".join(result.failed)
    )
    print(f"The others have been solved in an average of {result.mean_steps:.2f} steps")
    for steps, count in result.step_counts.items():
        print(f"Steps {steps}: Count {count}")


def run_deep(solver, top):
    candidates = solver.answers
    words = solver.rank(top, candidates, 0.0)

    print("Computing two-level entropies...")
    results = []
    for word in tqdm(words, desc="Lookahead"):
        e = solver.evaluate(word, candidates, two_level=True)
        results.append(e)
    results.sort(key=lambda e: e.two_level_bits, reverse=True)

    print("\nTop opening guesses by two-level entropy:")
    print("Legend: word [flag]: H12 bits (H1)")
    for e in results:
        print(f"{e.word} [{_flag(e)}]: {e.two_level_bits:.4f} bits ({e.expected_bits:.4f})")


def parse_guesses(pairs):
    guesses = []
    for word, status in pairs or []:
        guesses.append(Guess.new(word.lower(), parse_status(status)))
    return guesses


def parse_args():
    parser = argparse.ArgumentParser(
        description="Wordle guess recommender ranking guesses by expected information."
    )
    parser.add_argument(
        "-words",
        type=str,
        required=True,
        help="Word list: .csv/.tsv with 'word<TAB>prior' rows, or one word per line.",
    )
    parser.add_argument(
        "-guess",
        nargs=2,
        action="append",
        metavar=("WORD", "STATUS"),
        help="A played guess and its feedback, e.g. -guess tares 12020. Repeatable.",
    )
    parser.add_argument(
        "-top",
        type=int,
        default=N_SUGGESTIONS,
        help=f"Number of suggestions to show (default: {N_SUGGESTIONS}).",
    )
    parser.add_argument(
        "-two-level",
        action="store_true",
        help="Add lookahead (two-level) scores to the top suggestions.",
    )
    parser.add_argument(
        "-no-restriction",
        action="store_true",
        help="Treat every word as a possible answer with equal prior.",
    )
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "-history",
        action="store_true",
        help="Evaluate each guess given with -guess.",
    )
    mode_group.add_argument(
        "-solve",
        nargs="+",
        metavar="WORD",
        help="Play the solver against these secrets.",
    )
    mode_group.add_argument(
        "-benchmark",
        action="store_true",
        help="Solve every playable answer and report the step distribution.",
    )
    mode_group.add_argument(
        "-deep",
        action="store_true",
        help=f"Rank the top {TOP_DEEP} opening guesses by two-level entropy.",
    )
    parser.add_argument(
        "-max-rounds",
        type=int,
        default=MAX_ROUNDS,
        help=f"Maximum rounds for -solve and -benchmark (default: {MAX_ROUNDS}).",
    )
    parser.add_argument(
        "-workers",
        type=int,
        default=None,
        help="Worker processes for the pattern matrix build (default: CPU count).",
    )
    parser.add_argument(
        "-verbose",
        action="store_true",
        help="Log engine timings.",
    )
    return parser.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    try:
        guesses = parse_guesses(args.guess)
        words, priors = load_words(args.words, restrict=not args.no_restriction)
        print("Initializing solver. This might take a while...")
        solver = Solver(words, priors, workers=args.workers, progress=True)

        if args.history:
            run_history(solver, guesses)
        elif args.solve:
            run_solve(solver, [w.lower() for w in args.solve], args.max_rounds)
        elif args.benchmark:
            run_benchmark(solver, args.max_rounds)
        elif args.deep:
            run_deep(solver, TOP_DEEP)
        else:
            run_suggestions(solver, guesses, args.top, args.two_level)
    except (WordlebotError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
