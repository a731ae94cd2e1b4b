"""Points awarded for solving a round."""

from __future__ import annotations

MAX_GUESSES = 6


def points_for_guesses(guess_count: int) -> int:
    """Return ``7 - guess_count`` for 1..6 guesses and 0 for anything else."""
    if guess_count < 1 or guess_count > MAX_GUESSES:
        return 0
    return MAX_GUESSES + 1 - guess_count
