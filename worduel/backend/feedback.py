"""Wordle-style letter feedback for a single guess."""

from __future__ import annotations

from .models import LetterFeedback, LetterStatus


def evaluate_guess(guess: str, target: str) -> tuple[LetterFeedback, ...]:
    """Classify each letter of ``guess`` against ``target``.

    Exact matches are resolved first and consume their target letter, so a
    repeated guess letter is only credited PRESENT while unconsumed copies
    remain in the target.
    """
    guess = guess.upper()
    target = target.upper()
    if len(guess) != len(target):
        raise ValueError("guess and target must have the same length")

    statuses = [LetterStatus.ABSENT] * len(guess)
    consumed = [False] * len(target)

    for index, letter in enumerate(guess):
        if letter == target[index]:
            statuses[index] = LetterStatus.CORRECT
            consumed[index] = True

    for index, letter in enumerate(guess):
        if statuses[index] is LetterStatus.CORRECT:
            continue
        for target_index, target_letter in enumerate(target):
            if not consumed[target_index] and target_letter == letter:
                statuses[index] = LetterStatus.PRESENT
                consumed[target_index] = True
                break

    return tuple(LetterFeedback(letter=letter, status=status) for letter, status in zip(guess, statuses))


def is_solved(feedback: tuple[LetterFeedback, ...]) -> bool:
    return bool(feedback) and all(item.status is LetterStatus.CORRECT for item in feedback)
