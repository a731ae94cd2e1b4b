"""Round lifecycle reducer for two-player word duels."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace

from .errors import InvalidConfig, InvalidGuessFormat, InvalidState, InvalidWord, NotYourTurn
from .feedback import evaluate_guess, is_solved
from .models import (
    ACTIVE_STATUSES,
    Game,
    GameResult,
    GameStatus,
    LetterFeedback,
    Roles,
    RoundRecord,
    Scoreboard,
    swap_roles,
)
from .scoring import MAX_GUESSES, points_for_guesses
from .state import utc_now_iso
from .words import WordDictionary, is_valid_word, is_well_formed

DEFAULT_TOTAL_ROUNDS = 3


@dataclass(frozen=True)
class GuessResult:
    game: Game
    feedback: tuple[LetterFeedback, ...]
    is_correct: bool
    round_complete: bool
    points_awarded: int = 0


def create_game(
    player_a: str,
    player_b: str,
    dictionary: WordDictionary,
    target_word: str | None = None,
    total_rounds: int = DEFAULT_TOTAL_ROUNDS,
) -> Game:
    """Create a game with ``player_a`` setting the first word.

    Without a ``target_word`` the game starts WAITING for the setter.
    """
    if total_rounds < 1:
        raise InvalidConfig("totalRounds must be at least 1")
    if player_a == player_b:
        raise InvalidConfig("A game needs two different players")
    if target_word is not None and not is_valid_word(target_word, dictionary):
        raise InvalidWord(f"{target_word!r} is not an accepted word")

    now = utc_now_iso()
    return Game(
        id=str(uuid.uuid4()),
        scores=Scoreboard(player_a=player_a, player_b=player_b),
        roles=Roles(word_setter=player_a, guesser=player_b),
        status=GameStatus.IN_PROGRESS if target_word is not None else GameStatus.WAITING,
        target_word=target_word.upper() if target_word is not None else "",
        total_rounds=total_rounds,
        current_round=1,
        created_at=now,
        updated_at=now,
    )


def set_round_word(game: Game, requester: str, word: str, dictionary: WordDictionary) -> Game:
    if game.status != GameStatus.WAITING:
        raise InvalidState(f"Cannot set a word while the game is {game.status.value}")
    if requester != game.roles.word_setter:
        raise NotYourTurn("Only the current word-setter can choose the word")
    if not is_valid_word(word, dictionary):
        raise InvalidWord(f"{word!r} is not an accepted word")

    return replace(
        game,
        target_word=word.upper(),
        status=GameStatus.IN_PROGRESS,
        updated_at=utc_now_iso(),
    )


def submit_guess(game: Game, requester: str, guess: str) -> GuessResult:
    if game.status != GameStatus.IN_PROGRESS:
        raise InvalidState(f"Cannot guess while the game is {game.status.value}")
    if requester != game.roles.guesser:
        raise NotYourTurn("Only the current guesser can submit guesses")
    if not is_well_formed(guess):
        raise InvalidGuessFormat("Guess must be exactly 5 letters")

    guess = guess.upper()
    guesses = game.guesses + (guess,)
    feedback = evaluate_guess(guess, game.target_word)
    is_correct = is_solved(feedback)
    now = utc_now_iso()

    if not is_correct and len(guesses) < MAX_GUESSES:
        next_game = replace(game, guesses=guesses, updated_at=now)
        return GuessResult(game=next_game, feedback=feedback, is_correct=False, round_complete=False)

    points_awarded = points_for_guesses(len(guesses)) if is_correct else 0
    record = RoundRecord(
        round=game.current_round,
        word_setter=game.roles.word_setter,
        guesser=game.roles.guesser,
        target_word=game.target_word,
        guesses=guesses,
        points_awarded=points_awarded,
        completed_at=now,
    )
    next_game = replace(
        game,
        guesses=guesses,
        scores=game.scores.award(requester, points_awarded),
        round_history=game.round_history + (record,),
        updated_at=now,
    )
    next_game = _close_round(next_game, now)
    return GuessResult(
        game=next_game,
        feedback=feedback,
        is_correct=is_correct,
        round_complete=True,
        points_awarded=points_awarded,
    )


def _close_round(game: Game, now: str) -> Game:
    if game.current_round >= game.total_rounds:
        return replace(
            game,
            status=GameStatus.COMPLETED,
            result=GameResult(winner=game.scores.leader()),
            completed_at=now,
        )
    return replace(
        game,
        current_round=game.current_round + 1,
        roles=swap_roles(game.roles),
        target_word="",
        guesses=(),
        status=GameStatus.WAITING,
    )


def abandon_game(game: Game, requester: str) -> Game:
    if game.status not in ACTIVE_STATUSES:
        raise InvalidState(f"Cannot abandon a game that is {game.status.value}")
    if not game.has_player(requester):
        raise NotYourTurn("Only a participant can abandon the game")

    now = utc_now_iso()
    return replace(
        game,
        status=GameStatus.ABANDONED,
        abandoned_by=requester,
        completed_at=now,
        updated_at=now,
    )
