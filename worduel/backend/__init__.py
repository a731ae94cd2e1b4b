"""Backend package for Worduel."""

from .config import BackendSettings, load_settings
from .engine import GuessResult, abandon_game, create_game, set_round_word, submit_guess
from .feedback import evaluate_guess
from .invites import InviteResponse, create_invite, respond_to_invite
from .scoring import points_for_guesses
from .service import GameService
from .store import GameStore, InMemoryGameStore, PostgresGameStore, create_store
from .words import WordDictionary, WordList, is_valid_word

__all__ = [
    "abandon_game",
    "BackendSettings",
    "create_game",
    "create_invite",
    "create_store",
    "evaluate_guess",
    "GameService",
    "GameStore",
    "GuessResult",
    "InMemoryGameStore",
    "InviteResponse",
    "is_valid_word",
    "load_settings",
    "points_for_guesses",
    "PostgresGameStore",
    "respond_to_invite",
    "set_round_word",
    "submit_guess",
    "WordDictionary",
    "WordList",
]
