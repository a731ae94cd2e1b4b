"""Game service: runs engine and invite transitions against a store."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, TypeVar

from . import engine, invites
from .engine import DEFAULT_TOTAL_ROUNDS, GuessResult
from .errors import Conflict
from .invites import InviteResponse
from .models import Game, GameStatus, Invite
from .store import GameStore
from .words import WordList

R = TypeVar("R")

logger = logging.getLogger(__name__)


@dataclass
class GameService:
    store: GameStore
    dictionary: WordList
    default_rounds: int = DEFAULT_TOTAL_ROUNDS

    def create_game(
        self,
        requester: str,
        opponent: str,
        target_word: str | None = None,
        total_rounds: int | None = None,
    ) -> Game:
        game = engine.create_game(
            player_a=requester,
            player_b=opponent,
            dictionary=self.dictionary,
            target_word=target_word,
            total_rounds=total_rounds if total_rounds is not None else self.default_rounds,
        )
        self.store.create_game(game)
        logger.info("Game %s created: %s vs %s, %d rounds", game.id, requester, opponent, game.total_rounds)
        return game

    def get_game(self, game_id: str) -> Game:
        return self.store.get_game(game_id)

    def list_games(self, player_id: str) -> list[Game]:
        return self.store.list_games(player_id)

    def word_options(self, count: int, rng: random.Random | None = None) -> list[str]:
        return self.dictionary.sample(count, rng=rng)

    def set_round_word(
        self,
        game_id: str,
        requester: str,
        word: str,
        expected_version: int | None = None,
    ) -> Game:
        def transition(game: Game) -> tuple[Game, None]:
            return engine.set_round_word(game, requester, word, self.dictionary), None

        game, _ = self._update(game_id, transition, expected_version)
        logger.info("Game %s round %d word set by %s", game.id, game.current_round, requester)
        return game

    def submit_guess(
        self,
        game_id: str,
        requester: str,
        guess: str,
        expected_version: int | None = None,
    ) -> GuessResult:
        def transition(game: Game) -> tuple[Game, GuessResult]:
            result = engine.submit_guess(game, requester, guess)
            return result.game, result

        game, result = self._update(game_id, transition, expected_version)
        if result.round_complete:
            logger.info(
                "Game %s round %d complete, %s scored %d",
                game.id,
                len(game.round_history),
                requester,
                result.points_awarded,
            )
        if game.status == GameStatus.COMPLETED:
            logger.info("Game %s completed, winner: %s", game.id, game.winner or "draw")
        return GuessResult(
            game=game,
            feedback=result.feedback,
            is_correct=result.is_correct,
            round_complete=result.round_complete,
            points_awarded=result.points_awarded,
        )

    def abandon_game(self, game_id: str, requester: str, expected_version: int | None = None) -> Game:
        def transition(game: Game) -> tuple[Game, None]:
            return engine.abandon_game(game, requester), None

        game, _ = self._update(game_id, transition, expected_version)
        logger.info("Game %s abandoned by %s", game.id, requester)
        return game

    def create_invite(self, sender: str, receiver: str, message: str | None = None) -> Invite:
        invite = invites.create_invite(
            sender=sender,
            receiver=receiver,
            message=message,
            has_pending=self.store.has_pending_invite(sender, receiver),
        )
        return self.store.create_invite(invite)

    def list_invites(self, player_id: str) -> list[Invite]:
        return self.store.list_invites(player_id)

    def respond_to_invite(
        self,
        invite_id: str,
        responder: str,
        accept: bool,
        expected_version: int | None = None,
    ) -> InviteResponse:
        def transition(invite: Invite) -> InviteResponse:
            return invites.respond_to_invite(
                invite,
                responder=responder,
                accept=accept,
                dictionary=self.dictionary,
                total_rounds=self.default_rounds,
            )

        try:
            response = self.store.respond_invite(invite_id, transition, expected_version)
        except Conflict:
            logger.warning("Invite %s changed concurrently while responding", invite_id)
            raise
        logger.info("Invite %s %s by %s", invite_id, response.invite.status.value, responder)
        return response

    def _update(
        self,
        game_id: str,
        transition: Callable[[Game], tuple[Game, R]],
        expected_version: int | None,
    ) -> tuple[Game, R]:
        try:
            return self.store.update_game(game_id, transition, expected_version=expected_version)
        except Conflict:
            logger.warning("Game %s changed concurrently, rejecting stale update", game_id)
            raise
