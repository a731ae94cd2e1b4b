"""Persistence interfaces and implementations for games and invites."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Protocol, TypeVar

from .errors import Conflict, DuplicatePending, NotFound
from .invites import InviteResponse
from .models import Game, Invite, InviteStatus
from .state import game_from_state, game_to_state, invite_from_state, invite_to_state

R = TypeVar("R")

InviteTransition = Callable[[Invite], InviteResponse]

logger = logging.getLogger(__name__)


class GameStore(Protocol):
    def create_game(self, game: Game) -> Game:
        """Persist a new game."""

    def get_game(self, game_id: str) -> Game:
        """Return the current game or raise NotFound."""

    def list_games(self, player_id: str) -> list[Game]:
        """Return games the player takes part in, newest first."""

    def update_game(
        self,
        game_id: str,
        transition: Callable[[Game], tuple[Game, R]],
        expected_version: int | None = None,
    ) -> tuple[Game, R]:
        """Apply ``transition`` to the fresh game and persist it, or raise Conflict."""

    def has_pending_invite(self, sender: str, receiver: str) -> bool:
        """Return True when a pending invite from sender to receiver exists."""

    def create_invite(self, invite: Invite) -> Invite:
        """Persist a new invite, raising DuplicatePending for a second pending one."""

    def get_invite(self, invite_id: str) -> Invite:
        """Return the invite or raise NotFound."""

    def list_invites(self, player_id: str) -> list[Invite]:
        """Return invites sent or received by the player, newest first."""

    def respond_invite(
        self,
        invite_id: str,
        transition: InviteTransition,
        expected_version: int | None = None,
    ) -> InviteResponse:
        """Apply a response and persist the invite plus any created game atomically."""


def _check_version(kind: str, record_id: str, current: int, expected: int | None) -> None:
    if expected is not None and current != expected:
        logger.debug("%s %s is at version %s, caller expected %s", kind, record_id, current, expected)
        raise Conflict(f"{kind} {record_id} changed since it was read")


@dataclass
class InMemoryGameStore:
    _games: dict[str, Game] = field(default_factory=dict)
    _invites: dict[str, Invite] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._lock = threading.RLock()

    def create_game(self, game: Game) -> Game:
        with self._lock:
            self._games[game.id] = game
            return game

    def get_game(self, game_id: str) -> Game:
        with self._lock:
            game = self._games.get(game_id)
        if game is None:
            raise NotFound(f"Game {game_id} not found")
        return game

    def list_games(self, player_id: str) -> list[Game]:
        with self._lock:
            games = [game for game in self._games.values() if game.has_player(player_id)]
        return sorted(games, key=lambda game: game.created_at, reverse=True)

    def update_game(
        self,
        game_id: str,
        transition: Callable[[Game], tuple[Game, R]],
        expected_version: int | None = None,
    ) -> tuple[Game, R]:
        with self._lock:
            current = self.get_game(game_id)
            _check_version("Game", game_id, current.version, expected_version)
            next_game, payload = transition(current)
            stored = replace(next_game, version=current.version + 1)
            self._games[game_id] = stored
            return stored, payload

    def has_pending_invite(self, sender: str, receiver: str) -> bool:
        with self._lock:
            return any(
                invite.sender == sender and invite.receiver == receiver and invite.status == InviteStatus.PENDING
                for invite in self._invites.values()
            )

    def create_invite(self, invite: Invite) -> Invite:
        with self._lock:
            if self.has_pending_invite(invite.sender, invite.receiver):
                raise DuplicatePending("An invite to this player is already pending")
            self._invites[invite.id] = invite
            return invite

    def get_invite(self, invite_id: str) -> Invite:
        with self._lock:
            invite = self._invites.get(invite_id)
        if invite is None:
            raise NotFound(f"Invite {invite_id} not found")
        return invite

    def list_invites(self, player_id: str) -> list[Invite]:
        with self._lock:
            invites = [
                invite for invite in self._invites.values() if player_id in (invite.sender, invite.receiver)
            ]
        return sorted(invites, key=lambda invite: invite.created_at, reverse=True)

    def respond_invite(
        self,
        invite_id: str,
        transition: InviteTransition,
        expected_version: int | None = None,
    ) -> InviteResponse:
        with self._lock:
            current = self.get_invite(invite_id)
            _check_version("Invite", invite_id, current.version, expected_version)
            response = transition(current)
            stored = replace(response.invite, version=current.version + 1)
            self._invites[invite_id] = stored
            if response.game is not None:
                self._games[response.game.id] = response.game
            return InviteResponse(invite=stored, game=response.game)


@dataclass
class PostgresGameStore:
    database_url: str

    def _connect(self) -> Any:
        import psycopg

        return psycopg.connect(self.database_url)

    def create_game(self, game: Game) -> Game:
        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            with conn.cursor() as cur:
                self._insert_game(cur, game, now)
            conn.commit()
        return game

    def _insert_game(self, cur: Any, game: Game, now: datetime) -> None:
        cur.execute(
            """
            INSERT INTO games (id, version, status, player_a, player_b, state_json, created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s::jsonb, %s, %s)
            """,
            (
                game.id,
                game.version,
                game.status.value,
                game.player_a,
                game.player_b,
                json.dumps(game_to_state(game)),
                now,
                now,
            ),
        )

    def get_game(self, game_id: str) -> Game:
        with self._connect() as conn:
            with conn.cursor() as cur:
                return self._fetch_game(cur, game_id)

    def _fetch_game(self, cur: Any, game_id: str) -> Game:
        cur.execute("SELECT state_json FROM games WHERE id = %s", (game_id,))
        row = cur.fetchone()
        if row is None:
            raise NotFound(f"Game {game_id} not found")
        return game_from_state(_load_json(row[0]))

    def list_games(self, player_id: str) -> list[Game]:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT state_json FROM games
                    WHERE player_a = %s OR player_b = %s
                    ORDER BY created_at DESC
                    """,
                    (player_id, player_id),
                )
                rows = cur.fetchall()
        return [game_from_state(_load_json(row[0])) for row in rows]

    def update_game(
        self,
        game_id: str,
        transition: Callable[[Game], tuple[Game, R]],
        expected_version: int | None = None,
    ) -> tuple[Game, R]:
        with self._connect() as conn:
            with conn.cursor() as cur:
                current = self._fetch_game(cur, game_id)
                _check_version("Game", game_id, current.version, expected_version)
                next_game, payload = transition(current)
                stored = replace(next_game, version=current.version + 1)
                cur.execute(
                    """
                    UPDATE games
                    SET version = %s, status = %s, state_json = %s::jsonb, updated_at = %s
                    WHERE id = %s AND version = %s
                    """,
                    (
                        stored.version,
                        stored.status.value,
                        json.dumps(game_to_state(stored)),
                        datetime.now(timezone.utc),
                        game_id,
                        current.version,
                    ),
                )
                if cur.rowcount == 0:
                    conn.rollback()
                    logger.debug("Game %s was updated concurrently at version %s", game_id, current.version)
                    raise Conflict(f"Game {game_id} changed since it was read")
            conn.commit()
        return stored, payload

    def has_pending_invite(self, sender: str, receiver: str) -> bool:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT 1 FROM invites
                    WHERE sender_id = %s AND receiver_id = %s AND status = 'PENDING'
                    """,
                    (sender, receiver),
                )
                return cur.fetchone() is not None

    def create_invite(self, invite: Invite) -> Invite:
        from psycopg import errors as pg_errors

        now = datetime.now(timezone.utc)
        try:
            with self._connect() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO invites
                            (id, version, sender_id, receiver_id, status, game_id, state_json, created_at, updated_at)
                        VALUES (%s, %s, %s, %s, %s, NULL, %s::jsonb, %s, %s)
                        """,
                        (
                            invite.id,
                            invite.version,
                            invite.sender,
                            invite.receiver,
                            invite.status.value,
                            json.dumps(invite_to_state(invite)),
                            now,
                            now,
                        ),
                    )
                conn.commit()
        except pg_errors.UniqueViolation as exc:
            raise DuplicatePending("An invite to this player is already pending") from exc
        return invite

    def get_invite(self, invite_id: str) -> Invite:
        with self._connect() as conn:
            with conn.cursor() as cur:
                return self._fetch_invite(cur, invite_id)

    def _fetch_invite(self, cur: Any, invite_id: str) -> Invite:
        cur.execute("SELECT state_json FROM invites WHERE id = %s", (invite_id,))
        row = cur.fetchone()
        if row is None:
            raise NotFound(f"Invite {invite_id} not found")
        return invite_from_state(_load_json(row[0]))

    def list_invites(self, player_id: str) -> list[Invite]:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT state_json FROM invites
                    WHERE sender_id = %s OR receiver_id = %s
                    ORDER BY created_at DESC
                    """,
                    (player_id, player_id),
                )
                rows = cur.fetchall()
        return [invite_from_state(_load_json(row[0])) for row in rows]

    def respond_invite(
        self,
        invite_id: str,
        transition: InviteTransition,
        expected_version: int | None = None,
    ) -> InviteResponse:
        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            with conn.cursor() as cur:
                current = self._fetch_invite(cur, invite_id)
                _check_version("Invite", invite_id, current.version, expected_version)
                response = transition(current)
                stored = replace(response.invite, version=current.version + 1)
                # invites.game_id references games, so the game row must exist first
                if response.game is not None:
                    self._insert_game(cur, response.game, now)
                cur.execute(
                    """
                    UPDATE invites
                    SET version = %s, status = %s, game_id = %s, state_json = %s::jsonb, updated_at = %s
                    WHERE id = %s AND version = %s
                    """,
                    (
                        stored.version,
                        stored.status.value,
                        stored.linked_game,
                        json.dumps(invite_to_state(stored)),
                        now,
                        invite_id,
                        current.version,
                    ),
                )
                if cur.rowcount == 0:
                    conn.rollback()
                    raise Conflict(f"Invite {invite_id} changed since it was read")
            conn.commit()
        return InviteResponse(invite=stored, game=response.game)


def _load_json(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else json.loads(value)


def create_store(database_url: str | None) -> GameStore:
    if database_url:
        return PostgresGameStore(database_url=database_url)
    return InMemoryGameStore()
