"""Domain models for games, invites and round bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class GameStatus(str, Enum):
    WAITING = "WAITING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"


class InviteStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    EXPIRED = "EXPIRED"


class LetterStatus(str, Enum):
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


ACTIVE_STATUSES = frozenset({GameStatus.WAITING, GameStatus.IN_PROGRESS})


@dataclass(frozen=True)
class LetterFeedback:
    letter: str
    status: LetterStatus


@dataclass(frozen=True)
class Roles:
    word_setter: str
    guesser: str


def swap_roles(roles: Roles) -> Roles:
    """Return the roles for the next round."""
    return Roles(word_setter=roles.guesser, guesser=roles.word_setter)


@dataclass(frozen=True)
class Scoreboard:
    """Accumulated points, one slot per participant."""

    player_a: str
    player_b: str
    points_a: int = 0
    points_b: int = 0

    def points_for(self, player_id: str) -> int:
        if player_id == self.player_a:
            return self.points_a
        if player_id == self.player_b:
            return self.points_b
        raise ValueError(f"{player_id!r} is not a participant")

    def award(self, player_id: str, points: int) -> Scoreboard:
        if player_id == self.player_a:
            return replace(self, points_a=self.points_a + points)
        if player_id == self.player_b:
            return replace(self, points_b=self.points_b + points)
        raise ValueError(f"{player_id!r} is not a participant")

    def leader(self) -> str | None:
        """Return the player with strictly more points, or None on a tie."""
        if self.points_a > self.points_b:
            return self.player_a
        if self.points_b > self.points_a:
            return self.player_b
        return None


@dataclass(frozen=True)
class RoundRecord:
    round: int
    word_setter: str
    guesser: str
    target_word: str
    guesses: tuple[str, ...]
    points_awarded: int
    completed_at: str


@dataclass(frozen=True)
class GameResult:
    """Final outcome of a completed game. A missing winner is a draw."""

    winner: str | None

    @property
    def is_draw(self) -> bool:
        return self.winner is None


@dataclass(frozen=True)
class Game:
    id: str
    scores: Scoreboard
    roles: Roles
    status: GameStatus
    total_rounds: int
    current_round: int
    created_at: str
    updated_at: str
    target_word: str = ""
    guesses: tuple[str, ...] = ()
    round_history: tuple[RoundRecord, ...] = ()
    result: GameResult | None = None
    abandoned_by: str | None = None
    completed_at: str | None = None
    version: int = 1

    @property
    def player_a(self) -> str:
        return self.scores.player_a

    @property
    def player_b(self) -> str:
        return self.scores.player_b

    @property
    def winner(self) -> str | None:
        return self.result.winner if self.result is not None else None

    def has_player(self, player_id: str) -> bool:
        return player_id in (self.player_a, self.player_b)


@dataclass(frozen=True)
class Invite:
    id: str
    sender: str
    receiver: str
    status: InviteStatus
    created_at: str
    message: str | None = None
    linked_game: str | None = None
    responded_at: str | None = None
    version: int = 1
