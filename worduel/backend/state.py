"""Snapshot builders for game and invite records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

from .models import (
    Game,
    GameResult,
    GameStatus,
    Invite,
    InviteStatus,
    LetterFeedback,
    Roles,
    RoundRecord,
    Scoreboard,
)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _outcome(game: Game) -> str | None:
    if game.result is None:
        return None
    return "draw" if game.result.is_draw else "win"


def _round_to_state(record: RoundRecord) -> dict[str, Any]:
    return {
        "round": record.round,
        "wordSetter": record.word_setter,
        "guesser": record.guesser,
        "targetWord": record.target_word,
        "guesses": list(record.guesses),
        "pointsAwarded": record.points_awarded,
        "completedAt": record.completed_at,
    }


def game_to_state(game: Game, viewer: str | None = None) -> dict[str, Any]:
    """Serialize a game to its camelCase snapshot.

    When ``viewer`` is given and is not the current word-setter, the target
    word of an open round is blanked out.
    """
    target_word = game.target_word
    if (
        viewer is not None
        and game.status == GameStatus.IN_PROGRESS
        and viewer != game.roles.word_setter
    ):
        target_word = ""

    return {
        "id": game.id,
        "version": game.version,
        "status": game.status.value,
        "playerA": game.player_a,
        "playerB": game.player_b,
        "currentWordSetter": game.roles.word_setter,
        "currentGuesser": game.roles.guesser,
        "targetWord": target_word,
        "guesses": list(game.guesses),
        "totalRounds": game.total_rounds,
        "currentRound": game.current_round,
        "points": {
            game.player_a: game.scores.points_a,
            game.player_b: game.scores.points_b,
        },
        "roundHistory": [_round_to_state(record) for record in game.round_history],
        "winner": game.winner,
        "outcome": _outcome(game),
        "abandonedBy": game.abandoned_by,
        "createdAt": game.created_at,
        "updatedAt": game.updated_at,
        "completedAt": game.completed_at,
    }


def game_from_state(state: dict[str, Any]) -> Game:
    player_a = state["playerA"]
    player_b = state["playerB"]
    points = state.get("points", {})
    outcome = state.get("outcome")
    result: GameResult | None = None
    if outcome is not None:
        result = GameResult(winner=state.get("winner") if outcome == "win" else None)

    history = tuple(
        RoundRecord(
            round=int(entry["round"]),
            word_setter=entry["wordSetter"],
            guesser=entry["guesser"],
            target_word=entry["targetWord"],
            guesses=tuple(entry.get("guesses", [])),
            points_awarded=int(entry["pointsAwarded"]),
            completed_at=entry["completedAt"],
        )
        for entry in state.get("roundHistory", [])
    )

    return Game(
        id=state["id"],
        version=int(state.get("version", 1)),
        status=GameStatus(state["status"]),
        scores=Scoreboard(
            player_a=player_a,
            player_b=player_b,
            points_a=int(points.get(player_a, 0)),
            points_b=int(points.get(player_b, 0)),
        ),
        roles=Roles(word_setter=state["currentWordSetter"], guesser=state["currentGuesser"]),
        target_word=state.get("targetWord", ""),
        guesses=tuple(state.get("guesses", [])),
        total_rounds=int(state["totalRounds"]),
        current_round=int(state["currentRound"]),
        round_history=history,
        result=result,
        abandoned_by=state.get("abandonedBy"),
        created_at=state["createdAt"],
        updated_at=state["updatedAt"],
        completed_at=state.get("completedAt"),
    )


def invite_to_state(invite: Invite) -> dict[str, Any]:
    return {
        "id": invite.id,
        "version": invite.version,
        "sender": invite.sender,
        "receiver": invite.receiver,
        "status": invite.status.value,
        "message": invite.message,
        "linkedGame": invite.linked_game,
        "createdAt": invite.created_at,
        "respondedAt": invite.responded_at,
    }


def invite_from_state(state: dict[str, Any]) -> Invite:
    return Invite(
        id=state["id"],
        version=int(state.get("version", 1)),
        sender=state["sender"],
        receiver=state["receiver"],
        status=InviteStatus(state["status"]),
        message=state.get("message"),
        linked_game=state.get("linkedGame"),
        created_at=state["createdAt"],
        responded_at=state.get("respondedAt"),
    )


def feedback_to_state(feedback: Iterable[LetterFeedback]) -> list[dict[str, str]]:
    return [{"letter": item.letter, "status": item.status.value} for item in feedback]
