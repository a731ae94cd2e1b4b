"""Invite lifecycle and the handoff into a new game."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace

from .engine import DEFAULT_TOTAL_ROUNDS, create_game
from .errors import DuplicatePending, InvalidConfig, InvalidState, NotRecipient, SelfInvite
from .models import Game, Invite, InviteStatus
from .state import utc_now_iso
from .words import WordDictionary

MAX_MESSAGE_LENGTH = 200


@dataclass(frozen=True)
class InviteResponse:
    invite: Invite
    game: Game | None


def create_invite(
    sender: str,
    receiver: str,
    message: str | None = None,
    has_pending: bool = False,
) -> Invite:
    if sender == receiver:
        raise SelfInvite("You cannot invite yourself")
    if has_pending:
        raise DuplicatePending("An invite to this player is already pending")
    if message is not None and len(message) > MAX_MESSAGE_LENGTH:
        raise InvalidConfig(f"Invite message is limited to {MAX_MESSAGE_LENGTH} characters")

    return Invite(
        id=str(uuid.uuid4()),
        sender=sender,
        receiver=receiver,
        status=InviteStatus.PENDING,
        message=message,
        created_at=utc_now_iso(),
    )


def respond_to_invite(
    invite: Invite,
    responder: str,
    accept: bool,
    dictionary: WordDictionary,
    total_rounds: int = DEFAULT_TOTAL_ROUNDS,
) -> InviteResponse:
    """Accept or decline a pending invite.

    Accepting creates a game in which the sender picks the first word.
    """
    if invite.status != InviteStatus.PENDING:
        raise InvalidState(f"Invite is already {invite.status.value}")
    if responder != invite.receiver:
        raise NotRecipient("Only the invited player can respond")

    now = utc_now_iso()
    if not accept:
        return InviteResponse(
            invite=replace(invite, status=InviteStatus.DECLINED, responded_at=now),
            game=None,
        )

    game = create_game(
        player_a=invite.sender,
        player_b=invite.receiver,
        dictionary=dictionary,
        total_rounds=total_rounds,
    )
    return InviteResponse(
        invite=replace(invite, status=InviteStatus.ACCEPTED, linked_game=game.id, responded_at=now),
        game=game,
    )
