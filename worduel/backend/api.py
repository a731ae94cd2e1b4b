"""FastAPI endpoints for games, guesses and invites."""

from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, Header, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .config import BackendSettings, load_settings
from .errors import (
    Conflict,
    DuplicatePending,
    InvalidState,
    NotFound,
    NotRecipient,
    NotYourTurn,
    WorduelError,
)
from .service import GameService
from .state import feedback_to_state, game_to_state, invite_to_state
from .store import GameStore, create_store
from .words import WordList

ERROR_STATUS_CODES: dict[type[WorduelError], int] = {
    NotFound: 404,
    NotYourTurn: 403,
    NotRecipient: 403,
    InvalidState: 409,
    DuplicatePending: 409,
    Conflict: 409,
}


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateGameRequest(CamelModel):
    target_word: str = Field(min_length=1)
    opponent_id: str = Field(min_length=1)
    total_rounds: int | None = None


class CreateInviteRequest(CamelModel):
    receiver_id: str = Field(min_length=1)
    message: str | None = None


class RespondInviteRequest(CamelModel):
    accept: bool


class GuessRequest(CamelModel):
    guess: str
    version: int | None = None


class SetWordRequest(CamelModel):
    word: str
    version: int | None = None


class GuessResponse(CamelModel):
    feedback: list[dict[str, str]]
    is_correct: bool
    round_complete: bool
    points_awarded: int
    game: dict[str, Any]


class InviteResponseBody(CamelModel):
    invite: dict[str, Any]
    game: dict[str, Any] | None


class WordOptionsResponse(CamelModel):
    words: list[str]


def current_player(x_player_id: str = Header(min_length=1)) -> str:
    """Actor identifier supplied by the identity layer in front of this API."""
    return x_player_id


def _load_dictionary(settings: BackendSettings) -> WordList:
    if settings.words_file is not None:
        return WordList.from_file(settings.words_file)
    return WordList.load_default()


def create_app(
    store: GameStore | None = None,
    dictionary: WordList | None = None,
    settings: BackendSettings | None = None,
) -> FastAPI:
    app = FastAPI(title="Worduel API", version="0.3.0")
    settings = settings if settings is not None else load_settings()
    game_service = GameService(
        store=store if store is not None else create_store(settings.database_url),
        dictionary=dictionary if dictionary is not None else _load_dictionary(settings),
        default_rounds=settings.default_rounds,
    )
    app.state.game_service = game_service

    def get_service() -> GameService:
        return game_service

    @app.exception_handler(WorduelError)
    async def handle_domain_error(request: Request, exc: WorduelError) -> JSONResponse:
        status_code = ERROR_STATUS_CODES.get(type(exc), 400)
        return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": exc.code})

    @app.post("/games")
    def create_game(
        payload: CreateGameRequest,
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> dict[str, Any]:
        game = service.create_game(
            requester=player_id,
            opponent=payload.opponent_id,
            target_word=payload.target_word,
            total_rounds=payload.total_rounds,
        )
        return game_to_state(game, viewer=player_id)

    @app.get("/games")
    def list_games(
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> list[dict[str, Any]]:
        return [game_to_state(game, viewer=player_id) for game in service.list_games(player_id)]

    @app.get("/games/word-options", response_model=WordOptionsResponse)
    def word_options(
        count: int = Query(default=4, ge=1),
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> WordOptionsResponse:
        return WordOptionsResponse(words=service.word_options(count))

    @app.post("/games/invites")
    def create_invite(
        payload: CreateInviteRequest,
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> dict[str, Any]:
        invite = service.create_invite(sender=player_id, receiver=payload.receiver_id, message=payload.message)
        return invite_to_state(invite)

    @app.get("/games/invites/me")
    def my_invites(
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> list[dict[str, Any]]:
        return [invite_to_state(invite) for invite in service.list_invites(player_id)]

    @app.post("/games/invites/{invite_id}/respond", response_model=InviteResponseBody)
    def respond_invite(
        invite_id: str,
        payload: RespondInviteRequest,
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> InviteResponseBody:
        response = service.respond_to_invite(invite_id=invite_id, responder=player_id, accept=payload.accept)
        game = game_to_state(response.game, viewer=player_id) if response.game is not None else None
        return InviteResponseBody(invite=invite_to_state(response.invite), game=game)

    @app.get("/games/{game_id}")
    def get_game(
        game_id: str,
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> dict[str, Any]:
        return game_to_state(service.get_game(game_id), viewer=player_id)

    @app.post("/games/{game_id}/guess", response_model=GuessResponse)
    def submit_guess(
        game_id: str,
        payload: GuessRequest,
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> GuessResponse:
        result = service.submit_guess(
            game_id=game_id,
            requester=player_id,
            guess=payload.guess,
            expected_version=payload.version,
        )
        return GuessResponse(
            feedback=feedback_to_state(result.feedback),
            is_correct=result.is_correct,
            round_complete=result.round_complete,
            points_awarded=result.points_awarded,
            game=game_to_state(result.game, viewer=player_id),
        )

    @app.post("/games/{game_id}/set-word")
    def set_word(
        game_id: str,
        payload: SetWordRequest,
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> dict[str, Any]:
        game = service.set_round_word(
            game_id=game_id,
            requester=player_id,
            word=payload.word,
            expected_version=payload.version,
        )
        return game_to_state(game, viewer=player_id)

    @app.post("/games/{game_id}/abandon")
    def abandon_game(
        game_id: str,
        player_id: str = Depends(current_player),
        service: GameService = Depends(get_service),
    ) -> dict[str, Any]:
        return game_to_state(service.abandon_game(game_id=game_id, requester=player_id), viewer=player_id)

    return app


app = create_app()
