import pytest

fastapi = pytest.importorskip("fastapi")
pytest.importorskip("httpx")
from fastapi.testclient import TestClient

from worduel.backend.api import create_app
from worduel.backend.config import BackendSettings
from worduel.backend.store import InMemoryGameStore
from worduel.backend.words import WordList

DICTIONARY = WordList.from_words(["crane", "house", "plant", "speed"])
SETTINGS = BackendSettings(database_url=None, host="127.0.0.1", port=8000)

ALICE = {"X-Player-Id": "alice"}
BOB = {"X-Player-Id": "bob"}


def _client() -> TestClient:
    return TestClient(create_app(store=InMemoryGameStore(), dictionary=DICTIONARY, settings=SETTINGS))


def _create_game(client: TestClient, **extra) -> dict:
    response = client.post("/games", json={"targetWord": "crane", "opponentId": "bob", **extra}, headers=ALICE)
    assert response.status_code == 200
    return response.json()


def test_post_games_returns_game_snapshot() -> None:
    client = _client()

    game = _create_game(client)

    assert game["status"] == "IN_PROGRESS"
    assert game["targetWord"] == "CRANE"
    assert game["currentWordSetter"] == "alice"
    assert game["currentGuesser"] == "bob"
    assert game["totalRounds"] == 3


def test_get_game_hides_target_from_guesser() -> None:
    client = _client()
    game = _create_game(client)

    as_guesser = client.get(f"/games/{game['id']}", headers=BOB)
    as_setter = client.get(f"/games/{game['id']}", headers=ALICE)

    assert as_guesser.status_code == 200
    assert as_guesser.json()["targetWord"] == ""
    assert as_setter.json()["targetWord"] == "CRANE"


def test_unknown_game_returns_404() -> None:
    client = _client()

    response = client.get("/games/missing", headers=ALICE)

    assert response.status_code == 404
    assert response.json()["code"] == "NotFound"


def test_missing_player_header_is_rejected() -> None:
    client = _client()

    response = client.post("/games", json={"targetWord": "crane", "opponentId": "bob"})

    assert response.status_code == 422


def test_invalid_word_and_rounds_are_bad_requests() -> None:
    client = _client()

    bad_word = client.post("/games", json={"targetWord": "zzzzz", "opponentId": "bob"}, headers=ALICE)
    bad_rounds = client.post(
        "/games", json={"targetWord": "crane", "opponentId": "bob", "totalRounds": 0}, headers=ALICE
    )

    assert bad_word.status_code == 400
    assert bad_word.json()["code"] == "InvalidWord"
    assert bad_rounds.status_code == 400
    assert bad_rounds.json()["code"] == "InvalidConfig"


def test_guess_flow_reports_feedback_and_round_completion() -> None:
    client = _client()
    game = _create_game(client, totalRounds=1)

    miss = client.post(f"/games/{game['id']}/guess", json={"guess": "house"}, headers=BOB)
    hit = client.post(f"/games/{game['id']}/guess", json={"guess": "crane"}, headers=BOB)

    assert miss.status_code == 200
    assert miss.json()["isCorrect"] is False
    assert miss.json()["roundComplete"] is False
    assert miss.json()["feedback"][0] == {"letter": "H", "status": "ABSENT"}
    body = hit.json()
    assert body["isCorrect"] is True
    assert body["roundComplete"] is True
    assert body["pointsAwarded"] == 5
    assert body["game"]["status"] == "COMPLETED"
    assert body["game"]["winner"] == "bob"
    assert body["game"]["outcome"] == "win"


def test_guess_by_wrong_player_and_bad_format() -> None:
    client = _client()
    game = _create_game(client)

    wrong_player = client.post(f"/games/{game['id']}/guess", json={"guess": "house"}, headers=ALICE)
    bad_format = client.post(f"/games/{game['id']}/guess", json={"guess": "hous"}, headers=BOB)

    assert wrong_player.status_code == 403
    assert wrong_player.json()["code"] == "NotYourTurn"
    assert bad_format.status_code == 400
    assert bad_format.json()["code"] == "InvalidGuessFormat"
    assert client.get(f"/games/{game['id']}", headers=BOB).json()["guesses"] == []


def test_stale_guess_version_is_a_conflict() -> None:
    client = _client()
    game = _create_game(client)

    first = client.post(
        f"/games/{game['id']}/guess", json={"guess": "house", "version": game["version"]}, headers=BOB
    )
    retry = client.post(
        f"/games/{game['id']}/guess", json={"guess": "house", "version": game["version"]}, headers=BOB
    )

    assert first.status_code == 200
    assert retry.status_code == 409
    assert retry.json()["code"] == "Conflict"
    assert client.get(f"/games/{game['id']}", headers=BOB).json()["guesses"] == ["HOUSE"]


def test_set_word_starts_next_round() -> None:
    client = _client()
    game = _create_game(client, totalRounds=2)
    client.post(f"/games/{game['id']}/guess", json={"guess": "crane"}, headers=BOB)

    wrong_setter = client.post(f"/games/{game['id']}/set-word", json={"word": "plant"}, headers=ALICE)
    updated = client.post(f"/games/{game['id']}/set-word", json={"word": "plant"}, headers=BOB)

    assert wrong_setter.status_code == 403
    assert updated.status_code == 200
    assert updated.json()["status"] == "IN_PROGRESS"
    assert updated.json()["currentRound"] == 2
    assert updated.json()["currentGuesser"] == "alice"
    assert updated.json()["targetWord"] == "PLANT"


def test_invite_accept_creates_game_once() -> None:
    client = _client()

    invite = client.post("/games/invites", json={"receiverId": "bob", "message": "Duel?"}, headers=ALICE)
    invite_id = invite.json()["id"]
    accepted = client.post(f"/games/invites/{invite_id}/respond", json={"accept": True}, headers=BOB)
    again = client.post(f"/games/invites/{invite_id}/respond", json={"accept": True}, headers=BOB)

    assert invite.status_code == 200
    assert invite.json()["status"] == "PENDING"
    assert accepted.status_code == 200
    body = accepted.json()
    assert body["invite"]["status"] == "ACCEPTED"
    assert body["invite"]["linkedGame"] == body["game"]["id"]
    assert body["game"]["status"] == "WAITING"
    assert body["game"]["currentWordSetter"] == "alice"
    assert again.status_code == 409
    assert again.json()["code"] == "InvalidState"
    assert len(client.get("/games", headers=BOB).json()) == 1


def test_invite_decline_and_recipient_checks() -> None:
    client = _client()
    invite_id = client.post("/games/invites", json={"receiverId": "bob"}, headers=ALICE).json()["id"]

    by_sender = client.post(f"/games/invites/{invite_id}/respond", json={"accept": True}, headers=ALICE)
    declined = client.post(f"/games/invites/{invite_id}/respond", json={"accept": False}, headers=BOB)

    assert by_sender.status_code == 403
    assert by_sender.json()["code"] == "NotRecipient"
    assert declined.json()["invite"]["status"] == "DECLINED"
    assert declined.json()["game"] is None


def test_self_and_duplicate_invites_are_rejected() -> None:
    client = _client()

    self_invite = client.post("/games/invites", json={"receiverId": "alice"}, headers=ALICE)
    client.post("/games/invites", json={"receiverId": "bob"}, headers=ALICE)
    duplicate = client.post("/games/invites", json={"receiverId": "bob"}, headers=ALICE)

    assert self_invite.status_code == 400
    assert self_invite.json()["code"] == "SelfInvite"
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "DuplicatePending"
    assert [item["receiver"] for item in client.get("/games/invites/me", headers=BOB).json()] == ["bob"]


def test_word_options_and_abandon() -> None:
    client = _client()
    game = _create_game(client)

    options = client.get("/games/word-options", params={"count": 3}, headers=ALICE)
    abandoned = client.post(f"/games/{game['id']}/abandon", headers=BOB)
    guess_after = client.post(f"/games/{game['id']}/guess", json={"guess": "crane"}, headers=BOB)

    assert options.status_code == 200
    assert len(options.json()["words"]) == 3
    assert set(options.json()["words"]) <= DICTIONARY.words
    assert abandoned.json()["status"] == "ABANDONED"
    assert abandoned.json()["abandonedBy"] == "bob"
    assert guess_after.status_code == 409


def test_overlong_invite_message_is_a_domain_bad_request() -> None:
    client = _client()

    response = client.post("/games/invites", json={"receiverId": "bob", "message": "x" * 201}, headers=ALICE)

    assert response.status_code == 400
    assert response.json()["code"] == "InvalidConfig"
    assert client.get("/games/invites/me", headers=BOB).json() == []
