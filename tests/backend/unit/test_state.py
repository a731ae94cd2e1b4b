from worduel.backend.engine import create_game, submit_guess
from worduel.backend.invites import create_invite
from worduel.backend.state import game_from_state, game_to_state, invite_from_state, invite_to_state
from worduel.backend.words import WordList

DICTIONARY = WordList.from_words(["crane"])


def test_game_snapshot_uses_camel_case_fields() -> None:
    game = create_game(player_a="alice", player_b="bob", dictionary=DICTIONARY, target_word="crane")

    state = game_to_state(game)

    assert state["status"] == "IN_PROGRESS"
    assert state["currentWordSetter"] == "alice"
    assert state["currentGuesser"] == "bob"
    assert state["targetWord"] == "CRANE"
    assert state["points"] == {"alice": 0, "bob": 0}
    assert state["winner"] is None
    assert state["outcome"] is None
    assert state["createdAt"].endswith("+00:00")


def test_game_snapshot_hides_target_from_guesser_while_round_open() -> None:
    game = create_game(player_a="alice", player_b="bob", dictionary=DICTIONARY, target_word="crane")

    assert game_to_state(game, viewer="bob")["targetWord"] == ""
    assert game_to_state(game, viewer="alice")["targetWord"] == "CRANE"


def test_completed_draw_survives_snapshot_round_trip() -> None:
    game = create_game(
        player_a="alice", player_b="bob", dictionary=DICTIONARY, target_word="crane", total_rounds=1
    )
    for guess in ["aaaaa", "bbbbb", "ccccc", "ddddd", "eeeee", "fffff"]:
        game = submit_guess(game, "bob", guess).game

    state = game_to_state(game)
    restored = game_from_state(state)

    assert state["outcome"] == "draw"
    assert state["roundHistory"][0]["pointsAwarded"] == 0
    assert restored == game
    assert restored.result is not None and restored.result.is_draw


def test_completed_win_survives_snapshot_round_trip() -> None:
    game = create_game(
        player_a="alice", player_b="bob", dictionary=DICTIONARY, target_word="crane", total_rounds=1
    )
    game = submit_guess(game, "bob", "crane").game

    state = game_to_state(game, viewer="bob")

    assert state["outcome"] == "win"
    assert state["winner"] == "bob"
    assert state["roundHistory"][0]["targetWord"] == "CRANE"
    assert game_from_state(state) == game


def test_invite_snapshot_round_trip() -> None:
    invite = create_invite(sender="alice", receiver="bob", message="hi")

    state = invite_to_state(invite)

    assert state["status"] == "PENDING"
    assert state["linkedGame"] is None
    assert invite_from_state(state) == invite
