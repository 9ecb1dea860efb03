"""Tests for the Game model."""

import uuid

from lobby.models import Game, GameStatus


def test_create_game_record():
    game = Game.create(host="U1", game_state={"board": []})

    assert uuid.UUID(game.id).version == 4
    assert game.status is GameStatus.CREATED
    assert game.participants == ["U1"]
    assert game.to_record() == {
        "id": game.id,
        "host": "U1",
        "other": None,
        "gameState": {"board": []},
    }


def test_game_from_store_row():
    row = {
        "id": "g1",
        "host": "U1",
        "other": "U2",
        "gameState": [1, 2, 3],
        "created_at": "2024-01-01T00:00:00+00:00",
    }
    game = Game.model_validate(row)

    assert game.game_state == [1, 2, 3]
    assert game.status is GameStatus.JOINED
    assert game.participants == ["U1", "U2"]
