"""Lobby data models."""

from lobby.models.game import GAMES_TABLE, Game, GameStatus, generate_game_id

__all__ = [
    "GAMES_TABLE",
    "Game",
    "GameStatus",
    "generate_game_id",
]
