"""Lobby API routes."""

from lobby.api.games import GamesController

__all__ = ["GamesController"]
