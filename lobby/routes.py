from lobby.api import GamesController

ROUTES = [
    GamesController,
]
