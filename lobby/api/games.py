"""Game session API endpoints."""

import logging
from typing import Annotated, Any

from litestar import Controller, Request, Response, post
from litestar.di import Provide
from litestar.enums import MediaType
from litestar.exceptions import NotFoundException, ValidationException
from litestar.params import Dependency
from litestar.status_codes import HTTP_200_OK
from pydantic import BaseModel, Field, JsonValue, StrictStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from lobby.api.cors import CORS_HEADERS
from lobby.auth import resolve_identity
from lobby.models import GAMES_TABLE, Game
from lobby.store import StoreClient, StoreError, eq, is_null, provide_store
from lobby.utils.logging import error_log

logger = logging.getLogger("Lobby.games")

StoreDependency = Annotated[StoreClient, Dependency(skip_validation=True)]


# --- Request Schemas ---

GAME_PAYLOAD = TypeAdapter(JsonValue)


class JoinGameRequest(BaseModel):
    """Request to join an existing game."""
    game_id: StrictStr = Field(alias="gameId")


# --- Helper Functions ---

def parse_game_payload(raw: bytes) -> JsonValue:
    """Parse the initial game state; empty or unparseable bodies are rejected."""
    try:
        payload = GAME_PAYLOAD.validate_json(raw)
    except PydanticValidationError:
        raise ValidationException("Bad Request")
    if not payload:
        raise ValidationException("Bad Request")
    return payload


def parse_join_request(raw: bytes) -> JoinGameRequest:
    try:
        return JoinGameRequest.model_validate_json(raw)
    except PydanticValidationError:
        raise ValidationException("Bad Request")


def data_response(data: Any) -> Response:
    """200 response wrapping the store's result."""
    return Response(
        content={"data": data},
        status_code=HTTP_200_OK,
        media_type=MediaType.JSON,
        headers=CORS_HEADERS,
    )


# --- Controller ---

class GamesController(Controller):
    """API endpoints for creating and joining games."""

    path = "/api"
    tags = ["games"]
    dependencies = {"store": Provide(provide_store)}

    @post("/create-game", status_code=HTTP_200_OK)
    async def create_game(self, request: Request, store: StoreDependency) -> Response:
        """Create a new game hosted by the caller."""
        host = await resolve_identity(store)
        game_state = parse_game_payload(await request.body())

        game = Game.create(host=host, game_state=game_state)
        logger.info(f"Creating new game {game.id} (host: {host})")

        result = await store.insert(GAMES_TABLE, [game.to_record()])
        if result.error is not None:
            error_log(
                "Failed to create game",
                context={"game_id": game.id, "host": host, "store_error": result.error.message},
            )
            result.raise_for_error()

        logger.info(f"Game created successfully: {game.id}")
        return data_response(result.data)

    @post("/join-game", status_code=HTTP_200_OK)
    async def join_game(self, request: Request, store: StoreDependency) -> Response:
        """Join an existing game as its second player."""
        data = parse_join_request(await request.body())
        user_id = await resolve_identity(store)

        found = await store.select(GAMES_TABLE, {"id": eq(data.game_id)})
        if found.error is not None:
            error_log(
                "Failed to look up game",
                context={"game_id": data.game_id, "store_error": found.error.message},
            )
            found.raise_for_error()

        if not found.data:
            raise NotFoundException(f"Game '{data.game_id}' not found")

        try:
            game = Game.model_validate(found.data[0])
        except PydanticValidationError as e:
            error_log("Store returned an invalid game record", exc=e, context={"game_id": data.game_id})
            raise StoreError(detail="Store returned an invalid game record")
        if game.other is not None:
            raise ValidationException("Game is already full")
        if game.host == user_id:
            raise ValidationException("Cannot join your own game")

        # Only applies while the seat is still empty; a concurrent join that
        # got there first leaves zero matching rows.
        updated = await store.update(
            GAMES_TABLE,
            {"other": user_id},
            {"id": eq(game.id), "other": is_null()},
        )
        if updated.error is not None:
            error_log(
                "Failed to join game",
                context={"game_id": game.id, "user": user_id, "store_error": updated.error.message},
            )
            updated.raise_for_error()

        if not updated.data:
            logger.info(f"Join lost the race for game {game.id} (user: {user_id})")
            raise ValidationException("Game is already full")

        logger.info(f"Player {user_id} joined game {game.id}")
        return data_response(updated.data)

