"""Game session model."""

import enum
import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue

GAMES_TABLE = "games"


class GameStatus(str, enum.Enum):
    """Game session status."""
    CREATED = "created"  # Waiting for a second player
    JOINED = "joined"    # Both seats taken


def generate_game_id() -> str:
    """Generate a random game identifier."""
    return str(uuid.uuid4())


class Game(BaseModel):
    """A game session between a host and at most one other player."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_game_id)
    host: str
    other: Optional[str] = None
    game_state: JsonValue = Field(default=None, alias="gameState")

    @classmethod
    def create(cls, host: str, game_state: JsonValue) -> "Game":
        """New game hosted by `host`, with no second player yet."""
        return cls(host=host, other=None, game_state=game_state)

    @property
    def status(self) -> GameStatus:
        return GameStatus.CREATED if self.other is None else GameStatus.JOINED

    @property
    def participants(self) -> List[str]:
        return [p for p in (self.host, self.other) if p is not None]

    def to_record(self) -> dict:
        """Row as stored in the games table."""
        return self.model_dump(by_alias=True)

    def __repr__(self) -> str:
        return f"<Game {self.id} ({self.status.value})>"
