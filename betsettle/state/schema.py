"""Pydantic schemas for persisted roster and round history."""
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from betsettle.errors import StorageError
from betsettle.game.player import Player
from betsettle.game.round import RoundRecord, coerce_amount


class PlayerEntry(BaseModel):
    """Stored player."""
    id: str
    name: str = ""


class LossEntry(BaseModel):
    """Stored loss line of a round."""
    playerId: str
    amount: int = 0
    
    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_field(cls, value: Any) -> int:
        return coerce_amount(value)


class RoundEntry(BaseModel):
    """Stored round."""
    gameId: int
    winnerId: str
    losers: list[LossEntry] = Field(default_factory=list)


class PlayerList(BaseModel):
    items: list[PlayerEntry]


class RoundList(BaseModel):
    items: list[RoundEntry]


def parse_players(raw: Any) -> list[Player]:
    """Validate a stored roster.
    
    Args:
        raw: Deserialized JSON value from storage.
        
    Returns:
        Players in stored order.
        
    Raises:
        StorageError: If the value does not look like a roster.
    """
    try:
        entries = PlayerList(items=raw).items
    except ValidationError as e:
        raise StorageError(f"Invalid stored roster: {e}") from e
    return [Player.from_dict(e.model_dump()) for e in entries]


def parse_history(raw: Any) -> list[RoundRecord]:
    """Validate a stored round log (newest first).
    
    Loss lines naming the round's own winner are dropped.
    
    Raises:
        StorageError: If the value does not look like a round log.
    """
    try:
        entries = RoundList(items=raw).items
    except ValidationError as e:
        raise StorageError(f"Invalid stored history: {e}") from e
    return [RoundRecord.from_dict(e.model_dump()) for e in entries]
