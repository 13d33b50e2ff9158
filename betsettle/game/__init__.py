"""Roster and round models."""
from .player import Player
from .round import Loss, RoundRecord, coerce_amount

__all__ = [
    "Player",
    "Loss",
    "RoundRecord",
    "coerce_amount",
]
