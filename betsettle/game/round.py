"""Round records and loss amount coercion."""
import math
from decimal import Decimal, InvalidOperation
from dataclasses import dataclass, field
from typing import Any


def coerce_amount(value: Any) -> int:
    """Turn raw user input into a non-negative whole amount.
    
    Anything that does not read as a finite number becomes 0, as do
    negative values. Fractions are truncated toward zero. Whole numbers
    are kept exact, however large. Strings with "_" digit separators are
    not numbers here.
    
    Args:
        value: Raw amount (int, float, numeric string, None, ...).
        
    Returns:
        A non-negative int.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value > 0 else 0
    if isinstance(value, str):
        return _coerce_text(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(number)


def _coerce_text(text: str) -> int:
    text = text.strip()
    if not text or "_" in text:
        return 0
    try:
        whole = int(text)
    except ValueError:
        pass
    else:
        return whole if whole > 0 else 0
    try:
        number = Decimal(text)
    except InvalidOperation:
        return 0
    if not number.is_finite() or number <= 0:
        return 0
    return int(number)


@dataclass(frozen=True)
class Loss:
    """Amount one player lost in a round."""
    player_id: str
    amount: int
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "playerId": self.player_id,
            "amount": self.amount,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> "Loss":
        """Restore from dictionary."""
        return cls(
            player_id=str(data["playerId"]),
            amount=coerce_amount(data.get("amount")),
        )


@dataclass(frozen=True)
class RoundRecord:
    """One game outcome: a single winner and what everyone else lost to them."""
    id: int
    winner_id: str
    losses: tuple[Loss, ...] = field(default_factory=tuple)
    
    @property
    def total(self) -> int:
        """Total won by the winner this round."""
        return sum(loss.amount for loss in self.losses)
    
    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "gameId": self.id,
            "winnerId": self.winner_id,
            "losers": [loss.to_dict() for loss in self.losses],
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> "RoundRecord":
        """Restore from dictionary.
        
        Loss lines naming the round's own winner are dropped.
        """
        winner_id = str(data["winnerId"])
        losses = (Loss.from_dict(l) for l in data.get("losers", []))
        return cls(
            id=int(data["gameId"]),
            winner_id=winner_id,
            losses=tuple(l for l in losses if l.player_id != winner_id),
        )
