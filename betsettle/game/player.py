"""Player model."""
from dataclasses import dataclass


@dataclass
class Player:
    """A participant on the ledger roster.
    
    The id never changes for the life of the roster; the name is free text
    and may be edited at any time.
    """
    
    id: str
    name: str
    
    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
        )
