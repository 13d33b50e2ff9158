"""Round-by-round betting ledger with debt settlement."""
from .errors import (
    LedgerError,
    InvariantViolation,
    InvalidReference,
    UnbalancedLedger,
    StorageError,
)
from .game import Player, Loss, RoundRecord
from .admin import Ledger, Transfer, settle

__all__ = [
    "LedgerError",
    "InvariantViolation",
    "InvalidReference",
    "UnbalancedLedger",
    "StorageError",
    "Player",
    "Loss",
    "RoundRecord",
    "Ledger",
    "Transfer",
    "settle",
]
