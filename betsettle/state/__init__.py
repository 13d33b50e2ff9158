"""State persistence module."""
from .redis_client import RedisClient
from .ledger_store import LedgerStore, MemoryStore, RedisStore, create_store

__all__ = ["RedisClient", "LedgerStore", "MemoryStore", "RedisStore", "create_store"]
