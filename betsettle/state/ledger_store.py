"""Key-value persistence for the ledger roster and round log."""
import copy
from typing import Any, Optional, Protocol

from redis.exceptions import RedisError

from betsettle.config import config
from betsettle.errors import StorageError
from betsettle.state.redis_client import redis_client
from betsettle.utils.logger import get_logger

logger = get_logger(__name__)


class LedgerStore(Protocol):
    """What the ledger needs from a storage backend."""
    
    def load(self, key: str) -> Optional[Any]:
        ...
    
    def save(self, key: str, value: Any) -> None:
        ...
    
    def clear(self) -> None:
        ...


class MemoryStore:
    """In-process store. Values are deep-copied in and out."""
    
    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, Any] = copy.deepcopy(initial or {})
    
    def load(self, key: str) -> Optional[Any]:
        """Get a stored value, None if missing."""
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])
    
    def save(self, key: str, value: Any) -> None:
        """Store a value."""
        self._data[key] = copy.deepcopy(value)
        logger.debug(f"Saved {key} to memory")
    
    def clear(self) -> None:
        """Drop everything."""
        self._data.clear()


class RedisStore:
    """Stores each key as a JSON string in Redis."""
    
    def __init__(self, namespace: str = "betsettle"):
        self.namespace = namespace
    
    def _key(self, key: str) -> str:
        """Get Redis key for a ledger key."""
        return f"{self.namespace}:{key}"
    
    def load(self, key: str) -> Optional[Any]:
        """Load and decode a JSON value.
        
        Raises:
            StorageError: On connection or decode failure.
        """
        try:
            return redis_client.get_json(self._key(key))
        except (RedisError, ValueError) as e:
            raise StorageError(f"Failed to load {key}: {e}") from e
    
    def save(self, key: str, value: Any) -> None:
        """Encode and store a JSON value.
        
        Raises:
            StorageError: On connection failure.
        """
        try:
            redis_client.set_json(self._key(key), value)
        except RedisError as e:
            raise StorageError(f"Failed to save {key}: {e}") from e
        logger.debug(f"Saved {key} to Redis")
    
    def clear(self) -> None:
        """Delete the ledger keys."""
        try:
            redis_client.delete(self._key(config.players_key), self._key(config.history_key))
        except RedisError as e:
            raise StorageError(f"Failed to clear ledger keys: {e}") from e
        logger.info("Cleared ledger keys in Redis")

    def close(self) -> None:
        """Release the Redis connection."""
        redis_client.disconnect()


def create_store(backend: Optional[str] = None) -> LedgerStore:
    """Build the configured storage backend.
    
    Args:
        backend: "memory" or "redis"; defaults to config.storage_backend.
        
    Returns:
        A store instance. Redis is connected before returning.
        
    Raises:
        ValueError: If the backend name is unknown.
    """
    backend = (backend or config.storage_backend).lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "redis":
        redis_client.connect()
        return RedisStore()
    raise ValueError(f"Unknown storage backend: {backend}")
