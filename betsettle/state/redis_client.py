"""Redis client wrapper."""
from __future__ import annotations
import json
from typing import Any, Optional
from redis import Redis, from_url

from betsettle.config import config
from betsettle.utils.logger import get_logger

logger = get_logger(__name__)


class RedisClient:
    """Redis client wrapper with JSON serialization."""
    
    _instance: Optional["RedisClient"] = None
    _redis: Optional[Redis] = None
    
    def __new__(cls) -> "RedisClient":
        """Singleton pattern for Redis client."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def connect(self, url: Optional[str] = None) -> None:
        """Connect to Redis."""
        if self._redis is None:
            url = url or config.redis_url
            self._redis = from_url(
                url,
                encoding="utf-8",
                decode_responses=True
            )
            logger.info(f"Connected to Redis at {url}")
    
    def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self._redis:
            self._redis.close()
            self._redis = None
            logger.info("Disconnected from Redis")
    
    @property
    def redis(self) -> Redis:
        """Get Redis connection, raise if not connected."""
        if self._redis is None:
            raise RuntimeError("Redis not connected. Call connect() first.")
        return self._redis
    
    def get(self, key: str) -> Optional[str]:
        """Get a string value."""
        return self.redis.get(key)
    
    def set(self, key: str, value: str) -> None:
        """Set a string value."""
        self.redis.set(key, value)
    
    def delete(self, *keys: str) -> None:
        """Delete one or more keys."""
        self.redis.delete(*keys)
    
    def get_json(self, key: str) -> Optional[Any]:
        """Get and deserialize JSON value."""
        value = self.get(key)
        if value is None:
            return None
        return json.loads(value)
    
    def set_json(self, key: str, value: Any) -> None:
        """Serialize and set JSON value."""
        self.set(key, json.dumps(value, ensure_ascii=False))


# Global instance
redis_client = RedisClient()
