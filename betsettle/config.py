"""Application configuration."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Application configuration loaded from environment variables."""
    
    # Roster
    min_players: int = max(2, int(os.getenv("MIN_PLAYERS", "2")))
    default_players: int = int(os.getenv("DEFAULT_PLAYERS", "4"))
    player_name_prefix: str = os.getenv("PLAYER_NAME_PREFIX", "Player")
    
    # Storage ("memory" or "redis")
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    players_key: str = os.getenv("PLAYERS_KEY", "bettingPlayers")
    history_key: str = os.getenv("HISTORY_KEY", "bettingHistory")
    
    # Export text
    currency_suffix: str = os.getenv("CURRENCY_SUFFIX", "")
    settlement_header: str = os.getenv("SETTLEMENT_HEADER", "[Settlement]")
    settlement_footer: str = os.getenv("SETTLEMENT_FOOTER", "Thanks for playing!")
    
    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()
