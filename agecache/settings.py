import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .cache import ExpiringCache
from .memory import SimpleMemoryCache


def _get(name: str, default: str) -> str:
    return os.getenv(name, default)


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


@dataclass
class Settings:
    cache_ttl_ms: int = field(default_factory=lambda: _get_int("CACHE_TTL_MS", 60000))
    cache_max_size: int = field(default_factory=lambda: _get_int("CACHE_MAX_SIZE", 1024))
    log_level: str = field(default_factory=lambda: _get("CACHE_LOG_LEVEL", "WARNING"))


def get_settings() -> Settings:
    load_dotenv()
    return Settings()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_cache(settings: Settings | None = None) -> ExpiringCache:
    settings = settings or get_settings()
    return ExpiringCache(SimpleMemoryCache(settings.cache_max_size), settings.cache_ttl_ms)
