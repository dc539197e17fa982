import logging

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Optional

class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False

    # Badge document store
    BADGE_STORE: str = "memory"  # memory | sql
    DATABASE_URL: Optional[str] = None
    TEST_DATABASE_URL: Optional[str] = None

    # Day-scoped recommendation cache
    DAY_CACHE_STORE: str = "memory"  # memory | redis
    REDIS_URL: str = "redis://localhost:6379"

    # Open per-user sessions kept in memory
    SESSION_CACHE_SIZE: int = 1024

    # Remote recommendation service
    RECOMMENDATIONS_API_URL: str = "http://localhost:8080"
    RECOMMENDATIONS_TIMEOUT_SECONDS: float = 20.0

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
settings = Settings()


def validate_config(strict: Optional[bool] = None, settings_obj: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate required configuration.

    In strict mode raise RuntimeError; otherwise emit warnings only.
    Only the keys needed by the selected stores are required.
    """
    cfg = settings_obj or settings
    log = logger or logging.getLogger("taste")
    strict_mode = strict if strict is not None else getattr(cfg, "CONFIG_STRICT", False)

    required_keys = ["RECOMMENDATIONS_API_URL"]
    if cfg.BADGE_STORE == "sql":
        required_keys.append("DATABASE_URL")
    if cfg.DAY_CACHE_STORE == "redis":
        required_keys.append("REDIS_URL")

    problems = [key for key in required_keys if not getattr(cfg, key, None)]
    if cfg.BADGE_STORE not in ("memory", "sql"):
        problems.append(f"BADGE_STORE={cfg.BADGE_STORE!r}")
    if cfg.DAY_CACHE_STORE not in ("memory", "redis"):
        problems.append(f"DAY_CACHE_STORE={cfg.DAY_CACHE_STORE!r}")

    if problems:
        message = f"Missing or invalid configuration: {', '.join(problems)}"
        if strict_mode:
            raise RuntimeError(message)
        log.warning(message)

    return True
