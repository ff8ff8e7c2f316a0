from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True, slots=True)
class SessionConfig:
    duration_s: int = 60
    feedback_pause_s: float = 0.5
    # Reflex keeps its fast pace with a shorter pause.
    reflex_feedback_pause_s: float = 0.25
    memorize_longest_s: float = 2.5
    memorize_shortest_s: float = 0.8
    start_difficulty: int = 1

    def __post_init__(self) -> None:
        if self.duration_s <= 0:
            raise ValueError("duration_s must be > 0")
        if self.feedback_pause_s < 0 or self.reflex_feedback_pause_s < 0:
            raise ValueError("feedback pauses must be >= 0")
        if not (0 < self.memorize_shortest_s <= self.memorize_longest_s):
            raise ValueError("memorize window must satisfy 0 < shortest <= longest")
        if not (1 <= self.start_difficulty <= 10):
            raise ValueError("start_difficulty must be in [1, 10]")


class Settings(BaseSettings):
    """Host settings read from NEUROPRIME_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NEUROPRIME_",
        case_sensitive=False,
        extra="ignore",
    )

    db_path: Path | None = Field(
        default=None,
        description="Stats database file; defaults to ~/.neuroprime_trainer/stats.sqlite3",
    )
    log_level: str = Field(default="INFO", description="loguru level for the stderr sink")

    def resolved_db_path(self) -> Path:
        if self.db_path is not None and str(self.db_path).strip():
            return Path(self.db_path).expanduser()
        return Path.home() / ".neuroprime_trainer" / "stats.sqlite3"

    def resolved_log_level(self) -> str:
        return self.log_level.strip().upper() or "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def default_db_path() -> Path:
    return get_settings().resolved_db_path()


def log_level() -> str:
    return get_settings().resolved_log_level()
