import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.clock import SystemClock
from src.adapters.sqlite.repos import SQLitePostRepo, SQLiteUserRepo
from src.domain.policy import PolicyEngine
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("REVIEWS_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "reviews.db")
        self.db_timeout = float(os.environ.get("REVIEWS_DB_TIMEOUT", "5"))
        self.rules_path = Path(os.environ.get("REVIEWS_RULES_PATH", self.base_dir / "rules.yaml"))
        self.migrations_dir = self.base_dir / "migrations"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _load_rules_cached(settings.rules_path)


@lru_cache
def _load_rules_cached(path: Path) -> Rules:
    return load_rules(path)


# --- Time ---
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# --- Repos ---
def get_post_repo(
    settings: Settings = Depends(get_settings),
    clock: SystemClock = Depends(get_clock),
) -> SQLitePostRepo:
    return SQLitePostRepo(settings.db_path, clock=clock, timeout=settings.db_timeout)


def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path, timeout=settings.db_timeout)


# --- Services ---
def get_policy(rules: Rules = Depends(get_rules)) -> PolicyEngine:
    return PolicyEngine(rules)
