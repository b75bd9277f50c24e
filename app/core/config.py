import os
from dataclasses import dataclass, field
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read from the environment when created."""

    catalog_path: Path = field(
        default_factory=lambda: Path(_env_str("CATALOG_PATH", str(REPO_ROOT / "app" / "data" / "products.json")))
    )
    default_limit: int = field(default_factory=lambda: _env_int("SEARCH_DEFAULT_LIMIT", 12))
    max_limit: int = field(default_factory=lambda: _env_int("SEARCH_MAX_LIMIT", 100))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO").upper())


settings = Settings()
