"""Configuration loaded from environment variables and an optional .env file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the CLI and HTTP boundary."""

    database_url: str
    auth_tokens_file: Path
    # Seconds a single store round trip may take before it is abandoned
    store_timeout: float = 5.0
    # Conditional-write attempts per stock adjustment
    max_write_attempts: int = 3
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> Settings:
        """Build settings from the environment.

        Raises:
            ValueError: If a numeric variable cannot be parsed or a value
                is out of range.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        try:
            settings = cls(
                database_url=os.getenv(
                    "DATABASE_URL", f"sqlite:///{_DATA_DIR / 'sweetshop.db'}"
                ),
                auth_tokens_file=Path(
                    os.getenv("AUTH_TOKENS_FILE", str(_DATA_DIR / "tokens.json"))
                ),
                store_timeout=float(os.getenv("STORE_TIMEOUT", "5")),
                max_write_attempts=int(os.getenv("MAX_WRITE_ATTEMPTS", "3")),
                log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            )
        except ValueError as exc:
            raise ValueError(f"Invalid configuration value: {exc}") from exc

        settings.validate()
        return settings

    def validate(self) -> bool:
        if not self.database_url:
            raise ValueError("DATABASE_URL must not be empty")
        if self.store_timeout <= 0:
            raise ValueError("STORE_TIMEOUT must be positive")
        if self.max_write_attempts < 1:
            raise ValueError("MAX_WRITE_ATTEMPTS must be at least 1")
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return True
