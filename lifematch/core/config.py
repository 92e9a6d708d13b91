"""Application configuration module."""
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All settings are loaded from environment variables (or a local ``.env``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Project paths
    PROJECT_ROOT: str = str(Path(__file__).parent.parent.parent)

    # Application
    VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./lifematch.db"
    SQL_DEBUG: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes
    AUTO_CREATE_TABLES: bool = True

    # Identity & access
    IDENTITY_HEADER: str = "X-Caller-Identity"
    ADMIN_IDENTITIES: List[str] = []

    # Recommendations
    MAX_RECOMMENDATIONS: int = 50
    JOB_WEIGHT_LOCATION: int = 25
    JOB_WEIGHT_SALARY: int = 30
    JOB_WEIGHT_EXPERIENCE: int = 25
    JOB_WEIGHT_PROFESSION: int = 20
    MATCH_WEIGHT_AGE: int = 35
    MATCH_WEIGHT_RELIGION: int = 25
    MATCH_WEIGHT_LOCATION: int = 20
    MATCH_WEIGHT_OCCUPATION: int = 20
    LOCATION_MISMATCH_CREDIT: float = 0.25
    EXPERIENCE_DECAY_YEARS: float = 5.0

    # Messaging
    MAX_MESSAGE_LENGTH: int = 5000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None  # JSON console logs; defaults on in production
    LOG_FILE: Optional[str] = None
    LOG_MAX_BYTES: int = 10485760  # 10MB
    LOG_BACKUP_COUNT: int = 5

    # Security
    CORS_ORIGINS: List[str] = ["*"]

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOG_DIR: Path = BASE_DIR / "logs"

    @model_validator(mode="after")
    def validate_weights(self) -> "Settings":
        """Each scoring weight group must sum to 100."""
        for name, weights in (
            ("job", self.job_weights),
            ("matrimonial", self.matrimonial_weights),
        ):
            if any(w < 0 for w in weights.values()):
                raise ValueError(f"{name} weights must be non-negative")
            if sum(weights.values()) != 100:
                raise ValueError(
                    f"{name} weights must sum to 100, got {sum(weights.values())}"
                )
        if not 0 <= self.LOCATION_MISMATCH_CREDIT <= 1:
            raise ValueError("LOCATION_MISMATCH_CREDIT must be within [0, 1]")
        if self.EXPERIENCE_DECAY_YEARS <= 0:
            raise ValueError("EXPERIENCE_DECAY_YEARS must be positive")
        return self

    @property
    def job_weights(self) -> Dict[str, int]:
        """Job match factor weights keyed by factor name."""
        return {
            "location": self.JOB_WEIGHT_LOCATION,
            "salary": self.JOB_WEIGHT_SALARY,
            "experience": self.JOB_WEIGHT_EXPERIENCE,
            "profession": self.JOB_WEIGHT_PROFESSION,
        }

    @property
    def matrimonial_weights(self) -> Dict[str, int]:
        """Matrimonial compatibility factor weights keyed by factor name."""
        return {
            "age": self.MATCH_WEIGHT_AGE,
            "religion": self.MATCH_WEIGHT_RELIGION,
            "location": self.MATCH_WEIGHT_LOCATION,
            "occupation": self.MATCH_WEIGHT_OCCUPATION,
        }

    def get_log_file(self) -> Optional[str]:
        """Get log file path if logging to file is enabled.

        Returns:
            Log file path or None
        """
        if not self.LOG_FILE:
            return None

        # Ensure log directory exists
        self.LOG_DIR.mkdir(parents=True, exist_ok=True)

        return str(self.LOG_DIR / self.LOG_FILE)

    @property
    def is_production(self) -> bool:
        """Check if running in production.

        Returns:
            True if in production
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def json_logs(self) -> bool:
        """Whether console logs are rendered as JSON."""
        if self.LOG_JSON is not None:
            return self.LOG_JSON
        return self.is_production

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.ENVIRONMENT.lower() == "test"

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")

    def get_db_pool_settings(self) -> Dict[str, int]:
        """Get database connection pool settings.

        SQLite drivers do not accept queue pool arguments, so the
        dictionary is empty for SQLite URLs.

        Returns:
            Dictionary of pool settings
        """
        if self.is_sqlite:
            return {}
        return {
            "pool_size": self.DB_POOL_SIZE,
            "max_overflow": self.DB_MAX_OVERFLOW,
            "pool_timeout": self.DB_POOL_TIMEOUT,
            "pool_recycle": self.DB_POOL_RECYCLE,
        }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
