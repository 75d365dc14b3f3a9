"""Application configuration settings."""

import os
from dataclasses import dataclass, field
from datetime import time
from functools import lru_cache
from typing import Optional, Tuple


def _parse_clock(value: str) -> time:
    """Parse an HH:MM string into a time of day."""
    hours, _, minutes = value.partition(":")
    return time(int(hours), int(minutes or 0))


@dataclass
class BusinessRuleSettings:
    """Working-time rules applied to hire dates and timecards."""

    # Inclusive window for timecard start and end times
    workday_start: time = time(8, 0)
    workday_end: time = time(18, 0)

    # Shortest timecard accepted
    min_timecard_minutes: int = 60

    # datetime.weekday() values that count as weekend
    weekend_days: Tuple[int, ...] = (5, 6)


@dataclass
class Settings:
    """Main application settings."""

    # Application info
    app_name: str = "Organization Records API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = ""

    # Business rules
    business_rules: BusinessRuleSettings = field(default_factory=BusinessRuleSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            app_name=os.getenv("APP_NAME", "Organization Records API"),
            app_version=os.getenv("APP_VERSION", "1.0.0"),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            database_url=os.getenv("DATABASE_URL", ""),
            business_rules=BusinessRuleSettings(
                workday_start=_parse_clock(os.getenv("BUSINESS_DAY_START", "08:00")),
                workday_end=_parse_clock(os.getenv("BUSINESS_DAY_END", "18:00")),
                min_timecard_minutes=int(os.getenv("MIN_TIMECARD_MINUTES", "60")),
            ),
        )


# Singleton settings instance
_settings: Optional[Settings] = None


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
    get_settings.cache_clear()
