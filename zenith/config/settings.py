from pathlib import Path
from typing import Annotated

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_PRODUCTIVE_TYPES = ["academic", "work", "study", "exercise", "rest"]
KNOWN_ACTIVITY_TYPES = {"academic", "work", "study", "exercise", "rest", "social", "personal", "other"}


def get_default_state_file() -> str:
    """Location of the persisted schedule when ZENITH_STATE_FILE is not set."""
    return str(Path.home() / ".zenith" / "state.json")


class Settings(BaseSettings):
    state_file: str = Field(
        default_factory=get_default_state_file,
        validation_alias="ZENITH_STATE_FILE",
        description="Path of the JSON file holding the schedule state",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str = Field(default="", validation_alias="LOG_FILE")
    available_hours_per_day: float = Field(
        default=16.0,
        validation_alias="AVAILABLE_HOURS_PER_DAY",
        description="Waking hours per day used as the free-time and productivity denominator",
    )
    productive_types: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_PRODUCTIVE_TYPES),
        validation_alias="PRODUCTIVE_TYPES",
        description="Activity categories counted towards the productivity score (comma-separated)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("available_hours_per_day")
    @classmethod
    def validate_available_hours(cls, value: float) -> float:
        """Clamp available hours into a single day."""
        if value <= 0 or value > 24:
            logger.warning(f"AVAILABLE_HOURS_PER_DAY must be in (0, 24], got {value}. Defaulting to 16.")
            return 16.0
        return value

    @field_validator("productive_types", mode="before")
    @classmethod
    def validate_productive_types(cls, value: str | list[str]) -> list[str]:
        """Accept a comma-separated string and drop unknown categories."""
        if isinstance(value, str):
            value = [item.strip() for item in value.split(",") if item.strip()]
        unknown = [item for item in value if item not in KNOWN_ACTIVITY_TYPES]
        if unknown:
            logger.warning(f"Ignoring unknown PRODUCTIVE_TYPES entries: {', '.join(unknown)}")
        return [item for item in value if item in KNOWN_ACTIVITY_TYPES]

    @property
    def available_hours_per_week(self) -> float:
        return self.available_hours_per_day * 7


settings = Settings()
