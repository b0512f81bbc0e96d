from functools import lru_cache
from typing import Literal, Optional

from jigsaw_shapes import JIGSAW_PRESETS
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Puzzle session settings configuration."""

    # Board settings
    BOARD_WIDTH: float = Field(default=720, gt=0)
    BOARD_HEIGHT: float = Field(default=720, gt=0)
    SNAP_DISTANCE: float = Field(default=28, ge=0)

    # Puzzle settings
    DIFFICULTY: Literal["basic", "intermediate", "advanced"] = "basic"
    # Unset means shapes use the default seed and the tray is shuffled freshly
    SEED: Optional[str] = "jigsaw-seed"
    PRESET: str = "soft_realistic"

    # Apply drag moves once per frame instead of on every pointer event
    COALESCE_DRAG_MOVES: bool = True

    # Handed to the renderer untouched
    IMAGE_SOURCE: str = "/assets/puzzle.jpg"

    @field_validator("PRESET")
    @classmethod
    def validate_preset(cls, value: str) -> str:
        """Reject presets the shape generator does not know."""
        if value not in JIGSAW_PRESETS:
            raise ValueError(f"PRESET must be one of {sorted(JIGSAW_PRESETS)}")
        return value

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_prefix="JIGSAW_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Create instance
settings = get_settings()
