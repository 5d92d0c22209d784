"""Runtime configuration for About Time."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Template library
    library_path: Path = Field(
        default=Path("./templates.json"),
        validation_alias="ABOUT_TIME_LIBRARY"
    )

    # Selection
    blur_delay_ms: int = Field(
        default=150,
        ge=0,
        validation_alias="ABOUT_TIME_BLUR_DELAY_MS"
    )

    # Rendering
    max_depth: int = Field(
        default=3,
        ge=0,
        validation_alias="ABOUT_TIME_MAX_DEPTH"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore"
    }

    def get_output_path(self, lane_id: str, suffix: str = ".html") -> Path:
        """Default export path for a lane, next to the library file."""
        safe_name = "".join(c if c.isalnum() or c in "-_" else "_" for c in lane_id)
        return self.library_path.parent / f"{safe_name}{suffix}"


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global _settings
    _settings = Settings()
    return _settings
