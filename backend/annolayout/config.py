"""Application settings from environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from annolayout.services.layout_config import LayoutConfig


class Settings(BaseSettings):
    """Application configuration."""

    app_name: str = "AnnoLayout"
    version: str = "0.1.0"
    debug: bool = True
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Auto-layout tuning (read once at startup)
    layout_min_distance: float = 10
    layout_max_iterations: int = Field(default=50, ge=1)
    layout_step_size: int = Field(default=5, gt=0)  # px between edge candidates
    layout_margin_from_bounds: float = Field(default=15, ge=0)
    layout_max_edge_offset: int = Field(default=100, ge=0)
    layout_default_placement_margin: float = Field(default=10, ge=0)

    # Largest preview image side in px
    preview_max_size: int = Field(default=4096, gt=0)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def layout_config(self) -> LayoutConfig:
        """Frozen resolver config built from the layout_* settings."""
        return LayoutConfig(
            min_distance=self.layout_min_distance,
            max_iterations=self.layout_max_iterations,
            step_size=self.layout_step_size,
            margin_from_bounds=self.layout_margin_from_bounds,
            max_edge_offset=self.layout_max_edge_offset,
            default_placement_margin=self.layout_default_placement_margin,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
