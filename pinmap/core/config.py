# pinmap/core/config.py
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    # Unset -> pins live in the in-memory repository for the process lifetime
    database_url: str | None = None
    # Unset -> bundled pinmap/data/catalog.yaml
    catalog_path: str | None = None
    spatial_cell_deg: float = 0.1
    log_level: str = "INFO"
    log_format: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",  # DATABASE_URL, CATALOG_PATH ... are read as-is
        extra="ignore",
    )

    @field_validator("database_url", "catalog_path", "log_format", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("spatial_cell_deg")
    @classmethod
    def _cell_divides_globe(cls, value: float) -> float:
        if value <= 0 or value > 180:
            raise ValueError("SPATIAL_CELL_DEG must be in (0, 180]")
        cells = round(360.0 / value)
        if abs(cells * value - 360.0) > 1e-9:
            raise ValueError("SPATIAL_CELL_DEG must evenly divide 360")
        return value


def get_settings() -> Settings:
    """Read settings fresh from the environment (each app instance gets its own)."""
    return Settings()
