"""Application settings loaded from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    app_name: str = "Radar Check"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    service_name: str = "radar-check"
    host: str = "0.0.0.0"
    port: int = 8000
    database_url: str = "sqlite:///./radar_check.db"
    database_echo: bool = False
    # Roadway and inspector printed on every report
    highway: str = "BR-040"
    inspector_name: str = "Luis Pigrucci"
    default_radar_type: str = "PER"
    default_import_speed_kmh: int = 80
    # Rows committed per import chunk
    import_batch_size: int = 450
    recent_activity_limit: int = 5
    seed_on_startup: bool = True
    seed_data_path: str = str(_PACKAGE_ROOT / "data" / "initial_radares.yml")
    notification_capacity: int = 50
    log_level: str = "INFO"
    # Records kept in memory for GET /logs
    log_buffer_size: int = 200

    model_config = SettingsConfigDict(
        env_prefix="RADARCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

__all__ = ["settings", "Settings"]
