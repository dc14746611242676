from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentSettings(BaseSettings):
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    DEFAULT_COUNTRY_CODE: str = "91"
    EXPORT_DIR: str = "exports"

    RASTER_WIDTH_PX: int = 800
    RASTER_PADDING_PX: int = 20
    RASTER_SCALE: float = 2.0
    PAGE_WIDTH_MM: float = 210.0
    PAGE_HEIGHT_MM: float = 295.0

    UPI_ID: str | None = None
    UPI_PAYEE_NAME: str | None = None

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @classmethod
    def load(cls) -> "EnvironmentSettings":
        return cls()
