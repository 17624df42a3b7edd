from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.storage.loader import DEFAULT_DATA_DIR


class Settings(BaseSettings):
    app_name: str = "Hotel Geo Search"
    environment: str = Field("local", validation_alias="ENVIRONMENT")
    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(8080, validation_alias="PORT")
    data_dir: str = Field(str(DEFAULT_DATA_DIR), validation_alias="DATA_DIR")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    load_dotenv(".env")
    return Settings()


settings = get_settings()
