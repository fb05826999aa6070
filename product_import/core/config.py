# product_import/core/config.py
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Product Import"

    # Database Settings
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = "root"
    MYSQL_HOST: str = "mysql-service"
    MYSQL_PORT: int = 3306
    MYSQL_DATABASE: str = "magento"
    DATABASE_URL: Optional[str] = None  # overrides the MYSQL_* settings
    TABLE_PREFIX: str = ""

    # Category Import Settings
    CATEGORY_URL_SUFFIX: str = ".html"  # used when core_config_data has no value
    CATEGORY_NAME_PATH_SEPARATOR: str = "/"
    AUTO_CREATE_CATEGORIES: bool = True

    # Logging / Telemetry Settings
    LOG_LEVEL: str = "INFO"
    OTEL_SERVICE_NAME: str = "product-import"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    INSTRUMENT_SQLALCHEMY: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}"
            f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DATABASE}?charset=utf8mb4"
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
