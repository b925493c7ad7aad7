from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path

from pcbuilder.catalog.accessor import SAMPLE_CATALOG_PATH


class Settings(BaseSettings):
    app_name: str = "PC Build Engine"
    debug: bool = False
    env: str = "development"
    log_level: str = "INFO"

    # Catalog
    catalog_path: Path = SAMPLE_CATALOG_PATH

    # Presentation
    currency_label: str = "PHP"
    comparison_max_spec_rows: int | None = None  # None = every spec key
    similar_products_limit: int = 4

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "PCBUILD_"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
