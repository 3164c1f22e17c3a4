# catalog/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from pathlib import Path
from typing import List


class Settings(BaseSettings):
    ENV: str = "development"
    DATA_DIR: Path = Path("data")  # where the products CSV / XLSX file lives
    PRODUCTS_FILE: str = "products.csv"  # can be products.xlsx if you prefer Excel
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = ""  # comma-separated list of allowed origins

    # Example .env:
    # DATA_DIR=./data
    # PRODUCTS_FILE=products.xlsx
    # CORS_ORIGINS=http://localhost:3000,https://admin.example.com

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
