import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CATALOG_URL = "https://www.googleapis.com/books/v1/volumes"


@dataclass
class Settings:
    # Catalog API settings
    catalog_url: str = os.getenv("MACREADER_CATALOG_URL", DEFAULT_CATALOG_URL)

    # Database settings
    db_file: str = os.getenv("MACREADER_DB_FILE", "macreader.db")

    # Logging settings
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Application settings
    app_name: str = os.getenv("APP_NAME", "MacReader")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")


settings = Settings()
