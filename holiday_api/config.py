"""
Application settings, read from the environment (and a local .env file).
"""
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

MONGO_URL = os.getenv("MONGO_URL", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "holiday_db")
HOLIDAYS_COLLECTION = os.getenv("HOLIDAYS_COLLECTION", "holidays")

API_PREFIX = os.getenv("API_PREFIX", "/api")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() != "false"

UPCOMING_HORIZON_MONTHS = int(os.getenv("UPCOMING_HORIZON_MONTHS", 3))

STATIC_HOLIDAYS_FILE = Path(
    os.getenv("STATIC_HOLIDAYS_FILE", str(BASE_DIR / "data" / "static_holidays.json"))
)


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


CORS_ALLOWED_ORIGINS = _split_origins(
    os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")
)
