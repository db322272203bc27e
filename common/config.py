"""
Application configuration for the Inventory Count app.
Values come from the environment, with a .env file loaded first.
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables (override=True ensures .env wins)
load_dotenv(override=True)

logger = logging.getLogger(__name__)


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default
    if value < 0:
        logger.warning(f"Negative {name}={raw!r}, using default {default}")
        return default
    return value


MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "inventory_app").strip()
FILES_COLLECTION = os.getenv("FILES_COLLECTION", "files").strip()
USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users").strip()
DOWNLOADS_COLLECTION = os.getenv("DOWNLOADS_COLLECTION", "report_downloads").strip()

# Quiet period before an edit is written back; 0 writes on every edit
SAVE_DEBOUNCE_SECONDS = _get_float("SAVE_DEBOUNCE_SECONDS", 1.0)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()


def configure_logging():
    """Configure root logging once for the app process."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
