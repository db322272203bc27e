"""
Database Initialization Script for the Inventory Count app.
Creates the users, files and report_downloads collections with their indexes.
"""

import logging

from common.config import configure_logging
from common.mongo import ensure_indexes, get_connection_status, get_db, mask_uri, MONGO_URI, MONGO_DB_NAME

logger = logging.getLogger(__name__)


def initialize_database():
    """Connect and create indexes. Returns True on success."""
    logger.info(f"🚀 Initializing Database: {MONGO_DB_NAME} at {mask_uri(MONGO_URI)}")

    database = get_db()
    if database is None:
        logger.error("❌ Initialization failed: MongoDB not reachable")
        return False

    if not ensure_indexes(database):
        return False

    logger.info("🏆 Database structure initialized successfully!")
    logger.info(f"Status: {get_connection_status()}")
    return True


if __name__ == "__main__":
    configure_logging()
    if initialize_database():
        print("\nSUCCESS: Your MongoDB database is now ready.")
    else:
        print("\nFAILURE: Could not initialize database. Check your MONGO_URI in .env.")
