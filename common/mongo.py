"""
MongoDB configuration for the Inventory Count application.
Handles the database connection and collection references.

The connection is opened lazily on first use so that importing this
module never blocks on the network.
"""

from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.errors import ServerSelectionTimeoutError, ConfigurationError, PyMongoError
import os
import re
import urllib.parse
from datetime import datetime
from typing import Optional
import logging

import certifi

from common.config import (
    MONGO_DB_NAME,
    FILES_COLLECTION,
    USERS_COLLECTION,
    DOWNLOADS_COLLECTION,
)

logger = logging.getLogger(__name__)


def _get_safe_mongo_uri():
    """Get MongoDB URI from environment and percent-encode its credentials."""
    uri = os.getenv("MONGO_URI", "mongodb://localhost:27017").strip()

    # Remove quotes if they were included in .env
    if len(uri) >= 2 and uri[0] == uri[-1] and uri[0] in ("'", '"'):
        uri = uri[1:-1]

    if "://" not in uri:
        return uri

    scheme, rest = uri.split("://", 1)
    if "@" not in rest:
        return uri

    creds, host = rest.rsplit("@", 1)
    if re.search(r"%[0-9a-fA-F]{2}", creds):
        # Already encoded
        return uri

    if ":" in creds:
        user, password = creds.split(":", 1)
        creds = f"{urllib.parse.quote_plus(user)}:{urllib.parse.quote_plus(password)}"
    else:
        creds = urllib.parse.quote_plus(creds)
    return f"{scheme}://{creds}@{host}"


def mask_uri(uri: str) -> str:
    """Hide the password part of a MongoDB URI for logging."""
    return re.sub(r"(://[^:/@]+:)[^@]+@", r"\1****@", uri)


MONGO_URI = _get_safe_mongo_uri()

# Connection settings
CONNECTION_TIMEOUT_MS = 10000
SERVER_SELECTION_TIMEOUT_MS = 10000
MAX_POOL_SIZE = 50

MONGO_CONNECTED = False
client = None
db = None


def init_mongo_connection(max_retries=3):
    """Initialize MongoDB connection with retry logic."""
    global client, db, MONGO_CONNECTED

    logger.info("🔌 Attempting to connect to MongoDB...")
    logger.info(f"🔗 URI (masked): {mask_uri(MONGO_URI)}")

    use_tls = MONGO_URI.startswith("mongodb+srv://") or "tls=true" in MONGO_URI.lower()
    options = {"tlsCAFile": certifi.where()} if use_tls else {}

    for attempt in range(max_retries):
        try:
            client = MongoClient(
                MONGO_URI,
                serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
                connectTimeoutMS=CONNECTION_TIMEOUT_MS,
                maxPoolSize=MAX_POOL_SIZE,
                retryWrites=True,
                **options,
            )
            client.admin.command("ping")
            db = client[MONGO_DB_NAME]
            MONGO_CONNECTED = True
            logger.info(f"✅ MongoDB connected successfully to {MONGO_DB_NAME}")
            ensure_indexes()
            return True
        except (ServerSelectionTimeoutError, ConfigurationError) as e:
            logger.warning(f"MongoDB connection attempt {attempt + 1}/{max_retries} failed: {e}")
        except PyMongoError as e:
            logger.error(f"Unexpected MongoDB error: {e}")
            break

    logger.error(f"❌ MongoDB connection failed after {max_retries} attempts")
    client = None
    db = None
    MONGO_CONNECTED = False
    return False


def get_db():
    """Get database reference, initializing connection if needed."""
    if db is None:
        init_mongo_connection()
    return db


def get_collection(name):
    """Get a collection by name, or None when the database is unreachable."""
    database = get_db()
    if database is not None:
        return database[name]
    return None


def get_users_collection():
    return get_collection(USERS_COLLECTION)


def get_files_collection():
    return get_collection(FILES_COLLECTION)


def get_downloads_collection():
    return get_collection(DOWNLOADS_COLLECTION)


def ensure_indexes(database=None):
    """Create indexes used by login, record listing and the download log."""
    database = database if database is not None else db
    if database is None:
        return False
    try:
        database[USERS_COLLECTION].create_index([("username", ASCENDING)], unique=True)
        database[FILES_COLLECTION].create_index([("created_at", DESCENDING)])
        database[DOWNLOADS_COLLECTION].create_index([("user", ASCENDING), ("downloaded_at", DESCENDING)])
        logger.info("✅ MongoDB indexes created")
        return True
    except PyMongoError as e:
        logger.warning(f"Index creation skipped: {e}")
        return False


def log_report_download(user: str, report_name: str, filename: str, record_id: Optional[str] = None,
                        row_count: int = 0, collection=None) -> bool:
    """
    Record a report download in the download log.

    Args:
        user: Username that downloaded the report
        report_name: Human-readable report name
        filename: Downloaded filename
        record_id: Id of the count sheet the report was built from
        row_count: Number of body rows in the report
        collection: Collection to write to (defaults to the download log)

    Returns:
        True if the event was stored.
    """
    col = collection if collection is not None else get_downloads_collection()
    if col is None:
        logger.warning("MongoDB not connected, skipping download log")
        return False

    try:
        col.insert_one({
            "user": user,
            "report_name": report_name,
            "file_name": filename,
            "record_id": record_id,
            "row_count": row_count,
            "downloaded_at": datetime.now(),
        })
        logger.info(f"📥 Download logged: {report_name} ({filename})")
        return True
    except PyMongoError as e:
        logger.error(f"Download log error: {e}")
        return False


def get_connection_status():
    """Get MongoDB connection status for health checks."""
    return {
        "connected": MONGO_CONNECTED,
        "database": MONGO_DB_NAME,
        "uri_configured": bool(os.getenv("MONGO_URI")),
    }
