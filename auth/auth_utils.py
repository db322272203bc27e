import logging

import bcrypt
from pymongo.errors import PyMongoError

from common.mongo import get_users_collection

logger = logging.getLogger(__name__)

ROLES = ("admin", "user")


def hash_password(password):
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt())


def verify_password(password, hashed):
    """Verify a password against its hash."""
    if isinstance(hashed, str):
        hashed = hashed.encode()
    try:
        return bcrypt.checkpw(password.encode(), hashed)
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def authenticate_user(username, password, users_col=None):
    """
    Authenticate user with username and password.

    Returns:
        User document if authenticated, None otherwise.
        Returns None if MongoDB is not connected.
    """
    if users_col is None:
        users_col = get_users_collection()

    if users_col is None:
        logger.error("Users collection unavailable, cannot authenticate")
        return None

    try:
        user = users_col.find_one({"username": username})
    except PyMongoError as e:
        logger.error(f"Authentication error: {e}")
        return None

    if not user or not user.get("password"):
        return None
    if verify_password(password, user["password"]):
        return user
    return None
