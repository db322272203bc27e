"""
Create User Script for the Inventory Count application.
Creates a login with a bcrypt-hashed password in MongoDB.

Usage: python create_admin.py <username> <password> [admin|user]
"""

import sys

from auth.auth_utils import ROLES, hash_password
from common.mongo import get_users_collection


def create_user(username, password, role="admin", users_col=None):
    """
    Insert a user unless one with the same username exists.

    Returns:
        True if a user was created.
    """
    if role not in ROLES:
        raise ValueError(f"Unknown role {role!r}, expected one of {', '.join(ROLES)}")

    if users_col is None:
        users_col = get_users_collection()
    if users_col is None:
        raise RuntimeError("MongoDB not connected")

    if users_col.find_one({"username": username}):
        return False

    users_col.insert_one({
        "username": username,
        "password": hash_password(password),
        "role": role,
    })
    return True


if __name__ == "__main__":
    if len(sys.argv) not in (3, 4):
        print(__doc__)
        sys.exit(2)

    username, password = sys.argv[1], sys.argv[2]
    role = sys.argv[3] if len(sys.argv) == 4 else "admin"

    try:
        created = create_user(username, password, role)
    except (ValueError, RuntimeError) as e:
        print(f"❌ {e}")
        print("   Please check your .env file and ensure MONGO_URI is configured correctly.")
        sys.exit(1)

    if created:
        print(f"✅ User created: {username} ({role})")
    else:
        print(f"⚠️ User already exists: {username}")
