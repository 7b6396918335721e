"""Helpers shared by the per-environment settings modules."""

import os

from werkzeug.security import generate_password_hash


def db_config_from_env(*, default_password: str) -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "timeclock_db"),
        "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
    }


def admin_password_hash_from_env(*, default_password: str = "") -> str:
    """ADMIN_PASSWORD_HASH wins; otherwise hash ADMIN_PASSWORD (or the default)."""

    explicit = os.getenv("ADMIN_PASSWORD_HASH")
    if explicit:
        return explicit
    password = os.getenv("ADMIN_PASSWORD", default_password)
    if not password:
        # No usable admin password configured: every login attempt fails.
        return "!"
    return generate_password_hash(password)
