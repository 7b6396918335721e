import os

from .config import admin_password_hash_from_env, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

ADMIN_PASSWORD_HASH = admin_password_hash_from_env(default_password="admin123")

# Tests never call out to the network.
GEO_LOOKUP_URL = None
GEO_LOOKUP_TIMEOUT = 1.0

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
