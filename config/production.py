import os

from .config import admin_password_hash_from_env, db_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env(default_password="")

# No default password in production: set ADMIN_PASSWORD_HASH or ADMIN_PASSWORD.
ADMIN_PASSWORD_HASH = admin_password_hash_from_env()

GEO_LOOKUP_URL = os.getenv("GEO_LOOKUP_URL", "https://ipapi.co")
GEO_LOOKUP_TIMEOUT = float(os.getenv("GEO_LOOKUP_TIMEOUT", "3"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
