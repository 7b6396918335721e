"""Settings selection.

``APP_SETTINGS_MODULE`` names a settings module outright; otherwise ``APP_ENV``
picks one of ``config.development`` / ``config.testing`` / ``config.production``.
"""

import importlib
import os
from types import ModuleType

_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    explicit = os.getenv("APP_SETTINGS_MODULE")
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _BY_ENV.get(env, "config.development")


def load_settings() -> ModuleType:
    return importlib.import_module(get_settings_module())
