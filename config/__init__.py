import importlib
import os
from types import ModuleType
from typing import Optional


def get_settings_module(env: Optional[str] = None) -> str:
    # APP_ENV chọn module cấu hình, mặc định là 'development'
    env = (env or os.getenv("APP_ENV", "development")).lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def load_settings(env: Optional[str] = None) -> ModuleType:
    return importlib.import_module(get_settings_module(env))
