#!/usr/bin/env python3
"""Package access to the top-level settings loader."""

from settings import (
    load_app_config,
    reload_settings,
    get_setting,
    resolve_path,
    APP_CONFIG_PATH,
    ENV_OVERRIDE,
)

__all__ = [
    "load_app_config",
    "reload_settings",
    "get_setting",
    "resolve_path",
    "APP_CONFIG_PATH",
    "ENV_OVERRIDE",
]
