from pathlib import Path
from typing import Optional
import os
import json
import logging
from medianstream.utils.locate_path import get_project_root

DEBUG = os.getenv("MEDIANSTREAM_DEBUG", "0").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("MEDIANSTREAM_LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = get_project_root()
LOGS_DIR = Path(os.getenv("MEDIANSTREAM_LOGS_DIR", PROJECT_ROOT / "logs"))

with open(BASE_DIR / "config_template.json", "r") as f:
    DEFAULT_CONFIG = json.load(f)

def merge_configs(user_config: dict) -> dict:
    """Merge user config with defaults. User config overwrites defaults."""
    import copy
    merged = copy.deepcopy(DEFAULT_CONFIG)

    if not user_config:
        return merged

    for section in DEFAULT_CONFIG:
        if section in user_config:
            for key, value in user_config[section].items():
                merged[section][key] = value

    return merged

def get_log_level(name: Optional[str] = None) -> int:
    level = logging.getLevelName((name or LOG_LEVEL).upper())
    return level if isinstance(level, int) else logging.INFO
