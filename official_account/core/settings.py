# official_account/core/settings.py

"""
Configuration Loading Module

Purpose:
Loads SDK settings from environment variables (.env file) and an optional
configuration file (config.ini). Provides module-level constants consumed by
the API clients.

Dependencies:
- os (standard Python library)
- configparser (standard Python library)
- python-dotenv (external library)
- official_account.utils.logger

Expected Input:
- .env file in the project root or its secrets/ folder (for AppID/AppSecret).
- config.ini file in the project root, or the file named by
  OFFICIAL_ACCOUNT_CONFIG (endpoint, HTTP and logging tuning).

Expected Output:
- Constants containing configuration values.
"""

import configparser
import logging
import os
from pathlib import Path
from dotenv import load_dotenv
from official_account.utils.logger import log

# --- Determine Base Directory ---
# settings.py lives in official_account/core, the project root is two levels up.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# --- Load Environment Variables (.env) ---
env_path = BASE_DIR / '.env'
secrets_env_path = BASE_DIR / 'secrets' / '.env'

# Existing environment variables win, so tests can use monkeypatch.setenv.
if secrets_env_path.exists():
    log.debug(f"Loading environment variables from {secrets_env_path}")
    load_dotenv(dotenv_path=secrets_env_path, override=False)
elif env_path.exists():
    log.debug(f"Loading environment variables from {env_path}")
    load_dotenv(dotenv_path=env_path, override=False)
else:
    log.debug(f".env file not found at {env_path} or {secrets_env_path}. Relying on existing environment variables.")

# --- Load Configuration File (config.ini) ---
# OFFICIAL_ACCOUNT_CONFIG points at an alternative config.ini
CONFIG_FILE_PATH = Path(os.getenv('OFFICIAL_ACCOUNT_CONFIG') or BASE_DIR / 'config.ini')
config = configparser.ConfigParser()
config_loaded = False

if not CONFIG_FILE_PATH.exists():
    log.debug(f"Configuration file not found: {CONFIG_FILE_PATH}. Using defaults.")
    config = None
else:
    try:
        read_files = config.read(CONFIG_FILE_PATH, encoding='utf-8')
        if not read_files:
            log.error(f"Configuration file exists but could not be read or is empty: {CONFIG_FILE_PATH}")
            config = None
        else:
            log.debug(f"Loaded configuration from: {CONFIG_FILE_PATH}")
            config_loaded = True
    except configparser.Error as e:
        log.error(f"Error reading configuration file {CONFIG_FILE_PATH}: {e}. Using defaults.")
        config = None

# Distinguishes a missing key from a key explicitly set to an empty value
_sentinel = object()

def get_config_value(section, key, default=None, required=False):
    """
    Safely retrieves a value from the loaded configparser object.
    Raises ValueError if 'required' is True and the value cannot be found.
    """
    if config is None or not config_loaded:
        if required:
            log.error(f"Required configuration missing: section='{section}', key='{key}'. Path: {CONFIG_FILE_PATH}")
            raise ValueError(f"Missing required config: [{section}] {key} (config file not loaded, path: {CONFIG_FILE_PATH}).")
        return default

    value = config.get(section, key, fallback=_sentinel)
    if value is _sentinel:
        if required:
            log.error(f"Required configuration key not found in config file: section='{section}', key='{key}'. Path: {CONFIG_FILE_PATH}")
            raise ValueError(f"Missing required config key: [{section}] {key} in {CONFIG_FILE_PATH}")
        log.debug(f"Config key '[{section}] {key}' not found, using default: {default}")
        return default
    return value

def _as_int(raw, default: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        log.warning(f"Invalid integer setting '{raw}', using default {default}.")
        return default

def _as_float(raw, default: float) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        log.warning(f"Invalid number setting '{raw}', using default {default}.")
        return default

# --- Define Settings Constants ---

# WeChat credentials come from the environment only, never from config.ini
WECHAT_APP_ID = os.getenv('WECHAT_APP_ID')
WECHAT_APP_SECRET = os.getenv('WECHAT_APP_SECRET')
WECHAT_API_BASE_URL = get_config_value('WeChatAPI', 'BaseUrl', default='https://api.weixin.qq.com')

# HTTP transport tuning
REQUEST_TIMEOUT = _as_int(get_config_value('Http', 'Timeout', default='30'), 30)
REQUEST_RETRIES = _as_int(get_config_value('Http', 'Retries', default='3'), 3)
REQUEST_BACKOFF_FACTOR = _as_float(get_config_value('Http', 'BackoffFactor', default='0.5'), 0.5)

# Content-Type prefixes whose bodies are decoded; anything else is returned as raw bytes
textual_types_str = get_config_value('Http', 'TextualContentTypes', default='application/json,text/')
TEXTUAL_CONTENT_TYPES = tuple(
    item.strip().lower() for item in textual_types_str.split(',') if item.strip()
)

LOG_LEVEL_NAME = get_config_value('Logging', 'Level', default='INFO').upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)

# --- Validate Critical Settings ---
if not WECHAT_APP_ID:
    log.debug("WECHAT_APP_ID not found in environment variables or .env file.")

if not WECHAT_APP_SECRET:
    log.debug("WECHAT_APP_SECRET not found in environment variables or .env file.")
