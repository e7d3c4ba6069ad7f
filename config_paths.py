import json
import logging
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "rowdeck")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "rowdeck.log")

# default settings
PAGE_SIZE_DEFAULT = 50
POLL_INTERVAL_SECONDS_DEFAULT = None
SEARCH_FIELDS_DEFAULT = []
EMPTY_MESSAGE_DEFAULT = "No data available"
CLIPBOARD_INTERFACE_COMMAND_DEFAULT = None
LOG_LEVEL_DEFAULT = "WARNING"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def configure_logging(level=None):
    """Send log records to the config dir; the terminal belongs to curses."""
    level_name = str(level or LOG_LEVEL_DEFAULT).upper()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_rowdeck", False):
            root.removeHandler(handler)
    try:
        ensure_config_dirs()
        handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler._rowdeck = True
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.WARNING))
    return handler


def load_config():
    cfg = {
        "PAGE_SIZE": PAGE_SIZE_DEFAULT,
        "POLL_INTERVAL_SECONDS": POLL_INTERVAL_SECONDS_DEFAULT,
        "SEARCH_FIELDS": list(SEARCH_FIELDS_DEFAULT),
        "EMPTY_MESSAGE": EMPTY_MESSAGE_DEFAULT,
        "CLIPBOARD_INTERFACE_COMMAND": CLIPBOARD_INTERFACE_COMMAND_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    page_size = data.get("page_size")
    if isinstance(page_size, int) and not isinstance(page_size, bool) and page_size >= 1:
        cfg["PAGE_SIZE"] = page_size

    interval = data.get("poll_interval_seconds")
    if (
        isinstance(interval, (int, float))
        and not isinstance(interval, bool)
        and interval > 0
    ):
        cfg["POLL_INTERVAL_SECONDS"] = interval

    fields = data.get("search_fields")
    if isinstance(fields, list):
        cfg["SEARCH_FIELDS"] = [item for item in fields if isinstance(item, str)]

    empty = data.get("empty_message")
    if isinstance(empty, str) and empty.strip():
        cfg["EMPTY_MESSAGE"] = empty

    clip_cmd = data.get("clipboard_interface_command")
    if isinstance(clip_cmd, list) and clip_cmd and all(
        isinstance(item, str) for item in clip_cmd
    ):
        cfg["CLIPBOARD_INTERFACE_COMMAND"] = clip_cmd

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
