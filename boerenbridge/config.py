# boerenbridge/config.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from a .env file if present.
load_dotenv()

DATA_DIR_ENV = "BOERENBRIDGE_DATA_DIR"
LOG_LEVEL_ENV = "BOERENBRIDGE_LOG_LEVEL"

# Storage key of the saved game; also the snapshot's file name.
STORAGE_KEY = "boerenbridge_game_state"

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def data_dir() -> Path:
    """Directory for saved games and exports, overridable via the environment."""
    configured = os.getenv(DATA_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_DATA_DIR


def resolve_data_path(path_like: str | Path) -> Path:
    """
    Map a save or export location onto the filesystem.

    `~` is expanded and absolute paths are kept. A relative path such as
    "exports/game.csv" lands under data_dir(). The parent directory of the
    result is created either way.
    """
    path = Path(path_like).expanduser()
    if not path.is_absolute():
        path = data_dir() / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def default_save_path() -> Path:
    return resolve_data_path(f"{STORAGE_KEY}.json")


def configure_logging(level: Optional[str] = None) -> None:
    """Set up root logging; `level` falls back to BOERENBRIDGE_LOG_LEVEL, then INFO."""
    level_name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
