from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import PlatformDirs

logger = logging.getLogger(__name__)

APP_NAME = "MiniDungeon"

# Environment override (useful for tests and power users)
ENV_SAVE_DIR = "MINI_DUNGEON_SAVE_DIR"


def default_save_dir() -> Path:
    """Directory where relative save names are resolved.

    ``MINI_DUNGEON_SAVE_DIR`` wins when set; otherwise a ``saves`` folder in
    the platform user data directory.
    """
    override = os.getenv(ENV_SAVE_DIR)
    if override:
        return Path(override).expanduser().resolve()
    dirs = PlatformDirs(appname=APP_NAME, appauthor=False)
    return Path(dirs.user_data_dir) / "saves"
