from .codec import RestoredGame, build_record, decode, encode, restore
from .manager import SaveManager
from .models import SCHEMA_VERSION, SaveRecord
from .paths import ENV_SAVE_DIR, default_save_dir

__all__ = [
    "ENV_SAVE_DIR",
    "RestoredGame",
    "SCHEMA_VERSION",
    "SaveManager",
    "SaveRecord",
    "build_record",
    "decode",
    "default_save_dir",
    "encode",
    "restore",
]
