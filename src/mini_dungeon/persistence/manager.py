from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from ..errors import SaveError, SaveNotFoundError, SaveWriteError
from .codec import decode, encode
from .models import SaveRecord
from .paths import default_save_dir

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class SaveManager:
    """Reads and writes save records as JSON files.

    Relative names resolve against ``root`` (default: ``default_save_dir()``);
    absolute paths are used as given. Writes are atomic: either the old file
    remains or the new one fully replaces it.
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path:
        # Resolved lazily so env overrides set after construction still apply.
        return self._root if self._root is not None else default_save_dir()

    def resolve(self, path: PathLike) -> Path:
        p = Path(path).expanduser()
        return p if p.is_absolute() else self.root / p

    def save(self, record: SaveRecord, path: PathLike) -> Path:
        target = self.resolve(path)
        data = encode(record).encode("utf-8")
        try:
            _atomic_write_bytes(target, data)
        except OSError as e:
            raise SaveWriteError(f"Could not write {target}: {e}") from e
        logger.info("Saved game to %s (%d bytes)", target, len(data))
        return target

    def load(self, path: PathLike) -> SaveRecord:
        target = self.resolve(path)
        if not target.is_file():
            raise SaveNotFoundError(f"Save file not found at {target}")
        try:
            text = target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SaveError(f"Could not read {target}: {e}") from e
        record = decode(text)
        logger.info("Loaded save record from %s", target)
        return record


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=path.name, dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            try:
                os.remove(tmp_name)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)
