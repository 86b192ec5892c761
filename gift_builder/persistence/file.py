"""File-backed persistence adapter."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from gift_builder.errors import PersistenceError
from gift_builder.persistence.base import PersistenceAdapter
from gift_builder.settings import settings

logger = logging.getLogger(__name__)


class FileAdapter(PersistenceAdapter):
    """Stores the document as ``<data_dir>/<key>.json``.

    Writes go to a temporary file in the same directory and are moved into
    place, so a crash mid-write leaves the previous save intact.

    Parameters
    ----------
    data_dir : str or Path, optional
        Directory holding the file. Defaults to ``settings.data_dir``.
    key : str, optional
        Storage key. Defaults to ``settings.storage_key``.
    """

    def __init__(
        self,
        data_dir: Optional[Union[str, Path]] = None,
        key: Optional[str] = None,
    ) -> None:
        super().__init__(key or settings.storage_key)
        self.data_dir = Path(data_dir) if data_dir is not None else settings.data_dir

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.key}.json"

    @property
    def backup_path(self) -> Path:
        return self.data_dir / f"{self.key}.json.bak"

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(
                f"Could not read {self.path}: {e}", context={"path": str(self.path)}
            ) from e

    def save(self, text: str) -> None:
        self._write(self.path, text)
        logger.debug("Saved %d bytes to %s", len(text), self.path)

    def backup(self, text: str) -> None:
        self._write(self.backup_path, text)
        logger.info("Backed up unreadable document to %s", self.backup_path)

    def _write(self, target: Path, text: str) -> None:
        tmp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{self.key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as e:
            raise PersistenceError(
                f"Could not write {target}: {e}", context={"path": str(target)}
            ) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise PersistenceError(f"Could not remove {self.path}: {e}") from e
