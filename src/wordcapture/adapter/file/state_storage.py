"""Local JSON file implementation of StateStoragePort.

Each key is one file under the data directory. Writes go to a temporary
file in the same directory which is then renamed over the target, so a
crash mid-write leaves the previous file intact.
"""

import logging
import os
import tempfile
from pathlib import Path

from wordcapture.domain.model.errors import PersistenceError

logger = logging.getLogger(__name__)

DATA_DIR = os.getenv('WORDCAPTURE_DATA_DIR', str(Path.home() / '.wordcapture'))


class FileStateStorage:
    def __init__(self, data_dir: str | Path = DATA_DIR):
        self.data_dir = Path(data_dir).expanduser()

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, payload: str) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                'w', encoding='utf-8', dir=self.data_dir,
                prefix=f".{key}.", suffix='.tmp', delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error("Failed to write state file", extra={"path": str(path), "error": str(e)})
            raise PersistenceError(f"Failed to write {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to remove {path}: {e}") from e

    def ping(self) -> bool:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.data_dir, os.W_OK)
