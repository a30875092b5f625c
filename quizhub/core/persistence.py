"""
Write-through JSON snapshot files

Each collection lives in memory and is rewritten wholesale to disk on
every mutation. The file is a snapshot, never the source of truth for a
request.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List

from quizhub.core.errors import PersistenceFailure


logger = logging.getLogger(__name__)


class SnapshotFile:
    """JSON array file replaced atomically on each save"""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> List[Any]:
        """
        Load the stored records

        Returns:
            List of raw records, empty if the file does not exist

        Raises:
            PersistenceFailure: If the file exists but cannot be read or parsed
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceFailure(f"Cannot load {self.path.name}: {e}") from e

        if not isinstance(data, list):
            raise PersistenceFailure(f"{self.path.name} must hold a JSON array")
        return data

    def save(self, records: List[Any]) -> None:
        """
        Replace the file contents with records

        Writes to a temp file in the same directory, fsyncs, then renames over
        the target so readers never see a partial file.
        """
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"❌ Failed to write {self.path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceFailure(f"Cannot write {self.path.name}") from e
