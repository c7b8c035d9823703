import json
import logging
import os
import tempfile
from pathlib import Path

from fileflow.schemas.records import UserRecord, FileRecord, ChartRecord, AdminRequestRecord
from fileflow.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)

# document key -> (table, record type)
DOCUMENT_LAYOUT = {
    "users": ("users", UserRecord),
    "files": ("files", FileRecord),
    "charts": ("charts", ChartRecord),
    "adminRequests": ("admin_requests", AdminRequestRecord),
}


class JsonStorage(MemoryStorage):
    """Memory storage persisted to a single JSON document.

    The whole document is rewritten after every committed mutation. Writers
    in other processes are not coordinated: the last write wins.
    """

    def __init__(self, path: str = "./data.json"):
        super().__init__()
        self.path = Path(path).resolve()
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise RuntimeError(f"Unable to read JSON storage at {self.path}: {e}") from e

        for key, (table, record_type) in DOCUMENT_LAYOUT.items():
            rows = document.get(key, [])
            self._tables[table] = {row["id"]: record_type.model_validate(row) for row in rows}
        logger.info("Loaded JSON storage from %s (%d users, %d files)",
                    self.path, len(self._tables["users"]), len(self._tables["files"]))

    def _changed(self) -> None:
        document = {
            key: [r.model_dump(mode="json", by_alias=True) for r in self._tables[table].values()]
            for key, (table, _) in DOCUMENT_LAYOUT.items()
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".data-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
