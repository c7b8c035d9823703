import logging
from fileflow.config import Settings
from fileflow.db.session import database_url_for, make_engine
from fileflow.storage.base import Storage
from fileflow.storage.memory import MemoryStorage
from fileflow.storage.json_file import JsonStorage
from fileflow.storage.sql import SqlStorage

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "json", "mysql", "postgres", "sqlite")

def build_storage(settings: Settings) -> Storage:
    backend = settings.storage_backend.lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown STORAGE_BACKEND '{settings.storage_backend}', expected one of {', '.join(BACKENDS)}")

    if backend == "memory":
        storage = MemoryStorage()
    elif backend == "json":
        storage = JsonStorage(settings.json_storage_path)
    else:
        storage = SqlStorage(make_engine(database_url_for(settings)))

    logger.info("Using %s storage backend", backend)
    return storage
