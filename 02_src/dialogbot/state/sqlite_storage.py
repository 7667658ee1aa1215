"""botbuilder Storage over the application's SQLite state table."""

from typing import Dict, List

from botbuilder.core import Storage
from jsonpickle.pickler import Pickler
from jsonpickle.unpickler import Unpickler

from ..logging_config import get_logger
from ..storage import IStorage

logger = get_logger(__name__)


class SqliteStateStorage(Storage):
    """Persists conversation and user state documents through IStorage.

    Values are flattened with jsonpickle, the encoding botbuilder's own storage
    providers use, so records come back as the classes they were saved as.
    Writes replace the stored document (last writer wins).
    """

    def __init__(self, storage: IStorage):
        if storage is None:
            raise ValueError("storage is required")
        self._storage = storage

    async def read(self, keys: List[str]) -> Dict[str, object]:
        if not keys:
            return {}

        documents = await self._storage.read(list(keys))
        return {key: Unpickler().restore(document) for key, document in documents.items()}

    async def write(self, changes: Dict[str, object]):
        if not changes:
            return

        await self._storage.write(
            {key: Pickler().flatten(value) for key, value in changes.items()}
        )
        logger.debug("Saved state %s", list(changes))

    async def delete(self, keys: List[str]):
        if not keys:
            return

        await self._storage.delete(list(keys))
