"""MongoDB implementation of StateStoragePort.

Each state key is one document ``{_id: key, payload: str, updated_at}``,
replaced wholesale with an upsert.
"""

from datetime import datetime, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from wordcapture.adapter.mongodb.connection import STATE_COLLECTION_NAME
from wordcapture.domain.model.errors import PersistenceError

logger = getLogger(__name__)


class MongoStateStorage:
    def __init__(self, db: Database):
        self.db = db
        self.collection = db[STATE_COLLECTION_NAME]

    def read(self, key: str) -> str | None:
        try:
            doc = self.collection.find_one({'_id': key})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to read {key}: {e}") from e
        if not doc:
            return None
        return doc.get('payload')

    def write(self, key: str, payload: str) -> None:
        try:
            self.collection.replace_one(
                {'_id': key},
                {'_id': key, 'payload': payload, 'updated_at': datetime.now(timezone.utc)},
                upsert=True,
            )
        except PyMongoError as e:
            logger.error("Failed to write state to MongoDB", extra={"key": key, "error": str(e)})
            raise PersistenceError(f"Failed to write {key}: {e}") from e

    def remove(self, key: str) -> None:
        try:
            self.collection.delete_one({'_id': key})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to remove {key}: {e}") from e

    def ping(self) -> bool:
        try:
            self.db.client.admin.command('ping')
            return True
        except PyMongoError:
            return False
