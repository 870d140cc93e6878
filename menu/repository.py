import json
import logging
from typing import Protocol

from databases import Database

from menu.catalog import Catalog
from menu.history import HISTORY_SIZE, history_from_list, history_to_list, trim
from menu.models import History


logger = logging.getLogger(__name__)


CATEGORIES_KEY = "menu-categories"
HISTORY_KEY = "menu-history"


CREATE_KEY_VALUES_TABLE = """
CREATE TABLE IF NOT EXISTS KeyValues (name VARCHAR(64) PRIMARY KEY, value TEXT)
"""


GET_VALUE = "SELECT value FROM KeyValues WHERE name = :name"


SET_VALUE = """
INSERT INTO KeyValues(name, value) VALUES (:name, :value)
ON CONFLICT(name) DO UPDATE SET value = excluded.value
"""


class StorageError(Exception):
    pass


class Store(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict backed store."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values = {} if values is None else values

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value


class DatabaseStore:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            query=CREATE_KEY_VALUES_TABLE
        )

    async def get(self, key: str) -> str | None:
        try:
            result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
                GET_VALUE, values={"name": key}
            )
        except Exception as e:
            raise StorageError(f"Could not read {key}") from e
        return None if result is None else result["value"]

    async def set(self, key: str, value: str) -> None:
        try:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                SET_VALUE, values={"name": key, "value": value}
            )
        except Exception as e:
            raise StorageError(f"Could not write {key}") from e


async def read_json(store: Store, key: str) -> object | None:
    """Decoded blob, or None when it is absent or not JSON."""
    raw = await store.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Discarding undecodable {key}.")
        return None


async def write_json(store: Store, key: str, value: object) -> None:
    await store.set(key, json.dumps(value, ensure_ascii=False))


class CatalogRepository:
    """Loads and saves the `menu-categories` blob.

    The last catalog seen stays in memory. A failed read or write is logged,
    and after a failed write the in-memory copy is what later loads return.
    """

    def __init__(self, store: Store) -> None:
        self.store = store
        self.catalog: Catalog | None = None
        self.unsaved = False

    async def load(self) -> Catalog:
        if self.unsaved and self.catalog is not None:
            return self.catalog
        try:
            data = await read_json(self.store, CATEGORIES_KEY)
        except StorageError as e:
            logger.error(repr(e))
            return Catalog() if self.catalog is None else self.catalog
        self.catalog = Catalog() if data is None else Catalog.from_dict(data)
        return self.catalog

    async def save(self, catalog: Catalog) -> bool:
        self.catalog = catalog
        try:
            await write_json(self.store, CATEGORIES_KEY, catalog.to_dict())
        except StorageError as e:
            logger.error(repr(e))
            self.unsaved = True
            return False
        self.unsaved = False
        return True


class HistoryRepository:
    """Loads and saves the `menu-history` blob, same recovery as the catalog."""

    def __init__(self, store: Store, *, size: int = HISTORY_SIZE) -> None:
        self.store = store
        self.size = size
        self.history: History | None = None
        self.unsaved = False

    async def load(self) -> History:
        if self.unsaved and self.history is not None:
            return list(self.history)
        try:
            data = await read_json(self.store, HISTORY_KEY)
        except StorageError as e:
            logger.error(repr(e))
            return [] if self.history is None else list(self.history)
        self.history = [] if data is None else history_from_list(data)
        return list(self.history)

    async def save(self, history: History) -> bool:
        self.history = trim(history, size=self.size)
        try:
            await write_json(self.store, HISTORY_KEY, history_to_list(self.history))
        except StorageError as e:
            logger.error(repr(e))
            self.unsaved = True
            return False
        self.unsaved = False
        return True
