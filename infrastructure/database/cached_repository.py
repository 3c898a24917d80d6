"""
Offline-first collection repository.

Remote first; successful reads and writes are mirrored into one cache slot
holding the whole collection. When the backend fails, reads come from that
slot and then from the built-in seed data, and creates are kept locally.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from config.features import features
from core.domain.errors import DataAccessError
from core.domain.models import DataSource, Fetched, Patch, Row
from infrastructure.database.supabase_client import SupabaseRestClient, eq
from core.utils.json_cache import JsonCache

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Row)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def timestamp_id() -> str:
    """Client-side id for records created while offline (epoch milliseconds)"""
    return str(int(time.time() * 1000))


class CachedCollectionRepository(Generic[M]):
    """Base for entity repositories. Subclasses set the class attributes below."""

    table: str
    order: str
    cache_key: str
    model: Type[M]
    log_tag: str = "[REPO]"

    def __init__(
        self,
        client: SupabaseRestClient,
        cache: JsonCache,
        seed_defaults: Optional[bool] = None,
        mirror_writes: Optional[bool] = None,
    ):
        self.client = client
        self.cache = cache
        self.seed_defaults = features.SEED_DEFAULTS_ENABLED if seed_defaults is None else seed_defaults
        self.mirror_writes = features.MIRROR_WRITES_TO_CACHE if mirror_writes is None else mirror_writes

    # === Conversion ===

    def _to_model(self, data: dict) -> M:
        return self.model.model_validate(data)

    def _to_models(self, rows: List[dict]) -> List[M]:
        models = []
        for row in rows:
            try:
                models.append(self._to_model(row))
            except ValidationError as e:
                logger.warning(f"{self.log_tag} Skipping malformed row {row!r}: {e.error_count()} errors")
        return models

    @staticmethod
    def _as_dict(data: Union[BaseModel, dict]) -> dict:
        if isinstance(data, Row):
            return data.to_row()
        if isinstance(data, BaseModel):
            return data.model_dump(mode="json", exclude_none=True)
        return {k: v for k, v in data.items() if v is not None}

    @staticmethod
    def _as_patch(data: Union[BaseModel, dict]) -> dict:
        if isinstance(data, Patch):
            return data.to_patch()
        if isinstance(data, BaseModel):
            return data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        return {k: v for k, v in data.items() if v is not None}

    def _default_rows(self) -> List[dict]:
        """Seed dataset for this collection"""
        return []

    # === Read ===

    async def _list(self) -> Fetched[List[M]]:
        try:
            rows = await self.client.select(self.table, order=self.order)
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error fetching {self.table}: {e}")
            return await self._list_offline(e)

        if rows:
            await self.cache.write(self.cache_key, rows)
            return Fetched(self._to_models(rows), DataSource.REMOTE)

        return await self._list_offline(None)

    async def _list_offline(self, error: Optional[DataAccessError]) -> Fetched[List[M]]:
        cached = await self.cache.read_list(self.cache_key)
        if cached:
            logger.info(f"{self.log_tag} Returning {len(cached)} {self.table} from local storage")
            return Fetched(self._to_models(cached), DataSource.CACHE, error)

        if not self.seed_defaults:
            return Fetched([], DataSource.NONE, error)

        logger.info(f"{self.log_tag} No {self.table} found, returning default data")
        defaults = self._default_rows()
        await self.cache.write(self.cache_key, defaults)
        return Fetched(self._to_models(defaults), DataSource.SEED, error)

    async def _get_by_id(self, row_id: str) -> Fetched[Optional[M]]:
        try:
            rows = await self.client.select(self.table, id=eq(row_id))
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error fetching {self.table} id={row_id}: {e}")
            return Fetched(None, DataSource.NONE, e)
        return Fetched(self._to_model(rows[0]) if rows else None, DataSource.REMOTE)

    # === Write ===

    def _prepare_create(self, payload: dict) -> dict:
        """Hook for per-entity defaults before the row is sent"""
        payload.setdefault("created_at", utc_now_iso())
        return payload

    def _local_record(self, payload: dict) -> dict:
        record = dict(payload)
        record["id"] = record.get("id") or timestamp_id()
        record.setdefault("created_at", utc_now_iso())
        return record

    def _check_create(self, payload: dict) -> None:
        """Raise ValidationError for a payload the model would reject, before anything is written"""
        self._to_model(self._local_record(payload))

    async def _create(self, payload: dict) -> Fetched[Optional[M]]:
        payload = self._prepare_create(payload)
        self._check_create(payload)
        logger.info(f"{self.log_tag} Creating {self.table} row: {payload.get('name') or payload.get('title')}")
        try:
            rows = await self.client.insert(self.table, payload)
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error creating {self.table} row: {e}")
            return await self._create_offline(payload, e)

        created = rows[0] if rows else None
        if created is None:
            return Fetched(None, DataSource.REMOTE)
        model = self._to_model(created)
        await self.cache.append(self.cache_key, created)
        return Fetched(model, DataSource.REMOTE)

    async def _create_offline(self, payload: dict, error: DataAccessError) -> Fetched[Optional[M]]:
        record = self._local_record(payload)
        model = self._to_model(record)
        if not await self.cache.append(self.cache_key, record):
            return Fetched(None, DataSource.NONE, error)
        logger.info(f"{self.log_tag} Stored {self.table} row {record['id']} locally as fallback")
        return Fetched(model, DataSource.LOCAL, error)

    async def _update(self, row_id: str, values: dict) -> Fetched[Optional[M]]:
        if not values:
            return Fetched(None, DataSource.NONE)
        try:
            rows = await self.client.update(self.table, values, id=eq(row_id))
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error updating {self.table} id={row_id}: {e}")
            return Fetched(None, DataSource.NONE, e)

        updated = rows[0] if rows else None
        if updated is not None and self.mirror_writes:
            await self._replace_cached(row_id, updated)
        return Fetched(self._to_model(updated) if updated else None, DataSource.REMOTE)

    async def _delete(self, row_id: str) -> Fetched[bool]:
        try:
            await self.client.delete(self.table, id=eq(row_id))
        except DataAccessError as e:
            logger.error(f"{self.log_tag} Error deleting {self.table} id={row_id}: {e}")
            return Fetched(False, DataSource.NONE, e)

        if self.mirror_writes:
            await self._drop_cached(row_id)
        return Fetched(True, DataSource.REMOTE)

    # === Cache slot maintenance ===

    async def _replace_cached(self, row_id: str, row: dict) -> None:
        rows = await self.cache.read_list(self.cache_key)
        if not rows:
            return
        changed = False
        for i, cached in enumerate(rows):
            if str(cached.get("id")) == str(row_id):
                rows[i] = row
                changed = True
        if changed:
            await self.cache.write(self.cache_key, rows)

    async def _drop_cached(self, row_id: str) -> None:
        rows = await self.cache.read_list(self.cache_key)
        if not rows:
            return
        kept = [r for r in rows if str(r.get("id")) != str(row_id)]
        if len(kept) != len(rows):
            await self.cache.write(self.cache_key, kept)
