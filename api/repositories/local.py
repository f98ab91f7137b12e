"""
Local File Repository - File-based data access implementation

Keeps one JSON file per collection under the configured data root, cached in
memory after first read. List queries are evaluated with pandas.
Environment-agnostic: paths are configured via settings (reads from .env).
"""

import json
import logging
import secrets
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd

from music_commerce.access.query import FilterSpec, SortField
from music_commerce.resources import OWNER_FIELD, OwnerPath, unique_keys
from music_commerce.settings import get_settings
from api.repositories.base import (
    BaseRepository,
    DuplicateRecordError,
    QueryResult,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_SORT = (SortField("created_at"),)
PROTECTED_FIELDS = ("id", "created_at", "updated_at")


def new_record_id() -> str:
    """24 hex characters, same shape as the ids the API validates"""
    return secrets.token_hex(12)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class LocalFileRepository(BaseRepository):
    """Repository implementation using local file storage"""

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        unique: Optional[Mapping[str, Tuple[Tuple[str, ...], ...]]] = None
    ):
        self.settings = get_settings()
        self.data_dir = Path(data_dir) if data_dir is not None else self.settings.data_root / "collections"
        self.unique_keys = dict(unique) if unique is not None else unique_keys()
        self._cache: Dict[str, List[Dict[str, Any]]] = {}
        self._lock = threading.RLock()

        logger.info(f"LocalFileRepository initialized with data_dir: {self.data_dir}")

    def _path(self, collection: str) -> Path:
        return self.data_dir / f"{collection}.json"

    def _load(self, collection: str) -> List[Dict[str, Any]]:
        """Load a collection from its JSON file (cached after first read)"""
        if collection in self._cache:
            return self._cache[collection]

        path = self._path(collection)
        if path.exists():
            logger.info(f"Loading {collection} from {path}")
            with open(path, "r", encoding="utf-8") as f:
                records = json.load(f)
            logger.info(f"Loaded {len(records)} {collection} records")
        else:
            records = []

        self._cache[collection] = records
        return records

    def _save(self, collection: str) -> None:
        """Write a collection atomically: temp file, then replace"""
        path = self._path(collection)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._cache.get(collection, []), f, ensure_ascii=False, indent=2)
        tmp.replace(path)  # atomic replace on same filesystem

    def _index_of(self, records: List[Dict[str, Any]], record_id: str) -> Optional[int]:
        for i, record in enumerate(records):
            if record.get("id") == record_id:
                return i
        return None

    def _check_unique(
        self,
        collection: str,
        candidate: Mapping[str, Any],
        records: List[Dict[str, Any]]
    ) -> None:
        for key in self.unique_keys.get(collection, ()):
            value = tuple(candidate.get(name) for name in key)
            for record in records:
                if record.get("id") == candidate.get("id"):
                    continue
                if tuple(record.get(name) for name in key) == value:
                    raise DuplicateRecordError(collection, key)

    def get(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            records = self._load(collection)
            index = self._index_of(records, record_id)
            return dict(records[index]) if index is not None else None

    def find(self, collection: str, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
        with self._lock:
            return [
                dict(record) for record in self._load(collection)
                if all(record.get(name) == value for name, value in filters.items())
            ]

    def query(
        self,
        collection: str,
        spec: FilterSpec,
        owner_path: Optional[OwnerPath] = None
    ) -> QueryResult:
        """
        Evaluate a FilterSpec over a collection.

        Equality filters and the owner constraint are combined with AND;
        ordering defaults to created_at ascending and is stable.
        """
        with self._lock:
            records = list(self._load(collection))
            parent_ids = None
            if spec.owner_id is not None and owner_path is not None and not owner_path.is_direct:
                parent_ids = [
                    parent["id"] for parent in self._load(owner_path.via)
                    if str(parent.get(OWNER_FIELD)) == str(spec.owner_id)
                ]

        if not records:
            return QueryResult(results=[], page=spec.page, limit=spec.limit, total_pages=0, total_results=0)

        df = pd.DataFrame.from_records(records)
        mask = pd.Series(True, index=df.index)

        for name, value in spec.filters.items():
            if name not in df.columns:
                mask &= False
                continue
            mask &= df[name] == value

        if spec.owner_id is not None and owner_path is not None:
            if owner_path.field not in df.columns:
                mask &= False
            elif owner_path.is_direct:
                mask &= df[owner_path.field].astype(str) == str(spec.owner_id)
            else:
                mask &= df[owner_path.field].isin(parent_ids)

        filtered = df[mask]
        total_results = len(filtered)

        sort_keys = [key for key in (spec.sort_by or DEFAULT_SORT) if key.field in filtered.columns]
        if sort_keys and total_results:
            filtered = filtered.sort_values(
                by=[key.field for key in sort_keys],
                ascending=[not key.descending for key in sort_keys],
                kind="mergesort",
                na_position="last",
            )

        page_index = filtered.index[spec.offset:spec.offset + spec.limit]
        results = [dict(records[i]) for i in page_index]

        logger.debug(f"Query on {collection}: {total_results} matches, returning {len(results)}")
        return QueryResult(
            results=results,
            page=spec.page,
            limit=spec.limit,
            total_pages=spec.total_pages(total_results),
            total_results=total_results,
        )

    def create(self, collection: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        with self._lock:
            records = self._load(collection)
            now = _now()
            record = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
            record.update({"id": new_record_id(), "created_at": now, "updated_at": now})
            self._check_unique(collection, record, records)

            records.append(record)
            try:
                self._save(collection)
            except OSError:
                records.pop()
                raise
            logger.info(f"Created {collection} record {record['id']}")
            return dict(record)

    def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> Dict[str, Any]:
        with self._lock:
            records = self._load(collection)
            index = self._index_of(records, record_id)
            if index is None:
                raise RecordNotFoundError(f"{collection} record {record_id} not found")

            previous = records[index]
            updated = dict(previous)
            updated.update({key: value for key, value in changes.items() if key not in PROTECTED_FIELDS})
            updated["updated_at"] = _now()
            self._check_unique(collection, updated, records)

            records[index] = updated
            try:
                self._save(collection)
            except OSError:
                records[index] = previous
                raise
            logger.info(f"Updated {collection} record {record_id}")
            return dict(updated)

    def delete(self, collection: str, record_id: str) -> Dict[str, Any]:
        with self._lock:
            records = self._load(collection)
            index = self._index_of(records, record_id)
            if index is None:
                raise RecordNotFoundError(f"{collection} record {record_id} not found")

            removed = records.pop(index)
            try:
                self._save(collection)
            except OSError:
                records.insert(index, removed)
                raise
            logger.info(f"Deleted {collection} record {record_id}")
            return dict(removed)

    def clear_cache(self) -> None:
        """Clear all cached collections (useful for development/testing)"""
        logger.info("Clearing repository cache")
        with self._lock:
            self._cache = {}
