"""Analysis store: CRUD over a single serialized blob of records.

Every write reads the whole collection, merges, and rewrites it. There is
no locking, so two writers sharing a backend can lose updates; the store
assumes a single writer.

Failures never propagate out of the store. Writes degrade to ``False`` /
``None`` and reads to an empty result, so callers treat a read failure the
same as an empty history.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from src.core.db import delete_value, get_value, set_value
from src.core.schemas import Analysis, utc_now

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "placement_prep_history"

# Record keys that may change after creation; everything else is fixed.
UPDATABLE_FIELDS = frozenset({"skillConfidence", "readinessScore", "updatedAt"})

# Errors a backend or the JSON codec may raise; all are absorbed at this boundary.
_STORE_ERRORS = (sqlite3.Error, OSError, TypeError, ValueError)


def _sort_key(analysis: Analysis) -> datetime:
    # Naive timestamps are read as local time so they order against aware ones.
    return analysis.created_at.astimezone()


class KeyValueBackend(ABC):
    """String key-value storage the store serializes into."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""


class MemoryBackend(KeyValueBackend):
    """In-process dict backend."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SqliteBackend(KeyValueBackend):
    """Backend over the ``kv_store`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, key: str) -> str | None:
        return get_value(self._conn, key)

    def set(self, key: str, value: str) -> None:
        set_value(self._conn, key, value)

    def delete(self, key: str) -> None:
        delete_value(self._conn, key)


class AnalysisStore:
    """Persistence port for Analysis records.

    Usage::

        store = AnalysisStore(SqliteBackend(init_db("data/prep.db")))
        if store.save(analysis):
            ...
        latest = store.list()[0]
        store.update(latest.id, {"readinessScore": 90})
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._backend = backend
        self._key = storage_key

    def save(self, analysis: Analysis) -> bool:
        """Prepend analysis to the collection. Returns False on failure."""
        try:
            try:
                entries = self._read_entries()
            except json.JSONDecodeError as e:
                logger.warning("Stored history is unreadable (%s) - starting a new one", e)
                entries = []
            if any(entry["id"] == analysis.id for entry in entries):
                logger.warning("Analysis '%s' already saved - refusing duplicate id", analysis.id)
                return False
            self._write_entries([analysis.to_record(), *entries])
        except _STORE_ERRORS as e:
            logger.error("Failed to save analysis '%s': %s", analysis.id, e)
            return False
        logger.debug("Saved analysis '%s'", analysis.id)
        return True

    def list(self) -> list[Analysis]:
        """Return all valid records, newest first."""
        try:
            entries = self._read_entries()
            records = [a for a in (self._parse(entry) for entry in entries) if a is not None]
            records.sort(key=_sort_key, reverse=True)
        except _STORE_ERRORS as e:
            logger.error("Failed to load history: %s", e)
            return []
        return records

    def get_by_id(self, analysis_id: str) -> Analysis | None:
        """Return the record with analysis_id, or None."""
        for analysis in self.list():
            if analysis.id == analysis_id:
                return analysis
        return None

    def update(self, analysis_id: str, fields: dict[str, Any]) -> Analysis | None:
        """Merge fields (camelCase record keys) into a record.

        Only UPDATABLE_FIELDS may be given. ``updatedAt`` is stamped with the
        current UTC time unless fields carries one. Returns the merged
        record, or None if the id is unknown, a fixed field is given, the
        merge produces an invalid record, or the write fails.
        """
        fixed = sorted(set(fields) - UPDATABLE_FIELDS)
        if fixed:
            logger.error("Rejected update for '%s': %s fixed at creation", analysis_id, fixed)
            return None
        try:
            entries = self._read_entries()
            for index, entry in enumerate(entries):
                if entry["id"] == analysis_id:
                    break
            else:
                logger.debug("update: no analysis with id '%s'", analysis_id)
                return None

            merged = {**entry, **fields}
            if "updatedAt" not in fields:
                merged["updatedAt"] = utc_now().isoformat()
            updated = Analysis.model_validate(merged)
            entries[index] = updated.to_record()
            self._write_entries(entries)
        except ValidationError as e:
            logger.error("Rejected update for '%s': %s", analysis_id, e)
            return None
        except _STORE_ERRORS as e:
            logger.error("Failed to update analysis '%s': %s", analysis_id, e)
            return None
        return updated

    def clear_all(self) -> None:
        """Remove every record."""
        try:
            self._backend.delete(self._key)
        except _STORE_ERRORS as e:
            logger.error("Failed to clear history: %s", e)
            return
        logger.info("Cleared analysis history")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read_entries(self) -> list[dict[str, Any]]:
        """Load raw entries, dropping anything without both id and createdAt.

        Raises on backend or JSON errors; public methods absorb them.
        """
        raw = self._backend.get(self._key)
        if not raw:
            return []
        parsed = json.loads(raw)
        if not isinstance(parsed, list):
            logger.warning("Stored history is not a list - ignoring it")
            return []
        entries = [
            item for item in parsed
            if isinstance(item, dict) and item.get("id") and item.get("createdAt")
        ]
        dropped = len(parsed) - len(entries)
        if dropped:
            logger.debug("Dropped %d malformed history entries", dropped)
        return entries

    def _write_entries(self, entries: list[dict[str, Any]]) -> None:
        self._backend.set(self._key, json.dumps(entries))

    @staticmethod
    def _parse(entry: dict[str, Any]) -> Analysis | None:
        try:
            return Analysis.model_validate(entry)
        except ValidationError as e:
            logger.debug("Skipping unreadable analysis '%s': %s", entry.get("id"), e)
            return None
