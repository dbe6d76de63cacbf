"""Read-only in-memory collection of user records backed by an XML dataset."""

from __future__ import annotations

import threading
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from usersearch.domain.models import UserRecord
from usersearch.logging import logger
from usersearch.services.exceptions import RecordStoreError


def _parse_row(row: ET.Element) -> UserRecord:
    def text(tag: str) -> str:
        return row.findtext(tag) or ""

    return UserRecord(
        id=int(text("id")),
        name=text("first_name") + text("last_name"),
        age=int(text("age")),
        about=text("about"),
        gender=text("gender"),
    )


def parse_dataset(source: str | bytes) -> tuple[UserRecord, ...]:
    """Decode a ``<root><row>...</row></root>`` document into records."""

    try:
        root = ET.fromstring(source)
        return tuple(_parse_row(row) for row in root.iter("row"))
    except (ET.ParseError, ValueError, ValidationError) as exc:
        raise RecordStoreError(f"Cannot decode dataset: {exc}") from exc


class RecordStore:
    """Loads the dataset once and serves it unchanged for the process lifetime.

    A failed load is not cached: the next call to :meth:`records` tries again.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._records: tuple[UserRecord, ...] | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_records(cls, records: Sequence[UserRecord]) -> "RecordStore":
        store = cls(path="<memory>")
        store._records = tuple(records)
        return store

    @property
    def loaded(self) -> bool:
        return self._records is not None

    def records(self) -> tuple[UserRecord, ...]:
        if self._records is not None:
            return self._records
        with self._lock:
            if self._records is None:
                self._records = self._load()
        return self._records

    def _load(self) -> tuple[UserRecord, ...]:
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise RecordStoreError(f"Cannot read dataset {self.path}: {exc}") from exc
        records = parse_dataset(raw)
        logger.info("record_store_loaded", path=str(self.path), records=len(records))
        return records


__all__ = ["RecordStore", "parse_dataset"]
