"""A JSON file holding one collection of documents.

Shared by the JSON repositories. Every read-modify-write runs under a
lock and the file is replaced in one step, so readers see either the old
or the new collection, never a half-written one. I/O and decode failures
surface as StoreUnavailableError.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from shop.domain.exceptions import StoreUnavailableError


class JsonCollection:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        with self._lock, self._io("read"):
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        if not isinstance(records, list):
            raise StoreUnavailableError(
                f"Corrupt collection file {self._file_path}: expected a list"
            )
        return records

    def find(self, predicate: Callable[[dict], bool]) -> dict | None:
        for raw in self.load():
            if predicate(raw):
                return raw
        return None

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Yield the records for in-place edits and persist them on exit."""
        with self._lock:
            records = self.load()
            yield records
            self._persist(records)

    @contextmanager
    def decoding(self) -> Iterator[None]:
        """Report a malformed document as StoreUnavailableError."""
        try:
            yield
        except (KeyError, TypeError, ArithmeticError) as exc:
            raise StoreUnavailableError(
                f"Corrupt collection file {self._file_path}: bad document ({exc!r})"
            ) from exc

    # --- File helpers ---------------------------------------------------------

    def _persist(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        with self._io("write"):
            tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        with self._io("create"):
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")

    @contextmanager
    def _io(self, action: str) -> Iterator[None]:
        try:
            yield
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoreUnavailableError(
                f"Could not {action} {self._file_path}: {exc}"
            ) from exc
