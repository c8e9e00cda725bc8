# -*- coding: utf-8 -*-
"""Key-value storage for sticker events.

Events live in a flat key-value namespace under keys prefixed ``event:``.
Listing is a prefix scan; there are no indexes and no transactions.
"""
from __future__ import annotations

import json
import os
import random
import string
import time
import typing as t
from dataclasses import asdict
from pathlib import Path

from .models import Event


EVENT_PREFIX = "event:"

_ID_ALPHABET = string.digits + string.ascii_lowercase


class StoreError(Exception):
    """Raised when the underlying store cannot be read or written."""


class KVStore:
    """Minimal key-value interface used by the event service."""

    def get(self, key: str) -> t.Optional[t.Any]:
        raise NotImplementedError

    def set(self, key: str, value: t.Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def get_by_prefix(self, prefix: str) -> list[t.Any]:
        raise NotImplementedError


class MemoryKVStore(KVStore):
    """Dict-backed store. Iteration order is insertion order."""

    def __init__(self) -> None:
        self._data: dict[str, t.Any] = {}

    def get(self, key: str) -> t.Optional[t.Any]:
        return self._data.get(key)

    def set(self, key: str, value: t.Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def get_by_prefix(self, prefix: str) -> list[t.Any]:
        return [value for key, value in self._data.items() if key.startswith(prefix)]


class JsonFileKVStore(KVStore):
    """Store the whole namespace in a single JSON file.

    The file is re-read on every operation and rewritten on every mutation
    through a temporary file, so a crash mid-write leaves the previous
    contents intact.
    """

    def __init__(self, path: t.Union[str, Path]) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, t.Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Error reading store file {self.path}: {e}")
        if not isinstance(data, dict):
            raise StoreError(f"Store file {self.path} does not contain a JSON object")
        return data

    def _save(self, data: dict[str, t.Any]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreError(f"Error writing store file {self.path}: {e}")

    def get(self, key: str) -> t.Optional[t.Any]:
        return self._load().get(key)

    def set(self, key: str, value: t.Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def get_by_prefix(self, prefix: str) -> list[t.Any]:
        return [value for key, value in self._load().items() if key.startswith(prefix)]


def open_store(path: t.Optional[str] = None) -> KVStore:
    """Open a JSON file store at ``path``, or an in-memory store if no path is given."""
    if not path:
        return MemoryKVStore()
    return JsonFileKVStore(path)


def event_key(event_id: str) -> str:
    return f"{EVENT_PREFIX}{event_id}"


def new_event_id() -> str:
    """Generate an id from the current epoch millis and nine random base-36 characters."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{int(time.time() * 1000)}-{suffix}"


def list_events(store: KVStore) -> list[Event]:
    """Return every stored event in store iteration order."""
    return [Event.from_dict(record) for record in store.get_by_prefix(EVENT_PREFIX)]


def save_event(store: KVStore, event: Event) -> None:
    """Write ``event`` under its key, replacing whatever was there."""
    store.set(event_key(event.id), asdict(event))


def remove_event(store: KVStore, event_id: str) -> None:
    """Delete the event with ``event_id``. Missing ids are ignored."""
    store.delete(event_key(event_id))
