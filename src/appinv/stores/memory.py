# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""In-memory configuration store backed by a mapping or a JSON snapshot."""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast, get_args

from appinv.store import (
    NamedValue,
    StoreEnumerationError,
    StoreOpenError,
    ValueKind,
)

logger = logging.getLogger(__name__)

ROOT_NAME = "<root>"


@dataclass(frozen=True)
class MemoryHandle:
    """Represent one open root or child of an in-memory store."""

    handle_id: int
    name: str


class InMemoryStore:
    """Serve child entries from memory.

    Child names are enumerated in mapping insertion order.
    """

    def __init__(
        self,
        entries: Mapping[str, list[NamedValue]],
        unreadable: Iterable[str] = (),
        fail_after: int | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            entries: Child entry name to the values it exposes.
            unreadable: Child names that fail to open.
            fail_after: Make listing the root children fail after this many
                names have been yielded.
        """
        self._entries = dict(entries)
        self._unreadable = set(unreadable)
        self._fail_after = fail_after
        self._next_handle_id = 1
        self.open_handles: dict[int, MemoryHandle] = {}

    @classmethod
    def from_snapshot(cls, path: Path) -> "InMemoryStore":
        """Load a store from a JSON snapshot file.

        The snapshot maps child names to value names. A value is either a
        text string or an object with ``kind`` and ``data`` members.

        Args:
            path: Snapshot file path.

        Returns:
            Store serving the snapshot entries.

        Raises:
            StoreOpenError: If the file cannot be read or is malformed.
        """
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
            entries = {
                str(child_name): [
                    _snapshot_value(value_name, value)
                    for value_name, value in values.items()
                ]
                for child_name, values in payload["entries"].items()
            }
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning(f"Failed to load snapshot (path={path} error={exc})")
            raise StoreOpenError(f"Cannot load snapshot {path}: {exc}") from exc
        return cls(entries=entries)

    def open_root(self) -> MemoryHandle:
        return self._open(ROOT_NAME)

    def enumerate_child_names(self, root: MemoryHandle) -> Iterator[str]:
        self._require_open(root)
        for index, name in enumerate(list(self._entries)):
            if index == self._fail_after:
                break
            yield name
        if self._fail_after is not None:
            raise StoreEnumerationError(
                f"Child enumeration failed (index={self._fail_after})"
            )

    def open_child_for_read(self, root: MemoryHandle, name: str) -> MemoryHandle:
        self._require_open(root)
        if name in self._unreadable:
            raise StoreOpenError(f"Access denied: {name}")
        if name not in self._entries:
            raise StoreOpenError(f"Entry not found: {name}")
        return self._open(name)

    def enumerate_child_values(self, child: MemoryHandle) -> Iterator[NamedValue]:
        self._require_open(child)
        yield from list(self._entries[child.name])

    def close(self, handle: MemoryHandle) -> None:
        self.open_handles.pop(handle.handle_id, None)

    def _open(self, name: str) -> MemoryHandle:
        handle = MemoryHandle(handle_id=self._next_handle_id, name=name)
        self._next_handle_id += 1
        self.open_handles[handle.handle_id] = handle
        return handle

    def _require_open(self, handle: MemoryHandle) -> None:
        if handle.handle_id not in self.open_handles:
            raise ValueError(f"Handle is not open: {handle.name}")


def text_value(name: str, text: str, kind: ValueKind = "string") -> NamedValue:
    """Build a NUL-terminated text value."""
    return NamedValue(name=name, kind=kind, data=text.encode("utf-8") + b"\x00")


def _snapshot_value(name: str, value: Any) -> NamedValue:
    if isinstance(value, str):
        return text_value(name, value)
    kind = value["kind"]
    if kind not in get_args(ValueKind):
        raise ValueError(f"Unsupported value kind for {name}: {kind}")
    data = str(value["data"])
    if kind == "other":
        return NamedValue(name=name, kind="other", data=data.encode("utf-8"))
    return text_value(name, data, kind=cast(ValueKind, kind))
