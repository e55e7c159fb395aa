# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Scan a configuration store for installed application records."""

import logging
from dataclasses import dataclass, field
from typing import Any

from appinv.model import Record
from appinv.record_builder import RecordBuilder
from appinv.store import ConfigStore, StoreOpenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpenedChild:
    """Represent a child entry that was opened for reading."""

    name: str
    handle: Any


@dataclass(frozen=True)
class SkippedChild:
    """Represent a child entry that could not be opened.

    Attributes:
        name: Child entry name.
        reason: Error message reported by the store.
    """

    name: str
    reason: str


@dataclass(frozen=True)
class ScanReport:
    """Represent the outcome of one scan pass.

    Attributes:
        records: Complete records in store enumeration order.
        skipped: Children that could not be opened.
        incomplete_count: Children opened but missing required fields.
    """

    records: list[Record] = field(default_factory=list)
    skipped: list[SkippedChild] = field(default_factory=list)
    incomplete_count: int = 0


class InventoryScanner:
    """Turn the child entries of a store root into records."""

    def __init__(self, store: ConfigStore, builder: RecordBuilder | None = None) -> None:
        """Initialize the scanner.

        Args:
            store: Store adapter to read from.
            builder: Builder reused for every candidate entry.
        """
        self._store = store
        self._builder = builder or RecordBuilder()

    def scan(self, root: Any) -> list[Record]:
        """Collect complete records below an opened root.

        Args:
            root: Root handle returned by ``store.open_root()``.

        Returns:
            Records in store enumeration order.

        Raises:
            StoreEnumerationError: If the root children cannot be listed.
        """
        return self.scan_with_report(root).records

    def scan_with_report(self, root: Any) -> ScanReport:
        """Collect records along with skipped and incomplete entry counts.

        Args:
            root: Root handle returned by ``store.open_root()``.

        Returns:
            Scan report for the root.

        Raises:
            StoreEnumerationError: If the root children cannot be listed.
        """
        records: list[Record] = []
        skipped: list[SkippedChild] = []
        incomplete_count = 0

        for name in self._store.enumerate_child_names(root):
            child = self._open_child(root, name)
            if isinstance(child, SkippedChild):
                logger.debug(
                    f"Skipping unreadable entry (name={child.name} reason={child.reason})"
                )
                skipped.append(child)
                continue

            record = self._read_child(child)
            if record is None:
                incomplete_count += 1
            else:
                records.append(record)

        logger.info(
            f"Inventory scan completed (records={len(records)} "
            f"skipped={len(skipped)} incomplete={incomplete_count})"
        )
        return ScanReport(
            records=records, skipped=skipped, incomplete_count=incomplete_count
        )

    def _open_child(self, root: Any, name: str) -> OpenedChild | SkippedChild:
        try:
            handle = self._store.open_child_for_read(root, name)
        except StoreOpenError as exc:
            return SkippedChild(name=name, reason=str(exc))
        return OpenedChild(name=name, handle=handle)

    def _read_child(self, child: OpenedChild) -> Record | None:
        """Feed the values of one child into the builder.

        The builder is reset and the child handle closed on every path.
        """
        try:
            for value in self._store.enumerate_child_values(child.handle):
                self._builder.try_apply_named_value(value.name, value.kind, value.data)
            record = self._builder.build()
            if record is None:
                logger.debug(
                    f"Skipping incomplete entry (name={child.name} "
                    f"missing={','.join(self._builder.missing_fields())})"
                )
            return record
        finally:
            self._builder.reset()
            self._store.close(child.handle)


def scan_inventory(store: ConfigStore) -> ScanReport:
    """Open the store root, scan it and close it.

    Args:
        store: Store adapter to read from.

    Returns:
        Scan report for the store root.

    Raises:
        StoreOpenError: If the root cannot be opened.
        StoreEnumerationError: If the root children cannot be listed.
    """
    root = store.open_root()
    try:
        return InventoryScanner(store).scan_with_report(root)
    finally:
        store.close(root)
