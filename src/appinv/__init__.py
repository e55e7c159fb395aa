# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Installed application inventory built from configuration store entries."""

from appinv.model import Record
from appinv.record_builder import RecordBuilder
from appinv.scanner import InventoryScanner, ScanReport, scan_inventory
from appinv.store import (
    ConfigStore,
    NamedValue,
    StoreEnumerationError,
    StoreError,
    StoreOpenError,
)

__all__ = [
    "ConfigStore",
    "InventoryScanner",
    "NamedValue",
    "Record",
    "RecordBuilder",
    "ScanReport",
    "StoreEnumerationError",
    "StoreError",
    "StoreOpenError",
    "scan_inventory",
]
