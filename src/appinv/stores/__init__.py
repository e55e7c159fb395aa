# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Store adapters for the installed application inventory.

The registry adapter lives in ``appinv.stores.winreg_store`` and is only
importable on Windows.
"""

from appinv.stores.memory import InMemoryStore, text_value
from appinv.stores.registry import REGISTRY_HIVES, UNINSTALL_PATH

__all__ = ["InMemoryStore", "REGISTRY_HIVES", "UNINSTALL_PATH", "text_value"]
