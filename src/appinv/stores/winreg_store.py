# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Windows registry store adapter."""

import logging
import winreg
from collections.abc import Iterator

from appinv.store import NamedValue, StoreOpenError, ValueKind
from appinv.stores.registry import UNINSTALL_PATH, iter_named_values, iter_subkey_names

logger = logging.getLogger(__name__)

HIVE_KEYS: dict[str, int] = {
    "HKLM": winreg.HKEY_LOCAL_MACHINE,
    "HKCU": winreg.HKEY_CURRENT_USER,
}

VALUE_KINDS: dict[int, ValueKind] = {
    winreg.REG_SZ: "string",
    winreg.REG_EXPAND_SZ: "expand_string",
}


class WinregStore:
    """Read uninstall entries from the Windows registry."""

    def __init__(self, hive: str = "HKLM", path: str = UNINSTALL_PATH) -> None:
        """Initialize the adapter.

        Args:
            hive: Registry hive short name, ``HKLM`` or ``HKCU``.
            path: Key path of the enumeration root inside the hive.

        Raises:
            ValueError: If ``hive`` is not supported.
        """
        if hive not in HIVE_KEYS:
            raise ValueError(f"Unsupported registry hive: {hive}")
        self._hive = hive
        self._path = path

    def open_root(self) -> winreg.HKEYType:
        try:
            return winreg.OpenKey(
                HIVE_KEYS[self._hive], self._path, 0, winreg.KEY_ENUMERATE_SUB_KEYS
            )
        except OSError as exc:
            logger.warning(
                f"Failed to open registry root (hive={self._hive} path={self._path} error={exc})"
            )
            raise StoreOpenError(
                f"Failed to open registry entry {self._hive}\\{self._path}"
            ) from exc

    def enumerate_child_names(self, root: winreg.HKEYType) -> Iterator[str]:
        return iter_subkey_names(winreg.EnumKey, root, self._path)

    def open_child_for_read(self, root: winreg.HKEYType, name: str) -> winreg.HKEYType:
        try:
            return winreg.OpenKey(root, name, 0, winreg.KEY_QUERY_VALUE)
        except OSError as exc:
            raise StoreOpenError(f"Failed to open registry entry {name}") from exc

    def enumerate_child_values(self, child: winreg.HKEYType) -> Iterator[NamedValue]:
        return iter_named_values(winreg.EnumValue, child, VALUE_KINDS)

    def close(self, handle: winreg.HKEYType) -> None:
        winreg.CloseKey(handle)
