# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Registry enumeration helpers that do not depend on ``winreg``."""

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from appinv.store import NamedValue, StoreEnumerationError, ValueKind

logger = logging.getLogger(__name__)

UNINSTALL_PATH = r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"
REGISTRY_HIVES = ("HKLM", "HKCU")

ERROR_NO_MORE_ITEMS = 259


def is_exhausted(exc: OSError) -> bool:
    """Check whether ``exc`` reports the end of a registry listing."""
    return getattr(exc, "winerror", None) == ERROR_NO_MORE_ITEMS


def iter_subkey_names(
    enum_key: Callable[[Any, int], str], root: Any, path: str
) -> Iterator[str]:
    """Yield subkey names until the registry reports no more items.

    Args:
        enum_key: ``winreg.EnumKey`` compatible callable.
        root: Open key handle.
        path: Key path, used in error messages.

    Raises:
        StoreEnumerationError: If listing fails for any other reason.
    """
    index = 0
    while True:
        try:
            name = enum_key(root, index)
        except OSError as exc:
            if is_exhausted(exc):
                return
            raise StoreEnumerationError(
                f"Failed to enumerate registry entry {path} (index={index})"
            ) from exc
        yield name
        index += 1


def iter_named_values(
    enum_value: Callable[[Any, int], tuple[str, Any, int]],
    child: Any,
    value_kinds: Mapping[int, ValueKind],
) -> Iterator[NamedValue]:
    """Yield the values of an open key, stopping at the first read failure.

    Args:
        enum_value: ``winreg.EnumValue`` compatible callable.
        child: Open key handle.
        value_kinds: Registry type code to value kind for text types.
    """
    index = 0
    while True:
        try:
            name, data, reg_type = enum_value(child, index)
        except OSError as exc:
            if not is_exhausted(exc):
                logger.warning(
                    f"Stopping value enumeration early (index={index} error={exc})"
                )
            return
        yield to_named_value(name, data, reg_type, value_kinds)
        index += 1


def to_named_value(
    name: str, data: Any, reg_type: int, value_kinds: Mapping[int, ValueKind]
) -> NamedValue:
    """Convert one registry value to a ``NamedValue``.

    Text values become UTF-8 with a trailing NUL. Other values keep their
    bytes, or their ``str()`` form encoded as UTF-8.
    """
    kind = value_kinds.get(reg_type, "other")
    if kind == "other":
        raw = data if isinstance(data, bytes) else str(data).encode("utf-8")
        return NamedValue(name=name, kind=kind, data=raw)
    text = "" if data is None else str(data)
    return NamedValue(name=name, kind=kind, data=text.encode("utf-8") + b"\x00")
