# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Configuration store contracts consumed by the inventory scanner."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Literal, Protocol


ValueKind = Literal["string", "expand_string", "other"]

STRING_KINDS: frozenset[ValueKind] = frozenset({"string", "expand_string"})


class StoreError(RuntimeError):
    """Represent a configuration store access failure."""


class StoreOpenError(StoreError):
    """Represent a failure to open the root or a child entry."""


class StoreEnumerationError(StoreError):
    """Represent a failure to list the children of the root."""


@dataclass(frozen=True)
class NamedValue:
    """Represent one typed value exposed by a child entry.

    Attributes:
        name: Value name, e.g. ``DisplayName``.
        kind: Value type tag.
        data: Raw value bytes. Text values are NUL-terminated.
    """

    name: str
    kind: ValueKind
    data: bytes


class ConfigStore(Protocol):
    """Define the enumeration contract of a configuration store adapter."""

    def open_root(self) -> Any:
        """Open the enumeration root.

        Raises:
            StoreOpenError: If the root cannot be opened.
        """

    def enumerate_child_names(self, root: Any) -> Iterator[str]:
        """Yield child entry names below the root.

        Raises:
            StoreEnumerationError: If listing fails.
        """

    def open_child_for_read(self, root: Any, name: str) -> Any:
        """Open one child entry for value reading.

        Raises:
            StoreOpenError: If the child cannot be opened.
        """

    def enumerate_child_values(self, child: Any) -> Iterator[NamedValue]:
        """Yield every value of an opened child entry."""

    def close(self, handle: Any) -> None:
        """Release a root or child handle."""
