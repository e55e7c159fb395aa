# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Accumulate store values into installed application records."""

import logging
from dataclasses import replace

from appinv.model import (
    FIELD_SLOTS,
    FieldSlot,
    PartialRecord,
    Record,
    is_complete,
    missing_slots,
    try_build,
)
from appinv.store import STRING_KINDS, ValueKind

logger = logging.getLogger(__name__)

VALUE_NAME_SLOTS: dict[str, FieldSlot] = {
    "DisplayName": "name",
    "DisplayVersion": "version",
    "InstallDate": "install_date",
    "InstallLocation": "location",
    "Publisher": "publisher",
}


def decode_text(raw: bytes, encoding: str = "utf-8") -> str:
    """Decode a NUL-terminated text value.

    Bytes after the first NUL are ignored.
    """
    text, _, _ = raw.partition(b"\x00")
    return text.decode(encoding, errors="replace")


class RecordBuilder:
    """Collect fields for one candidate entry at a time."""

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize an empty builder.

        Args:
            encoding: Text encoding of the raw value bytes.
        """
        self._encoding = encoding
        self._partial = PartialRecord()

    @property
    def partial(self) -> PartialRecord:
        return self._partial

    def set_field(self, slot: FieldSlot, value: str) -> "RecordBuilder":
        """Set one slot and return the builder.

        Raises:
            ValueError: If ``slot`` is not a record field.
        """
        if slot not in FIELD_SLOTS:
            raise ValueError(f"Unknown record field: {slot}")
        self._partial = replace(self._partial, **{slot: value})
        return self

    def try_apply_named_value(
        self, field_name: str, value_kind: ValueKind, raw: bytes
    ) -> bool:
        """Apply one store value if it maps to a record field.

        Args:
            field_name: Store value name, matched case-sensitively.
            value_kind: Store value type tag.
            raw: Raw value bytes.

        Returns:
            ``True`` if a slot was set, ``False`` if the value was ignored.
        """
        if value_kind not in STRING_KINDS:
            return False
        slot = VALUE_NAME_SLOTS.get(field_name)
        if slot is None:
            return False
        self.set_field(slot, decode_text(raw, self._encoding))
        return True

    def is_ready(self) -> bool:
        return is_complete(self._partial)

    def missing_fields(self) -> tuple[FieldSlot, ...]:
        return missing_slots(self._partial)

    def build(self) -> Record | None:
        """Build a record from the collected fields.

        Returns:
            The record, or ``None`` if any field is missing.
        """
        return try_build(self._partial)

    def reset(self) -> None:
        """Forget every collected field."""
        self._partial = PartialRecord()
