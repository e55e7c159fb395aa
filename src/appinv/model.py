# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for installed application records."""

from dataclasses import asdict, dataclass
from typing import Literal

FieldSlot = Literal["name", "publisher", "version", "install_date", "location"]

COMPACT_DATE_LENGTH = 8


def normalize_install_date(raw_date: str) -> str:
    """Convert a compact ``YYYYMMDD`` date to ``YYYY/MM/DD``.

    Values shorter than eight characters are returned unchanged.
    """
    if len(raw_date) < COMPACT_DATE_LENGTH:
        return raw_date
    return f"{raw_date[0:4]}/{raw_date[4:6]}/{raw_date[6:8]}"


@dataclass(frozen=True)
class Record:
    """Represent one installed application.

    Attributes:
        name: Display name of the application.
        publisher: Publisher of the application.
        version: Display version.
        install_date: Installation date, normalized to ``YYYY/MM/DD`` when the
            store provides a compact date.
        location: Installation directory.
    """

    name: str
    publisher: str
    version: str
    install_date: str
    location: str

    def render(self) -> str:
        """Render the record as a multi-line text block."""
        return (
            f"{self.name} {self.version}\n"
            f"\tPublisher: {self.publisher}\n"
            f"\tInstalled {self.install_date}\n"
            f"\tInto {self.location}\n"
        )

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class PartialRecord:
    """Represent the fields collected so far for one candidate entry.

    Every slot is ``None`` until the store provides a value for it.
    """

    name: str | None = None
    publisher: str | None = None
    version: str | None = None
    install_date: str | None = None
    location: str | None = None


FIELD_SLOTS: tuple[FieldSlot, ...] = (
    "name",
    "publisher",
    "version",
    "install_date",
    "location",
)


def missing_slots(partial: PartialRecord) -> tuple[FieldSlot, ...]:
    """Return the slots of ``partial`` that are still unset."""
    return tuple(slot for slot in FIELD_SLOTS if getattr(partial, slot) is None)


def is_complete(partial: PartialRecord) -> bool:
    """Check whether every slot of ``partial`` is set."""
    return not missing_slots(partial)


def try_build(partial: PartialRecord) -> Record | None:
    """Construct a record from a complete partial record.

    Args:
        partial: Collected fields for one candidate.

    Returns:
        The record, or ``None`` when any slot is unset.
    """
    if (
        partial.name is None
        or partial.publisher is None
        or partial.version is None
        or partial.install_date is None
        or partial.location is None
    ):
        return None
    return Record(
        name=partial.name,
        publisher=partial.publisher,
        version=partial.version,
        install_date=normalize_install_date(partial.install_date),
        location=partial.location,
    )
