import sys
from collections.abc import Callable
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

from appinv.store import NamedValue  # noqa: E402
from appinv.stores import text_value  # noqa: E402


@pytest.fixture
def uninstall_entry() -> Callable[..., list[NamedValue]]:
    """Return a factory for the values of a complete uninstall entry."""

    def _factory(name: str, install_date: str = "20210601") -> list[NamedValue]:
        return [
            text_value("DisplayName", name),
            text_value("DisplayVersion", "1.0"),
            text_value("InstallDate", install_date),
            text_value("InstallLocation", f"C:\\{name}"),
            text_value("Publisher", "Acme"),
        ]

    return _factory
