import pytest

from appinv.model import PartialRecord, Record, is_complete, normalize_install_date, try_build
from appinv.record_builder import RecordBuilder, decode_text
from appinv.stores import text_value


def _apply_all(builder: RecordBuilder, **overrides: str) -> None:
    values = {
        "DisplayName": "Foo",
        "DisplayVersion": "1.0",
        "InstallDate": "20210601",
        "InstallLocation": "C:\\Foo",
        "Publisher": "Acme",
    }
    values.update(overrides)
    for name, text in values.items():
        value = text_value(name, text)
        assert builder.try_apply_named_value(value.name, value.kind, value.data)


def test_bld_001_builder_is_ready_after_all_recognized_fields() -> None:
    builder = RecordBuilder()
    _apply_all(builder)

    assert builder.is_ready()
    assert builder.build() == Record(
        name="Foo",
        publisher="Acme",
        version="1.0",
        install_date="2021/06/01",
        location="C:\\Foo",
    )


def test_bld_002_builder_accepts_fields_in_any_order_and_last_write_wins() -> None:
    builder = RecordBuilder()
    builder.try_apply_named_value("Publisher", "expand_string", b"Old\x00")
    builder.try_apply_named_value("InstallLocation", "string", b"D:\\Bar\x00")
    builder.try_apply_named_value("DisplayName", "string", b"Bar\x00")
    builder.try_apply_named_value("InstallDate", "string", b"2019\x00")
    builder.try_apply_named_value("DisplayVersion", "string", b"2.5\x00")
    builder.try_apply_named_value("Publisher", "string", b"New Corp\x00")

    record = builder.build()

    assert record is not None
    assert record.publisher == "New Corp"
    assert record.install_date == "2019"
    assert record.location == "D:\\Bar"


@pytest.mark.parametrize(
    ("field_name", "kind"),
    [
        ("DisplayIcon", "string"),
        ("displayname", "string"),
        ("DisplayName", "other"),
        ("EstimatedSize", "other"),
    ],
)
def test_bld_003_unrecognized_name_or_kind_leaves_state_unchanged(
    field_name: str, kind: str
) -> None:
    builder = RecordBuilder()
    builder.set_field("version", "1.0")
    before = builder.partial

    applied = builder.try_apply_named_value(field_name, kind, b"value\x00")  # type: ignore[arg-type]

    assert applied is False
    assert builder.partial == before


def test_bld_004_build_returns_none_when_a_field_is_missing() -> None:
    builder = RecordBuilder()
    builder.set_field("name", "Bar").set_field("version", "1").set_field(
        "publisher", "Acme"
    ).set_field("location", "")

    assert builder.is_ready() is False
    assert builder.build() is None
    assert builder.missing_fields() == ("install_date",)


def test_bld_005_empty_string_counts_as_set() -> None:
    builder = RecordBuilder()
    for slot in ("name", "publisher", "version", "install_date", "location"):
        builder.set_field(slot, "")  # type: ignore[arg-type]

    record = builder.build()

    assert record is not None
    assert record.install_date == ""


def test_bld_006_reset_clears_readiness() -> None:
    builder = RecordBuilder()
    _apply_all(builder)
    assert builder.is_ready()

    builder.reset()

    assert builder.is_ready() is False
    assert builder.build() is None
    assert builder.partial == PartialRecord()


def test_bld_007_set_field_rejects_unknown_slot() -> None:
    with pytest.raises(ValueError, match="Unknown record field"):
        RecordBuilder().set_field("uninstall_string", "x")  # type: ignore[arg-type]


def test_bld_008_decode_text_stops_at_first_nul() -> None:
    assert decode_text(b"Foo\x00garbage") == "Foo"
    assert decode_text(b"NoTerminator") == "NoTerminator"
    assert decode_text(b"\x00") == ""
    assert decode_text("Caf\u00e9".encode("cp1252") + b"\x00", "cp1252") == "Caf\u00e9"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("20230115", "2023/01/15"),
        ("2023", "2023"),
        ("", ""),
        ("2023011509", "2023/01/15"),
    ],
)
def test_bld_009_install_date_normalization(raw: str, expected: str) -> None:
    assert normalize_install_date(raw) == expected


def test_bld_010_try_build_is_pure_over_partial_records() -> None:
    partial = PartialRecord(name="A", publisher="P", version="1", install_date="x")

    assert is_complete(partial) is False
    assert try_build(partial) is None

    complete = PartialRecord(
        name="A", publisher="P", version="1", install_date="x", location="L"
    )
    assert is_complete(complete)
    assert try_build(complete) == Record(
        name="A", publisher="P", version="1", install_date="x", location="L"
    )


def test_bld_011_record_render_matches_pager_layout() -> None:
    record = Record(
        name="Foo",
        publisher="Acme",
        version="1.0",
        install_date="2021/06/01",
        location="C:\\Foo",
    )

    assert record.render() == (
        "Foo 1.0\n\tPublisher: Acme\n\tInstalled 2021/06/01\n\tInto C:\\Foo\n"
    )
    assert str(record) == record.render()
    assert record.to_dict()["install_date"] == "2021/06/01"
