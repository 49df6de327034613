import pytest

from shelter.interchange.exceptions import RowDecodeError
from shelter.interchange.fields import (
    FieldKind,
    column_spec,
    decode_row,
    encode_record,
    field_table,
    get_path,
    set_path,
)


def _make_specs() -> dict:
    return field_table([
        column_spec("name"),
        column_spec("fee", FieldKind.INTEGER, path="adoptionFee"),
        column_spec("vaccinated", FieldKind.BOOLEAN, path="health.isVaccinated"),
        column_spec("tags", FieldKind.STRING_LIST),
        column_spec("images", FieldKind.NESTED_OBJECT_LIST),
        column_spec("email", path="personalInfo.email"),
    ])


class TestFieldTable:
    def test_indexes_by_column(self) -> None:
        specs = _make_specs()
        assert specs["email"].target_path == ("personalInfo", "email")

    def test_rejects_duplicate_column(self) -> None:
        with pytest.raises(ValueError, match="Duplicate column"):
            field_table([column_spec("name"), column_spec("name")])

    def test_rejects_empty_path_segment(self) -> None:
        with pytest.raises(ValueError, match="empty target path"):
            field_table([column_spec("name", path="info.")])


class TestPaths:
    def test_set_path_creates_intermediates(self) -> None:
        record: dict = {}
        set_path(record, ("a", "b", "c"), 1)
        assert record == {"a": {"b": {"c": 1}}}

    def test_get_path_missing_returns_none(self) -> None:
        assert get_path({"a": {"b": 1}}, ("a", "x")) is None
        assert get_path({"a": 5}, ("a", "b")) is None


class TestDecodeRow:
    def test_string_and_nested_path(self) -> None:
        record = decode_row(["name", "email"], ["Rex", "a@b.org"], _make_specs())
        assert record == {"name": "Rex", "personalInfo": {"email": "a@b.org"}}

    def test_string_strips_one_quote_layer(self) -> None:
        record = decode_row(["name"], ['"Rex"'], _make_specs())
        assert record["name"] == "Rex"

    def test_empty_string_is_omitted(self) -> None:
        record = decode_row(["name", "email"], ["Rex", ""], _make_specs())
        assert "personalInfo" not in record

    def test_integer(self) -> None:
        record = decode_row(["fee"], [" 150 "], _make_specs())
        assert record == {"adoptionFee": 150}

    def test_empty_integer_is_omitted(self) -> None:
        assert decode_row(["fee"], [""], _make_specs()) == {}

    def test_bad_integer_raises(self) -> None:
        with pytest.raises(RowDecodeError, match="'fee'"):
            decode_row(["fee"], ["abc"], _make_specs())

    @pytest.mark.parametrize("raw", ["1_000", "\u0663", "1.5", "+", "0x10"])
    def test_only_ascii_digits_are_integers(self, raw: str) -> None:
        with pytest.raises(RowDecodeError, match="not an integer"):
            decode_row(["fee"], [raw], _make_specs())

    @pytest.mark.parametrize("raw, expected", [("+5", 5), ("-3", -3), ("007", 7)])
    def test_signed_integer(self, raw: str, expected: int) -> None:
        assert decode_row(["fee"], [raw], _make_specs()) == {"adoptionFee": expected}

    @pytest.mark.parametrize("raw, expected", [
        ("true", True),
        ("TRUE", True),
        ("True", True),
        ("false", False),
        ("yes", False),
        ("", False),
    ])
    def test_boolean(self, raw: str, expected: bool) -> None:
        record = decode_row(["vaccinated"], [raw], _make_specs())
        assert record["health"]["isVaccinated"] is expected

    def test_string_list_trims_and_drops_empty(self) -> None:
        record = decode_row(["tags"], [" a ; b;;c ;"], _make_specs())
        assert record["tags"] == ["a", "b", "c"]

    def test_empty_string_list_decodes_to_empty(self) -> None:
        assert decode_row(["tags"], [""], _make_specs())["tags"] == []

    def test_nested_object_list_uses_sibling_name(self) -> None:
        # images column comes before name; alt text is still derived from it.
        record = decode_row(["images", "name"], ["a.jpg; b.jpg", "Rex"], _make_specs())
        assert record["images"] == [
            {"url": "a.jpg", "altText": "Rex photo"},
            {"url": "b.jpg", "altText": "Rex photo"},
        ]

    def test_nested_object_list_without_name(self) -> None:
        record = decode_row(["images"], ["a.jpg"], _make_specs())
        assert record["images"] == [{"url": "a.jpg", "altText": " photo"}]

    def test_unknown_column_passes_through(self) -> None:
        record = decode_row(["name", "colour"], ["Rex", "brown"], _make_specs())
        assert record["colour"] == "brown"

    def test_cell_count_mismatch_raises(self) -> None:
        with pytest.raises(RowDecodeError, match="Expected 2 cells, got 1"):
            decode_row(["name", "fee"], ["Rex"], _make_specs())


class TestEncodeRecord:
    def test_follows_column_order(self) -> None:
        record = {"adoptionFee": 150, "name": "Rex"}
        assert encode_record(record, ["name", "fee"], _make_specs()) == ["Rex", "150"]

    def test_booleans_uppercase(self) -> None:
        record = {"health": {"isVaccinated": False}}
        assert encode_record(record, ["vaccinated"], _make_specs()) == ["FALSE"]

    def test_lists_joined(self) -> None:
        record = {"tags": ["a", "b", "c"]}
        assert encode_record(record, ["tags"], _make_specs()) == ["a;b;c"]

    def test_nested_objects_export_urls(self) -> None:
        record = {"images": [{"url": "a.jpg", "altText": "x"}, {"url": "b.jpg"}]}
        assert encode_record(record, ["images"], _make_specs()) == ["a.jpg;b.jpg"]

    def test_missing_value_is_empty(self) -> None:
        assert encode_record({}, ["name", "fee", "tags"], _make_specs()) == ["", "", ""]

    def test_populated_reference_exports_id(self) -> None:
        record = {"animal": {"_id": "a1", "name": "Rex"}}
        assert encode_record(record, ["animal"], _make_specs()) == ["a1"]

    def test_address_object_is_one_line(self) -> None:
        specs = field_table([column_spec("address", path="personalInfo.address")])
        record = {"personalInfo": {"address": {
            "street": "1 Main", "city": "Springfield", "state": "IL", "zipCode": "62701",
        }}}

        assert encode_record(record, ["address"], specs) == ["1 Main, Springfield, IL 62701"]

    def test_partial_address_skips_empty_parts(self) -> None:
        specs = field_table([column_spec("address")])
        record = {"address": {"street": "", "city": "Springfield", "state": "IL", "zipCode": ""}}

        assert encode_record(record, ["address"], specs) == ["Springfield, IL"]

    def test_other_objects_export_key_value_pairs(self) -> None:
        specs = field_table([column_spec("contact")])
        record = {"contact": {"name": "Jo", "phone": "555-0100", "note": ""}}

        assert encode_record(record, ["contact"], specs) == ["name=Jo; phone=555-0100"]

    def test_export_path_is_read_first(self) -> None:
        specs = field_table([column_spec("animalName", export_path="animal.name")])

        assert encode_record({"animal": {"_id": "a1", "name": "Rex"}}, ["animalName"], specs) == ["Rex"]
        assert encode_record({"animal": "a1", "animalName": "Tom"}, ["animalName"], specs) == ["Tom"]
        assert encode_record({"animal": "a1"}, ["animalName"], specs) == [""]
