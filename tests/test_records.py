import pytest

from db import KeyMismatchError, PartRecord, QueryResults, changed, copy
from tests.factories import PartRecordFactory


def test_identical_records_are_unchanged():
    rec = PartRecordFactory()
    assert changed(rec, copy(rec)) is False


@pytest.mark.parametrize("field", [
    "device_type", "device_name", "value", "positive_tolerance",
    "negative_tolerance", "case_name", "case_identifier",
])
def test_any_attribute_difference_is_a_change(field):
    rec = PartRecordFactory()
    edited = copy(rec)
    setattr(edited, field, getattr(rec, field) + "-edited")

    assert changed(rec, edited) is True


def test_different_part_numbers_fail_fast():
    with pytest.raises(KeyMismatchError):
        changed(PartRecord("R1"), PartRecord("R2"))


def test_copy_is_independent():
    rec = PartRecordFactory(value="10k")
    clone = copy(rec)
    clone.value = "22k"

    assert rec.value == "10k"
    assert clone is not rec


def test_dict_round_trip_uses_store_column_names():
    rec = PartRecordFactory(case_name="0603")
    data = rec.to_dict()

    assert data["partNumber"] == rec.part_number
    assert data["caseName"] == "0603"
    assert PartRecord.from_dict(data) == rec


def test_from_dict_requires_part_number():
    with pytest.raises(ValueError):
        PartRecord.from_dict({"value": "10k"})


def test_query_results_snapshot_is_not_aliased():
    records = PartRecordFactory.build_batch(3)
    results = QueryResults.from_records(records)
    results.working[0].value = "changed"

    assert results.original[0].value != "changed"
    assert [r.part_number for r in results.original] == [r.part_number for r in results.working]
