import math

import pytest
from pydantic import ValidationError

from buildcalc.sizing import CapacityTable, InvalidInput, NoAdequateSizeFound, Query, Sample


def test_samples_sorted_by_span():
    table = CapacityTable.from_pairs({"A": [(12, 700), (6, 1600), (10, 900)]})
    assert [s.span for s in table.samples("A")] == [6, 10, 12]


def test_duplicate_spans_rejected():
    with pytest.raises(ValidationError):
        CapacityTable.from_pairs({"A": [(6, 1600), (6, 1500)]})


def test_empty_size_rejected():
    with pytest.raises(ValidationError):
        CapacityTable(sizes={"A": ()})


def test_empty_table_rejected():
    with pytest.raises(ValidationError):
        CapacityTable(sizes={})


def test_negative_sample_rejected():
    with pytest.raises(ValidationError):
        Sample(span=-1, capacity=100)
    with pytest.raises(ValidationError):
        Sample(span=1, capacity=-100)


def test_table_is_frozen():
    table = CapacityTable.from_pairs({"A": [(6, 100)]})
    with pytest.raises(ValidationError):
        table.name = "other"


def test_unknown_size():
    table = CapacityTable.from_pairs({"A": [(6, 100)]})
    with pytest.raises(InvalidInput):
        table.samples("B")


def test_non_monotonic_sizes():
    table = CapacityTable.from_pairs({"ok": [(6, 100), (8, 80)], "bad": [(6, 100), (8, 120)]})
    assert table.non_monotonic_sizes() == ["bad"]


def test_filter_and_scale():
    table = CapacityTable.from_pairs({"2-2x8": [(6, 100)], "4x8": [(6, 200)]})
    assert table.filter(lambda s: "-" in s).size_keys() == ["2-2x8"]
    assert table.scaled(2.0).samples("4x8")[0].capacity == 400
    # original untouched
    assert table.samples("4x8")[0].capacity == 200


class TestQuery:
    def test_valid(self):
        q = Query.build("750", 11)
        assert q.required_capacity == 750.0
        assert q.required_span == 11.0

    @pytest.mark.parametrize(
        "cap, span, message",
        [
            (0, 10, "Please enter a valid required capacity"),
            (-5, 10, "Please enter a valid required capacity"),
            ("abc", 10, "Please enter a valid required capacity"),
            (100, 0, "Please enter a valid span"),
            (100, math.nan, "Please enter a valid span"),
            (100, math.inf, "Please enter a valid span"),
        ],
    )
    def test_invalid(self, cap, span, message):
        with pytest.raises(InvalidInput) as exc:
            Query.build(cap, span)
        assert exc.value.messages == [message]

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            Query.build(None, None)


def test_no_adequate_size_message():
    err = NoAdequateSizeFound(2000, 14, best_capacity=1125.4, not_applicable=["4x6"])
    assert "required 2000 at span 14" in str(err)
    assert "best available 1125" in str(err)
    assert err.not_applicable == ["4x6"]
