import math

import numpy as np
import pytest

from buildcalc.config import Settings
from buildcalc.sizing import (
    CapacityTable,
    InvalidInput,
    NoAdequateSizeFound,
    Sample,
    capacity_at,
    find_adequate_sizes,
    recommend_size,
    round_half_up,
    smallest_adequate,
)


class TestCapacityAt:
    def test_interpolates_between_samples(self, beam_2_2x10):
        assert capacity_at(beam_2_2x10, 11) == pytest.approx(800.0)

    def test_exact_at_every_sample(self, syp_beams):
        for samples in syp_beams.sizes.values():
            for s in samples:
                assert capacity_at(samples, s.span) == s.capacity

    def test_below_range_uses_shortest_span(self, beam_2_2x12):
        assert capacity_at(beam_2_2x12, 2) == 1500
        assert capacity_at(beam_2_2x12, 8) == 1500

    def test_unsorted_samples_are_sorted(self, beam_2_2x10):
        shuffled = list(reversed(beam_2_2x10))
        assert capacity_at(shuffled, 11) == pytest.approx(800.0)

    def test_accepts_sample_models_and_mappings(self):
        assert capacity_at([Sample(span=10, capacity=900), Sample(span=12, capacity=700)], 11) == pytest.approx(800)
        assert capacity_at([{"span": 10, "capacity": 900}, {"span": 12, "capacity": 700}], 11) == pytest.approx(800)

    def test_extrapolation_cutoff(self, beam_2_2x12):
        # largest sample (14, 750): 20% over is 16.8
        assert capacity_at(beam_2_2x12, 16.8) == pytest.approx(750 * 14 / 16.8)
        assert capacity_at(beam_2_2x12, 17) is None

    def test_extrapolation_scales_down(self, beam_2_2x12):
        assert capacity_at(beam_2_2x12, 15) == pytest.approx(700.0)

    def test_custom_extrapolation_limit(self, beam_2_2x12):
        assert capacity_at(beam_2_2x12, 17, extrapolation_limit=1.25) == pytest.approx(750 * 14 / 17)

    def test_single_sample(self):
        assert capacity_at([(10, 500)], 4) == 500
        assert capacity_at([(10, 500)], 11) == pytest.approx(500 * 10 / 11)
        assert capacity_at([(10, 500)], 13) is None

    @pytest.mark.parametrize("span", [0, -3, "abc", None, math.nan, math.inf])
    def test_bad_span(self, beam_2_2x10, span):
        with pytest.raises(InvalidInput):
            capacity_at(beam_2_2x10, span)

    def test_empty_samples(self):
        with pytest.raises(InvalidInput):
            capacity_at([], 10)

    def test_monotonic_within_range(self, syp_beams):
        for size, samples in syp_beams.sizes.items():
            spans = np.linspace(samples[0].span, samples[-1].span, 41)
            caps = [capacity_at(samples, s) for s in spans]
            assert all(a >= b for a, b in zip(caps, caps[1:])), size


class TestFindAdequateSizes:
    def test_worked_example(self):
        table = CapacityTable.from_pairs({"2-2x10": [(6, 1600), (8, 1200), (10, 900), (12, 700)]})
        options = list(find_adequate_sizes(table, 750, 11))
        assert len(options) == 1
        assert options[0].size == "2-2x10"
        assert options[0].interpolated_capacity == pytest.approx(800)
        assert options[0].utilization_percent == 94

    def test_ordered_by_utilization_descending(self, small_table):
        options = list(find_adequate_sizes(small_table, 300, 6))
        assert [o.size for o in options] == ["A", "B", "C"]
        assert [o.utilization_percent for o in options] == [100, 50, 25]

    def test_excludes_inadequate(self, small_table):
        options = list(find_adequate_sizes(small_table, 500, 6))
        assert [o.size for o in options] == ["B", "C"]

    def test_ties_keep_table_order(self):
        table = CapacityTable.from_pairs({"X": [(10, 1000)], "Y": [(10, 1000)], "Z": [(10, 500)]})
        options = list(find_adequate_sizes(table, 400, 10))
        assert [o.size for o in options] == ["Z", "X", "Y"]

    def test_utilization_never_over_100(self, syp_beams):
        for load in (200, 500, 750, 1000, 1400):
            for span in (6, 9, 11, 13.5, 16):
                try:
                    options = list(find_adequate_sizes(syp_beams, load, span))
                except NoAdequateSizeFound:
                    continue
                assert all(o.utilization_percent <= 100 for o in options)
                assert all(o.interpolated_capacity >= load for o in options)

    def test_absurd_load_signals_no_adequate_size(self, syp_beams):
        with pytest.raises(NoAdequateSizeFound) as exc:
            find_adequate_sizes(syp_beams, 100000, 10)
        assert exc.value.best_capacity == pytest.approx(1800)
        assert "engineer" in exc.value.suggestion

    def test_not_applicable_sizes_reported(self, syp_beams):
        with pytest.raises(NoAdequateSizeFound) as exc:
            find_adequate_sizes(syp_beams, 100000, 11)
        assert "4x6" in exc.value.not_applicable

    def test_extrapolated_flag(self, small_table):
        options = list(find_adequate_sizes(small_table, 100, 9))
        assert all(o.extrapolated for o in options)

    def test_invalid_query_raised_eagerly(self, small_table):
        with pytest.raises(InvalidInput) as exc:
            find_adequate_sizes(small_table, 0, 6)
        assert exc.value.messages == ["Please enter a valid required capacity"]
        with pytest.raises(InvalidInput):
            find_adequate_sizes(small_table, 100, -1)

    def test_idempotent(self, syp_beams):
        first = list(find_adequate_sizes(syp_beams, 750, 11))
        second = list(find_adequate_sizes(syp_beams, 750, 11))
        assert first == second

    def test_single_pass(self, small_table):
        it = find_adequate_sizes(small_table, 300, 6)
        assert len(list(it)) == 3
        assert list(it) == []

    def test_settings_extrapolation_limit(self, small_table):
        with pytest.raises(NoAdequateSizeFound):
            find_adequate_sizes(small_table, 100, 9.7)
        options = list(find_adequate_sizes(small_table, 100, 9.7, settings=Settings(extrapolation_limit=1.25)))
        assert len(options) == 3


class TestRecommendSize:
    def test_recommends_tightest_fit(self, syp_beams):
        result = recommend_size(syp_beams, 750, 11)
        assert result.recommended.size == "2-2x10"
        assert result.recommended.utilization_percent == 94
        assert result.options[0] == result.recommended
        assert result.total_adequate == 9
        assert result.not_applicable == ("4x6",)

    def test_limit_truncates_display_only(self, syp_beams):
        result = recommend_size(syp_beams, 750, 11, limit=5)
        assert [o.size for o in result.options] == ["2-2x10", "4x10", "2-2x12", "3-2x10", "6x8"]
        assert result.recommended.size == "2-2x10"
        assert result.total_adequate == 9

    def test_query_recorded(self, small_table):
        result = recommend_size(small_table, 300, 6)
        assert result.query.required_capacity == 300
        assert result.query.required_span == 6


def test_round_half_up():
    assert round_half_up(62.5) == 63
    assert round_half_up(46.5) == 47
    assert round_half_up(93.75) == 94
    assert round_half_up(45.45) == 45


def test_smallest_adequate():
    order = ["14", "12", "10", "8"]
    rating = {"12": 16.0, "10": 24.0, "8": 32.0}
    assert smallest_adequate(order, rating, 20) == "10"
    assert smallest_adequate(order, rating, 10) == "12"
    assert smallest_adequate(order, rating, 40) is None
