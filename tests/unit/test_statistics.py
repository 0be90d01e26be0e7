from __future__ import annotations

import math

import pytest

from duckstats.demos.statistics_benchmark import generate_records, statistics_from_records
from duckstats.domain.models import Record

GENERATED_COUNT = 10


def _records(values: list[float]) -> list[Record]:
    return [Record(id=i, value=v) for i, v in enumerate(values)]


def test_generate_records_ids_and_values():
    records = generate_records(GENERATED_COUNT)
    assert [r.id for r in records] == list(range(GENERATED_COUNT))
    assert all(r.value == float(r.id) for r in records)
    assert all(isinstance(r.value, float) for r in records)


def test_generate_records_zero_and_negative():
    assert generate_records(0) == []
    with pytest.raises(ValueError):
        generate_records(-1)


def test_mean_is_sum_over_count():
    values = [0.5, 2.25, -3.0, 10.0, 7.125]
    stats = statistics_from_records(_records(values))
    assert math.isclose(stats.mean, sum(values) / len(values), rel_tol=1e-12)


def test_median_odd_count():
    stats = statistics_from_records(_records([5.0, 1.0, 4.0, 2.0, 3.0]))
    assert stats.median == 3.0


def test_median_even_count():
    stats = statistics_from_records(_records([4.0, 2.0, 1.0, 3.0]))
    assert stats.median == 2.5


def test_population_stddev():
    stats = statistics_from_records(_records([1.0, 2.0, 3.0, 4.0]))
    assert math.isclose(stats.stddev, math.sqrt(1.25), rel_tol=1e-12)
    assert stats.stddev == pytest.approx(1.1180, abs=1e-4)


def test_single_record():
    stats = statistics_from_records(_records([42.0]))
    assert stats.mean == stats.median == stats.minimum == stats.maximum == 42.0
    assert stats.stddev == 0.0


def test_min_max_over_generated_records():
    stats = statistics_from_records(generate_records(GENERATED_COUNT))
    assert stats.minimum == 0.0
    assert stats.maximum == float(GENERATED_COUNT - 1)


def test_unsorted_input_is_not_mutated():
    records = _records([3.0, 1.0, 2.0])
    statistics_from_records(records)
    assert [r.value for r in records] == [3.0, 1.0, 2.0]


def test_empty_input_rejected():
    with pytest.raises(ValueError):
        statistics_from_records([])
