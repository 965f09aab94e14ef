from __future__ import annotations

import math
from pathlib import Path

import pytest

from spring_fit.exceptions import DatasetParseError, DatasetReadError
from spring_fit.generator import generate
from spring_fit.models import Dataset, RegressionResult
from spring_fit.regression import _ieee_divide, fit, load_dataset


def test_fit_perfect_line() -> None:
    result = fit(Dataset.from_pairs([(1, 2), (2, 4), (3, 6), (4, 8)]))

    assert result == RegressionResult(slope=2.0, intercept=0.0, r_squared=1.0)


def test_fit_constant_y() -> None:
    result = fit(Dataset.from_pairs([(0, 1), (1, 1), (2, 1)]))

    assert result.slope == 0.0
    assert result.intercept == 1.0
    assert result.r_squared == 1.0


def test_fit_zero_variance_y_is_perfect() -> None:
    result = fit(Dataset.from_pairs([(1, 5.0), (2, 5.0), (3, 5.0)]))

    assert result.r_squared == 1.0


def test_fit_empty_dataset() -> None:
    result = fit(Dataset())

    assert result == RegressionResult(slope=0.0, intercept=0.0, r_squared=0.0)


def test_fit_noisy_data_between_zero_and_one() -> None:
    result = fit(Dataset.from_pairs([(1, 1.0), (2, 3.0), (3, 2.0), (4, 5.0), (5, 4.0)]))

    assert result.slope == pytest.approx(0.8)
    assert result.intercept == pytest.approx(0.6)
    assert result.r_squared == pytest.approx(0.64)


def test_fit_is_deterministic() -> None:
    dataset = Dataset.from_pairs([(0.1, 20.3), (0.2, 39.1), (0.3, 61.7), (0.4, 79.9)])

    first = fit(dataset)
    second = fit(dataset)

    assert first.model_dump() == second.model_dump()


def test_fit_identical_x_propagates_nan() -> None:
    result = fit(Dataset.from_pairs([(1.0, 2.0), (1.0, 3.0)]))

    assert math.isnan(result.slope)
    assert math.isnan(result.intercept)
    assert math.isnan(result.r_squared)


def test_fit_single_sample() -> None:
    result = fit(Dataset.from_pairs([(2.0, 3.0)]))

    assert math.isnan(result.slope)
    assert result.r_squared == 1.0


def test_ieee_divide_by_zero() -> None:
    assert _ieee_divide(1.0, 0.0) == math.inf
    assert _ieee_divide(-1.0, 0.0) == -math.inf
    assert math.isnan(_ieee_divide(0.0, 0.0))
    assert _ieee_divide(3.0, 2.0) == 1.5


def test_generated_data_without_noise_recovers_slope(data_path: Path) -> None:
    generate(data_path, true_slope=200.0, num_points=20, noise_stddev=0.0)

    result = fit(load_dataset(data_path))

    assert result.slope == pytest.approx(200.0, rel=1e-9)
    assert result.intercept == pytest.approx(0.0, abs=1e-9)
    assert result.r_squared == 1.0


def test_load_dataset_skips_header(perfect_line_path: Path) -> None:
    dataset = load_dataset(perfect_line_path)

    assert dataset.xs == [1.0, 2.0, 3.0, 4.0]
    assert dataset.ys == [2.0, 4.0, 6.0, 8.0]


def test_load_dataset_does_not_validate_header(tmp_path: Path, table_writer) -> None:
    path = table_writer(tmp_path / "data.csv", ["0.5,1.5"], header="whatever")

    assert load_dataset(path).xs == [0.5]


def test_load_dataset_header_only(tmp_path: Path, table_writer) -> None:
    path = table_writer(tmp_path / "data.csv", [])

    assert len(load_dataset(path)) == 0


def test_load_dataset_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    assert len(load_dataset(path)) == 0


def test_load_dataset_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DatasetReadError, match="Could not open"):
        load_dataset(tmp_path / "absent.csv")


@pytest.mark.parametrize(
    "bad_row",
    ["1.0,2.0,3.0", "1.0", "abc,2.0", "1.0,", ""],
)
def test_load_dataset_rejects_malformed_rows(tmp_path: Path, table_writer, bad_row: str) -> None:
    path = table_writer(tmp_path / "data.csv", ["0.0250,5.0000", bad_row, "0.0500,10.0000"])

    with pytest.raises(DatasetParseError, match=":3:"):
        load_dataset(path)


def test_fit_accumulates_sums_sequentially() -> None:
    # A compensated sum would recover the 1.0 lost next to 1e16 and change the slope.
    result = fit(Dataset.from_pairs([(1e16, 0.0), (1.0, 5.0), (-1e16, 0.0)]))

    assert result.slope == 15.0 / (3 * 2 * (1e16 * 1e16))
    assert result.intercept == 5.0 / 3
