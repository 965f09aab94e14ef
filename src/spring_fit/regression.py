"""Dataset loading and ordinary least-squares fitting."""

from __future__ import annotations

import csv
import math
from pathlib import Path

from spring_fit.exceptions import DatasetParseError, DatasetReadError
from spring_fit.models import Dataset, RegressionResult


def load_dataset(path: Path) -> Dataset:
    """Read a two-column table; the first line is a header and is skipped."""
    try:
        file_obj = path.open(newline="", encoding="utf-8")
    except OSError as exc:
        raise DatasetReadError(f"Could not open {path}: {exc}") from exc

    pairs: list[tuple[float, float]] = []
    with file_obj:
        reader = csv.reader(file_obj)
        try:
            next(reader, None)
            for row in reader:
                pairs.append(_parse_row(row, line_number=reader.line_num, path=path))
        except UnicodeDecodeError as exc:
            raise DatasetParseError(f"{path} is not a UTF-8 text table: {exc}") from exc
    return Dataset.from_pairs(pairs)


def fit(data: Dataset) -> RegressionResult:
    """Fit ``y = intercept + slope * x`` by closed-form least squares.

    An empty dataset yields an all-zero result. When every ``y`` is equal the
    total sum of squares is zero and ``r_squared`` is reported as exactly 1.0.
    ``r_squared`` is not clamped, so a poor fit can be negative.

    If every ``x`` is identical (including a single sample) the slope
    denominator is zero and the slope becomes NaN or a signed infinity, which
    then propagates into the intercept and ``r_squared``.

    Sums are accumulated left to right without compensation, so results do
    not depend on the interpreter's ``sum`` implementation.
    """
    n = len(data)
    if n == 0:
        return RegressionResult(slope=0.0, intercept=0.0, r_squared=0.0)

    xs = data.xs
    ys = data.ys
    sum_x = 0.0
    sum_y = 0.0
    sum_xy = 0.0
    sum_x_sq = 0.0
    for x, y in zip(xs, ys, strict=True):
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x_sq += x * x

    slope = _ieee_divide(n * sum_xy - sum_x * sum_y, n * sum_x_sq - sum_x * sum_x)
    mean_x = sum_x / n
    mean_y = sum_y / n
    intercept = mean_y - slope * mean_x

    ss_res = 0.0
    ss_tot = 0.0
    for x, y in zip(xs, ys, strict=True):
        residual = y - (intercept + slope * x)
        deviation = y - mean_y
        ss_res += residual * residual
        ss_tot += deviation * deviation

    r_squared = 1.0 - (ss_res / ss_tot) if ss_tot > 0 else 1.0
    return RegressionResult(slope=slope, intercept=intercept, r_squared=r_squared)


def _parse_row(row: list[str], line_number: int, path: Path) -> tuple[float, float]:
    if len(row) != 2:
        raise DatasetParseError(
            f"{path}:{line_number}: expected 2 comma-separated fields, got {len(row)}."
        )
    try:
        return float(row[0]), float(row[1])
    except ValueError as exc:
        raise DatasetParseError(
            f"{path}:{line_number}: fields must be numbers, got {','.join(row)!r}."
        ) from exc


def _ieee_divide(numerator: float, denominator: float) -> float:
    # Python raises on float division by zero; keep NaN/inf semantics instead.
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
