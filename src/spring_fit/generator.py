"""Synthetic spring measurement generation."""

from __future__ import annotations

import csv
import random
from collections.abc import Callable
from pathlib import Path

from spring_fit.exceptions import DatasetWriteError, InvalidParameterError
from spring_fit.models import Dataset

HEADER = ("displacement_m", "force_N")
DISPLACEMENT_STEP_M = 0.025


def make_rng(seed: int | None = None) -> random.Random:
    """Return a random source; ``None`` seeds it from OS entropy."""
    return random.Random(seed)


def generate(
    path: Path,
    true_slope: float,
    num_points: int,
    noise_stddev: float,
    rng: random.Random | None = None,
    progress_callback: Callable[[str], None] | None = None,
) -> Dataset:
    """Write ``num_points`` noisy samples of ``force = true_slope * x`` to ``path``.

    Displacements are ``i * 0.025`` for ``i`` in ``1..num_points``. Each force
    gets independent Gaussian noise with mean 0 and ``noise_stddev`` spread.
    The file is created or truncated, and the samples are returned at full
    precision.
    """
    if num_points < 0:
        raise InvalidParameterError(f"num_points must be >= 0, got {num_points}.")
    if noise_stddev < 0:
        raise InvalidParameterError(f"noise_stddev must be >= 0, got {noise_stddev}.")
    source = rng if rng is not None else make_rng()
    notify = progress_callback or (lambda _message: None)

    notify(f"Generating {num_points} data points...")
    pairs: list[tuple[float, float]] = []
    for i in range(1, num_points + 1):
        x = i * DISPLACEMENT_STEP_M
        y_clean = true_slope * x
        pairs.append((x, y_clean + source.gauss(0.0, noise_stddev)))
    dataset = Dataset.from_pairs(pairs)
    write_dataset(dataset, path)
    notify(f"Data successfully generated and saved to {path}")
    return dataset


def write_dataset(dataset: Dataset, path: Path) -> None:
    """Write dataset as a two-column table with four fractional digits."""
    try:
        with path.open("w", newline="", encoding="utf-8") as file_obj:
            writer = csv.writer(file_obj, lineterminator="\n")
            writer.writerow(HEADER)
            for sample in dataset.samples:
                writer.writerow([f"{sample.x:.4f}", f"{sample.y:.4f}"])
    except OSError as exc:
        raise DatasetWriteError(f"Could not write {path}: {exc}") from exc
