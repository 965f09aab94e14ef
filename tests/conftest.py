from __future__ import annotations

import random
from collections.abc import Callable
from pathlib import Path

import pytest


def write_table(path: Path, rows: list[str], header: str = "displacement_m,force_N") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def table_writer() -> Callable[..., Path]:
    return write_table


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "data.csv"


@pytest.fixture
def perfect_line_path(tmp_path: Path) -> Path:
    return write_table(tmp_path / "line.csv", ["1,2", "2,4", "3,6", "4,8"])
