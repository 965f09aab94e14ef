"""Core typed models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Sample(BaseModel):
    """One displacement/force measurement."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class Dataset(BaseModel):
    """Ordered sequence of samples."""

    samples: list[Sample] = Field(default_factory=list)

    @classmethod
    def from_pairs(cls, pairs: list[tuple[float, float]]) -> Dataset:
        """Build a dataset from ``(x, y)`` tuples, keeping their order."""
        return cls(samples=[Sample(x=x, y=y) for x, y in pairs])

    @property
    def xs(self) -> list[float]:
        return [sample.x for sample in self.samples]

    @property
    def ys(self) -> list[float]:
        return [sample.y for sample in self.samples]

    def __len__(self) -> int:
        return len(self.samples)


class RegressionResult(BaseModel):
    """Ordinary least-squares fit of a dataset."""

    model_config = ConfigDict(frozen=True)

    slope: float
    intercept: float
    r_squared: float


class RunConfig(BaseModel):
    """Runtime configuration."""

    model_config = ConfigDict(extra="forbid")

    data_path: str = "data.csv"
    true_slope: float = 200.0
    num_points: int = Field(default=20, ge=0)
    noise_stddev: float = Field(default=1.5, ge=0.0)
    seed: int | None = None
    trace_path: str | None = None
