"""Fixed-width text report for a regression run."""

from __future__ import annotations

from spring_fit.models import RegressionResult

_WIDTH = 58
_TITLE = "Spring Constant Analysis: Results"


def format_report(n: int, result: RegressionResult) -> str:
    """Render sample count, slope, intercept and R^2 as a bannered block."""
    banner = "=" * _WIDTH
    rule = "-" * _WIDTH
    lines = [
        banner,
        f"      {_TITLE}",
        banner,
        f"Data Points (n)                   : {n}",
        rule,
        f"Spring Constant (k) [Slope]       : {result.slope:.3f} N/m",
        f"Intercept (a0)                    : {result.intercept:.3f} N",
        rule,
        f"Coefficient of Determination (R^2): {result.r_squared:.3f}",
        banner,
    ]
    return "\n".join(lines) + "\n"
