"""
Long-Table Validation

Validates a long-format trajectory table before plotting or analysis.

PRINCIPLE: "Every trajectory covers the same time grid exactly once"

Usage:
    from trajsim.validation import validate_table

    report = validate_table(df, facet_col='noise')
    print(report.summary())

    # Raise instead of reporting
    validate_table(df, strict=True)
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import polars as pl

# Incomplete trajectory keys listed in a summary before truncating
_SHOWN_KEYS = 5


class TableValidationError(Exception):
    """Raised when a long-format table fails validation."""

    def __init__(self, errors: List[str], warnings: List[str] = None):
        self.errors = errors
        self.warnings = warnings or []
        super().__init__("; ".join(errors))


@dataclass
class TableValidationReport:
    """Outcome of validate_table: status, messages and table counts."""

    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    total_rows: int = 0
    trajectories: int = 0
    time_points: int = 0
    facet_levels: int = 0
    # "<facet>/<id>" (or "<id>") keys whose time coverage differs from the grid
    incomplete_trajectories: List[str] = field(default_factory=list)

    def summary(self) -> str:
        """One status line, then one line per problem."""
        shape = f"{self.trajectories} trajectories x {self.time_points} times"
        if self.facet_levels:
            shape += f", {self.facet_levels} facet levels"
        status = "PASSED" if self.valid else "FAILED"
        lines = [f"Table check {status}: {self.total_rows:,} rows, {shape}"]

        keys = self.incomplete_trajectories
        if keys:
            shown = ', '.join(keys[:_SHOWN_KEYS])
            more = f" (+{len(keys) - _SHOWN_KEYS} more)" if len(keys) > _SHOWN_KEYS else ""
            lines.append(f"  incomplete: {shown}{more}")
        lines.extend(f"  error: {e}" for e in self.errors)
        lines.extend(f"  warning: {w}" for w in self.warnings)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_table(
    df: pl.DataFrame,
    x_col: str = 'Time',
    y_col: str = 'value',
    group_col: str = 'variable',
    facet_col: Optional[str] = None,
    strict: bool = False,
) -> TableValidationReport:
    """
    Validate a long-format trajectory table.

    Checks:
        1. x, y and group columns exist (and the facet column when given)
        2. No nulls in the time column, warnings for null/non-finite values
        3. Each trajectory (per facet level) has one row per grid time

    Args:
        df: Long-format table
        x_col: Time column
        y_col: Value column
        group_col: Trajectory id column
        facet_col: Optional second grouping column (ids are scoped per level)
        strict: If True, raise TableValidationError on failure

    Returns:
        TableValidationReport with validation results

    Raises:
        TableValidationError: If validation fails and strict=True
    """
    report = TableValidationReport()
    report.total_rows = df.height

    required = [x_col, y_col, group_col] + ([facet_col] if facet_col else [])
    missing = [c for c in required if c not in df.columns]
    if missing:
        report.errors.append(f"Missing required columns: {missing}")
        report.valid = False
        if strict:
            raise TableValidationError(report.errors, report.warnings)
        return report

    keys = [facet_col, group_col] if facet_col else [group_col]

    if df[x_col].null_count() > 0:
        report.errors.append(f"{df[x_col].null_count():,} null values in '{x_col}'")
        report.valid = False

    null_values = df[y_col].null_count()
    if null_values > 0:
        pct = 100.0 * null_values / max(df.height, 1)
        report.warnings.append(f"{null_values:,} null values ({pct:.1f}%)")
    elif df.height and df[y_col].dtype.is_float():
        non_finite = df.filter(~pl.col(y_col).is_finite()).height
        if non_finite > 0:
            pct = 100.0 * non_finite / df.height
            report.warnings.append(f"{non_finite:,} non-finite values ({pct:.1f}%)")

    if df.height == 0:
        report.warnings.append("Table is empty")
    else:
        m = df[x_col].n_unique()
        report.time_points = m

        stats = df.group_by(keys).agg(
            pl.len().alias('_rows'),
            pl.col(x_col).n_unique().alias('_times'),
        )
        report.trajectories = stats.height
        if facet_col:
            report.facet_levels = df[facet_col].n_unique()

        bad = stats.filter((pl.col('_rows') != m) | (pl.col('_times') != m))
        if bad.height > 0:
            report.incomplete_trajectories = sorted(
                '/'.join(str(v) for v in row) for row in bad.select(keys).iter_rows()
            )
            report.errors.append(
                f"{bad.height} trajectories do not cover the {m}-point time grid exactly once"
            )
            report.valid = False

    if not report.valid and strict:
        raise TableValidationError(report.errors, report.warnings)

    return report
