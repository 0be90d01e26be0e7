"""
Domain models for duckstats.

`Record` mirrors a row of the benchmark's `records` table. `SummaryStatistics`
holds the five descriptive statistics computed either in Python or by DuckDB,
so both paths can be compared field by field.
"""
from __future__ import annotations

import math
from typing import Dict

from pydantic import BaseModel, Field


class Record(BaseModel):
    """
    A single synthetic measurement.
    """

    id: int = Field(..., description="Sequential index assigned at generation time.")
    value: float = Field(..., allow_inf_nan=False, description="Finite measurement value.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class SummaryStatistics(BaseModel):
    """
    Mean, median, population standard deviation and extrema of a dataset.
    """

    mean: float
    median: float
    stddev: float = Field(..., ge=0.0, description="Population standard deviation.")
    minimum: float
    maximum: float

    model_config = {"frozen": True}

    def as_dict(self) -> Dict[str, float]:
        return self.model_dump()

    def agrees_with(
        self, other: "SummaryStatistics", rel_tol: float = 1e-9, abs_tol: float = 0.0
    ) -> bool:
        """
        True when every statistic matches `other` within the given tolerances.

        `abs_tol` matters only for values near zero, e.g. a minimum of 0.0 or
        the stddev of a constant column.
        """
        mine = self.as_dict()
        theirs = other.as_dict()
        return all(
            math.isclose(mine[key], theirs[key], rel_tol=rel_tol, abs_tol=abs_tol)
            for key in mine
        )


__all__ = ["Record", "SummaryStatistics"]
