"""Reduction run configuration schema and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from density_reduction.approx.grid import uniform_grid
from density_reduction.exceptions import ConfigValidationError, InvalidInputError

DEFAULT_GRID_STEP = 0.0001


@dataclass(slots=True)
class ReductionConfig:
    column: str = "x"
    group_by: list[str] = field(default_factory=list)
    grid_step: Optional[float] = DEFAULT_GRID_STEP
    grid_points: Optional[int] = None
    max_workers: Optional[int] = None
    bandwidth: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.column or not self.column.strip():
            raise ConfigValidationError("column is required")
        if self.column in self.group_by:
            raise ConfigValidationError("column cannot also be a group_by column")
        if len(set(self.group_by)) != len(self.group_by):
            raise ConfigValidationError("group_by columns must be unique")
        if self.grid_points is not None:
            # An explicit point count wins over the default step.
            self.grid_step = None
            if self.grid_points < 2:
                raise ConfigValidationError("grid_points must be >= 2")
        elif self.grid_step is None:
            raise ConfigValidationError("one of grid_step or grid_points is required")
        elif not 0 < self.grid_step <= 1:
            raise ConfigValidationError("grid_step must be in (0, 1]")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigValidationError("max_workers must be positive when set")
        if self.bandwidth is not None and self.bandwidth <= 0:
            raise ConfigValidationError("bandwidth must be positive when set")

    def build_grid(self) -> np.ndarray:
        try:
            return uniform_grid(step=self.grid_step, n_points=self.grid_points)
        except InvalidInputError as exc:
            raise ConfigValidationError(str(exc)) from exc

    @classmethod
    def from_dict(cls, data: dict) -> "ReductionConfig":
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "column": self.column,
            "group_by": list(self.group_by),
            "grid_step": self.grid_step,
            "grid_points": self.grid_points,
            "max_workers": self.max_workers,
            "bandwidth": self.bandwidth,
        }
