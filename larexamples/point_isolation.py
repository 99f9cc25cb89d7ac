"""Detection of isolated points in space."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import product
from typing import Any, Sequence

from larexamples.space_partition import (
    CoordRange,
    CoordRangeCells,
    GridIndexer,
    SpacePartition,
    dice_volume,
    position_of,
)

__all__ = ["IsolationConfig", "ConfigurationError", "PointIsolationAlg"]

# Memory accounted for each (possibly empty) grid cell, in bytes.
_CELL_BYTES = 24


@dataclass
class IsolationConfig:
    """Configuration of the isolation algorithm.

    The ranges describe the volume spanned by the points; ``radius2`` is the
    square of the isolation radius and ``max_memory`` bounds the grid size in
    bytes (0 disables the bound).
    """

    range_x: CoordRange
    range_y: CoordRange
    range_z: CoordRange
    radius2: float
    max_memory: int = 100 * 1048576


class ConfigurationError(RuntimeError):
    """The isolation configuration is invalid."""


class PointIsolationAlg:
    """Selects the points that have at least one other point close enough.

    A point is isolated when no other point lies within the isolation radius.
    Points are grouped into cubic cells so that only nearby cells are compared.
    """

    def __init__(self, config: IsolationConfig) -> None:
        self.configuration = config

    def reconfigure(self, new_config: IsolationConfig) -> None:
        """Replace the configuration (no validation is performed)."""
        self.configuration = new_config

    @staticmethod
    def maximum_optimal_cell_size(radius: float) -> float:
        """Return the largest cell side whose diagonal does not exceed ``radius``."""
        return radius / math.sqrt(3.0)

    @staticmethod
    def validate_configuration(config: IsolationConfig) -> None:
        """Raise ConfigurationError listing every problem in ``config``."""
        errors = []
        if config.radius2 < 0:
            errors.append(f"invalid radius squared ({config.radius2:.6f})")
        for axis, coord_range in (
            ("x", config.range_x),
            ("y", config.range_y),
            ("z", config.range_z),
        ):
            if not coord_range.valid():
                errors.append(
                    f"invalid {axis} range "
                    f"({coord_range.lower:.6f} to {coord_range.upper:.6f})"
                )
        if not errors:
            return
        message = f"{len(errors)} configuration errors found:" + "".join(
            f"\n * {error}" for error in errors
        )
        raise ConfigurationError(message)

    def remove_isolated_points(self, points: Sequence[Any]) -> list[int]:
        """Return the indices of the non-isolated points, in no specific order.

        Raises PointOutOfVolumeError if a point lies outside the configured
        volume.
        """
        points = list(points)
        config = self.configuration
        radius = math.sqrt(config.radius2)
        cell_size = self._compute_cell_size()

        partition = SpacePartition(
            CoordRangeCells.from_range(config.range_x, cell_size),
            CoordRangeCells.from_range(config.range_y, cell_size),
            CoordRangeCells.from_range(config.range_z, cell_size),
        )
        contained = cell_size <= self.maximum_optimal_cell_size(radius)

        neigh_extent = int(math.ceil(radius / cell_size))
        neighbours = self._build_neighborhood(partition.indexer, neigh_extent)
        if not contained:
            neighbours.insert(0, 0)

        partition.fill(points)

        non_isolated: list[int] = []
        for cell_index, cell in enumerate(partition):
            if contained and len(cell) > 1:
                non_isolated.extend(index for index, _ in cell)
                continue
            non_isolated.extend(
                index
                for index, point in cell
                if not self._isolated_within_neighborhood(
                    partition, cell_index, index, point, neighbours
                )
            )
        return non_isolated

    def brute_remove_isolated_points(self, points: Sequence[Any]) -> list[int]:
        """Reference quadratic implementation of ``remove_isolated_points``."""
        points = list(points)
        return [
            i
            for i, point in enumerate(points)
            if any(
                self._close_enough(point, other)
                for j, other in enumerate(points)
                if j != i
            )
        ]

    def _compute_cell_size(self) -> float:
        config = self.configuration
        cell_size = self.maximum_optimal_cell_size(math.sqrt(config.radius2))
        if cell_size <= 0:
            raise ValueError("isolation radius must be positive")
        if config.max_memory == 0:
            return cell_size
        while True:
            nx, ny, nz = dice_volume(
                CoordRangeCells.from_range(config.range_x, cell_size),
                CoordRangeCells.from_range(config.range_y, cell_size),
                CoordRangeCells.from_range(config.range_z, cell_size),
            )
            n_cells = nx * ny * nz
            if n_cells <= 1:
                break
            if n_cells * _CELL_BYTES < config.max_memory:
                break
            cell_size *= 2
        return cell_size

    @staticmethod
    def _build_neighborhood(indexer: GridIndexer, extent: int) -> list[int]:
        shifts = range(-extent, extent + 1)
        return [
            indexer.offset((0, 0, 0), cell_id)
            for cell_id in product(shifts, shifts, shifts)
            if cell_id != (0, 0, 0)
        ]

    def _isolated_within_neighborhood(
        self,
        partition: SpacePartition,
        cell_index: int,
        point_index: int,
        point: Any,
        neighbours: list[int],
    ) -> bool:
        for offset in neighbours:
            neighbour = cell_index + offset
            if not partition.has(neighbour):
                continue
            for other_index, other in partition[neighbour]:
                if other_index != point_index and self._close_enough(point, other):
                    return False
        return True

    def _close_enough(self, a: Any, b: Any) -> bool:
        ax, ay, az = position_of(a)
        bx, by, bz = position_of(b)
        return (ax - bx) ** 2 + (ay - by) ** 2 + (az - bz) ** 2 <= self.configuration.radius2