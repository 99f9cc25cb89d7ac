"""Organise points in space into a regular 3D grid of cubic cells."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Sequence

__all__ = [
    "CoordRange",
    "CoordRangeCells",
    "dice_volume",
    "position_of",
    "GridIndexer",
    "PointOutOfVolumeError",
    "SpacePartition",
]


@dataclass(frozen=True)
class CoordRange:
    """A closed interval of coordinates."""

    lower: float
    upper: float

    def contains(self, c: float) -> bool:
        """Return whether ``c`` lies in the range, boundaries included."""
        return self.lower <= c <= self.upper

    def empty(self) -> bool:
        """Return whether the range has zero extent."""
        return self.lower == self.upper

    def valid(self) -> bool:
        """Return whether the range is well ordered (empty counts as valid)."""
        return self.lower <= self.upper

    def size(self) -> float:
        """Return the extent of the range (not checked for validity)."""
        return self.upper - self.lower

    def offset(self, c: float) -> float:
        """Return the distance of ``c`` from the lower bound."""
        return c - self.lower


@dataclass(frozen=True)
class CoordRangeCells(CoordRange):
    """A coordinate range diced into cells of a fixed size."""

    cell_size: float = 1.0

    @classmethod
    def from_range(cls, coord_range: CoordRange, cell_size: float) -> "CoordRangeCells":
        """Build a diced range from a plain range and a cell size."""
        return cls(coord_range.lower, coord_range.upper, cell_size)

    def find_cell(self, c: float) -> int:
        """Return the index of the cell holding ``c`` (truncated toward zero)."""
        return int(self.offset(c) / self.cell_size)


def dice_volume(
    range_x: CoordRangeCells, range_y: CoordRangeCells, range_z: CoordRangeCells
) -> tuple[int, int, int]:
    """Return the number of cells along each axis for the given diced ranges."""
    return tuple(
        int(math.ceil(r.size() / r.cell_size)) for r in (range_x, range_y, range_z)
    )  # type: ignore[return-value]


def position_of(point: Any) -> tuple[float, float, float]:
    """Extract the (x, y, z) position of a point.

    Objects with ``x``, ``y`` and ``z`` attributes, objects with an ``xyz``
    sequence attribute, and plain sequences ``(x, y, z, ...)`` are supported.
    """
    if all(hasattr(point, name) for name in ("x", "y", "z")):
        return (point.x, point.y, point.z)
    xyz = getattr(point, "xyz", None)
    if xyz is not None:
        coords = xyz() if callable(xyz) else xyz
        return (coords[0], coords[1], coords[2])
    try:
        return (point[0], point[1], point[2])
    except (TypeError, IndexError, KeyError) as exc:
        raise TypeError(f"cannot extract a 3D position from {point!r}") from exc


@dataclass(frozen=True)
class GridIndexer:
    """Maps 3D cell identifiers to linear cell indices and back."""

    size_x: int
    size_y: int
    size_z: int

    def index(self, cell_id: Sequence[int]) -> int:
        """Return the linear index of the cell ``(ix, iy, iz)``."""
        ix, iy, iz = cell_id
        return (ix * self.size_y + iy) * self.size_z + iz

    def offset(self, origin: Sequence[int], cell_id: Sequence[int]) -> int:
        """Return the index difference from ``origin`` to ``cell_id``."""
        return self.index(cell_id) - self.index(origin)

    def has(self, index: int) -> bool:
        """Return whether ``index`` (possibly negative) names a grid cell."""
        return 0 <= index < len(self)

    def has_x(self, ix: int) -> bool:
        """Return whether ``ix`` is a valid cell position on the x axis."""
        return 0 <= ix < self.size_x

    def has_y(self, iy: int) -> bool:
        """Return whether ``iy`` is a valid cell position on the y axis."""
        return 0 <= iy < self.size_y

    def has_z(self, iz: int) -> bool:
        """Return whether ``iz`` is a valid cell position on the z axis."""
        return 0 <= iz < self.size_z

    def __len__(self) -> int:
        return self.size_x * self.size_y * self.size_z


class PointOutOfVolumeError(RuntimeError):
    """A point lies outside the volume covered by a partition."""


class SpacePartition:
    """A container of points sorted into the cubic cells of a 3D grid.

    Each cell holds ``(index, point)`` entries, where ``index`` is the position
    of the point in the sequence it was filled from.
    """

    def __init__(
        self,
        range_x: CoordRangeCells,
        range_y: CoordRangeCells,
        range_z: CoordRangeCells,
    ) -> None:
        self.range_x = range_x
        self.range_y = range_y
        self.range_z = range_z
        self.indexer = GridIndexer(*dice_volume(range_x, range_y, range_z))
        self._cells: list[list[tuple[int, Any]]] = [[] for _ in range(len(self.indexer))]

    def fill(self, points: Iterable[Any]) -> None:
        """Add all the points to their cells.

        Raises PointOutOfVolumeError if a point is outside the covered volume.
        """
        for index, point in enumerate(points):
            self._cells[self.point_index(point)].append((index, point))

    def point_index(self, point: Any) -> int:
        """Return the index of the cell the point belongs to.

        Raises PointOutOfVolumeError if the point is outside the covered volume.
        """
        x, y, z = position_of(point)
        xc = self.range_x.find_cell(x)
        if not self.indexer.has_x(xc):
            raise PointOutOfVolumeError(f"Point out of the volume (x = {x:.6f})")
        yc = self.range_y.find_cell(y)
        if not self.indexer.has_y(yc):
            raise PointOutOfVolumeError(f"Point out of the volume (y = {y:.6f})")
        zc = self.range_z.find_cell(z)
        if not self.indexer.has_z(zc):
            raise PointOutOfVolumeError(f"Point out of the volume (z = {z:.6f})")
        return self.indexer.index((xc, yc, zc))

    def has(self, index: int) -> bool:
        """Return whether there is a cell with the (signed) index."""
        return self.indexer.has(index)

    def __getitem__(self, index: int) -> list[tuple[int, Any]]:
        if not self.has(index):
            raise IndexError(f"cell index {index} out of range")
        return self._cells[index]

    def __iter__(self) -> Iterator[list[tuple[int, Any]]]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)