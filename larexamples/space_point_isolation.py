"""Removal of isolated reconstructed space points within a detector volume."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from larexamples.point_isolation import (
    ConfigurationError,
    IsolationConfig,
    PointIsolationAlg,
)
from larexamples.space_partition import CoordRange

__all__ = [
    "SpacePoint",
    "BoundingBox",
    "merge_boxes",
    "IsolationSetupError",
    "SpacePointIsolationAlg",
    "RemoveIsolatedSpacePoints",
]

_log = logging.getLogger("RemoveIsolatedSpacePoints")


@dataclass(frozen=True)
class SpacePoint:
    """A reconstructed point in space; ``xyz`` is its position [cm]."""

    xyz: tuple[float, float, float]
    id: int = 0


@dataclass
class BoundingBox:
    """An axis-aligned box; a default box is degenerate at the origin."""

    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0
    min_z: float = 0.0
    max_z: float = 0.0

    def extend_to_include(self, other: "BoundingBox") -> None:
        """Grow this box in place so that it also contains ``other``."""
        self.min_x = min(self.min_x, other.min_x)
        self.max_x = max(self.max_x, other.max_x)
        self.min_y = min(self.min_y, other.min_y)
        self.max_y = max(self.max_y, other.max_y)
        self.min_z = min(self.min_z, other.min_z)
        self.max_z = max(self.max_z, other.max_z)

    @property
    def range_x(self) -> CoordRange:
        return CoordRange(self.min_x, self.max_x)

    @property
    def range_y(self) -> CoordRange:
        return CoordRange(self.min_y, self.max_y)

    @property
    def range_z(self) -> CoordRange:
        return CoordRange(self.min_z, self.max_z)


def merge_boxes(boxes: Iterable[BoundingBox]) -> BoundingBox:
    """Return a default box extended to include all ``boxes``."""
    merged = BoundingBox()
    for box in boxes:
        merged.extend_to_include(box)
    return merged


class IsolationSetupError(RuntimeError):
    """The space point isolation algorithm could not be set up or used."""


class SpacePointIsolationAlg:
    """Applies point isolation to space points in the volume of a detector.

    ``setup`` must be called with the boxes of the detector TPCs before use,
    and again whenever the geometry changes.
    """

    def __init__(self, radius: float) -> None:
        self.radius2 = radius * radius
        self._isolation_alg: PointIsolationAlg | None = None

    def setup(self, tpc_boxes: Iterable[BoundingBox]) -> None:
        """Configure the algorithm for the volume spanned by ``tpc_boxes``."""
        box = merge_boxes(tpc_boxes)
        config = IsolationConfig(
            range_x=box.range_x,
            range_y=box.range_y,
            range_z=box.range_z,
            radius2=self.radius2,
        )
        try:
            PointIsolationAlg.validate_configuration(config)
        except ConfigurationError as exc:
            raise IsolationSetupError(
                f"Error in PointIsolationAlg configuration: {exc}\n"
            ) from exc
        if self._isolation_alg is None:
            self._isolation_alg = PointIsolationAlg(config)
        else:
            self._isolation_alg.reconfigure(config)

    def remove_isolated_points(self, points: Sequence[SpacePoint]) -> list[int]:
        """Return the indices of the non-isolated points, in no specific order."""
        points = list(points)
        for point in points:
            if not isinstance(point, SpacePoint):
                raise TypeError(f"not a space point: {point!r}")
        if self._isolation_alg is None:
            raise IsolationSetupError("algorithm used before setup()")
        return self._isolation_alg.remove_isolated_points(points)


class RemoveIsolatedSpacePoints:
    """Produces the collection of the non-isolated input space points."""

    def __init__(self, space_points_label: str, radius: float) -> None:
        self.space_points_label = space_points_label
        self.isolation_alg = SpacePointIsolationAlg(radius)

    def produce(
        self, space_points: Sequence[SpacePoint], tpc_boxes: Iterable[BoundingBox]
    ) -> list[SpacePoint]:
        """Return copies of the space points that are not isolated."""
        space_points = list(space_points)
        self.isolation_alg.setup(tpc_boxes)
        indices = self.isolation_alg.remove_isolated_points(space_points)
        social = [space_points[index] for index in indices]
        _log.info(
            "Found %d/%d isolated space points in '%s'",
            len(social),
            len(space_points),
            self.space_points_label,
        )
        return social