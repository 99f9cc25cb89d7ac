"""Tracks built directly from simulated particle trajectories."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

__all__ = [
    "TrajectoryPoint",
    "MCParticle",
    "Trajectory",
    "CheatTrack",
    "TotallyCheatTrackingAlg",
    "TotallyCheatTracker",
    "TrackerOutput",
]

_log = logging.getLogger("TotallyCheatTracker")

Vector3 = tuple[float, float, float]

# Components this close to 0, +1 or -1 are snapped to that value.
_ROUNDING_TOLERANCE = 1e-8


def _rounded01(value: float, tolerance: float) -> float:
    """Snap ``value`` to 0, +1 or -1 when it lies within ``tolerance`` of it."""
    for target in (0.0, 1.0, -1.0):
        if abs(value - target) < tolerance:
            return target
    return value


def _rounded_vector(vector: Sequence[float], tolerance: float) -> Vector3:
    return tuple(_rounded01(c, tolerance) for c in vector[:3])  # type: ignore[return-value]


@dataclass(frozen=True)
class TrajectoryPoint:
    """A point of a simulated trajectory.

    ``position`` is (x, y, z, t) and ``momentum`` is (px, py, pz, E).
    """

    position: tuple[float, float, float, float]
    momentum: tuple[float, float, float, float]


@dataclass
class MCParticle:
    """A simulated particle with its sampled trajectory."""

    track_id: int
    pdg_code: int
    trajectory: list[TrajectoryPoint] = field(default_factory=list)
    process: str = "primary"

    def number_trajectory_points(self) -> int:
        """Return the number of points in the trajectory."""
        return len(self.trajectory)

    def energy(self) -> float:
        """Return the energy at the first trajectory point [GeV]."""
        if not self.trajectory:
            raise IndexError("particle has no trajectory points")
        return self.trajectory[0].momentum[3]

    def total_length(self) -> float:
        """Return the length of the path through all the trajectory points."""
        return sum(
            math.dist(a.position[:3], b.position[:3])
            for a, b in zip(self.trajectory, self.trajectory[1:])
        )


@dataclass(frozen=True)
class Trajectory:
    """A trajectory in phase space: positions and momenta sampled together."""

    positions: tuple[Vector3, ...]
    momenta: tuple[Vector3, ...]
    has_momenta: bool = True

    def __post_init__(self) -> None:
        if len(self.positions) != len(self.momenta):
            raise ValueError(
                f"trajectory has {len(self.positions)} positions "
                f"but {len(self.momenta)} momenta"
            )

    def start_momentum(self) -> float:
        """Return the magnitude of the momentum at the first point."""
        if not self.momenta:
            raise ValueError("empty trajectory has no start momentum")
        return math.hypot(*self.momenta[0])

    def __len__(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class CheatTrack:
    """A reconstructed track: a trajectory plus a particle ID (PDG standard)."""

    INVALID_PARTICLE_ID = 0

    trajectory: Trajectory
    particle_id: int = INVALID_PARTICLE_ID

    def momentum(self) -> float:
        """Return the initial momentum of the particle."""
        return self.trajectory.start_momentum()

    def has_particle_id(self) -> bool:
        """Return whether the particle ID is valid."""
        return self.particle_id != self.INVALID_PARTICLE_ID

    def __str__(self) -> str:
        return (
            f"particle: ID {self.particle_id}; momentum: {self.momentum()} GeV/c; "
            f"{len(self.trajectory)} trajectory points"
        )


class TotallyCheatTrackingAlg:
    """Makes one track per simulated particle, copying its trajectory exactly."""

    def __init__(self, config: dict | None = None) -> None:
        self.config = dict(config or {})
        self.is_set_up = False

    def setup(self) -> None:
        """Prepare the algorithm; it needs no external resources."""
        self.is_set_up = True

    def make_track(self, particle: MCParticle) -> CheatTrack:
        """Return a track with one point per trajectory point of ``particle``."""
        positions = tuple(
            _rounded_vector(point.position, _ROUNDING_TOLERANCE)
            for point in particle.trajectory
        )
        momenta = tuple(
            _rounded_vector(point.momentum, _ROUNDING_TOLERANCE)
            for point in particle.trajectory
        )
        return CheatTrack(Trajectory(positions, momenta, True), particle.pdg_code)


@dataclass
class TrackerOutput:
    """Tracks made by the tracker and their (track, particle) index pairs."""

    tracks: list[CheatTrack]
    associations: list[tuple[int, int]]


class TotallyCheatTracker:
    """Creates a track for each simulated particle passing the selection."""

    def __init__(
        self,
        particles_label: str = "largeant",
        min_length: float = 1.0,
        min_energy: float = 1.0,
        algo_config: dict | None = None,
    ) -> None:
        self.particles_label = particles_label
        self.min_length = min_length
        self.min_energy = min_energy
        self.track_maker = TotallyCheatTrackingAlg(algo_config)

    def accept_particle(self, particle: MCParticle) -> bool:
        """Return whether ``particle`` satisfies the selection criteria."""
        if particle.number_trajectory_points() == 0:
            return False
        if particle.energy() < self.min_energy:
            return False
        if particle.total_length() < self.min_length:
            return False
        return True

    def produce(self, particles: Iterable[MCParticle]) -> TrackerOutput:
        """Return the tracks and their one-to-one links to the input particles."""
        particles = list(particles)
        self.track_maker.setup()
        tracks: list[CheatTrack] = []
        associations: list[tuple[int, int]] = []
        for particle_index, particle in enumerate(particles):
            if not self.accept_particle(particle):
                continue
            tracks.append(self.track_maker.make_track(particle))
            associations.append((len(tracks) - 1, particle_index))
        _log.info(
            "Reconstructed %d tracks out of %d particles from '%s'",
            len(tracks),
            len(particles),
            self.particles_label,
        )
        return TrackerOutput(tracks, associations)