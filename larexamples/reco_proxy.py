"""Walk vertices, their associated tracks, fits and hits, and describe them."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Sequence

__all__ = [
    "Vertex",
    "RecoTrack",
    "VertexTrackLink",
    "MCSFitResult",
    "RecoHit",
    "describe_vertices",
]

_log = logging.getLogger("ProxyExample")

# Hits of a track are listed only when the track has fewer than this many.
_MAX_LISTED_HITS = 50


@dataclass(frozen=True)
class Vertex:
    """A reconstructed vertex: position (x, y, z) and fit chi2."""

    position: tuple[float, float, float]
    chi2: float = 0.0


@dataclass(frozen=True)
class RecoTrack:
    """A reconstructed track: its length and number of valid points."""

    length: float
    count_valid_points: int


@dataclass(frozen=True)
class VertexTrackLink:
    """Association of a vertex with a track, carrying the propagation distance."""

    vertex_index: int
    track_key: int
    prop_dist: float


@dataclass(frozen=True)
class MCSFitResult:
    """Result of the multiple Coulomb scattering momentum fit of a track."""

    best_momentum: float


@dataclass(frozen=True)
class RecoHit:
    """A reconstructed hit on a wire, with its peak time [ticks]."""

    wire_id: str
    peak_time: float


def _fmt(value: float) -> str:
    return f"{value:g}"


def _check_key(key: int, size: int, what: str) -> None:
    if not 0 <= key < size:
        raise IndexError(f"{what} key {key} out of range (0 to {size - 1})")


def describe_vertices(
    vertices: Iterable[Vertex],
    links: Iterable[VertexTrackLink],
    tracks: Sequence[RecoTrack],
    fits: Sequence[MCSFitResult],
    track_hits: Sequence[Iterable[RecoHit]],
) -> list[str]:
    """Return (and log) a description of each vertex and its associated tracks.

    ``fits`` and ``track_hits`` are parallel to ``tracks``: entry ``k`` belongs
    to the track with key ``k``. Links are reported per vertex in input order.
    """
    vertices = list(vertices)
    tracks = list(tracks)
    fits = list(fits)
    hits_per_track = [list(hits) for hits in track_hits]
    if len(fits) != len(tracks):
        raise ValueError(f"{len(fits)} fit results for {len(tracks)} tracks")
    if len(hits_per_track) != len(tracks):
        raise ValueError(f"{len(hits_per_track)} hit lists for {len(tracks)} tracks")

    links_by_vertex: dict[int, list[VertexTrackLink]] = defaultdict(list)
    for link in links:
        _check_key(link.vertex_index, len(vertices), "vertex")
        _check_key(link.track_key, len(tracks), "track")
        links_by_vertex[link.vertex_index].append(link)

    lines: list[str] = []
    for vertex_index, vertex in enumerate(vertices):
        pos = ",".join(_fmt(c) for c in vertex.position)
        lines.append(f"vertex pos=({pos}) chi2={_fmt(vertex.chi2)}")
        for link in links_by_vertex[vertex_index]:
            track = tracks[link.track_key]
            lines.append(
                f"track with key={link.track_key} and length={_fmt(track.length)}"
                f" has propDist from vertex={_fmt(link.prop_dist)}"
            )
            hits = hits_per_track[link.track_key]
            fit = fits[link.track_key]
            lines.append(
                f"\tCountValidPoints={track.count_valid_points} and nHits={len(hits)}"
                f" and MCSMom={_fmt(fit.best_momentum)}"
            )
            if len(hits) < _MAX_LISTED_HITS:
                lines.extend(
                    f"\t\thit wire={hit.wire_id} peak time={_fmt(hit.peak_time)}"
                    for hit in hits
                )

    for line in lines:
        _log.info("%s", line)
    return lines