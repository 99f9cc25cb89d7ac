"""Algorithms for liquid-argon detector data: space point isolation, truth-based tracks, reconstruction summaries and error-raising examples."""

__version__ = "0.1.0"
__all__ = [
    "space_partition",
    "point_isolation",
    "space_point_isolation",
    "cheat_tracks",
    "reco_proxy",
    "debugging",
]