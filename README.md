# larexamples

This package holds small, self-contained algorithms for liquid-argon time
projection chamber data. All of them are plain Python and need nothing
outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `larexamples.space_partition`

- `CoordRange(lower, upper)` is a closed interval. It has `contains`,
  `empty`, `valid`, `size` and `offset`.
- `CoordRangeCells(lower, upper, cell_size)` is a range cut into cells.
  `CoordRangeCells.from_range(range, cell_size)` builds one from a plain
  range. `find_cell(c)` gives the cell index, truncated toward zero.
- `dice_volume(range_x, range_y, range_z)` gives the number of cells along
  each axis.
- `position_of(point)` reads `(x, y, z)` from a point. The point may have
  `x`/`y`/`z` attributes, or an `xyz` attribute (a sequence or a callable),
  or it may be a plain sequence. Any other input raises `TypeError`.
- `GridIndexer(size_x, size_y, size_z)` maps a cell id `(ix, iy, iz)` to a
  linear index (`index`) and computes index offsets (`offset`). It checks
  bounds with `has`, `has_x`, `has_y` and `has_z`, and `len()` gives the
  number of cells.
- `SpacePartition(range_x, range_y, range_z)` sorts points into grid cells.
  `fill(points)` stores `(index, point)` entries, where `index` is the
  position of the point in the input. `point_index(point)` gives the cell of
  a point. If the point lies outside the volume, both raise
  `PointOutOfVolumeError`. A partition supports `has`, indexing, iteration
  over its cells and `len()`.

### `larexamples.point_isolation`

- `IsolationConfig(range_x, range_y, range_z, radius2, max_memory=100 MiB)`
  describes the volume, the squared isolation radius and a bound on the grid
  memory. A `max_memory` of 0 turns the bound off.
- `PointIsolationAlg(config)` finds the points that have at least one other
  point within the isolation radius:
  - `remove_isolated_points(points)` returns the indices of the non-isolated
    points, in no specific order. It uses the cell grid, and raises
    `ValueError` if the radius is not positive.
  - `brute_remove_isolated_points(points)` is the quadratic reference
    version. It returns the indices in ascending order.
  - `reconfigure(new_config)` replaces the configuration.
  - `validate_configuration(config)` (static) raises `ConfigurationError`
    with a message that lists every problem: a negative squared radius and
    any reversed range.
  - `maximum_optimal_cell_size(radius)` (static) returns `radius / sqrt(3)`.

### `larexamples.space_point_isolation`

- `SpacePoint(xyz, id=0)` is a reconstructed point.
- `BoundingBox` is an axis-aligned box. It has `extend_to_include` and the
  `range_x`/`range_y`/`range_z` properties. `merge_boxes(boxes)` extends a
  default box, which is degenerate at the origin, to include all the given
  boxes.
- `SpacePointIsolationAlg(radius)`:
  - `setup(tpc_boxes)` configures the algorithm for the merged volume. An
    invalid configuration raises `IsolationSetupError`.
  - `remove_isolated_points(points)` returns the indices of the non-isolated
    space points. Using it before `setup` raises `IsolationSetupError`, and
    an input that is not a `SpacePoint` raises `TypeError`.
- `RemoveIsolatedSpacePoints(space_points_label, radius).produce(space_points,
  tpc_boxes)` returns the non-isolated space points and logs a summary.

### `larexamples.cheat_tracks`

- `TrajectoryPoint(position, momentum)` holds a four-vector position and a
  four-vector momentum.
- `MCParticle(track_id, pdg_code, trajectory, process="primary")` is a
  simulated particle. It has `number_trajectory_points`, `energy` (the energy
  at the first point) and `total_length`.
- `Trajectory(positions, momenta, has_momenta=True)` has `start_momentum` and
  `len()`.
- `CheatTrack(trajectory, particle_id)` is a track with a particle ID. It has
  `momentum` and `has_particle_id`; the ID `0` means invalid.
- `TotallyCheatTrackingAlg(config=None)` has `setup` and `make_track(particle)`.
  `make_track` copies the spatial part of each trajectory point. Components
  within `1e-8` of 0, +1 or -1 are snapped to that value.
- `TotallyCheatTracker(particles_label="largeant", min_length=1.0,
  min_energy=1.0, algo_config=None)` has `accept_particle` and
  `produce(particles)`. `produce` returns a `TrackerOutput` holding the
  tracks and the `(track index, particle index)` associations.

### `larexamples.reco_proxy`

- `describe_vertices(vertices, links, tracks, fits, track_hits)` builds text
  lines describing each `Vertex`, its linked `RecoTrack`s (through
  `VertexTrackLink`), their `MCSFitResult` and, for tracks with fewer than 50
  hits, each `RecoHit`. It logs the lines and returns them. It raises
  `ValueError` if the parallel lists differ in length, and `IndexError` if a
  link has an out-of-range key.

### `larexamples.debugging`

- `Exploder(manage_bad_alloc=True, manage_out_of_range=True,
  manage_art_exception=True).analyze()` raises a `MemoryError`, then an
  `IndexError`, then a `LogicError`. Each flag decides whether that error is
  caught or propagates.
- `Disturbance(n_art_exceptions).produce()` raises and catches that many
  `LogicError`s and returns the count.

## Example

```python
from larexamples.point_isolation import IsolationConfig, PointIsolationAlg
from larexamples.space_partition import CoordRange

config = IsolationConfig(
    range_x=CoordRange(-1.0, 1.0),
    range_y=CoordRange(-1.0, 1.0),
    range_z=CoordRange(-5.0, 5.0),
    radius2=0.25,
)
PointIsolationAlg.validate_configuration(config)
alg = PointIsolationAlg(config)

points = [(0.0, 0.0, 0.0), (0.1, 0.0, 0.0), (0.9, 0.9, 4.0)]
print(sorted(alg.remove_isolated_points(points)))  # [0, 1]
```

## What this package does not do

The package is a library only. It has no command-line program, and it does
not read or write event data files, detector geometry descriptions,
histograms or n-tuples. Every input is an ordinary Python object that the
caller builds: points, boxes, particles, tracks and hits. Every result comes
back as a Python value. Summaries go through the standard `logging` module.