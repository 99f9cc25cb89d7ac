import math
from types import SimpleNamespace

import pytest

from larexamples.space_partition import (
    CoordRange,
    CoordRangeCells,
    GridIndexer,
    PointOutOfVolumeError,
    SpacePartition,
    dice_volume,
    position_of,
)


def make_partition():
    return SpacePartition(
        CoordRangeCells(-3.0, 3.0, 0.3),
        CoordRangeCells(-4.0, 4.0, 0.4),
        CoordRangeCells(-2.0, 2.0, 0.2),
    )


def test_coord_range_contains_is_inclusive():
    r = CoordRange(-1.0, 2.0)
    assert r.contains(r.lower)
    assert r.contains(r.upper)
    assert not r.contains(r.upper + 0.5)
    assert not r.contains(r.lower - 0.5)


def test_coord_range_empty_and_valid():
    assert CoordRange(1.5, 1.5).empty()
    assert CoordRange(1.5, 1.5).valid()
    assert not CoordRange(1.0, 2.0).empty()
    assert not CoordRange(2.0, 1.0).valid()


def test_coord_range_size_and_offset_consistent():
    r = CoordRange(-2.5, 7.0)
    assert r.offset(r.upper) == r.size()
    assert r.offset(r.lower) == 0
    assert r.lower + r.offset(3.25) == 3.25


def test_coord_range_equality():
    assert CoordRange(0.0, 1.0) == CoordRange(0.0, 1.0)
    assert CoordRange(0.0, 1.0) != CoordRange(0.0, 2.0)


def test_find_cell_truncates():
    r = CoordRangeCells(0.0, 10.0, 2.0)
    assert r.find_cell(r.lower) == 0
    assert r.find_cell(-0.5) == 0
    assert r.find_cell(r.lower + 2.5 * r.cell_size) == 2


def test_from_range_keeps_bounds():
    base = CoordRange(-1.0, 1.0)
    cells = CoordRangeCells.from_range(base, 0.5)
    assert (cells.lower, cells.upper, cells.cell_size) == (-1.0, 1.0, 0.5)


def test_dice_volume_documented_example():
    dims = dice_volume(
        CoordRangeCells(-3.0, 3.0, 0.3),
        CoordRangeCells(-4.0, 4.0, 0.4),
        CoordRangeCells(-2.0, 2.0, 0.2),
    )
    assert dims[0] * dims[1] * dims[2] == 8000


def test_dice_volume_rounds_up():
    r = CoordRangeCells(0.0, 1.0, 0.3)
    dims = dice_volume(r, r, r)
    assert all(d * r.cell_size >= r.size() for d in dims)
    assert all((d - 1) * r.cell_size < r.size() for d in dims)


def test_position_of_supports_several_shapes():
    expected = (1.0, 2.0, 3.0)
    assert position_of([1.0, 2.0, 3.0]) == expected
    assert position_of(SimpleNamespace(x=1.0, y=2.0, z=3.0)) == expected
    assert position_of(SimpleNamespace(xyz=(1.0, 2.0, 3.0))) == expected
    with pytest.raises(TypeError):
        position_of(42)


def test_grid_indexer_is_bijective():
    indexer = GridIndexer(3, 4, 5)
    indices = sorted(
        indexer.index((ix, iy, iz))
        for ix in range(3)
        for iy in range(4)
        for iz in range(5)
    )
    assert indices == list(range(len(indexer)))


def test_grid_indexer_offset_and_bounds():
    indexer = GridIndexer(3, 4, 5)
    origin = (1, 1, 1)
    target = (2, 0, 3)
    assert indexer.offset(origin, target) == indexer.index(target) - indexer.index(origin)
    assert indexer.offset(origin, origin) == 0
    assert indexer.has(0)
    assert not indexer.has(-1)
    assert not indexer.has(len(indexer))
    assert indexer.has_x(2) and not indexer.has_x(3)
    assert indexer.has_y(3) and not indexer.has_y(4)
    assert indexer.has_z(4) and not indexer.has_z(-1)


def test_partition_size_matches_dicing():
    p = make_partition()
    assert len(p) == len(p.indexer)
    assert len(list(p)) == len(p)
    assert all(cell == [] for cell in p)


def test_fill_places_points_in_their_cells():
    p = make_partition()
    points = [(0.5, 0.5, 0.5), (-2.9, 3.9, 1.9), (0.51, 0.52, 0.53), (2.0, -1.0, 0.0)]
    p.fill(points)
    assert sum(len(cell) for cell in p) == len(points)
    for index, point in enumerate(points):
        assert (index, point) in p[p.point_index(point)]


def test_close_points_share_cell():
    p = make_partition()
    a = (0.5, 0.5, 0.5)
    b = (0.51, 0.52, 0.53)
    assert p.point_index(a) == p.point_index(b)
    assert p.point_index(a) != p.point_index((-0.5, 0.5, 0.5))


@pytest.mark.parametrize(
    "point, axis",
    [((10.0, 0.0, 0.0), "x"), ((0.0, -10.0, 0.0), "y"), ((0.0, 0.0, 5.0), "z")],
)
def test_point_out_of_volume(point, axis):
    p = make_partition()
    with pytest.raises(PointOutOfVolumeError, match=f"\\({axis} = "):
        p.point_index(point)
    with pytest.raises(PointOutOfVolumeError):
        p.fill([point])


def test_getitem_rejects_invalid_index():
    p = make_partition()
    assert p.has(len(p) - 1)
    assert not p.has(len(p))
    with pytest.raises(IndexError):
        p[len(p)]
    with pytest.raises(IndexError):
        p[-1]


def test_upper_boundary_point_rejected_when_exactly_on_edge():
    r = CoordRangeCells(0.0, 4.0, 1.0)
    p = SpacePartition(r, r, r)
    assert math.isclose(len(p) ** (1 / 3), 4.0)
    with pytest.raises(PointOutOfVolumeError):
        p.point_index((r.upper, 0.0, 0.0))