from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.domain.models import Point, Polygon
from core.geometry import contains, contains_any, distance_to_boundary_m, planar_distance, polygon_centroid

from conftest import square

SQUARE = Polygon.from_coords([(0, 0), (4, 0), (4, 4), (0, 4)])
L_SHAPE = Polygon.from_coords([(0, 0), (4, 0), (4, 1), (1, 1), (1, 4), (0, 4)])
PLAZA = Polygon.from_coords(
    [(0, 0), (4, 0), (4, 4), (0, 4)],
    holes=[[(1, 1), (3, 1), (3, 3), (1, 3), (1, 1)]],
)


def test_point_inside_square():
    assert contains(Point(lon=2, lat=2), SQUARE)


@pytest.mark.parametrize("lon,lat", [(5, 2), (-1, 2), (2, 5), (2, -0.5)])
def test_point_outside_square(lon, lat):
    assert not contains(Point(lon=lon, lat=lat), SQUARE)


def test_concave_polygon_notch_is_outside():
    assert not contains(Point(lon=2, lat=2), L_SHAPE)
    assert contains(Point(lon=0.5, lat=3), L_SHAPE)
    assert contains(Point(lon=3, lat=0.5), L_SHAPE)


def test_vertex_order_does_not_matter():
    reversed_square = Polygon(vertices=tuple(reversed(SQUARE.vertices)))
    assert contains(Point(lon=1, lat=3), reversed_square)


def test_closed_ring_drops_repeated_vertex():
    polygon = Polygon.from_coords([(0, 0), (4, 0), (4, 4), (0, 4), (0, 0)])
    assert len(polygon) == 4
    assert contains(Point(lon=1, lat=1), polygon)


def test_polygon_requires_three_vertices():
    with pytest.raises(ValidationError):
        Polygon.from_coords([(0, 0), (1, 1)])
    with pytest.raises(ValidationError):
        Polygon.from_coords([(0, 0), (1, 1), (0, 0)])


def test_degenerate_vertex_sequence_is_never_inside():
    assert not contains(Point(lon=0, lat=0), [Point(lon=-1, lat=-1), Point(lon=1, lat=1)])
    assert not contains(Point(lon=0, lat=0), [])


def test_point_rejects_non_finite_coordinates():
    with pytest.raises(ValidationError):
        Point(lon=float("nan"), lat=0.0)


def test_centroid_of_square_and_triangle():
    centroid = polygon_centroid(SQUARE)
    assert centroid.lon == pytest.approx(2.0)
    assert centroid.lat == pytest.approx(2.0)
    triangle = Polygon.from_coords([(0, 0), (3, 0), (0, 3)])
    centroid = polygon_centroid(triangle)
    assert centroid.lon == pytest.approx(1.0)
    assert centroid.lat == pytest.approx(1.0)


@pytest.mark.parametrize(
    "polygon",
    [
        SQUARE,
        Polygon.from_coords([(0, 0), (2, -1), (4, 0), (4, 3), (2, 4), (0, 3)]),
        square(-58.45, -34.58, 0.01),
    ],
)
def test_convex_polygon_contains_its_centroid(polygon):
    assert contains(polygon_centroid(polygon), polygon)


def test_centroid_discounts_holes_and_spans_all_parts():
    notched = Polygon.from_coords(
        [(0, 0), (4, 0), (4, 4), (0, 4)],
        holes=[[(2, 0.5), (3.5, 0.5), (3.5, 3.5), (2, 3.5)]],
    )
    assert polygon_centroid(notched).lon < 2.0

    centroid = polygon_centroid([square(0, 0, 1), square(10, 0, 1)])
    assert centroid.lon == pytest.approx(5.0)
    assert centroid.lat == pytest.approx(0.0)


def test_planar_distance_uses_raw_degrees():
    assert planar_distance(Point(lon=0, lat=0), Point(lon=3, lat=4)) == pytest.approx(5.0)


def test_distance_to_boundary_in_meters():
    polygon = square(-58.45, -34.58, 0.01)
    # El borde más cercano es el este/oeste: 0.01° de longitud a -34.58° de latitud.
    assert distance_to_boundary_m(Point(lon=-58.45, lat=-34.58), polygon) == pytest.approx(917.5, abs=2.0)
    assert distance_to_boundary_m(Point(lon=-58.4401, lat=-34.58), polygon) == pytest.approx(9.18, abs=0.05)


def test_point_in_hole_is_outside():
    assert not contains(Point(lon=2, lat=2), PLAZA)
    assert contains(Point(lon=0.5, lat=2), PLAZA)
    assert contains(Point(lon=3.5, lat=3.5), PLAZA)


def test_contains_any_checks_every_part():
    parts = (square(0, 0, 0.1), square(5, 5, 1.0))
    assert contains_any(Point(lon=0, lat=0), parts)
    assert contains_any(Point(lon=5.5, lat=4.5), parts)
    assert not contains_any(Point(lon=2, lat=2), parts)


def test_distance_to_boundary_counts_holes_and_nearest_part():
    plaza = Polygon.from_coords(
        [(-58.46, -34.59), (-58.44, -34.59), (-58.44, -34.57), (-58.46, -34.57)],
        holes=[[(-58.4501, -34.5801), (-58.4499, -34.5801), (-58.4499, -34.5799), (-58.4501, -34.5799)]],
    )
    # El punto queda a 0.0002° del borde este del hueco.
    near_hole = Point(lon=-58.4497, lat=-34.58)
    assert distance_to_boundary_m(near_hole, plaza) == pytest.approx(18.35, abs=0.1)

    parts = [square(-58.45, -34.58, 0.01), square(-58.40, -34.58, 0.01)]
    assert distance_to_boundary_m(Point(lon=-58.4401, lat=-34.58), parts) == pytest.approx(9.18, abs=0.05)
