import itertools
import logging
import math
import random

import pytest

from landiq.geo import haversine_m
from landiq.placement import (
    MarkerPoint,
    PlacedCircle,
    PlacementConfig,
    PlacementInputError,
    find_position,
    overlaps,
    place_circles,
)


SF = (37.7749, -122.4194)


def _scenario_markers():
    return [
        MarkerPoint(37.7749, -122.4194, 150.0, marker_id="m1"),
        MarkerPoint(37.77495, -122.41945, 150.0, marker_id="m2"),
        MarkerPoint(37.77490, -122.41930, 150.0, marker_id="m3"),
    ]


def _assert_clearance(placed, clearance):
    clean = [c for c in placed if not c.degraded]
    for a, b in itertools.combinations(clean, 2):
        assert a.distance_to(b) >= a.radius_m + b.radius_m + clearance, (a, b)


def test_single_marker_keeps_base_position():
    m = MarkerPoint(*SF, 150.0, marker_id="solo")
    [placed] = place_circles([m])
    assert (placed.lat, placed.lng) == (m.lat, m.lng)
    assert placed.ring == 0
    assert placed.angle_deg is None
    assert not placed.degraded
    assert placed.displacement_m() == 0.0


def test_far_apart_markers_are_not_moved():
    markers = [
        MarkerPoint(37.7749, -122.4194, 150.0, marker_id="sf"),
        MarkerPoint(37.8044, -122.2712, 150.0, marker_id="oakland"),
    ]
    placed = place_circles(markers)
    assert all(c.ring == 0 and not c.displaced for c in placed)


def test_concrete_san_francisco_scenario():
    placed = place_circles(_scenario_markers(), PlacementConfig(min_clearance_m=50.0))
    m1, m2, m3 = placed

    assert [c.marker_id for c in placed] == ["m1", "m2", "m3"]
    assert (m1.lat, m1.lng) == (37.7749, -122.4194)
    assert m1.ring == 0

    # Ring 1 sits 330 m out, too close to m1; ring 2 (660 m) clears it.
    assert (m2.ring, m2.angle_deg) == (2, 0.0)
    assert m2.displacement_m() == pytest.approx(660.0, rel=1e-3)
    # East is taken by m2, so m3 moves on to the next angle.
    assert (m3.ring, m3.angle_deg) == (2, 45.0)

    assert not any(c.degraded for c in placed)
    _assert_clearance(placed, 50.0)


def test_identical_markers_one_stays_other_moves_far_enough():
    r = 150.0
    a = MarkerPoint(*SF, r, marker_id="a")
    b = MarkerPoint(*SF, r, marker_id="b")
    first, second = place_circles([a, b])
    assert (first.lat, first.lng) == SF
    assert second.displaced
    assert not second.degraded
    assert first.distance_to(second) >= 2 * r + 50.0


def test_output_is_bit_identical_across_runs():
    rng = random.Random(7)
    markers = [
        MarkerPoint(
            SF[0] + (rng.random() - 0.5) * 0.01,
            SF[1] + (rng.random() - 0.5) * 0.01,
            120.0,
            marker_id=str(i),
        )
        for i in range(25)
    ]
    first = place_circles(markers)
    second = place_circles(markers)
    assert first == second
    assert [(c.lat, c.lng) for c in first] == [(c.lat, c.lng) for c in second]


def test_first_marker_always_keeps_base_under_permutation():
    markers = _scenario_markers()
    for perm in itertools.permutations(markers):
        placed = place_circles(list(perm))
        assert placed[0].marker_id == perm[0].marker_id
        assert (placed[0].lat, placed[0].lng) == (perm[0].lat, perm[0].lng)
        assert placed[0].ring == 0
        _assert_clearance(placed, 50.0)


def test_dense_cluster_respects_clearance_between_clean_circles():
    rng = random.Random(42)
    markers = [
        MarkerPoint(
            SF[0] + (rng.random() - 0.5) * 0.02,
            SF[1] + (rng.random() - 0.5) * 0.02,
            100.0,
            marker_id=f"p{i}",
        )
        for i in range(40)
    ]
    placed = place_circles(markers, PlacementConfig(min_clearance_m=50.0))
    assert len(placed) == len(markers)
    _assert_clearance(placed, 50.0)


def test_exhaustion_falls_back_to_base_and_flags_degraded(caplog):
    cfg = PlacementConfig(max_rings=1)
    a = MarkerPoint(*SF, 150.0, marker_id="a")
    b = MarkerPoint(*SF, 150.0, marker_id="b")
    with caplog.at_level(logging.WARNING, logger="landiq.placement"):
        first, second = place_circles([a, b], cfg)
    assert not first.degraded
    assert second.degraded
    assert (second.lat, second.lng) == SF
    assert second.ring == 0
    assert first.distance_to(second) < 2 * 150.0 + 50.0
    assert "keeping base position" in caplog.text


def test_tenth_stacked_marker_exhausts_default_rings():
    markers = [MarkerPoint(*SF, 150.0, marker_id=str(i)) for i in range(10)]
    placed = place_circles(markers)

    assert placed[0].ring == 0
    assert [c.ring for c in placed[1:9]] == [2] * 8
    assert [c.angle_deg for c in placed[1:9]] == [45.0 * i for i in range(8)]
    assert placed[9].degraded
    _assert_clearance(placed, 50.0)


def test_zero_rings_degrades_immediately():
    cfg = PlacementConfig(max_rings=0)
    placed = place_circles([MarkerPoint(*SF, 10.0), MarkerPoint(*SF, 10.0)], cfg)
    assert placed[1].degraded


def test_large_radius_clears_on_first_ring():
    # With 0.2 * R >= clearance the first ring already clears the base circle.
    r = 300.0
    placed = place_circles([MarkerPoint(*SF, r, "a"), MarkerPoint(*SF, r, "b")])
    assert (placed[1].ring, placed[1].angle_deg) == (1, 0.0)


def test_ring_angles_follow_configured_count():
    cfg = PlacementConfig(ring_angles=4)
    markers = [MarkerPoint(*SF, 150.0, marker_id=str(i)) for i in range(3)]
    placed = place_circles(markers, cfg)
    assert [c.angle_deg for c in placed[1:]] == [0.0, 90.0]


def test_later_marker_avoids_displaced_circle():
    stacked = [MarkerPoint(*SF, 150.0, marker_id=str(i)) for i in range(2)]
    first, second = place_circles(stacked)
    # A marker sitting exactly where `second` was pushed must itself move.
    third_marker = MarkerPoint(second.lat, second.lng, 150.0, marker_id="late")
    third = find_position(third_marker, [first, second])
    assert third.displaced
    assert third.distance_to(second) >= 350.0
    assert third.distance_to(first) >= 350.0


def test_overlap_boundary_is_strict():
    placed = [PlacedCircle("p", 0.0, 0.0, 0.0, 0.0, 0.0)]
    d = haversine_m(0.0, 0.0, 0.0, 0.01)
    assert overlaps(0.0, 0.01, d, placed, clearance_m=0.0) is False
    assert overlaps(0.0, 0.01, math.nextafter(d, math.inf), placed, clearance_m=0.0) is True


def test_overlap_includes_clearance():
    placed = [PlacedCircle("p", 0.0, 0.0, 100.0, 0.0, 0.0)]
    d = haversine_m(0.0, 0.0, 0.0, 0.003)  # ~334 m
    assert overlaps(0.0, 0.003, 100.0, placed, clearance_m=0.0) is False
    assert overlaps(0.0, 0.003, 100.0, placed, clearance_m=d) is True


def test_empty_input_returns_empty_list():
    assert place_circles([]) == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"lat": 91.0, "lng": 0.0, "radius_m": 10.0},
        {"lat": 0.0, "lng": -181.0, "radius_m": 10.0},
        {"lat": 0.0, "lng": 0.0, "radius_m": -1.0},
        {"lat": float("nan"), "lng": 0.0, "radius_m": 10.0},
        {"lat": 0.0, "lng": 0.0, "radius_m": float("inf")},
    ],
)
def test_marker_validation(kwargs):
    with pytest.raises(PlacementInputError):
        MarkerPoint(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_clearance_m": -1.0},
        {"ring_angles": 0},
        {"ring_angles": 2.5},
        {"max_rings": -1},
        {"ring_spacing": 0.0},
        {"ring_spacing": float("nan")},
        {"min_clearance_m": "wide"},
        {"ring_spacing": float("inf")},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(PlacementInputError):
        PlacementConfig(**kwargs)


def test_place_circles_rejects_non_markers():
    with pytest.raises(PlacementInputError):
        place_circles([{"lat": 0.0, "lng": 0.0, "radius_m": 1.0}])


def test_marker_from_dict_accepts_aliases():
    m = MarkerPoint.from_dict({"latitude": 1.5, "longitude": 2.5, "radius": 30, "id": 7})
    assert (m.lat, m.lng, m.radius_m, m.marker_id) == (1.5, 2.5, 30.0, "7")
    with pytest.raises(PlacementInputError):
        MarkerPoint.from_dict({"lat": 1.0})


def test_placed_circle_to_dict_reports_displacement():
    _, moved = place_circles([MarkerPoint(*SF, 150.0, "a"), MarkerPoint(*SF, 150.0, "b")])
    payload = moved.to_dict()
    assert payload["marker_id"] == "b"
    assert payload["ring"] == 2
    assert payload["degraded"] is False
    assert payload["displacement_m"] == pytest.approx(660.0, rel=1e-3)
