import math

import pytest

from splashsurf.weights import (
    find_flipped_faces,
    smooth_step,
    smoothing_weights,
    weighted_neighbor_counts,
)


def test_smooth_step_end_points():
    assert smooth_step(0.0) == 0.0
    assert smooth_step(1.0) == pytest.approx(1.0)


@pytest.mark.parametrize("x", [0.1, 0.25, 0.4, 0.7, 0.9])
def test_smooth_step_is_point_symmetric(x):
    assert smooth_step(x) + smooth_step(1.0 - x) == pytest.approx(1.0)


def test_smooth_step_is_monotonic_on_unit_interval():
    values = [smooth_step(i / 20) for i in range(21)]
    assert values == sorted(values)


def test_weighted_counts_without_neighbors_are_zero():
    positions = [(0.0, 0.0, 0.0), (5.0, 5.0, 5.0)]
    assert weighted_neighbor_counts(positions, [[], []], 1.0) == [0.0, 0.0]


def test_coincident_neighbor_contributes_one():
    positions = [(1.0, 1.0, 1.0), (1.0, 1.0, 1.0)]
    assert weighted_neighbor_counts(positions, [[1], [0]], 0.5) == [1.0, 1.0]


def test_neighbor_beyond_radius_contributes_nothing():
    positions = [(0.0, 0.0, 0.0), (2.0, 0.0, 0.0)]
    assert weighted_neighbor_counts(positions, [[1], [0]], 1.0) == [0.0, 0.0]


def test_weighted_counts_are_symmetric_and_bounded():
    positions = [(0.0, 0.0, 0.0), (0.3, 0.0, 0.0), (0.0, 0.6, 0.0)]
    lists = [[1, 2], [0, 2], [0, 1]]
    counts = weighted_neighbor_counts(positions, lists, 1.0)
    assert all(0.0 <= c <= len(n) for c, n in zip(counts, lists))
    # particle 0 is closest to both others, so it has the largest weighted count
    assert counts[0] == max(counts)


def test_weighted_counts_reject_mismatched_lists():
    with pytest.raises(ValueError):
        weighted_neighbor_counts([(0.0, 0.0, 0.0)], [], 1.0)


def test_smoothing_weights_saturate_and_clamp():
    weights = smoothing_weights([-3.0, 0.0, 13.0, 40.0], 13.0)
    assert weights[0] == 0.0
    assert weights[1] == 0.0
    assert weights[2] == pytest.approx(1.0)
    assert weights[3] == pytest.approx(1.0)


def test_smoothing_weights_half_normalization():
    assert smoothing_weights([6.5], 13.0)[0] == pytest.approx(smooth_step(0.5))


def test_smoothing_weights_default_normalization():
    assert smoothing_weights([13.0]) == smoothing_weights([13.0], 13.0)


def test_consistent_normals_have_no_flipped_faces():
    normals = [(0.0, 0.0, 1.0), (0.0, 0.0, 1.0)]
    assert find_flipped_faces(normals, [(0.0, 0.0, 1.0)], [[0], [0]]) == {}


def test_opposite_normal_is_reported():
    vertex_normals = [(0.0, 0.0, 1.0)]
    tri_normals = [(0.0, 0.0, 1.0), (0.0, 0.0, -1.0)]
    flipped = find_flipped_faces(vertex_normals, tri_normals, [[0, 1]])
    assert list(flipped) == [1]
    vertex, angle = flipped[1]
    assert vertex == 0
    assert angle == pytest.approx(math.pi)


def test_later_vertex_replaces_earlier_entry():
    vertex_normals = [(0.0, 1.0, 0.0), (0.0, 1.0, 0.0)]
    tri_normals = [(0.0, -1.0, 0.0)]
    flipped = find_flipped_faces(vertex_normals, tri_normals, [[0], [0]])
    assert flipped[0][0] == 1


def test_right_angle_is_not_flipped():
    flipped = find_flipped_faces([(1.0, 0.0, 0.0)], [(0.0, 1.0, 0.0)], [[0]])
    assert flipped == {}