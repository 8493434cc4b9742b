"""Mesh smoothing weights and mesh orientation checks used in post-processing."""

from __future__ import annotations

import math
from collections.abc import Sequence

Vector = Sequence[float]

_FLIP_ANGLE_LIMIT = math.pi * 0.99


def smooth_step(x: float) -> float:
    """The quintic smooth-step polynomial 6x^5 - 15x^4 + 10x^3."""
    return 6.0 * x**5 - 15.0 * x**4 + 10.0 * x**3


def _squared_distance(a: Vector, b: Vector) -> float:
    return sum((p - q) ** 2 for p, q in zip(a, b))


def weighted_neighbor_counts(
    positions: Sequence[Vector],
    neighbor_lists: Sequence[Sequence[int]],
    compact_support_radius: float,
) -> list[float]:
    """Distance-weighted number of neighbors of every particle.

    Each neighbor contributes 1 - clamp(d^2 / r^2, 0, 1), where d is its distance
    to the particle and r the compact support radius.
    """
    if len(neighbor_lists) != len(positions):
        raise ValueError(
            f"expected one neighbor list per particle ({len(positions)}), "
            f"got {len(neighbor_lists)}"
        )
    squared_r = compact_support_radius * compact_support_radius
    return [
        sum(
            1.0 - min(max(_squared_distance(position, positions[j]) / squared_r, 0.0), 1.0)
            for j in neighbors
        )
        for position, neighbors in zip(positions, neighbor_lists)
    ]


def smoothing_weights(counts: Sequence[float], normalization: float = 13.0) -> list[float]:
    """Maps weighted neighbor counts to smoothing weights in [0, 1]."""
    offset = 0.0
    scale = normalization - offset
    return [smooth_step(min(max(n - offset, 0.0) / scale, 1.0)) for n in counts]


def _angle(a: Vector, b: Vector) -> float:
    norms = math.sqrt(sum(v * v for v in a)) * math.sqrt(sum(v * v for v in b))
    if norms == 0.0:
        return 0.0
    cosine = sum(p * q for p, q in zip(a, b)) / norms
    return math.acos(min(max(cosine, -1.0), 1.0))


def find_flipped_faces(
    vertex_normals: Sequence[Vector],
    triangle_normals: Sequence[Vector],
    vertex_faces: Sequence[Sequence[int]],
) -> dict[int, tuple[int, float]]:
    """Finds faces whose normal is nearly opposite to the normal of an adjacent vertex.

    Returns a mapping from face index to the vertex index and the angle (in radians)
    between the two normals; a later vertex replaces an earlier one for the same face.
    """
    flipped: dict[int, tuple[int, float]] = {}
    for vertex, (normal, faces) in enumerate(zip(vertex_normals, vertex_faces)):
        for tri in faces:
            angle = _angle(normal, triangle_normals[tri])
            if angle > _FLIP_ANGLE_LIMIT:
                flipped[tri] = (vertex, angle)
    return flipped