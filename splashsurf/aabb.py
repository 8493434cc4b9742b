"""Axis-aligned bounding boxes in arbitrary dimensions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

Vector = tuple[float, ...]


def _as_vector(values: Iterable[float]) -> Vector:
    return tuple(values)


@dataclass
class AxisAlignedBoundingBox:
    """An axis-aligned box given by its min and max corner points."""

    min: Vector
    max: Vector

    def __post_init__(self) -> None:
        self.min = _as_vector(self.min)
        self.max = _as_vector(self.max)
        if len(self.min) != len(self.max):
            raise ValueError(
                f"min and max corners differ in dimension ({len(self.min)} vs {len(self.max)})"
            )

    @classmethod
    def zeros(cls, dim: int = 3) -> AxisAlignedBoundingBox:
        """A degenerate box with min and max at the origin."""
        return cls.from_point((0.0,) * dim)

    @classmethod
    def from_point(cls, point: Sequence[float]) -> AxisAlignedBoundingBox:
        """A degenerate box with zero extents at the given point."""
        return cls(tuple(point), tuple(point))

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> AxisAlignedBoundingBox:
        """The smallest box enclosing all points; a 3d zero box if there are none."""
        iterator = iter(points)
        first = next(iterator, None)
        if first is None:
            return cls.zeros(3)
        aabb = cls.from_point(first)
        for point in iterator:
            aabb.join_with_point(point)
        return aabb

    @property
    def dim(self) -> int:
        return len(self.min)

    def is_consistent(self) -> bool:
        """Whether min <= max holds in every dimension."""
        return all(lo <= hi for lo, hi in zip(self.min, self.max))

    def is_degenerate(self) -> bool:
        """Whether min and max coincide."""
        return self.min == self.max

    def extents(self) -> Vector:
        """The vector from the min to the max corner."""
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))

    def min_extent(self) -> float:
        return min(self.extents())

    def max_extent(self) -> float:
        return max(self.extents())

    def centroid(self) -> Vector:
        """The mean of the corner points."""
        return tuple(lo + e / 2 for lo, e in zip(self.min, self.extents()))

    def contains_aabb(self, other: AxisAlignedBoundingBox) -> bool:
        """Whether either corner of the other box lies in this half-open box."""
        return self.contains_point(other.min) or self.contains_point(other.max)

    def contains_point(self, point: Sequence[float]) -> bool:
        """Whether the point lies in the box, half-open towards its max corner."""
        return all(lo <= p for lo, p in zip(self.min, point)) and all(
            p < hi for p, hi in zip(point, self.max)
        )

    def translate(self, vector: Sequence[float]) -> None:
        self.min = tuple(a + v for a, v in zip(self.min, vector))
        self.max = tuple(a + v for a, v in zip(self.max, vector))

    def center_at_origin(self) -> None:
        """Moves the box so that its centroid is at the origin."""
        self.translate(tuple(-c for c in self.centroid()))

    def scale_uniformly(self, scaling: float) -> None:
        """Scales the box about its centroid."""
        center = self.centroid()
        self.translate(tuple(-c for c in center))
        self.min = tuple(a * scaling for a in self.min)
        self.max = tuple(a * scaling for a in self.max)
        self.translate(center)

    def join(self, other: AxisAlignedBoundingBox) -> None:
        """Enlarges the box to enclose the other box too."""
        self.min = tuple(min(a, b) for a, b in zip(self.min, other.min))
        self.max = tuple(max(a, b) for a, b in zip(self.max, other.max))

    def join_with_point(self, point: Sequence[float]) -> None:
        """Enlarges the box to enclose the point too."""
        self.min = tuple(min(a, p) for a, p in zip(self.min, point))
        self.max = tuple(max(a, p) for a, p in zip(self.max, point))

    def grow_uniformly(self, margin: float) -> None:
        """Moves every face outwards by the margin."""
        self.min = tuple(a - margin for a in self.min)
        self.max = tuple(a + margin for a in self.max)

    def enclosing_cube(self) -> AxisAlignedBoundingBox:
        """The smallest cube with the same centroid that encloses this box."""
        center = self.centroid()
        half = self.max_extent() / 2
        cube = AxisAlignedBoundingBox((-half,) * self.dim, (half,) * self.dim)
        cube.translate(center)
        return cube

    def __repr__(self) -> str:
        lo = ", ".join(f"{v:.7f}" for v in self.min)
        hi = ", ".join(f"{v:.7f}" for v in self.max)
        return f"AxisAlignedBoundingBox {{ min: [{lo}], max: [{hi}] }}"