"""Helpers for converting particle and mesh files between formats."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from splashsurf.aabb import AxisAlignedBoundingBox

logger = logging.getLogger(__name__)

PARTICLES = "particles"
MESH = "mesh"


def overwrite_check(output_file: str | os.PathLike[str], overwrite: bool) -> None:
    """Raises if the output file exists and overwriting was not allowed."""
    path = Path(output_file)
    if not overwrite and path.exists():
        raise FileExistsError(
            f'Aborting: Output file "{path}" already exists. Use overwrite flag to ignore this.'
        )


def select_input(
    input_particles: str | os.PathLike[str] | None,
    input_mesh: str | os.PathLike[str] | None,
) -> tuple[str, Path]:
    """Returns the kind of input ("particles" or "mesh") and its path; particles win."""
    if input_particles is not None:
        return PARTICLES, Path(input_particles)
    if input_mesh is not None:
        return MESH, Path(input_mesh)
    raise ValueError(
        "Aborting: No input file specified, either a particle or mesh input file has to be "
        "specified."
    )


def filter_particles(
    positions: Iterable[Sequence[float]],
    domain_min: Sequence[float] | None = None,
    domain_max: Sequence[float] | None = None,
) -> list[Sequence[float]]:
    """Keeps the particles inside the half-open domain if both corners are given."""
    if domain_min is None or domain_max is None:
        return list(positions)
    aabb = AxisAlignedBoundingBox(
        tuple(float(v) for v in domain_min), tuple(float(v) for v in domain_max)
    )
    logger.info("Filtering out particles outside of %r", aabb)
    return [p for p in positions if aabb.contains_point(p)]