"""Conversion and validation of the reconstruction command line arguments."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from splashsurf.aabb import AxisAlignedBoundingBox


class Switch(enum.Enum):
    """An on/off command line switch."""

    OFF = "off"
    ON = "on"

    @classmethod
    def parse(cls, value: str | bool | Switch) -> Switch:
        """Parses "on" or "off" (case-insensitive); booleans and switches pass through."""
        if isinstance(value, Switch):
            return value
        if isinstance(value, bool):
            return cls.ON if value else cls.OFF
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"invalid value '{value}' for a switch (expected 'off' or 'on')"
            ) from None

    def __bool__(self) -> bool:
        return self is Switch.ON


@dataclass
class GridDecompositionParameters:
    """Parameters of the uniform subdomain grid decomposition."""

    subdomain_num_cubes_per_dim: int = 64


@dataclass
class ReconstructionParameters:
    """Parameters passed directly to the surface reconstruction."""

    particle_radius: float
    rest_density: float
    compact_support_radius: float
    cube_size: float
    iso_surface_threshold: float
    particle_aabb: AxisAlignedBoundingBox | None = None
    enable_multi_threading: bool = True
    spatial_decomposition: GridDecompositionParameters | None = None
    global_neighborhood_list: bool = False


@dataclass
class PostprocessingArgs:
    """Options controlling the steps applied after the reconstruction."""

    check_mesh_closed: bool = False
    check_mesh_manifold: bool = False
    check_mesh_orientation: bool = False
    check_mesh_debug: bool = False
    mesh_cleanup: bool = False
    decimate_barnacles: bool = False
    keep_vertices: bool = False
    compute_normals: bool = False
    sph_normals: bool = False
    normals_smoothing_iters: int | None = None
    interpolate_attributes: list[str] = field(default_factory=list)
    mesh_smoothing_iters: int | None = None
    mesh_smoothing_weights: bool = False
    mesh_smoothing_weights_normalization: float = 13.0
    generate_quads: bool = False
    quad_max_edge_diag_ratio: float = 1.75
    quad_max_normal_angle: float = 10.0
    quad_max_interior_angle: float = 135.0
    output_mesh_smoothing_weights: bool = False
    output_raw_normals: bool = False
    output_raw_mesh: bool = False
    mesh_aabb: AxisAlignedBoundingBox | None = None
    mesh_aabb_clamp_vertices: bool = False


@dataclass
class ReconstructionRunnerArgs:
    """All reconstruction arguments converted to useful types."""

    params: ReconstructionParameters
    use_double_precision: bool
    postprocessing: PostprocessingArgs
    num_threads: int | None = None
    enable_compression: bool = True


def aabb_from_min_max(
    minimum: Sequence[float], maximum: Sequence[float], label: str
) -> AxisAlignedBoundingBox:
    """Builds a 3d box from user given corners, rejecting inconsistent or degenerate ones."""
    if len(minimum) != 3 or len(maximum) != 3:
        raise ValueError(
            f"The user specified {label} min/max values must have exactly three components"
        )
    aabb = AxisAlignedBoundingBox(tuple(float(v) for v in minimum), tuple(float(v) for v in maximum))
    if not aabb.is_consistent():
        raise ValueError(
            f"The user specified {label} min/max values are inconsistent! "
            f"min: {list(aabb.min)} max: {list(aabb.max)}"
        )
    if aabb.is_degenerate():
        raise ValueError(
            f"The user specified {label} is degenerate! "
            f"min: {list(aabb.min)} max: {list(aabb.max)}"
        )
    return aabb


_DEFAULTS: dict[str, Any] = {
    "rest_density": 1000.0,
    "surface_threshold": 0.6,
    "double_precision": Switch.OFF,
    "particle_aabb_min": None,
    "particle_aabb_max": None,
    "parallelize_over_particles": Switch.ON,
    "num_threads": None,
    "subdomain_grid": Switch.ON,
    "subdomain_cubes": 64,
    "normals": Switch.OFF,
    "sph_normals": Switch.OFF,
    "normals_smoothing_iters": None,
    "output_raw_normals": Switch.OFF,
    "interpolate_attributes": (),
    "mesh_cleanup": Switch.OFF,
    "decimate_barnacles": Switch.OFF,
    "keep_verts": Switch.OFF,
    "mesh_smoothing_iters": None,
    "mesh_smoothing_weights": Switch.OFF,
    "mesh_smoothing_weights_normalization": 13.0,
    "output_smoothing_weights": Switch.OFF,
    "generate_quads": Switch.OFF,
    "quad_max_edge_diag_ratio": 1.75,
    "quad_max_normal_angle": 10.0,
    "quad_max_interior_angle": 135.0,
    "mesh_aabb_min": None,
    "mesh_aabb_max": None,
    "mesh_aabb_clamp_verts": Switch.OFF,
    "output_raw_mesh": Switch.OFF,
    "check_mesh": Switch.OFF,
    "check_mesh_closed": Switch.OFF,
    "check_mesh_manifold": Switch.OFF,
    "check_mesh_orientation": Switch.OFF,
    "check_mesh_debug": Switch.OFF,
}


def _value(args: Any, name: str) -> Any:
    return getattr(args, name, _DEFAULTS[name])


def _flag(args: Any, name: str) -> bool:
    return bool(Switch.parse(_value(args, name)))


def _optional_aabb(args: Any, min_name: str, max_name: str, label: str) -> AxisAlignedBoundingBox | None:
    minimum = _value(args, min_name)
    maximum = _value(args, max_name)
    if minimum is None or maximum is None:
        return None
    return aabb_from_min_max(minimum, maximum, label)


def runner_args_from(args: Any) -> ReconstructionRunnerArgs:
    """Converts parsed reconstruct arguments into runner arguments."""
    particle_aabb = _optional_aabb(args, "particle_aabb_min", "particle_aabb_max", "particle AABB")
    mesh_aabb = _optional_aabb(args, "mesh_aabb_min", "mesh_aabb_max", "mesh AABB")

    particle_radius = float(args.particle_radius)
    compact_support_radius = particle_radius * 2.0 * float(args.smoothing_length)
    cube_size = particle_radius * float(args.cube_size)

    spatial_decomposition = (
        GridDecompositionParameters(subdomain_num_cubes_per_dim=int(_value(args, "subdomain_cubes")))
        if _flag(args, "subdomain_grid")
        else None
    )

    params = ReconstructionParameters(
        particle_radius=particle_radius,
        rest_density=float(_value(args, "rest_density")),
        compact_support_radius=compact_support_radius,
        cube_size=cube_size,
        iso_surface_threshold=float(_value(args, "surface_threshold")),
        particle_aabb=particle_aabb,
        enable_multi_threading=_flag(args, "parallelize_over_particles"),
        spatial_decomposition=spatial_decomposition,
        global_neighborhood_list=_flag(args, "mesh_smoothing_weights"),
    )

    num_threads = _value(args, "num_threads")
    if num_threads is not None and int(num_threads) < 0:
        raise ValueError(f"Invalid number of threads: {num_threads}")

    check_mesh = _flag(args, "check_mesh")
    postprocessing = PostprocessingArgs(
        check_mesh_closed=check_mesh or _flag(args, "check_mesh_closed"),
        check_mesh_manifold=check_mesh or _flag(args, "check_mesh_manifold"),
        check_mesh_orientation=check_mesh or _flag(args, "check_mesh_orientation"),
        check_mesh_debug=_flag(args, "check_mesh_debug"),
        mesh_cleanup=_flag(args, "mesh_cleanup"),
        decimate_barnacles=_flag(args, "decimate_barnacles"),
        keep_vertices=_flag(args, "keep_verts"),
        compute_normals=_flag(args, "normals"),
        sph_normals=_flag(args, "sph_normals"),
        normals_smoothing_iters=_value(args, "normals_smoothing_iters"),
        interpolate_attributes=list(_value(args, "interpolate_attributes") or ()),
        mesh_smoothing_iters=_value(args, "mesh_smoothing_iters"),
        mesh_smoothing_weights=_flag(args, "mesh_smoothing_weights"),
        mesh_smoothing_weights_normalization=float(
            _value(args, "mesh_smoothing_weights_normalization")
        ),
        generate_quads=_flag(args, "generate_quads"),
        quad_max_edge_diag_ratio=float(_value(args, "quad_max_edge_diag_ratio")),
        quad_max_normal_angle=float(_value(args, "quad_max_normal_angle")),
        quad_max_interior_angle=float(_value(args, "quad_max_interior_angle")),
        output_mesh_smoothing_weights=_flag(args, "output_smoothing_weights"),
        output_raw_normals=_flag(args, "output_raw_normals"),
        output_raw_mesh=_flag(args, "output_raw_mesh"),
        mesh_aabb=mesh_aabb,
        mesh_aabb_clamp_vertices=_flag(args, "mesh_aabb_clamp_verts"),
    )

    return ReconstructionRunnerArgs(
        params=params,
        use_double_precision=_flag(args, "double_precision"),
        postprocessing=postprocessing,
        num_threads=None if num_threads is None else int(num_threads),
    )