from types import SimpleNamespace

import pytest

from splashsurf.aabb import AxisAlignedBoundingBox
from splashsurf.arguments import (
    GridDecompositionParameters,
    PostprocessingArgs,
    ReconstructionParameters,
    ReconstructionRunnerArgs,
    Switch,
    aabb_from_min_max,
    runner_args_from,
)


def make_args(**overrides):
    values = dict(particle_radius=0.05, smoothing_length=3.0, cube_size=0.75)
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.mark.parametrize("text,expected", [("on", Switch.ON), ("OFF", Switch.OFF), ("On", Switch.ON)])
def test_switch_parse_ignores_case(text, expected):
    assert Switch.parse(text) is expected


def test_switch_parse_passthrough_and_bool():
    assert Switch.parse(Switch.ON) is Switch.ON
    assert Switch.parse(True) is Switch.ON
    assert bool(Switch.ON) is True
    assert bool(Switch.OFF) is False


def test_switch_parse_invalid():
    with pytest.raises(ValueError):
        Switch.parse("maybe")


def test_aabb_from_min_max_valid():
    aabb = aabb_from_min_max([-1.0, -1.0, -1.0], [1.0, 1.0, 1.0], "particle AABB")
    assert aabb == AxisAlignedBoundingBox((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))


def test_aabb_from_min_max_inconsistent():
    with pytest.raises(ValueError, match="particle AABB min/max values are inconsistent"):
        aabb_from_min_max([-1.0, 1.0, -1.0], [-2.0, 2.0, -2.0], "particle AABB")


def test_aabb_from_min_max_degenerate():
    with pytest.raises(ValueError, match="mesh AABB is degenerate"):
        aabb_from_min_max([1.0, 1.0, 1.0], [1.0, 1.0, 1.0], "mesh AABB")


def test_aabb_from_min_max_wrong_length():
    with pytest.raises(ValueError):
        aabb_from_min_max([0.0, 0.0], [1.0, 1.0, 1.0], "mesh AABB")


def test_runner_args_scaled_radii():
    result = runner_args_from(make_args())
    assert isinstance(result, ReconstructionRunnerArgs)
    assert result.params.compact_support_radius == pytest.approx(0.05 * 2.0 * 3.0)
    assert result.params.cube_size == pytest.approx(0.05 * 0.75)
    assert result.params.particle_radius == 0.05


def test_runner_args_defaults():
    result = runner_args_from(make_args())
    params = result.params
    assert params.rest_density == 1000.0
    assert params.iso_surface_threshold == 0.6
    assert params.enable_multi_threading is True
    assert params.spatial_decomposition == GridDecompositionParameters(64)
    assert params.particle_aabb is None
    assert result.use_double_precision is False
    assert result.postprocessing == PostprocessingArgs()


def test_runner_args_subdomain_grid_off():
    result = runner_args_from(make_args(subdomain_grid=Switch.OFF, subdomain_cubes=32))
    assert result.params.spatial_decomposition is None


def test_runner_args_subdomain_cubes_forwarded():
    result = runner_args_from(make_args(subdomain_cubes=32))
    assert result.params.spatial_decomposition.subdomain_num_cubes_per_dim == 32


def test_runner_args_check_mesh_enables_all_checks():
    post = runner_args_from(make_args(check_mesh=Switch.ON)).postprocessing
    assert (post.check_mesh_closed, post.check_mesh_manifold, post.check_mesh_orientation) == (
        True,
        True,
        True,
    )
    assert post.check_mesh_debug is False


def test_runner_args_single_check():
    post = runner_args_from(make_args(check_mesh_manifold="on")).postprocessing
    assert post.check_mesh_manifold is True
    assert post.check_mesh_closed is False


def test_runner_args_smoothing_weights_enable_global_neighborhood():
    result = runner_args_from(make_args(mesh_smoothing_weights=Switch.ON))
    assert result.params.global_neighborhood_list is True
    assert result.postprocessing.mesh_smoothing_weights is True


def test_runner_args_aabbs():
    result = runner_args_from(
        make_args(
            particle_aabb_min=[-1.0, -1.0, -1.0],
            particle_aabb_max=[1.0, 1.0, 1.0],
            mesh_aabb_min=[0.0, 0.0, 0.0],
            mesh_aabb_max=[2.0, 2.0, 2.0],
        )
    )
    assert result.params.particle_aabb == AxisAlignedBoundingBox((-1.0,) * 3, (1.0,) * 3)
    assert result.postprocessing.mesh_aabb == AxisAlignedBoundingBox((0.0,) * 3, (2.0,) * 3)


def test_runner_args_inconsistent_particle_aabb():
    with pytest.raises(ValueError, match="inconsistent"):
        runner_args_from(
            make_args(particle_aabb_min=[-1.0, 1.0, -1.0], particle_aabb_max=[-2.0, 2.0, -2.0])
        )


def test_runner_args_attributes_copied():
    names = ["velocity", "density"]
    result = runner_args_from(make_args(interpolate_attributes=names, double_precision="on"))
    assert result.postprocessing.interpolate_attributes == names
    assert result.postprocessing.interpolate_attributes is not names
    assert result.use_double_precision is True


def test_reconstruction_parameters_construction():
    params = ReconstructionParameters(
        particle_radius=0.025,
        rest_density=1000.0,
        compact_support_radius=0.1,
        cube_size=0.01875,
        iso_surface_threshold=0.6,
    )
    assert params.spatial_decomposition is None
    assert params.global_neighborhood_list is False