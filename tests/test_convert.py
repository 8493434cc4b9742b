import pytest

from splashsurf.convert import filter_particles, overwrite_check, select_input


def test_overwrite_check_passes_for_missing_file(tmp_path):
    target = tmp_path / "out.vtk"
    overwrite_check(target, overwrite=False)
    assert not target.exists()


def test_overwrite_check_rejects_existing_file(tmp_path):
    target = tmp_path / "out.vtk"
    target.write_text("data")
    with pytest.raises(FileExistsError, match="already exists"):
        overwrite_check(target, overwrite=False)


def test_overwrite_check_allows_existing_file_with_flag(tmp_path):
    target = tmp_path / "out.vtk"
    target.write_text("data")
    overwrite_check(target, overwrite=True)
    assert target.read_text() == "data"


def test_select_input_particles():
    kind, path = select_input("particles.bgeo", None)
    assert kind == "particles"
    assert path.name == "particles.bgeo"


def test_select_input_mesh():
    kind, path = select_input(None, "surface.ply")
    assert kind == "mesh"
    assert path.name == "surface.ply"


def test_select_input_particles_take_priority():
    kind, _ = select_input("a.vtk", "b.vtk")
    assert kind == "particles"


def test_select_input_requires_one_input():
    with pytest.raises(ValueError, match="No input file specified"):
        select_input(None, None)


def test_filter_without_domain_keeps_everything():
    points = [(0.0, 0.0, 0.0), (10.0, -4.0, 2.0)]
    assert filter_particles(points) == points
    assert filter_particles(points, (0.0, 0.0, 0.0), None) == points


def test_filter_keeps_points_inside_half_open_domain():
    points = [
        (0.5, 0.5, 0.5),
        (0.0, 0.0, 0.0),
        (1.0, 0.5, 0.5),
        (-0.1, 0.5, 0.5),
        (0.5, 0.5, 1.0),
    ]
    kept = filter_particles(points, (0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    assert kept == [(0.5, 0.5, 0.5), (0.0, 0.0, 0.0)]


def test_filter_result_is_subset_and_preserves_order():
    points = [(float(i), float(-i), 0.5) for i in range(-3, 4)]
    kept = filter_particles(points, (-2.0, -2.0, 0.0), (2.0, 2.0, 1.0))
    assert all(p in points for p in kept)
    assert kept == [p for p in points if p in kept]
    assert (-3.0, 3.0, 0.5) not in kept