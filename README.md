# splashsurf

Building blocks for reconstructing surfaces from particle data produced by
SPH (smoothed particle hydrodynamics) simulations. The package has no
third-party dependencies.

Modules:

- `splashsurf.aabb` – axis-aligned bounding boxes (`AxisAlignedBoundingBox`)
  with joining, growing, scaling, centring and half-open containment tests.
- `splashsurf.logsetup` – verbosity levels (`VerbosityLevel`), log level
  resolution (`resolve_log_level`), logger setup (`initialize_logging`) and
  error reporting (`log_error`, `log_program_info`).
- `splashsurf.arguments` – on/off switches (`Switch`) and validated
  reconstruction settings (`ReconstructionParameters`,
  `GridDecompositionParameters`, `PostprocessingArgs`,
  `ReconstructionRunnerArgs`) built from parsed options with
  `runner_args_from`; `aabb_from_min_max` checks user-given box corners.
- `splashsurf.paths` – input/output path handling, including numbered file
  sequences written with a `{}` placeholder (`path_collection_from`,
  `RunnerPathCollection`, `RunnerPaths`, `natural_sort_key`).
- `splashsurf.cli` – the `reconstruct` and `convert` option parser
  (`build_parser`, `parse_args`) with typed errors (`CommandLineError`,
  `ErrorKind`).
- `splashsurf.weights` – weighted neighbour counts, mesh smoothing weights,
  the smooth-step function and a search for flipped faces.
- `splashsurf.convert` – helpers for converting particle files: overwrite
  checks, input selection and filtering particles to a domain.

## What the package does not do

It does not compute surfaces: there is no density evaluation, marching cubes
or mesh post-processing (cleanup, decimation, smoothing, quad generation) in
it. It reads and writes no particle or mesh files (VTK, PLY, OBJ, BGEO, …),
and it installs no command: `splashsurf.cli` parses a command line into a
namespace, and running a reconstruction from it is left to the caller.

## Bounding boxes

```python
from splashsurf.aabb import AxisAlignedBoundingBox

box = AxisAlignedBoundingBox.from_points([
    (1.0, 1.0, 1.0),
    (0.5, 3.0, 5.0),
    (-1.0, 1.0, 1.0),
])
box.extents()                          # (2.0, 2.0, 4.0)
box.contains_point((0.0, 2.0, 2.0))    # True
box.grow_uniformly(0.1)
cube = box.enclosing_cube()
```

Boxes are half-open: a point on the maximum side is not contained.
`from_points([])` gives a three-dimensional box at the origin.

## Parsing reconstruction options

```python
from splashsurf.cli import parse_args
from splashsurf.arguments import runner_args_from

args = parse_args([
    "reconstruct", "particles_{}.vtk",
    "--particle-radius=0.025",
    "--smoothing-length=2.0",
    "--cube-size=0.75",
    "--normals=on",
])
runner = runner_args_from(args)
runner.params.compact_support_radius   # 0.1 (radius * 2 * smoothing length)
```

`parse_args` takes the arguments without the program name and returns a flat
`argparse.Namespace` with a `subcommand` attribute (`"reconstruct"` or
`"convert"`), the merged `quiet` flag and `verbosity` count, and the
subcommand's options.

Problems raise `CommandLineError`; its `kind` is an `ErrorKind` member and
its `exit_code` is 0 for help and version requests and 2 otherwise. For
example `--help` gives `ErrorKind.DISPLAY_HELP`, and a fourth value after
`--particle-aabb-min` gives `ErrorKind.UNKNOWN_ARGUMENT`.

Switch options take `on` or `off` (case-insensitive) after an equals sign,
such as `--mesh-cleanup=on`; without the equals sign the error kind is
`ErrorKind.NO_EQUALS`. Bounding-box corners take three values each and must
be given in pairs:
`--particle-aabb-min -1.0 -1.0 -1.0 --particle-aabb-max 1.0 1.0 1.0`.
`runner_args_from` raises `ValueError` for inconsistent or degenerate boxes.

## File sequences

`path_collection_from(args)` turns the parsed input and output options into a
`RunnerPathCollection`; its `collect()` returns one `RunnerPaths` per input
file.

An input filename containing `{}` denotes a sequence. All files in its
directory whose names match the pattern with a number in place of `{}` are
taken in natural order, optionally limited with `--start-index` and
`--end-index`. Unless an output name (which must then contain `{}`) is given,
outputs are named `<stem with {} replaced by surface_{}>.vtk`. A single input
`name.vtk` must exist and gives `name_surface.vtk` by default. With
`--output-dir` the output directory is created if missing.

## Logging

```python
import sys
from splashsurf.logsetup import VerbosityLevel, initialize_logging

initialize_logging(VerbosityLevel.from_count(1), False, sys.stdout)
```

Quiet mode turns logging off entirely. Without `-v` the level comes from the
`SPLASHSURF_LOG` environment variable (`off`, `error`, `warn`, `info`,
`debug`, `trace`) when set, otherwise INFO; an unknown value is reported and
INFO is used.

## Smoothing weights

```python
from splashsurf.weights import smoothing_weights

weights = smoothing_weights([0.0, 6.5, 13.0, 20.0], 13.0)
```

Counts are divided by the normalisation, clamped to `[0, 1]` and passed
through the smooth-step polynomial `6x⁵ − 15x⁴ + 10x³`.
`weighted_neighbor_counts` computes the counts from particle positions and
neighbour lists, and `find_flipped_faces` reports faces whose normal is
nearly opposite to that of an adjacent vertex.

## Tests

```
pip install -e .[test]
pytest
```