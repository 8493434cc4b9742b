"""Command line parsing for the surface reconstruction tool."""

from __future__ import annotations

import argparse
import enum
import sys
from collections.abc import Sequence

from splashsurf.arguments import Switch

PROGRAM_NAME = "splashsurf"
VERSION = "0.10.0"

_ABOUT = "Surface reconstruction for particle data from SPH simulations"

_ARGS_IO = "Input/output"
_ARGS_BASIC = "Numerical reconstruction parameters"
_ARGS_ADV = "Advanced parameters"
_ARGS_OCTREE = "Domain decomposition (octree or grid) parameters"
_ARGS_DEBUG = "Debug options"
_ARGS_INTERP = "Interpolation & normals"
_ARGS_POSTPROC = "Postprocessing"
_ARGS_OTHER = "Remaining options"

_SUBCOMMANDS = ("reconstruct", "convert")


class ErrorKind(enum.Enum):
    """The kind of problem found while parsing the command line."""

    DISPLAY_HELP = "display_help"
    DISPLAY_VERSION = "display_version"
    UNKNOWN_ARGUMENT = "unknown_argument"
    MISSING_REQUIRED_ARGUMENT = "missing_required_argument"
    MISSING_SUBCOMMAND = "missing_subcommand"
    INVALID_SUBCOMMAND = "invalid_subcommand"
    INVALID_VALUE = "invalid_value"
    ARGUMENT_CONFLICT = "argument_conflict"
    WRONG_NUMBER_OF_VALUES = "wrong_number_of_values"
    TOO_MANY_VALUES = "too_many_values"
    NO_EQUALS = "no_equals"


class CommandLineError(Exception):
    """Raised when the command line cannot be parsed, or help or version was requested."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def exit_code(self) -> int:
        """The exit status a command should end with for this error."""
        return 0 if self.kind in (ErrorKind.DISPLAY_HELP, ErrorKind.DISPLAY_VERSION) else 2

    def __str__(self) -> str:
        return self.message


def _classify(message: str) -> ErrorKind:
    if "unrecognized arguments" in message or "ambiguous option" in message:
        return ErrorKind.UNKNOWN_ARGUMENT
    if "the following arguments are required" in message:
        return ErrorKind.MISSING_REQUIRED_ARGUMENT
    if "not allowed with argument" in message:
        return ErrorKind.ARGUMENT_CONFLICT
    if "ignored explicit argument" in message:
        return ErrorKind.TOO_MANY_VALUES
    if "expected" in message and "argument" in message:
        return ErrorKind.WRONG_NUMBER_OF_VALUES
    if "invalid choice" in message:
        return ErrorKind.INVALID_SUBCOMMAND
    return ErrorKind.INVALID_VALUE


class _HelpAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        raise CommandLineError(ErrorKind.DISPLAY_HELP, parser.format_help())


class _VersionAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        raise CommandLineError(ErrorKind.DISPLAY_VERSION, f"{PROGRAM_NAME} {VERSION}")


class _Parser(argparse.ArgumentParser):
    """An argument parser that raises instead of printing and exiting."""

    def __init__(self, *args, **kwargs):
        kwargs["add_help"] = False
        kwargs.setdefault("allow_abbrev", False)
        super().__init__(*args, **kwargs)
        self.add_argument("-h", "--help", action=_HelpAction, help="Print help")
        self.add_argument("-V", "--version", action=_VersionAction, help="Print version")

    def error(self, message):
        raise CommandLineError(_classify(message), message)


def _switch(value: str) -> Switch:
    try:
        return Switch.parse(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"value must not be negative: '{value}'")
    return number


# (option strings, dest, default, help, heading)
_SWITCHES: tuple[tuple[tuple[str, ...], str, Switch, str, str], ...] = (
    (("-d", "--double-precision"), "double_precision", Switch.OFF,
     "Enable the use of double precision for all computations", _ARGS_ADV),
    (("--mt-files",), "parallelize_over_files", Switch.OFF,
     "Enable multi-threading to process multiple input files in parallel", _ARGS_ADV),
    (("--mt-particles",), "parallelize_over_particles", Switch.ON,
     "Enable multi-threading for a single input file by processing chunks of particles "
     "in parallel", _ARGS_ADV),
    (("--subdomain-grid",), "subdomain_grid", Switch.ON,
     "Enable spatial decomposition using a regular grid-based approach", _ARGS_OCTREE),
    (("--normals",), "normals", Switch.OFF,
     "Enable computing surface normals at the mesh vertices and write them to the output file",
     _ARGS_INTERP),
    (("--sph-normals",), "sph_normals", Switch.OFF,
     "Enable computing the normals using SPH interpolation instead of using the area weighted "
     "triangle normals", _ARGS_INTERP),
    (("--output-raw-normals",), "output_raw_normals", Switch.OFF,
     "Enable writing raw normals without smoothing to the output mesh if normal smoothing is "
     "enabled", _ARGS_INTERP),
    (("--mesh-cleanup",), "mesh_cleanup", Switch.OFF,
     "Enable MC specific mesh decimation/simplification which removes bad quality triangles "
     "typically generated by MC", _ARGS_POSTPROC),
    (("--decimate-barnacles",), "decimate_barnacles", Switch.OFF,
     "Enable decimation of some typical bad marching cubes triangle configurations",
     _ARGS_POSTPROC),
    (("--keep-verts",), "keep_verts", Switch.OFF,
     "Enable keeping vertices without connectivity during decimation instead of filtering "
     "them out", _ARGS_POSTPROC),
    (("--mesh-smoothing-weights",), "mesh_smoothing_weights", Switch.OFF,
     "Enable feature weights for mesh smoothing if mesh smoothing enabled", _ARGS_POSTPROC),
    (("--output-smoothing-weights",), "output_smoothing_weights", Switch.OFF,
     "Enable writing the smoothing weights as a vertex attribute to the output mesh file",
     _ARGS_POSTPROC),
    (("--generate-quads",), "generate_quads", Switch.OFF,
     "Enable trying to convert triangles to quads if they meet quality criteria",
     _ARGS_POSTPROC),
    (("--mesh-aabb-clamp-verts",), "mesh_aabb_clamp_verts", Switch.OFF,
     "Enable clamping of vertices outside the specified mesh AABB to the AABB", _ARGS_POSTPROC),
    (("--output-raw-mesh",), "output_raw_mesh", Switch.OFF,
     "Enable writing the raw reconstructed mesh before applying any post-processing steps",
     _ARGS_POSTPROC),
    (("--check-mesh",), "check_mesh", Switch.OFF,
     "Enable checking the final mesh for holes and non-manifold edges and vertices",
     _ARGS_DEBUG),
    (("--check-mesh-closed",), "check_mesh_closed", Switch.OFF,
     "Enable checking the final mesh for holes", _ARGS_DEBUG),
    (("--check-mesh-manifold",), "check_mesh_manifold", Switch.OFF,
     "Enable checking the final mesh for non-manifold edges and vertices", _ARGS_DEBUG),
    (("--check-mesh-orientation",), "check_mesh_orientation", Switch.OFF,
     "Enable checking the final mesh for inverted triangles", _ARGS_DEBUG),
    (("--check-mesh-debug",), "check_mesh_debug", Switch.OFF,
     "Enable additional debug output for the check-mesh operations", _ARGS_DEBUG),
)

_SWITCH_OPTIONS = frozenset(option for options, *_ in _SWITCHES for option in options)

_REQUIRED_PAIRS = (
    ("particle_aabb_min", "particle_aabb_max"),
    ("mesh_aabb_min", "mesh_aabb_max"),
    ("domain_min", "domain_max"),
)


def _add_global_options(parser: argparse.ArgumentParser, prefix: str) -> None:
    parser.add_argument(
        "-q", "--quiet", dest=f"{prefix}quiet", action="store_true",
        help="Enable quiet mode (no output except for severe panic messages), "
        "overrides verbosity level",
    )
    parser.add_argument(
        "-v", dest=f"{prefix}verbosity", action="count", default=0,
        help='Print more verbose output, use multiple "v"s for even more verbose output (-v, -vv)',
    )


def _add_reconstruct_arguments(parser: argparse.ArgumentParser) -> None:
    groups: dict[str, argparse._ArgumentGroup] = {}

    def group(title: str) -> argparse._ArgumentGroup:
        if title not in groups:
            groups[title] = parser.add_argument_group(title)
        return groups[title]

    io = group(_ARGS_IO)
    io.add_argument(
        "input_file_or_sequence",
        help='Path to the input file where the particle positions are stored, use "{}" in the '
        "filename to indicate a placeholder for a sequence",
    )
    io.add_argument("-o", "--output-file", dest="output_file", default=None,
                    help="Filename for writing the reconstructed surface to disk")
    io.add_argument("--output-dir", dest="output_dir", default=None,
                    help="Optional base directory for all output files")
    io.add_argument("-s", "--start-index", dest="start_index", type=_non_negative_int,
                    default=None, help="Index of the first input file of a sequence to process")
    io.add_argument("-e", "--end-index", dest="end_index", type=_non_negative_int,
                    default=None, help="Index of the last input file of a sequence to process")

    basic = group(_ARGS_BASIC)
    basic.add_argument("-r", "--particle-radius", dest="particle_radius", type=float,
                       required=True, help="The particle radius of the input data")
    basic.add_argument("--rest-density", dest="rest_density", type=float, default=1000.0,
                       help="The rest density of the fluid")
    basic.add_argument("-l", "--smoothing-length", dest="smoothing_length", type=float,
                       required=True,
                       help="The smoothing length radius used for the SPH kernel "
                       "(in multiplies of the particle radius)")
    basic.add_argument("-c", "--cube-size", dest="cube_size", type=float, required=True,
                       help="The cube edge length used for marching cubes "
                       "(in multiplies of the particle radius)")
    basic.add_argument("-t", "--surface-threshold", dest="surface_threshold", type=float,
                       default=0.6, help="The iso-surface threshold for the density")
    basic.add_argument("--particle-aabb-min", dest="particle_aabb_min", type=float, nargs=3,
                       metavar=("X_MIN", "Y_MIN", "Z_MIN"), default=None,
                       help="Lower corner of the domain where surface reconstruction should "
                       "be performed (requires particle-aabb-max)")
    basic.add_argument("--particle-aabb-max", dest="particle_aabb_max", type=float, nargs=3,
                       metavar=("X_MAX", "Y_MAX", "Z_MAX"), default=None,
                       help="Upper corner of the domain where surface reconstruction should "
                       "be performed (requires particle-aabb-min)")

    for options, dest, default, help_text, heading in _SWITCHES:
        group(heading).add_argument(
            *options, dest=dest, type=_switch, default=default, metavar="off|on", help=help_text
        )

    group(_ARGS_ADV).add_argument("-n", "--num-threads", dest="num_threads",
                                  type=_non_negative_int, default=None,
                                  help="Set the number of threads for the worker thread pool")
    group(_ARGS_OCTREE).add_argument(
        "--subdomain-cubes", dest="subdomain_cubes", type=_non_negative_int, default=64,
        help="Each subdomain will be a cube consisting of this number of MC cube cells "
        "along each coordinate axis",
    )

    interp = group(_ARGS_INTERP)
    interp.add_argument("--normals-smoothing-iters", dest="normals_smoothing_iters",
                        type=_non_negative_int, default=None,
                        help="Number of smoothing iterations to run on the normal field")
    interp.add_argument("-a", "--interpolate_attribute", dest="interpolate_attributes",
                        action="append", default=[], metavar="ATTRIBUTE_NAME",
                        help="Interpolate a point attribute field with the given name from the "
                        "input file to the reconstructed surface")

    post = group(_ARGS_POSTPROC)
    post.add_argument("--mesh-smoothing-iters", dest="mesh_smoothing_iters",
                      type=_non_negative_int, default=None,
                      help="Number of smoothing iterations to run on the reconstructed mesh")
    post.add_argument("--mesh-smoothing-weights-normalization",
                      dest="mesh_smoothing_weights_normalization", type=float, default=13.0,
                      help="Normalization value from weighted number of neighbors to mesh "
                      "smoothing weights")
    post.add_argument("--quad-max-edge-diag-ratio", dest="quad_max_edge_diag_ratio",
                      type=float, default=1.75,
                      help="Maximum allowed ratio of quad edge lengths to its diagonals")
    post.add_argument("--quad-max-normal-angle", dest="quad_max_normal_angle", type=float,
                      default=10.0,
                      help="Maximum allowed angle (in degrees) between triangle normals")
    post.add_argument("--quad-max-interior-angle", dest="quad_max_interior_angle", type=float,
                      default=135.0,
                      help="Maximum allowed vertex interior angle (in degrees) inside a quad")
    post.add_argument("--mesh-aabb-min", dest="mesh_aabb_min", type=float, nargs=3,
                      metavar=("X_MIN", "Y_MIN", "Z_MIN"), default=None,
                      help="Lower corner of the bounding-box for the surface mesh "
                      "(requires mesh-aabb-max)")
    post.add_argument("--mesh-aabb-max", dest="mesh_aabb_max", type=float, nargs=3,
                      metavar=("X_MAX", "Y_MAX", "Z_MAX"), default=None,
                      help="Upper corner of the bounding-box for the surface mesh "
                      "(requires mesh-aabb-min)")

    _add_global_options(group(_ARGS_OTHER), "_sub_")


def _add_convert_arguments(parser: argparse.ArgumentParser) -> None:
    inputs = parser.add_mutually_exclusive_group()
    inputs.add_argument("--particles", dest="input_particles", default=None,
                        help="Path to the input file with particles to read")
    inputs.add_argument("--mesh", dest="input_mesh", default=None,
                        help="Path to the input file with a surface to read")
    parser.add_argument("-o", dest="output_file", required=True,
                        help="Path to the output file")
    parser.add_argument("--overwrite", action="store_true",
                        help="Whether to overwrite existing files without asking")
    parser.add_argument("--domain-min", dest="domain_min", type=float, nargs=3,
                        metavar=("X_MIN", "Y_MIN", "Z_MIN"), default=None,
                        help="Lower corner of the domain of particles to keep "
                        "(requires domain-max)")
    parser.add_argument("--domain-max", dest="domain_max", type=float, nargs=3,
                        metavar=("X_MAX", "Y_MAX", "Z_MAX"), default=None,
                        help="Upper corner of the domain of particles to keep "
                        "(requires domain-min)")
    _add_global_options(parser, "_sub_")


def build_parser() -> argparse.ArgumentParser:
    """Builds the parser for the tool and its reconstruct and convert subcommands."""
    parser = _Parser(prog=PROGRAM_NAME, description=f"{PROGRAM_NAME} (v{VERSION}) - {_ABOUT}")
    _add_global_options(parser, "")
    subparsers = parser.add_subparsers(dest="subcommand", title="Commands", metavar="COMMAND")
    reconstruct = subparsers.add_parser(
        "reconstruct", help="Reconstruct a surface from particle data",
        description="Reconstruct a surface from particle data",
    )
    _add_reconstruct_arguments(reconstruct)
    convert = subparsers.add_parser(
        "convert", help="Convert particle or mesh files between different file formats",
        description="Convert particle or mesh files between different file formats",
    )
    _add_convert_arguments(convert)
    return parser


def _check_require_equals(argv: Sequence[str]) -> None:
    for token in argv:
        if token == "--":
            return
        if token in _SWITCH_OPTIONS:
            raise CommandLineError(
                ErrorKind.NO_EQUALS,
                f"equal sign is needed when assigning values to '{token}'",
            )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parses the command line (without program name) into a flat namespace."""
    args = list(sys.argv[1:] if argv is None else argv)
    _check_require_equals(args)

    namespace, extras = build_parser().parse_known_args(args)
    if extras:
        raise CommandLineError(
            ErrorKind.UNKNOWN_ARGUMENT, f"unexpected argument '{extras[0]}' found"
        )
    if namespace.subcommand is None:
        raise CommandLineError(
            ErrorKind.MISSING_SUBCOMMAND,
            f"a subcommand is required ({', '.join(_SUBCOMMANDS)})",
        )

    namespace.quiet = bool(namespace.quiet or getattr(namespace, "_sub_quiet", False))
    namespace.verbosity = namespace.verbosity + getattr(namespace, "_sub_verbosity", 0)
    for private in ("_sub_quiet", "_sub_verbosity"):
        if hasattr(namespace, private):
            delattr(namespace, private)

    for first, second in _REQUIRED_PAIRS:
        if not hasattr(namespace, first):
            continue
        has_first = getattr(namespace, first) is not None
        has_second = getattr(namespace, second) is not None
        if has_first != has_second:
            missing = second if has_first else first
            raise CommandLineError(
                ErrorKind.MISSING_REQUIRED_ARGUMENT,
                "the following required arguments were not provided: "
                f"--{missing.replace('_', '-')}",
            )
    return namespace