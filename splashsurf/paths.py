"""Input and output file paths for reconstruction runs, including file sequences."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_OUTPUT_SUFFIX = "surface"
_PLACEHOLDER = "{}"
_NUMBER_RUNS = re.compile(r"(\d+)")


def natural_sort_key(name: str) -> tuple:
    """Sort key ordering names naturally: digit runs compare by numeric value."""
    parts: list[tuple[int, int, str]] = []
    for piece in _NUMBER_RUNS.split(name):
        if not piece:
            continue
        if piece.isdigit():
            parts.append((ord("0"), int(piece), piece))
        else:
            parts.extend((ord(char), 0, "") for char in piece)
    return (tuple(parts), name)


@dataclass(frozen=True)
class RunnerPaths:
    """The input and output file of a single reconstruction task."""

    input_file: Path
    output_file: Path


@dataclass
class RunnerPathCollection:
    """A single input file or a pattern describing a sequence of input files."""

    is_sequence: bool
    input_file: Path
    output_file: Path
    sequence_range: tuple[int | None, int | None] = (None, None)

    def collect(self) -> list[RunnerPaths]:
        """Returns the paths of one task per input file."""
        if not self.is_sequence:
            return [RunnerPaths(Path(self.input_file), Path(self.output_file))]

        input_file = Path(self.input_file)
        output_file = Path(self.output_file)
        input_dir = input_file.parent
        output_dir = output_file.parent
        output_pattern = output_file.name

        prefix, sep, suffix = input_file.name.partition(_PLACEHOLDER)
        if not sep:
            raise ValueError("sequence input filename has to include pattern")
        pattern_str = rf"{re.escape(prefix)}(\d+){re.escape(suffix)}"
        pattern = re.compile(pattern_str)

        input_root = input_dir if str(input_dir) else Path(".")
        logger.info('Looking for input sequence files in root "%s"', input_root)

        start, end = self.sequence_range
        paths: list[RunnerPaths] = []
        for name in self._file_names(input_root):
            match = pattern.search(name)
            if match is None:
                continue
            index = match.group(1)
            value = int(index)
            if start is not None and value < start:
                continue
            if end is not None and value > end:
                continue
            paths.append(
                RunnerPaths(
                    input_dir / name,
                    output_dir / output_pattern.replace(_PLACEHOLDER, index),
                )
            )

        logger.info(
            'Found %d input files matching the pattern "%s" between in range %s to %s',
            len(paths),
            pattern_str,
            "*" if start is None else start,
            "*" if end is None else end,
        )
        return paths

    @staticmethod
    def _file_names(root: Path) -> list[str]:
        try:
            with os.scandir(root) as entries:
                names = []
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            names.append(entry.name)
                    except OSError:
                        continue
        except OSError:
            return []
        return sorted(names, key=natural_sort_key)


def _try_new(
    is_sequence: bool,
    input_file: Path,
    output_base_path: Path | None,
    output_file: Path,
    sequence_range: tuple[int | None, int | None],
) -> RunnerPathCollection:
    start, end = sequence_range
    if start is not None and end is not None and start > end:
        raise ValueError(f'Invalid input sequence range: "{start} to {end}"')

    if output_base_path is not None:
        output_file = Path(output_base_path) / output_file
        output_dir = output_file.parent
        if not output_dir.exists():
            logger.info(
                'The output directory "%s" of the output file "%s" does not exist. '
                "Trying to create it now...",
                output_dir,
                output_file,
            )
            try:
                output_dir.mkdir(parents=True, exist_ok=True)
            except OSError as err:
                raise OSError(f'Unable to create output directory "{output_dir}"') from err

    return RunnerPathCollection(is_sequence, input_file, output_file, sequence_range)


def path_collection_from(args: Any) -> RunnerPathCollection:
    """Builds the path collection from parsed reconstruct arguments."""
    input_path = Path(args.input_file_or_sequence)
    output_arg = getattr(args, "output_file", None)
    output_dir = getattr(args, "output_dir", None)
    start_index = getattr(args, "start_index", None)
    end_index = getattr(args, "end_index", None)

    input_filename = input_path.name
    if input_filename in ("", "..", "."):
        raise ValueError(f'The input file path "{input_path}" does not end with a filename')

    input_dir = input_path.parent
    if str(input_dir) not in ("", ".") and not input_dir.is_dir():
        raise FileNotFoundError(
            f'The parent directory "{input_dir}" of the input file path "{input_path}" '
            "does not exist"
        )

    input_stem = input_path.stem
    if _PLACEHOLDER in input_filename:
        is_sequence = True
        if output_arg is not None:
            output_pattern = str(output_arg)
            if _PLACEHOLDER not in output_pattern:
                raise ValueError(
                    f'The output filename "{output_arg}" does not contain a place holder "{{}}"'
                )
            output_filename = Path(output_pattern)
        else:
            output_filename = Path(
                input_stem.replace(_PLACEHOLDER, f"{_OUTPUT_SUFFIX}_{_PLACEHOLDER}") + ".vtk"
            )
    else:
        is_sequence = False
        if not input_path.is_file():
            raise FileNotFoundError(f'Input file does not exist: "{input_path}"')
        if output_arg is not None:
            output_filename = Path(output_arg)
        else:
            output_filename = Path(f"{input_stem}_{_OUTPUT_SUFFIX}.vtk")

    return _try_new(
        is_sequence,
        input_path,
        None if output_dir is None else Path(output_dir),
        output_filename,
        (start_index, end_index),
    )