"""Scala (.scl) export for EDO, JI and MOS note sets.

A .scl file lists the degrees above 1/1 in ascending order, one per line,
ending with the period. Degrees containing a dot are cents, degrees with a
slash are ratios. JI intervals keep their exact fractions; EDO and MOS
degrees are written in cents. The octave closes every scale as ``2/1``.
"""

import logging
from typing import List, Sequence

import consts
import edo
import ji
import mos
import utils

_log = logging.getLogger(__name__)

OCTAVE_DEGREE = "2/1"


def _cents_degree(cents: float) -> str:
    """Scala cents literal; the dot is mandatory."""
    return f"{cents:.5f}"


def edo_degrees(notes: Sequence[edo.EdoNote]) -> List[str]:
    return [_cents_degree(n.cents) for n in notes if n.index > 0] + [OCTAVE_DEGREE]


def ji_degrees(intervals: Sequence[ji.JIInterval]) -> List[str]:
    return [iv.fraction for iv in ji.sort_by_cents(intervals)] + [OCTAVE_DEGREE]


def mos_degrees(scale: mos.MosScale) -> List[str]:
    degrees = []
    for cents in sorted(n.cents for n in scale.notes):
        if cents < consts.MOS_STEP_EPS or consts.OCTAVE_CENTS - cents < consts.MOS_STEP_EPS:
            continue
        if degrees and cents - degrees[-1] < consts.MOS_STEP_EPS:
            continue
        degrees.append(cents)
    return [_cents_degree(c) for c in degrees] + [OCTAVE_DEGREE]


def format_scl(name: str, description: str, degrees: Sequence[str]) -> str:
    """Text of a .scl file."""
    lines = [
        f"! {name}.scl",
        f"! Generated by {consts.__program_name__} {consts.__version__}",
        "!",
        description,
        str(len(degrees)),
        "!",
    ]
    lines += [f" {d}" for d in degrees]
    return "\n".join(lines) + "\n"


def write_scl_file(output_base: str, description: str, degrees: Sequence[str]) -> bool:
    """Exports ``<output_base>.scl``.

    Args:
        output_base: Base name of the output file (without extension)
        description: One-line scale description
        degrees: Scala degree literals above 1/1, period last

    Returns:
        True when the file was written
    """
    scl_path = f"{output_base}.scl"
    name = output_base.replace("\\", "/").rsplit("/", 1)[-1]
    try:
        with open(scl_path, "w", encoding="utf-8") as f:
            f.write(format_scl(name, description, degrees))
    except OSError as e:
        utils.log_export_error(scl_path, e)
        return False
    utils.log_export_success(scl_path)
    _log.debug("%s: %d degrees", scl_path, len(degrees))
    return True
