"""Generator value parsing for MOS construction.

A generator can be typed in three notations, detected syntactically in this
order:

- EDO steps ``"7\\12"``: seven steps of 12-EDO, ``steps / edo * 1200`` cents
- ratio ``"3/2"``: ``1200 * log2(3/2)`` cents
- plain cents ``"701.955"``: used unmodified, any sign or size

Whitespace is trimmed at the string boundaries only. The presence of a
backslash or a slash decides the notation before any number is read, so
``"3/x"`` is a malformed ratio and never falls back to plain cents.

The parse result is a small tagged union (EdoSteps, Ratio, PlainCents); each
member exposes its value in cents.
"""

import argparse
import math
from typing import Union, NamedTuple

import consts
import utils

EDO_FORMAT_MESSAGE = "Invalid EDO format. Use n\\edo"
RATIO_FORMAT_MESSAGE = "Invalid ratio format. Use n/d"
GENERAL_FORMAT_MESSAGE = (
    "Invalid generator value. Use cents (701.955), a ratio n/d (3/2) "
    "or EDO steps n\\edo (7\\12)"
)


class EdoSteps(NamedTuple):
    steps: float
    edo: float

    @property
    def cents(self) -> float:
        return self.steps / self.edo * consts.OCTAVE_CENTS


class Ratio(NamedTuple):
    numerator: float
    denominator: float

    @property
    def cents(self) -> float:
        return utils.ratio_to_cents(self.numerator / self.denominator)


class PlainCents(NamedTuple):
    value: float

    @property
    def cents(self) -> float:
        return self.value


GeneratorValue = Union[EdoSteps, Ratio, PlainCents]


def _parse_real(text: str):
    """Parse a real per the generator grammar; None when it is not one."""
    if not consts.REAL_PATTERN.match(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def parse_generator_expression(text: str) -> GeneratorValue:
    """Parse a generator expression into its tagged form.

    Raises:
        FormatError: when the text fits none of the three notations.
    """
    if text is None:
        raise utils.FormatError(GENERAL_FORMAT_MESSAGE)
    s = str(text).strip()

    # 1) EDO steps: n\edo
    if "\\" in s:
        parts = s.split("\\")
        if len(parts) != 2:
            raise utils.FormatError(EDO_FORMAT_MESSAGE)
        steps, edo = _parse_real(parts[0]), _parse_real(parts[1])
        if steps is None or edo is None or edo <= 0:
            raise utils.FormatError(EDO_FORMAT_MESSAGE)
        return EdoSteps(steps, edo)

    # 2) Ratio: n/d
    if "/" in s:
        parts = s.split("/")
        if len(parts) != 2:
            raise utils.FormatError(RATIO_FORMAT_MESSAGE)
        num, den = _parse_real(parts[0]), _parse_real(parts[1])
        if num is None or den is None or num <= 0 or den <= 0:
            raise utils.FormatError(RATIO_FORMAT_MESSAGE)
        return Ratio(num, den)

    # 3) Plain cents
    value = _parse_real(s)
    if value is None:
        raise utils.FormatError(GENERAL_FORMAT_MESSAGE)
    return PlainCents(value)


def parse_generator_value(text: str) -> float:
    """Parse a generator expression and return its size in cents."""
    return parse_generator_expression(text).cents


def generator_value_arg(text: str) -> float:
    """argparse type for generator expressions."""
    try:
        return parse_generator_value(text)
    except utils.FormatError as e:
        raise argparse.ArgumentTypeError(str(e))
