"""Generator-stacked scales and Moment of Symmetry detection.

A scale is built by stacking one generator ``stack_count`` times from 0 cents
and folding every stack into the octave. Its steps are the circular gaps
between neighbouring pitches in sorted order. The scale is a Moment of
Symmetry when:

- exactly two step sizes occur (after rounding to 5 decimals), and
- the large and small step counts are coprime.

Two step sizes with a common factor in the counts (4L 4s) are a smaller
pattern repeated and are not reported as MOS.

Pitches that coincide within 1e-4 cents, such as a chain that closes onto an
earlier note, count as one pitch when the steps are measured; the note list
itself keeps every stack.
"""

import logging
import math
from typing import List, NamedTuple, Optional, Sequence, Tuple

import consts
import generator
import utils

_log = logging.getLogger(__name__)


class MosNote(NamedTuple):
    stack: int
    cents: float


class MosClassification(NamedTuple):
    is_mos: bool
    large_step_count: Optional[int] = None
    small_step_count: Optional[int] = None
    small_step_size: Optional[float] = None
    large_step_size: Optional[float] = None
    pattern: Optional[str] = None

    @property
    def label(self) -> Optional[str]:
        """'xL ys' for a true MOS, otherwise None."""
        if not self.is_mos:
            return None
        return f"{self.large_step_count}L {self.small_step_count}s"

    @property
    def hardness(self) -> Optional[float]:
        """Ratio of large to small step."""
        if not self.small_step_size:
            return None
        return self.large_step_size / self.small_step_size


class MosScale(NamedTuple):
    notes: List[MosNote]
    classification: MosClassification

    @property
    def is_mos(self) -> bool:
        return self.classification.is_mos

    @property
    def label(self) -> Optional[str]:
        return self.classification.label


def stack_generator(generator_cents: float, stack_count: int) -> List[MosNote]:
    """Stack a generator and fold each stack into [0, 1200)."""
    generator_cents = utils.require_finite(generator_cents, "Generator")
    stack_count = utils.require_int(stack_count, "Stack count", minimum=0)

    notes = [MosNote(stack=0, cents=0.0)]
    cumulative = 0.0
    for i in range(1, stack_count + 1):
        cumulative += generator_cents
        notes.append(MosNote(stack=i, cents=utils.normalize_cents(cumulative)))
    return notes


def _distinct_pitches(cents: Sequence[float]) -> List[float]:
    """Sorted pitch classes with coincident values merged."""
    pitches: List[float] = []
    for c in sorted(cents):
        if pitches and c - pitches[-1] < consts.MOS_STEP_EPS:
            continue
        pitches.append(c)
    # A pitch just under 1200 is the same as 0 across the octave boundary
    while len(pitches) > 1 and pitches[0] + consts.OCTAVE_CENTS - pitches[-1] < consts.MOS_STEP_EPS:
        pitches.pop()
    return pitches


def scale_steps(cents: Sequence[float]) -> List[float]:
    """Circular adjacent intervals of a pitch set, starting from its lowest pitch."""
    pitches = _distinct_pitches(cents)
    steps = []
    for i, current in enumerate(pitches):
        interval = pitches[(i + 1) % len(pitches)] - current
        if interval <= 0:
            interval += consts.OCTAVE_CENTS
        steps.append(interval)
    return steps


def classify_steps(steps: Sequence[float]) -> MosClassification:
    """Classify a step sequence as MOS or not."""
    rounded = [round(s, consts.MOS_ROUND_DIGITS) for s in steps]
    sizes = sorted(set(rounded))
    if len(sizes) != 2:
        return MosClassification(is_mos=False)

    small, large = sizes
    small_count = 0
    large_count = 0
    pattern = []
    for step in rounded:
        if abs(step - small) < consts.MOS_STEP_EPS:
            small_count += 1
            pattern.append("s")
        elif abs(step - large) < consts.MOS_STEP_EPS:
            large_count += 1
            pattern.append("L")

    is_mos = small_count > 0 and math.gcd(large_count, small_count) == 1
    return MosClassification(
        is_mos=is_mos,
        large_step_count=large_count,
        small_step_count=small_count,
        small_step_size=small,
        large_step_size=large,
        pattern="".join(pattern),
    )


def generate_mos(generator_cents: float, stack_count: int) -> MosScale:
    """Stack a generator and classify the resulting scale.

    Args:
        generator_cents: generator size in cents, any sign
        stack_count: number of generator applications, >= 0

    Returns:
        MosScale with the notes in stack order and their classification.

    Raises:
        DomainError: for a negative or non-integer stack count or a
            non-finite generator.
    """
    notes = stack_generator(generator_cents, stack_count)
    classification = classify_steps(scale_steps([n.cents for n in notes]))
    _log.debug("MOS generator=%.5f stacks=%d -> %s", generator_cents, stack_count,
               classification.label or "not MOS")
    return MosScale(notes=notes, classification=classification)


def generate_mos_from_expression(expression: str, stack_count: int) -> MosScale:
    """Parse a generator expression (cents, n/d or n\\edo) and stack it."""
    return generate_mos(generator.parse_generator_value(expression), stack_count)


def find_mos_stack_counts(generator_cents: float, max_stacks: int) -> List[Tuple[int, str]]:
    """Stack counts in 1..max_stacks that give a true MOS, with their labels."""
    max_stacks = utils.require_int(max_stacks, "Maximum stack count", minimum=0)
    found = []
    for count in range(1, max_stacks + 1):
        scale = generate_mos(generator_cents, count)
        if scale.is_mos:
            found.append((count, scale.label))
    return found
