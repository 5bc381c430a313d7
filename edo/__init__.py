"""Equal Division of the Octave.

``generate_edo(n)`` returns the n equally spaced pitch classes of n-EDO,
one EdoNote per step. Primality of n is a property of the whole division
and is shared by every note of the set.
"""

import logging
from typing import List, NamedTuple, Tuple

import consts
import utils

_log = logging.getLogger(__name__)


class EdoNote(NamedTuple):
    index: int
    cents: float
    is_edo_prime: bool


def step_size(divisions: int) -> float:
    """Size of one step of the EDO in cents."""
    divisions = utils.require_int(divisions, "EDO divisions", minimum=1)
    return consts.OCTAVE_CENTS / divisions


def generate_edo(divisions: int) -> List[EdoNote]:
    """Generate the notes of an EDO.

    Args:
        divisions: number of equal steps per octave, a positive integer

    Returns:
        Exactly ``divisions`` notes, index 0 at 0 cents.

    Raises:
        DomainError: when divisions is not a positive integer.
    """
    divisions = utils.require_int(divisions, "EDO divisions", minimum=1)
    prime = utils.is_prime(divisions)
    notes = [EdoNote(index=n, cents=n / divisions * consts.OCTAVE_CENTS, is_edo_prime=prime)
             for n in range(divisions)]
    _log.debug("Generated %d-EDO (prime=%s)", divisions, prime)
    return notes


def edo_note_label(note: EdoNote, divisions: int) -> str:
    """Label such as '7 \\ 12 EDO'."""
    return f"{note.index} \\ {divisions} EDO"


def nearest_edo_note(cents: float, divisions: int) -> Tuple[EdoNote, float]:
    """Closest EDO step to a pitch, by circular distance.

    Returns (note, error) where error is signed (target minus note) and lies
    in [-600, 600].
    """
    cents = utils.require_finite(cents, "cents")
    notes = generate_edo(divisions)
    target = utils.normalize_cents(cents)
    index = int(round(target / (consts.OCTAVE_CENTS / len(notes)))) % len(notes)
    note = notes[index]
    error = target - note.cents
    if error > consts.OCTAVE_CENTS / 2:
        error -= consts.OCTAVE_CENTS
    elif error < -consts.OCTAVE_CENTS / 2:
        error += consts.OCTAVE_CENTS
    return note, error
