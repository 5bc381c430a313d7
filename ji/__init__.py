"""Just intonation intervals bounded by a prime set and an odd limit.

Every pair of odd numbers ``num, den <= odd_limit`` (``num != den``) whose
prime factors all belong to the selected primes yields one interval: the
fraction is brought into the octave [1, 2) by powers of two, simplified, and
converted to cents. The odd limit bounds the terms before octave reduction,
which is the conventional meaning of "odd limit". Intervals whose cents fall
within 1e-6 of an already kept one are duplicates reached through another
pair (3/1 and 9/3 both give 3/2) and are dropped; the first one found wins.

Factors of 2 introduced by octave reduction are octave equivalence and need
not be selected.
"""

import logging
from fractions import Fraction
from typing import FrozenSet, Iterable, List, NamedTuple

import consts
import utils

_log = logging.getLogger(__name__)

DEFAULT_PRIMES = consts.DEFAULT_PRIMES


class JIInterval(NamedTuple):
    numerator: int
    denominator: int
    cents: float
    prime_factors: FrozenSet[int]
    highest_prime: int

    @property
    def fraction(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    @property
    def ratio(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)


def _validate_odd_limit(odd_limit) -> int:
    odd_limit = utils.require_int(odd_limit, "Odd limit", minimum=1)
    if odd_limit % 2 == 0:
        raise utils.DomainError(f"Odd limit must be a positive odd integer, got {odd_limit}")
    return odd_limit


def coerce_odd_limit(value: int) -> int:
    """Bring an even limit down to the next lower odd value.

    The engine rejects even limits; callers taking free user input use this
    first.
    """
    value = utils.require_int(value, "Odd limit")
    if value % 2 == 0:
        value -= 1
    if value < 1:
        raise utils.DomainError(f"Odd limit must be a positive odd integer, got {value}")
    return value


def generate_ji(selected_primes: Iterable[int], odd_limit: int) -> List[JIInterval]:
    """Enumerate the JI intervals allowed by the primes and the odd limit.

    Args:
        selected_primes: primes allowed as factors of numerator and denominator
        odd_limit: positive odd integer bounding both terms

    Returns:
        Deduplicated intervals in order of discovery. An empty prime set
        gives an empty list.

    Raises:
        DomainError: for an even, zero or negative odd limit, or a
            non-integer prime.
    """
    odd_limit = _validate_odd_limit(odd_limit)
    allowed = frozenset(utils.require_int(p, "Selected prime") for p in selected_primes)

    intervals: List[JIInterval] = []
    for num in range(1, odd_limit + 1, 2):
        num_factors = utils.prime_factors(num)
        for den in range(1, odd_limit + 1, 2):
            if num == den:
                continue
            factors = num_factors | utils.prime_factors(den)
            if not factors <= allowed:
                continue

            n, d = utils.reduce_pair_to_octave(num, den)
            cents = utils.ratio_to_cents(n / d)
            if any(abs(cents - kept.cents) < consts.JI_DEDUP_EPS for kept in intervals):
                continue
            intervals.append(JIInterval(numerator=n, denominator=d, cents=cents,
                                        prime_factors=factors, highest_prime=max(factors)))

    _log.debug("JI primes=%s odd_limit=%d -> %d intervals",
               sorted(allowed), odd_limit, len(intervals))
    return intervals


def sort_by_cents(intervals: Iterable[JIInterval]) -> List[JIInterval]:
    """Intervals in ascending pitch order."""
    return sorted(intervals, key=lambda iv: iv.cents)
