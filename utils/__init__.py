"""Core utilities and mathematical functions for the CERCHIO engines.

This module is the foundation layer shared by the generator parser, the
EDO/JI/MOS engines, the table and Scala exporters and the command line.

Error Taxonomy:
- TuningError base class (a ValueError) for every engine failure
- FormatError for malformed generator expressions
- DomainError for numeric parameters outside their required range

Mathematical Operations:
- Ratio-to-cents and cents-to-ratio conversions
- Pitch-class normalization into [0, 1200)
- Primality and prime factorization by trial division
- Octave reduction of integer fractions followed by gcd simplification

Validation:
- Integer checks that reject bools and floats
- Argument type factories for argparse with range checking

Formatting and Reporting:
- Cents formatting with the cent sign
- Aligned text tables
- Export success/error reporting through print and logging

Logging:
- File based logging setup and redirection of Python warnings
"""

import argparse
import logging
import math
import numbers
import warnings
from typing import Callable, FrozenSet, List, Optional, Tuple

import consts

# --- Error taxonomy ---


class TuningError(ValueError):
    """Base class for every error raised by the tuning engines."""


class FormatError(TuningError):
    """A generator expression matches none of the accepted grammars."""


class DomainError(TuningError):
    """A numeric parameter is outside its required range."""


# --- Logging system ---

def setup_logging(log_file: str = consts.DEFAULT_LOG_FILE, level: int = logging.WARNING) -> None:
    """Setup file logging and capture Python warnings into it."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
        ]
    )

    # Capture warnings and redirect to logger
    def warning_handler(message, category, filename, lineno, file=None, line=None):
        logger = logging.getLogger('warnings')
        logger.warning(f"{category.__name__}: {message} ({filename}:{lineno})")

    warnings.showwarning = warning_handler


def log_export_success(file_path: str) -> None:
    """Log successful file export."""
    logging.getLogger(__name__).info("Exported %s", file_path)
    print(f"Exported: {file_path}")


def log_export_error(file_path: str, error: Exception) -> None:
    """Log file export error."""
    logging.getLogger(__name__).error("Write error %s: %s", file_path, error)
    print(f"Write error {file_path}: {error}")


# --- Validation ---

def is_integer_value(value) -> bool:
    """True for real integers (bool excluded)."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def require_int(value, name: str, minimum: Optional[int] = None) -> int:
    """Return value as int or raise DomainError.

    Floats are rejected even when integral: the engines take counts, not
    measurements.
    """
    if not is_integer_value(value):
        raise DomainError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if minimum is not None and value < minimum:
        raise DomainError(f"{name} must be at least {minimum}, got {value}")
    return value


def require_finite(value, name: str) -> float:
    """Return value as a finite float or raise DomainError."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise DomainError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise DomainError(f"{name} must be finite, got {value}")
    return value


# --- Cents and ratios ---

def ratio_to_cents(ratio: float) -> float:
    """Converte un rapporto in cents / Convert a ratio to cents."""
    return consts.OCTAVE_CENTS * math.log2(float(ratio))


def cents_to_ratio(cents: float) -> float:
    """Converte cents in rapporto / Convert cents to a frequency ratio."""
    return 2.0 ** (float(cents) / consts.OCTAVE_CENTS)


def apply_cents(freq_hz: float, cents: float) -> float:
    """Applica offset in cents a una frequenza / Apply cents offset to a frequency."""
    return float(freq_hz) * cents_to_ratio(cents)


def convert_midi_to_hz(midi_value: int, diapason_hz: float = consts.DEFAULT_DIAPASON) -> float:
    """Convert a MIDI note number to Hz for the given A4."""
    return diapason_hz * (2.0 ** ((midi_value - consts.MIDI_A4) / consts.SEMITONES_PER_OCTAVE))


def normalize_cents(cents: float) -> float:
    """Fold a cents value into the pitch-class range [0, 1200)."""
    octave = consts.OCTAVE_CENTS
    folded = ((cents % octave) + octave) % octave
    # tiny negatives fold to exactly 1200.0 in floating point
    if folded >= octave:
        folded -= octave
    return folded


# --- Primes and fractions ---

def is_prime(n: int) -> bool:
    """Trial division primality test; n <= 1 is not prime."""
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def prime_factors(n: int) -> FrozenSet[int]:
    """Unique prime factors of n by trial division (1 has none)."""
    factors = set()
    divisor = 2
    while n >= 2 and divisor * divisor <= n:
        if n % divisor == 0:
            factors.add(divisor)
            n //= divisor
        else:
            divisor += 1
    if n >= 2:
        factors.add(n)
    return frozenset(factors)


def reduce_pair_to_octave(numerator: int, denominator: int) -> Tuple[int, int]:
    """Riduce una frazione intera nell'ottava [1, 2) e la semplifica.

    The denominator is doubled while the ratio is >= 2 and the numerator
    doubled while it is < 1; the result is then divided by the gcd.
    """
    if numerator <= 0 or denominator <= 0:
        raise DomainError(f"Cannot reduce {numerator}/{denominator}: terms must be positive")
    while numerator >= 2 * denominator:
        denominator *= 2
    while numerator < denominator:
        numerator *= 2
    g = math.gcd(numerator, denominator)
    return numerator // g, denominator // g


# --- Formatting ---

def format_cents(value: float, decimals: int = 2) -> str:
    """Format a value as cents, e.g. '701.96¢'."""
    return f"{float(value):.{decimals}f}¢"


def format_aligned_table(headers: List[str], rows: List[List[str]]) -> List[str]:
    """Format a table with aligned columns.

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of strings

    Returns:
        List of formatted lines ready for printing
    """
    if not headers:
        return []

    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for col_idx, cell in enumerate(row):
            if col_idx < len(widths):
                widths[col_idx] = max(widths[col_idx], len(cell))

    def format_row(row_data):
        return "  ".join(str(row_data[i]).ljust(widths[i])
                         for i in range(min(len(row_data), len(widths)))).rstrip()

    lines = [format_row(headers)]
    for row in rows:
        lines.append(format_row(row))

    return lines


# --- Argparse type factories ---

def bounded_int(label: str, minimum: Optional[int] = None,
                maximum: Optional[int] = None) -> Callable[[str], int]:
    """Build an argparse type that parses an integer within [minimum, maximum]."""
    def parse(value: str) -> int:
        trimmed = (value or "").strip()
        if not trimmed:
            raise argparse.ArgumentTypeError(f"{label} is required.")
        try:
            parsed = int(trimmed, 10)
        except ValueError:
            raise argparse.ArgumentTypeError(f"{label} must be a valid integer.")
        if minimum is not None and parsed < minimum:
            raise argparse.ArgumentTypeError(f"{label} must be at least {minimum}.")
        if maximum is not None and parsed > maximum:
            raise argparse.ArgumentTypeError(f"{label} must be at most {maximum}.")
        return parsed
    return parse


def int_list(value: str) -> List[int]:
    """Parser per liste di interi separati da virgola, es. '3,5,7'."""
    parts = [p.strip() for p in str(value).split(',') if p.strip()]
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"'{value}' is not a comma separated list of integers (e.g. 3,5,7)"
        )
