"""Constants and metadata for the CERCHIO tuning engines.

This module centralizes the constants shared by the EDO, JI and MOS engines,
the generator value parser and the export layer.

Program Metadata:
- Version information and authorship details

Mathematical Constants:
- Octave size in cents
- Tolerances used for deduplication and step classification
  (these are load-bearing: JI dedup 1e-6, MOS step match 1e-4,
  5-decimal rounding of MOS intervals)

Defaults:
- Reference frequencies (A4 = 440 Hz, MIDI base key 60)
- Prime set offered for just intonation
- Output and log file names

Parsing:
- Regular expression for the real numbers accepted by the generator grammar
"""

import re

# Metadata
__program_name__ = "CERCHIO"
__version__ = "1.0.0"
__author__ = "CERCHIO contributors"
__date__ = "2026-10-17"
__license__ = "MIT"

# Constants
OCTAVE_CENTS = 1200.0
JI_DEDUP_EPS = 1e-6
MOS_STEP_EPS = 1e-4
MOS_ROUND_DIGITS = 5
DEFAULT_DIAPASON = 440.0
DEFAULT_BASEKEY = 60
MIDI_A4 = 69
SEMITONES_PER_OCTAVE = 12

# Primes offered for JI selection (2 is implied by octave equivalence)
DEFAULT_PRIMES = (3, 5, 7, 11, 13, 17, 19)

# Output
DEFAULT_OUTPUT_BASE = "out"
DEFAULT_LOG_FILE = "cerchio.log"

# Generator grammar: a real number without internal whitespace
REAL_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
