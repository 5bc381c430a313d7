#!/usr/bin/env python3
"""CERCHIO - EDO, just intonation and MOS scale generator.

Computes equal divisions of the octave, odd-limit just intonation interval
sets and generator-stacked scales with Moment of Symmetry detection, prints
them as tables and exports them to text, Excel and Scala files.
"""

import argparse
import logging
import sys
from typing import List, Optional

import consts
import edo
import generator
import ji
import mos
import reports
import scl
import utils

_log = logging.getLogger("cerchio")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cerchio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=(
            f"{consts.__program_name__} - EDO, Just Intonation and MOS scale generator "
            f"({consts.__version__})\n"
            "\n"
            "Generate the pitch sets of equal divisions of the octave, odd-limit\n"
            "just intonation and generator-stacked scales, and detect Moments of\n"
            "Symmetry.\n"
        ),
        epilog=(
            "QUICK REFERENCE:\n\n"

            "TUNING SYSTEMS:\n"
            "  --edo 19                  19 equal divisions of the octave\n"
            "  --ji 9 --primes 3,5,7     9-odd-limit JI over primes 3, 5 and 7\n"
            "  --mos 3/2 6               six fifths stacked (5L 2s)\n"
            "  --mos 7\\12 11 --mos-scan 20   stack counts giving a MOS\n\n"

            "GENERATOR NOTATION:\n"
            "  701.955   cents\n"
            "  3/2       ratio\n"
            "  7\\12      EDO steps\n\n"

            "EXPORT FORMATS:\n"
            "  .txt (aligned table)     --export-txt\n"
            "  .xlsx (Excel)            --export-xlsx\n"
            "  .scl (Scala)             --export-scl\n\n"

            "EXAMPLES:\n"
            "  cerchio.py --edo 31 --export-scl edo31\n"
            "  cerchio.py --ji 15 --primes 3,5,7,11,13 --compare-edo 72\n"
            "  cerchio.py --mos 696.578 11 --export-xlsx meantone\n"
        )
    )

    grp_base = parser.add_argument_group("Base")
    grp_tuning = parser.add_argument_group("Tuning systems")
    grp_cmp = parser.add_argument_group("Comparison")
    grp_out = parser.add_argument_group("Output")

    grp_base.add_argument("-v", "--version", action="version",
                          version=f"%(prog)s {consts.__version__}")
    grp_base.add_argument("--diapason", type=float, default=consts.DEFAULT_DIAPASON,
                          help=f"Diapason (A4) in Hz (default: {consts.DEFAULT_DIAPASON})")
    grp_base.add_argument("--basenote", type=float, default=None,
                          help="Frequency of 0 cents in Hz (default: MIDI "
                               f"{consts.DEFAULT_BASEKEY} from the diapason)")
    grp_base.add_argument("--log-file", default=consts.DEFAULT_LOG_FILE,
                          help=f"Log file (default: {consts.DEFAULT_LOG_FILE})")
    grp_base.add_argument("--verbose", action="store_true",
                          help="Log engine details at DEBUG level")

    grp_tuning.add_argument("--edo", type=utils.bounded_int("EDO divisions", minimum=1),
                            metavar="DIVISIONS",
                            help="Equal division of the octave into DIVISIONS steps")
    grp_tuning.add_argument("--ji", type=utils.bounded_int("Odd limit", minimum=1),
                            metavar="ODD_LIMIT",
                            help="Just intonation up to ODD_LIMIT; even values are "
                                 "lowered to the next odd value")
    grp_tuning.add_argument("--primes", type=utils.int_list,
                            default=list(consts.DEFAULT_PRIMES[:2]),
                            help="Comma separated primes allowed in JI ratios "
                                 "(default: 3,5)")
    grp_tuning.add_argument("--mos", nargs=2, metavar=("GENERATOR", "STACKS"),
                            help="Stack GENERATOR (cents, n/d or n\\edo) STACKS times "
                                 "and classify the scale")
    grp_tuning.add_argument("--mos-scan", type=utils.bounded_int("Maximum stacks", minimum=1),
                            metavar="MAX_STACKS",
                            help="With --mos: list every stack count up to MAX_STACKS "
                                 "that gives a MOS")

    grp_cmp.add_argument("--compare-edo", type=utils.bounded_int("Comparison EDO", minimum=1),
                         metavar="DIVISIONS", default=None,
                         help="Add nearest step and error in the given EDO to JI and "
                              "MOS reports")

    grp_out.add_argument("--export-txt", action="store_true", help="Export .txt reports")
    grp_out.add_argument("--export-xlsx", action="store_true", help="Export .xlsx reports")
    grp_out.add_argument("--export-scl", action="store_true",
                         help="Export .scl files (Scala format)")
    grp_out.add_argument("output_file", nargs="?", default=None,
                         help=f"Output base name (default: {consts.DEFAULT_OUTPUT_BASE})")
    return parser


def _export(args: argparse.Namespace, system: str, table: reports.Table,
            description: str, degrees: List[str], summary=None) -> None:
    base = args.output_file or consts.DEFAULT_OUTPUT_BASE
    if args.export_txt:
        reports.export_text_table(base, system, table, summary)
    if args.export_xlsx:
        reports.export_excel_table(base, system, table, summary)
    if args.export_scl:
        scl.write_scl_file(f"{base}_{system}", description, degrees)


def run_edo(args: argparse.Namespace, base_hz: float) -> None:
    notes = edo.generate_edo(args.edo)
    prime_note = " (prime)" if notes[0].is_edo_prime else ""
    print(f"— {args.edo}-EDO{prime_note}, step {utils.format_cents(edo.step_size(args.edo), 5)} —")
    table = reports.build_edo_table(notes, base_hz)
    reports.print_table(table)
    print()
    _export(args, "edo", table, f"{args.edo} equal divisions of 2/1", scl.edo_degrees(notes))


def run_ji(args: argparse.Namespace, base_hz: float) -> None:
    odd_limit = ji.coerce_odd_limit(args.ji)
    if odd_limit != args.ji:
        _log.warning("Odd limit %d is even, using %d", args.ji, odd_limit)
        print(f"Odd limit {args.ji} is even, using {odd_limit}")
    intervals = ji.generate_ji(args.primes, odd_limit)
    primes_text = ",".join(str(p) for p in sorted(set(args.primes))) or "none"
    print(f"— JI, {odd_limit}-odd-limit, primes {primes_text}: {len(intervals)} intervals —")
    table = reports.build_ji_table(intervals, base_hz, args.compare_edo)
    reports.print_table(table)
    print()
    _export(args, "ji", table, f"{odd_limit}-odd-limit JI, primes {primes_text}",
            scl.ji_degrees(intervals))


def run_mos(args: argparse.Namespace, base_hz: float) -> None:
    expression, stacks_text = args.mos
    generator_cents = generator.parse_generator_value(expression)
    try:
        stacks = int(stacks_text)
    except ValueError:
        raise utils.DomainError(f"Stack count must be an integer, got {stacks_text!r}")
    scale = mos.generate_mos(generator_cents, stacks)
    label = scale.label or "not MOS"
    print(f"— Generator {expression} = {utils.format_cents(generator_cents, 5)}, "
          f"{stacks} stacks: {label} —")
    table = reports.build_mos_table(scale, base_hz, args.compare_edo)
    reports.print_table(table)
    summary = reports.mos_summary(scale)
    print()
    for key, value in summary:
        print(f"{key}: {value}")
    print()

    if args.mos_scan:
        found = mos.find_mos_stack_counts(generator_cents, args.mos_scan)
        print(f"MOS stack counts up to {args.mos_scan}:")
        for count, mos_label in found:
            print(f"  {count:>4}  {mos_label}")
        if not found:
            print("  none")
        print()

    _export(args, "mos", table,
            f"Generator {utils.format_cents(generator_cents, 5)} x {stacks} ({label})",
            scl.mos_degrees(scale), summary)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    av = list(sys.argv[1:] if argv is None else argv)
    if not av:
        print(parser.format_help())
        return 0

    args = parser.parse_args(av)
    utils.setup_logging(args.log_file, logging.DEBUG if args.verbose else logging.WARNING)

    if args.edo is None and args.ji is None and args.mos is None:
        print("No tuning system specified (use --edo, --ji or --mos)")
        return 1
    if args.mos_scan and args.mos is None:
        print("Error: --mos-scan requires --mos")
        return 1

    base_hz = args.basenote
    if base_hz is None:
        base_hz = utils.convert_midi_to_hz(consts.DEFAULT_BASEKEY, args.diapason)
    if base_hz <= 0:
        print("Invalid base frequency")
        return 1

    try:
        if args.edo is not None:
            run_edo(args, base_hz)
        if args.ji is not None:
            run_ji(args, base_hz)
        if args.mos is not None:
            run_mos(args, base_hz)
    except utils.TuningError as e:
        _log.error("%s", e)
        print(f"Error: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
