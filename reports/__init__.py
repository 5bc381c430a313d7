"""Table generation and Excel export for EDO, JI and MOS note sets.

This module turns engine records into rows of values and writes them out:

Table Building:
- EDO: step, label, cents, Hz, prime-EDO flag
- JI: ratio, cents, Hz, prime factors, highest prime
- MOS: stack, cents, Hz
- Optional nearest-EDO step and error columns for JI and MOS

Output:
- Aligned text for the console and a ``<base>_<system>.txt`` file
- ``<base>_<system>.xlsx`` workbooks through openpyxl, header formatted and
  frozen, with a Summary sheet for MOS classification

Rows hold raw numbers; formatting happens only when writing text so Excel
cells stay numeric.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

import openpyxl
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

import edo
import ji
import mos
import utils

_log = logging.getLogger(__name__)

Table = Tuple[List[str], List[List[Any]]]

HEADER_FILL = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")


def _comparison_cells(cents: float, compare_edo: Optional[int]) -> List[Any]:
    if not compare_edo:
        return []
    note, error = edo.nearest_edo_note(cents, compare_edo)
    return [note.index, error]


def _comparison_headers(compare_edo: Optional[int]) -> List[str]:
    if not compare_edo:
        return []
    return [f"{compare_edo}EDO_Step", f"{compare_edo}EDO_Error"]


def build_edo_table(notes: Sequence[edo.EdoNote], base_hz: float) -> Table:
    """Rows for an EDO note set."""
    divisions = len(notes)
    headers = ["Step", "Label", "Cents", "Hz", "Prime_EDO"]
    rows = [[n.index, edo.edo_note_label(n, divisions), n.cents,
             utils.apply_cents(base_hz, n.cents), "yes" if n.is_edo_prime else "no"]
            for n in notes]
    return headers, rows


def build_ji_table(intervals: Sequence[ji.JIInterval], base_hz: float,
                   compare_edo: Optional[int] = None) -> Table:
    """Rows for JI intervals in ascending pitch order."""
    headers = ["Step", "Ratio", "Cents", "Hz", "Primes", "Highest_Prime"] + _comparison_headers(compare_edo)
    rows = []
    for step, iv in enumerate(ji.sort_by_cents(intervals), start=1):
        primes = ",".join(str(p) for p in sorted(iv.prime_factors))
        rows.append([step, iv.fraction, iv.cents, utils.apply_cents(base_hz, iv.cents),
                     primes, iv.highest_prime] + _comparison_cells(iv.cents, compare_edo))
    return headers, rows


def build_mos_table(scale: mos.MosScale, base_hz: float,
                    compare_edo: Optional[int] = None) -> Table:
    """Rows for a stacked-generator scale, in stack order."""
    headers = ["Stack", "Cents", "Hz"] + _comparison_headers(compare_edo)
    rows = [[n.stack, n.cents, utils.apply_cents(base_hz, n.cents)]
            + _comparison_cells(n.cents, compare_edo)
            for n in scale.notes]
    return headers, rows


def mos_summary(scale: mos.MosScale) -> List[Tuple[str, Any]]:
    """Key/value pairs describing the MOS classification."""
    c = scale.classification
    summary = [("Notes", len(scale.notes)), ("MOS", "yes" if c.is_mos else "no")]
    if c.is_mos:
        summary.append(("Label", c.label))
    if c.large_step_count is not None:
        summary += [
            ("Large steps", c.large_step_count),
            ("Small steps", c.small_step_count),
            ("Large step size", utils.format_cents(c.large_step_size, 5)),
            ("Small step size", utils.format_cents(c.small_step_size, 5)),
            ("Hardness", f"{c.hardness:.5f}"),
            ("Pattern", c.pattern),
        ]
    return summary


def _format_cell(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.5f}"
    return str(value)


def format_table_lines(table: Table) -> List[str]:
    """Aligned text lines for a table."""
    headers, rows = table
    return utils.format_aligned_table(headers, [[_format_cell(v) for v in row] for row in rows])


def print_table(table: Table) -> None:
    """Print a table to stdout."""
    for line in format_table_lines(table):
        print(line)


def export_text_table(output_base: str, system: str, table: Table,
                      summary: Optional[List[Tuple[str, Any]]] = None) -> Optional[str]:
    """Write ``<output_base>_<system>.txt``; returns the path, None on error."""
    txt_path = f"{output_base}_{system}.txt"
    lines = format_table_lines(table)
    if summary:
        lines += [""] + [f"{key}: {value}" for key, value in summary]
    try:
        with open(txt_path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
    except OSError as e:
        utils.log_export_error(txt_path, e)
        return None
    utils.log_export_success(txt_path)
    return txt_path


def _setup_header_row(ws, headers: List[str]) -> None:
    ws.append(headers)
    header_font = Font(bold=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = HEADER_FILL
    ws.freeze_panes = "A2"
    for col, header in enumerate(headers, start=1):
        ws.column_dimensions[get_column_letter(col)].width = max(10, len(header) + 2)


def export_excel_table(output_base: str, system: str, table: Table,
                       summary: Optional[List[Tuple[str, Any]]] = None) -> Optional[str]:
    """Write ``<output_base>_<system>.xlsx``; returns the path, None on error."""
    headers, rows = table
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = system.upper() if len(system) <= 3 else system.title()
    _setup_header_row(ws, headers)
    for row in rows:
        ws.append(list(row))

    if summary:
        ws_sum = wb.create_sheet("Summary")
        _setup_header_row(ws_sum, ["Field", "Value"])
        for key, value in summary:
            ws_sum.append([key, value])
        ws_sum.column_dimensions["A"].width = 20

    xlsx_path = f"{output_base}_{system}.xlsx"
    try:
        wb.save(xlsx_path)
    except OSError as e:
        utils.log_export_error(xlsx_path, e)
        return None
    utils.log_export_success(xlsx_path)
    _log.debug("Wrote %d rows to %s", len(rows), xlsx_path)
    return xlsx_path
