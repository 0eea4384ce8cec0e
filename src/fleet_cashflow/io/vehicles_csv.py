"""Vehicle roster CSV import / export.

Expected columns (header row required, matched case-insensitively):
  name, category, baseAdr, baseUtilPct, fixedMonthly, variablePerDay
  [, maintenanceReserve, notes]
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Sequence
from pathlib import Path

from fleet_cashflow.config.vehicle import Vehicle
from fleet_cashflow.engine.roster import replace_roster
from fleet_cashflow.exceptions import CsvImportError

logger = logging.getLogger(__name__)

CSV_COLUMNS: list[str] = [
    "name",
    "category",
    "baseAdr",
    "baseUtilPct",
    "fixedMonthly",
    "variablePerDay",
    "maintenanceReserve",
    "notes",
]
REQUIRED_COLUMNS: list[str] = CSV_COLUMNS[:6]


def parse_vehicles_csv(source: str | Path | io.StringIO) -> list[Vehicle]:
    """Parse a roster CSV into vehicles with fresh ids.

    Parameters
    ----------
    source : str | Path | io.StringIO
        CSV text, a file ``Path``, or an in-memory StringIO.

    Returns
    -------
    list[Vehicle]
        One vehicle per row with a non-blank name.  Malformed numbers
        become 0 and utilization is clamped, as on any vehicle edit.

    Raises
    ------
    CsvImportError
        A required column is missing from the header.
    """
    header, rows = _read_csv(source)
    columns = {h.strip().lower(): i for i, h in reversed(list(enumerate(header)))}

    for col in REQUIRED_COLUMNS:
        if col.lower() not in columns:
            raise CsvImportError(
                f"CSV missing required column: {col}. "
                f"Expected columns like: {', '.join(CSV_COLUMNS)}"
            )

    def cell(row: list[str], col: str) -> str:
        i = columns.get(col.lower())
        if i is None or i >= len(row):
            return ""
        return row[i]

    vehicles: list[Vehicle] = []
    for row in rows:
        name = cell(row, "name").strip()
        if not name:
            continue
        vehicles.append(Vehicle(
            name=name,
            category=cell(row, "category").strip(),
            base_adr=cell(row, "baseAdr"),
            base_util_pct=cell(row, "baseUtilPct"),
            fixed_monthly=cell(row, "fixedMonthly"),
            variable_per_day=cell(row, "variablePerDay"),
            maintenance_reserve=cell(row, "maintenanceReserve"),
            notes=cell(row, "notes").strip(),
        ))
    return vehicles


def import_vehicles_csv(source: str | Path | io.StringIO) -> list[Vehicle]:
    """Parse a roster CSV and apply the import limits (1–50 vehicles)."""
    vehicles = parse_vehicles_csv(source)
    if not vehicles:
        raise CsvImportError("No rows found in CSV.")
    roster = replace_roster(vehicles)
    logger.info("imported %d vehicles from CSV", len(roster))
    return roster


def vehicles_to_csv(vehicles: Sequence[Vehicle]) -> str:
    """Serialize a roster with the import header, quoting where needed."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for v in vehicles:
        writer.writerow([
            v.name,
            v.category,
            _fmt_number(v.base_adr),
            _fmt_number(v.base_util_pct),
            _fmt_number(v.fixed_monthly),
            _fmt_number(v.variable_per_day),
            _fmt_number(v.maintenance_reserve),
            v.notes,
        ])
    return buf.getvalue().rstrip("\n")


def _fmt_number(value: float) -> str:
    """Whole numbers without a trailing '.0' (325.0 → '325')."""
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def _read_csv(source: str | Path | io.StringIO) -> tuple[list[str], list[list[str]]]:
    """Read header + data rows from text, a path, or a StringIO.

    Blank lines are dropped.  A ``str`` is always CSV text; only a ``Path``
    is read from disk.
    """
    if isinstance(source, io.StringIO):
        source.seek(0)
        text = source.read()
    elif isinstance(source, Path):
        try:
            text = source.read_text(encoding="utf-8-sig")
        except OSError as exc:
            raise CsvImportError(f"Cannot read CSV file {source}: {exc}") from exc
    else:
        text = source

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    lines = [row for row in reader if any(cell.strip() for cell in row)]
    if not lines:
        raise CsvImportError("No rows found in CSV.")
    return lines[0], lines[1:]
