"""Errors raised by the collaborators around the engine.

The engine itself is total over its input domain and never raises; these
cover the import and persistence boundaries only.
"""

from __future__ import annotations


class FleetCashflowError(Exception):
    """Base class for planner errors."""


class RosterImportError(FleetCashflowError, ValueError):
    """A bulk roster replacement could not be applied (e.g. no rows)."""


class CsvImportError(RosterImportError):
    """A vehicle CSV is missing required columns or has no usable rows."""


class PlanFileError(FleetCashflowError):
    """A saved plan file could not be read or parsed."""
