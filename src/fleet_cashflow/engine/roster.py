"""Roster and season editing.

Every operation takes the current list and returns a new one; the input
list and its records are never mutated.  Vehicles are located by their
opaque id, months by position.  Edits are re-validated, so the same
coercion and clamps apply as on creation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from fleet_cashflow.config.season import SeasonMonth
from fleet_cashflow.config.vehicle import Vehicle, new_vehicle_id
from fleet_cashflow.exceptions import RosterImportError

logger = logging.getLogger(__name__)

MAX_VEHICLES = 50


def new_vehicle(position: int) -> Vehicle:
    """Template for a freshly added vehicle, named after its 1-based position."""
    return Vehicle(
        name=f"Vehicle {position}",
        base_adr=200,
        base_util_pct=55,
        fixed_monthly=1_000,
        variable_per_day=20,
        maintenance_reserve=100,
    )


def add_vehicle(vehicles: Sequence[Vehicle]) -> list[Vehicle]:
    if len(vehicles) >= MAX_VEHICLES:
        logger.warning("roster is full (%d vehicles); add ignored", MAX_VEHICLES)
        return list(vehicles)
    return [*vehicles, new_vehicle(len(vehicles) + 1)]


def duplicate_vehicle(vehicles: Sequence[Vehicle], vehicle_id: str) -> list[Vehicle]:
    """Insert a copy (fresh id, name + ' (copy)') directly after the source."""
    if len(vehicles) >= MAX_VEHICLES:
        logger.warning("roster is full (%d vehicles); duplicate ignored", MAX_VEHICLES)
        return list(vehicles)
    idx = _index_of(vehicles, vehicle_id)
    if idx is None:
        return list(vehicles)
    source = vehicles[idx]
    copy = source.model_copy(update={"id": new_vehicle_id(), "name": f"{source.name} (copy)"})
    return [*vehicles[: idx + 1], copy, *vehicles[idx + 1:]]


def delete_vehicle(vehicles: Sequence[Vehicle], vehicle_id: str) -> list[Vehicle]:
    return [v for v in vehicles if v.id != vehicle_id]


def update_vehicle(vehicles: Sequence[Vehicle], vehicle_id: str, **changes: Any) -> list[Vehicle]:
    """Replace the matching vehicle with a re-validated, edited copy.

    ``id`` cannot be changed through this call.
    """
    changes.pop("id", None)
    return [
        Vehicle.model_validate({**v.model_dump(), **changes}) if v.id == vehicle_id else v
        for v in vehicles
    ]


def update_month(months: Sequence[SeasonMonth], index: int, **changes: Any) -> list[SeasonMonth]:
    return [
        SeasonMonth.model_validate({**m.model_dump(), **changes}) if i == index else m
        for i, m in enumerate(months)
    ]


def replace_roster(rows: Iterable[Vehicle]) -> list[Vehicle]:
    """Bulk-import boundary: at least one vehicle, at most ``MAX_VEHICLES``.

    Extra rows beyond the limit are dropped; an empty import raises
    ``RosterImportError``.
    """
    vehicles = list(rows)
    if not vehicles:
        raise RosterImportError("No rows found to import.")
    if len(vehicles) > MAX_VEHICLES:
        logger.warning("import has %d vehicles; keeping the first %d", len(vehicles), MAX_VEHICLES)
        vehicles = vehicles[:MAX_VEHICLES]
    return vehicles


def _index_of(vehicles: Sequence[Vehicle], vehicle_id: str) -> int | None:
    for i, v in enumerate(vehicles):
        if v.id == vehicle_id:
            return i
    return None
