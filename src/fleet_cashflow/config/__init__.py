"""Configuration models — planner input records."""

from fleet_cashflow.config.vehicle import Vehicle, new_vehicle_id
from fleet_cashflow.config.season import SeasonMonth, default_months
from fleet_cashflow.config.settings import GlobalSettings
from fleet_cashflow.config.plan import FleetPlan, sample_fleet

__all__ = [
    "Vehicle",
    "new_vehicle_id",
    "SeasonMonth",
    "default_months",
    "GlobalSettings",
    "FleetPlan",
    "sample_fleet",
]
