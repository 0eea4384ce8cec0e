"""Plan persistence — save / load a ``FleetPlan`` as JSON or YAML.

The file holds the plan records verbatim; there is no format version.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from fleet_cashflow.config.plan import FleetPlan
from fleet_cashflow.exceptions import PlanFileError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def plan_to_dict(plan: FleetPlan) -> dict[str, Any]:
    return plan.model_dump(mode="json")


def save_plan(plan: FleetPlan, path: str | Path) -> Path:
    """Write ``plan`` to ``path`` (YAML for .yaml/.yml, JSON otherwise)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = plan_to_dict(plan)
    if path.suffix.lower() in YAML_SUFFIXES:
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=2, ensure_ascii=False)
    path.write_text(text, encoding="utf-8")
    logger.info("saved plan with %d vehicles to %s", len(plan.vehicles), path)
    return path


def load_plan(path: str | Path) -> FleetPlan:
    """Read a plan written by ``save_plan`` (or any compatible JSON/YAML).

    Raises
    ------
    PlanFileError
        The file is missing, unparseable, or not a plan mapping.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PlanFileError(f"Cannot read plan file {path}: {exc}") from exc
    return plan_from_text(text, path.name)


def plan_from_text(text: str, name: str) -> FleetPlan:
    """Parse plan text; ``name`` picks the format by suffix and labels errors.

    Used for uploads, where there is a file name but no file on disk.
    """
    try:
        if Path(name).suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise PlanFileError(f"Cannot parse plan file {name}: {exc}") from exc

    if not isinstance(data, dict):
        raise PlanFileError(f"Plan file {name} does not contain a mapping")

    try:
        return FleetPlan.model_validate(data)
    except ValidationError as exc:
        raise PlanFileError(f"Invalid plan in {name}: {exc}") from exc


def load_plan_or_default(path: str | Path) -> FleetPlan:
    """Like ``load_plan`` but falls back to the default plan on any error."""
    if not Path(path).exists():
        return FleetPlan()
    try:
        return load_plan(path)
    except PlanFileError as exc:
        logger.warning("ignoring saved plan: %s", exc)
        return FleetPlan()
