"""Shared pydantic configuration for all planner input records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PlannerModel(BaseModel):
    """Base for input records.

    Fields are snake_case in Python; plain records may also use the
    camelCase spelling (``baseAdr``, ``utilMultPct`` …) so state written by
    other tools loads unchanged.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def as_text(value: object) -> str:
    """Coerce a free-text field; ``None`` becomes an empty string."""
    return "" if value is None else str(value)


_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


def as_flag(value: object, default: bool) -> bool:
    """Coerce a toggle; anything not clearly true or false gives ``default``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return default
