"""Logging setup for the API server and the dashboard.

Importing this module does nothing; call ``configure_logging()`` from an
entry point.  Library modules only ever do ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "FLEET_CASHFLOW_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(level: str | None = None, fmt: str = DEFAULT_FORMAT) -> None:
    """Install a stream handler on the root logger.

    ``level`` defaults to ``$FLEET_CASHFLOW_LOG_LEVEL`` (or INFO).  If the
    root logger already has handlers (pytest, uvicorn, streamlit) it is
    left alone.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    level_name = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=fmt)
