# app.py – wires the default ports together for scripts and workers

from __future__ import annotations

from typing import Optional

from trues.config import settings
from trues.database import init_db
from trues.db.repository import SqlRepository
from trues.logging_config import get_logger, setup_logging
from trues.ports import Context, GameLoader
from trues.riot.source import RiotDataSource

log = get_logger("trues.app")


def build_context(loader: Optional[GameLoader] = None) -> Context:
    """SQL repository + Riot API, configured from settings / .env."""
    setup_logging()
    init_db()
    context = Context(SqlRepository(), RiotDataSource.from_settings(), loader)
    log.info("Context ready (db=%s, region=%s)", settings.DB_URL, settings.DEFAULT_REGION)
    return context
