# db/repository.py
# ============================================================================
# Repository port on top of SQLAlchemy: maps records to graph entities
# ============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from trues.database import (
    Base, DiscordUserRecord, LeagueRecord, PlayerRecord, SessionLocal, TeamRecord,
)
from trues.models.player import Player
from trues.models.team import League, LinkedAccount, RosterTeam, Team
from trues.ports import Context
from trues.riot.identity import PlayerIdentity

log = logging.getLogger(__name__)

E = TypeVar("E")

ROSTER_KIND = "prm"


class SqlRepository:
    """Repository backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory
        self.context: Optional[Context] = None
        self._records: Dict[type, Type[Base]] = {
            Player: PlayerRecord,
            Team: TeamRecord,
            RosterTeam: TeamRecord,
            LinkedAccount: DiscordUserRecord,
            League: LeagueRecord,
        }
        self._builders: Dict[Type[Base], Callable[[Session, Any], Any]] = {
            PlayerRecord: self._player,
            TeamRecord: self._team,
            DiscordUserRecord: self._linked_account,
            LeagueRecord: self._league,
        }

    def bind(self, context: Context) -> None:
        """Attach the context built entities carry. A repository serves one context."""
        if self.context is not None and self.context is not context:
            raise ValueError("SqlRepository is already bound to another context")
        self.context = context

    def _record(self, entity_type: type) -> Type[Base]:
        try:
            return self._records[entity_type]
        except KeyError:
            raise TypeError(f"No table mapped for {entity_type.__name__}") from None

    @staticmethod
    def _primary_key(record: Type[Base]):
        return record.__table__.primary_key.columns.values()[0]

    # ───────────────────────────── reads ───────────────────────────────
    def fetch_by_id(self, entity_type: Type[E], entity_id: int) -> Optional[E]:
        record = self._record(entity_type)
        with self._session_factory() as session:
            row = session.get(record, entity_id)
            return self._builders[record](session, row) if row is not None else None

    def fetch_by_column(self, entity_type: Type[E], column: str, value: Any) -> Optional[E]:
        record = self._record(entity_type)
        with self._session_factory() as session:
            row = session.execute(
                select(record).where(getattr(record, column) == value).limit(1)
            ).scalar_one_or_none()
            return self._builders[record](session, row) if row is not None else None

    def fetch_all_by_column(self, entity_type: Type[E], column: str, value: Any) -> List[E]:
        record = self._record(entity_type)
        with self._session_factory() as session:
            rows = session.execute(
                select(record).where(getattr(record, column) == value)
                .order_by(self._primary_key(record))
            ).scalars().all()
            return [self._builders[record](session, row) for row in rows]

    # ───────────────────────────── writes ──────────────────────────────
    def update_columns(self, entity_type: type, entity_id: int, values: Mapping[str, Any]) -> None:
        record = self._record(entity_type)
        with self._session_factory() as session:
            try:
                row = session.get(record, entity_id)
                if row is None:
                    raise LookupError(f"{record.__tablename__} {entity_id} does not exist")
                for column, value in values.items():
                    setattr(row, column, value)
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                log.error("Update of %s %s failed", record.__tablename__, entity_id, exc_info=True)
                raise

    def create(self, entity_type: type, values: Mapping[str, Any]) -> int:
        record = self._record(entity_type)
        with self._session_factory() as session:
            try:
                row = record(**values)
                session.add(row)
                session.commit()
                return getattr(row, self._primary_key(record).name)
            except SQLAlchemyError:
                session.rollback()
                log.error("Insert into %s failed", record.__tablename__, exc_info=True)
                raise

    # ───────────────────────────── records → entities ──────────────────
    def _player(self, session: Session, row: PlayerRecord) -> Player:
        identity = PlayerIdentity(row.lol_name, row.lol_tag) if row.lol_name is not None else None
        return Player(
            self.context, row.player_id,
            puuid=row.lol_puuid,
            identity=identity,
            summoner_id=row.lol_summoner,
            linked_account_id=row.discord_user,
            team_id=row.team,
            updated=row.updated,
            played=row.played,
        )

    def _team(self, session: Session, row: TeamRecord) -> Team:
        if row.kind != ROSTER_KIND:
            return Team(self.context, row.team_id, row.name, row.abbreviation)
        league = session.get(LeagueRecord, row.league) if row.league is not None else None
        return RosterTeam(
            self.context, row.team_id, row.name, row.abbreviation,
            prm_id=row.prm_id,
            current_league=self._league(session, league) if league is not None else None,
        )

    @staticmethod
    def _linked_account(session: Session, row: DiscordUserRecord) -> LinkedAccount:
        return LinkedAccount(row.discord_user_id, row.discord_id, row.name)

    @staticmethod
    def _league(session: Session, row: LeagueRecord) -> League:
        return League(row.league_id, row.name, bool(row.orga_league))
