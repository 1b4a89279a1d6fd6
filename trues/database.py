# database.py – SQLAlchemy setup + records behind the entity graph

from pathlib import Path
from sqlalchemy import (
    create_engine, Column, String, Integer, Boolean, DateTime, ForeignKey
)
from sqlalchemy.orm import declarative_base, sessionmaker

from trues.config import settings


# With SQLite, make sure the folder of the .db file exists
if settings.DB_URL.startswith("sqlite:///"):
    db_file = settings.DB_URL.replace("sqlite:///", "")
    parent_dir = Path(db_file).parent
    parent_dir.mkdir(parents=True, exist_ok=True)

# Engine & session
engine = create_engine(settings.DB_URL, future=True)
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)

Base = declarative_base()


class LeagueRecord(Base):
    __tablename__ = 'leagues'
    league_id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    orga_league = Column(Boolean, nullable=False, default=False)


class TeamRecord(Base):
    __tablename__ = 'teams'
    team_id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    abbreviation = Column(String, nullable=True)
    kind = Column(String, nullable=False, default="team")   # "team" | "prm"
    prm_id = Column(Integer, nullable=True, unique=True)
    league = Column(Integer, ForeignKey('leagues.league_id'), nullable=True)


class DiscordUserRecord(Base):
    __tablename__ = 'discord_users'
    discord_user_id = Column(Integer, primary_key=True)
    discord_id = Column(Integer, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False, default="")


class PlayerRecord(Base):
    __tablename__ = 'players'
    player_id = Column(Integer, primary_key=True)
    lol_puuid = Column(String, nullable=True, unique=True, index=True)
    lol_summoner = Column(String, nullable=True)
    lol_name = Column(String, nullable=True, index=True)
    lol_tag = Column(String, nullable=True)
    discord_user = Column(Integer, ForeignKey('discord_users.discord_user_id'), nullable=True)
    team = Column(Integer, ForeignKey('teams.team_id'), nullable=True, index=True)
    updated = Column(DateTime, nullable=False)
    played = Column(Boolean, nullable=False, default=False)


def init_db(bind=None):
    """Create the tables if they do not exist yet."""
    Base.metadata.create_all(bind=bind or engine)
