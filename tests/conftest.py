"""Shared test fixtures: in-memory ports for the entity graph."""

import logging
from collections import defaultdict
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from trues.models.player import Player
from trues.models.team import League, RosterTeam, Team
from trues.ports import Context
from trues.riot.identity import PlayerIdentity
from trues.riot.models import Account, Summoner


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo logger levels and root handlers changed by setup_logging tests."""
    root = logging.getLogger()
    names = ("trues", "urllib3", "sqlalchemy.engine")
    levels = {name: logging.getLogger(name).level for name in names}
    root_level, root_handlers = root.level, root.handlers[:]
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
    root.setLevel(root_level)
    root.handlers[:] = root_handlers


class FakeRepository:
    """Repository port over plain dicts, recording every call."""

    # column name → entity attribute
    COLUMNS = {
        "lol_puuid": "puuid",
        "team": "team_id",
        "discord_user": "linked_account_id",
    }

    def __init__(self):
        self.entities = defaultdict(dict)
        self.fetches = []
        self.updates = []
        self.created = []

    def add(self, entity_type, entity):
        self.entities[entity_type][entity.id] = entity
        return entity

    def fetch_by_id(self, entity_type, entity_id):
        self.fetches.append((entity_type, entity_id))
        return self.entities[entity_type].get(entity_id)

    def fetch_by_column(self, entity_type, column, value):
        self.fetches.append((entity_type, column, value))
        attr = self.COLUMNS.get(column, column)
        for entity in self.entities[entity_type].values():
            if getattr(entity, attr, None) == value:
                return entity
        return None

    def fetch_all_by_column(self, entity_type, column, value):
        attr = self.COLUMNS.get(column, column)
        return [e for e in self.entities[entity_type].values() if getattr(e, attr, None) == value]

    def update_columns(self, entity_type, entity_id, values):
        self.updates.append((entity_type, entity_id, dict(values)))

    def create(self, entity_type, values):
        self.created.append((entity_type, dict(values)))
        return 1000 + len(self.created)


def make_game_data():
    """Game-data port where nothing exists until a test says otherwise."""
    game_data = MagicMock()
    for method in ("account_by_puuid", "account_by_identity",
                   "summoner_by_puuid", "summoner_by_identity"):
        getattr(game_data, method).return_value = None
    game_data.match_ids.return_value = []
    game_data.champion_masteries.return_value = []
    game_data.league_entries.return_value = []
    return game_data


@pytest.fixture
def repository():
    return FakeRepository()


@pytest.fixture
def game_data():
    return make_game_data()


@pytest.fixture
def loader():
    return MagicMock()


@pytest.fixture
def context(repository, game_data, loader):
    return Context(repository, game_data, loader)


@pytest.fixture
def account():
    return Account(puuid="puuid-1", game_name="Faker", tag_line="KR1")


@pytest.fixture
def summoner():
    return Summoner(puuid="puuid-1", summoner_id="sum-1", level=420)


@pytest.fixture
def make_player(context):
    def _make(id=1, puuid="puuid-1", identity=PlayerIdentity("Faker", "KR1"), **kwargs):
        kwargs.setdefault("updated", datetime(2024, 1, 1))
        return Player(context, id, puuid=puuid, identity=identity, **kwargs)
    return _make


@pytest.fixture
def orga_team(context):
    league = League(7, "Prime League Div 1", orga_league=True)
    return RosterTeam(context, 10, "Team Orga", "ORG", prm_id=555, current_league=league, players=[])


@pytest.fixture
def plain_team(context):
    return Team(context, 20, "Weekend Squad", "WKD", players=[])
