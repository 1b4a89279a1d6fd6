"""Unit tests for find_or_create and player_from_identity."""

from datetime import datetime, timedelta

from trues.models.player import Player
from trues.riot.identity import PlayerIdentity
from trues.riot.models import Account, Summoner
from trues.services.players import Created, Rehydrated, find_or_create, player_from_identity


class TestFindOrCreate:

    def test_rehydrates_stored_row(self, context, repository, make_player):
        stored = repository.add(Player, make_player(
            id=42, puuid="puuid-1", identity=PlayerIdentity("Faker", "KR1"),
            summoner_id="sum-1", linked_account_id=4, team_id=10,
            updated=datetime(2025, 3, 1), played=True,
        ))

        result = find_or_create(context, "puuid-1", PlayerIdentity("Faker", "KR1"))

        assert isinstance(result, Rehydrated)
        player = result.player
        assert result.previous is stored
        assert player.id == 42
        assert player.updated == datetime(2025, 3, 1)
        assert player.played is True
        assert player.team_id == 10
        assert player.linked_account_id == 4
        assert repository.updates == []
        assert repository.created == []

    def test_rehydrate_writes_new_name(self, context, repository, make_player):
        repository.add(Player, make_player(id=42, identity=PlayerIdentity("Faker", "KR1")))
        result = find_or_create(context, "puuid-1", PlayerIdentity("Hide on bush", "KR1"), "sum-1")

        assert result.player.identity == PlayerIdentity("Hide on bush", "KR1")
        assert repository.updates == [
            (Player, 42, {"lol_name": "Hide on bush", "lol_tag": "KR1"}),
            (Player, 42, {"lol_summoner": "sum-1"}),
        ]

    def test_creates_new_player(self, context, repository):
        before = datetime.now()
        result = find_or_create(context, "puuid-new", PlayerIdentity("Rookie", "EUW"), "sum-7")

        assert isinstance(result, Created)
        player = result.player
        assert player.id == 1001
        assert player.played is False
        assert player.team_id is None
        assert player.linked_account_id is None
        assert before - timedelta(days=366) < player.updated <= before - timedelta(days=364)

        (entity_type, values), = repository.created
        assert entity_type is Player
        assert values["lol_puuid"] == "puuid-new"
        assert values["lol_name"] == "Rookie"
        assert values["played"] is False


class TestPlayerFromIdentity:

    def test_unknown_account(self, context, repository):
        assert player_from_identity(context, PlayerIdentity("Nobody", "EUW")) is None
        assert repository.created == []

    def test_resolves_and_creates(self, context, repository, game_data):
        game_data.account_by_identity.return_value = Account("puuid-9", "Caps", "EUW")
        game_data.summoner_by_puuid.return_value = Summoner("puuid-9", "sum-9")

        result = player_from_identity(context, PlayerIdentity("caps", "EUW"))

        assert isinstance(result, Created)
        assert result.player.puuid == "puuid-9"
        assert result.player.identity.name == "Caps"
        assert result.player.known_summoner_id == "sum-9"
