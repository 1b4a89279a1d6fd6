"""Unit tests for the lazy AccountResolver."""

import pytest

from trues.errors import UpstreamUnavailable
from trues.riot.account import AccountResolver
from trues.riot.identity import PlayerIdentity
from trues.riot.models import Account, ChampionMastery, Summoner


class TestResolveAccount:

    def test_by_puuid_refreshes_identity(self, game_data, account):
        """The account's Riot ID replaces whatever name was known."""
        game_data.account_by_puuid.return_value = account
        resolver = AccountResolver(game_data, puuid="puuid-1", identity=PlayerIdentity("old name"))

        assert resolver.resolve_account() == account
        assert resolver.identity == PlayerIdentity("Faker", "KR1")
        game_data.account_by_identity.assert_not_called()

    def test_tagged_identity_uses_riot_id(self, game_data, account):
        game_data.account_by_identity.return_value = account
        resolver = AccountResolver(game_data, identity=PlayerIdentity("Faker", "KR1"))

        assert resolver.resolve_account() == account
        game_data.account_by_identity.assert_called_once_with("Faker", "KR1")
        game_data.summoner_by_identity.assert_not_called()
        assert resolver.puuid == "puuid-1"

    def test_bare_name_goes_through_summoner(self, game_data, account, summoner):
        """Without a tag the puuid comes from the summoner, then the account."""
        game_data.summoner_by_identity.return_value = summoner
        game_data.account_by_puuid.return_value = account
        resolver = AccountResolver(game_data, identity=PlayerIdentity("faker"))

        assert resolver.resolve_account() == account
        game_data.summoner_by_identity.assert_called_once_with("faker", None)
        game_data.account_by_puuid.assert_called_once_with("puuid-1")
        assert resolver.identity.tag == "KR1"

    def test_not_found_is_none(self, game_data):
        resolver = AccountResolver(game_data, identity=PlayerIdentity("Nobody", "EUW"))
        assert resolver.resolve_account() is None
        assert resolver.puuid is None

    def test_not_found_is_cached(self, game_data):
        resolver = AccountResolver(game_data, identity=PlayerIdentity("Nobody", "EUW"))
        resolver.resolve_account()
        resolver.resolve_account()
        assert game_data.account_by_identity.call_count == 1

    def test_needs_some_identity(self, game_data):
        with pytest.raises(ValueError):
            AccountResolver(game_data)


class TestResolveSummoner:

    def test_by_puuid(self, game_data, summoner):
        game_data.summoner_by_puuid.return_value = summoner
        resolver = AccountResolver(game_data, puuid="puuid-1")
        assert resolver.resolve_summoner() == summoner
        game_data.summoner_by_puuid.assert_called_once_with("puuid-1")

    def test_tagged_identity_resolves_account_first(self, game_data, account, summoner):
        game_data.account_by_identity.return_value = account
        game_data.summoner_by_puuid.return_value = summoner
        resolver = AccountResolver(game_data, identity=PlayerIdentity("Faker", "KR1"))

        assert resolver.resolve_summoner() == summoner
        game_data.account_by_identity.assert_called_once_with("Faker", "KR1")
        game_data.summoner_by_puuid.assert_called_once_with("puuid-1")
        game_data.summoner_by_identity.assert_not_called()

    def test_tagged_identity_without_account(self, game_data):
        resolver = AccountResolver(game_data, identity=PlayerIdentity("Nobody", "EUW"))
        assert resolver.resolve_summoner() is None
        game_data.summoner_by_puuid.assert_not_called()

    def test_bare_name_skips_account(self, game_data, summoner):
        game_data.summoner_by_identity.return_value = summoner
        resolver = AccountResolver(game_data, identity=PlayerIdentity("faker"))

        assert resolver.resolve_summoner() == summoner
        game_data.summoner_by_identity.assert_called_once_with("faker", None)
        game_data.account_by_identity.assert_not_called()
        game_data.account_by_puuid.assert_not_called()
        assert resolver.puuid == "puuid-1"


class TestPuuid:

    def test_known_puuid_makes_no_calls(self, game_data):
        resolver = AccountResolver(game_data, puuid="puuid-1")
        assert resolver.get_puuid() == "puuid-1"
        assert game_data.method_calls == []

    def test_memoized(self, game_data, account):
        game_data.account_by_identity.return_value = account
        resolver = AccountResolver(game_data, identity=PlayerIdentity("Faker", "KR1"))

        assert resolver.get_puuid() == "puuid-1"
        calls = len(game_data.method_calls)
        assert resolver.get_puuid() == "puuid-1"
        assert len(game_data.method_calls) == calls == 1

    def test_falls_back_to_summoner(self, game_data, summoner):
        game_data.summoner_by_identity.return_value = summoner
        resolver = AccountResolver(game_data, identity=PlayerIdentity("faker"))
        assert resolver.get_puuid() == "puuid-1"

    def test_unresolvable(self, game_data):
        resolver = AccountResolver(game_data, identity=PlayerIdentity("Nobody", "EUW"))
        assert resolver.get_puuid() is None


class TestIdentity:

    def test_update_identity(self, game_data):
        game_data.account_by_puuid.return_value = Account("puuid-1", "Renamed", "EUW")
        resolver = AccountResolver(game_data, puuid="puuid-1", identity=PlayerIdentity("Faker", "KR1"))
        assert resolver.update_identity() == PlayerIdentity("Renamed", "EUW")

    def test_update_identity_unresolvable_keeps_name(self, game_data, caplog):
        resolver = AccountResolver(game_data, puuid="puuid-1", identity=PlayerIdentity("Faker", "KR1"))
        with caplog.at_level("INFO"):
            assert resolver.update_identity() == PlayerIdentity("Faker", "KR1")
        assert "Could not load account" in caplog.text

    def test_get_identity_fills_missing_tag(self, game_data, account, summoner):
        game_data.summoner_by_identity.return_value = summoner
        game_data.account_by_puuid.return_value = account
        resolver = AccountResolver(game_data, identity=PlayerIdentity("faker"))
        assert resolver.get_identity() == PlayerIdentity("Faker", "KR1")

    def test_get_identity_unresolvable(self, game_data):
        resolver = AccountResolver(game_data, identity=PlayerIdentity("faker"))
        assert resolver.get_identity() is None


class TestExists:

    def test_account_only(self, game_data, account):
        game_data.account_by_puuid.return_value = account
        assert AccountResolver(game_data, puuid="puuid-1").exists()

    def test_summoner_only(self, game_data, summoner):
        game_data.summoner_by_puuid.return_value = summoner
        assert AccountResolver(game_data, puuid="puuid-1").exists()

    def test_neither(self, game_data):
        resolver = AccountResolver(game_data, puuid="puuid-1")
        assert not resolver.exists()
        game_data.account_by_puuid.assert_called_once()
        game_data.summoner_by_puuid.assert_called_once()

    def test_cheap_after_first_call(self, game_data, account):
        game_data.account_by_puuid.return_value = account
        resolver = AccountResolver(game_data, puuid="puuid-1")
        resolver.exists()
        resolver.exists()
        assert game_data.account_by_puuid.call_count == 1


class TestSummonerData:

    def test_match_ids_without_summoner_raise(self, game_data):
        resolver = AccountResolver(game_data, puuid="puuid-1")
        with pytest.raises(UpstreamUnavailable):
            resolver.get_match_ids(420, "ranked", 0, 1_700_000_000)
        game_data.match_ids.assert_not_called()

    def test_match_ids(self, game_data, summoner):
        game_data.summoner_by_puuid.return_value = summoner
        game_data.match_ids.return_value = ["EUW1_2", "EUW1_1"]
        resolver = AccountResolver(game_data, puuid="puuid-1")

        assert resolver.get_match_ids(420, "ranked", 0, 100, 200) == ["EUW1_1", "EUW1_2"]
        game_data.match_ids.assert_called_once_with(
            "puuid-1", 420, "ranked", 0, 100, 200, count=100,
        )

    def test_match_ids_end_defaults_to_now(self, game_data, summoner):
        game_data.summoner_by_puuid.return_value = summoner
        resolver = AccountResolver(game_data, puuid="puuid-1")
        resolver.get_match_ids(420, "ranked", 0, 100)
        end_epoch = game_data.match_ids.call_args[0][5]
        assert end_epoch > 1_700_000_000

    def test_mastery_sorted(self, game_data, summoner):
        game_data.summoner_by_puuid.return_value = summoner
        game_data.champion_masteries.return_value = [
            ChampionMastery(points=900, champion_id=1),
            ChampionMastery(points=100, champion_id=2),
        ]
        resolver = AccountResolver(game_data, puuid="puuid-1")
        assert [m.champion_id for m in resolver.get_mastery()] == [2, 1]

    def test_mastery_without_summoner(self, game_data):
        assert AccountResolver(game_data, puuid="puuid-1").get_mastery() == []

    def test_summoner_id(self, game_data):
        game_data.summoner_by_puuid.return_value = Summoner("puuid-1", "sum-9")
        assert AccountResolver(game_data, puuid="puuid-1").summoner_id == "sum-9"
