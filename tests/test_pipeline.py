"""Tests du pipeline complet et du fichier playerAchievements.json."""

from __future__ import annotations

import json

import pytest

from lycans.analysis.pipeline import (
    MAX_WORKERS_ENV,
    compute_aggregates,
    generate_all_player_achievements,
    resolve_max_workers,
    write_achievements,
)
from lycans.data.identity import PlayerIdentityResolver


@pytest.fixture
def raw_corpus(make_game, make_player):
    games = []
    for i in range(1, 11):
        games.append(
            make_game(
                i,
                [
                    make_player("Alice", "Villageois", i % 2 == 0, steam_id="1"),
                    make_player("bob", "Loup", i % 2 == 1),
                ],
                modded=i > 6,
            )
        )
    return games


class TestGenerateAll:
    def test_report_totals(self, raw_corpus):
        report = generate_all_player_achievements(raw_corpus)
        assert report.total_games == 10
        assert report.total_modded_games == 4
        assert report.total_players == 2
        assert set(report.achievements) == {"1", "bob"}

    def test_resolver_names(self, raw_corpus):
        resolver = PlayerIdentityResolver.from_joueurs_data(
            {"Players": [{"Joueur": "Alice", "SteamID": "1"}, {"Joueur": "Bob", "SteamID": "2"}]}
        )
        report = generate_all_player_achievements(raw_corpus, resolver)
        assert set(report.achievements) == {"1", "2"}
        assert report.achievements["2"].player_name == "Bob"

    def test_to_dict_shape(self, raw_corpus):
        data = generate_all_player_achievements(raw_corpus).to_dict()
        assert set(data) == {"generatedAt", "totalPlayers", "totalGames", "totalModdedGames", "achievements"}
        alice = data["achievements"]["1"]
        assert alice["playerName"] == "Alice"
        assert alice["allGamesAchievements"]
        first = alice["allGamesAchievements"][0]
        assert {"id", "title", "description", "type", "category", "value", "minSample", "redirectTo"} <= set(first)

    def test_threads_match_sequential(self, raw_corpus):
        sequential = generate_all_player_achievements(raw_corpus, max_workers=1).to_dict()
        threaded = generate_all_player_achievements(raw_corpus, max_workers=4).to_dict()
        sequential.pop("generatedAt")
        threaded.pop("generatedAt")
        assert sequential == threaded

    def test_empty_corpus(self):
        report = generate_all_player_achievements([])
        assert report.total_players == 0
        assert report.achievements == {}

    def test_write_achievements(self, raw_corpus, tmp_path):
        report = generate_all_player_achievements(raw_corpus)
        out = write_achievements(report, tmp_path / "playerAchievements.json")
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["totalGames"] == 10


class TestWorkers:
    def test_explicit_value(self):
        assert resolve_max_workers(3) == 3
        assert resolve_max_workers(0) == 1

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(MAX_WORKERS_ENV, "4")
        assert resolve_max_workers() == 4

    def test_invalid_env_var(self, monkeypatch):
        monkeypatch.setenv(MAX_WORKERS_ENV, "many")
        assert resolve_max_workers() == 1

    def test_default(self, monkeypatch):
        monkeypatch.delenv(MAX_WORKERS_ENV, raising=False)
        assert resolve_max_workers() == 1

    def test_compute_aggregates_threaded(self, raw_corpus, normalize):
        games = normalize(raw_corpus)
        aggregates = compute_aggregates(games, max_workers=2)
        assert aggregates.participation["1"].games == 10
