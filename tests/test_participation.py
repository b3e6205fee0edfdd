"""Tests de la participation et des taux de victoire par carte."""

from __future__ import annotations

import pytest

from lycans.analysis.participation import compute_map_win_rates, compute_participation


class TestParticipation:
    def test_games_wins_and_rate(self, camp_history):
        games = camp_history("Alice", [("Villageois", True), ("Loup", False), ("Villageois", True)])
        stats = compute_participation(games)
        alice = stats["Alice"]
        assert alice.games == 3
        assert alice.wins == 2
        assert alice.win_rate == pytest.approx(66.7)
        assert stats["Filler"].wins == 1

    def test_empty_corpus(self):
        assert compute_participation(()) == {}


class TestMapWinRates:
    def test_per_map(self, make_game, make_player, normalize):
        games = normalize(
            [
                make_game(1, [make_player("A", victorious=True)], map_name="Village"),
                make_game(2, [make_player("A")], map_name="Village"),
                make_game(3, [make_player("A", victorious=True)], map_name="Château"),
                make_game(4, [make_player("A", victorious=True)], map_name=None),
            ]
        )
        maps = compute_map_win_rates(games)["A"]
        assert set(maps) == {"Village", "Château"}
        assert maps["Village"].games == 2
        assert maps["Village"].win_rate == pytest.approx(50.0)
        assert maps["Château"].win_rate == pytest.approx(100.0)

    def test_win_rate_not_rounded(self, make_game, make_player, normalize):
        games = normalize(
            [make_game(i, [make_player("A", victorious=i == 1)], map_name="Village") for i in range(1, 4)]
        )
        assert compute_map_win_rates(games)["A"]["Village"].win_rate == pytest.approx(100 / 3)
