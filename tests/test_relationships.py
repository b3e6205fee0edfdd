"""Tests des relations entre joueurs (coéquipiers et face-à-face)."""

from __future__ import annotations

import pytest

from lycans.analysis.relationships import (
    Relationship,
    compute_relationships,
    matchup_superlatives,
    teammate_superlatives,
)


@pytest.fixture
def shared_games(make_game, make_player, normalize):
    """Alice et Bob : 8 parties ensemble (Alice gagne 6), 4 en face-à-face.

    En face-à-face, Alice gagne une fois et l'Amoureux gagne les 3 autres :
    Bob ne gagne aucune de ces parties.
    """
    raw = []
    for i in range(1, 9):
        won = i <= 6
        raw.append(
            make_game(
                i,
                [make_player("Alice", "Villageois", won), make_player("Bob", "Villageois", won)],
            )
        )
    for i in range(9, 13):
        alice_won = i == 9
        raw.append(
            make_game(
                i,
                [
                    make_player("Alice", "Villageois", alice_won),
                    make_player("Bob", "Loup", False),
                    make_player("Cupid", "Amoureux Loup", not alice_won),
                ],
            )
        )
    return normalize(raw)


def _relation(relations: list[Relationship], other_id: str) -> Relationship:
    return next(r for r in relations if r.other_id == other_id)


class TestComputeRelationships:
    def test_target_perspective(self, shared_games):
        relations = compute_relationships("Alice", shared_games, min_games_together=1, candidate_min_games=0)
        bob = _relation(relations, "Bob")
        assert (bob.same_camp_games, bob.same_camp_wins) == (8, 6)
        assert bob.same_camp_win_rate == pytest.approx(75.0)
        assert (bob.opposing_games, bob.opposing_wins) == (4, 1)
        assert bob.opposing_win_rate == pytest.approx(25.0)

    def test_asymmetry(self, shared_games):
        """Bob voit les mêmes parties ensemble, mais ses propres victoires en face-à-face."""
        relations = compute_relationships("Bob", shared_games, min_games_together=1, candidate_min_games=0)
        alice = _relation(relations, "Alice")
        assert (alice.same_camp_games, alice.same_camp_wins) == (8, 6)
        assert alice.opposing_games == 4
        assert alice.opposing_wins == 0

    def test_solo_roles_excluded_between_themselves(self, make_game, make_player, normalize):
        """Deux rôles solo différents ne sont ni coéquipiers ni adversaires."""
        games = normalize(
            [make_game(1, [make_player("A", "Agent"), make_player("B", "Cannibale")])]
        )
        relations = compute_relationships("A", games, min_games_together=0, candidate_min_games=0)
        b = _relation(relations, "B")
        assert b.same_camp_games == 0
        assert b.opposing_games == 0

    def test_min_games_together(self, shared_games):
        relations = compute_relationships("Alice", shared_games, min_games_together=9, candidate_min_games=0)
        assert relations == []

    def test_candidate_threshold(self, shared_games):
        """Seuls les joueurs avec assez de parties dans la partition sont comparés."""
        relations = compute_relationships("Alice", shared_games, min_games_together=1, candidate_min_games=5)
        assert [r.other_id for r in relations] == ["Bob"]

    def test_unknown_target(self, shared_games):
        assert compute_relationships("Nobody", shared_games, candidate_min_games=0) == []


class TestSuperlatives:
    @staticmethod
    def _rel(other: str, same=(0, 0), opposing=(0, 0)) -> Relationship:
        return Relationship(other, other, same[0], same[1], opposing[0], opposing[1])

    def test_best_and_worst_teammate(self):
        rels = [self._rel("a", same=(20, 15)), self._rel("b", same=(20, 8)), self._rel("c", same=(20, 12))]
        best, worst = teammate_superlatives(rels)
        assert best.other_id == "a"
        assert worst.other_id == "b"

    def test_worst_teammate_needs_low_rate(self):
        """Le pire coéquipier n'apparaît que sous 60 %."""
        rels = [self._rel("a", same=(20, 18)), self._rel("b", same=(20, 12))]
        best, worst = teammate_superlatives(rels)
        assert best.other_id == "a"
        assert worst is None

    def test_single_entry_has_no_worst(self):
        best, worst = teammate_superlatives([self._rel("a", same=(20, 2))])
        assert best.other_id == "a"
        assert worst is None

    def test_first_max_wins_ties(self):
        rels = [self._rel("a", same=(20, 10)), self._rel("b", same=(20, 10))]
        best, worst = teammate_superlatives(rels)
        assert best.other_id == "a"
        assert worst is None

    def test_matchup_threshold(self):
        rels = [
            self._rel("a", opposing=(20, 14)),
            self._rel("b", opposing=(20, 9)),
            self._rel("c", opposing=(20, 7)),
        ]
        best, worst = matchup_superlatives(rels)
        assert best.other_id == "a"
        assert worst.other_id == "c"

        best, worst = matchup_superlatives(rels[:2])
        assert worst is None

    def test_below_min_games_ignored(self):
        best, worst = teammate_superlatives([self._rel("a", same=(14, 14))])
        assert best is None and worst is None
