"""Tests du comportement de vote (présence, agressivité, précision, timing)."""

from __future__ import annotations

import pytest

from lycans.analysis.voting import compute_voting_stats


@pytest.fixture
def voting_game(make_game, make_player, make_vote, normalize):
    """Une partie à deux meetings ; Carol meurt la nuit 2."""
    return normalize(
        [
            make_game(
                1,
                [
                    make_player("Alice", votes=[make_vote(1, "Bob", 10, game=1), make_vote(2, "Passé")]),
                    make_player("Bob", "Loup", votes=[make_vote(1, "alice", 20, game=1)]),
                    make_player("Carol", death_type="BY_WOLF", death_timing="N2", killer="Bob"),
                ],
            )
        ]
    )


class TestPresence:
    """Votes, votes blancs et abstentions sur les meetings où le joueur est vivant."""

    def test_counts(self, voting_game):
        stats = compute_voting_stats(voting_game)
        alice, bob, carol = stats["Alice"], stats["Bob"], stats["Carol"]
        assert (alice.meetings, alice.votes, alice.skips, alice.abstentions) == (2, 1, 1, 0)
        assert (bob.meetings, bob.votes, bob.skips, bob.abstentions) == (2, 1, 0, 1)
        assert (carol.meetings, carol.abstentions) == (1, 1)

    def test_aggressiveness(self, voting_game):
        """Score = vote - 0.5 * passé - 0.7 * abstention."""
        stats = compute_voting_stats(voting_game)
        assert stats["Alice"].aggressiveness == pytest.approx(50 - 0.5 * 50)
        assert stats["Bob"].aggressiveness == pytest.approx(50 - 0.7 * 50)
        assert stats["Carol"].aggressiveness == pytest.approx(-70.0)

    def test_accuracy(self, voting_game):
        stats = compute_voting_stats(voting_game)
        assert stats["Alice"].enemy_votes == 1
        assert stats["Alice"].accuracy == pytest.approx(100.0)
        assert stats["Carol"].accuracy == 0.0

    def test_vote_against_own_faction(self, make_game, make_player, make_vote, normalize):
        """Voter contre un Traître quand on est Loup n'est pas un vote ennemi."""
        games = normalize(
            [
                make_game(
                    1,
                    [
                        make_player("W", "Loup", votes=[make_vote(1, "T")]),
                        make_player("T", "Traître"),
                    ],
                )
            ]
        )
        assert compute_voting_stats(games)["W"].enemy_votes == 0

    def test_no_meetings(self, make_game, make_player, normalize):
        games = normalize([make_game(1, [make_player("A")])])
        assert compute_voting_stats(games) == {}


class TestTiming:
    """Position et délai des votes horodatés."""

    def test_position_and_delay(self, voting_game):
        stats = compute_voting_stats(voting_game)
        alice, bob = stats["Alice"], stats["Bob"]
        assert alice.timed_votes == 1
        assert alice.average_position == pytest.approx(0.0)
        assert bob.average_position == pytest.approx(100.0)
        assert alice.average_delay == pytest.approx(0.0)
        assert bob.average_delay == pytest.approx(10.0)
        assert alice.early_votes == 1
        assert bob.early_votes == 0

    def test_untimed_votes_excluded(self, voting_game):
        """Le vote blanc et les votes sans date n'entrent pas dans le timing."""
        stats = compute_voting_stats(voting_game)
        assert stats["Carol"].timed_votes == 0
        assert stats["Carol"].average_delay is None

    def test_single_voter_is_median(self, make_game, make_player, make_vote, normalize):
        games = normalize(
            [make_game(1, [make_player("A", votes=[make_vote(1, "B", 5, game=1)]), make_player("B")])]
        )
        assert compute_voting_stats(games)["A"].average_position == pytest.approx(50.0)

    def test_mixed_timezone_dates(self, make_game, make_player, make_vote, normalize):
        """Un horodatage avec fuseau et un sans restent classés entre eux."""
        late = make_vote(1, "A", 30, game=1)
        late["Date"] += "+00:00"
        games = normalize(
            [make_game(1, [make_player("A", votes=[make_vote(1, "B", 10, game=1)]), make_player("B", votes=[late])])]
        )
        stats = compute_voting_stats(games)
        assert stats["A"].timed_votes == 1
        assert stats["B"].timed_votes == 1
        assert stats["A"].average_position == pytest.approx(0.0)
        assert stats["B"].average_delay == pytest.approx(20.0)
