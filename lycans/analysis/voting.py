"""Comportement de vote par joueur.

Pour chaque partie, les meetings vont de 1 au dernier jour ayant reçu un
vote. Un joueur n'est compté que pour les meetings où il est encore en
vie (voir PlayerGameEntry.was_alive_at_meeting). Sur ces meetings :

- aucun vote  → abstention
- "Passé"     → vote blanc (skip)
- sinon       → vote actif, "contre l'ennemi" si la cible est d'une autre faction

Les statistiques de timing ne portent que sur les votes horodatés ;
un vote sans horodatage est ignoré, jamais compté comme nul.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import asdict, dataclass

from lycans.analysis.achievement_config import (
    AGGRESSIVENESS_ABSTENTION_WEIGHT,
    AGGRESSIVENESS_SKIP_WEIGHT,
    EARLY_VOTE_SHARE,
)
from lycans.data.domain.models.game import GameRecord, VoteKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VotingRecord:
    """Comportement de vote d'un joueur.

    Attributes:
        player_id: Identifiant canonique.
        meetings: Meetings auxquels le joueur était présent.
        votes: Votes actifs contre un joueur.
        skips: Votes "Passé".
        abstentions: Meetings sans vote.
        enemy_votes: Votes actifs contre une autre faction.
        timed_votes: Votes actifs horodatés.
        early_votes: Votes parmi le premier tiers des votants du meeting.
        position_sum: Somme des percentiles de position (0 = premier).
        delay_sum: Somme des délais depuis le premier vote (secondes).
    """

    player_id: str
    meetings: int = 0
    votes: int = 0
    skips: int = 0
    abstentions: int = 0
    enemy_votes: int = 0
    timed_votes: int = 0
    early_votes: int = 0
    position_sum: float = 0.0
    delay_sum: float = 0.0

    def _rate(self, count: int) -> float:
        return count / self.meetings * 100 if self.meetings else 0.0

    @property
    def voting_rate(self) -> float:
        return self._rate(self.votes)

    @property
    def skip_rate(self) -> float:
        return self._rate(self.skips)

    @property
    def abstention_rate(self) -> float:
        return self._rate(self.abstentions)

    @property
    def aggressiveness(self) -> float:
        """Score = vote - 0.5 * passé - 0.7 * abstention (en points de %)."""
        return (
            self.voting_rate
            - AGGRESSIVENESS_SKIP_WEIGHT * self.skip_rate
            - AGGRESSIVENESS_ABSTENTION_WEIGHT * self.abstention_rate
        )

    @property
    def accuracy(self) -> float:
        """Part des votes actifs dirigés contre une autre faction (%)."""
        return self.enemy_votes / self.votes * 100 if self.votes else 0.0

    @property
    def average_position(self) -> float | None:
        return self.position_sum / self.timed_votes if self.timed_votes else None

    @property
    def average_delay(self) -> float | None:
        return self.delay_sum / self.timed_votes if self.timed_votes else None

    @property
    def early_vote_rate(self) -> float | None:
        return self.early_votes / self.timed_votes * 100 if self.timed_votes else None


@dataclass
class _Tally:
    """Compteurs mutables d'un joueur pendant l'agrégation."""

    meetings: int = 0
    votes: int = 0
    skips: int = 0
    abstentions: int = 0
    enemy_votes: int = 0
    timed_votes: int = 0
    early_votes: int = 0
    position_sum: float = 0.0
    delay_sum: float = 0.0

    def freeze(self, player_id: str) -> VotingRecord:
        return VotingRecord(player_id=player_id, **asdict(self))


def _tally_presence(game: GameRecord, tallies: dict[str, _Tally]) -> None:
    factions = {e.player_id: e.faction for e in game.entries}

    for meeting in range(1, game.max_meeting + 1):
        for entry in game.entries:
            if not entry.was_alive_at_meeting(meeting):
                continue
            tally = tallies.setdefault(entry.player_id, _Tally())
            tally.meetings += 1

            vote = entry.vote_for_meeting(meeting)
            if vote is None or vote.kind == VoteKind.ABSTAIN:
                tally.abstentions += 1
            elif vote.kind == VoteKind.SKIP:
                tally.skips += 1
            else:
                tally.votes += 1
                target_faction = factions.get(vote.target_id) if vote.target_id else None
                if target_faction is not None and target_faction != entry.faction:
                    tally.enemy_votes += 1


def _tally_timing(game: GameRecord, tallies: dict[str, _Tally]) -> None:
    for meeting in range(1, game.max_meeting + 1):
        timed = []
        for entry in game.entries:
            if not entry.was_alive_at_meeting(meeting):
                continue
            vote = entry.vote_for_meeting(meeting)
            if vote is not None and vote.kind == VoteKind.VOTE and vote.cast_at is not None:
                timed.append((vote.cast_at, entry.player_id))
        if not timed:
            continue

        timed.sort(key=lambda item: item[0])

        n = len(timed)
        early_threshold = math.ceil(n * EARLY_VOTE_SHARE)
        first_at = timed[0][0]
        for index, (cast_at, player_id) in enumerate(timed):
            tally = tallies.setdefault(player_id, _Tally())
            tally.timed_votes += 1
            tally.position_sum += index / (n - 1) * 100 if n > 1 else 50.0
            tally.delay_sum += (cast_at - first_at).total_seconds()
            if index < early_threshold:
                tally.early_votes += 1


def compute_voting_stats(games: Sequence[GameRecord]) -> dict[str, VotingRecord]:
    """Calcule le comportement de vote de chaque joueur.

    Args:
        games: Parties normalisées d'une partition.

    Returns:
        Dict {player_id: VotingRecord} pour les joueurs présents à au
        moins un meeting.
    """
    tallies: dict[str, _Tally] = {}
    skipped = 0
    for game in games:
        if game.max_meeting == 0:
            skipped += 1
            continue
        _tally_presence(game, tallies)
        _tally_timing(game, tallies)

    if skipped:
        logger.debug(f"{skipped} partie(s) sans vote ignorée(s) pour les statistiques de vote")
    return {
        player_id: tallies[player_id].freeze(player_id)
        for player_id in sorted(tallies)
        if tallies[player_id].meetings > 0
    }
