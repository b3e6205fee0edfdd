"""Relations entre un joueur cible et les autres joueurs.

Pour chaque autre joueur, les parties communes sont réparties en deux
sous-ensembles disjoints :
    - même camp : les deux joueurs ont la même faction
    - camps opposés : factions adverses d'après la table CAMP_RELATIONS
      (deux rôles solo différents ne sont dans aucun des deux)

Les victoires sont toujours comptées du point de vue de la cible : en
face-à-face, une partie peut se terminer sans victoire pour aucun des deux
(un troisième camp gagne), la relation n'est donc pas symétrique.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from lycans.analysis.achievement_config import (
    RELATION_CANDIDATE_MIN_GAMES,
    RELATION_MIN_GAMES_TOGETHER,
    WORST_MATCHUP_MAX_RATE,
    WORST_MATE_MAX_RATE,
)
from lycans.data.domain.models.game import GameRecord
from lycans.data.domain.refdata import are_opposing_camps

logger = logging.getLogger(__name__)


@dataclass
class Relationship:
    """Statistiques de la cible face à un autre joueur.

    Attributes:
        other_id: Identifiant canonique de l'autre joueur.
        other_name: Nom d'affichage (dernier connu).
        same_camp_games: Parties dans la même faction.
        same_camp_wins: Victoires de la cible dans ces parties.
        opposing_games: Parties en factions adverses.
        opposing_wins: Victoires de la cible dans ces parties.
    """

    other_id: str
    other_name: str
    same_camp_games: int = 0
    same_camp_wins: int = 0
    opposing_games: int = 0
    opposing_wins: int = 0

    @property
    def same_camp_win_rate(self) -> float:
        if not self.same_camp_games:
            return 0.0
        return self.same_camp_wins / self.same_camp_games * 100

    @property
    def opposing_win_rate(self) -> float:
        if not self.opposing_games:
            return 0.0
        return self.opposing_wins / self.opposing_games * 100


def compute_relationships(
    target: str,
    games: Sequence[GameRecord],
    *,
    min_games_together: int = RELATION_MIN_GAMES_TOGETHER,
    candidate_min_games: int = RELATION_CANDIDATE_MIN_GAMES,
) -> list[Relationship]:
    """Calcule les relations de la cible avec les autres joueurs.

    Args:
        target: Identifiant canonique du joueur cible.
        games: Parties normalisées d'une partition.
        min_games_together: Une relation est gardée si l'un des deux
            sous-ensembles atteint ce nombre de parties.
        candidate_min_games: Parties minimum de l'autre joueur dans la partition.

    Returns:
        Relations triées par identifiant canonique de l'autre joueur.
    """
    game_counts: Counter[str] = Counter()
    for game in games:
        game_counts.update(e.player_id for e in game.entries)

    candidates = {
        player_id
        for player_id, count in game_counts.items()
        if count >= candidate_min_games and player_id != target
    }
    if target not in game_counts or not candidates:
        return []

    relations: dict[str, Relationship] = {}
    for game in games:
        me = game.find_entry(target)
        if me is None:
            continue
        for other in game.entries:
            if other.player_id not in candidates:
                continue
            rel = relations.get(other.player_id)
            if rel is None:
                rel = relations[other.player_id] = Relationship(other.player_id, other.player_name)
            rel.other_name = other.player_name

            if me.faction == other.faction:
                rel.same_camp_games += 1
                rel.same_camp_wins += int(me.victorious)
            elif are_opposing_camps(me.faction, other.faction):
                rel.opposing_games += 1
                rel.opposing_wins += int(me.victorious)

    kept = [
        relations[other_id]
        for other_id in sorted(relations)
        if relations[other_id].same_camp_games >= min_games_together
        or relations[other_id].opposing_games >= min_games_together
    ]
    logger.debug(f"{target}: {len(kept)}/{len(relations)} relation(s) retenue(s)")
    return kept


# =============================================================================
# Superlatifs
# =============================================================================


def _best_and_worst(
    eligible: list[Relationship], rate_of, max_worst_rate: float
) -> tuple[Relationship | None, Relationship | None]:
    if not eligible:
        return None, None
    best = max(eligible, key=rate_of)
    if len(eligible) < 2:
        return best, None
    worst = min(eligible, key=rate_of)
    if worst is best or rate_of(worst) >= max_worst_rate:
        return best, None
    return best, worst


def teammate_superlatives(
    relationships: Sequence[Relationship],
    *,
    min_games: int = RELATION_MIN_GAMES_TOGETHER,
) -> tuple[Relationship | None, Relationship | None]:
    """Meilleur et pire coéquipier.

    Le pire n'est retenu que s'il diffère du meilleur et reste sous
    WORST_MATE_MAX_RATE.

    Returns:
        (meilleur, pire), chacun pouvant être None.
    """
    eligible = [r for r in relationships if r.same_camp_games >= min_games]
    return _best_and_worst(eligible, lambda r: r.same_camp_win_rate, WORST_MATE_MAX_RATE)


def matchup_superlatives(
    relationships: Sequence[Relationship],
    *,
    min_games: int = RELATION_MIN_GAMES_TOGETHER,
) -> tuple[Relationship | None, Relationship | None]:
    """Meilleur et pire face-à-face (pire sous WORST_MATCHUP_MAX_RATE)."""
    eligible = [r for r in relationships if r.opposing_games >= min_games]
    return _best_and_worst(eligible, lambda r: r.opposing_win_rate, WORST_MATCHUP_MAX_RATE)
