"""Agrégation des éliminations, des morts et des statistiques de Chasseur.

Seules les parties dont les informations de mort sont complètes
(LegacyData.deathInformationFilled) sont prises en compte ; les parties
importées d'anciens formats faussent sinon les ratios.

- Kill : mort d'un autre joueur dont le KillerName est un joueur de la
  même partie, hors votes, famine, chute, chaîne d'Avatar et inconnu.
- Mort : DeathType renseigné et différent de SURVIVOR / N/A.
- Chasseur : joueur dont le rôle initial ou final est Chasseur ; ses
  tirs (BULLET*) sont classés selon le camp initial de la victime.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from lycans.data.domain.models.game import GameRecord, is_death_type
from lycans.data.domain.refdata import (
    CHASSEUR,
    HUNTER_DEATH_TYPES,
    NON_KILL_DEATH_TYPES,
    VILLAGEOIS,
    get_camp_from_role,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KillRecord:
    """Éliminations d'un joueur."""

    player_id: str
    kills: int
    games: int

    @property
    def average_kills(self) -> float:
        return self.kills / self.games if self.games else 0.0


@dataclass(frozen=True)
class DeathRecord:
    """Morts d'un joueur."""

    player_id: str
    deaths: int
    games: int

    @property
    def death_rate(self) -> float:
        return self.deaths / self.games if self.games else 0.0


@dataclass(frozen=True)
class HunterRecord:
    """Tirs d'un joueur en tant que Chasseur.

    Attributes:
        player_id: Identifiant canonique.
        hunter_games: Parties jouées en Chasseur.
        total_kills: Tirs mortels.
        good_kills: Victimes hors camp Villageois.
        bad_kills: Victimes du camp Villageois.
    """

    player_id: str
    hunter_games: int
    total_kills: int = 0
    good_kills: int = 0
    bad_kills: int = 0

    @property
    def good_kills_per_game(self) -> float:
        return self.good_kills / self.hunter_games if self.hunter_games else 0.0

    @property
    def bad_kills_per_game(self) -> float:
        return self.bad_kills / self.hunter_games if self.hunter_games else 0.0


def games_with_death_data(games: Sequence[GameRecord]) -> list[GameRecord]:
    """Filtre les parties dont les informations de mort sont complètes."""
    kept = [g for g in games if g.death_information_filled]
    if len(kept) < len(games):
        logger.debug(f"{len(games) - len(kept)} partie(s) sans informations de mort ignorée(s)")
    return kept


def _count_games(games: Sequence[GameRecord]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for game in games:
        counts.update(e.player_id for e in game.entries)
    return counts


def compute_kill_stats(games: Sequence[GameRecord]) -> dict[str, KillRecord]:
    """Calcule les éliminations par joueur.

    Returns:
        Dict {player_id: KillRecord} pour les joueurs ayant au moins un kill.
    """
    death_games = games_with_death_data(games)
    game_counts = _count_games(death_games)

    kills: Counter[str] = Counter()
    for game in death_games:
        players_in_game = {e.player_id for e in game.entries}
        for victim in game.entries:
            death = victim.death
            if death is None or death.death_type in NON_KILL_DEATH_TYPES:
                continue
            if death.killer_id and death.killer_id in players_in_game:
                kills[death.killer_id] += 1

    return {
        player_id: KillRecord(player_id=player_id, kills=count, games=game_counts[player_id])
        for player_id, count in sorted(kills.items())
    }


def compute_death_stats(games: Sequence[GameRecord]) -> dict[str, DeathRecord]:
    """Calcule les morts par joueur.

    Returns:
        Dict {player_id: DeathRecord} pour les joueurs morts au moins une fois.
    """
    death_games = games_with_death_data(games)
    game_counts = _count_games(death_games)

    deaths: Counter[str] = Counter()
    for game in death_games:
        for entry in game.entries:
            if entry.death is not None and is_death_type(entry.death.death_type):
                deaths[entry.player_id] += 1

    return {
        player_id: DeathRecord(player_id=player_id, deaths=count, games=game_counts[player_id])
        for player_id, count in sorted(deaths.items())
    }


def compute_hunter_stats(games: Sequence[GameRecord]) -> dict[str, HunterRecord]:
    """Calcule les statistiques de tir des Chasseurs.

    Returns:
        Dict {player_id: HunterRecord} pour les joueurs ayant joué Chasseur.
    """
    hunter_games: Counter[str] = Counter()
    good: Counter[str] = Counter()
    bad: Counter[str] = Counter()

    for game in games_with_death_data(games):
        hunters = {
            e.player_id
            for e in game.entries
            if e.initial_role == CHASSEUR or e.final_role == CHASSEUR
        }
        hunter_games.update(hunters)

        for victim in game.entries:
            death = victim.death
            if death is None or death.death_type not in HUNTER_DEATH_TYPES:
                continue
            if death.killer_id not in hunters:
                continue
            if get_camp_from_role(victim.initial_role) == VILLAGEOIS:
                bad[death.killer_id] += 1
            else:
                good[death.killer_id] += 1

    return {
        player_id: HunterRecord(
            player_id=player_id,
            hunter_games=count,
            total_kills=good[player_id] + bad[player_id],
            good_kills=good[player_id],
            bad_kills=bad[player_id],
        )
        for player_id, count in sorted(hunter_games.items())
    }
