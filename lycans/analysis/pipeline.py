"""Pipeline de génération des succès pour tous les joueurs.

HOW IT WORKS:
1. Normalise le corpus une seule fois (identité canonique, ordre chronologique)
2. Construit les deux partitions : toutes les parties / parties moddées
3. Calcule les agrégateurs de chaque partition, éventuellement en parallèle
   (ce sont des plis purs sur un corpus immuable)
4. Classe chaque métrique une fois par partition
5. Assemble les succès de chaque joueur, partition par partition

Usage:
    from lycans.analysis.pipeline import generate_all_player_achievements

    report = generate_all_player_achievements(raw_games, resolver)
    write_achievements(report, "data/playerAchievements.json")
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from lycans.analysis.achievement_config import VARIANT_ALL, VARIANT_MODDED
from lycans.analysis.achievements import (
    PartitionAggregates,
    PartitionResults,
    assemble_achievements,
)
from lycans.analysis.activity import compute_loot_stats, compute_talk_stats
from lycans.analysis.camp_performance import compute_camp_performance
from lycans.analysis.deaths import compute_death_stats, compute_hunter_stats, compute_kill_stats
from lycans.analysis.participation import compute_map_win_rates, compute_participation
from lycans.analysis.series import compute_series
from lycans.analysis.voting import compute_voting_stats
from lycans.data.domain.models.achievement import Achievement
from lycans.data.domain.models.game import GameRecord
from lycans.data.identity import PlayerIdentityResolver
from lycans.data.loader import write_json
from lycans.data.normalizer import filter_modded, normalize_corpus

logger = logging.getLogger(__name__)

MAX_WORKERS_ENV = "LYCANS_MAX_WORKERS"

# Nom du champ de PartitionAggregates -> agrégateur
AGGREGATORS: dict[str, Callable[[Sequence[GameRecord]], dict[str, Any]]] = {
    "participation": compute_participation,
    "maps": compute_map_win_rates,
    "camps": compute_camp_performance,
    "series": compute_series,
    "kills": compute_kill_stats,
    "deaths": compute_death_stats,
    "hunters": compute_hunter_stats,
    "voting": compute_voting_stats,
    "loot": compute_loot_stats,
    "talk": compute_talk_stats,
}


@dataclass(frozen=True)
class PlayerAchievements:
    """Succès d'un joueur, une liste par partition (jamais mélangées)."""

    player_id: str
    player_name: str
    all_games: tuple[Achievement, ...] = ()
    modded_only: tuple[Achievement, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "playerName": self.player_name,
            "allGamesAchievements": [a.to_dict() for a in self.all_games],
            "moddedOnlyAchievements": [a.to_dict() for a in self.modded_only],
        }


@dataclass(frozen=True)
class AchievementsReport:
    """Résultat complet du pipeline, sérialisé dans playerAchievements.json.

    Attributes:
        generated_at: Horodatage de génération (UTC).
        total_players: Nombre de joueurs distincts.
        total_games: Nombre de parties valides.
        total_modded_games: Nombre de parties moddées.
        achievements: Succès par identifiant canonique.
    """

    generated_at: datetime
    total_players: int = 0
    total_games: int = 0
    total_modded_games: int = 0
    achievements: dict[str, PlayerAchievements] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "generatedAt": self.generated_at.isoformat(),
            "totalPlayers": self.total_players,
            "totalGames": self.total_games,
            "totalModdedGames": self.total_modded_games,
            "achievements": {pid: pa.to_dict() for pid, pa in self.achievements.items()},
        }


def resolve_max_workers(max_workers: int | None = None) -> int:
    """Nombre de workers : argument explicite, sinon LYCANS_MAX_WORKERS, sinon 1."""
    if max_workers is not None:
        return max(1, max_workers)
    raw = str(os.environ.get(MAX_WORKERS_ENV) or "").strip()
    if not raw:
        return 1
    try:
        return max(1, int(raw))
    except ValueError:
        logger.warning(f"{MAX_WORKERS_ENV} invalide ({raw!r}), exécution séquentielle")
        return 1


def compute_aggregates(
    games: Sequence[GameRecord], *, max_workers: int | None = None
) -> PartitionAggregates:
    """Calcule tous les agrégateurs d'une partition.

    Args:
        games: Parties normalisées de la partition.
        max_workers: Nombre de threads (1 = séquentiel).

    Returns:
        PartitionAggregates complet.
    """
    workers = resolve_max_workers(max_workers)
    if workers <= 1:
        return PartitionAggregates(**{name: fn(games) for name, fn in AGGREGATORS.items()})

    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = {name: ex.submit(fn, games) for name, fn in AGGREGATORS.items()}
        return PartitionAggregates(**{name: fut.result() for name, fut in futures.items()})


def build_partition(
    games: Sequence[GameRecord], *, max_workers: int | None = None
) -> PartitionResults:
    """Agrège et classe une partition."""
    return PartitionResults.from_aggregates(games, compute_aggregates(games, max_workers=max_workers))


def _player_name(games: Sequence[GameRecord], player_id: str) -> str:
    for game in games:
        entry = game.find_entry(player_id)
        if entry is not None:
            return entry.player_name
    return player_id


def _assemble_player(
    partitions: dict[str, PartitionResults], player_id: str, player_name: str
) -> PlayerAchievements:
    return PlayerAchievements(
        player_id=player_id,
        player_name=player_name,
        all_games=tuple(assemble_achievements(partitions[VARIANT_ALL], player_id, VARIANT_ALL)),
        modded_only=tuple(assemble_achievements(partitions[VARIANT_MODDED], player_id, VARIANT_MODDED)),
    )


def compute_player_achievements(games: Sequence[GameRecord], player_id: str) -> PlayerAchievements:
    """Calcule les succès d'un seul joueur sur un corpus normalisé.

    Args:
        games: Parties normalisées (toutes partitions confondues).
        player_id: Identifiant canonique du joueur.

    Returns:
        PlayerAchievements (allGamesAchievements / moddedOnlyAchievements
        via to_dict), listes vides pour un corpus vide.
    """
    partitions = {
        VARIANT_ALL: build_partition(games),
        VARIANT_MODDED: build_partition(filter_modded(games)),
    }
    return _assemble_player(partitions, player_id, _player_name(games, player_id))


def generate_all_player_achievements(
    raw_games: Sequence[dict[str, Any]],
    resolver: PlayerIdentityResolver | None = None,
    *,
    max_workers: int | None = None,
) -> AchievementsReport:
    """Génère les succès de tous les joueurs du corpus.

    Args:
        raw_games: Parties brutes de gameLog.json.
        resolver: Résolveur d'identité (joueurs.json), optionnel.
        max_workers: Threads pour les agrégateurs (défaut : LYCANS_MAX_WORKERS ou 1).

    Returns:
        AchievementsReport trié par identifiant canonique.
    """
    corpus = normalize_corpus(raw_games, resolver)
    modded_games = corpus.modded_games
    logger.info(
        f"Corpus normalisé: {len(corpus.games)} partie(s) dont {len(modded_games)} moddée(s), "
        f"{corpus.dropped} ignorée(s)"
    )

    workers = resolve_max_workers(max_workers)
    partitions = {
        VARIANT_ALL: build_partition(corpus.games, max_workers=workers),
        VARIANT_MODDED: build_partition(modded_games, max_workers=workers),
    }

    achievements: dict[str, PlayerAchievements] = {}
    for player_id in sorted(corpus.player_names):
        achievements[player_id] = _assemble_player(partitions, player_id, corpus.player_names[player_id])

    total = sum(len(pa.all_games) + len(pa.modded_only) for pa in achievements.values())
    logger.info(f"{total} succès générés pour {len(achievements)} joueur(s)")

    return AchievementsReport(
        generated_at=datetime.now(timezone.utc),
        total_players=len(achievements),
        total_games=len(corpus.games),
        total_modded_games=len(modded_games),
        achievements=achievements,
    )


def write_achievements(report: AchievementsReport, path: str | Path) -> Path:
    """Écrit le rapport dans playerAchievements.json.

    Returns:
        Chemin du fichier écrit.
    """
    out = write_json(report.to_dict(), path)
    logger.info(f"Succès écrits dans {out}")
    return out
