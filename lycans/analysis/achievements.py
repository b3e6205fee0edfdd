"""Assemblage des succès (achievements) d'un joueur.

HOW IT WORKS:
1. PartitionAggregates : sorties brutes des agrégateurs pour une partition
   (toutes les parties ou parties moddées uniquement)
2. build_metric_inputs() : une MetricInput par métrique de METRIC_DEFINITIONS
3. PartitionResults : classements calculés une seule fois par partition
4. assemble_achievements() : lit la position du joueur dans chaque
   classement et produit les Achievement, puis ajoute les comparaisons

Un classement vide ou un joueur non éligible n'émet rien, sans erreur.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from lycans.analysis.achievement_config import (
    COMPARISON_DEFINITIONS,
    METRIC_DEFINITIONS,
    RELATION_MIN_GAMES_TOGETHER,
    TALK_PODIUM_LABELS,
    VARIANT_SUFFIXES,
    ComparisonDefinition,
    MetricDefinition,
    ordinal,
)
from lycans.analysis.activity import LootRecord, TalkRecord
from lycans.analysis.camp_performance import PlayerCampPerformance
from lycans.analysis.deaths import DeathRecord, HunterRecord, KillRecord
from lycans.analysis.participation import RANKED_MAPS, MapRecord, ParticipationRecord
from lycans.analysis.ranking import MetricInput, Ranking, rank_input
from lycans.analysis.relationships import (
    Relationship,
    compute_relationships,
    matchup_superlatives,
    teammate_superlatives,
)
from lycans.analysis.series import SeriesKind, StreakRecord
from lycans.analysis.voting import VotingRecord
from lycans.data.domain.models.achievement import Achievement, AchievementCategory
from lycans.data.domain.models.game import GameRecord
from lycans.data.domain.refdata import AMOUREUX, IDIOT_DU_VILLAGE, LOUP, VILLAGEOIS

logger = logging.getLogger(__name__)

# Métriques de performance par camp détaillé
CAMP_PERFORMANCE_STEMS = {
    "villageois-performance": VILLAGEOIS,
    "loup-performance": LOUP,
    "idiot-performance": IDIOT_DU_VILLAGE,
    "amoureux-performance": AMOUREUX,
}

SERIES_STEMS = {
    "villageois-series": SeriesKind.VILLAGEOIS,
    "loup-series": SeriesKind.LOUP,
    "win-series": SeriesKind.WIN,
    "loss-series": SeriesKind.LOSS,
}

# Catégories émises avant les comparaisons
_LEADING_CATEGORIES = (AchievementCategory.GENERAL, AchievementCategory.MAP)


# =============================================================================
# Agrégats et classements d'une partition
# =============================================================================


@dataclass(frozen=True)
class PartitionAggregates:
    """Sorties des agrégateurs pour une partition du corpus."""

    participation: dict[str, ParticipationRecord] = field(default_factory=dict)
    maps: dict[str, dict[str, MapRecord]] = field(default_factory=dict)
    camps: dict[str, PlayerCampPerformance] = field(default_factory=dict)
    series: dict[str, dict[SeriesKind, StreakRecord]] = field(default_factory=dict)
    kills: dict[str, KillRecord] = field(default_factory=dict)
    deaths: dict[str, DeathRecord] = field(default_factory=dict)
    hunters: dict[str, HunterRecord] = field(default_factory=dict)
    voting: dict[str, VotingRecord] = field(default_factory=dict)
    loot: dict[str, LootRecord] = field(default_factory=dict)
    talk: dict[str, TalkRecord] = field(default_factory=dict)


def _simple_input(
    records: dict[str, Any],
    value_of,
    sample_of,
    games_of=None,
) -> MetricInput:
    values = {pid: value_of(r) for pid, r in records.items()}
    samples = {pid: sample_of(r) for pid, r in records.items()}
    details = {pid: {"games": games_of(r)} for pid, r in records.items()} if games_of else {}
    return MetricInput(values=values, samples=samples, details=details)


def _map_input(maps: dict[str, dict[str, MapRecord]], map_name: str) -> MetricInput:
    records = {pid: by_map[map_name] for pid, by_map in maps.items() if map_name in by_map}
    return _simple_input(records, lambda r: r.win_rate, lambda r: r.games, lambda r: r.games)


def _camp_input(camps: dict[str, PlayerCampPerformance], camp: str | None) -> MetricInput:
    """Performance classée, taux de victoire exporté (camp=None : rôles spéciaux)."""
    values: dict[str, float] = {}
    samples: dict[str, int] = {}
    exported: dict[str, float] = {}
    details: dict[str, dict[str, Any]] = {}
    for pid, perf in camps.items():
        cell = perf.solo if camp is None else perf.cells.get(camp)
        if cell is None:
            continue
        values[pid] = cell.performance
        samples[pid] = cell.games
        exported[pid] = cell.win_rate
        details[pid] = {
            "games": cell.games,
            "win_rate": cell.win_rate,
            "performance": cell.performance,
        }
    return MetricInput(values=values, samples=samples, details=details, exported=exported)


def _hall_of_fame_input(camps: dict[str, PlayerCampPerformance]) -> MetricInput:
    values: dict[str, float] = {}
    samples: dict[str, int] = {}
    details: dict[str, dict[str, Any]] = {}
    for pid, perf in camps.items():
        overall = perf.overall
        if overall is None:
            continue
        values[pid] = overall.performance
        samples[pid] = perf.total_games
        details[pid] = {"games": perf.total_games}
    return MetricInput(values=values, samples=samples, details=details)


def _series_input(series: dict[str, dict[SeriesKind, StreakRecord]], kind: SeriesKind) -> MetricInput:
    records = {pid: by_kind[kind] for pid, by_kind in series.items() if kind in by_kind}
    return _simple_input(records, lambda r: r.length, lambda r: r.length)


def _talk_input(talk: dict[str, TalkRecord]) -> MetricInput:
    metric = _simple_input(talk, lambda r: r.seconds_per_60min, lambda r: r.games)
    details = {}
    for pid, value in metric.values.items():
        minutes, seconds = divmod(int(value), 60)
        details[pid] = {"minutes": minutes, "seconds": seconds}
    return MetricInput(values=metric.values, samples=metric.samples, details=details)


def build_metric_inputs(aggregates: PartitionAggregates) -> dict[str, MetricInput]:
    """Construit l'entrée de classement de chaque métrique.

    Args:
        aggregates: Sorties des agrégateurs d'une partition.

    Returns:
        Dict {stem: MetricInput} couvrant toutes les métriques classées.
    """
    a = aggregates
    winrate = _simple_input(a.participation, lambda r: r.win_rate, lambda r: r.games)
    metrics: dict[str, MetricInput] = {
        "participation": _simple_input(a.participation, lambda r: r.games, lambda r: r.games),
        "winrate-10": winrate,
        "winrate-50": winrate,
        "top-killer": _simple_input(a.kills, lambda r: r.kills, lambda r: r.games),
        "top-killer-average": _simple_input(
            a.kills, lambda r: r.average_kills, lambda r: r.games, lambda r: r.games
        ),
        "top-survivor": _simple_input(a.deaths, lambda r: r.death_rate, lambda r: r.games),
        "top-killed": _simple_input(a.deaths, lambda r: r.deaths, lambda r: r.games),
        "top-good-hunter": _simple_input(
            a.hunters, lambda r: r.good_kills_per_game, lambda r: r.hunter_games, lambda r: r.hunter_games
        ),
        "top-bad-hunter": _simple_input(
            a.hunters, lambda r: r.bad_kills_per_game, lambda r: r.hunter_games, lambda r: r.hunter_games
        ),
        "hall-of-fame": _hall_of_fame_input(a.camps),
        "solo-performance": _camp_input(a.camps, None),
        "aggressiveness": _simple_input(a.voting, lambda r: r.aggressiveness, lambda r: r.meetings),
        "voting-accuracy": MetricInput(
            values={pid: r.accuracy for pid, r in a.voting.items()},
            samples={pid: r.meetings for pid, r in a.voting.items()},
            secondary={pid: r.votes for pid, r in a.voting.items()},
        ),
        "loot-rate-25": _simple_input(a.loot, lambda r: r.loot_per_60min, lambda r: r.games),
        "most-talkative": _talk_input(a.talk),
    }
    for map_name, key in RANKED_MAPS.items():
        metrics[f"{key}-winrate"] = _map_input(a.maps, map_name)
    for stem, camp in CAMP_PERFORMANCE_STEMS.items():
        metrics[stem] = _camp_input(a.camps, camp)
    for stem, kind in SERIES_STEMS.items():
        metrics[stem] = _series_input(a.series, kind)
    return metrics


@dataclass(frozen=True)
class PartitionResults:
    """Parties, entrées et classements d'une partition, prêts pour l'assemblage."""

    games: tuple[GameRecord, ...] = ()
    metrics: dict[str, MetricInput] = field(default_factory=dict)
    rankings: dict[str, Ranking] = field(default_factory=dict)

    @classmethod
    def from_aggregates(
        cls, games: Sequence[GameRecord], aggregates: PartitionAggregates
    ) -> PartitionResults:
        """Classe toutes les métriques d'une partition une seule fois."""
        metrics = build_metric_inputs(aggregates)
        rankings = {
            stem: rank_input(
                metrics[stem],
                min_sample=definition.min_sample,
                descending=definition.descending,
                shared_ranks=definition.shared_ranks,
            )
            for stem, definition in METRIC_DEFINITIONS.items()
            if stem in metrics
        }
        return cls(games=tuple(games), metrics=metrics, rankings=rankings)


# =============================================================================
# Assemblage
# =============================================================================


def _ranked_achievement(
    definition: MetricDefinition,
    results: PartitionResults,
    player_id: str,
    variant: str,
) -> Achievement | None:
    ranking = results.rankings.get(definition.stem)
    if ranking is None:
        return None
    entry = ranking.lookup(player_id)
    if entry is None:
        return None
    if definition.max_rank is not None and entry.rank > definition.max_rank:
        return None

    metric = results.metrics[definition.stem]
    value = entry.value
    if metric.exported is not None:
        value = metric.exported.get(player_id, value)
    if definition.value_digits is not None:
        value = round(value, definition.value_digits)

    fields: dict[str, Any] = {
        "rank": entry.rank,
        "suffix": VARIANT_SUFFIXES[variant],
        "ordinal": ordinal(entry.rank, feminine=definition.feminine),
        "value": entry.value,
        "podium": TALK_PODIUM_LABELS.get(entry.rank, ""),
        "min_sample": definition.min_sample,
        **metric.details.get(player_id, {}),
    }
    return Achievement(
        id=definition.achievement_id(variant),
        title=definition.title.format(**fields),
        description=definition.description.format(**fields),
        polarity=definition.polarity,
        category=definition.category,
        value=value,
        navigation=definition.navigation_for(variant),
        rank=entry.rank,
        total_ranked=entry.total_ranked,
        min_sample=definition.min_sample,
    )


def _comparison_achievement(
    definition: ComparisonDefinition,
    relation: Relationship | None,
    variant: str,
    *,
    opposing: bool,
) -> Achievement | None:
    if relation is None:
        return None
    if opposing:
        rate, wins, games = relation.opposing_win_rate, relation.opposing_wins, relation.opposing_games
    else:
        rate, wins, games = relation.same_camp_win_rate, relation.same_camp_wins, relation.same_camp_games
    suffix = VARIANT_SUFFIXES[variant]
    return Achievement(
        id=f"{definition.stem}-{variant}",
        title=definition.title.format(suffix=suffix),
        description=definition.description.format(
            name=relation.other_name,
            rate=rate,
            wins=wins,
            games=games,
            min_sample=RELATION_MIN_GAMES_TOGETHER,
        ),
        polarity=definition.polarity,
        category=AchievementCategory.COMPARISON,
        value=round(rate, 1),
        navigation=definition.navigation,
        min_sample=RELATION_MIN_GAMES_TOGETHER,
    )


def comparison_achievements(
    results: PartitionResults, player_id: str, variant: str
) -> list[Achievement]:
    """Succès de comparaison (meilleur/pire coéquipier et face-à-face)."""
    relationships = compute_relationships(player_id, results.games)
    if not relationships:
        return []

    best_mate, worst_mate = teammate_superlatives(relationships)
    best_matchup, worst_matchup = matchup_superlatives(relationships)
    candidates = (
        _comparison_achievement(COMPARISON_DEFINITIONS["best-mate"], best_mate, variant, opposing=False),
        _comparison_achievement(COMPARISON_DEFINITIONS["worst-mate"], worst_mate, variant, opposing=False),
        _comparison_achievement(COMPARISON_DEFINITIONS["best-matchup"], best_matchup, variant, opposing=True),
        _comparison_achievement(COMPARISON_DEFINITIONS["worst-matchup"], worst_matchup, variant, opposing=True),
    )
    return [a for a in candidates if a is not None]


def assemble_achievements(
    results: PartitionResults, player_id: str, variant: str
) -> list[Achievement]:
    """Assemble tous les succès d'un joueur pour une partition.

    Args:
        results: Classements de la partition.
        player_id: Identifiant canonique du joueur.
        variant: "all" ou "modded" (suffixe d'id et de titre).

    Returns:
        Succès ordonnés par catégorie : général, cartes, comparaisons,
        puis éliminations, performances, séries, votes, récolte, parole.
    """
    if variant not in VARIANT_SUFFIXES:
        raise ValueError(f"Variante inconnue: {variant}")

    leading: list[Achievement] = []
    trailing: list[Achievement] = []
    for definition in METRIC_DEFINITIONS.values():
        achievement = _ranked_achievement(definition, results, player_id, variant)
        if achievement is None:
            continue
        if definition.category in _LEADING_CATEGORIES:
            leading.append(achievement)
        else:
            trailing.append(achievement)

    return leading + comparison_achievements(results, player_id, variant) + trailing
