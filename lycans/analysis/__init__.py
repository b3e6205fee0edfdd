"""
Module analysis : agrégateurs, classements et assemblage des succès.
(Analysis module: aggregators, rankings and achievement assembly)

HOW IT WORKS:
1. Agrégateurs (plis purs sur un corpus normalisé) : participation, cartes,
   performance par camp, séries, éliminations, votes, récolte, parole
2. ranking : classement avec seuil d'éligibilité et départage déterministe
3. relationships : coéquipiers et face-à-face d'un joueur
4. achievements / pipeline : assemblage par partition (toutes / moddées)
"""

from lycans.analysis.achievements import (
    PartitionAggregates,
    PartitionResults,
    assemble_achievements,
    build_metric_inputs,
)
from lycans.analysis.pipeline import (
    AchievementsReport,
    PlayerAchievements,
    compute_aggregates,
    compute_player_achievements,
    generate_all_player_achievements,
    write_achievements,
)
from lycans.analysis.ranking import MetricInput, RankEntry, Ranking, rank_metric
from lycans.analysis.relationships import Relationship, compute_relationships

__all__ = [
    "AchievementsReport",
    "MetricInput",
    "PartitionAggregates",
    "PartitionResults",
    "PlayerAchievements",
    "RankEntry",
    "Ranking",
    "Relationship",
    "assemble_achievements",
    "build_metric_inputs",
    "compute_aggregates",
    "compute_player_achievements",
    "compute_relationships",
    "generate_all_player_achievements",
    "rank_metric",
    "write_achievements",
]
