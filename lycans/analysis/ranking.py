"""Moteur de classement et d'éligibilité.

Transforme une métrique par joueur en classement stable :
1. filtre les joueurs sous le seuil d'éligibilité (min_sample)
2. trie par valeur (décroissant sauf métrique "plus petit = meilleur")
3. départage les égalités par clé secondaire puis par identifiant canonique

Un joueur absent du classement n'a simplement pas de succès pour cette
métrique, ce n'est jamais une erreur.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import polars as pl


@dataclass(frozen=True)
class RankEntry:
    """Position d'un joueur dans un classement.

    Attributes:
        rank: Rang (1 = meilleur dans le sens de la métrique).
        value: Valeur du joueur.
        total_ranked: Nombre de joueurs éligibles.
    """

    rank: int
    value: float
    total_ranked: int


@dataclass(frozen=True)
class MetricInput:
    """Entrée d'une métrique à classer.

    Attributes:
        values: Valeur classée par joueur.
        samples: Taille d'échantillon par joueur (parties, meetings...).
        details: Champs supplémentaires pour les descriptions, par joueur.
        exported: Valeur exportée quand elle diffère de la valeur classée
            (ex. taux de victoire d'un camp classé par performance).
        secondary: Clé de départage décroissante (ex. nombre de votes).
    """

    values: dict[str, float] = field(default_factory=dict)
    samples: dict[str, int] | None = None
    details: dict[str, dict[str, Any]] = field(default_factory=dict)
    exported: dict[str, float] | None = None
    secondary: dict[str, float] | None = None


@dataclass(frozen=True)
class Ranking:
    """Classement trié d'une métrique."""

    order: tuple[str, ...] = ()
    ranks: dict[str, int] = field(default_factory=dict)
    values: dict[str, float] = field(default_factory=dict)

    @property
    def total_ranked(self) -> int:
        return len(self.order)

    def __len__(self) -> int:
        return len(self.order)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.ranks

    def lookup(self, player_id: str) -> RankEntry | None:
        """Retourne la position d'un joueur, ou None s'il n'est pas éligible."""
        rank = self.ranks.get(player_id)
        if rank is None:
            return None
        return RankEntry(rank=rank, value=self.values[player_id], total_ranked=self.total_ranked)


def rank_metric(
    values: Mapping[str, float],
    *,
    min_sample: int = 0,
    samples: Mapping[str, int] | None = None,
    descending: bool = True,
    shared_ranks: bool = False,
    secondary: Mapping[str, float] | None = None,
) -> Ranking:
    """Classe les joueurs sur une métrique.

    Args:
        values: Valeur par joueur.
        min_sample: Échantillon minimum pour être classé.
        samples: Échantillon par joueur. Sans table, la valeur sert d'échantillon.
        descending: True si la plus grande valeur est la meilleure.
        shared_ranks: True pour le classement "compétition" (égalités au même rang).
        secondary: Clé de départage décroissante optionnelle.

    Returns:
        Ranking trié (vide si aucun joueur éligible).
    """
    if not values:
        return Ranking()

    player_ids = list(values)
    if samples is None:
        sample_list = [float(values[p]) for p in player_ids]
    else:
        sample_list = [float(samples.get(p, 0)) for p in player_ids]

    df = pl.DataFrame(
        {
            "player_id": player_ids,
            "value": [float(values[p]) for p in player_ids],
            "sample": sample_list,
            "secondary": [float(secondary.get(p, 0)) if secondary else 0.0 for p in player_ids],
        },
        schema={
            "player_id": pl.Utf8,
            "value": pl.Float64,
            "sample": pl.Float64,
            "secondary": pl.Float64,
        },
    )

    eligible = df.filter(pl.col("sample") >= min_sample)
    if eligible.is_empty():
        return Ranking()

    eligible = eligible.sort(
        ["value", "secondary", "player_id"],
        descending=[descending, True, False],
    )

    if shared_ranks:
        rank_expr = pl.col("value").rank(method="min", descending=descending)
    else:
        rank_expr = pl.int_range(1, pl.len() + 1)
    eligible = eligible.with_columns(rank_expr.cast(pl.Int64).alias("rank"))

    order = tuple(eligible.get_column("player_id").to_list())
    ranks = dict(zip(order, eligible.get_column("rank").to_list(), strict=True))
    return Ranking(order=order, ranks=ranks, values={p: values[p] for p in order})


def rank_input(
    metric: MetricInput,
    *,
    min_sample: int = 0,
    descending: bool = True,
    shared_ranks: bool = False,
) -> Ranking:
    """Raccourci : classe une MetricInput."""
    return rank_metric(
        metric.values,
        min_sample=min_sample,
        samples=metric.samples,
        descending=descending,
        shared_ranks=shared_ranks,
        secondary=metric.secondary,
    )
