"""Performance des joueurs par camp, relative à la moyenne du camp.

Calcul en deux passes (Polars) :
1. Taux de victoire de toute la population par camp détaillé
   (Chasseur et Alchimiste gardent leur propre camp).
2. Par joueur et par camp : parties, victoires, taux de victoire et
   performance = taux du joueur - taux moyen du camp.

Seules les cellules joueur/camp d'au moins MIN_CAMP_GAMES parties sont
conservées. Les synthèses (overall, rôles spéciaux) sont des moyennes
pondérées par le nombre de parties de chaque cellule conservée.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import polars as pl

from lycans.analysis.achievement_config import MIN_CAMP_GAMES
from lycans.data.domain.models.game import GameRecord
from lycans.data.domain.refdata import LOUP, VILLAGEOIS
from lycans.data.normalizer import entries_frame


@dataclass(frozen=True)
class CampCell:
    """Performance d'un joueur dans un camp.

    Attributes:
        camp: Camp détaillé.
        games: Parties jouées dans ce camp.
        wins: Victoires dans ce camp.
        win_rate: Taux de victoire du joueur (%).
        camp_average: Taux de victoire moyen du camp (%).
        performance: win_rate - camp_average.
    """

    camp: str
    games: int
    wins: int
    win_rate: float
    camp_average: float
    performance: float


@dataclass(frozen=True)
class WeightedPerformance:
    """Synthèse pondérée d'un ensemble de cellules."""

    games: int
    wins: int
    win_rate: float
    performance: float


@dataclass(frozen=True)
class PlayerCampPerformance:
    """Performance d'un joueur, toutes cellules conservées.

    Attributes:
        player_id: Identifiant canonique.
        total_games: Toutes les parties du joueur (y compris cellules < 3 parties).
        cells: Cellules conservées par camp.
    """

    player_id: str
    total_games: int
    cells: dict[str, CampCell] = field(default_factory=dict)

    @property
    def overall(self) -> WeightedPerformance | None:
        """Performance pondérée sur toutes les cellules conservées."""
        return _weighted(list(self.cells.values()))

    @property
    def solo(self) -> WeightedPerformance | None:
        """Performance pondérée sur les rôles spéciaux (ni Villageois ni Loup)."""
        return _weighted([c for c in self.cells.values() if c.camp not in (VILLAGEOIS, LOUP)])


def _weighted(cells: list[CampCell]) -> WeightedPerformance | None:
    games = sum(c.games for c in cells)
    if games == 0:
        return None
    wins = sum(c.wins for c in cells)
    return WeightedPerformance(
        games=games,
        wins=wins,
        win_rate=wins / games * 100,
        performance=sum(c.performance * c.games for c in cells) / games,
    )


def compute_camp_averages(df: pl.DataFrame) -> pl.DataFrame:
    """Première passe : taux de victoire moyen par camp détaillé.

    Args:
        df: Vue à plat des participations (entries_frame).

    Returns:
        DataFrame avec colonnes detailed_camp, camp_games, camp_average.
    """
    return df.group_by("detailed_camp").agg(
        pl.len().alias("camp_games"),
        (pl.col("victorious").cast(pl.Float64).mean() * 100).alias("camp_average"),
    )


def compute_camp_performance(games: Sequence[GameRecord]) -> dict[str, PlayerCampPerformance]:
    """Calcule la performance par camp de chaque joueur.

    Args:
        games: Parties normalisées d'une partition.

    Returns:
        Dict {player_id: PlayerCampPerformance}. Un joueur sans aucune
        cellule conservée a un dict cells vide.
    """
    df = entries_frame(games)
    if df.is_empty():
        return {}

    averages = compute_camp_averages(df)
    totals = df.group_by("player_id").agg(pl.len().alias("total_games"))

    cells_df = (
        df.group_by(["player_id", "detailed_camp"])
        .agg(
            pl.len().alias("games"),
            pl.col("victorious").sum().alias("wins"),
        )
        .join(averages, on="detailed_camp", how="left")
        .with_columns((pl.col("wins") / pl.col("games") * 100).alias("win_rate"))
        .with_columns((pl.col("win_rate") - pl.col("camp_average")).alias("performance"))
        .filter(pl.col("games") >= MIN_CAMP_GAMES)
        .sort(["player_id", "detailed_camp"])
    )

    out: dict[str, PlayerCampPerformance] = {}
    cells_by_player: dict[str, dict[str, CampCell]] = {}
    for row in cells_df.iter_rows(named=True):
        cells_by_player.setdefault(row["player_id"], {})[row["detailed_camp"]] = CampCell(
            camp=row["detailed_camp"],
            games=int(row["games"]),
            wins=int(row["wins"]),
            win_rate=float(row["win_rate"]),
            camp_average=float(row["camp_average"]),
            performance=float(row["performance"]),
        )

    for row in totals.sort("player_id").iter_rows(named=True):
        player_id = row["player_id"]
        out[player_id] = PlayerCampPerformance(
            player_id=player_id,
            total_games=int(row["total_games"]),
            cells=cells_by_player.get(player_id, {}),
        )
    return out
