"""Module d'analyse des séries (streaks) avec Polars.

Quatre types de séries par joueur, sur ses parties triées chronologiquement :
- villageois : parties consécutives dans le grand camp Villageois
- loup : parties consécutives dans le grand camp Loup
- win / loss : victoires ou défaites consécutives

Le grand camp est celui du rôle initial ; un rôle "Autres" casse les
deux séries de camp. Seule la plus longue série est conservée, et une
série de même longueur remplace la précédente (la plus récente gagne).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

import polars as pl

from lycans.data.domain.models.game import GameRecord
from lycans.data.domain.refdata import MainCamp
from lycans.data.normalizer import entries_frame


class SeriesKind(str, Enum):
    """Types de séries suivies."""

    VILLAGEOIS = "villageois"
    LOUP = "loup"
    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class StreakRecord:
    """Plus longue série d'un joueur pour un type donné.

    Attributes:
        kind: Type de série.
        player_id: Identifiant canonique.
        length: Nombre de parties consécutives.
        start_game: Numéro (displayed_id) de la première partie.
        end_game: Numéro de la dernière partie.
        start_date: Date de la première partie (jj/mm/aaaa).
        end_date: Date de la dernière partie.
        game_ids: Numéros de toutes les parties de la série.
        camp_counts: Parties par grand camp (séries win/loss uniquement).
        is_ongoing: True si la série est toujours en cours en fin de corpus.
    """

    kind: SeriesKind
    player_id: str
    length: int
    start_game: int
    end_game: int
    start_date: str | None = None
    end_date: str | None = None
    game_ids: tuple[int, ...] = ()
    camp_counts: dict[str, int] = field(default_factory=dict)
    is_ongoing: bool = False


# Filtre de série par type (sur la colonne "key" des séries détectées)
_KIND_FILTERS: dict[SeriesKind, tuple[str, pl.Expr]] = {
    SeriesKind.VILLAGEOIS: ("main_camp", pl.col("key") == MainCamp.VILLAGEOIS.value),
    SeriesKind.LOUP: ("main_camp", pl.col("key") == MainCamp.LOUP.value),
    SeriesKind.WIN: ("victorious", pl.col("key")),
    SeriesKind.LOSS: ("victorious", ~pl.col("key")),
}


def _detect_runs(df: pl.DataFrame, key: str) -> pl.DataFrame:
    """Découpe les parties de chaque joueur en séries de valeur constante.

    Args:
        df: Participations triées par joueur puis par displayed_id.
        key: Colonne dont les changements ouvrent une nouvelle série.

    Returns:
        Une ligne par série : key, length, start/end, dates, game_ids, camps.
    """
    runs = df.with_columns(
        (pl.col(key) != pl.col(key).shift(1).over("player_id")).fill_null(True).alias("_new_run")
    )
    runs = runs.with_columns(pl.col("_new_run").cum_sum().alias("_run_id"))

    return runs.group_by(["player_id", "_run_id"]).agg(
        pl.col(key).first().alias("key"),
        pl.len().alias("length"),
        pl.col("displayed_id").first().alias("start_game"),
        pl.col("displayed_id").last().alias("end_game"),
        pl.col("game_date").first().alias("start_date"),
        pl.col("game_date").last().alias("end_date"),
        pl.col("displayed_id").alias("game_ids"),
        pl.col("main_camp").alias("camps"),
    )


def _longest_runs(runs: pl.DataFrame) -> pl.DataFrame:
    """Garde la plus longue série par joueur, la plus récente en cas d'égalité."""
    return (
        runs.sort(["player_id", "length", "end_game"])
        .group_by("player_id", maintain_order=True)
        .last()
    )


def compute_series(games: Sequence[GameRecord]) -> dict[str, dict[SeriesKind, StreakRecord]]:
    """Calcule la plus longue série de chaque type pour chaque joueur.

    Args:
        games: Parties normalisées d'une partition.

    Returns:
        Dict {player_id: {SeriesKind: StreakRecord}}. Un type sans
        aucune série pour le joueur est absent.
    """
    df = entries_frame(games)
    if df.is_empty():
        return {}

    df = df.sort(["player_id", "displayed_id"]).with_columns(
        pl.col("start_date")
        .str.slice(0, 10)
        .str.to_date("%Y-%m-%d", strict=False)
        .dt.strftime("%d/%m/%Y")
        .alias("game_date")
    )
    last_games = df.group_by("player_id").agg(pl.col("displayed_id").max().alias("last_game"))

    runs_by_key = {key: _detect_runs(df, key) for key in ("main_camp", "victorious")}

    out: dict[str, dict[SeriesKind, StreakRecord]] = {}
    for kind, (key, kind_filter) in _KIND_FILTERS.items():
        longest = _longest_runs(runs_by_key[key].filter(kind_filter))
        longest = longest.join(last_games, on="player_id", how="left")

        for row in longest.iter_rows(named=True):
            camp_counts = dict(Counter(row["camps"])) if key == "victorious" else {}
            out.setdefault(row["player_id"], {})[kind] = StreakRecord(
                kind=kind,
                player_id=row["player_id"],
                length=int(row["length"]),
                start_game=int(row["start_game"]),
                end_game=int(row["end_game"]),
                start_date=row["start_date"],
                end_date=row["end_date"],
                game_ids=tuple(int(g) for g in row["game_ids"]),
                camp_counts=camp_counts,
                is_ongoing=row["end_game"] == row["last_game"],
            )

    return out
