"""Participation et taux de victoire, globaux et par carte."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import polars as pl

from lycans.data.domain.models.game import GameRecord
from lycans.data.normalizer import entries_frame

# Cartes classées (nom dans le journal → clé de métrique)
RANKED_MAPS = {
    "Village": "village",
    "Château": "chateau",
}


@dataclass(frozen=True)
class ParticipationRecord:
    """Participation d'un joueur.

    Attributes:
        player_id: Identifiant canonique.
        player_name: Nom d'affichage.
        games: Parties jouées.
        wins: Parties gagnées.
        win_rate: Taux de victoire en %, arrondi à 0.1 (tel qu'affiché).
    """

    player_id: str
    player_name: str
    games: int
    wins: int
    win_rate: float


@dataclass(frozen=True)
class MapRecord:
    """Taux de victoire d'un joueur sur une carte."""

    player_id: str
    map_name: str
    games: int
    wins: int
    win_rate: float


def _win_rate_expr(rounded: bool) -> pl.Expr:
    rate = pl.when(pl.col("games") > 0).then(pl.col("wins") / pl.col("games") * 100).otherwise(0.0)
    return (rate.round(1) if rounded else rate).alias("win_rate")


def compute_participation(games: Sequence[GameRecord]) -> dict[str, ParticipationRecord]:
    """Calcule parties, victoires et taux de victoire par joueur.

    Args:
        games: Parties normalisées d'une partition.

    Returns:
        Dict {player_id: ParticipationRecord}, vide si aucune partie.
    """
    df = entries_frame(games)
    if df.is_empty():
        return {}

    agg = (
        df.group_by("player_id")
        .agg(
            pl.col("player_name").first().alias("player_name"),
            pl.len().alias("games"),
            pl.col("victorious").sum().alias("wins"),
        )
        .with_columns(_win_rate_expr(rounded=True))
        .sort("player_id")
    )

    return {
        row["player_id"]: ParticipationRecord(
            player_id=row["player_id"],
            player_name=row["player_name"],
            games=int(row["games"]),
            wins=int(row["wins"]),
            win_rate=float(row["win_rate"]),
        )
        for row in agg.iter_rows(named=True)
    }


def compute_map_win_rates(games: Sequence[GameRecord]) -> dict[str, dict[str, MapRecord]]:
    """Calcule le taux de victoire par joueur et par carte.

    Les parties sans carte sont ignorées.

    Returns:
        Dict {player_id: {map_name: MapRecord}}.
    """
    df = entries_frame(games)
    if df.is_empty():
        return {}

    d = df.with_columns(pl.col("map_name").fill_null("").str.strip_chars())
    d = d.filter(pl.col("map_name") != "")
    if d.is_empty():
        return {}

    agg = (
        d.group_by(["player_id", "map_name"])
        .agg(
            pl.len().alias("games"),
            pl.col("victorious").sum().alias("wins"),
        )
        .with_columns(_win_rate_expr(rounded=False))
        .sort(["player_id", "map_name"])
    )

    out: dict[str, dict[str, MapRecord]] = {}
    for row in agg.iter_rows(named=True):
        out.setdefault(row["player_id"], {})[row["map_name"]] = MapRecord(
            player_id=row["player_id"],
            map_name=row["map_name"],
            games=int(row["games"]),
            wins=int(row["wins"]),
            win_rate=float(row["win_rate"]),
        )
    return out
