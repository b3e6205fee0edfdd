"""Modèles dataclass des succès (achievements) produits par le moteur.

Ce module regroupe l'unité de sortie (Achievement) et les cibles de
navigation typées par catégorie. Chaque variante de navigation ne porte
que les champs dont la couche de présentation a besoin pour cette catégorie.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal


class Polarity(str, Enum):
    """Polarité d'un succès (affichée en vert ou en rouge)."""

    GOOD = "good"
    BAD = "bad"


class AchievementCategory(str, Enum):
    """Catégories de succès."""

    GENERAL = "general"
    PERFORMANCE = "performance"
    SERIES = "series"
    KILLS = "kills"
    HISTORY = "history"
    COMPARISON = "comparison"
    MAP = "map"
    VOTING = "voting"
    LOOT = "loot"
    COMMUNICATION = "communication"


# =============================================================================
# Cibles de navigation
# =============================================================================


@dataclass(frozen=True)
class GeneralNavigation:
    """Onglet et sous-onglet sans paramètre (vue générale par défaut)."""

    kind: Literal["general"] = field(default="general", init=False)
    tab: str = "players"
    sub_tab: str = "playersGeneral"

    def to_dict(self) -> dict[str, Any]:
        return {"tab": self.tab, "subTab": self.sub_tab}


@dataclass(frozen=True)
class MapNavigation:
    """Vue générale filtrée sur une carte."""

    map_filter: str
    kind: Literal["map"] = field(default="map", init=False)
    tab: str = "players"
    sub_tab: str = "playersGeneral"

    def to_dict(self) -> dict[str, Any]:
        return {"tab": self.tab, "subTab": self.sub_tab, "mapFilter": self.map_filter}


@dataclass(frozen=True)
class ChartNavigation:
    """Vue avec une section de graphique (tueurs, séries, performances...)."""

    tab: str
    sub_tab: str
    chart_section: str
    kind: Literal["chart"] = field(default="chart", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"tab": self.tab, "subTab": self.sub_tab, "chartSection": self.chart_section}


@dataclass(frozen=True)
class FilteredNavigation:
    """Vue de classement filtrée (minimum de parties, parties moddées)."""

    tab: str
    sub_tab: str
    min_games: int
    modded_only: bool = False
    view: str | None = None
    kind: Literal["filtered"] = field(default="filtered", init=False)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "tab": self.tab,
            "subTab": self.sub_tab,
            "filters": {"moddedGames": self.modded_only, "minGames": self.min_games},
        }
        if self.view:
            out["view"] = self.view
        return out


Navigation = GeneralNavigation | MapNavigation | ChartNavigation | FilteredNavigation


# =============================================================================
# Succès
# =============================================================================


@dataclass(frozen=True)
class Achievement:
    """Un fait classé ou comparatif sur un joueur.

    Attributes:
        id: Identifiant stable (métrique + variante du corpus).
        title: Titre lisible.
        description: Description avec la valeur et le seuil d'éligibilité.
        polarity: good ou bad, fixé par la définition de la métrique.
        category: Catégorie du succès.
        value: Valeur numérique de la métrique.
        navigation: Cible de navigation pour la présentation.
        rank: Rang du joueur (None pour les comparaisons).
        total_ranked: Taille de la population éligible (None pour les comparaisons).
        min_sample: Seuil d'éligibilité de la métrique.
    """

    id: str
    title: str
    description: str
    polarity: Polarity
    category: AchievementCategory
    value: float
    navigation: Navigation
    rank: int | None = None
    total_ranked: int | None = None
    min_sample: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Sérialise au format playerAchievements.json (clés camelCase)."""
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "type": self.polarity.value,
            "category": self.category.value,
        }
        if self.rank is not None:
            out["rank"] = self.rank
        out["value"] = self.value
        if self.total_ranked is not None:
            out["totalRanked"] = self.total_ranked
        out["minSample"] = self.min_sample
        out["redirectTo"] = self.navigation.to_dict()
        return out
