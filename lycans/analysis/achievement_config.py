"""Configuration centralisée des succès (achievements).

Ce module définit toutes les constantes et la table des métriques pour
assurer la cohérence entre les agrégateurs, le classement et l'assemblage :
- seuils d'éligibilité (min. parties, min. meetings)
- constantes des comparaisons (coéquipiers, face-à-face)
- titres, descriptions et cibles de navigation par métrique

Les gabarits de texte utilisent str.format avec des champs nommés
({rank}, {ordinal}, {value}, {suffix}, {min_sample}...). Le seuil reste une
donnée structurée (min_sample) injectée dans le texte, il n'est jamais
relu depuis la description.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from lycans.data.domain.models.achievement import (
    AchievementCategory,
    ChartNavigation,
    FilteredNavigation,
    GeneralNavigation,
    MapNavigation,
    Navigation,
    Polarity,
)

# =============================================================================
# Variantes du corpus
# =============================================================================

VARIANT_ALL = "all"
VARIANT_MODDED = "modded"

VARIANT_SUFFIXES = {
    VARIANT_ALL: "",
    VARIANT_MODDED: " (Parties Moddées)",
}


# =============================================================================
# Seuils et constantes
# =============================================================================

# Un couple joueur/camp n'est gardé qu'à partir de ce nombre de parties
MIN_CAMP_GAMES = 3

# Relations entre joueurs
RELATION_CANDIDATE_MIN_GAMES = 30  # Parties minimum de l'autre joueur dans la partition
RELATION_MIN_GAMES_TOGETHER = 15  # Parties communes minimum (même camp ou camps opposés)
WORST_MATE_MAX_RATE = 60.0  # Pire coéquipier seulement sous ce taux
WORST_MATCHUP_MAX_RATE = 40.0  # Pire face-à-face seulement sous ce taux

# Score d'agressivité = vote - 0.5 * passé - 0.7 * abstention
AGGRESSIVENESS_SKIP_WEIGHT = 0.5
AGGRESSIVENESS_ABSTENTION_WEIGHT = 0.7

# Part des premiers votants comptés comme "votes rapides"
EARLY_VOTE_SHARE = 0.33

# Normalisation des taux horaires (loot, temps de parole)
SECONDS_PER_HOUR = 3600

# Seul le podium reçoit le succès de temps de parole
TALK_PODIUM_SIZE = 3
TALK_PODIUM_LABELS = {1: "Champion", 2: "Vice-champion", 3: "3ème place"}


# =============================================================================
# Définition d'une métrique
# =============================================================================


@dataclass(frozen=True)
class MetricDefinition:
    """Définition statique d'une métrique classée.

    Attributes:
        stem: Racine de l'identifiant (l'id final est f"{stem}-{variant}").
        category: Catégorie du succès.
        polarity: good ou bad.
        min_sample: Seuil d'éligibilité (parties, meetings ou longueur de série).
        title: Gabarit du titre.
        description: Gabarit de la description.
        navigation: Cible de navigation.
        descending: False si la plus petite valeur est la meilleure.
        shared_ranks: True pour donner le même rang aux valeurs égales.
        feminine: True pour l'ordinal "1ère".
        value_digits: Arrondi de la valeur exportée (None = brute).
        max_rank: Rang maximum récompensé (None = tous les éligibles).
    """

    stem: str
    category: AchievementCategory
    polarity: Polarity
    min_sample: int
    title: str
    description: str
    navigation: Navigation
    descending: bool = True
    shared_ranks: bool = False
    feminine: bool = False
    value_digits: int | None = None
    max_rank: int | None = None

    def achievement_id(self, variant: str) -> str:
        return f"{self.stem}-{variant}"

    def navigation_for(self, variant: str) -> Navigation:
        """Cible de navigation, avec les filtres (seuil, moddé) des vues filtrées."""
        if isinstance(self.navigation, FilteredNavigation):
            return replace(
                self.navigation, min_games=self.min_sample, modded_only=variant == VARIANT_MODDED
            )
        return self.navigation


def ordinal(rank: int, *, feminine: bool = False) -> str:
    """Retourne l'ordinal français d'un rang (1er, 1ère, 2ème...)."""
    if rank == 1:
        return "1ère" if feminine else "1er"
    return f"{rank}ème"


# =============================================================================
# Table des métriques
# =============================================================================

_GOOD = Polarity.GOOD
_BAD = Polarity.BAD


def _deaths(section: str) -> ChartNavigation:
    return ChartNavigation(tab="rankings", sub_tab="deathStats", chart_section=section)


def _camps(section: str) -> ChartNavigation:
    return ChartNavigation(tab="players", sub_tab="campPerformance", chart_section=section)


def _series(section: str) -> ChartNavigation:
    return ChartNavigation(tab="players", sub_tab="series", chart_section=section)


_VOTING_NAV = GeneralNavigation(sub_tab="votingStats")

_METRICS: tuple[MetricDefinition, ...] = (
    # --- Général ---
    MetricDefinition(
        stem="participation",
        category=AchievementCategory.GENERAL,
        polarity=_GOOD,
        min_sample=0,
        title="📊 Rang {rank} Participations{suffix}",
        description="{ordinal} joueur le plus actif avec {value} parties",
        navigation=GeneralNavigation(),
    ),
    MetricDefinition(
        stem="winrate-10",
        category=AchievementCategory.GENERAL,
        polarity=_GOOD,
        min_sample=10,
        title="🏆 Rang {rank} Taux de Victoire{suffix}",
        description="{ordinal} meilleur taux de victoire: {value:.1f}% (min. {min_sample} parties)",
        navigation=GeneralNavigation(),
    ),
    MetricDefinition(
        stem="winrate-50",
        category=AchievementCategory.GENERAL,
        polarity=_GOOD,
        min_sample=50,
        title="🌟 Rang {rank} Taux de Victoire Expert{suffix}",
        description="{ordinal} meilleur taux de victoire: {value:.1f}% (min. {min_sample} parties)",
        navigation=GeneralNavigation(),
    ),
    # --- Cartes ---
    MetricDefinition(
        stem="village-winrate",
        category=AchievementCategory.MAP,
        polarity=_GOOD,
        min_sample=10,
        title="🏘️ Rang {rank} Village{suffix}",
        description=(
            "{ordinal} meilleur taux de victoire sur Village: {value:.1f}% "
            "({games} parties, min. {min_sample})"
        ),
        navigation=MapNavigation(map_filter="village"),
    ),
    MetricDefinition(
        stem="chateau-winrate",
        category=AchievementCategory.MAP,
        polarity=_GOOD,
        min_sample=10,
        title="🏰 Rang {rank} Château{suffix}",
        description=(
            "{ordinal} meilleur taux de victoire sur Château: {value:.1f}% "
            "({games} parties, min. {min_sample})"
        ),
        navigation=MapNavigation(map_filter="chateau"),
    ),
    # --- Éliminations ---
    MetricDefinition(
        stem="top-killer",
        category=AchievementCategory.KILLS,
        polarity=_GOOD,
        min_sample=1,
        title="⚔️ Top {rank} Tueur{suffix}",
        description="{ordinal} plus grand tueur avec {value} éliminations",
        navigation=_deaths("killers"),
        shared_ranks=True,
    ),
    MetricDefinition(
        stem="top-killer-average",
        category=AchievementCategory.KILLS,
        polarity=_GOOD,
        min_sample=20,
        title="🎯 Top {rank} Tueur Efficace{suffix}",
        description=(
            "{ordinal} meilleur ratio d'éliminations: {value:.2f} par partie "
            "({games} parties, min. {min_sample})"
        ),
        navigation=_deaths("killers-average"),
        shared_ranks=True,
        value_digits=2,
    ),
    MetricDefinition(
        stem="top-survivor",
        category=AchievementCategory.KILLS,
        polarity=_GOOD,
        min_sample=25,
        title="🛡️ Top {rank} Survivant{suffix}",
        description="{ordinal} meilleur taux de survie: {value:.2f} morts par partie (min. {min_sample} parties)",
        navigation=_deaths("survivors-average"),
        descending=False,
        shared_ranks=True,
        value_digits=2,
    ),
    MetricDefinition(
        stem="top-killed",
        category=AchievementCategory.KILLS,
        polarity=_BAD,
        min_sample=1,
        title="💀 Top {rank} Victime{suffix}",
        description="{ordinal} joueur le plus éliminé avec {value} morts",
        navigation=_deaths("deaths"),
        shared_ranks=True,
        feminine=True,
    ),
    MetricDefinition(
        stem="top-good-hunter",
        category=AchievementCategory.KILLS,
        polarity=_GOOD,
        min_sample=5,
        title="🎯 Top {rank} Bon Chasseur{suffix}",
        description=(
            "{ordinal} meilleur chasseur: {value:.2f} éliminations non-Villageois "
            "par partie en Chasseur ({games} parties, min. {min_sample})"
        ),
        navigation=_deaths("hunters-good"),
        shared_ranks=True,
        value_digits=2,
    ),
    MetricDefinition(
        stem="top-bad-hunter",
        category=AchievementCategory.KILLS,
        polarity=_BAD,
        min_sample=5,
        title="😱 Top {rank} Mauvais Chasseur{suffix}",
        description=(
            "{ordinal} pire chasseur: {value:.2f} éliminations Villageois "
            "par partie en Chasseur ({games} parties, min. {min_sample})"
        ),
        navigation=_deaths("hunters-bad"),
        shared_ranks=True,
        value_digits=2,
    ),
    # --- Performance par camp ---
    MetricDefinition(
        stem="hall-of-fame",
        category=AchievementCategory.PERFORMANCE,
        polarity=_GOOD,
        min_sample=25,
        title="🏆 Top {rank} Hall of Fame{suffix}",
        description="{ordinal} meilleur overperformer: {value:+.1f}% ({games} parties, min. {min_sample})",
        navigation=_camps("hall-of-fame"),
    ),
    MetricDefinition(
        stem="villageois-performance",
        category=AchievementCategory.PERFORMANCE,
        polarity=_GOOD,
        min_sample=25,
        title="🏘️ Top {rank} Villageois{suffix}",
        description=(
            "{ordinal} meilleur Villageois: {win_rate:.1f}% ({performance:+.1f}%) "
            "({games} parties, min. {min_sample})"
        ),
        navigation=_camps("camp-villageois"),
    ),
    MetricDefinition(
        stem="loup-performance",
        category=AchievementCategory.PERFORMANCE,
        polarity=_GOOD,
        min_sample=10,
        title="🐺 Top {rank} Loup{suffix}",
        description=(
            "{ordinal} meilleur Loup: {win_rate:.1f}% ({performance:+.1f}%) ({games} parties, min. {min_sample})"
        ),
        navigation=_camps("camp-loup"),
    ),
    MetricDefinition(
        stem="idiot-performance",
        category=AchievementCategory.PERFORMANCE,
        polarity=_GOOD,
        min_sample=5,
        title="🤡 Top {rank} Idiot du Village{suffix}",
        description=(
            "{ordinal} meilleur Idiot du Village: {win_rate:.1f}% ({performance:+.1f}%) "
            "({games} parties, min. {min_sample})"
        ),
        navigation=_camps("camp-idiot"),
    ),
    MetricDefinition(
        stem="amoureux-performance",
        category=AchievementCategory.PERFORMANCE,
        polarity=_GOOD,
        min_sample=5,
        title="💕 Top {rank} Amoureux{suffix}",
        description=(
            "{ordinal} meilleur Amoureux: {win_rate:.1f}% ({performance:+.1f}%) ({games} parties, min. {min_sample})"
        ),
        navigation=_camps("camp-amoureux"),
    ),
    MetricDefinition(
        stem="solo-performance",
        category=AchievementCategory.PERFORMANCE,
        polarity=_GOOD,
        min_sample=10,
        title="⭐ Top {rank} Rôles Spéciaux{suffix}",
        description=(
            "{ordinal} meilleur joueur rôles spéciaux: {win_rate:.1f}% ({performance:+.1f}%) "
            "({games} parties, min. {min_sample})"
        ),
        navigation=_camps("solo-roles"),
    ),
    # --- Séries ---
    MetricDefinition(
        stem="villageois-series",
        category=AchievementCategory.SERIES,
        polarity=_GOOD,
        min_sample=3,
        title="🏘️ Top {rank} Série Villageois{suffix}",
        description="{ordinal} plus longue série Villageois: {value} parties consécutives (min. {min_sample})",
        navigation=_series("villageois-series"),
        feminine=True,
    ),
    MetricDefinition(
        stem="loup-series",
        category=AchievementCategory.SERIES,
        polarity=_GOOD,
        min_sample=2,
        title="🐺 Top {rank} Série Loup{suffix}",
        description="{ordinal} plus longue série Loup: {value} parties consécutives (min. {min_sample})",
        navigation=_series("loup-series"),
        feminine=True,
    ),
    MetricDefinition(
        stem="win-series",
        category=AchievementCategory.SERIES,
        polarity=_GOOD,
        min_sample=3,
        title="🏆 Top {rank} Série de Victoires{suffix}",
        description="{ordinal} plus longue série de victoires: {value} parties consécutives (min. {min_sample})",
        navigation=_series("win-series"),
        feminine=True,
    ),
    MetricDefinition(
        stem="loss-series",
        category=AchievementCategory.SERIES,
        polarity=_BAD,
        min_sample=3,
        title="💀 Top {rank} Série de Défaites{suffix}",
        description="{ordinal} plus longue série de défaites: {value} parties consécutives (min. {min_sample})",
        navigation=_series("loss-series"),
        feminine=True,
    ),
    # --- Votes ---
    MetricDefinition(
        stem="aggressiveness",
        category=AchievementCategory.VOTING,
        polarity=_GOOD,
        min_sample=25,
        title="🚨 Rang {rank} Score d'Agressivité aux votes{suffix}",
        description="{ordinal} score d'agressivité: {value:.1f} (min. {min_sample} meetings)",
        navigation=_VOTING_NAV,
    ),
    MetricDefinition(
        stem="voting-accuracy",
        category=AchievementCategory.VOTING,
        polarity=_GOOD,
        min_sample=25,
        title="🎯 Rang {rank} Précision des Votes{suffix}",
        description=(
            "{ordinal} précision des votes contre le camp adverse: {value:.1f}% (min. {min_sample} meetings)"
        ),
        navigation=_VOTING_NAV,
    ),
    # --- Récolte ---
    MetricDefinition(
        stem="loot-rate-25",
        category=AchievementCategory.LOOT,
        polarity=_GOOD,
        min_sample=25,
        title="💎 Rang {rank} Taux de Récolte{suffix}",
        description="{ordinal} meilleur taux de récolte: {value:.1f} par 60 min (min. {min_sample} parties)",
        navigation=FilteredNavigation(
            tab="rankings", sub_tab="lootStats", min_games=25, view="normalized"
        ),
    ),
    # --- Communication ---
    MetricDefinition(
        stem="most-talkative",
        category=AchievementCategory.COMMUNICATION,
        polarity=_GOOD,
        min_sample=20,
        title="🎤 Bavard N°{rank}{suffix}",
        description="{podium} du temps de parole total avec {minutes}m {seconds}s par heure de jeu",
        navigation=FilteredNavigation(tab="playerStats", sub_tab="talkingTime", min_games=20),
        max_rank=TALK_PODIUM_SIZE,
    ),
)

METRIC_DEFINITIONS: dict[str, MetricDefinition] = {m.stem: m for m in _METRICS}


# =============================================================================
# Comparaisons (succès sans rang)
# =============================================================================


@dataclass(frozen=True)
class ComparisonDefinition:
    """Définition d'un succès de comparaison entre deux joueurs."""

    stem: str
    polarity: Polarity
    title: str
    description: str
    navigation: ChartNavigation


_SAME_CAMP_NAV = ChartNavigation(tab="rankings", sub_tab="comparison", chart_section="same-camp-games")
_OPPOSING_NAV = ChartNavigation(tab="rankings", sub_tab="comparison", chart_section="opposing-games")

COMPARISON_DEFINITIONS: dict[str, ComparisonDefinition] = {
    "best-mate": ComparisonDefinition(
        stem="best-mate",
        polarity=_GOOD,
        title="🤝 Meilleur Coéquipier{suffix}",
        description=(
            "Meilleur duo avec {name}: {rate:.1f}% de victoires en équipe "
            "({wins}/{games} parties, min. {min_sample})"
        ),
        navigation=_SAME_CAMP_NAV,
    ),
    "worst-mate": ComparisonDefinition(
        stem="worst-mate",
        polarity=_BAD,
        title="💔 Pire Coéquipier{suffix}",
        description=(
            "Duo le moins efficace avec {name}: {rate:.1f}% de victoires en équipe "
            "({wins}/{games} parties, min. {min_sample})"
        ),
        navigation=_SAME_CAMP_NAV,
    ),
    "best-matchup": ComparisonDefinition(
        stem="best-matchup",
        polarity=_GOOD,
        title="⚔️ Meilleur Face-à-Face{suffix}",
        description=(
            "Domination contre {name}: {rate:.1f}% de victoires en affrontement "
            "({wins}/{games} parties, min. {min_sample})"
        ),
        navigation=_OPPOSING_NAV,
    ),
    "worst-matchup": ComparisonDefinition(
        stem="worst-matchup",
        polarity=_BAD,
        title="💀 Pire Face-à-Face{suffix}",
        description=(
            "Faiblesse contre {name}: {rate:.1f}% de victoires en affrontement "
            "({wins}/{games} parties, min. {min_sample})"
        ),
        navigation=_OPPOSING_NAV,
    ),
}
