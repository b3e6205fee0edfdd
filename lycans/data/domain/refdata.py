"""Données de référence statiques pour les parties de Lycans.

Ce module fournit les tables officielles utilisées par tout le moteur :
- DeathType : Codes de type de mort du journal de parties
- MainCamp : Grands camps (Villageois, Loup, Autres)
- CAMP_RELATIONS : Table des camps opposés et des rôles solo

Ces tables ne sont jamais déduites du corpus : un nouveau rôle doit être
ajouté ici explicitement.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class DeathType(str, Enum):
    """Codes de type de mort tels qu'écrits dans le journal de parties."""

    SURVIVOR = "SURVIVOR"  # Survivant
    VOTED = "VOTED"  # Mort aux votes
    BY_WOLF = "BY_WOLF"  # Tué par Loup
    BY_WOLF_REZ = "BY_WOLF_REZ"
    BY_WOLF_LOVER = "BY_WOLF_LOVER"
    BY_ZOMBIE = "BY_ZOMBIE"
    BY_BEAST = "BY_BEAST"  # Tué par La Bête
    BY_AVATAR_CHAIN = "BY_AVATAR_CHAIN"
    BULLET = "BULLET"  # Tué par Chasseur
    BULLET_HUMAN = "BULLET_HUMAN"
    BULLET_WOLF = "BULLET_WOLF"
    BULLET_BOUNTYHUNTER = "BULLET_BOUNTYHUNTER"
    SHERIF = "SHERIF"
    OTHER_AGENT = "OTHER_AGENT"
    AVENGER = "AVENGER"
    SEER = "SEER"
    HANTED = "HANTED"
    ASSASSIN = "ASSASSIN"
    LOVER_DEATH = "LOVER_DEATH"
    LOVER_DEATH_OWN = "LOVER_DEATH_OWN"
    BOMB = "BOMB"
    CRUSHED = "CRUSHED"
    STARVATION = "STARVATION"
    STARVATION_AS_BEAST = "STARVATION_AS_BEAST"
    FALL = "FALL"
    UNKNOWN = "UNKNOWN"


class MainCamp(str, Enum):
    """Grands camps utilisés pour les séries."""

    VILLAGEOIS = "Villageois"
    LOUP = "Loup"
    AUTRES = "Autres"


# =============================================================================
# Rôles et camps
# =============================================================================

VILLAGEOIS: Final[str] = "Villageois"
LOUP: Final[str] = "Loup"
AMOUREUX: Final[str] = "Amoureux"
IDIOT_DU_VILLAGE: Final[str] = "Idiot du Village"
CHASSEUR: Final[str] = "Chasseur"

LOVER_ROLES: Final[frozenset[str]] = frozenset({"Amoureux Loup", "Amoureux Villageois"})
VILLAGER_SUB_ROLES: Final[frozenset[str]] = frozenset({"Chasseur", "Alchimiste"})
WOLF_SUB_ROLES: Final[frozenset[str]] = frozenset({"Traître", "Louveteau"})

# Rôles renommés quel que soit le regroupement demandé
ROLE_ALIASES: Final[dict[str, str]] = {
    "Zombie": "Vaudou",
}

# Marqueur de vote "passé" dans le journal
SKIP_VOTE_TARGET: Final[str] = "Passé"

# Valeurs de DeathType qui ne représentent pas une mort
NO_DEATH_TYPES: Final[frozenset[str]] = frozenset({"", "N/A", DeathType.SURVIVOR.value})

# Morts qui ne créditent pas de kill au joueur nommé dans KillerName
NON_KILL_DEATH_TYPES: Final[frozenset[str]] = frozenset(
    {
        "",
        DeathType.VOTED.value,
        DeathType.STARVATION.value,
        DeathType.FALL.value,
        DeathType.BY_AVATAR_CHAIN.value,
        DeathType.SURVIVOR.value,
        DeathType.UNKNOWN.value,
    }
)

# Morts causées par le tir du Chasseur
HUNTER_DEATH_TYPES: Final[frozenset[str]] = frozenset(
    {
        DeathType.BULLET.value,
        DeathType.BULLET_HUMAN.value,
        DeathType.BULLET_WOLF.value,
    }
)


# =============================================================================
# Table des relations entre camps
# =============================================================================


@dataclass(frozen=True)
class CampRelation:
    """Relation statique d'un camp avec les autres.

    Attributes:
        camp: Nom du camp (faction).
        opposing: Camps adverses de ce camp.
        solo: True si le camp n'appartient à aucune des deux grandes factions.
    """

    camp: str
    opposing: frozenset[str]
    solo: bool = False


_MAIN_FACTIONS: Final[frozenset[str]] = frozenset({VILLAGEOIS, LOUP})

SOLO_CAMPS: Final[frozenset[str]] = frozenset(
    {
        AMOUREUX,
        IDIOT_DU_VILLAGE,
        "Agent",
        "Espion",
        "Cannibale",
        "Scientifique",
        "La Bête",
        "Chasseur de primes",
        "Vaudou",
        "Avatar",
        "Vengeur",
    }
)

CAMP_RELATIONS: Final[dict[str, CampRelation]] = {
    VILLAGEOIS: CampRelation(VILLAGEOIS, frozenset({LOUP}) | SOLO_CAMPS),
    LOUP: CampRelation(LOUP, frozenset({VILLAGEOIS}) | SOLO_CAMPS),
    **{camp: CampRelation(camp, _MAIN_FACTIONS, solo=True) for camp in SOLO_CAMPS},
}


def get_camp_relation(camp: str) -> CampRelation:
    """Retourne la relation d'un camp.

    Un camp absent de la table est considéré comme un rôle solo opposé
    aux deux grandes factions.
    """
    relation = CAMP_RELATIONS.get(camp)
    if relation is None:
        return CampRelation(camp, _MAIN_FACTIONS, solo=True)
    return relation


def are_opposing_camps(camp_a: str, camp_b: str) -> bool:
    """Vérifie si deux camps sont adverses d'après la table statique.

    Args:
        camp_a: Premier camp.
        camp_b: Second camp.

    Returns:
        True si les camps s'affrontent. Deux rôles solo différents ne
        s'affrontent pas.
    """
    if camp_a == camp_b:
        return False
    return camp_b in get_camp_relation(camp_a).opposing and camp_a in get_camp_relation(camp_b).opposing


def is_solo_camp(camp: str) -> bool:
    """Vérifie si un camp est un rôle solo."""
    return get_camp_relation(camp).solo


# =============================================================================
# Conversion rôle → camp
# =============================================================================


def get_camp_from_role(
    role: str | None,
    *,
    regroup_lovers: bool = True,
    regroup_villagers: bool = True,
    regroup_wolf_sub_roles: bool = False,
) -> str:
    """Retourne le camp associé à un rôle.

    Args:
        role: Nom du rôle (vide = Villageois).
        regroup_lovers: Regroupe "Amoureux Loup" et "Amoureux Villageois" en "Amoureux".
        regroup_villagers: Regroupe Chasseur et Alchimiste dans Villageois.
        regroup_wolf_sub_roles: Regroupe Traître et Louveteau dans Loup.

    Returns:
        Nom du camp. Les rôles spéciaux gardent leur propre nom.
    """
    if not role:
        return VILLAGEOIS
    if role in LOVER_ROLES:
        return AMOUREUX if regroup_lovers else role
    if role in VILLAGER_SUB_ROLES:
        return VILLAGEOIS if regroup_villagers else role
    if role in ROLE_ALIASES:
        return ROLE_ALIASES[role]
    if role in WOLF_SUB_ROLES:
        return LOUP if regroup_wolf_sub_roles else role
    return role


def get_main_camp_from_role(role: str | None) -> MainCamp:
    """Retourne le grand camp (Villageois, Loup ou Autres) d'un rôle."""
    camp = get_camp_from_role(role, regroup_wolf_sub_roles=True)
    if camp == LOUP:
        return MainCamp.LOUP
    if camp == VILLAGEOIS:
        return MainCamp.VILLAGEOIS
    return MainCamp.AUTRES
