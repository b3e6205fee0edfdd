"""
Modèles de données pour les parties de Lycans.
(Data models for Lycans games)

HOW IT WORKS:
- RawGameInput / RawPlayerInput : Validation des données brutes de gameLog.json
- GameRecord / PlayerGameEntry : Entités métier immuables utilisées par l'analyse
- VoteEvent / DeathEvent : Événements rattachés à la participation d'un joueur

Ces modèles utilisent Pydantic v2 pour la validation des données avant
leur normalisation (identité canonique, ordre chronologique).
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lycans.data.domain.refdata import (
    NO_DEATH_TYPES,
    MainCamp,
    get_camp_from_role,
    get_main_camp_from_role,
)


def parse_optional_datetime(v: Any) -> datetime | None:
    """
    Parse une date ISO 8601 optionnelle.
    (Parse an optional ISO 8601 date)

    Les valeurs vides ou illisibles donnent None : les anciennes parties
    n'ont pas toujours ces champs. Les dates sans fuseau sont considérées
    en UTC, toutes les dates retournées sont comparables entre elles.
    """
    if v is None:
        return None
    if isinstance(v, datetime):
        dt = v
    elif isinstance(v, str) and v.strip():
        v_str = v.strip()
        if v_str.endswith("Z"):
            v_str = v_str[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(v_str)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_loose_bool(v: Any) -> bool:
    """
    Parse un booléen JSON tolérant ("true", "0", 1, null...).
    (Parse a loosely typed boolean)
    """
    if v is None:
        return False
    if isinstance(v, str):
        return v.strip().lower() in {"true", "1", "yes", "oui"}
    return bool(v)


def parse_vote_day(v: Any) -> int:
    """Numéro de meeting d'un vote, 0 si absent ou illisible."""
    if isinstance(v, bool):
        return 0
    try:
        day = int(v)
    except (TypeError, ValueError):
        return 0
    return max(day, 0)


def _strip_or_none(v: Any) -> str | None:
    if v is None:
        return None
    v_str = str(v).strip()
    return v_str or None


# =============================================================================
# Modèles d'entrée (gameLog.json)
# =============================================================================


class RawRoleChange(BaseModel):
    """Changement de rôle principal en cours de partie."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    new_main_role: str | None = Field(default=None, alias="NewMainRole")


class RawVoteInput(BaseModel):
    """Vote brut d'un joueur lors d'un meeting."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    day: int = Field(default=0, alias="Day")
    target: str | None = Field(default=None, alias="Target")
    date: datetime | None = Field(default=None, alias="Date")

    @field_validator("day", mode="before")
    @classmethod
    def parse_day(cls, v: Any) -> int:
        """Un Day absent ou invalide vaut 0 (hors de tout meeting)."""
        return parse_vote_day(v)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> datetime | None:
        """Parse l'horodatage du vote (absent des anciennes parties)."""
        return parse_optional_datetime(v)


class RawLegacyData(BaseModel):
    """Métadonnées des parties importées d'anciens formats."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    death_information_filled: bool = Field(default=True, alias="deathInformationFilled")


class RawPlayerInput(BaseModel):
    """
    Modèle de validation pour la participation brute d'un joueur.
    (Validation model for one raw player entry)

    Seuls Username, MainRoleInitial et Victorious sont obligatoires.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    player_id: str | None = Field(default=None, alias="ID")
    username: str = Field(..., alias="Username", min_length=1)
    main_role_initial: str = Field(..., alias="MainRoleInitial")
    main_role_changes: list[RawRoleChange] = Field(default_factory=list, alias="MainRoleChanges")
    power: str | None = Field(default=None, alias="Power")
    victorious: bool = Field(..., alias="Victorious")

    # Mort
    death_type: str | None = Field(default=None, alias="DeathType")
    death_timing: str | None = Field(default=None, alias="DeathTiming")
    killer_name: str | None = Field(default=None, alias="KillerName")
    death_date_irl: datetime | None = Field(default=None, alias="DeathDateIrl")

    # Votes et statistiques optionnelles (selon l'époque du corpus)
    votes: list[RawVoteInput] = Field(default_factory=list, alias="Votes")
    seconds_talked_outside_meeting: float | None = Field(
        default=None, alias="SecondsTalkedOutsideMeeting"
    )
    seconds_talked_during_meeting: float | None = Field(
        default=None, alias="SecondsTalkedDuringMeeting"
    )
    total_collected_loot: float | None = Field(default=None, alias="TotalCollectedLoot")

    @field_validator("player_id", "death_type", "death_timing", "killer_name", "power", mode="before")
    @classmethod
    def parse_optional_str(cls, v: Any) -> str | None:
        """Normalise les chaînes optionnelles (Steam ID numérique, vides)."""
        return _strip_or_none(v)

    @field_validator("username", mode="before")
    @classmethod
    def parse_username(cls, v: Any) -> Any:
        """Supprime les espaces autour du pseudo."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("main_role_changes", "votes", mode="before")
    @classmethod
    def parse_optional_list(cls, v: Any) -> Any:
        """Les listes absentes (null) deviennent vides."""
        return [] if v is None else v

    @field_validator("death_date_irl", mode="before")
    @classmethod
    def parse_death_date(cls, v: Any) -> datetime | None:
        return parse_optional_datetime(v)

    @property
    def final_role(self) -> str:
        """Dernier rôle principal connu (ou rôle initial)."""
        for change in reversed(self.main_role_changes):
            if change.new_main_role:
                return change.new_main_role
        return self.main_role_initial


class RawGameInput(BaseModel):
    """
    Modèle de validation pour une partie brute.
    (Validation model for one raw game)

    Gère les dates ISO avec ou sans fuseau et les anciens formats d'Id.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    game_id: str = Field(..., alias="Id", min_length=1)
    start_date: datetime | None = Field(default=None, alias="StartDate")
    end_date: datetime | None = Field(default=None, alias="EndDate")
    map_name: str | None = Field(default=None, alias="MapName")
    modded: bool = Field(default=False, alias="Modded")
    version: str | None = Field(default=None, alias="Version")
    legacy_data: RawLegacyData | None = Field(default=None, alias="LegacyData")
    player_stats: list[RawPlayerInput] = Field(..., alias="PlayerStats")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_datetime(cls, v: Any) -> datetime | None:
        """
        Parse les dates ISO 8601.
        (Parse ISO 8601 dates)
        """
        return parse_optional_datetime(v)

    @field_validator("modded", mode="before")
    @classmethod
    def parse_modded(cls, v: Any) -> bool:
        """Modded absent = partie non moddée, "false" reste faux."""
        return parse_loose_bool(v)

    @field_validator("map_name", "version", mode="before")
    @classmethod
    def parse_optional_str(cls, v: Any) -> str | None:
        return _strip_or_none(v)


# =============================================================================
# Entités métier immuables
# =============================================================================


class VoteKind(str, Enum):
    """Nature d'un vote lors d'un meeting."""

    VOTE = "vote"  # Vote contre un joueur
    SKIP = "skip"  # Vote "Passé"
    ABSTAIN = "abstain"  # Aucun choix


class VoteEvent(BaseModel):
    """
    Vote normalisé d'un joueur.
    (Normalized vote)

    cast_at est absent des anciennes parties : les statistiques de timing
    ignorent alors ce vote au lieu de le compter comme nul.
    """

    model_config = ConfigDict(frozen=True)

    meeting: int
    kind: VoteKind
    target_id: str | None = None
    target_name: str | None = None
    cast_at: datetime | None = None


class DeathEvent(BaseModel):
    """Mort d'un joueur (au plus une par partie)."""

    model_config = ConfigDict(frozen=True)

    death_type: str
    timing: str | None = None
    killer_id: str | None = None
    killer_name: str | None = None
    occurred_at: datetime | None = None


class PlayerGameEntry(BaseModel):
    """
    Participation normalisée d'un joueur à une partie.
    (Normalized player participation)

    player_id est l'identifiant canonique résolu une seule fois par le
    normaliseur, les agrégateurs ne le recalculent jamais.
    """

    model_config = ConfigDict(frozen=True)

    player_id: str
    player_name: str
    raw_username: str
    initial_role: str
    final_role: str
    power: str | None = None
    victorious: bool

    votes: tuple[VoteEvent, ...] = ()
    death: DeathEvent | None = None

    seconds_talked_outside: float | None = None
    seconds_talked_during: float | None = None
    total_collected_loot: float | None = None

    @property
    def camp(self) -> str:
        """Camp du rôle final (amoureux et sous-rôles villageois regroupés)."""
        return get_camp_from_role(self.final_role)

    @property
    def detailed_camp(self) -> str:
        """Camp du rôle final sans regrouper Chasseur et Alchimiste."""
        return get_camp_from_role(self.final_role, regroup_villagers=False)

    @property
    def faction(self) -> str:
        """Camp du rôle final avec Traître et Louveteau regroupés dans Loup."""
        return get_camp_from_role(self.final_role, regroup_wolf_sub_roles=True)

    @property
    def main_camp(self) -> MainCamp:
        """Grand camp du rôle initial (pour les séries)."""
        return get_main_camp_from_role(self.initial_role)

    @property
    def has_talk_data(self) -> bool:
        return bool(self.seconds_talked_outside) or bool(self.seconds_talked_during)

    def was_alive_at_meeting(self, meeting: int) -> bool:
        """Indique si le joueur était vivant au meeting donné.

        Séquence d'une journée : J1 -> N1 -> M1 -> J2 -> N2 -> M2.
        Une mort "M2" laisse le joueur présent au meeting 2, une mort
        "J2" ou "N2" l'en exclut.
        """
        if self.death is None or not self.death.timing:
            return True
        timing = self.death.timing.upper()
        try:
            day = int(timing[1:])
        except ValueError:
            return True
        if timing.startswith("M"):
            return meeting <= day
        if timing.startswith(("N", "J")):
            return meeting < day
        return True

    def vote_for_meeting(self, meeting: int) -> VoteEvent | None:
        """Retourne le vote du joueur pour un meeting (premier trouvé)."""
        for vote in self.votes:
            if vote.meeting == meeting:
                return vote
        return None


class GameRecord(BaseModel):
    """
    Partie normalisée.
    (Normalized game)

    displayed_id est le numéro chronologique global (1-based) dans le corpus
    normalisé, chrono_key la clé de tri (horodatage de l'Id, numéro final).
    """

    model_config = ConfigDict(frozen=True)

    game_id: str
    displayed_id: int
    chrono_key: tuple[str, int]
    start_date: datetime | None = None
    end_date: datetime | None = None
    map_name: str | None = None
    modded: bool = False
    version: str | None = None
    death_information_filled: bool = True
    entries: tuple[PlayerGameEntry, ...] = ()

    @property
    def max_meeting(self) -> int:
        """Numéro du dernier meeting ayant reçu un vote."""
        return max((v.meeting for e in self.entries for v in e.votes), default=0)

    def find_entry(self, player_id: str) -> PlayerGameEntry | None:
        """Retourne la participation d'un joueur à cette partie."""
        for entry in self.entries:
            if entry.player_id == player_id:
                return entry
        return None

    def duration_for(self, entry: PlayerGameEntry) -> float | None:
        """Durée de jeu d'un joueur en secondes (jusqu'à sa mort ou la fin).

        Returns:
            Durée en secondes, ou None si les dates manquent.
        """
        end = entry.death.occurred_at if entry.death and entry.death.occurred_at else None
        end = end or self.end_date
        if self.start_date is None or end is None:
            return None
        return max(0.0, (end - self.start_date).total_seconds())


def is_death_type(value: str | None) -> bool:
    """Vérifie qu'un DeathType correspond à une vraie mort."""
    return value is not None and value not in NO_DEATH_TYPES
