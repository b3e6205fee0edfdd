"""Résolution de l'identité canonique des joueurs.

Un joueur peut apparaître sous plusieurs pseudos dans le journal de parties.
Ce module regroupe en un seul endroit l'ordre de résolution :

1. Steam ID (champ ID de la partie) : identifiant canonique direct,
   nom d'affichage lu dans joueurs.json si présent.
2. Pseudo retrouvé (sans casse ni espaces) dans joueurs.json :
   Steam ID du joueur s'il en a un, sinon son nom de référence.
3. Pseudo brut nettoyé : le premier orthographe rencontrée sert
   d'identifiant à toutes les variantes de casse.

La résolution ne lève jamais d'exception.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class JoueurInput(BaseModel):
    """Entrée de référence d'un joueur (joueurs.json)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    joueur: str = Field(..., alias="Joueur", min_length=1)
    steam_id: str | None = Field(default=None, alias="SteamID")

    @field_validator("steam_id", mode="before")
    @classmethod
    def parse_steam_id(cls, v: Any) -> str | None:
        """Les Steam ID numériques ou vides sont normalisés."""
        if v is None:
            return None
        v_str = str(v).strip()
        return v_str or None

    @field_validator("joueur", mode="before")
    @classmethod
    def parse_joueur(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class JoueursInput(BaseModel):
    """Contenu de joueurs.json."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    players: list[JoueurInput] = Field(default_factory=list, alias="Players")


@dataclass(frozen=True)
class ResolvedIdentity:
    """Identité canonique d'une participation.

    Attributes:
        player_id: Identifiant canonique.
        display_name: Nom d'affichage canonique.
        resolved: False si seul le pseudo brut a pu être utilisé.
    """

    player_id: str
    display_name: str
    resolved: bool = True


class PlayerIdentityResolver:
    """Résout un couple (Steam ID, pseudo) vers un identifiant canonique."""

    def __init__(self, joueurs: Iterable[JoueurInput] | None = None) -> None:
        self._name_by_steam_id: dict[str, str] = {}
        self._joueur_by_name: dict[str, JoueurInput] = {}
        self._fallback_ids: dict[str, str] = {}

        for joueur in joueurs or ():
            if joueur.steam_id:
                self._name_by_steam_id.setdefault(joueur.steam_id, joueur.joueur)
            self._joueur_by_name.setdefault(joueur.joueur.lower(), joueur)

    @classmethod
    def from_joueurs_data(cls, data: dict[str, Any] | None) -> PlayerIdentityResolver:
        """Construit un résolveur depuis le contenu brut de joueurs.json.

        Args:
            data: Dictionnaire {"Players": [...]} ou None.

        Returns:
            PlayerIdentityResolver prêt à l'emploi.
        """
        if not data:
            return cls()
        return cls(JoueursInput.model_validate(data).players)

    @property
    def known_players(self) -> int:
        return len(self._joueur_by_name)

    def resolve(self, steam_id: str | None, username: str) -> ResolvedIdentity:
        """Résout l'identité canonique d'une participation.

        Args:
            steam_id: Champ ID de la partie (peut être vide).
            username: Pseudo tel qu'écrit dans la partie.

        Returns:
            ResolvedIdentity (jamais None).
        """
        clean_name = (username or "").strip()
        clean_id = (steam_id or "").strip()

        if clean_id:
            return ResolvedIdentity(
                player_id=clean_id,
                display_name=self._name_by_steam_id.get(clean_id, clean_name or clean_id),
            )

        joueur = self._joueur_by_name.get(clean_name.lower())
        if joueur is not None:
            return ResolvedIdentity(
                player_id=joueur.steam_id or joueur.joueur,
                display_name=joueur.joueur,
            )

        fallback = self._fallback_ids.setdefault(clean_name.lower(), clean_name)
        logger.debug(f"Identité non résolue pour '{clean_name}', utilisation du pseudo brut")
        return ResolvedIdentity(player_id=fallback, display_name=fallback, resolved=False)
