"""Lecture et écriture des fichiers JSON du site de statistiques.

- gameLog.json : {ModVersion, TotalRecords, GameStats: [...]}
- joueurs.json : {TotalRecords, Players: [{Joueur, SteamID, ...}]}
- playerAchievements.json : résultat du précalcul des succès

Ce module est le seul à toucher au disque, le moteur de calcul reçoit
un corpus déjà chargé.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from lycans.data.identity import PlayerIdentityResolver

logger = logging.getLogger(__name__)


class CorpusError(ValueError):
    """Fichier de données illisible ou de structure invalide."""


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise CorpusError(f"Fichier introuvable : {path}") from exc
    except json.JSONDecodeError as exc:
        raise CorpusError(f"JSON invalide dans {path} : {exc}") from exc
    except UnicodeDecodeError as exc:
        raise CorpusError(f"Encodage invalide dans {path} (UTF-8 attendu) : {exc}") from exc
    except OSError as exc:
        raise CorpusError(f"Lecture impossible de {path} : {exc}") from exc


def load_game_log(path: str | Path) -> list[dict[str, Any]]:
    """Charge les parties de gameLog.json.

    Args:
        path: Chemin du fichier gameLog.json.

    Returns:
        Liste brute des parties (GameStats).

    Raises:
        CorpusError: Si le fichier est absent, illisible ou sans liste GameStats.
    """
    path = Path(path)
    data = _read_json(path)

    games = data.get("GameStats") if isinstance(data, dict) else data
    if not isinstance(games, list):
        raise CorpusError(f"{path} : GameStats doit être une liste de parties")

    total = data.get("TotalRecords") if isinstance(data, dict) else None
    if isinstance(total, int) and total != len(games):
        logger.warning(f"{path.name} : TotalRecords={total} mais {len(games)} parties présentes")

    logger.info(f"{len(games)} parties chargées depuis {path}")
    return games


def load_identity_resolver(path: str | Path | None) -> PlayerIdentityResolver:
    """Construit le résolveur d'identité depuis joueurs.json.

    Un fichier absent donne un résolveur sans référentiel (Steam ID puis
    pseudo brut), ce n'est pas une erreur.

    Args:
        path: Chemin de joueurs.json (ou None).

    Returns:
        PlayerIdentityResolver.

    Raises:
        CorpusError: Si le fichier existe mais est invalide.
    """
    if path is None or not Path(path).exists():
        logger.info("Pas de référentiel joueurs, identité résolue par Steam ID / pseudo")
        return PlayerIdentityResolver()

    data = _read_json(Path(path))
    try:
        resolver = PlayerIdentityResolver.from_joueurs_data(data if isinstance(data, dict) else None)
    except ValidationError as exc:
        raise CorpusError(f"{path} : référentiel joueurs invalide ({exc.error_count()} erreur(s))") from exc

    logger.info(f"{resolver.known_players} joueurs de référence chargés depuis {path}")
    return resolver


def write_json(payload: dict[str, Any], path: str | Path) -> Path:
    """Écrit un document JSON (UTF-8, indenté) en créant le dossier parent.

    Returns:
        Chemin écrit.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return path
