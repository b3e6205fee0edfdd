"""Gestion centralisée des chemins pour le moteur de succès Lycans.

Ce module définit tous les chemins utilisés par le précalcul :
- data/gameLog.json : Journal des parties (source principale)
- data/joueurs.json : Référentiel des joueurs (Steam ID → nom canonique)
- data/playerAchievements.json : Succès précalculés
- data/discord/ : Même structure pour la source Discord
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# Chemins racine
# =============================================================================


def _find_repo_root() -> Path:
    """Trouve la racine du projet (contient pyproject.toml ou .git)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent

    # Fallback : variable d'environnement ou CWD
    if env_root := os.environ.get("LYCANS_ROOT"):
        return Path(env_root)

    return Path.cwd()


# Racine du projet
REPO_ROOT: Path = _find_repo_root()


def get_data_dir() -> Path:
    """Retourne le dossier des données (override via LYCANS_DATA_DIR)."""
    override = os.environ.get("LYCANS_DATA_DIR")
    if isinstance(override, str) and override.strip():
        return Path(override.strip())
    return REPO_ROOT / "data"


# Dossier des données
DATA_DIR: Path = get_data_dir()


# =============================================================================
# Constantes de noms de fichiers
# =============================================================================

GAME_LOG_FILENAME = "gameLog.json"

JOUEURS_FILENAME = "joueurs.json"

ACHIEVEMENTS_FILENAME = "playerAchievements.json"


# =============================================================================
# Sources de données
# =============================================================================


@dataclass(frozen=True)
class DataSource:
    """Source de données d'une communauté.

    Attributes:
        key: Clé courte utilisée en ligne de commande.
        name: Nom lisible.
        subdir: Sous-dossier relatif au dossier des données.
    """

    key: str
    name: str
    subdir: str = ""


DATA_SOURCES: dict[str, DataSource] = {
    "main": DataSource("main", "Main Team"),
    "discord": DataSource("discord", "Discord Team", "discord"),
}


def get_source_dir(source: str = "main", data_dir: Path | None = None) -> Path:
    """Retourne le dossier d'une source de données.

    Args:
        source: Clé de la source ("main", "discord").
        data_dir: Dossier des données (défaut : DATA_DIR).

    Returns:
        Chemin du dossier de la source.

    Raises:
        KeyError: Si la source est inconnue.
    """
    if source not in DATA_SOURCES:
        available = ", ".join(sorted(DATA_SOURCES))
        raise KeyError(f"Source inconnue : {source}. Sources disponibles : {available}")
    base = data_dir if data_dir is not None else get_data_dir()
    subdir = DATA_SOURCES[source].subdir
    return base / subdir if subdir else base


def get_game_log_path(source: str = "main", data_dir: Path | None = None) -> Path:
    """Retourne le chemin de gameLog.json d'une source."""
    return get_source_dir(source, data_dir) / GAME_LOG_FILENAME


def get_joueurs_path(source: str = "main", data_dir: Path | None = None) -> Path:
    """Retourne le chemin de joueurs.json d'une source."""
    return get_source_dir(source, data_dir) / JOUEURS_FILENAME


def get_achievements_path(source: str = "main", data_dir: Path | None = None) -> Path:
    """Retourne le chemin de playerAchievements.json d'une source."""
    return get_source_dir(source, data_dir) / ACHIEVEMENTS_FILENAME
