"""Utilitaires partagés pour le moteur de succès Lycans."""

from lycans.utils.paths import (
    DATA_DIR,
    DATA_SOURCES,
    REPO_ROOT,
    get_achievements_path,
    get_game_log_path,
    get_joueurs_path,
)

__all__ = [
    "DATA_DIR",
    "DATA_SOURCES",
    "REPO_ROOT",
    "get_achievements_path",
    "get_game_log_path",
    "get_joueurs_path",
]
