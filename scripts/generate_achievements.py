#!/usr/bin/env python3
"""Script de précalcul des succès (playerAchievements.json).

Ce script :
1. Charge gameLog.json et joueurs.json d'une source de données
2. Normalise le corpus et calcule les agrégateurs des deux partitions
3. Assemble les succès de chaque joueur
4. Écrit playerAchievements.json (sauf en dry-run)

Usage:
    # Source principale (data/)
    python scripts/generate_achievements.py

    # Source Discord (data/discord/)
    python scripts/generate_achievements.py --source discord

    # Fichiers explicites
    python scripts/generate_achievements.py --game-log gameLog.json --output out.json

    # Afficher les succès d'un joueur sans rien écrire
    python scripts/generate_achievements.py --player 76561198000000001 --dry-run

    # Agrégateurs en parallèle (défaut : LYCANS_MAX_WORKERS ou 1)
    python scripts/generate_achievements.py --workers 4
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ajouter le répertoire parent au path pour les imports
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from lycans.analysis.pipeline import generate_all_player_achievements, write_achievements
from lycans.data.loader import CorpusError, load_game_log, load_identity_resolver
from lycans.utils.paths import (
    DATA_SOURCES,
    get_achievements_path,
    get_game_log_path,
    get_joueurs_path,
)

# Configuration du logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Précalcule les succès de tous les joueurs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--source",
        choices=sorted(DATA_SOURCES),
        default="main",
        help="Source de données (défaut: main)",
    )
    parser.add_argument("--data-dir", type=Path, help="Dossier des données (défaut: data/)")
    parser.add_argument("--game-log", type=Path, help="Chemin de gameLog.json")
    parser.add_argument("--joueurs", type=Path, help="Chemin de joueurs.json")
    parser.add_argument("--output", type=Path, help="Chemin de playerAchievements.json")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads pour les agrégateurs (défaut: LYCANS_MAX_WORKERS ou 1)",
    )
    parser.add_argument("--player", type=str, help="Affiche les succès d'un joueur (ID canonique)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Mode dry-run : calcule sans écrire le fichier",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Point d'entrée principal."""
    args = build_parser().parse_args(argv)

    game_log = args.game_log or get_game_log_path(args.source, args.data_dir)
    joueurs = args.joueurs or get_joueurs_path(args.source, args.data_dir)
    output = args.output or get_achievements_path(args.source, args.data_dir)

    logger.info(f"Source: {DATA_SOURCES[args.source].name} ({game_log})")

    try:
        raw_games = load_game_log(game_log)
        resolver = load_identity_resolver(joueurs)
    except CorpusError as e:
        logger.error(str(e))
        return 1

    report = generate_all_player_achievements(raw_games, resolver, max_workers=args.workers)

    if args.player:
        player = report.achievements.get(args.player)
        if player is None:
            logger.warning(f"Joueur inconnu: {args.player}")
        else:
            logger.info(f"=== {player.player_name} ({player.player_id}) ===")
            for label, items in (("Toutes les parties", player.all_games), ("Moddées", player.modded_only)):
                logger.info(f"{label}: {len(items)} succès")
                for a in items:
                    rank = f"#{a.rank}/{a.total_ranked} " if a.rank is not None else ""
                    logger.info(f"  [{a.polarity.value}] {rank}{a.title} - {a.description}")

    if args.dry_run:
        logger.info(f"[DRY-RUN] {report.total_players} joueur(s), rien n'est écrit dans {output}")
        return 0

    write_achievements(report, output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
