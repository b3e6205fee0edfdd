"""
Module data : chargement, identité et normalisation du corpus.
(Data module: loading, identity and corpus normalization)

HOW IT WORKS:
1. loader : lit gameLog.json et joueurs.json
2. PlayerIdentityResolver : identité canonique de chaque joueur
3. normalize_corpus : parties validées, triées et immuables

Usage:
    from lycans.data import load_game_log, normalize_corpus

    raw_games = load_game_log("data/gameLog.json")
    corpus = normalize_corpus(raw_games)
"""

from lycans.data.identity import PlayerIdentityResolver, ResolvedIdentity
from lycans.data.loader import CorpusError, load_game_log, load_identity_resolver, write_json
from lycans.data.normalizer import (
    NormalizationResult,
    entries_frame,
    filter_modded,
    normalize_corpus,
    parse_game_id,
)

__all__ = [
    "CorpusError",
    "NormalizationResult",
    "PlayerIdentityResolver",
    "ResolvedIdentity",
    "entries_frame",
    "filter_modded",
    "load_game_log",
    "load_identity_resolver",
    "normalize_corpus",
    "parse_game_id",
    "write_json",
]
