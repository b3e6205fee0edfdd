"""Normalisation du corpus de parties.

Transforme les parties brutes de gameLog.json en GameRecord immuables :
- validation Pydantic (les parties invalides sont ignorées avec un warning)
- identité canonique de chaque joueur via PlayerIdentityResolver
- résolution des tueurs et des cibles de vote dans la même partie
- tri chronologique stable et numérotation globale (displayed_id)

Le module expose aussi entries_frame(), la vue Polars (une ligne par
joueur et par partie) utilisée par les agrégateurs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import polars as pl
from pydantic import ValidationError

from lycans.data.domain.models.game import (
    DeathEvent,
    GameRecord,
    PlayerGameEntry,
    RawGameInput,
    RawPlayerInput,
    VoteEvent,
    VoteKind,
    is_death_type,
)
from lycans.data.domain.refdata import SKIP_VOTE_TARGET
from lycans.data.identity import PlayerIdentityResolver, ResolvedIdentity

logger = logging.getLogger(__name__)


# Schéma de la vue à plat des participations
ENTRIES_SCHEMA: dict[str, Any] = {
    "game_id": pl.Utf8,
    "displayed_id": pl.Int64,
    "start_date": pl.Utf8,
    "modded": pl.Boolean,
    "map_name": pl.Utf8,
    "player_id": pl.Utf8,
    "player_name": pl.Utf8,
    "initial_role": pl.Utf8,
    "final_role": pl.Utf8,
    "camp": pl.Utf8,
    "detailed_camp": pl.Utf8,
    "faction": pl.Utf8,
    "main_camp": pl.Utf8,
    "victorious": pl.Boolean,
}


@dataclass(frozen=True)
class NormalizationResult:
    """Résultat de la normalisation d'un corpus.

    Attributes:
        games: Parties valides triées chronologiquement.
        dropped: Nombre de parties ignorées (champs requis manquants).
        player_names: Nom d'affichage canonique par identifiant.
    """

    games: tuple[GameRecord, ...] = ()
    dropped: int = 0
    player_names: dict[str, str] = field(default_factory=dict)

    @property
    def modded_games(self) -> tuple[GameRecord, ...]:
        return filter_modded(self.games)


# =============================================================================
# Ordre chronologique
# =============================================================================


def parse_game_id(game_id: str) -> tuple[str, int]:
    """Extrait la clé chronologique d'un Id de partie.

    Formats supportés:
    - "Ponce-20231013000000-1" (horodatage + numéro de partie)
    - "Ponce-20231013000000" (horodatage seul)

    Returns:
        Tuple (horodatage, numéro final). ("0", 0) si le format est inconnu.
    """
    parts = game_id.split("-")
    if len(parts) == 3:
        try:
            trailing = int(parts[2])
        except ValueError:
            trailing = 0
        return parts[1], trailing
    if len(parts) == 2:
        return parts[1], 0
    return "0", 0


def _chrono_key(game: RawGameInput) -> tuple[str, int]:
    timestamp, trailing = parse_game_id(game.game_id)
    if timestamp == "0" and game.start_date is not None:
        timestamp = game.start_date.strftime("%Y%m%d%H%M%S")
    return timestamp, trailing


# =============================================================================
# Normalisation
# =============================================================================


def _build_vote_events(raw: RawPlayerInput, ids_by_name: dict[str, str]) -> tuple[VoteEvent, ...]:
    events: list[VoteEvent] = []
    for vote in raw.votes:
        target = (vote.target or "").strip()
        if not target:
            kind = VoteKind.ABSTAIN
            target_id = None
        elif target == SKIP_VOTE_TARGET:
            kind = VoteKind.SKIP
            target_id = None
        else:
            kind = VoteKind.VOTE
            target_id = ids_by_name.get(target.lower())
        events.append(
            VoteEvent(
                meeting=vote.day,
                kind=kind,
                target_id=target_id,
                target_name=target or None,
                cast_at=vote.date,
            )
        )
    return tuple(events)


def _build_death_event(raw: RawPlayerInput, ids_by_name: dict[str, str]) -> DeathEvent | None:
    if not is_death_type(raw.death_type) and not raw.death_timing:
        return None
    killer_id = ids_by_name.get(raw.killer_name.lower()) if raw.killer_name else None
    return DeathEvent(
        death_type=raw.death_type or "",
        timing=raw.death_timing,
        killer_id=killer_id,
        killer_name=raw.killer_name,
        occurred_at=raw.death_date_irl,
    )


def _build_game(
    raw_game: RawGameInput,
    displayed_id: int,
    chrono_key: tuple[str, int],
    identities: list[ResolvedIdentity],
) -> GameRecord:
    ids_by_name = {
        raw.username.lower(): identity.player_id
        for raw, identity in zip(raw_game.player_stats, identities, strict=True)
    }

    entries: list[PlayerGameEntry] = []
    seen: set[str] = set()
    for raw, identity in zip(raw_game.player_stats, identities, strict=True):
        if identity.player_id in seen:
            logger.warning(
                f"Partie {raw_game.game_id}: joueur {identity.player_id} présent plusieurs fois, "
                "seule la première entrée est conservée"
            )
            continue
        seen.add(identity.player_id)
        entries.append(
            PlayerGameEntry(
                player_id=identity.player_id,
                player_name=identity.display_name,
                raw_username=raw.username,
                initial_role=raw.main_role_initial,
                final_role=raw.final_role,
                power=raw.power,
                victorious=raw.victorious,
                votes=_build_vote_events(raw, ids_by_name),
                death=_build_death_event(raw, ids_by_name),
                seconds_talked_outside=raw.seconds_talked_outside_meeting,
                seconds_talked_during=raw.seconds_talked_during_meeting,
                total_collected_loot=raw.total_collected_loot,
            )
        )

    death_info = raw_game.legacy_data.death_information_filled if raw_game.legacy_data else True
    return GameRecord(
        game_id=raw_game.game_id,
        displayed_id=displayed_id,
        chrono_key=chrono_key,
        start_date=raw_game.start_date,
        end_date=raw_game.end_date,
        map_name=raw_game.map_name,
        modded=raw_game.modded,
        version=raw_game.version,
        death_information_filled=death_info,
        entries=tuple(entries),
    )


def normalize_corpus(
    raw_games: Iterable[Any],
    resolver: PlayerIdentityResolver | None = None,
) -> NormalizationResult:
    """Normalise un corpus brut de parties.

    Args:
        raw_games: Itérable de parties (dicts issus de gameLog.json ou RawGameInput).
        resolver: Résolveur d'identité (par défaut : Steam ID puis pseudo brut).

    Returns:
        NormalizationResult avec les parties triées chronologiquement.

    Raises:
        TypeError: Si raw_games n'est pas un itérable de parties.
    """
    if raw_games is None or isinstance(raw_games, (str, bytes, dict)) or not isinstance(
        raw_games, Iterable
    ):
        raise TypeError(f"Le corpus doit être une liste de parties, reçu {type(raw_games).__name__}")

    resolver = resolver or PlayerIdentityResolver()

    validated: list[RawGameInput] = []
    dropped = 0
    for index, raw in enumerate(raw_games):
        try:
            validated.append(RawGameInput.model_validate(raw))
        except ValidationError as exc:
            dropped += 1
            hint = raw.get("Id") if isinstance(raw, dict) else None
            logger.warning(
                f"Partie {hint or f'#{index}'}: enregistrement invalide ignoré "
                f"({exc.error_count()} erreur(s))"
            )

    keyed = sorted(((_chrono_key(g), g) for g in validated), key=lambda item: item[0])

    games: list[GameRecord] = []
    player_names: dict[str, str] = {}
    for position, (key, raw_game) in enumerate(keyed, start=1):
        identities = [resolver.resolve(p.player_id, p.username) for p in raw_game.player_stats]
        for identity in identities:
            player_names.setdefault(identity.player_id, identity.display_name)
        games.append(_build_game(raw_game, position, key, identities))

    if dropped:
        logger.info(f"{dropped} partie(s) ignorée(s) sur {dropped + len(games)}")

    return NormalizationResult(games=tuple(games), dropped=dropped, player_names=player_names)


def filter_modded(games: Sequence[GameRecord]) -> tuple[GameRecord, ...]:
    """Retourne la partition des parties moddées."""
    return tuple(g for g in games if g.modded)


def entries_frame(games: Sequence[GameRecord]) -> pl.DataFrame:
    """Construit la vue à plat des participations.

    Args:
        games: Parties normalisées.

    Returns:
        DataFrame Polars avec une ligne par (partie, joueur), colonnes ENTRIES_SCHEMA.
    """
    rows = [
        {
            "game_id": game.game_id,
            "displayed_id": game.displayed_id,
            "start_date": game.start_date.isoformat() if game.start_date else None,
            "modded": game.modded,
            "map_name": game.map_name,
            "player_id": entry.player_id,
            "player_name": entry.player_name,
            "initial_role": entry.initial_role,
            "final_role": entry.final_role,
            "camp": entry.camp,
            "detailed_camp": entry.detailed_camp,
            "faction": entry.faction,
            "main_camp": entry.main_camp.value,
            "victorious": entry.victorious,
        }
        for game in games
        for entry in game.entries
    ]
    if not rows:
        return pl.DataFrame(schema=ENTRIES_SCHEMA)
    return pl.DataFrame(rows, schema=ENTRIES_SCHEMA)
