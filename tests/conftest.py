"""Fixtures communes pour les tests.

Ce fichier fournit des fabriques de parties brutes au format gameLog.json
et un raccourci de normalisation, partagés par tous les tests.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from typing import Any

import pytest

from lycans.data.domain.models.game import GameRecord
from lycans.data.normalizer import normalize_corpus

BASE_DATE = datetime(2024, 1, 1, 12, 0, 0)
GAME_DURATION = timedelta(minutes=30)


def _player(
    username: str,
    role: str = "Villageois",
    victorious: bool = False,
    *,
    steam_id: str | None = None,
    final_role: str | None = None,
    death_type: str | None = None,
    death_timing: str | None = None,
    killer: str | None = None,
    death_date: str | None = None,
    votes: Sequence[dict[str, Any]] | None = None,
    talk: tuple[float, float] | None = None,
    loot: float | None = None,
) -> dict[str, Any]:
    player: dict[str, Any] = {
        "ID": steam_id,
        "Username": username,
        "MainRoleInitial": role,
        "MainRoleChanges": [{"NewMainRole": final_role}] if final_role else [],
        "Victorious": victorious,
        "DeathType": death_type,
        "DeathTiming": death_timing,
        "KillerName": killer,
        "DeathDateIrl": death_date,
        "Votes": list(votes or []),
    }
    if talk is not None:
        player["SecondsTalkedOutsideMeeting"], player["SecondsTalkedDuringMeeting"] = talk
    if loot is not None:
        player["TotalCollectedLoot"] = loot
    return player


def _game(
    number: int,
    players: Sequence[dict[str, Any]],
    *,
    modded: bool = False,
    map_name: str | None = "Village",
    duration: timedelta = GAME_DURATION,
    death_info: bool | None = None,
    with_dates: bool = True,
) -> dict[str, Any]:
    start = BASE_DATE + timedelta(hours=number)
    game: dict[str, Any] = {
        "Id": f"Test-{start.strftime('%Y%m%d%H%M%S')}-{number}",
        "StartDate": start.isoformat() if with_dates else None,
        "EndDate": (start + duration).isoformat() if with_dates else None,
        "MapName": map_name,
        "Modded": modded,
        "PlayerStats": list(players),
    }
    if death_info is not None:
        game["LegacyData"] = {"deathInformationFilled": death_info}
    return game


def _vote(day: int, target: str | None, seconds: float | None = None, *, game: int = 0) -> dict[str, Any]:
    """Vote brut ; seconds = décalage depuis le début de la partie `game`."""
    date = None
    if seconds is not None:
        date = (BASE_DATE + timedelta(hours=game, seconds=seconds)).isoformat()
    return {"Day": day, "Target": target, "Date": date}


@pytest.fixture
def make_player() -> Callable[..., dict[str, Any]]:
    """Fabrique de participation brute (PlayerStats)."""
    return _player


@pytest.fixture
def make_game() -> Callable[..., dict[str, Any]]:
    """Fabrique de partie brute (GameStats)."""
    return _game


@pytest.fixture
def make_vote() -> Callable[..., dict[str, Any]]:
    """Fabrique de vote brut."""
    return _vote


@pytest.fixture
def at_time() -> Callable[[int, float], str]:
    """Horodatage ISO à `seconds` du début de la partie `game`."""

    def _at(game: int, seconds: float) -> str:
        return (BASE_DATE + timedelta(hours=game, seconds=seconds)).isoformat()

    return _at


@pytest.fixture
def normalize() -> Callable[..., tuple[GameRecord, ...]]:
    """Normalise une liste de parties brutes et retourne les GameRecord."""

    def _normalize(raw_games: Sequence[dict[str, Any]], resolver=None) -> tuple[GameRecord, ...]:
        return normalize_corpus(raw_games, resolver).games

    return _normalize


@pytest.fixture
def camp_history(make_game, make_player, normalize):
    """Construit un historique d'un joueur à partir de (rôle, victoire) successifs.

    Un second joueur "Filler" complète chaque partie.
    """

    def _build(player: str, history: Sequence[tuple[str, bool]]) -> tuple[GameRecord, ...]:
        raw = [
            make_game(
                i,
                [make_player(player, role, won), make_player("Filler", "Loup", not won)],
            )
            for i, (role, won) in enumerate(history, start=1)
        ]
        return normalize(raw)

    return _build
