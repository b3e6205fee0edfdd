"""Taux horaires d'activité : récolte (loot) et temps de parole.

Les deux métriques sont normalisées sur 60 minutes de jeu effectif :
la durée d'un joueur va du début de partie à sa mort (DeathDateIrl)
ou, s'il survit, à la fin de partie. Les participations sans durée
exploitable sont ignorées.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from lycans.analysis.achievement_config import SECONDS_PER_HOUR
from lycans.data.domain.models.game import GameRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LootRecord:
    """Récolte cumulée d'un joueur."""

    player_id: str
    games: int
    total_loot: float
    total_duration: float

    @property
    def loot_per_60min(self) -> float:
        if self.total_duration <= 0:
            return 0.0
        return self.total_loot * SECONDS_PER_HOUR / self.total_duration


@dataclass(frozen=True)
class TalkRecord:
    """Temps de parole cumulé d'un joueur.

    Attributes:
        player_id: Identifiant canonique.
        games: Parties avec données de parole et durée valide.
        seconds_outside: Secondes de parole hors meeting.
        seconds_during: Secondes de parole pendant les meetings.
        total_duration: Durée de jeu cumulée (secondes).
    """

    player_id: str
    games: int
    seconds_outside: float
    seconds_during: float
    total_duration: float

    @property
    def seconds_all(self) -> float:
        return self.seconds_outside + self.seconds_during

    @property
    def seconds_per_60min(self) -> float:
        if self.total_duration <= 0:
            return 0.0
        return self.seconds_all * SECONDS_PER_HOUR / self.total_duration


def compute_loot_stats(games: Sequence[GameRecord]) -> dict[str, LootRecord]:
    """Calcule le taux de récolte par joueur.

    Seules les parties où au moins un joueur a une récolte renseignée sont
    lues, et seuls les joueurs ayant eux-mêmes une récolte sont comptés.

    Returns:
        Dict {player_id: LootRecord}.
    """
    totals: dict[str, list[float]] = {}  # player_id -> [games, loot, duration]
    skipped = 0

    for game in games:
        if not any(e.total_collected_loot is not None for e in game.entries):
            continue
        for entry in game.entries:
            if entry.total_collected_loot is None:
                continue
            duration = game.duration_for(entry)
            if not duration:
                skipped += 1
                continue
            acc = totals.setdefault(entry.player_id, [0, 0.0, 0.0])
            acc[0] += 1
            acc[1] += entry.total_collected_loot
            acc[2] += duration

    if skipped:
        logger.debug(f"{skipped} participation(s) avec récolte mais sans durée valide")

    return {
        player_id: LootRecord(
            player_id=player_id,
            games=int(acc[0]),
            total_loot=acc[1],
            total_duration=acc[2],
        )
        for player_id, acc in sorted(totals.items())
    }


def compute_talk_stats(games: Sequence[GameRecord]) -> dict[str, TalkRecord]:
    """Calcule le temps de parole par heure de jeu.

    Une partie n'est lue que si au moins un joueur a parlé ; tous ses
    joueurs sont alors comptés, y compris ceux restés muets.

    Returns:
        Dict {player_id: TalkRecord}.
    """
    totals: dict[str, list[float]] = {}  # player_id -> [games, outside, during, duration]

    for game in games:
        if not any(e.has_talk_data for e in game.entries):
            continue
        for entry in game.entries:
            duration = game.duration_for(entry)
            if not duration:
                continue
            acc = totals.setdefault(entry.player_id, [0, 0.0, 0.0, 0.0])
            acc[0] += 1
            acc[1] += entry.seconds_talked_outside or 0.0
            acc[2] += entry.seconds_talked_during or 0.0
            acc[3] += duration

    return {
        player_id: TalkRecord(
            player_id=player_id,
            games=int(acc[0]),
            seconds_outside=acc[1],
            seconds_during=acc[2],
            total_duration=acc[3],
        )
        for player_id, acc in sorted(totals.items())
    }
