"""
Modèles de domaine avec validation Pydantic v2.
(Domain models with Pydantic v2 validation)
"""

from lycans.data.domain.models.achievement import (
    Achievement,
    AchievementCategory,
    ChartNavigation,
    FilteredNavigation,
    GeneralNavigation,
    MapNavigation,
    Navigation,
    Polarity,
)
from lycans.data.domain.models.game import (
    DeathEvent,
    GameRecord,
    PlayerGameEntry,
    RawGameInput,
    RawPlayerInput,
    RawVoteInput,
    VoteEvent,
    VoteKind,
)

__all__ = [
    "Achievement",
    "AchievementCategory",
    "ChartNavigation",
    "DeathEvent",
    "FilteredNavigation",
    "GameRecord",
    "GeneralNavigation",
    "MapNavigation",
    "Navigation",
    "PlayerGameEntry",
    "Polarity",
    "RawGameInput",
    "RawPlayerInput",
    "RawVoteInput",
    "VoteEvent",
    "VoteKind",
]
