"""Closed vocabularies shared by the generators, persistence and CLI."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class Ministry(str, Enum):
    MUSICIAN = "musician"
    USHER = "usher"
    MULTIMEDIA = "multimedia"  # the "tech" slot
    SINGER = "singer"
    SCRIPTURE_READER = "scripture_reader"
    PRAYER_LEADER = "prayer_leader"
    HOST = "host"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Priority(str, Enum):
    """Scheduling priority tier. Higher rank sorts first."""

    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "Priority":
        """Parse a tier name; a missing tier is NORMAL, an unknown one is an error."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.NORMAL
        if isinstance(value, Priority):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown priority tier: {value!r}") from None


_PRIORITY_RANK: Dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.NORMAL: 2,
    Priority.LOW: 1,
}


def priority_sort_key(priority: Priority) -> int:
    """Sort key giving high > normal > low when used with ``reverse=False``."""
    return -priority.rank


class SongGenre(str, Enum):
    ADORATION = "adoration"
    CONFESSION = "confession"
    THANKSGIVING = "thanksgiving"
    SUPPLICATION = "supplication"
    CHRISTMAS = "christmas"
    HYMNAL = "hymnal"
    PRAISE_WORSHIP = "praise_worship"


class SongLanguage(str, Enum):
    ENGLISH = "english"
    TAGALOG = "tagalog"


class Tempo(str, Enum):
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"

    @property
    def rank(self) -> int:
        return _TEMPO_RANK[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Tempo"]:
        if value is None or isinstance(value, Tempo):
            return value
        text = str(value).strip().lower()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown tempo: {value!r}") from None


_TEMPO_RANK: Dict[Tempo, int] = {
    Tempo.SLOW: 1,
    Tempo.MODERATE: 2,
    Tempo.FAST: 3,
}

# Untagged songs sit in the middle of the energy arc
DEFAULT_TEMPO_RANK = _TEMPO_RANK[Tempo.MODERATE]


def tempo_rank(tempo: Optional[Tempo]) -> int:
    if tempo is None:
        return DEFAULT_TEMPO_RANK
    return _TEMPO_RANK.get(tempo, DEFAULT_TEMPO_RANK)


MINISTRY_LABELS: Dict[Ministry, str] = {
    Ministry.MUSICIAN: "Musician",
    Ministry.SINGER: "Singer",
    Ministry.USHER: "Usher",
    Ministry.MULTIMEDIA: "Multimedia",
    Ministry.SCRIPTURE_READER: "Scripture Reader",
    Ministry.PRAYER_LEADER: "Prayer Leader",
    Ministry.HOST: "Host/MC",
}

GENRE_LABELS: Dict[SongGenre, str] = {
    SongGenre.ADORATION: "Adoration",
    SongGenre.CONFESSION: "Confession",
    SongGenre.THANKSGIVING: "Thanksgiving",
    SongGenre.SUPPLICATION: "Supplication",
    SongGenre.CHRISTMAS: "Christmas",
    SongGenre.HYMNAL: "Hymnal",
    SongGenre.PRAISE_WORSHIP: "Praise & Worship",
}

SERVICE_TYPES = ("sunday_morning", "sunday_evening", "midweek", "special")
