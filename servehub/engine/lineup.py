"""Worship song lineup selection and ordering."""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Callable, List, Optional, Sequence, Set

from servehub.config import DEFAULT_LINEUP_RULES, LineupRules
from servehub.constants import GENRE_LABELS, SongGenre, Tempo
from servehub.reporting import format_lineup_to_text
from servehub.roster import LineupEntry, Song

from .base import BaseGenerator, shuffle

RECENT_DAYS = 30

REASON_SLOW_MODERATE = "Tempo Balance (Slow/Moderate)"
REASON_FAST = "Tempo Balance (Fast)"
REASON_FILL = "Fill to Minimum"


def was_recently_played(song: Song, today: date, days: int = RECENT_DAYS) -> bool:
    if song.last_used is None:
        return False
    return song.last_used > today - timedelta(days=days)


def is_slow_or_moderate(song: Song) -> bool:
    return song.tempo in (Tempo.SLOW, Tempo.MODERATE)


def is_fast(song: Song) -> bool:
    return song.tempo == Tempo.FAST


def required_reason(genre: SongGenre) -> str:
    return f"{GENRE_LABELS[genre]} (Required)"


def required_genres(rules: LineupRules) -> List[SongGenre]:
    """Required categories in insertion order; later ones are dropped first at the cap."""
    flags = [
        (rules.require_adoration, SongGenre.ADORATION),
        (rules.require_thanksgiving, SongGenre.THANKSGIVING),
        (rules.require_confession, SongGenre.CONFESSION),
        (rules.require_supplication, SongGenre.SUPPLICATION),
    ]
    return [genre for enabled, genre in flags if enabled]


class LineupComposer(BaseGenerator):
    """
    Select and order songs for one service.

    Passes run in a fixed order: required genres, tempo balance, fill to
    minimum. The result is then stable-sorted from slow to fast.
    """

    name = "LINEUP"

    def candidate_pool(self, songs: Sequence[Song], rules: LineupRules, today: date) -> List[Song]:
        """Apply the recency filter, falling back to the full catalog if it leaves too few."""
        catalog = list(songs)
        if not rules.avoid_recently_played:
            return catalog
        fresh = [s for s in catalog if not was_recently_played(s, today)]
        if len(fresh) < rules.min_songs:
            return catalog
        return fresh

    def generate(
        self,
        songs: Sequence[Song],
        rules: LineupRules | None = None,
        today: date | None = None,
    ) -> List[LineupEntry]:
        rules = rules or DEFAULT_LINEUP_RULES
        today = today or date.today()
        candidates = self.candidate_pool(songs, rules, today)

        lineup: List[LineupEntry] = []
        used: Set[str] = set()

        def pick(match: Optional[Callable[[Song], bool]] = None) -> Optional[Song]:
            pool = [s for s in candidates if s.id not in used and (match is None or match(s))]
            if not pool:
                return None
            return shuffle(pool, self.rng)[0]

        def add(song: Song, reason: str) -> None:
            lineup.append(LineupEntry(song=song, reason=reason))
            used.add(song.id)

        # 1. Required genres, stopping at the cap
        for genre in required_genres(rules):
            if len(lineup) >= rules.max_songs:
                break
            song = pick(lambda s, g=genre: s.genre == g)
            if song is not None:
                add(song, required_reason(genre))

        # 2. Tempo balance, counted once after the required pass
        needed_slow = rules.slow_moderate_count - sum(1 for e in lineup if is_slow_or_moderate(e.song))
        needed_fast = rules.fast_count - sum(1 for e in lineup if is_fast(e.song))

        while needed_slow > 0 and len(lineup) < rules.max_songs:
            song = pick(is_slow_or_moderate)
            if song is None:
                break
            add(song, REASON_SLOW_MODERATE)
            needed_slow -= 1

        while needed_fast > 0 and len(lineup) < rules.max_songs:
            song = pick(is_fast)
            if song is None:
                break
            add(song, REASON_FAST)
            needed_fast -= 1

        # 3. Fill to minimum; min wins over max when the two contradict
        while len(lineup) < rules.min_songs:
            song = pick()
            if song is None:
                break
            add(song, REASON_FILL)

        # 4. Energy arc: slow -> moderate (and untagged) -> fast
        return sorted(lineup, key=lambda e: e.song.tempo_rank)

    def render(self, result: Sequence[LineupEntry], title: str | None = None) -> str:
        return format_lineup_to_text(result, title)


def generate_lineup(
    songs: Sequence[Song],
    rules: LineupRules | None = None,
    rng: random.Random | None = None,
    today: date | None = None,
) -> List[LineupEntry]:
    """Convenience wrapper around LineupComposer."""
    return LineupComposer(rng).generate(songs, rules, today)
