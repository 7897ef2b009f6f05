"""Serving and song-usage statistics over saved schedules."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

import pandas as pd

from servehub.constants import Ministry
from servehub.roster import Person, ScheduleSnapshot, Song


@dataclass
class PersonStats:
    person_id: str
    person_name: str
    total_assignments: int = 0
    by_ministry: Dict[str, int] = field(default_factory=dict)
    last_served: Optional[date] = None


@dataclass
class MinistryStats:
    ministry: Ministry
    total_assignments: int
    unique_people: int
    average_per_month: float


@dataclass
class SongStats:
    song_id: str
    song_title: str
    artist: Optional[str]
    last_used: Optional[date]
    genres: List[str]


def assignments_frame(schedules: Sequence[ScheduleSnapshot]) -> pd.DataFrame:
    rows = [
        {
            "schedule_id": s.id,
            "date": s.date,
            "person_id": a.person_id,
            "ministry": a.ministry.value,
        }
        for s in schedules
        for a in s.assignments
    ]
    return pd.DataFrame(rows, columns=["schedule_id", "date", "person_id", "ministry"])


def calculate_person_stats(
    schedules: Sequence[ScheduleSnapshot],
    people: Sequence[Person],
) -> List[PersonStats]:
    """
    Count assignments per person, including people who never served.

    Assignments for people missing from ``people`` are ignored. The result is
    sorted by total assignments, most first.
    """
    stats = {p.id: PersonStats(person_id=p.id, person_name=p.name) for p in people}
    df = assignments_frame(schedules)
    df = df[df["person_id"].isin(list(stats))]

    if not df.empty:
        by_ministry = df.groupby(["person_id", "ministry"]).size()
        last_served = df.groupby("person_id")["date"].max()
        for (person_id, ministry), count in by_ministry.items():
            entry = stats[person_id]
            entry.by_ministry[ministry] = int(count)
            entry.total_assignments += int(count)
        for person_id, served in last_served.items():
            stats[person_id].last_served = served

    return sorted(stats.values(), key=lambda s: s.total_assignments, reverse=True)


def calculate_ministry_stats(
    schedules: Sequence[ScheduleSnapshot],
    today: Optional[date] = None,
) -> List[MinistryStats]:
    """Totals and unique people per ministry, averaged over the months since the first schedule."""
    df = assignments_frame(schedules)
    if df.empty:
        return []

    today = today or date.today()
    first = schedules[0].date
    months = max(1, math.ceil((today - first).days / 30))

    grouped = df.groupby("ministry").agg(
        total=("person_id", "size"),
        unique=("person_id", "nunique"),
    )
    result = [
        MinistryStats(
            ministry=Ministry(ministry),
            total_assignments=int(row["total"]),
            unique_people=int(row["unique"]),
            average_per_month=float(row["total"]) / months,
        )
        for ministry, row in grouped.iterrows()
    ]
    return sorted(result, key=lambda m: m.total_assignments, reverse=True)


def calculate_song_stats(songs: Sequence[Song]) -> List[SongStats]:
    """Songs ordered by last use, most recent first; never-used songs last."""
    stats = [
        SongStats(
            song_id=s.id,
            song_title=s.title,
            artist=s.artist,
            last_used=s.last_used,
            genres=[s.genre.value] if s.genre is not None else [],
        )
        for s in songs
    ]
    used = sorted((s for s in stats if s.last_used is not None), key=lambda s: s.last_used, reverse=True)
    unused = [s for s in stats if s.last_used is None]
    return used + unused


def get_top_performers(stats: Sequence[PersonStats], limit: int = 5) -> List[PersonStats]:
    return list(stats[:limit])


def get_least_active(stats: Sequence[PersonStats], limit: int = 5) -> List[PersonStats]:
    """People with the fewest assignments, ignoring those with none."""
    active = [s for s in stats if s.total_assignments > 0]
    return sorted(active, key=lambda s: s.total_assignments)[:limit]


def format_person_stats(stats: Sequence[PersonStats]) -> str:
    if not stats:
        return "No people."
    ministries = sorted({m for s in stats for m in s.by_ministry})
    df = pd.DataFrame(
        [
            {
                "name": s.person_name,
                "total": s.total_assignments,
                "last_served": s.last_served.isoformat() if s.last_served else "-",
                **{m: s.by_ministry.get(m, 0) for m in ministries},
            }
            for s in stats
        ]
    )
    return df.to_string(index=False)
