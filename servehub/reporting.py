"""Plain-text transcripts and summaries of generator output."""

from __future__ import annotations

from datetime import date
from typing import List, Sequence

import pandas as pd

from .roster import LineupEntry, WeeklyAssignment

DEFAULT_SCHEDULE_TITLE = "MUSIC TEAM SCHEDULE"
DEFAULT_LINEUP_TITLE = "WORSHIP SONG LINEUP"
FOOTER = "Generated by ServeHub"


def _heading(title: str) -> List[str]:
    return [title, "=" * len(title), ""]


def format_service_date(day: date) -> str:
    """Short date used in transcripts, e.g. ``Mar 2``."""
    return f"{day:%b} {day.day}"


def format_schedule_to_text(schedule: Sequence[WeeklyAssignment], title: str | None = None) -> str:
    lines = _heading(title or DEFAULT_SCHEDULE_TITLE)

    for week in schedule:
        lines.append(format_service_date(week.date))
        if week.singers:
            lines.append(", ".join(s.name for s in week.singers))
        else:
            lines.append("No singers assigned")
        if week.tech is not None:
            lines.append(f"Tech: {week.tech.name}")
        if week.scripture_reader is not None:
            lines.append(f"Scripture: {week.scripture_reader.name}")
        lines.append("")

    return "\n".join(lines) + "\n"


def format_lineup_to_text(lineup: Sequence[LineupEntry], title: str | None = None) -> str:
    lines = _heading(title or DEFAULT_LINEUP_TITLE)

    for index, entry in enumerate(lineup, start=1):
        song = entry.song
        lines.append(f"{index}. {song.title}")
        if song.artist:
            lines.append(f"   Artist: {song.artist}")
        tempo = song.tempo.label if song.tempo is not None else "N/A"
        lines.append(f"   Key: {song.key or 'N/A'} | Tempo: {tempo}")
        if song.genre is not None:
            lines.append(f"   Type: {song.genre.value.replace('_', ' ')}")
        lines.append(f"   Reason: {entry.reason}")
        lines.append("")

    lines.append("=" * 30)
    lines.append(FOOTER)
    return "\n".join(lines) + "\n"


def schedule_to_frame(schedule: Sequence[WeeklyAssignment]) -> pd.DataFrame:
    """One row per filled slot: date, ministry, person_id, person_name."""
    rows = [
        {
            "date": week.date,
            "ministry": ministry.value,
            "person_id": person.id,
            "person_name": person.name,
        }
        for week in schedule
        for ministry, person in week.people()
    ]
    return pd.DataFrame(rows, columns=["date", "ministry", "person_id", "person_name"])


def summarize_schedule(schedule: Sequence[WeeklyAssignment]) -> str:
    df = schedule_to_frame(schedule)
    if df.empty:
        return "No assignments."

    per_person = (
        df.groupby(["person_name", "ministry"]).size().unstack(fill_value=0)
    )
    per_person["total"] = per_person.sum(axis=1)
    per_person = per_person.sort_values(["total"], ascending=False, kind="stable")

    open_slots = []
    for week in schedule:
        missing = []
        if not week.singers:
            missing.append("singers")
        if week.tech is None:
            missing.append("tech")
        if week.scripture_reader is None:
            missing.append("scripture")
        if missing:
            open_slots.append(f"  {format_service_date(week.date)}: {', '.join(missing)}")

    lines = ["Assignments per person per ministry:"]
    lines.append(per_person.to_string())
    lines.append("")
    lines.append("Unfilled slots:")
    lines.extend(open_slots or ["  none"])
    return "\n".join(lines)
