"""CSV export of generated schedules and lineups."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from servehub.reporting import schedule_to_frame
from servehub.roster import LineupEntry, WeeklyAssignment


def export_schedule_csv(schedule: Sequence[WeeklyAssignment], csv_path: str | Path) -> int:
    """
    Export a monthly schedule, one row per (date, ministry, person).

    Returns:
        Number of rows written
    """
    df = schedule_to_frame(schedule)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} assignments to {csv_path}")
    return len(df)


def export_lineup_csv(lineup: Sequence[LineupEntry], csv_path: str | Path) -> int:
    """Export a lineup in service order. Returns number of rows written."""
    df = pd.DataFrame(
        [
            {
                "position": index,
                "song_id": entry.song.id,
                "title": entry.song.title,
                "artist": entry.song.artist,
                "key": entry.song.key,
                "tempo": entry.song.tempo.value if entry.song.tempo else None,
                "genre": entry.song.genre.value if entry.song.genre else None,
                "reason": entry.reason,
            }
            for index, entry in enumerate(lineup, start=1)
        ],
        columns=["position", "song_id", "title", "artist", "key", "tempo", "genre", "reason"],
    )
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} songs to {csv_path}")
    return len(df)
