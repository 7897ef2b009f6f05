"""CSV import utilities to load the roster and song catalog into the database."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from servehub.constants import Gender, Ministry, Priority, SongGenre, SongLanguage, Tempo
from servehub.domain.models import PersonRecord, SongRecord

TRUE_VALUES = {"TRUE", "T", "1", "YES", "Y"}


def _text(row: pd.Series, column: str) -> str | None:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _flag(row: pd.Series, column: str, default: bool) -> bool:
    value = _text(row, column)
    if value is None:
        return default
    return value.upper() in TRUE_VALUES


def _list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(";") if part.strip()]


def import_people_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import people from CSV into database.

    Expected columns: id, name, ministries (``;``-separated), gender, is_active,
    is_exempt, priority, and optionally phone and email.

    Args:
        session: Database session
        csv_path: Path to people CSV

    Returns:
        Number of people imported

    Raises:
        ValueError: If a ministry, gender or priority value is unknown
    """
    df = pd.read_csv(csv_path, dtype={"id": str})

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()

    people = []
    for _, row in df.iterrows():
        ministries = [Ministry(m.lower()) for m in _list(_text(row, "ministries"))]
        person = PersonRecord(
            id=str(row["id"]).strip(),
            name=str(row["name"]).strip(),
            phone=_text(row, "phone"),
            email=_text(row, "email"),
            ministries=",".join(m.value for m in ministries),
            gender=Gender((_text(row, "gender") or Gender.MALE.value).lower()).value,
            is_active=_flag(row, "is_active", True),
            is_exempt=_flag(row, "is_exempt", False),
            priority=Priority.parse(_text(row, "priority")).value,
        )
        people.append(person)

    # Bulk insert
    session.add_all(people)
    session.commit()

    print(f"[INFO] Imported {len(people)} people from {csv_path}")
    return len(people)


def import_songs_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import songs from CSV into database.

    Expected columns: id, title, artist, genre, language, lyrics, chords, key,
    tempo, last_used, tags (``;``-separated). Only id and title are required.

    Returns:
        Number of songs imported
    """
    df = pd.read_csv(csv_path, dtype={"id": str, "key": str})

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()

    if "last_used" in df.columns:
        df["last_used"] = pd.to_datetime(df["last_used"]).dt.date

    songs = []
    for _, row in df.iterrows():
        genre = _text(row, "genre")
        tempo = Tempo.parse(_text(row, "tempo"))
        last_used = row.get("last_used")
        song = SongRecord(
            id=str(row["id"]).strip(),
            title=str(row["title"]).strip(),
            artist=_text(row, "artist"),
            genre=SongGenre(genre.lower()).value if genre else None,
            language=SongLanguage((_text(row, "language") or SongLanguage.ENGLISH.value).lower()).value,
            lyrics=_text(row, "lyrics") or "",
            chords=_text(row, "chords"),
            key=_text(row, "key"),
            tempo=tempo.value if tempo else None,
            last_used=last_used if last_used is not None and not pd.isna(last_used) else None,
            tags=",".join(_list(_text(row, "tags"))) or None,
        )
        songs.append(song)

    # Bulk insert
    session.add_all(songs)
    session.commit()

    print(f"[INFO] Imported {len(songs)} songs from {csv_path}")
    return len(songs)
