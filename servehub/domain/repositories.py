"""Repository classes for data access."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Sequence

import pandas as pd
from sqlalchemy.orm import Session

from servehub.constants import Ministry
from servehub.roster import Person, ScheduleSnapshot, Song, WeeklyAssignment

from .models import PersonRecord, ServiceAssignment, ServiceSchedule, SongRecord


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    start = pd.Timestamp(year=year, month=month, day=1)
    end = start + pd.offsets.MonthEnd(0)
    return start.date(), end.date()


class PersonRepository:
    """Repository for people (the roster provider)."""

    @staticmethod
    def get_all(session: Session) -> List[PersonRecord]:
        """Get all people."""
        return session.query(PersonRecord).order_by(PersonRecord.created_at, PersonRecord.id).all()

    @staticmethod
    def get_by_id(session: Session, person_id: str) -> Optional[PersonRecord]:
        """Get person by ID."""
        return session.query(PersonRecord).filter(PersonRecord.id == person_id).first()

    @staticmethod
    def get_active(session: Session) -> List[PersonRecord]:
        """Get all active people."""
        return (
            session.query(PersonRecord)
            .filter(PersonRecord.is_active.is_(True))
            .order_by(PersonRecord.created_at, PersonRecord.id)
            .all()
        )

    @staticmethod
    def create(session: Session, person: PersonRecord) -> PersonRecord:
        """Create a new person."""
        session.add(person)
        session.commit()
        session.refresh(person)
        return person

    @staticmethod
    def bulk_create(session: Session, people: List[PersonRecord]) -> None:
        """Create multiple people."""
        session.add_all(people)
        session.commit()

    @staticmethod
    def set_exemption(session: Session, person_ids: Iterable[str], exempt: bool) -> int:
        """Set the auto-schedule exemption flag. Returns number of rows updated."""
        ids = list(person_ids)
        if not ids:
            return 0
        count = (
            session.query(PersonRecord)
            .filter(PersonRecord.id.in_(ids))
            .update({PersonRecord.is_exempt: exempt}, synchronize_session=False)
        )
        session.commit()
        return count

    @staticmethod
    def load_roster(session: Session) -> List[Person]:
        """Snapshot every person for a generation run, in roster order."""
        return [record.to_snapshot() for record in PersonRepository.get_all(session)]


class SongRepository:
    """Repository for the song catalog."""

    @staticmethod
    def get_all(session: Session) -> List[SongRecord]:
        """Get all songs."""
        return session.query(SongRecord).order_by(SongRecord.title, SongRecord.id).all()

    @staticmethod
    def get_by_id(session: Session, song_id: str) -> Optional[SongRecord]:
        """Get song by ID."""
        return session.query(SongRecord).filter(SongRecord.id == song_id).first()

    @staticmethod
    def create(session: Session, song: SongRecord) -> SongRecord:
        """Create a new song."""
        session.add(song)
        session.commit()
        session.refresh(song)
        return song

    @staticmethod
    def bulk_create(session: Session, songs: List[SongRecord]) -> None:
        """Create multiple songs."""
        session.add_all(songs)
        session.commit()

    @staticmethod
    def load_catalog(session: Session) -> List[Song]:
        """Snapshot the whole catalog for a lineup run."""
        return [record.to_snapshot() for record in SongRepository.get_all(session)]

    @staticmethod
    def mark_used(session: Session, song_ids: Iterable[str], when: date) -> int:
        """Record that songs were sung on ``when``. Returns number of rows updated."""
        ids = list(song_ids)
        if not ids:
            return 0
        count = (
            session.query(SongRecord)
            .filter(SongRecord.id.in_(ids))
            .update({SongRecord.last_used: when}, synchronize_session=False)
        )
        session.commit()
        return count


class ScheduleRepository:
    """Repository for saved service schedules."""

    @staticmethod
    def get_all(session: Session) -> List[ServiceSchedule]:
        """Get all schedules, oldest first."""
        return session.query(ServiceSchedule).order_by(ServiceSchedule.date, ServiceSchedule.id).all()

    @staticmethod
    def get_by_date(session: Session, day: date) -> List[ServiceSchedule]:
        """Get all schedules on one date."""
        return (
            session.query(ServiceSchedule)
            .filter(ServiceSchedule.date == day)
            .order_by(ServiceSchedule.id)
            .all()
        )

    @staticmethod
    def get_by_month(session: Session, year: int, month: int) -> List[ServiceSchedule]:
        """Get all schedules in a calendar month."""
        start, end = _month_bounds(year, month)
        return (
            session.query(ServiceSchedule)
            .filter(ServiceSchedule.date >= start, ServiceSchedule.date <= end)
            .order_by(ServiceSchedule.date, ServiceSchedule.id)
            .all()
        )

    @staticmethod
    def delete_by_month(session: Session, year: int, month: int, auto_only: bool = True) -> int:
        """Delete schedules (and their assignments) in a month. Returns number deleted."""
        schedules = ScheduleRepository.get_by_month(session, year, month)
        if auto_only:
            schedules = [s for s in schedules if s.auto_generated]
        for schedule in schedules:
            session.delete(schedule)
        session.commit()
        return len(schedules)

    @staticmethod
    def save_weekly_assignments(
        session: Session,
        weeks: Sequence[WeeklyAssignment],
        service_type: str = "sunday_morning",
    ) -> List[ServiceSchedule]:
        """
        Persist generator output, one schedule per Sunday.

        Earlier auto-generated schedules on the same dates are replaced;
        manually created schedules are left alone.

        Returns:
            The newly created schedules
        """
        dates = [week.date for week in weeks]
        if dates:
            stale = (
                session.query(ServiceSchedule)
                .filter(ServiceSchedule.date.in_(dates), ServiceSchedule.auto_generated.is_(True))
                .all()
            )
            for schedule in stale:
                session.delete(schedule)
            if stale:
                print(f"[INFO] Replacing {len(stale)} previously generated schedules")

        created = []
        for week in weeks:
            schedule = ServiceSchedule(date=week.date, service_type=service_type, auto_generated=True)
            schedule.assignments = [
                ServiceAssignment(person_id=person.id, ministry=ministry.value, confirmed=False)
                for ministry, person in week.people()
            ]
            session.add(schedule)
            created.append(schedule)

        session.commit()
        print(f"[INFO] Persisted {len(created)} schedules to database")
        return created

    @staticmethod
    def load_schedules(
        session: Session,
        year: int | None = None,
        month: int | None = None,
    ) -> List[ScheduleSnapshot]:
        """Snapshot saved schedules, optionally restricted to one month."""
        if year is not None and month is not None:
            records = ScheduleRepository.get_by_month(session, year, month)
        else:
            records = ScheduleRepository.get_all(session)
        return [record.to_snapshot() for record in records]

    @staticmethod
    def load_weekly_assignments(session: Session, year: int, month: int) -> List[WeeklyAssignment]:
        """Rebuild generator-shaped weeks from the saved schedules of a month."""
        people = {p.id: p for p in PersonRepository.load_roster(session)}
        weeks = []
        for record in ScheduleRepository.get_by_month(session, year, month):
            slots: dict[str, list] = {}
            for assignment in record.assignments:
                slots.setdefault(assignment.ministry, []).append(people[assignment.person_id])
            weeks.append(
                WeeklyAssignment(
                    date=record.date,
                    singers=tuple(slots.get(Ministry.SINGER.value, [])),
                    tech=next(iter(slots.get(Ministry.MULTIMEDIA.value, [])), None),
                    scripture_reader=next(iter(slots.get(Ministry.SCRIPTURE_READER.value, [])), None),
                )
            )
        return weeks
