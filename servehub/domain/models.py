"""SQLAlchemy models for the ServeHub roster, song catalog and saved schedules."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, relationship

from servehub.constants import Gender, Ministry, Priority, SongGenre, SongLanguage, Tempo
from servehub.roster import AssignmentSnapshot, Person, ScheduleSnapshot, Song


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.replace(";", ",").split(",") if part.strip()]


class PersonRecord(Base):
    """A church member who can serve in one or more ministries."""

    __tablename__ = "people"

    id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(200), nullable=True)
    ministries = Column(String(200), nullable=False, default="")  # comma-separated Ministry values
    gender = Column(String(10), nullable=False, default=Gender.MALE.value)
    is_active = Column(Boolean, nullable=False, default=True)
    is_exempt = Column(Boolean, nullable=False, default=False)
    priority = Column(String(10), nullable=False, default=Priority.NORMAL.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    assignments = relationship("ServiceAssignment", back_populates="person")

    def to_snapshot(self) -> Person:
        return Person(
            id=self.id,
            name=self.name,
            ministries=frozenset(Ministry(m) for m in split_list(self.ministries)),
            gender=Gender(self.gender),
            is_active=bool(self.is_active),
            is_exempt=bool(self.is_exempt),
            priority=Priority.parse(self.priority),
            phone=self.phone,
            email=self.email,
        )

    def __repr__(self) -> str:
        return f"<PersonRecord(id={self.id}, name='{self.name}', ministries='{self.ministries}')>"


class SongRecord(Base):
    """A song in the church catalog."""

    __tablename__ = "songs"

    id = Column(String(64), primary_key=True)
    title = Column(String(200), nullable=False)
    artist = Column(String(200), nullable=True)
    genre = Column(String(20), nullable=True)
    language = Column(String(20), nullable=False, default=SongLanguage.ENGLISH.value)
    lyrics = Column(Text, nullable=False, default="")
    chords = Column(Text, nullable=True)
    key = Column(String(10), nullable=True)
    tempo = Column(String(10), nullable=True)  # slow, moderate, fast
    last_used = Column(Date, nullable=True)
    tags = Column(String(500), nullable=True)  # comma-separated
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_snapshot(self) -> Song:
        return Song(
            id=self.id,
            title=self.title,
            artist=self.artist,
            genre=SongGenre(self.genre) if self.genre else None,
            language=SongLanguage(self.language),
            lyrics=self.lyrics or "",
            chords=self.chords,
            key=self.key,
            tempo=Tempo.parse(self.tempo),
            last_used=self.last_used,
            tags=tuple(split_list(self.tags)),
        )

    def __repr__(self) -> str:
        return f"<SongRecord(id={self.id}, title='{self.title}', genre={self.genre}, tempo={self.tempo})>"


class ServiceSchedule(Base):
    """One service on one date."""

    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False)
    service_type = Column(String(20), nullable=False, default="sunday_morning")
    notes = Column(Text, nullable=True)
    auto_generated = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    assignments = relationship(
        "ServiceAssignment", back_populates="schedule", cascade="all, delete-orphan"
    )

    def to_snapshot(self) -> ScheduleSnapshot:
        return ScheduleSnapshot(
            id=str(self.id),
            date=self.date,
            assignments=tuple(
                AssignmentSnapshot(
                    person_id=a.person_id,
                    ministry=Ministry(a.ministry),
                    confirmed=bool(a.confirmed),
                )
                for a in self.assignments
            ),
            service_type=self.service_type,
            notes=self.notes,
        )

    def __repr__(self) -> str:
        return f"<ServiceSchedule(id={self.id}, date={self.date}, type={self.service_type})>"


class ServiceAssignment(Base):
    """A person serving in one ministry at one service."""

    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    schedule_id = Column(Integer, ForeignKey("schedules.id"), nullable=False)
    person_id = Column(String(64), ForeignKey("people.id"), nullable=False)
    ministry = Column(String(20), nullable=False)
    confirmed = Column(Boolean, nullable=False, default=False)

    schedule = relationship("ServiceSchedule", back_populates="assignments")
    person = relationship("PersonRecord", back_populates="assignments")

    def __repr__(self) -> str:
        return f"<ServiceAssignment(id={self.id}, schedule={self.schedule_id}, person={self.person_id}, ministry={self.ministry})>"
