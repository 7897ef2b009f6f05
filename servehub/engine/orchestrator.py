"""Orchestrator - loads the roster or catalog, runs a generator, validates and persists."""

from __future__ import annotations

import random
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from servehub.config import SchedulerConfig
from servehub.domain.repositories import PersonRepository, ScheduleRepository, SongRepository
from servehub.roster import LineupEntry, WeeklyAssignment
from servehub.services.constraints import validate_monthly_schedule

from .lineup import LineupComposer
from .roles import RoleAssignmentScheduler


def make_rng(cfg: SchedulerConfig, seed: int | None = None) -> random.Random:
    """Random source for a run; an explicit seed wins over the configured one."""
    chosen = seed if seed is not None else cfg.seed
    return random.Random(chosen)


def build_month_schedule(
    session: Session,
    year: int,
    month: int,
    cfg: SchedulerConfig,
    persist: bool = False,
    rng: random.Random | None = None,
) -> List[WeeklyAssignment]:
    """
    Generate, validate and optionally save the schedule for one month.

    Args:
        session: Database session
        year: Calendar year
        month: Calendar month (1-12)
        cfg: SchedulerConfig
        persist: If True, replace earlier generated schedules for these Sundays
        rng: Random source (defaults to one seeded from cfg.seed)

    Returns:
        One WeeklyAssignment per Sunday
    """
    print(f"[INFO] Orchestrator: Building schedule for {year}-{month:02d}")
    people = PersonRepository.load_roster(session)
    print(f"[INFO] Loaded roster: {len(people)} people")

    scheduler = RoleAssignmentScheduler(rng or make_rng(cfg))
    schedule = scheduler.generate(people, year, month, cfg.schedule_rules)

    open_weeks = [
        w.date for w in schedule
        if not w.singers
        or (cfg.schedule_rules.require_tech and w.tech is None)
        or (cfg.schedule_rules.require_scripture_reader and w.scripture_reader is None)
    ]
    for day in open_weeks:
        print(f"[WARN] Unfilled slots on {day}")

    validate_monthly_schedule(schedule, cfg.schedule_rules)
    print(f"[OK] Orchestrator: Generated {len(schedule)} Sundays")

    if persist:
        ScheduleRepository.save_weekly_assignments(session, schedule)

    return schedule


def build_lineup(
    session: Session,
    cfg: SchedulerConfig,
    rng: random.Random | None = None,
    today: date | None = None,
    mark_used: bool = False,
) -> List[LineupEntry]:
    """
    Compose a lineup from the saved catalog.

    Args:
        session: Database session
        cfg: SchedulerConfig
        rng: Random source (defaults to one seeded from cfg.seed)
        today: Reference date for the recency filter and for ``mark_used``
        mark_used: If True, stamp the chosen songs' last-used date with ``today``

    Returns:
        Ordered lineup entries
    """
    today = today or date.today()
    songs = SongRepository.load_catalog(session)
    print(f"[INFO] Loaded catalog: {len(songs)} songs")

    composer = LineupComposer(rng or make_rng(cfg))
    lineup = composer.generate(songs, cfg.lineup_rules, today)

    if len(lineup) < cfg.lineup_rules.min_songs:
        print(f"[WARN] Lineup has {len(lineup)} songs, below minimum {cfg.lineup_rules.min_songs}")
    if len(lineup) > cfg.lineup_rules.max_songs:
        print(f"[WARN] Lineup has {len(lineup)} songs, above maximum {cfg.lineup_rules.max_songs}")

    if mark_used:
        updated = SongRepository.mark_used(session, [e.song.id for e in lineup], today)
        print(f"[INFO] Marked {updated} songs as used on {today}")

    print(f"[OK] Orchestrator: Composed lineup of {len(lineup)} songs")
    return lineup
