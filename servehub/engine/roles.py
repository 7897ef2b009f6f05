"""Monthly ministry role assignment (singers, tech, scripture reader)."""

from __future__ import annotations

import random
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from servehub.config import DEFAULT_SCHEDULE_RULES, ScheduleRules
from servehub.constants import Gender, Ministry, priority_sort_key
from servehub.reporting import format_schedule_to_text
from servehub.roster import Person, TrackerState, WeeklyAssignment

from .base import BaseGenerator, shuffle


def get_sundays_in_month(year: int, month: int) -> List[date]:
    """Every Sunday in the given month, in chronological order."""
    start = pd.Timestamp(year=year, month=month, day=1)
    end = start + pd.offsets.MonthEnd(0)
    return [ts.date() for ts in pd.date_range(start, end, freq="W-SUN")]


def can_assign(
    person: Person,
    ministry: Ministry,
    when: date,
    state: TrackerState,
    rules: ScheduleRules,
) -> bool:
    """
    Check the quota and gap rules for one person on one date.

    Args:
        person: Candidate
        ministry: Role being filled (singer, multimedia or scripture_reader)
        when: Service date
        state: Trackers accumulated so far this run
        rules: Scheduling rules

    Returns:
        True if the person is below the role's monthly quota and has no
        assignment (any role) fewer than ``min_gap_days`` days before ``when``
    """
    quota = rules.quota_for(ministry)
    if quota is not None and state.tracker_for(ministry).count(person.id) >= quota:
        return False

    last = state.last_assigned_any(person.id)
    if last is not None and (when - last).days < rules.min_gap_days:
        return False

    return True


def is_eligible(
    person: Person,
    ministry: Ministry,
    rules: ScheduleRules,
    gender: Optional[Gender] = None,
) -> bool:
    """Static eligibility: active, serves the role, gender filter, exemption."""
    if not person.is_active:
        return False
    if not person.serves(ministry):
        return False
    if gender is not None and person.gender != gender:
        return False
    if rules.respect_exemptions and person.is_exempt:
        return False
    return True


def available_people(
    people: Iterable[Person],
    ministry: Ministry,
    when: date,
    state: TrackerState,
    rules: ScheduleRules,
    gender: Optional[Gender] = None,
) -> List[Person]:
    """Eligible people for a slot, highest priority first (stable within a tier)."""
    pool = [
        p for p in people
        if is_eligible(p, ministry, rules, gender) and can_assign(p, ministry, when, state, rules)
    ]
    return sorted(pool, key=lambda p: priority_sort_key(p.priority))


def _least_assigned(candidates: Sequence[Person], ministry: Ministry, state: TrackerState) -> Optional[Person]:
    if not candidates:
        return None
    tracker = state.tracker_for(ministry)
    # sorted() is stable, so ties keep the eligibility order
    return sorted(candidates, key=lambda p: tracker.count(p.id))[0]


class RoleAssignmentScheduler(BaseGenerator):
    """
    Assign singers, a tech operator and a scripture reader to every Sunday of a month.

    Trackers start empty on every ``generate`` call and are threaded through
    the Sundays by ``assign_week``; nothing is shared between calls.
    """

    name = "ROLES"

    def assign_week(
        self,
        people: Sequence[Person],
        sunday: date,
        state: TrackerState,
        rules: ScheduleRules,
    ) -> Tuple[WeeklyAssignment, TrackerState]:
        """Fill one Sunday and return it together with the updated trackers."""
        # 1. Singers: priority sort, then shuffle so roster order is not favoured
        singers_pool = available_people(people, Ministry.SINGER, sunday, state, rules)
        count = max(0, min(rules.singers_per_service, len(singers_pool)))
        singers = shuffle(singers_pool, self.rng)[:count]
        for singer in singers:
            state = state.record(Ministry.SINGER, singer.id, sunday)

        # 2. Tech: least assigned so far
        tech = None
        if rules.require_tech:
            tech_pool = available_people(people, Ministry.MULTIMEDIA, sunday, state, rules)
            tech = _least_assigned(tech_pool, Ministry.MULTIMEDIA, state)
            if tech is not None:
                state = state.record(Ministry.MULTIMEDIA, tech.id, sunday)

        # 3. Scripture reader: male only
        reader = None
        if rules.require_scripture_reader:
            reader_pool = available_people(
                people, Ministry.SCRIPTURE_READER, sunday, state, rules, gender=Gender.MALE
            )
            reader = _least_assigned(reader_pool, Ministry.SCRIPTURE_READER, state)
            if reader is not None:
                state = state.record(Ministry.SCRIPTURE_READER, reader.id, sunday)

        week = WeeklyAssignment(
            date=sunday,
            singers=tuple(singers),
            tech=tech,
            scripture_reader=reader,
        )
        return week, state

    def generate(
        self,
        people: Sequence[Person],
        year: int,
        month: int,
        rules: ScheduleRules | None = None,
    ) -> List[WeeklyAssignment]:
        """
        Generate one WeeklyAssignment per Sunday of ``year``/``month``.

        Unsatisfiable rules leave slots empty instead of raising.
        """
        rules = rules or DEFAULT_SCHEDULE_RULES
        roster = list(people)
        state = TrackerState()
        schedule: List[WeeklyAssignment] = []
        for sunday in get_sundays_in_month(year, month):
            week, state = self.assign_week(roster, sunday, state, rules)
            schedule.append(week)
        return schedule

    def render(self, result: Sequence[WeeklyAssignment], title: str | None = None) -> str:
        return format_schedule_to_text(result, title)


def generate_monthly_schedule(
    people: Sequence[Person],
    year: int,
    month: int,
    rules: ScheduleRules | None = None,
    rng: random.Random | None = None,
) -> List[WeeklyAssignment]:
    """Convenience wrapper around RoleAssignmentScheduler."""
    return RoleAssignmentScheduler(rng).generate(people, year, month, rules)
