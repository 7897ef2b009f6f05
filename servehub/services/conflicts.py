"""Detection of double bookings within and across service schedules."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from servehub.roster import AssignmentSnapshot, Person, ScheduleSnapshot, WeeklyAssignment

DOUBLE_ASSIGNMENT = "double_assignment"
SAME_DAY_MULTIPLE = "same_day_multiple"


@dataclass(frozen=True)
class ScheduleConflict:
    type: str
    date: date
    person_id: str
    schedule_ids: List[str]
    ministries: List[str]
    severity: str
    person_name: str = ""


def schedules_from_weekly(schedule: Sequence[WeeklyAssignment]) -> List[ScheduleSnapshot]:
    """Convert generator output to schedule snapshots, one per Sunday."""
    return [
        ScheduleSnapshot(
            id=f"auto-{week.date.isoformat()}",
            date=week.date,
            assignments=tuple(
                AssignmentSnapshot(person_id=person.id, ministry=ministry)
                for ministry, person in week.people()
            ),
        )
        for week in schedule
    ]


def detect_double_assignments(schedule: ScheduleSnapshot) -> List[ScheduleConflict]:
    """People holding more than one ministry within a single schedule."""
    by_person: Dict[str, List[str]] = defaultdict(list)
    for assignment in schedule.assignments:
        by_person[assignment.person_id].append(assignment.ministry.value)

    return [
        ScheduleConflict(
            type=DOUBLE_ASSIGNMENT,
            date=schedule.date,
            person_id=person_id,
            schedule_ids=[schedule.id],
            ministries=ministries,
            severity="high",
        )
        for person_id, ministries in by_person.items()
        if len(ministries) > 1
    ]


def detect_same_day_conflicts(schedules: Iterable[ScheduleSnapshot]) -> List[ScheduleConflict]:
    """People assigned in more than one schedule on the same date."""
    by_date: Dict[date, List[ScheduleSnapshot]] = defaultdict(list)
    for schedule in schedules:
        by_date[schedule.date].append(schedule)

    conflicts: List[ScheduleConflict] = []
    for day, day_schedules in by_date.items():
        if len(day_schedules) < 2:
            continue

        schedule_ids: Dict[str, List[str]] = defaultdict(list)
        ministries: Dict[str, List[str]] = defaultdict(list)
        for schedule in day_schedules:
            for assignment in schedule.assignments:
                schedule_ids[assignment.person_id].append(schedule.id)
                ministries[assignment.person_id].append(assignment.ministry.value)

        for person_id, ids in schedule_ids.items():
            # More than one distinct schedule; repeats inside one schedule are double assignments
            if len(set(ids)) > 1:
                conflicts.append(
                    ScheduleConflict(
                        type=SAME_DAY_MULTIPLE,
                        date=day,
                        person_id=person_id,
                        schedule_ids=ids,
                        ministries=ministries[person_id],
                        severity="medium",
                    )
                )
    return conflicts


def get_all_conflicts(
    schedules: Sequence[ScheduleSnapshot],
    people: Optional[Iterable[Person]] = None,
) -> List[ScheduleConflict]:
    conflicts: List[ScheduleConflict] = []
    for schedule in schedules:
        conflicts.extend(detect_double_assignments(schedule))
    conflicts.extend(detect_same_day_conflicts(schedules))

    if people is not None:
        names = {p.id: p.name for p in people}
        conflicts = [replace(c, person_name=names.get(c.person_id, "")) for c in conflicts]
    return conflicts


def format_conflicts(conflicts: Sequence[ScheduleConflict]) -> str:
    if not conflicts:
        return "No conflicts found."
    lines = []
    for c in conflicts:
        who = c.person_name or c.person_id
        lines.append(
            f"[{c.severity.upper()}] {c.date} {who}: {c.type} ({', '.join(c.ministries)})"
        )
    return "\n".join(lines)
