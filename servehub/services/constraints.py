"""Post-generation validation of monthly schedules."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence, Tuple

from servehub.config import ScheduleRules
from servehub.constants import Gender, Ministry
from servehub.roster import WeeklyAssignment


def validate_monthly_schedule(
    schedule: Sequence[WeeklyAssignment],
    rules: ScheduleRules,
) -> None:
    """
    Validate a generated month against the hard rules.

    Args:
        schedule: Weekly assignments, one per Sunday
        rules: Rules the schedule was generated with

    Raises:
        ValueError: On the first violated rule (quota, gap, exemption, gender,
            or a person holding a role they do not serve)
    """
    counts: Dict[Tuple[str, Ministry], int] = defaultdict(int)
    dates_by_person: Dict[str, List[date]] = defaultdict(list)

    for week in schedule:
        for ministry, person in week.people():
            if not person.serves(ministry):
                raise ValueError(
                    f"{person.name} assigned as {ministry.value} on {week.date} "
                    f"but does not serve in that ministry"
                )
            if not person.is_active:
                raise ValueError(f"Inactive person {person.name} assigned on {week.date}")
            if rules.respect_exemptions and person.is_exempt:
                raise ValueError(f"Exempt person {person.name} assigned on {week.date}")
            if ministry == Ministry.SCRIPTURE_READER and person.gender != Gender.MALE:
                raise ValueError(
                    f"Scripture reader {person.name} on {week.date} is not male"
                )

            counts[(person.id, ministry)] += 1
            dates_by_person[person.id].append(week.date)

    # 1. Monthly quotas per role
    for (person_id, ministry), total in counts.items():
        quota = rules.quota_for(ministry)
        if quota is not None and total > quota:
            raise ValueError(
                f"Person {person_id} exceeds {ministry.value} quota: {total} > {quota}"
            )

    # 2. Minimum gap between any two assignments of one person
    for person_id, dates in dates_by_person.items():
        ordered = sorted(dates)
        for earlier, later in zip(ordered, ordered[1:]):
            gap = (later - earlier).days
            if gap < rules.min_gap_days:
                raise ValueError(
                    f"Person {person_id} assigned {gap} days apart "
                    f"({earlier} and {later}); minimum is {rules.min_gap_days}"
                )
