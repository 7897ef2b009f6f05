"""Tests for post-generation schedule validation."""

from datetime import date

import pytest

from servehub.config import DEFAULT_SCHEDULE_RULES
from servehub.constants import Gender, Ministry
from servehub.roster import Person, WeeklyAssignment
from servehub.services.constraints import validate_monthly_schedule

ANN = Person(id="ann", name="Ann", ministries=frozenset({Ministry.SINGER}), gender=Gender.FEMALE)
HAL = Person(id="hal", name="Hal", ministries=frozenset({Ministry.MULTIMEDIA, Ministry.SINGER}))
JON = Person(id="jon", name="Jon", ministries=frozenset({Ministry.SCRIPTURE_READER}))


def test_valid_schedule_passes():
    schedule = [
        WeeklyAssignment(date=date(2025, 3, 2), singers=(ANN,), tech=HAL, scripture_reader=JON),
        WeeklyAssignment(date=date(2025, 3, 9), tech=HAL, scripture_reader=JON),
    ]
    validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)


def test_quota_violation():
    schedule = [
        WeeklyAssignment(date=date(2025, 3, 2), singers=(ANN,)),
        WeeklyAssignment(date=date(2025, 3, 16), singers=(ANN,)),
    ]
    with pytest.raises(ValueError, match="quota"):
        validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)


def test_gap_violation_across_roles():
    schedule = [
        WeeklyAssignment(date=date(2025, 3, 2), singers=(HAL,)),
        WeeklyAssignment(date=date(2025, 3, 5), tech=HAL),
    ]
    with pytest.raises(ValueError, match="days apart"):
        validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)


def test_two_roles_same_day_violates_gap():
    schedule = [WeeklyAssignment(date=date(2025, 3, 2), singers=(HAL,), tech=HAL)]
    with pytest.raises(ValueError, match="0 days apart"):
        validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)


def test_female_scripture_reader_rejected():
    reader = Person(
        id="ivy", name="Ivy", ministries=frozenset({Ministry.SCRIPTURE_READER}), gender=Gender.FEMALE
    )
    schedule = [WeeklyAssignment(date=date(2025, 3, 2), scripture_reader=reader)]
    with pytest.raises(ValueError, match="not male"):
        validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)


def test_exempt_person_rejected_only_when_respected():
    kim = Person(id="kim", name="Kim", ministries=frozenset({Ministry.SINGER}), is_exempt=True)
    schedule = [WeeklyAssignment(date=date(2025, 3, 2), singers=(kim,))]

    with pytest.raises(ValueError, match="Exempt"):
        validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)
    validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES.replace(respect_exemptions=False))


def test_role_not_served_rejected():
    schedule = [WeeklyAssignment(date=date(2025, 3, 2), tech=ANN)]
    with pytest.raises(ValueError, match="does not serve"):
        validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)


def test_inactive_person_rejected():
    gone = Person(id="leo", name="Leo", ministries=frozenset({Ministry.SINGER}), is_active=False)
    schedule = [WeeklyAssignment(date=date(2025, 3, 2), singers=(gone,))]
    with pytest.raises(ValueError, match="Inactive"):
        validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)
