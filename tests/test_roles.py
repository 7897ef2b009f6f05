"""Tests for the monthly role assignment scheduler."""

import random
from datetime import date

import pytest

from servehub.config import DEFAULT_SCHEDULE_RULES, ScheduleRules
from servehub.constants import Gender, Ministry, Priority
from servehub.engine.roles import (
    RoleAssignmentScheduler,
    available_people,
    can_assign,
    generate_monthly_schedule,
    get_sundays_in_month,
)
from servehub.roster import Person, TrackerState
from servehub.services.constraints import validate_monthly_schedule

SINGER = Ministry.SINGER
TECH = Ministry.MULTIMEDIA
READER = Ministry.SCRIPTURE_READER


def person(pid, *ministries, gender=Gender.MALE, **kwargs):
    return Person(id=pid, name=pid.title(), ministries=frozenset(ministries), gender=gender, **kwargs)


@pytest.fixture
def full_roster():
    """A church-sized roster covering every generated role."""
    return [
        person("ann", SINGER, gender=Gender.FEMALE),
        person("bea", SINGER, gender=Gender.FEMALE, priority=Priority.HIGH),
        person("cat", SINGER, TECH, gender=Gender.FEMALE),
        person("dan", SINGER, READER),
        person("eli", SINGER),
        person("fay", SINGER, gender=Gender.FEMALE, priority=Priority.LOW),
        person("gus", TECH, READER),
        person("hal", TECH),
        person("ivy", READER, gender=Gender.FEMALE),
        person("jon", READER),
        person("kim", SINGER, gender=Gender.FEMALE, is_exempt=True),
        person("leo", SINGER, TECH, READER, is_active=False),
    ]


def test_sundays_in_march_2025():
    assert get_sundays_in_month(2025, 3) == [
        date(2025, 3, 2),
        date(2025, 3, 9),
        date(2025, 3, 16),
        date(2025, 3, 23),
        date(2025, 3, 30),
    ]


def test_sundays_in_february_2026():
    sundays = get_sundays_in_month(2026, 2)
    assert len(sundays) == 4
    assert all(d.weekday() == 6 for d in sundays)
    assert sundays[0] == date(2026, 2, 1)


def test_empty_roster_gives_empty_weeks():
    schedule = generate_monthly_schedule([], 2025, 3, DEFAULT_SCHEDULE_RULES, rng=random.Random(0))

    assert [w.date for w in schedule] == get_sundays_in_month(2025, 3)
    for week in schedule:
        assert week.singers == ()
        assert week.tech is None
        assert week.scripture_reader is None


def test_single_singer_serves_once_per_month():
    roster = [person("ann", SINGER, gender=Gender.FEMALE)]
    rules = DEFAULT_SCHEDULE_RULES.replace(singers_per_month=1)

    schedule = generate_monthly_schedule(roster, 2025, 3, rules, rng=random.Random(1))

    weeks_with_ann = [w for w in schedule if roster[0] in w.singers]
    assert len(weeks_with_ann) == 1
    assert sum(1 for w in schedule if not w.singers) == 4


@pytest.mark.parametrize("seed", range(25))
def test_generated_month_passes_validation(full_roster, seed):
    schedule = generate_monthly_schedule(full_roster, 2025, 3, rng=random.Random(seed))
    validate_monthly_schedule(schedule, DEFAULT_SCHEDULE_RULES)


@pytest.mark.parametrize("seed", range(10))
def test_nobody_holds_two_roles_on_one_sunday(full_roster, seed):
    schedule = generate_monthly_schedule(full_roster, 2025, 3, rng=random.Random(seed))

    for week in schedule:
        ids = [p.id for _, p in week.people()]
        assert len(ids) == len(set(ids))


def test_exempt_inactive_and_female_readers_never_scheduled(full_roster):
    for seed in range(20):
        schedule = generate_monthly_schedule(full_roster, 2025, 3, rng=random.Random(seed))
        for week in schedule:
            names = {p.id for _, p in week.people()}
            assert "kim" not in names
            assert "leo" not in names
            if week.scripture_reader is not None:
                assert week.scripture_reader.gender == Gender.MALE


def test_exemptions_ignored_when_not_respected():
    kim = person("kim", SINGER, gender=Gender.FEMALE, is_exempt=True)
    rules = DEFAULT_SCHEDULE_RULES.replace(respect_exemptions=False)

    schedule = generate_monthly_schedule([kim], 2025, 3, rules, rng=random.Random(0))

    assert schedule[0].singers == (kim,)


def test_tech_goes_to_least_assigned_in_roster_order():
    alice = person("alice", TECH, gender=Gender.FEMALE)
    bob = person("bob", TECH)
    rules = DEFAULT_SCHEDULE_RULES.replace(tech_per_month=2)

    schedule = generate_monthly_schedule([alice, bob], 2025, 3, rules, rng=random.Random(0))

    assert [w.tech for w in schedule] == [alice, bob, alice, bob, None]


def test_zero_quota_leaves_slot_empty():
    rules = DEFAULT_SCHEDULE_RULES.replace(tech_per_month=0)
    schedule = generate_monthly_schedule([person("hal", TECH)], 2025, 3, rules, rng=random.Random(0))

    assert all(w.tech is None for w in schedule)


def test_optional_roles_can_be_switched_off(full_roster):
    rules = DEFAULT_SCHEDULE_RULES.replace(require_tech=False, require_scripture_reader=False)

    schedule = generate_monthly_schedule(full_roster, 2025, 3, rules, rng=random.Random(3))

    assert all(w.tech is None and w.scripture_reader is None for w in schedule)
    assert schedule[0].singers


def test_singers_per_service_caps_each_week(full_roster):
    rules = DEFAULT_SCHEDULE_RULES.replace(singers_per_service=2, singers_per_month=4, min_gap_days=0)

    schedule = generate_monthly_schedule(full_roster, 2025, 3, rules, rng=random.Random(5))

    assert all(len(w.singers) == 2 for w in schedule)


def test_same_seed_gives_same_schedule(full_roster):
    first = generate_monthly_schedule(full_roster, 2025, 3, rng=random.Random(42))
    second = generate_monthly_schedule(full_roster, 2025, 3, rng=random.Random(42))
    assert first == second


def test_generate_does_not_share_trackers_between_calls():
    roster = [person("ann", SINGER, gender=Gender.FEMALE)]
    scheduler = RoleAssignmentScheduler(random.Random(0))

    march = scheduler.generate(roster, 2025, 3)
    april = scheduler.generate(roster, 2025, 4)

    assert march[0].singers == (roster[0],)
    assert april[0].singers == (roster[0],)


def test_can_assign_enforces_gap_across_roles():
    hal = person("hal", SINGER, TECH)
    sunday = date(2025, 3, 2)
    state = TrackerState().record(SINGER, hal.id, sunday)

    assert not can_assign(hal, TECH, sunday, state, DEFAULT_SCHEDULE_RULES)
    assert not can_assign(hal, TECH, date(2025, 3, 8), state, DEFAULT_SCHEDULE_RULES)
    assert can_assign(hal, TECH, date(2025, 3, 9), state, DEFAULT_SCHEDULE_RULES)


def test_can_assign_enforces_quota():
    hal = person("hal", TECH)
    rules = ScheduleRules(tech_per_month=1)
    state = TrackerState().record(TECH, hal.id, date(2025, 3, 2))

    assert not can_assign(hal, TECH, date(2025, 3, 30), state, rules)
    assert can_assign(hal, TECH, date(2025, 3, 30), state, rules.replace(tech_per_month=2))


def test_tracker_record_returns_new_state():
    empty = TrackerState()
    updated = empty.record(TECH, "hal", date(2025, 3, 2))

    assert empty.tech.count("hal") == 0
    assert updated.tech.count("hal") == 1
    assert updated.last_assigned_any("hal") == date(2025, 3, 2)
    assert updated.last_assigned_any("nobody") is None


def test_available_people_sorted_by_priority():
    low = person("low", SINGER, priority=Priority.LOW)
    normal = person("normal", SINGER)
    high = person("high", SINGER, priority=Priority.HIGH)
    normal2 = person("normal2", SINGER)

    pool = available_people(
        [low, normal, high, normal2], SINGER, date(2025, 3, 2), TrackerState(), DEFAULT_SCHEDULE_RULES
    )

    assert [p.id for p in pool] == ["high", "normal", "normal2", "low"]


def test_render_uses_schedule_transcript(full_roster):
    scheduler = RoleAssignmentScheduler(random.Random(0))
    schedule = scheduler.generate(full_roster, 2025, 3)

    text = scheduler.render(schedule, "MARCH")

    assert text.startswith("MARCH\n=====\n")
    assert "Mar 30" in text
    assert scheduler.get_name() == "ROLES"
