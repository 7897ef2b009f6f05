"""Tests for serving and song usage statistics."""

from datetime import date

from servehub.constants import Ministry, SongGenre
from servehub.roster import AssignmentSnapshot, Person, ScheduleSnapshot, Song
from servehub.services.analytics import (
    calculate_ministry_stats,
    calculate_person_stats,
    calculate_song_stats,
    format_person_stats,
    get_least_active,
    get_top_performers,
)

PEOPLE = [Person(id="ann", name="Ann"), Person(id="ben", name="Ben"), Person(id="cal", name="Cal")]


def schedules():
    return [
        ScheduleSnapshot(
            id="1",
            date=date(2025, 3, 2),
            assignments=(
                AssignmentSnapshot("ann", Ministry.SINGER),
                AssignmentSnapshot("ben", Ministry.MULTIMEDIA),
            ),
        ),
        ScheduleSnapshot(
            id="2",
            date=date(2025, 3, 9),
            assignments=(
                AssignmentSnapshot("ann", Ministry.SCRIPTURE_READER),
                AssignmentSnapshot("zed", Ministry.SINGER),
            ),
        ),
    ]


def test_person_stats_counts_and_order():
    stats = calculate_person_stats(schedules(), PEOPLE)

    assert [s.person_id for s in stats] == ["ann", "ben", "cal"]
    ann = stats[0]
    assert ann.total_assignments == 2
    assert ann.by_ministry == {"singer": 1, "scripture_reader": 1}
    assert ann.last_served == date(2025, 3, 9)
    assert stats[2].total_assignments == 0
    assert stats[2].last_served is None


def test_top_and_least_active():
    stats = calculate_person_stats(schedules(), PEOPLE)

    assert [s.person_id for s in get_top_performers(stats, 1)] == ["ann"]
    assert [s.person_id for s in get_least_active(stats)] == ["ben", "ann"]


def test_ministry_stats():
    stats = calculate_ministry_stats(schedules(), today=date(2025, 3, 31))

    by_ministry = {m.ministry: m for m in stats}
    assert by_ministry[Ministry.SINGER].total_assignments == 2
    assert by_ministry[Ministry.SINGER].unique_people == 2
    assert by_ministry[Ministry.SINGER].average_per_month == 2.0
    assert stats[0].ministry == Ministry.SINGER
    assert calculate_ministry_stats([]) == []


def test_song_stats_recent_first_then_unused():
    songs = [
        Song(id="a", title="A", genre=SongGenre.HYMNAL),
        Song(id="b", title="B", last_used=date(2025, 1, 5)),
        Song(id="c", title="C", last_used=date(2025, 3, 1)),
    ]

    stats = calculate_song_stats(songs)

    assert [s.song_id for s in stats] == ["c", "b", "a"]
    assert stats[2].genres == ["hymnal"]


def test_format_person_stats():
    text = format_person_stats(calculate_person_stats(schedules(), PEOPLE))
    assert "Ann" in text
    assert "scripture_reader" in text
    assert format_person_stats([]) == "No people."
