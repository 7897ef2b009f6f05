"""Command-line interface for ServeHub scheduling."""

from __future__ import annotations

import argparse

from servehub.config import load_config
from servehub.domain.db import DEFAULT_DB_URL, get_session, init_database
from servehub.domain.repositories import PersonRepository, ScheduleRepository, SongRepository
from servehub.engine.orchestrator import build_lineup, build_month_schedule, make_rng
from servehub.io.export_csv import export_lineup_csv, export_schedule_csv
from servehub.io.import_csv import import_people_csv, import_songs_csv
from servehub.reporting import format_lineup_to_text, format_schedule_to_text, summarize_schedule
from servehub.services.analytics import (
    calculate_ministry_stats,
    calculate_person_stats,
    calculate_song_stats,
    format_person_stats,
    get_least_active,
)
from servehub.services.conflicts import format_conflicts, get_all_conflicts
from servehub.services.constraints import validate_monthly_schedule


def _db_url(args: argparse.Namespace, cfg=None) -> str:
    if args.db:
        return args.db
    if cfg is not None:
        return cfg.db_url
    return DEFAULT_DB_URL


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = _db_url(args)
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import people and songs CSVs into the database."""
    session = get_session(_db_url(args))

    try:
        if args.people:
            count = import_people_csv(session, args.people)
            print(f"[OK] Imported {count} people")

        if args.songs:
            count = import_songs_csv(session, args.songs)
            print(f"[OK] Imported {count} songs")

        session.close()
        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_generate_schedule(args: argparse.Namespace) -> None:
    """Generate the Sunday schedule for a month."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        rng = make_rng(cfg, args.seed)
        schedule = build_month_schedule(session, args.year, args.month, cfg, persist=args.save, rng=rng)

        print()
        print(format_schedule_to_text(schedule, args.title or cfg.schedule_title))
        print(summarize_schedule(schedule))

        if args.out:
            export_schedule_csv(schedule, args.out)

        session.close()

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Generation failed: {e}")
        raise


def _cmd_generate_lineup(args: argparse.Namespace) -> None:
    """Compose a song lineup from the catalog."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        rng = make_rng(cfg, args.seed)
        lineup = build_lineup(session, cfg, rng=rng, mark_used=args.mark_used)

        print()
        print(format_lineup_to_text(lineup, args.title or cfg.lineup_title))

        if args.out:
            export_lineup_csv(lineup, args.out)

        session.close()

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Lineup generation failed: {e}")
        raise


def _cmd_validate(args: argparse.Namespace) -> None:
    """Validate the saved schedules of a month against the rules."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        weeks = ScheduleRepository.load_weekly_assignments(session, args.year, args.month)

        validate_monthly_schedule(weeks, cfg.schedule_rules)
        session.close()
        print(f"[OK] Validation passed for {args.year}-{args.month:02d}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Validation failed: {e}")
        raise


def _cmd_conflicts(args: argparse.Namespace) -> None:
    """Report double bookings across saved schedules."""
    session = get_session(_db_url(args))

    try:
        schedules = ScheduleRepository.load_schedules(session, args.year, args.month)
        people = PersonRepository.load_roster(session)
        conflicts = get_all_conflicts(schedules, people)
        print(format_conflicts(conflicts))
        session.close()

    except Exception as e:
        session.close()
        print(f"[ERROR] Conflict check failed: {e}")
        raise


def _cmd_stats(args: argparse.Namespace) -> None:
    """Print serving and song usage statistics."""
    session = get_session(_db_url(args))

    try:
        schedules = ScheduleRepository.load_schedules(session)
        people = PersonRepository.load_roster(session)
        songs = SongRepository.load_catalog(session)

        person_stats = calculate_person_stats(schedules, people)
        print("Assignments per person:")
        print(format_person_stats(person_stats))
        print()

        print("Ministries:")
        for m in calculate_ministry_stats(schedules):
            print(
                f"  {m.ministry.value}: {m.total_assignments} assignments, "
                f"{m.unique_people} people, {m.average_per_month:.1f}/month"
            )
        print()

        print("Least active:")
        for s in get_least_active(person_stats, args.limit):
            print(f"  {s.person_name}: {s.total_assignments}")
        print()

        print("Songs by last use:")
        for s in calculate_song_stats(songs)[: args.limit]:
            print(f"  {s.song_title}: {s.last_used or 'never'}")

        session.close()

    except Exception as e:
        session.close()
        print(f"[ERROR] Stats failed: {e}")
        raise


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="servehub",
        description="ServeHub ministry scheduling and song lineups",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: config db_url or {DEFAULT_DB_URL})")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import people and songs CSVs into database")
    imp.add_argument("--people", help="Path to people CSV")
    imp.add_argument("--songs", help="Path to songs CSV")
    imp.set_defaults(func=_cmd_import_csv)

    # generate-schedule command
    gen = sub.add_parser("generate-schedule", help="Generate the Sunday schedule for a month")
    gen.add_argument("--year", type=int, required=True)
    gen.add_argument("--month", type=int, required=True, choices=range(1, 13), metavar="MONTH")
    gen.add_argument("--config", help="Path to config YAML/JSON")
    gen.add_argument("--title", help="Transcript title")
    gen.add_argument("--seed", type=int, help="Random seed for a reproducible schedule")
    gen.add_argument("--save", action="store_true", help="Persist the schedule to the database")
    gen.add_argument("--out", help="Optional: export assignments to CSV")
    gen.set_defaults(func=_cmd_generate_schedule)

    # generate-lineup command
    lin = sub.add_parser("generate-lineup", help="Compose a worship song lineup")
    lin.add_argument("--config", help="Path to config YAML/JSON")
    lin.add_argument("--title", help="Transcript title")
    lin.add_argument("--seed", type=int, help="Random seed for a reproducible lineup")
    lin.add_argument("--mark-used", action="store_true", help="Stamp chosen songs as used today")
    lin.add_argument("--out", help="Optional: export lineup to CSV")
    lin.set_defaults(func=_cmd_generate_lineup)

    # validate command
    val = sub.add_parser("validate", help="Validate saved schedules for a month")
    val.add_argument("--year", type=int, required=True)
    val.add_argument("--month", type=int, required=True, choices=range(1, 13), metavar="MONTH")
    val.add_argument("--config", help="Path to config YAML/JSON")
    val.set_defaults(func=_cmd_validate)

    # conflicts command
    con = sub.add_parser("conflicts", help="Report double bookings in saved schedules")
    con.add_argument("--year", type=int)
    con.add_argument("--month", type=int, choices=range(1, 13), metavar="MONTH")
    con.set_defaults(func=_cmd_conflicts)

    # stats command
    st = sub.add_parser("stats", help="Print serving and song usage statistics")
    st.add_argument("--limit", type=int, default=5)
    st.set_defaults(func=_cmd_stats)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
