"""End-to-end tests for the command-line interface."""

import pandas as pd
import pytest

from servehub.cli import main


@pytest.fixture
def csv_files(tmp_path):
    people = tmp_path / "people.csv"
    people.write_text(
        "id,name,ministries,gender\n"
        "p1,Ann,singer,female\n"
        "p2,Ben,singer;scripture_reader,male\n"
        "p3,Cal,multimedia,male\n"
        "p4,Dee,singer,female\n"
    )
    songs = tmp_path / "songs.csv"
    songs.write_text(
        "id,title,genre,tempo\n"
        "s1,Holy,adoration,slow\n"
        "s2,Thank You,thanksgiving,fast\n"
        "s3,Search Me,confession,moderate\n"
        "s4,Hear Us,supplication,slow\n"
        "s5,Shout,praise_worship,fast\n"
    )
    return people, songs


@pytest.mark.integration
def test_cli_round_trip(tmp_path, csv_files, capsys):
    db = f"sqlite:///{tmp_path / 'servehub.db'}"
    people, songs = csv_files
    out = tmp_path / "march.csv"

    main(["--db", db, "init-db"])
    main(["--db", db, "import-csv", "--people", str(people), "--songs", str(songs)])
    main([
        "--db", db, "generate-schedule", "--year", "2025", "--month", "3",
        "--seed", "1", "--save", "--out", str(out),
    ])
    main(["--db", db, "validate", "--year", "2025", "--month", "3"])
    main(["--db", db, "conflicts", "--year", "2025", "--month", "3"])
    main(["--db", db, "generate-lineup", "--seed", "2"])
    main(["--db", db, "stats"])

    text = capsys.readouterr().out
    assert "[OK] Imported 4 people" in text
    assert "MUSIC TEAM SCHEDULE" in text
    assert "[OK] Validation passed for 2025-03" in text
    assert "No conflicts found." in text
    assert "WORSHIP SONG LINEUP" in text
    assert "Generated by ServeHub" in text
    assert not pd.read_csv(out).empty


def test_cli_requires_command():
    with pytest.raises(SystemExit):
        main([])
