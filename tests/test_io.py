"""Tests for srna_wig.io module."""

import pytest

from srna_wig.io import load_profiles
from srna_wig.records import AlignmentFact, ReadLengthError


def test_load_profiles_groups_by_key(tmp_path, write_csv, example_rows):
    path = write_csv(tmp_path / "reads_3.csv", example_rows)
    read_length, profiles, stats = load_profiles(str(path))
    assert read_length == 3
    assert list(profiles) == ["chrA", "chrB"]
    assert profiles["chrA"] == [
        AlignmentFact(10, 1, 3.0),
        AlignmentFact(10, 3, 1.0),
    ]
    assert profiles["chrB"] == [AlignmentFact(5, 2, 0.5)]
    assert stats["rows_read"] == 3
    assert stats["rows_kept"] == 3


def test_load_profiles_no_zeros(tmp_path, write_csv, example_rows):
    path = write_csv(tmp_path / "reads_3.csv", example_rows)
    _, profiles, stats = load_profiles(str(path), no_zeros=True)
    assert "chrB" not in profiles
    assert len(profiles["chrA"]) == 2
    assert stats["zero_replicate"] == 1
    assert stats["rows_kept"] == 2


def test_load_profiles_skips_bad_rows(tmp_path, write_csv):
    rows = [
        ("chrA", 10, "+", 1, "ACG", 0, 2, 4),
        ("chrA", "ten", "+", 1, "ACG", 0, 2, 4),
        ("chrA", 10, "+", 2),
    ]
    path = write_csv(tmp_path / "reads_21.csv", rows)
    _, profiles, stats = load_profiles(str(path))
    assert profiles == {"chrA": [AlignmentFact(10, 1, 3.0)]}
    assert stats["malformed_number"] == 1
    assert stats["too_few_fields"] == 1
    assert stats["rows_read"] == 3


def test_load_profiles_header_only(tmp_path, write_csv):
    path = write_csv(tmp_path / "reads_21.csv", [])
    read_length, profiles, stats = load_profiles(str(path))
    assert read_length == 21
    assert profiles == {}
    assert stats["rows_read"] == 0


def test_load_profiles_empty_file(tmp_path):
    path = tmp_path / "reads_21.csv"
    path.write_text("")
    _, profiles, _ = load_profiles(str(path))
    assert profiles == {}


def test_load_profiles_keeps_row_order(tmp_path, write_csv):
    rows = [("chrA", 100, "+", pos, "ACG", 0, pos, pos) for pos in range(1, 21)]
    path = write_csv(tmp_path / "reads_21.csv", rows)
    _, profiles, _ = load_profiles(str(path))
    assert [f.position for f in profiles["chrA"]] == list(range(1, 21))


def test_load_profiles_bad_filename(tmp_path, write_csv, example_rows):
    path = write_csv(tmp_path / "reads.csv", example_rows)
    with pytest.raises(ReadLengthError):
        load_profiles(str(path))


# --- rows wider or narrower than the header ---


def test_load_profiles_row_wider_than_header(tmp_path, write_csv):
    rows = [
        ("chrA", 10, "+", 1, "ACG", 0, 2, 4),
        ("chrA", 10, "+", 3, "ACG", 0, 1, 1, 1),
    ]
    path = write_csv(tmp_path / "reads_3.csv", rows)
    _, profiles, stats = load_profiles(str(path))
    assert profiles["chrA"] == [
        AlignmentFact(10, 1, 3.0),
        AlignmentFact(10, 3, 1.0),
    ]
    assert stats["rows_kept"] == 2


def test_load_profiles_mixed_replicate_counts(tmp_path, write_csv):
    rows = [
        ("chrA", 10, "+", 1, "ACG", 0, 3),
        ("chrA", 10, "+", 2, "ACG", 0, 1, 2, 6),
    ]
    path = write_csv(tmp_path / "reads_3.csv", rows)
    _, profiles, _ = load_profiles(str(path))
    assert [f.mean_count for f in profiles["chrA"]] == [3.0, 3.0]


def test_load_profiles_one_column_header(tmp_path, write_csv):
    rows = [
        ("chrA", 10, "+", 1, "ACG", 0, 2, 4),
        ("chrB", 8, "+", 2, "ACG", 0, 1, 1),
    ]
    path = write_csv(tmp_path / "reads_3.csv", rows, header="header")
    _, profiles, stats = load_profiles(str(path))
    assert profiles == {
        "chrA": [AlignmentFact(10, 1, 3.0)],
        "chrB": [AlignmentFact(8, 2, 1.0)],
    }
    assert stats["rows_kept"] == 2
    assert stats["too_few_fields"] == 0


def test_load_profiles_quoted_identifier(tmp_path, write_csv):
    rows = [('"chrA some, description"', 10, "+", 1, "ACG", 0, 2, 4)]
    path = write_csv(tmp_path / "reads_3.csv", rows)
    _, profiles, _ = load_profiles(str(path))
    assert profiles == {"chrA": [AlignmentFact(10, 1, 3.0)]}
