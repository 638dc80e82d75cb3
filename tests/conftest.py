"""Shared fixtures for srna_wig tests."""

import pytest

HEADER = "name,ref_length,strand,position,sequence,mismatches,rep1,rep2"


@pytest.fixture
def write_csv():
    """Return a helper writing an alignment CSV with the given data rows."""

    def _write(path, rows, header=HEADER):
        lines = [header] + [",".join(str(f) for f in row) for row in rows]
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def example_rows():
    """Rows of the chrA worked example plus a second reference."""
    return [
        ("chrA first", 10, "+", 1, "ACG", 0, 2, 4),
        ("chrB", 5, "+", 2, "ACG", 0, 1, 0),
        ("chrA second", 10, "-", 3, "ACG", 0, 1, 1),
    ]
