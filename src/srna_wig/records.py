"""Row parsing for small-RNA alignment CSV records."""

import logging
import os
import re
from typing import NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)

# Column layout of an alignment row
KEY_FIELD = 0
REF_LENGTH_FIELD = 1
POSITION_FIELD = 3
FIRST_COUNT_FIELD = 6
MIN_FIELDS = FIRST_COUNT_FIELD + 1

# Skip reasons reported in RowResult.skip_reason
TOO_FEW_FIELDS = "too_few_fields"
MISSING_KEY = "missing_key"
MALFORMED_NUMBER = "malformed_number"
ZERO_REPLICATE = "zero_replicate"

# Plain decimal integers only: no digit separators or non-ASCII digits
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class ReadLengthError(ValueError):
    """Raised when the read length cannot be derived from a filename."""


class AlignmentFact(NamedTuple):
    reference_length: int
    position: int
    mean_count: float


class RowResult(NamedTuple):
    key: Optional[str]
    fact: Optional[AlignmentFact]
    skip_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fact is not None


def parse_read_length(path: str) -> int:
    """
    Derive the read length from an input filename.

    The read length is the segment after the last underscore, up to the
    first dot, e.g. ``sample_siRNA_21.csv`` -> 21.

    Args:
        path: Input file path

    Returns:
        Positive read length

    Raises:
        ReadLengthError: If the segment is not a positive integer
    """
    name = os.path.basename(str(path))
    segment = name.split("_")[-1].split(".")[0]
    try:
        read_length = int(segment)
    except ValueError:
        raise ReadLengthError(
            f"Cannot derive read length from filename {name!r} "
            f"(expected '<prefix>_<length>.<ext>')"
        ) from None
    if read_length < 1:
        raise ReadLengthError(f"Read length must be positive, got {read_length} from {name!r}")
    return read_length


def _parse_int(value: str) -> int:
    value = str(value).strip()
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid integer: {value!r}")
    return int(value)


def _parse_float(value: str) -> float:
    if "_" in str(value):
        raise ValueError(f"invalid float: {value!r}")
    return float(value)


def mean_count(counts: Sequence[float]) -> float:
    """Return the arithmetic mean of replicate read counts."""
    if len(counts) == 0:
        raise ValueError("Cannot average an empty list of replicate counts")
    return sum(counts) / len(counts)


def parse_record(row: Sequence[str], no_zeros: bool = False) -> RowResult:
    """
    Parse one alignment row into an AlignmentFact.

    Args:
        row: CSV fields. Field 0 holds the reference identifier (its first
            whitespace-delimited token is the key), field 1 the reference
            length, field 3 the 1-based start and fields 6.. one read count
            per replicate.
        no_zeros: Drop the row if any replicate count is exactly 0.0

    Returns:
        RowResult carrying either the fact or the reason the row was skipped
    """
    if len(row) < MIN_FIELDS:
        return RowResult(None, None, TOO_FEW_FIELDS)

    tokens = str(row[KEY_FIELD]).split()
    if not tokens:
        return RowResult(None, None, MISSING_KEY)
    key = tokens[0]

    try:
        ref_length = _parse_int(row[REF_LENGTH_FIELD])
        position = _parse_int(row[POSITION_FIELD])
        counts = [_parse_float(c) for c in row[FIRST_COUNT_FIELD:]]
    except (TypeError, ValueError):
        return RowResult(key, None, MALFORMED_NUMBER)

    if ref_length < 0:
        return RowResult(key, None, MALFORMED_NUMBER)

    if no_zeros and any(c == 0.0 for c in counts):
        return RowResult(key, None, ZERO_REPLICATE)

    return RowResult(key, AlignmentFact(ref_length, position, mean_count(counts)))
