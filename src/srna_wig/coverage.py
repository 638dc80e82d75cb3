"""Per-position coverage accumulation for one reference."""

import logging
from typing import Sequence

import numpy as np

from srna_wig.records import AlignmentFact

logger = logging.getLogger(__name__)


class ReferenceLengthError(ValueError):
    """Raised when alignments of one reference disagree on its length."""


def check_reference_lengths(
    key: str, facts: Sequence[AlignmentFact], strict: bool = False
) -> int:
    """
    Count facts whose reference length differs from the first fact's.

    Args:
        key: Reference key, used in messages
        facts: Alignment facts of that reference
        strict: Raise instead of warning on disagreement

    Returns:
        Number of disagreeing facts

    Raises:
        ReferenceLengthError: If ``strict`` and any fact disagrees
    """
    if not facts:
        return 0
    expected = facts[0].reference_length
    lengths = {f.reference_length for f in facts}
    n_mismatched = sum(1 for f in facts if f.reference_length != expected)
    if n_mismatched:
        message = (
            f"{key}: {n_mismatched} of {len(facts)} alignments disagree on reference "
            f"length (using {expected}, seen {sorted(lengths)})"
        )
        if strict:
            raise ReferenceLengthError(message)
        logger.warning(message)
    return n_mismatched


def accumulate_coverage(facts: Sequence[AlignmentFact], read_length: int) -> np.ndarray:
    """
    Build the dense coverage array of one reference.

    Each fact stands for a read of ``read_length`` bases starting at its
    1-based position; its mean count is added to every base it spans.
    Bases outside the reference are dropped.

    Args:
        facts: Alignment facts of one reference, in input order
        read_length: Read length of the run

    Returns:
        Float array with one value per reference base; index 0 is position 1
    """
    if not facts:
        raise ValueError("Cannot build coverage from an empty list of alignments")

    coverage = np.zeros(facts[0].reference_length, dtype=np.float64)
    ref_length = len(coverage)

    for fact in facts:
        start = fact.position - 1
        end = min(start + read_length, ref_length)
        start = max(start, 0)
        if start < end:
            coverage[start:end] += fact.mean_count

    return coverage
