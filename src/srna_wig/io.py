"""CSV loading: group alignment rows into per-reference profiles."""

import csv
import logging
from collections import Counter, defaultdict
from typing import Dict, List, Tuple

from srna_wig.records import AlignmentFact, parse_read_length, parse_record

logger = logging.getLogger(__name__)

ProfileTable = Dict[str, List[AlignmentFact]]


def load_profiles(csv_path: str, no_zeros: bool = False) -> Tuple[int, ProfileTable, Counter]:
    """
    Stream an alignment CSV once and group its rows by reference key.

    The header row is skipped without being interpreted; every data row keeps
    its own width, so rows may carry different numbers of replicate columns.
    Rows that fail to parse are skipped and counted; rows with a zero
    replicate are dropped when ``no_zeros`` is set.

    Args:
        csv_path: Path to the input CSV; its name encodes the read length
        no_zeros: Drop rows with any replicate count equal to zero

    Returns:
        Tuple of (read length, profile table, parse statistics). The table
        maps each key to its facts in input order; keys keep first-seen order.
        The statistics count ``rows_read``, ``rows_kept`` and every skip reason.
    """
    read_length = parse_read_length(csv_path)
    logger.info(f"Loading alignments from: {csv_path} (read length {read_length})")

    profiles = defaultdict(list)
    stats = Counter(rows_read=0, rows_kept=0)

    with open(csv_path, "r", newline="") as f:
        reader = csv.reader(f)
        if next(reader, None) is None:
            logger.warning(f"Input file is empty: {csv_path}")
            return read_length, {}, stats

        for row in reader:
            if not row:
                continue
            stats["rows_read"] += 1
            result = parse_record(row, no_zeros=no_zeros)
            if not result.ok:
                stats[result.skip_reason] += 1
                logger.debug(f"Skipping line {reader.line_num} ({result.skip_reason}): {row}")
                continue
            profiles[result.key].append(result.fact)
            stats["rows_kept"] += 1

    skipped = {k: v for k, v in stats.items() if k not in ("rows_read", "rows_kept") and v}
    if skipped:
        logger.warning(f"Skipped {sum(skipped.values())} rows: {skipped}")

    logger.info(
        f"Read {stats['rows_read']:,} rows, kept {stats['rows_kept']:,} "
        f"across {len(profiles)} references"
    )
    return read_length, dict(profiles), stats
