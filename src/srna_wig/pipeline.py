"""Batch scheduling of per-reference coverage tracks."""

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Iterator, List, Sequence

from tqdm import tqdm

from srna_wig.coverage import accumulate_coverage, check_reference_lengths
from srna_wig.io import ProfileTable, load_profiles
from srna_wig.records import AlignmentFact
from srna_wig.wig import TrackWriter, format_track_lines, prepare_output

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 16


class TrackWriteError(RuntimeError):
    """Raised when one or more references failed to be written."""


def iter_batches(keys: Sequence[str], batch_size: int) -> Iterator[List[str]]:
    """Yield consecutive slices of ``batch_size`` keys; the last may be shorter."""
    if batch_size < 1:
        raise ValueError(f"Batch size must be positive, got {batch_size}")
    keys = list(keys)
    for i in range(0, len(keys), batch_size):
        yield keys[i : i + batch_size]


def process_reference(
    key: str, facts: Sequence[AlignmentFact], read_length: int, writer: TrackWriter
) -> int:
    """
    Accumulate, format and append the track of one reference.

    Returns:
        Number of positions written (header excluded)
    """
    coverage = accumulate_coverage(facts, read_length)
    lines = format_track_lines(key, coverage)
    writer.write_block(lines)
    return len(lines) - 1


def write_tracks(
    profiles: ProfileTable,
    read_length: int,
    writer: TrackWriter,
    batch_size: int = DEFAULT_BATCH_SIZE,
    sort_keys: bool = False,
    show_progress: bool = True,
) -> int:
    """
    Write every reference track, one thread per key, batch by batch.

    All keys of a batch run concurrently and the next batch starts only
    once every key of the current one has finished. A failing key does not
    stop its batch; failures are logged and raised together afterwards.

    Args:
        profiles: Reference key -> alignment facts
        read_length: Read length of the run
        writer: Shared output writer
        batch_size: Number of references processed concurrently
        sort_keys: Sort keys before batching for reproducible block order
        show_progress: Display a tqdm bar over batches

    Returns:
        Number of references written

    Raises:
        TrackWriteError: If any reference of a batch failed
    """
    keys = sorted(profiles) if sort_keys else list(profiles)
    batches = list(iter_batches(keys, batch_size))
    logger.info(f"Writing {len(keys)} references in {len(batches)} batches of up to {batch_size}")

    worker = partial(process_reference, read_length=read_length, writer=writer)
    n_written = 0
    start = 0

    for batch in tqdm(batches, desc="Writing tracks", disable=not show_progress):
        end = start + len(batch)
        logger.info(f"Processing and writing batch {start} to {end}")

        with ThreadPoolExecutor(max_workers=len(batch)) as executor:
            futures = {key: executor.submit(worker, key, profiles[key]) for key in batch}

        failures = {}
        for key, future in futures.items():
            error = future.exception()
            if error is not None:
                logger.error(f"Failed to write track for {key}: {error}")
                failures[key] = error
                continue
            logger.debug(f"{key}: {future.result()} positions")
            n_written += 1

        if failures:
            raise TrackWriteError(
                f"{len(failures)} references failed in batch {start} to {end}: "
                f"{sorted(failures)}"
            ) from next(iter(failures.values()))
        start = end

    return n_written


def convert_csv_to_wig(
    input_csv: str,
    output_wig: str,
    batch_size: int = DEFAULT_BATCH_SIZE,
    no_zeros: bool = False,
    sort_keys: bool = False,
    strict_lengths: bool = False,
    show_progress: bool = True,
) -> int:
    """
    Convert an alignment CSV into a mean-coverage WIG file.

    Args:
        input_csv: Alignment CSV; its name encodes the read length
        output_wig: Output path, replaced if it exists
        batch_size: Number of references processed concurrently
        no_zeros: Drop rows with any zero replicate count
        sort_keys: Sort reference keys before batching
        strict_lengths: Fail when alignments of one reference disagree on its length
        show_progress: Display a tqdm bar over batches

    Returns:
        Number of references written
    """
    if batch_size < 1:
        raise ValueError(f"Batch size must be positive, got {batch_size}")

    prepare_output(output_wig)

    read_length, profiles, _ = load_profiles(input_csv, no_zeros=no_zeros)
    logger.info(f"Read length = {read_length}")

    for key, facts in profiles.items():
        check_reference_lengths(key, facts, strict=strict_lengths)

    with TrackWriter(output_wig) as writer:
        n_written = write_tracks(
            profiles,
            read_length,
            writer,
            batch_size=batch_size,
            sort_keys=sort_keys,
            show_progress=show_progress,
        )

    logger.info(f"Wrote {n_written} tracks to {output_wig}")
    return n_written
