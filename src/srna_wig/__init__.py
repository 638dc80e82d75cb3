from importlib.metadata import version

__version__ = version("srna_wig")

from srna_wig.coverage import (
    ReferenceLengthError,
    accumulate_coverage,
    check_reference_lengths,
)
from srna_wig.io import load_profiles
from srna_wig.pipeline import (
    TrackWriteError,
    convert_csv_to_wig,
    iter_batches,
    process_reference,
    write_tracks,
)
from srna_wig.records import (
    AlignmentFact,
    ReadLengthError,
    RowResult,
    mean_count,
    parse_read_length,
    parse_record,
)
from srna_wig.wig import OutputPathError, TrackWriter, format_track_lines, prepare_output

__all__ = [
    "AlignmentFact",
    "RowResult",
    "ReadLengthError",
    "parse_read_length",
    "parse_record",
    "mean_count",
    "load_profiles",
    "ReferenceLengthError",
    "accumulate_coverage",
    "check_reference_lengths",
    "OutputPathError",
    "TrackWriter",
    "format_track_lines",
    "prepare_output",
    "TrackWriteError",
    "iter_batches",
    "process_reference",
    "write_tracks",
    "convert_csv_to_wig",
]
