"""Command-line entry point: alignment CSV -> mean-coverage WIG."""

import argparse
import logging
import os
import sys

from srna_wig import __version__
from srna_wig.coverage import ReferenceLengthError
from srna_wig.pipeline import DEFAULT_BATCH_SIZE, TrackWriteError, convert_csv_to_wig
from srna_wig.records import ReadLengthError
from srna_wig.wig import OutputPathError

logger = logging.getLogger(__name__)


def positive_int(x):
    x = int(x)
    if x < 1:
        raise argparse.ArgumentTypeError(f"{x!r} is not a positive integer")
    return x


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srna-wig",
        description="""
Convert small-RNA alignment records (CSV) into a mean-coverage WIG track.

Each row is one alignment: field 0 names the reference (first token),
field 1 its length, field 3 the 1-based start and fields 6.. one read
count per replicate. Every alignment adds the mean of its replicate
counts over the read length, taken from the input filename
(e.g. sample_21.csv -> 21 nt).
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
OUTPUT:
  variableStep chrom=<reference>
  <position> <mean coverage>
  ...
  Only positions with positive coverage are written. Block order across
  references is not guaranteed unless --sort-keys is used with --batch 1.

EXAMPLE:
  srna-wig -i alignments_21.csv -o coverage_21.wig --batch 32 --noZeros
        """,
    )
    parser.add_argument("--version", action="version", version=__version__)

    io_group = parser.add_argument_group("Input/Output Options")
    io_group.add_argument("-i", "--input",
        required=True,
        metavar="CSV",
        help="Input alignment CSV. Its name must end in _<read length>.<ext>")
    io_group.add_argument("-o", "--output",
        required=True,
        metavar="WIG",
        help="Output WIG file. An existing file is replaced")

    proc_group = parser.add_argument_group("Processing Options")
    proc_group.add_argument("-b", "--batch",
        type=positive_int,
        metavar="N",
        default=DEFAULT_BATCH_SIZE,
        help=f"Number of references processed concurrently (default: {DEFAULT_BATCH_SIZE})")
    proc_group.add_argument("--noZeros", "--no-zeros",
        dest="no_zeros",
        action="store_true",
        help="""Drop any alignment with a zero count in at least one
                replicate (default: keep)""")
    proc_group.add_argument("--sort-keys",
        action="store_true",
        help="Sort references before batching")
    proc_group.add_argument("--strict-lengths",
        action="store_true",
        help="""Fail when alignments of one reference disagree on its
                length (default: warn and use the first)""")

    log_group = parser.add_argument_group("Logging Options")
    log_group.add_argument("--no-progress",
        action="store_true",
        help="Hide the progress bar")
    log_group.add_argument("-v", "--verbose",
        action="store_true",
        help="Log debug messages, including every skipped row")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        sys.exit(1)

    try:
        convert_csv_to_wig(
            args.input,
            args.output,
            batch_size=args.batch,
            no_zeros=args.no_zeros,
            sort_keys=args.sort_keys,
            strict_lengths=args.strict_lengths,
            show_progress=not args.no_progress,
        )
    except (OutputPathError, ReadLengthError, ReferenceLengthError, TrackWriteError) as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Conversion failed: {e}")
        raise


if __name__ == "__main__":
    main()
