"""WIG variableStep formatting and serialized output."""

import logging
import os
import threading
from typing import IO, List, Optional, Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)


class OutputPathError(OSError):
    """Raised when a pre-existing output file cannot be removed."""


def format_track_lines(key: str, coverage: np.ndarray) -> List[str]:
    """Format one reference's coverage as variableStep lines (positive values only)."""
    lines = [f"variableStep chrom={key}"]
    for idx in np.flatnonzero(coverage > 0.0):
        lines.append(f"{idx + 1} {coverage[idx]:f}")
    return lines


def prepare_output(path: str) -> None:
    """
    Remove a pre-existing output file so the run starts from an empty track.

    Args:
        path: Output WIG path

    Raises:
        OutputPathError: If the file exists but cannot be removed
    """
    try:
        os.remove(path)
        logger.info(f"Removed existing output: {path}")
    except FileNotFoundError:
        pass
    except OSError as e:
        raise OutputPathError(f"Failed to delete existing file {path}: {e}") from e


class TrackWriter:
    """
    Serialized appender for WIG track blocks.

    One lock guards the output for a whole block, so blocks written from
    different threads never interleave. ``sink`` is either a path, opened
    lazily in append mode and reused, or an already open text stream.
    """

    def __init__(self, sink: Union[str, os.PathLike, IO[str]]):
        self._lock = threading.Lock()
        self._handle: Optional[IO[str]] = None
        self._owns_handle = False
        self.blocks_written = 0

        if isinstance(sink, (str, os.PathLike)):
            self.path = os.fspath(sink)
        else:
            self.path = None
            self._handle = sink

    def _open(self) -> IO[str]:
        if self._handle is None:
            self._handle = open(self.path, "a")
            self._owns_handle = True
        return self._handle

    def write_block(self, lines: Sequence[str]) -> None:
        """Append all lines of one track block and flush."""
        with self._lock:
            try:
                handle = self._open()
                for line in lines:
                    handle.write(line + "\n")
                handle.flush()
            except OSError as e:
                logger.error(f"Failed to append to {self.path or 'output stream'}: {e}")
                raise
            self.blocks_written += 1

    def close(self) -> None:
        with self._lock:
            if self._owns_handle and self._handle is not None:
                self._handle.close()
                self._handle = None
                self._owns_handle = False

    def __enter__(self) -> "TrackWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
