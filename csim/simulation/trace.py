"""Trace file access.

open_trace() checks the path up front so a missing file is reported before
any line is simulated, then hands back a lazy line iterator. The iterator
is single-pass: replaying a trace means calling open_trace() again.
"""
import os
from typing import Iterator

from csim.core.errors import MalformedLine, SourceNotFound


def _lines(path: str) -> Iterator[str]:
    # traces are plain ASCII; undecodable bytes make the line malformed
    with open(path, 'rb') as fh:
        for line_number, raw in enumerate(fh, start=1):
            raw = raw.rstrip(b'\r\n')
            try:
                line = raw.decode('ascii')
            except UnicodeDecodeError:
                raise MalformedLine(raw.decode('ascii', errors='backslashreplace'), line_number) from None
            yield line


def open_trace(path: str) -> Iterator[str]:
    if not os.path.isfile(path):
        raise SourceNotFound(f"Trace file {path} not found.")
    return _lines(path)
