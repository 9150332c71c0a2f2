"""Fatal error types raised while configuring or replaying a trace.

None of these are recovered from inside the simulator: the entry point
reports the message and aborts the run without printing a summary.
"""
from typing import Optional


class SimulatorError(Exception):
    """Base class for every error raised by the simulator."""


class ConfigurationError(SimulatorError, ValueError):
    """One of the s / b / E parameters is unusable (zero or negative)."""


class SourceNotFound(SimulatorError, FileNotFoundError):
    """The trace path does not reference an existing file."""


class MalformedLine(SimulatorError, ValueError):
    """A trace line is neither an instruction fetch nor a data access."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Malformed trace line{where}: {line!r}")


class AddressTooShort(SimulatorError, ValueError):
    """The address has no room left for a tag once b and s bits are removed."""


__all__ = [
    "SimulatorError",
    "ConfigurationError",
    "SourceNotFound",
    "MalformedLine",
    "AddressTooShort",
]
