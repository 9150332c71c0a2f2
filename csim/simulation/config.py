"""Run configuration: cache geometry and the trace to replay."""
from dataclasses import dataclass

from csim.core.errors import ConfigurationError


@dataclass
class SimulationConfig:
    s: int            # set index bits (2^s sets)
    b: int            # block offset bits (2^b byte blocks)
    e: int            # associativity (lines per set)
    trace_path: str
    verbose: bool = False

    def __post_init__(self):
        for name, value in (('s', self.s), ('b', self.b), ('E', self.e)):
            if value == 0:
                raise ConfigurationError(f"The value of argument {name} cannot be 0.")
            if value < 0:
                raise ConfigurationError(f"The value of argument {name} cannot be negative (={value}).")

    @property
    def num_sets(self) -> int:
        return 1 << self.s

    @property
    def block_size(self) -> int:
        return 1 << self.b

    @property
    def cache_size(self) -> int:
        return self.num_sets * self.e * self.block_size
