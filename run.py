"""Entry point for the Cache Simulator.

Usage:
    python run.py -s <s> -E <E> -b <b> -t <tracefile> [-v]

Replays a valgrind-style memory trace against an LRU set-associative cache
with 2^s sets, E lines per set and 2^b byte blocks, and prints
``hits:<H> misses:<M> evictions:<E>``.
"""
import argparse
import logging
import sys

from csim.core.errors import SimulatorError
from csim.core.simulator import describe
from csim.data.stats_export import Exporter, export_chart_json, export_hit_rate_chart
from csim.simulation import Simulation, SimulationConfig

logger = logging.getLogger('csim')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='LRU set-associative cache simulator')
    parser.add_argument('-s', type=int, required=True, help='Number of set index bits (2^s sets)')
    parser.add_argument('-E', '-e', dest='e', type=int, required=True, help='Associativity (lines per set)')
    parser.add_argument('-b', type=int, required=True, help='Number of block bits (2^b byte blocks)')
    parser.add_argument('-t', dest='trace', required=True, help='Trace file to replay')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print the outcome of every trace line')
    parser.add_argument('--debug', action='store_true', help='Log every cache probe')
    parser.add_argument('--csv', help='Write the statistics to this CSV file')
    parser.add_argument('--json', help='Write the statistics and hit-rate history to this JSON file')
    parser.add_argument('--chart', help='Plot the running hit rate to this file (.pdf, .png, ...)')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format='%(levelname)s: %(message)s')

    try:
        config = SimulationConfig(s=args.s, b=args.b, e=args.e, trace_path=args.trace, verbose=args.verbose)
        sim = Simulation(config, track_history=bool(args.json or args.chart))
        callback = (lambda info: print(describe(info))) if config.verbose else None
        stats = sim.run_simulation(callback=callback)

        if args.csv:
            Exporter.export_stats_csv(args.csv, stats)
        if args.json:
            export_chart_json(stats.hit_rate_history, stats.as_dict(), args.json)
        if args.chart:
            export_hit_rate_chart(stats.hit_rate_history, args.chart,
                                  title=f's={config.s} E={config.e} b={config.b}')
    except (SimulatorError, OSError) as e:
        logger.error("%s", e)
        return 1

    print(stats.summary())
    return 0


if __name__ == '__main__':
    sys.exit(main())
