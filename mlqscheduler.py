"""
mlqscheduler.py


Offline simulation of a fixed-priority Multi-Level Queue (MLQ) CPU
scheduler over a fully known workload.


Three ready queues are served in strict order 1 -> 2 -> 3, each round
robin with its own quantum (1, 3 and 2 time units). Processes never
change level. The simulation produces completion, turnaround, waiting
and response times per process and writes them as a tab-separated
report with averages.


Usage:
python mlqscheduler.py workload.txt [-v]


Workload records are `label;burst;arrival;level;priority`, one per
line; blank lines and `#` comments are ignored and malformed records
are skipped with a diagnostic on stderr. The report is always written
to mlq001_output_log.txt in the current directory.
"""


import sys
import argparse

from simio.parser import load_workload
from simio.report import write_report
from core.engine import SchedulerEngine
from core.errors import NoProcessesLoaded, OutputWriteFailure


# ----------------------------- Constants -----------------------------
OUTPUT_FILENAME = 'mlq001_output_log.txt'
EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='mlqscheduler (multi-level queue scheduling simulator)')
    # optional at parser level so a missing path exits with 1, not argparse's 2
    parser.add_argument('input', nargs='?', help='Path to workload file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print the dispatch trace')
    return parser


def simulate(input_path: str, verbose: bool = False):
    descriptors = load_workload(input_path)
    if not descriptors:
        raise NoProcessesLoaded(f"no processes could be loaded from {input_path}")
    print(f"found {len(descriptors)} processes")
    engine = SchedulerEngine(descriptors, verbose=verbose)
    result = engine.run()
    print(f"measurements {result.makespan} {result.cpu_utilisation}")
    write_report(OUTPUT_FILENAME, result.processes)
    print(f"results written to {OUTPUT_FILENAME}")
    return result


# ------------------------------- CLI ---------------------------------
def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.input is None:
        parser.print_usage(sys.stderr)
        return EXIT_FAILURE
    try:
        simulate(args.input, verbose=args.verbose)
    except NoProcessesLoaded as exc:
        print(f"{exc}. Stopping.", file=sys.stderr)
        return EXIT_FAILURE
    except OutputWriteFailure as exc:
        print(f"FATAL: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
