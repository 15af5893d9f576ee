#!/usr/bin/env python3
"""
MapReduce Client CLI
Reads input files, runs a job through the Coordinator and prints the results
"""

import argparse
import logging
import os
import sys

from localmr import settings, wordcount
from localmr.coordinator import Coordinator
from localmr.function_loader import FunctionLoader

logger = logging.getLogger(__name__)


def read_inputs(paths):
    """Build the Input Set: path -> file content. A repeated path keeps its last read."""
    inputs = {}
    for path in paths:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Input file {path} not found")
        with open(path, 'r', encoding=settings.ENCODING) as f:
            inputs[path] = f.read()
    return inputs


def load_job(job_file):
    """Return (map_fn, reduce_fn), falling back to the bundled word count job"""
    if job_file is None:
        return wordcount.map_function, wordcount.reduce_function

    loader = FunctionLoader(job_file)
    return loader.get_map_function(), loader.get_reduce_function()


def run_job(args):
    """Run a MapReduce job over local files"""
    try:
        inputs = read_inputs(args.inputs)
        map_fn, reduce_fn = load_job(args.job_file)

        coordinator = Coordinator(inputs, map_fn, reduce_fn,
                                  reduce_workers=args.reduce_workers)
        result = coordinator.run()
    except (FileNotFoundError, AttributeError, ImportError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        logger.exception("Job failed")
        print(f"Job failed: {e}")
        return 1

    for key in sorted(result):
        print(f"{key}: {result[key]}")

    if args.metrics_out:
        coordinator.metrics.save_to_file(args.metrics_out)
        logger.info(f"Metrics written to {args.metrics_out}")
    return 0


def check_job(args):
    """Report which task functions a job file defines"""
    try:
        functions = FunctionLoader(args.job_file).describe()
    except (FileNotFoundError, ImportError, SyntaxError) as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        logger.exception("Job file failed to load")
        print(f"Job file failed to load: {e}")
        return 1

    print(f"Job file: {args.job_file}")
    print(f"  map:    {functions['map'] or 'MISSING'}")
    print(f"  reduce: {functions['reduce'] or 'MISSING'}")
    return 0 if functions['map'] and functions['reduce'] else 1


def build_parser():
    parser = argparse.ArgumentParser(
        prog='localmr',
        description='In-process MapReduce client',
        epilog='Example: %(prog)s run notes/*.txt --job-file examples/inverted_index.py'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # run command
    run_parser = subparsers.add_parser(
        'run',
        help='Run a job over local files',
        description='Read each file as one input and run map/reduce over them'
    )
    run_parser.add_argument('inputs', nargs='+', help='Input text files (one map task each)')
    run_parser.add_argument('--job-file', help='Python file with map/reduce functions (default: word count)')
    run_parser.add_argument('--reduce-workers', type=int, default=None,
                            help='Threads for the reduce phase, 0 for sequential '
                                 '(default: LOCALMR_REDUCE_WORKERS)')
    run_parser.add_argument('--metrics-out', help='Write run metrics as JSON to this path')
    run_parser.set_defaults(func=run_job)

    # check-job command
    check_parser = subparsers.add_parser(
        'check-job',
        help='Validate a job file',
        description='Load a job file and report the map/reduce functions it defines'
    )
    check_parser.add_argument('job_file', help='Python file with map/reduce functions')
    check_parser.set_defaults(func=check_job)

    return parser


def main(argv=None):
    """Main CLI entry point"""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format=settings.LOG_FORMAT
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, print help
    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
