"""
Main CLI for the subset enumeration tool
"""

import argparse
import json
import logging
import sys
from collections import Counter
from typing import Any, Collection, List

from sortedcontainers import SortedSet

from python_subsets.combinatorics import size_counts, size_fractions
from python_subsets.config import update as update_config, get as get_config, load_config_file, to_yaml
from python_subsets.domain_set import DomainSet
from python_subsets.errors import SubsetsError
from python_subsets.subsets import Subsets


def _build_input(args: Any) -> Collection[str]:
    if args.kind == 'sorted':
        return SortedSet(args.elements)
    if args.kind == 'domain':
        return DomainSet.all_of(args.elements)
    return list(args.elements)


def _load_subsets(args: Any) -> Subsets:
    try:
        subsets: Subsets = Subsets(_build_input(args))
    except (SubsetsError, ValueError) as e:
        logging.error(f"Error: {e}")
        sys.exit(1)
    logging.info(f"Enumerating the subsets of {subsets.size} elements ({subsets.capability})")
    return subsets


def _subset_items(subsets: Subsets, subset: Collection[str]) -> List[str]:
    # plain sets have no meaningful order; print them in input order
    if subsets.ordered:
        return list(subset)
    return [e for e in subsets.elements if e in subset]


def _emit(text: str) -> None:
    cfg = get_config()
    if cfg.output:
        with open(cfg.output, 'w', encoding='utf-8') as f:
            f.write(text + '\n')
        logging.info(f"Wrote output to {cfg.output}")
    else:
        print(text)


def _command_show_config(_args: Any) -> None:
    """Display current effective configuration as YAML."""
    print(to_yaml())


def _command_list(args: Any, subsets: Subsets) -> None:
    cfg = get_config()
    try:
        all_subsets = subsets.as_list()
    except SubsetsError as e:
        logging.error(f"Error: {e}")
        sys.exit(1)
    selected = [_subset_items(subsets, s) for s in all_subsets
                if args.size is None or len(s) == args.size]
    if cfg.output_format == 'json':
        _emit(json.dumps(selected))
    else:
        _emit('\n'.join("{" + ", ".join(items) + "}" for items in selected))


def _command_count(args: Any, subsets: Subsets) -> None:
    cfg = get_config()
    if subsets.size > 25:
        logging.warning(f"Counting {len(subsets)} subsets will take a long time")
    traversal = subsets.traverse(parallel=not args.sequential)
    counts: Counter = traversal.fold(
        Counter,
        lambda c, s: c.update((len(s),)),
        lambda a, b: a.update(b))

    expected = size_counts(subsets.size)
    shares = size_fractions(subsets.size)
    mismatches = [k for k, e in enumerate(expected) if counts[k] != e]
    rows = [{'size': k, 'count': counts[k], 'expected': e, 'share': str(shares[k])}
            for k, e in enumerate(expected)]
    if cfg.output_format == 'json':
        _emit(json.dumps({'elements': subsets.size, 'total': sum(counts.values()),
                          'sizes': rows}))
    else:
        lines = [f"size {r['size']}: {r['count']} subsets (share {r['share']})" for r in rows]
        lines.append(f"total: {sum(counts.values())} subsets")
        _emit('\n'.join(lines))

    if mismatches:
        for k in mismatches:
            logging.error(
                f"Error: found {counts[k]} subsets of size {k}, expected {expected[k]}")
        sys.exit(1)


def main() -> None:
    parser = argparse.ArgumentParser(description="Subset enumeration CLI")
    # specify log level with --log-level, with default WARNING:
    parser.add_argument(
        '--log-level',
        default='WARNING',
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    parser.add_argument(
        '--config-file',
        default=None,
        help="Path to YAML configuration file. If not specified, python-subsets.cfg in current directory will be used if it exists.")
    parser.add_argument(
        '--workers',
        type=int,
        default=None,
        help="Number of worker threads for parallel traversals (default: chosen by the thread pool)")
    parser.add_argument(
        '--min-chunk',
        type=int,
        default=None,
        help="Do not split ranges of at most this many subsets during parallel traversals")
    parser.add_argument(
        '--format',
        default=None,
        choices=['text', 'json'],
        help="Output format")
    parser.add_argument(
        '--output',
        default=None,
        help="Write the result to the provided path instead of stdout")

    # subcommands:
    subparsers = parser.add_subparsers(
        dest="command",
        help="sub-command help",
        required=True)

    parser_show_config = subparsers.add_parser(
        'show-config',
        help="Display current effective configuration as YAML")
    parser_show_config.set_defaults(func=_command_show_config)

    def add_input_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            'elements',
            nargs='*',
            help="The elements of the set (at most 62)")
        sub.add_argument(
            '--kind',
            default='plain',
            choices=['plain', 'sorted', 'domain'],
            help="Kind of input set: 'plain' keeps the given order, 'sorted' sorts the elements, 'domain' makes them a closed domain")

    parser_list = subparsers.add_parser(
        'list', help="Print every subset, in generation order (at most 30 elements)")
    add_input_arguments(parser_list)
    parser_list.add_argument(
        '--size',
        type=int,
        default=None,
        help="Only print the subsets with this many elements")
    parser_list.set_defaults(func=_command_list)

    parser_count = subparsers.add_parser(
        'count', help="Count the subsets of each size and check the counts against binomial coefficients")
    add_input_arguments(parser_count)
    parser_count.add_argument(
        '--sequential',
        action='store_true',
        help="Traverse the subsets on a single thread")
    parser_count.set_defaults(func=_command_count)

    args = parser.parse_args()

    # Set log level early
    debug_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if args.log_level not in debug_levels:
        print(f"Error: Log level must be one of {debug_levels}", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(format="%(message)s")
    logging.getLogger().setLevel(args.log_level)

    # Load configuration file first (if it exists)
    try:
        load_config_file(args.config_file)
    except Exception as e:
        logging.error(f"Error loading config file: {e}")
        sys.exit(1)

    # CLI arguments override config file settings
    config_kwargs: dict[str, Any] = {}
    if args.workers is not None:
        if args.workers < 1:
            logging.error("Error: --workers must be a positive integer")
            sys.exit(1)
        config_kwargs['workers'] = args.workers
    if args.min_chunk is not None:
        if args.min_chunk < 1:
            logging.error("Error: --min-chunk must be a positive integer")
            sys.exit(1)
        config_kwargs['min_chunk'] = args.min_chunk
    if args.format is not None:
        config_kwargs['output_format'] = args.format
    if args.output is not None:
        config_kwargs['output'] = args.output
    if config_kwargs:
        update_config(**config_kwargs)

    # Run commands that don't need an input set:
    if args.command == 'show-config':
        args.func(args)
        sys.exit(0)

    subsets = _load_subsets(args)
    args.func(args, subsets)
    sys.exit(0)


if __name__ == "__main__":
    main()
