"""
Command-line entry point.

Prints the machine-parsable report on stdout; logs go to stderr.
Exit status: 0 on success, 1 when the configuration, the graph or the
run-entry file is unusable, 2 when --strict is given and the attestation
is not fully verified.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import RunConfig
from .errors import ConfigError, GraphError, VerificationFailure
from .attestation.context import CryptoContext
from .graph.model import ParallelEdgePolicy
from .pagerank.engine import DanglingPolicy
from .service.pipeline import run_from_config
from .service.report import RunEntry, append_run_entry, render_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rankattest",
        description="PageRank with a two-hop Delta/Sigma signature attestation",
    )
    parser.add_argument('scheme', nargs='?', default=None,
                        help="Signature scheme (default: $SIG_SCHEME or ecdsa-k1)")
    parser.add_argument('data_file', nargs='?', default=None,
                        help="Edge-list file (default: $DATA_FILE or the built-in graph)")
    parser.add_argument('--iterations', type=int, default=None, help="PageRank passes (default: $PR_ITERS or 100)")
    parser.add_argument('--damping', type=float, default=None, help="Damping factor (default: $PR_DAMP or 0.85)")
    parser.add_argument('--dangling', default=None, choices=[p.value for p in DanglingPolicy],
                        help="Dangling node policy (default: redistribute)")
    parser.add_argument('--parallel-edges', default=None, choices=[p.value for p in ParallelEdgePolicy],
                        help="Repeated edge policy (default: collapse)")
    parser.add_argument('--strict', action='store_true',
                        help="Exit with status 2 unless both signatures verify")
    parser.add_argument('--jsonl', default=None, help="Append the run entry to this JSONL file")
    parser.add_argument('--metrics', action='store_true', help="Print Prometheus metrics after the report")
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = RunConfig.from_env().with_overrides(
            scheme=args.scheme,
            data_file=args.data_file,
            iterations=args.iterations,
            damping_factor=args.damping,
            dangling_policy=args.dangling,
            parallel_edges=args.parallel_edges,
            strict_verification=args.strict or None,
        )
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    context = CryptoContext()
    try:
        result = run_from_config(config, context)
    except GraphError as e:
        logger.error(f"PageRank failed: {e}")
        return 1

    record = result.attestation
    if record.error:
        print(f"WARN: signature not generated due to: {record.error}")

    for line in render_report(result):
        print(line)

    if args.jsonl:
        entry = RunEntry.from_result(result)
        if entry.is_complete():
            try:
                append_run_entry(args.jsonl, entry)
            except OSError as e:
                logger.error(f"Failed to write run entry to {args.jsonl}: {e}")
                return 1
        else:
            logger.warning(f"Not writing incomplete run entry to {args.jsonl}")

    if args.metrics:
        print(context.metrics.exposition(), end="")

    if config.strict_verification:
        try:
            record.require_trusted()
        except VerificationFailure as e:
            logger.error(str(e))
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
