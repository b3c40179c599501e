import argparse
import logging
import sys
import time
from typing import Iterable, List, Optional, TextIO

from medianstream import config
from medianstream.utils.logger import setup_project_logging
from medianstream.processors.median_processor import MedianProcessor

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    defaults = config.DEFAULT_CONFIG['median_filter']
    parser = argparse.ArgumentParser(
        prog="medianstream",
        description="Sliding-window median filter over a stream of numbers, one sample per line",
    )
    parser.add_argument("input", nargs="?", default="-", help="input file, '-' for stdin")
    parser.add_argument("--window-size", type=int, default=defaults['window_size'])
    parser.add_argument("--seed", type=float, default=defaults['seed'])
    parser.add_argument("--sample-dtype", default=defaults['sample_dtype'])
    parser.add_argument("--accumulator-dtype", default=defaults['accumulator_dtype'])
    parser.add_argument("--stats", action="store_true", help="also print min, max, mean and std")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    return parser

def run(lines: Iterable[str], processor: MedianProcessor, out: TextIO, stats: bool = False) -> int:
    """Feed parsed lines through the processor, writing one output row per accepted sample."""
    written = 0
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            value = float(line)
        except ValueError:
            logger.warning(f"[DATA] Skipping line {line_no}: not a number: {line!r}")
            continue

        result = processor.process_sample(value, time.time())
        if result is None:
            continue

        if stats:
            out.write(f"{result['median']}\t{result['min']}\t{result['max']}\t{result['mean']}\t{result['std']}\n")
        else:
            out.write(f"{result['median']}\n")
        written += 1
    return written

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_project_logging(level=config.get_log_level(args.log_level), stream=sys.stderr)

    processor = MedianProcessor("cli", {
        "median_filter": {
            "window_size": args.window_size,
            "seed": args.seed,
            "sample_dtype": args.sample_dtype,
            "accumulator_dtype": args.accumulator_dtype,
            "compute_std": args.stats,
        }
    })
    processor.initialize()
    try:
        if args.input == "-":
            written = run(sys.stdin, processor, sys.stdout, stats=args.stats)
        else:
            with open(args.input, "r") as f:
                written = run(f, processor, sys.stdout, stats=args.stats)
        logger.info(f"[DATA] Processed {written} samples: {processor.get_stats()}")
    finally:
        processor.cleanup()
    return 0

if __name__ == "__main__":
    sys.exit(main())
