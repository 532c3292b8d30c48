#!/usr/bin/env python3
"""
Commitment Input Generator
==========================

Writes the prover input for the minimum score circuit: a Poseidon
commitment to (score, salt) plus the public threshold.

Usage:
    python scripts/make_commitment.py [--score N] [--salt N | --random-salt]
                                      [--min-score N] [--output PATH]
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from blockcreds.logging import setup_logging
from blockcreds.zk.commitment import (
    DEFAULT_MIN_SCORE,
    DEFAULT_SALT,
    DEFAULT_SCORE,
    generate_salt,
    make_input,
)
from blockcreds.zk.errors import EncodingError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate Poseidon commitment prover input")
    parser.add_argument("--score", type=int, default=DEFAULT_SCORE, help="Private score")
    salt_group = parser.add_mutually_exclusive_group()
    salt_group.add_argument("--salt", type=int, default=DEFAULT_SALT, help="Private salt")
    salt_group.add_argument(
        "--random-salt",
        action="store_true",
        help="Use a random 248-bit salt instead of --salt",
    )
    parser.add_argument(
        "--min-score",
        type=int,
        default=DEFAULT_MIN_SCORE,
        help="Public minimum score threshold",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("input.json"),
        help="Where to write the prover input",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(log_level="WARNING")

    salt = generate_salt() if args.random_salt else args.salt

    try:
        record = make_input(
            score=args.score,
            salt=salt,
            min_score=args.min_score,
            output=args.output,
        )
    except EncodingError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Could not write {args.output}: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {args.output} with:")
    print(json.dumps(record.to_input(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
