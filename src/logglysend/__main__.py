"""Send a single event from the command line."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .config import load_config
from .errors import LogSendError
from .logger import LogglyClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logglysend",
        description="Send one log event to Loggly and report the outcome.",
    )
    parser.add_argument("message", help="Message text, or a JSON object with --json")
    parser.add_argument(
        "--tag", dest="tags", action="append", default=[],
        help="Tag to attach (repeatable); added to LOGGLY_TAGS",
    )
    parser.add_argument("--json", action="store_true", help="Send MESSAGE as a structured record")
    parser.add_argument("--token", help="Customer token (default: LOGGLY_TOKEN)")
    parser.add_argument("--endpoint", help="Collector base URL (default: LOGGLY_ENDPOINT)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config()
        overrides = {
            key: value
            for key, value in (
                ("token", args.token),
                ("endpoint", args.endpoint),
                ("timeout", args.timeout),
            )
            if value is not None
        }
        config = replace(config, **overrides)
    except LogSendError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    with LogglyClient.from_config(config) as client:
        if args.json:
            try:
                record = json.loads(args.message)
            except ValueError as exc:
                print(f"error: MESSAGE is not valid JSON: {exc}", file=sys.stderr)
                return 2
            future = client.log_record(record, tags=args.tags)
        else:
            future = client.log_message(args.message, tags=args.tags)
        result = future.result()

    if result.ok:
        print(f"sent: {result.value}")
        return 0
    print(f"failed: {type(result.error).__name__}: {result.error}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
