import argparse
import logging
import sys

import requests

from mp3_duration.mp3_duration import get_mp3_duration
from mp3_duration.sources import DEFAULT_TIMEOUT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Compute the duration of mp3 files without decoding them",
    )
    parser.add_argument("inputs", nargs="+", help="mp3 file path or remote mp3 url")
    parser.add_argument(
        "--cbr",
        action="store_true",
        help="estimate from the first frame's bitrate instead of scanning every frame",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="timeout in seconds for remote requests",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="logging level",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    options = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, options.log_level))

    status = 0
    for mp3 in options.inputs:
        try:
            duration = get_mp3_duration(mp3, options.cbr, timeout=options.timeout)
        except (OSError, requests.RequestException) as e:
            print(f"{mp3}: {e}", file=sys.stderr)
            status = 1
            continue
        if len(options.inputs) == 1:
            print(duration)
        else:
            print(f"{mp3}\t{duration}")
    return status


if __name__ == "__main__":
    sys.exit(main())
