import argparse
import sys

import dotenv

dotenv.load_dotenv()

from callsy import pipeline, settings
from callsy.exceptions import CallsyError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="callsy",
        description="Send the HTTP request described in a JSON file and save the response.",
    )
    parser.add_argument(
        "-request_file", "-r", "--request-file",
        dest="request_file",
        default=settings.default_request_file,
        help="request description to read",
    )
    parser.add_argument(
        "-output_file", "-o", "--output-file",
        dest="output_file",
        default=settings.default_output_file,
        help="where to write the response document",
    )
    parser.add_argument(
        "-body_output_file", "-b", "--body-output-file",
        dest="body_output_file",
        default=None,
        help="also write the resolved request body to this file",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        pipeline.respond(args.request_file, args.output_file, args.body_output_file)
    except CallsyError as e:
        print(f"Error: {e}")
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
