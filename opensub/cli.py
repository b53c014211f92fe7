import argparse
from collections.abc import Sequence

from opensub.constants import DEFAULT_CONFIG_PATH, DEFAULT_LANGUAGE, DEFAULT_RESULT_LIMIT


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="opensub", description="Subtitles from OpenSubtitles.org")
    parser.add_argument("query", nargs="+", metavar="QRY", help="Query name")
    parser.add_argument(
        "-n",
        "--number",
        nargs=2,
        type=int,
        metavar=("S", "E"),
        help="Season & episode number",
    )
    parser.add_argument(
        "-l",
        "--language",
        metavar="LANG",
        help=f"Subtitle language (default: {DEFAULT_LANGUAGE})",
    )
    parser.add_argument("-i", "--imdb", metavar="ID", help="IMDb id, e.g. tt0133093")
    parser.add_argument("-t", "--tag", help="Release tag, e.g. hdtv")
    parser.add_argument("-f", "--file", metavar="PATH", help="Video file to match by movie hash")
    parser.add_argument(
        "--limit",
        type=_positive_int,
        help=f"Number of results to print (default: {DEFAULT_RESULT_LIMIT})",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the YAML config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parses command-line arguments; the query words are joined with single spaces."""
    args = build_parser().parse_args(argv)
    args.query = " ".join(args.query)
    return args
